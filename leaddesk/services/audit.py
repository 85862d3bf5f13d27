"""
Audit trail — append-only record of state-changing actions.
"""
import logging
from typing import Any, Dict, List, Optional

from leaddesk.models.audit_event import Actor, AuditEvent
from leaddesk.models.base import newest_first
from leaddesk.models.document import Document

logger = logging.getLogger('services.audit')


def append_audit(
    document: Document,
    actor: Actor,
    action: str,
    target_type: str,
    target_id: str,
    details: Optional[Dict[str, Any]] = None,
) -> AuditEvent:
    """Append an event to the document. Persisting is the caller's transaction."""
    event = AuditEvent(
        actor=actor,
        action=action,
        target_type=target_type,
        target_id=target_id,
        details=dict(details or {}),
    )
    document.audit_events.append(event)
    logger.info("audit %s by %s on %s/%s", action, actor.username, target_type, target_id)
    return event


def recent_audit_events(document: Document, limit: int) -> List[AuditEvent]:
    """Newest ``limit`` events."""
    return newest_first(document.audit_events, key=lambda e: e.created_at)[:max(limit, 0)]
