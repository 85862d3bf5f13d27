"""
Document model — the single persisted JSON document holding every entity.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from leaddesk.models.audit_event import AuditEvent
from leaddesk.models.crm_queue import CrmQueueItem
from leaddesk.models.event import Event
from leaddesk.models.lead import Lead
from leaddesk.models.outreach import OutreachDraft
from leaddesk.models.snapshot import EstimatorSnapshot

SCHEMA_VERSION = 2

# Persisted key → model class, in file order
COLLECTIONS = {
    'leads': Lead,
    'events': Event,
    'estimatorSnapshots': EstimatorSnapshot,
    'crmQueue': CrmQueueItem,
    'outreachDrafts': OutreachDraft,
    'auditEvents': AuditEvent,
}


@dataclass
class Document:
    leads: List[Lead] = field(default_factory=list)
    events: List[Event] = field(default_factory=list)
    estimator_snapshots: List[EstimatorSnapshot] = field(default_factory=list)
    crm_queue: List[CrmQueueItem] = field(default_factory=list)
    outreach_drafts: List[OutreachDraft] = field(default_factory=list)
    audit_events: List[AuditEvent] = field(default_factory=list)
    schema_version: int = SCHEMA_VERSION

    def find_lead(self, lead_id: str) -> Optional[Lead]:
        for lead in self.leads:
            if lead.id == lead_id:
                return lead
        return None

    def latest_snapshot_for(self, session_id: str) -> Optional[EstimatorSnapshot]:
        """Most recently recorded snapshot for a browser session."""
        for snapshot in reversed(self.estimator_snapshots):
            if snapshot.session_id == session_id:
                return snapshot
        return None

    def pending_crm_items(self) -> List[CrmQueueItem]:
        return [item for item in self.crm_queue if item.pending]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Document':
        def rows(key):
            value = data.get(key)
            return [row for row in value if isinstance(row, dict)] if isinstance(value, list) else []

        return cls(
            leads=[Lead.from_dict(row) for row in rows('leads')],
            events=[Event.from_dict(row) for row in rows('events')],
            estimator_snapshots=[EstimatorSnapshot.from_dict(row) for row in rows('estimatorSnapshots')],
            crm_queue=[CrmQueueItem.from_dict(row) for row in rows('crmQueue')],
            outreach_drafts=[OutreachDraft.from_dict(row) for row in rows('outreachDrafts')],
            audit_events=[AuditEvent.from_dict(row) for row in rows('auditEvents')],
            schema_version=data.get('schemaVersion', SCHEMA_VERSION),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'schemaVersion': self.schema_version,
            'leads': [lead.to_dict() for lead in self.leads],
            'events': [event.to_dict() for event in self.events],
            'estimatorSnapshots': [s.to_dict() for s in self.estimator_snapshots],
            'crmQueue': [item.to_dict() for item in self.crm_queue],
            'outreachDrafts': [d.to_dict() for d in self.outreach_drafts],
            'auditEvents': [e.to_dict() for e in self.audit_events],
        }


def empty_document() -> Dict[str, Any]:
    """Raw JSON for a fresh store file."""
    raw = {key: [] for key in COLLECTIONS}
    raw['schemaVersion'] = SCHEMA_VERSION
    return raw
