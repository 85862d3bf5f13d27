"""
Schema migrations for the persisted document.

Migrations run on the raw JSON dict at load time, before the typed models are
built. Each versioned step upgrades the document by one schemaVersion; the
lead backfill runs on every load and is idempotent.
"""
import logging
from typing import Any, Callable, Dict, Tuple

from leaddesk.config import LEAD_STATUSES
from leaddesk.models.base import utcnow_iso
from leaddesk.models.document import COLLECTIONS, SCHEMA_VERSION

logger = logging.getLogger('services.migrations')

# Legacy snapshot key → current key
_SNAPSHOT_RENAMES = {
    'idleShare': 'idleSharePercent',
    'carryingCost': 'monthlyCarryingCost',
}


def _v1_to_v2(raw: Dict[str, Any]) -> None:
    """Rename the estimator snapshot fields written by the first release."""
    for snapshot in raw['estimatorSnapshots']:
        if not isinstance(snapshot, dict):
            continue
        for old, new in _SNAPSHOT_RENAMES.items():
            if old in snapshot:
                value = snapshot.pop(old)
                snapshot.setdefault(new, value)


# from-version → step producing from-version + 1
MIGRATIONS: Dict[int, Callable[[Dict[str, Any]], None]] = {
    1: _v1_to_v2,
}


def normalize_collections(raw: Dict[str, Any]) -> bool:
    """Replace missing or non-list collections with empty lists."""
    changed = False
    for key in COLLECTIONS:
        if not isinstance(raw.get(key), list):
            raw[key] = []
            changed = True
    return changed


def backfill_leads(raw: Dict[str, Any], now: str = None) -> bool:
    """Default status/score/grade/scoreReasons/timestamps on legacy leads."""
    now = now or utcnow_iso()
    changed = False
    for lead in raw['leads']:
        if not isinstance(lead, dict):
            continue
        if lead.get('status') not in LEAD_STATUSES:
            lead['status'] = 'new'
            changed = True
        score = lead.get('score')
        if isinstance(score, bool) or not isinstance(score, (int, float)):
            lead['score'] = 0
            changed = True
        if not lead.get('grade'):
            lead['grade'] = 'C'
            changed = True
        if not isinstance(lead.get('scoreReasons'), list):
            lead['scoreReasons'] = []
            changed = True
        if not lead.get('createdAt'):
            lead['createdAt'] = lead.get('updatedAt') or now
            changed = True
        if not lead.get('updatedAt'):
            lead['updatedAt'] = lead['createdAt']
            changed = True
    return changed


def migrate(raw: Any) -> Tuple[Dict[str, Any], bool]:
    """
    Bring a raw document up to SCHEMA_VERSION.

    Returns (document, changed). ``changed`` is True when the caller should
    persist the result.
    """
    if not isinstance(raw, dict):
        logger.warning("Document root is not an object; starting from an empty document")
        raw = {}
        changed = True
    else:
        changed = False

    changed = normalize_collections(raw) or changed

    version = raw.get('schemaVersion')
    if isinstance(version, bool) or not isinstance(version, int) or version < 1:
        version = 1
    while version < SCHEMA_VERSION:
        step = MIGRATIONS[version]
        logger.info("Migrating document schema v%d → v%d", version, version + 1)
        step(raw)
        version += 1
        changed = True
    if raw.get('schemaVersion') != version:
        raw['schemaVersion'] = version
        changed = True

    changed = backfill_leads(raw) or changed
    return raw, changed
