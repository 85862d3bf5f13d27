"""
CrmQueueItem model — a lead waiting to be pushed to the outbound CRM.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from leaddesk.models.base import as_str, new_id, utcnow_iso
from leaddesk.models.lead import Lead


@dataclass
class CrmQueueItem:
    lead_id: str
    payload: Dict[str, Any] = field(default_factory=dict)
    synced_at: Optional[str] = None
    id: str = field(default_factory=new_id)
    created_at: str = field(default_factory=utcnow_iso)

    @property
    def pending(self) -> bool:
        return not self.synced_at

    @classmethod
    def for_lead(cls, lead: Lead) -> 'CrmQueueItem':
        """Queue entry with a denormalized copy of the lead's CRM fields."""
        return cls(
            lead_id=lead.id,
            created_at=lead.created_at,
            payload={
                'name': lead.name,
                'email': lead.email,
                'priority': lead.priority,
                'score': lead.score,
                'grade': lead.grade,
            },
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'CrmQueueItem':
        payload = data.get('payload')
        return cls(
            id=as_str(data.get('id')) or new_id(),
            lead_id=as_str(data.get('leadId')),
            payload=payload if isinstance(payload, dict) else {},
            synced_at=data.get('syncedAt') or None,
            created_at=as_str(data.get('createdAt')),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'leadId': self.lead_id,
            'createdAt': self.created_at,
            'syncedAt': self.synced_at,
            'payload': dict(self.payload),
        }
