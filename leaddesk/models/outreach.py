"""
OutreachDraft model — an advisor-facing email draft for a lead.
"""
from dataclasses import dataclass, field
from typing import Any, Dict

from leaddesk.models.base import as_str, new_id, utcnow_iso


@dataclass
class OutreachDraft:
    lead_id: str
    subject: str
    body: str
    id: str = field(default_factory=new_id)
    created_at: str = field(default_factory=utcnow_iso)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'OutreachDraft':
        return cls(
            id=as_str(data.get('id')) or new_id(),
            lead_id=as_str(data.get('leadId')),
            subject=as_str(data.get('subject')),
            body=as_str(data.get('body')),
            created_at=as_str(data.get('createdAt')),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'leadId': self.lead_id,
            'subject': self.subject,
            'body': self.body,
            'createdAt': self.created_at,
        }
