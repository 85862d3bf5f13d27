"""
Event model — generic client telemetry record.
"""
from dataclasses import dataclass, field
from typing import Any, Dict

from leaddesk.models.base import as_str, new_id, utcnow_iso


@dataclass
class Event:
    event_type: str
    session_id: str = 'anonymous'
    page: str = '/'
    payload: Dict[str, Any] = field(default_factory=dict)
    id: str = field(default_factory=new_id)
    created_at: str = field(default_factory=utcnow_iso)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Event':
        payload = data.get('payload')
        return cls(
            id=as_str(data.get('id')) or new_id(),
            event_type=as_str(data.get('eventType')),
            session_id=as_str(data.get('sessionId'), 'anonymous'),
            page=as_str(data.get('page'), '/'),
            payload=payload if isinstance(payload, dict) else {},
            created_at=as_str(data.get('createdAt')),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'eventType': self.event_type,
            'sessionId': self.session_id,
            'page': self.page,
            'payload': self.payload,
            'createdAt': self.created_at,
        }
