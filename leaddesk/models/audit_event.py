"""
AuditEvent model — immutable record of a state-changing action and its actor.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from leaddesk.models.base import as_str, new_id, utcnow_iso


@dataclass(frozen=True)
class Actor:
    type: str
    username: str
    role: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> 'Actor':
        if not isinstance(data, dict):
            return cls(type='system', username='unknown')
        return cls(
            type=as_str(data.get('type'), 'system'),
            username=as_str(data.get('username'), 'unknown'),
            role=data.get('role') or None,
        )

    def to_dict(self) -> Dict[str, Any]:
        entry = {'type': self.type, 'username': self.username}
        if self.role:
            entry['role'] = self.role
        return entry


PUBLIC_FORM_ACTOR = Actor(type='system', username='public-form')


@dataclass(frozen=True)
class AuditEvent:
    actor: Actor
    action: str
    target_type: str
    target_id: str
    details: Dict[str, Any] = field(default_factory=dict)
    id: str = field(default_factory=new_id)
    created_at: str = field(default_factory=utcnow_iso)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'AuditEvent':
        details = data.get('details')
        return cls(
            id=as_str(data.get('id')) or new_id(),
            actor=Actor.from_dict(data.get('actor')),
            action=as_str(data.get('action')),
            target_type=as_str(data.get('targetType')),
            target_id=as_str(data.get('targetId')),
            details=details if isinstance(details, dict) else {},
            created_at=as_str(data.get('createdAt')),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'actor': self.actor.to_dict(),
            'action': self.action,
            'targetType': self.target_type,
            'targetId': self.target_id,
            'details': dict(self.details),
            'createdAt': self.created_at,
        }
