"""
Lead model — a prospective customer inquiry captured from the public form.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List

from leaddesk.config import LEAD_STATUSES
from leaddesk.models.base import as_number, as_str, new_id, utcnow_iso

GRADES = ('A', 'B', 'C')

DEFAULT_STATUS = 'new'
DEFAULT_GRADE = 'C'


@dataclass
class Lead:
    name: str
    email: str
    fleet_size: str
    priority: str
    message: str
    session_id: str = 'anonymous'
    source: str = 'website'
    status: str = DEFAULT_STATUS
    score: int = 0
    grade: str = DEFAULT_GRADE
    score_reasons: List[str] = field(default_factory=list)
    id: str = field(default_factory=new_id)
    created_at: str = field(default_factory=utcnow_iso)
    updated_at: str = ''

    def __post_init__(self):
        if not self.updated_at:
            self.updated_at = self.created_at

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Lead':
        """Build from a stored record. Expects a record already backfilled on load."""
        status = data.get('status')
        grade = data.get('grade')
        reasons = data.get('scoreReasons')
        return cls(
            id=as_str(data.get('id')) or new_id(),
            name=as_str(data.get('name')),
            email=as_str(data.get('email')),
            fleet_size=as_str(data.get('fleetSize')),
            priority=as_str(data.get('priority')),
            message=as_str(data.get('message')),
            session_id=as_str(data.get('sessionId'), 'anonymous'),
            source=as_str(data.get('source'), 'website'),
            status=status if status in LEAD_STATUSES else DEFAULT_STATUS,
            score=max(int(as_number(data.get('score'))), 0),
            grade=grade if grade in GRADES else DEFAULT_GRADE,
            score_reasons=[str(r) for r in reasons] if isinstance(reasons, list) else [],
            created_at=as_str(data.get('createdAt')),
            updated_at=as_str(data.get('updatedAt')),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'email': self.email,
            'fleetSize': self.fleet_size,
            'priority': self.priority,
            'message': self.message,
            'sessionId': self.session_id,
            'source': self.source,
            'status': self.status,
            'score': self.score,
            'grade': self.grade,
            'scoreReasons': list(self.score_reasons),
            'createdAt': self.created_at,
            'updatedAt': self.updated_at,
        }
