"""
EstimatorSnapshot model — one run of the on-site idle-cost estimator.
"""
from dataclasses import dataclass, field
from typing import Any, Dict

from leaddesk.models.base import as_number, as_str, new_id, utcnow_iso


@dataclass
class EstimatorSnapshot:
    session_id: str = 'anonymous'
    total_units: float = 0
    idle_share_percent: float = 0
    monthly_carrying_cost: float = 0
    # idle units × carrying cost × 12, computed by the browser
    annual_burden: float = 0
    id: str = field(default_factory=new_id)
    created_at: str = field(default_factory=utcnow_iso)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'EstimatorSnapshot':
        return cls(
            id=as_str(data.get('id')) or new_id(),
            session_id=as_str(data.get('sessionId'), 'anonymous'),
            total_units=as_number(data.get('totalUnits')),
            idle_share_percent=as_number(data.get('idleSharePercent')),
            monthly_carrying_cost=as_number(data.get('monthlyCarryingCost')),
            annual_burden=as_number(data.get('annualBurden')),
            created_at=as_str(data.get('createdAt')),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'sessionId': self.session_id,
            'totalUnits': self.total_units,
            'idleSharePercent': self.idle_share_percent,
            'monthlyCarryingCost': self.monthly_carrying_cost,
            'annualBurden': self.annual_burden,
            'createdAt': self.created_at,
        }
