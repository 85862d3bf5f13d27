"""
Intake — turn untrusted public JSON payloads into model records.
"""
import re
from typing import Any, Dict

from leaddesk.errors import ValidationError
from leaddesk.models.base import as_number
from leaddesk.models.event import Event
from leaddesk.models.lead import Lead
from leaddesk.models.snapshot import EstimatorSnapshot

EMAIL_RE = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')

ANONYMOUS_SESSION = 'anonymous'


def normalize_text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ''


def valid_email(value: str) -> bool:
    return bool(EMAIL_RE.match(value))


def build_lead(payload: Dict[str, Any]) -> Lead:
    """
    Validate a contact-form submission.

    The hidden ``website`` field is a honeypot: humans never fill it in.
    Score and grade are left at their defaults for the scoring engine.
    """
    name = normalize_text(payload.get('name'))
    email = normalize_text(payload.get('email'))
    fleet_size = normalize_text(payload.get('fleetSize'))
    priority = normalize_text(payload.get('priority'))
    message = normalize_text(payload.get('message'))
    website = normalize_text(payload.get('website'))

    if website:
        raise ValidationError('Spam detected.')
    if not (name and email and fleet_size and message and priority):
        raise ValidationError('Missing required fields.')
    if not valid_email(email):
        raise ValidationError('Invalid email address.')

    return Lead(
        name=name,
        email=email.lower(),
        fleet_size=fleet_size,
        priority=priority,
        message=message,
        session_id=normalize_text(payload.get('sessionId')) or ANONYMOUS_SESSION,
    )


def build_event(payload: Dict[str, Any]) -> Event:
    event_type = normalize_text(payload.get('eventType'))
    if not event_type:
        raise ValidationError('eventType is required')
    extra = payload.get('payload')
    return Event(
        event_type=event_type,
        session_id=normalize_text(payload.get('sessionId')) or ANONYMOUS_SESSION,
        page=normalize_text(payload.get('page')) or '/',
        payload=extra if isinstance(extra, dict) else {},
    )


def build_snapshot(payload: Dict[str, Any]) -> EstimatorSnapshot:
    """Estimator snapshot; accepts both current and legacy field names."""
    idle_share = payload.get('idleSharePercent', payload.get('idleShare'))
    carrying_cost = payload.get('monthlyCarryingCost', payload.get('carryingCost'))
    return EstimatorSnapshot(
        session_id=normalize_text(payload.get('sessionId')) or ANONYMOUS_SESSION,
        total_units=as_number(payload.get('totalUnits')),
        idle_share_percent=as_number(idle_share),
        monthly_carrying_cost=as_number(carrying_cost),
        annual_burden=as_number(payload.get('annualBurden')),
    )
