"""
Shared helpers for the document models — ids, timestamps, ordering.
"""
import uuid
from datetime import datetime, timezone
from typing import Any, Callable, Iterable, List, Optional

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def new_id() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def utcnow_iso() -> str:
    return utcnow().isoformat()


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an ISO timestamp (``Z`` suffix allowed). Returns None when unparseable."""
    if not value:
        return None
    if isinstance(value, datetime):
        dt = value
    else:
        try:
            dt = datetime.fromisoformat(str(value).replace('Z', '+00:00'))
        except ValueError:
            return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def later_of(first: str, second: str) -> str:
    """Return whichever ISO timestamp is later (``second`` on ties)."""
    a, b = parse_timestamp(first), parse_timestamp(second)
    if a is not None and b is not None and a > b:
        return first
    return second


def newest_first(items: Iterable, key: Callable[[Any], Any]) -> List:
    """
    Sort records by timestamp, newest first.

    Records with equal (or unparseable) timestamps keep reverse insertion
    order, so the most recently appended one still comes first.
    """
    return sorted(
        reversed(list(items)),
        key=lambda item: parse_timestamp(key(item)) or _EPOCH,
        reverse=True,
    )


def as_str(value: Any, default: str = '') -> str:
    return value if isinstance(value, str) else default


def as_number(value: Any, default: float = 0) -> float:
    """Coerce JSON-ish input to a finite number, falling back to ``default``."""
    if isinstance(value, bool):
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if number != number or number in (float('inf'), float('-inf')):
        return default
    return int(number) if number.is_integer() else number
