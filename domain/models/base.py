"""
Helpers shared by the document models.
"""

from datetime import date, datetime, time, timezone
from typing import Any, Optional


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def oid_str(value: Any) -> Optional[str]:
    """Render an ObjectId (or anything id-like) as a string; None passes through."""
    if value is None:
        return None
    return str(value)


def as_date(value: Any) -> Any:
    """Collapse datetimes read back from BSON into plain dates."""
    if isinstance(value, datetime):
        return value.date()
    return value


def date_to_datetime(value: date) -> datetime:
    """BSON has no date type; dates are stored as (naive, UTC) midnight."""
    return datetime.combine(value, time.min)
