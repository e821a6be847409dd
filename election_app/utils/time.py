"""
Time helpers for election phase evaluation.

Phase expiry is a comparison against a caller-supplied time, never a
scheduled callback, so these helpers stay pure apart from the wall-clock
fallback in get_election_time.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional


def ensure_aware(ts: datetime) -> datetime:
    """
    Reject naive datetimes.

    Args:
        ts: Timestamp to check

    Returns:
        The same timestamp, unchanged

    Raises:
        ValueError: If the timestamp carries no tzinfo
    """
    if ts.tzinfo is None or ts.tzinfo.utcoffset(ts) is None:
        raise ValueError(f"Timestamp must be timezone-aware: {ts!r}")
    return ts


def get_election_time(now: Optional[datetime] = None) -> datetime:
    """
    Resolve the effective time for an election operation.

    Args:
        now: Optional caller-supplied time

    Returns:
        Caller time if given, otherwise wall-clock UTC
    """
    if now is not None:
        return ensure_aware(now)

    return datetime.now(timezone.utc)


def add_seconds(start: datetime, seconds: int) -> datetime:
    """Return start shifted by a whole number of seconds."""
    return start + timedelta(seconds=seconds)


def seconds_until(deadline: datetime, now: datetime) -> float:
    """Seconds remaining until deadline, floored at zero."""
    return max(0.0, (deadline - now).total_seconds())


def format_election_time(ts: Optional[datetime]) -> Optional[str]:
    """ISO8601 string for logging and reports."""
    return ts.isoformat() if ts is not None else None
