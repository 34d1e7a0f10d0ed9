"""
Wall-clock access for practice sessions and row timestamps.
"""
from datetime import datetime, timezone


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


class SessionClock:
    """Source of timestamps for session start and per-card show times."""

    def now(self) -> datetime:
        return utc_now()


system_clock = SessionClock()


def elapsed_ms(start: datetime, end: datetime) -> int:
    """Milliseconds from start to end, clamped to zero for clock skew."""
    delta = end - start
    return max(0, int(delta.total_seconds() * 1000))
