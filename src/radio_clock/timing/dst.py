"""
Central-European daylight-saving helpers

The DCF77 announcement bit depends on how far away the next CET/CEST change
is. zoneinfo does not expose transition instants, so they are located by
watching utcoffset() change: a coarse forward scan in whole days, then a
bisection down to the second.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional
from zoneinfo import ZoneInfo

from .dcf77_constants import ANNOUNCEMENT_WINDOW, TIMEZONE_NAME

CENTRAL_EUROPE = ZoneInfo(TIMEZONE_NAME)

# Transitions are months apart; one step must never span two of them
SEARCH_STEP_S = 86400
TRANSITION_HORIZON = timedelta(days=366)


def _offset_at(ts: int) -> timedelta:
    return datetime.fromtimestamp(ts, CENTRAL_EUROPE).utcoffset()


def next_transition(
    dt: datetime,
    horizon: timedelta = TRANSITION_HORIZON
) -> Optional[datetime]:
    """
    Find the next UTC offset change in Central Europe strictly after dt.

    Args:
        dt: Timezone-aware instant to search from
        horizon: How far ahead to look

    Returns:
        UTC datetime of the first instant with the new offset, or None if
        the offset does not change within the horizon
    """
    start = dt.astimezone(timezone.utc)
    lo = int(start.timestamp() // 1)
    limit = lo + int(horizon.total_seconds())
    offset = _offset_at(lo)

    while lo < limit:
        hi = min(lo + SEARCH_STEP_S, limit)
        if _offset_at(hi) != offset:
            # Invariant: offset(lo) is the old offset, offset(hi) the new one
            while hi - lo > 1:
                mid = (lo + hi) // 2
                if _offset_at(mid) == offset:
                    lo = mid
                else:
                    hi = mid
            return datetime.fromtimestamp(hi, timezone.utc)
        lo = hi

    return None


def transition_within(dt: datetime, window: timedelta = ANNOUNCEMENT_WINDOW) -> bool:
    """True if the next CET/CEST change comes at most `window` after dt"""
    transition = next_transition(dt)
    return transition is not None and transition - dt <= window
