"""Time range of the day in which rain is looked for."""

from __future__ import annotations

import time
from typing import Optional

_HOUR = 3600
LEFT_OFFSET = 6 * _HOUR
RIGHT_OFFSET = 24 * _HOUR


def local_midnight(timestamp: float) -> int:
    """Return the Unix time of local midnight on the day of ``timestamp``."""
    t = time.localtime(timestamp)
    return int(
        time.mktime(
            (t.tm_year, t.tm_mon, t.tm_mday, 0, 0, 0, t.tm_wday, t.tm_yday, t.tm_isdst)
        )
    )


def day_boundaries(now: Optional[float] = None) -> tuple[int, int]:
    """Return the range from 06:00 to the next midnight, local time, of the current day."""
    if now is None:
        now = time.time()
    midnight = local_midnight(now)
    return midnight + LEFT_OFFSET, midnight + RIGHT_OFFSET