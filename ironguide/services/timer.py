from __future__ import annotations

import math
import time
from datetime import datetime

from ironguide.models.session import ActiveTimer


def now_ms(now: datetime | None = None) -> int:
    if now is None:
        return int(time.time() * 1000)
    return int(now.timestamp() * 1000)


def remaining_seconds(timer: ActiveTimer, at_ms: int | None = None) -> int:
    """Whole seconds left, derived from the stored end time and floored at zero."""
    at = now_ms() if at_ms is None else at_ms
    return max(0, math.ceil((timer.end_time - at) / 1000))


def is_elapsed(timer: ActiveTimer, at_ms: int | None = None) -> bool:
    return remaining_seconds(timer, at_ms) == 0


def progress(timer: ActiveTimer, at_ms: int | None = None) -> float:
    """Fraction of the rest period still left, in [0, 1]."""
    return min(1.0, max(0.0, remaining_seconds(timer, at_ms) / timer.duration))


def format_clock(seconds: int) -> str:
    m, s = divmod(max(0, int(seconds)), 60)
    return f"{m}:{s:02d}"
