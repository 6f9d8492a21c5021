from __future__ import annotations

import logging
from datetime import date

from ironguide.models.analytics import SupplementStats
from ironguide.models.user_stats import UserStats
from .analytics import week_start

logger = logging.getLogger(__name__)


def roll_over(stats: UserStats, today: date | None = None) -> UserStats:
    """Reset the daily fields once the stored date is not today; history is kept."""
    today_str = (today or date.today()).isoformat()
    if stats.last_updated == today_str:
        return stats
    logger.info("New day (%s -> %s): resetting daily trackers", stats.last_updated, today_str)
    return stats.model_copy(update={
        "water_intake": 0,
        "supplement_taken": False,
        "supplement_history": list(stats.supplement_history),
        "last_updated": today_str,
    })


def add_water(stats: UserStats, amount: float) -> UserStats:
    # Negative amounts undo a tap but never drive the total below zero; whole ml only
    return stats.model_copy(update={"water_intake": max(0, stats.water_intake + round(amount))})


def toggle_supplement(stats: UserStats, today: date | None = None) -> UserStats:
    today_str = (today or date.today()).isoformat()
    taken = not stats.supplement_taken
    dates = list(stats.supplement_history)
    if taken:
        if today_str not in dates:
            dates.append(today_str)
    else:
        dates = [d for d in dates if d != today_str]
    return stats.model_copy(update={"supplement_taken": taken, "supplement_history": dates})


def set_body_weight(stats: UserStats, kg: float) -> UserStats:
    return stats.model_copy(update={"body_weight": max(0.0, float(kg))})


def supplement_stats(history: list[str], today: date | None = None) -> SupplementStats:
    today = today or date.today()
    since = week_start(today).isoformat()
    month = today.isoformat()[:7]
    return SupplementStats(
        this_week=sum(1 for d in history if d >= since),
        this_month=sum(1 for d in history if d.startswith(month)),
    )


def supplement_streak(history: list[str], today: date | None = None) -> int:
    """Consecutive days taken, ending today (or yesterday if today is still open)."""
    today = today or date.today()
    taken = set(history)
    day = today if today.isoformat() in taken else date.fromordinal(today.toordinal() - 1)
    streak = 0
    while day.isoformat() in taken:
        streak += 1
        day = date.fromordinal(day.toordinal() - 1)
    return streak
