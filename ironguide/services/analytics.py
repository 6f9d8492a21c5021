from __future__ import annotations

import math
from datetime import date, timedelta
from typing import Dict, Iterable, List, Mapping, Optional

from ironguide.config import get_settings
from ironguide.models.analytics import BestLift, DashboardStats, PersonalRecord
from ironguide.models.exercise import Exercise
from ironguide.models.history import History
from ironguide.models.user_stats import UserStats
from .catalog import resolve_exercise

# Muscle groups that count as "missed" when untouched this week
TRACKED_MUSCLES: List[str] = ["Chest", "Back", "Legs", "Shoulders", "Triceps", "Biceps", "Abs"]
VOLUME_BUCKETS: List[str] = TRACKED_MUSCLES + ["Cardio"]


def _round_half_up(value: float, digits: int = 0) -> float:
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def week_start(today: date | None = None) -> date:
    """Most recent Sunday (today itself on a Sunday)."""
    today = today or date.today()
    return today - timedelta(days=(today.weekday() + 1) % 7)


def effective_body_weight(body_weight: float | None) -> float:
    if body_weight and body_weight > 0:
        return body_weight
    return get_settings().DEFAULT_BODY_WEIGHT_KG


def calculate_calories(
    metric1: float,
    metric2: float,
    met_value: float,
    is_cardio: bool = False,
    body_weight: float | None = None,
) -> float:
    """MET * body weight (kg) * duration (h), rounded to one decimal.

    Cardio: metric2 is minutes. Weighted: metric2 is reps at a fixed seconds-per-rep.
    metric1 (weight or distance) does not enter the estimate.
    """
    if is_cardio:
        hours = metric2 / 60
    else:
        hours = (metric2 * get_settings().SECONDS_PER_REP) / 3600
    return _round_half_up(met_value * effective_body_weight(body_weight) * hours, 1)


def _exercise_lookup(custom: Mapping[str, Exercise] | Iterable[Exercise] | None) -> List[Exercise]:
    if custom is None:
        return []
    if isinstance(custom, Mapping):
        return list(custom.values())
    return list(custom)


def weekly_volume(
    history: History,
    custom: Mapping[str, Exercise] | Iterable[Exercise] | None = None,
    today: date | None = None,
) -> Dict[str, int]:
    extra = _exercise_lookup(custom)
    since = week_start(today).isoformat()
    volume: Dict[str, int] = {m: 0 for m in VOLUME_BUCKETS}
    for exercise_id, logs in history.items():
        ex = resolve_exercise(exercise_id, extra)
        if ex.is_warmup or ex.target_group not in volume:
            continue
        volume[ex.target_group] += sum(1 for log in logs if log.date >= since)
    return volume


def missed_muscles(volume: Mapping[str, int]) -> List[str]:
    return [m for m in TRACKED_MUSCLES if volume.get(m, 0) == 0]


def personal_records(
    history: History,
    custom: Mapping[str, Exercise] | Iterable[Exercise] | None = None,
) -> Dict[str, PersonalRecord]:
    extra = _exercise_lookup(custom)
    records: Dict[str, PersonalRecord] = {}
    for exercise_id, logs in history.items():
        ex = resolve_exercise(exercise_id, extra)
        if ex.type != "weighted":
            continue
        max_weight = 0.0
        pr_date = ""
        for log in logs:
            # strict comparison keeps the first date the record was hit
            if log.weight > max_weight:
                max_weight = log.weight
                pr_date = log.date
        if max_weight > 0:
            records[exercise_id] = PersonalRecord(weight=max_weight, exercise_name=ex.name, date=pr_date)
    return records


def best_lift(records: Mapping[str, PersonalRecord]) -> Optional[BestLift]:
    best: Optional[BestLift] = None
    for pr in records.values():
        if best is None or pr.weight > best.weight:
            best = BestLift(weight=pr.weight, exercise_name=pr.exercise_name)
    return best


def weekly_calories(
    history: History,
    stats: UserStats | None = None,
    custom: Mapping[str, Exercise] | Iterable[Exercise] | None = None,
    today: date | None = None,
) -> float:
    extra = _exercise_lookup(custom)
    since = week_start(today).isoformat()
    body_weight = stats.body_weight if stats else None
    total = 0.0
    for exercise_id, logs in history.items():
        ex = resolve_exercise(exercise_id, extra)
        for log in logs:
            if log.date < since:
                continue
            total += calculate_calories(log.weight, log.reps, ex.met_value, ex.is_cardio, body_weight)
    return total


def dashboard_stats(
    history: History,
    stats: UserStats | None = None,
    custom: Mapping[str, Exercise] | Iterable[Exercise] | None = None,
    today: date | None = None,
) -> DashboardStats:
    volume = weekly_volume(history, custom, today)
    records = personal_records(history, custom)
    return DashboardStats(
        weekly_volume=volume,
        missed_muscles=missed_muscles(volume),
        personal_records=records,
        best_lift=best_lift(records),
        total_calories=int(_round_half_up(weekly_calories(history, stats, custom, today))),
    )
