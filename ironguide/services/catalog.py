from __future__ import annotations

import json
from datetime import date
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from ironguide.models.exercise import Catalog, Exercise, PacerConfig, WorkoutPlan

CATALOG_PATH = Path(__file__).resolve().parents[1] / "data" / "workouts.json"


def _resolve_pacer(raw: Any, templates: Dict[str, Dict[str, Any]]) -> Dict[str, Any]:
    """Expand a pacer reference: a template name, or a template plus overrides."""
    if raw is None:
        return {}
    if isinstance(raw, str):
        return dict(templates[raw])
    if isinstance(raw, dict) and "template" in raw:
        merged = dict(templates[raw["template"]])
        merged.update({k: v for k, v in raw.items() if k != "template"})
        return merged
    return dict(raw)


def _build_exercise(raw: Dict[str, Any], templates: Dict[str, Dict[str, Any]]) -> Exercise:
    item = dict(raw)
    item["pacer"] = _resolve_pacer(item.get("pacer"), templates)
    return Exercise.model_validate(item)


@lru_cache(maxsize=1)
def load_catalog() -> Catalog:
    with CATALOG_PATH.open("r", encoding="utf-8") as f:
        raw = json.load(f)
    templates = raw.get("pacer_templates", {})
    warmups = [_build_exercise(item, templates) for item in raw.get("warmups", [])]
    workouts: List[WorkoutPlan] = []
    for w in raw["workouts"]:
        exercises = list(warmups) if w.get("include_warmups") else []
        exercises.extend(_build_exercise(item, templates) for item in w["exercises"])
        workouts.append(WorkoutPlan(id=w["id"], name=w["name"], focus=w.get("focus", ""), exercises=exercises))
    return Catalog(workouts=workouts, schedule=raw.get("schedule", {}))


def all_workouts() -> List[WorkoutPlan]:
    return list(load_catalog().workouts)


def all_exercises() -> List[Exercise]:
    """Every static exercise, de-duplicated by id (warm-ups are shared across plans)."""
    seen: Dict[str, Exercise] = {}
    for plan in load_catalog().workouts:
        for ex in plan.exercises:
            seen.setdefault(ex.id, ex)
    return list(seen.values())


def get_workout(workout_id: str) -> Optional[WorkoutPlan]:
    return next((w for w in load_catalog().workouts if w.id == workout_id), None)


def plan_for_weekday(index: int) -> Optional[WorkoutPlan]:
    """Scheduled plan for a weekday index where 0 is Sunday; None on rest days."""
    plan_id = load_catalog().schedule.get(index % 7)
    return get_workout(plan_id) if plan_id else None


def sunday_index(day: date) -> int:
    # date.weekday() is Monday=0; the schedule counts from Sunday=0
    return (day.weekday() + 1) % 7


def plan_for_date(day: date | None = None) -> Optional[WorkoutPlan]:
    return plan_for_weekday(sunday_index(day or date.today()))


def fallback_exercise(exercise_id: str) -> Exercise:
    """Synthetic definition used when an id has no known exercise behind it."""
    return Exercise(
        id=exercise_id,
        name="Custom Exercise",
        type="weighted",
        sets=3,
        reps="10",
        rest_seconds=60,
        muscle_focus="Custom",
        target_group="Other",
        pacer=PacerConfig(),
        met_value=4.0,
    )


def find_exercise(exercise_id: str, extra: Iterable[Exercise] | None = None) -> Optional[Exercise]:
    """Look up a static exercise first, then any caller-supplied definitions."""
    for ex in all_exercises():
        if ex.id == exercise_id:
            return ex
    for ex in extra or []:
        if ex.id == exercise_id:
            return ex
    return None


def resolve_exercise(exercise_id: str, extra: Iterable[Exercise] | None = None) -> Exercise:
    return find_exercise(exercise_id, extra) or fallback_exercise(exercise_id)
