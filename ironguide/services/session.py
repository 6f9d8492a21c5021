"""Session state machine.

NoSession -> Active -> Finished -> (cleared) -> NoSession. Every function
takes the current session explicitly and returns a Transition carrying the
next session; nothing here touches storage. Calls whose preconditions do not
hold come back as ``status="ignored"`` with the session unchanged.
"""
from __future__ import annotations

import logging
import math
from typing import List, Optional

from ironguide.models.exercise import Exercise, WorkoutPlan
from ironguide.models.session import ActiveTimer, RestSkipReason, SessionData, SetLog, Transition
from .analytics import calculate_calories

logger = logging.getLogger(__name__)


def _ignored(session: Optional[SessionData], reason: str) -> Transition:
    logger.info("Ignored: %s", reason)
    return Transition(status="ignored", session=session, reason=reason)


def _applied(session: Optional[SessionData], **extra) -> Transition:
    return Transition(status="applied", session=session, **extra)


def _active(session: Optional[SessionData]) -> bool:
    return session is not None and not session.is_finished


def find_session_exercise(
    session: SessionData, plan: Optional[WorkoutPlan], exercise_id: str
) -> Optional[Exercise]:
    """Plan exercises first, then ad-hoc ones added during the session."""
    if plan is not None:
        ex = plan.get_exercise(exercise_id)
        if ex is not None:
            return ex
    return session.get_custom_exercise(exercise_id)


def session_exercises(session: SessionData, plan: Optional[WorkoutPlan]) -> List[Exercise]:
    return list(plan.exercises if plan else []) + list(session.custom_exercises)


def is_exercise_complete(session: SessionData, exercise: Exercise) -> bool:
    return len(session.sets_for(exercise.id)) >= exercise.sets


def start_workout(session: Optional[SessionData], plan: Optional[WorkoutPlan], now_ms: int) -> Transition:
    if session is not None:
        return _ignored(session, "a workout is already in progress")
    if plan is None:
        return _ignored(session, "no plan selected")
    new = SessionData(workout_id=plan.id, start_time=now_ms)
    logger.debug("Started workout %s", plan.id)
    return _applied(new)


def select_exercise(session: Optional[SessionData], exercise_id: str) -> Transition:
    if not _active(session):
        return _ignored(session, "no active workout")
    logger.debug("Selected %s", exercise_id)
    return _applied(session.model_copy(update={"active_exercise_id": exercise_id}))


def return_to_list(session: Optional[SessionData]) -> Transition:
    if not _active(session):
        return _ignored(session, "no active workout")
    logger.debug("Back to exercise list")
    return _applied(session.model_copy(update={"active_exercise_id": None}))


def _valid_metric(value: float) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value) and value >= 0


def log_set(
    session: Optional[SessionData],
    plan: Optional[WorkoutPlan],
    exercise_id: str,
    weight: float,
    reps: float,
    *,
    now_ms: int,
    is_drop_set: bool = False,
    is_monster_set: bool = False,
    body_weight: float | None = None,
) -> Transition:
    """Record one set against the exercise being viewed and decide on rest.

    A rest timer is scheduled only when this is not the final target set, the
    exercise has a rest period, and neither drop nor monster set was flagged.
    """
    if not _active(session):
        return _ignored(session, "no active workout")
    if session.active_exercise_id != exercise_id:
        return _ignored(session, f"exercise {exercise_id!r} is not the one being viewed")
    exercise = find_session_exercise(session, plan, exercise_id)
    if exercise is None:
        return _ignored(session, f"unknown exercise {exercise_id!r}")
    if not (_valid_metric(weight) and _valid_metric(reps)):
        return _ignored(session, f"invalid metrics ({weight!r}, {reps!r})")

    done = session.sets_for(exercise_id)
    entry = SetLog(
        weight=weight,
        reps=reps,
        completed=True,
        timestamp=now_ms,
        set_number=len(done) + 1,
        is_drop_set=is_drop_set,
        is_monster_set=is_monster_set,
        calories=calculate_calories(weight, reps, exercise.met_value, exercise.is_cardio, body_weight),
    )
    completed = dict(session.completed_exercises)
    completed[exercise_id] = list(done) + [entry]

    skip: Optional[RestSkipReason] = None
    if is_monster_set:
        skip = "monster_set"
    elif len(completed[exercise_id]) >= exercise.sets:
        skip = "final_set"
    elif is_drop_set:
        skip = "drop_set"
    elif exercise.rest_seconds <= 0:
        skip = "no_rest"

    timer = None if skip else ActiveTimer.starting_at(now_ms, exercise.rest_seconds, exercise_id)
    new = session.model_copy(update={"completed_exercises": completed, "active_timer": timer})
    logger.debug("Logged set %s for %s (rest: %s)", entry.set_number, exercise_id, skip or exercise.rest_seconds)
    return _applied(new, entry=entry, rest_skip_reason=skip)


def cancel_timer(session: Optional[SessionData]) -> Transition:
    """Drop the rest timer. Safe to call when none is running."""
    if session is None:
        return _ignored(session, "no workout")
    if session.active_timer is None:
        logger.debug("No rest timer to cancel")
        return _applied(session)
    logger.debug("Rest timer for %s cancelled", session.active_timer.exercise_id)
    return _applied(session.model_copy(update={"active_timer": None}))


def finish_workout(session: Optional[SessionData]) -> Transition:
    if not _active(session):
        return _ignored(session, "no active workout")
    logger.debug("Finished workout %s", session.workout_id)
    return _applied(session.model_copy(update={"is_finished": True}))


def complete_and_clear(session: Optional[SessionData]) -> Transition:
    if session is None:
        return _ignored(session, "no workout to clear")
    logger.debug("Cleared workout %s", session.workout_id)
    return _applied(None)


def add_custom_exercise(
    session: Optional[SessionData], plan: Optional[WorkoutPlan], exercise: Exercise
) -> Transition:
    if not _active(session):
        return _ignored(session, "no active workout")
    if find_session_exercise(session, plan, exercise.id) is not None:
        return _ignored(session, f"exercise id {exercise.id!r} already in this workout")
    new = session.model_copy(update={"custom_exercises": list(session.custom_exercises) + [exercise]})
    logger.debug("Added custom exercise %s", exercise.id)
    return _applied(new)
