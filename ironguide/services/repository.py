from __future__ import annotations

import logging
from datetime import date
from typing import Dict, List, Optional

from pydantic import TypeAdapter, ValidationError

from ironguide.models.exercise import Exercise
from ironguide.models.history import History, HistoryLog
from ironguide.models.session import SessionData
from ironguide.models.user_stats import UserStats
from .store import KeyValueStore

logger = logging.getLogger(__name__)

SESSION_KEY = "session"
STATS_KEY = "stats"
HISTORY_KEY = "history"
CUSTOM_EXERCISES_KEY = "custom_exercises"

ALL_KEYS = (SESSION_KEY, STATS_KEY, HISTORY_KEY, CUSTOM_EXERCISES_KEY)

_history_adapter = TypeAdapter(Dict[str, List[HistoryLog]])
_custom_adapter = TypeAdapter(Dict[str, Exercise])


def default_stats(today: date) -> UserStats:
    return UserStats(
        body_weight=0.0,
        water_intake=0,
        supplement_taken=False,
        supplement_history=[],
        last_updated=today.isoformat(),
    )


class Repository:
    """Typed load/save per logical record on top of a KeyValueStore.

    Absent or undecodable records come back as their defaults.
    """

    def __init__(self, store: KeyValueStore) -> None:
        self.store = store

    def load_session(self) -> Optional[SessionData]:
        raw = self.store.read(SESSION_KEY)
        if raw is None:
            return None
        try:
            return SessionData.model_validate(raw)
        except ValidationError as e:
            logger.warning("Discarding invalid session record: %s", e)
            return None

    def save_session(self, session: Optional[SessionData]) -> None:
        if session is None:
            self.store.remove(SESSION_KEY)
        else:
            self.store.write(SESSION_KEY, session.model_dump(mode="json"))

    def load_stats(self, today: date) -> UserStats:
        raw = self.store.read(STATS_KEY)
        if raw is None:
            return default_stats(today)
        try:
            return UserStats.model_validate(raw)
        except ValidationError as e:
            logger.warning("Discarding invalid stats record: %s", e)
            return default_stats(today)

    def save_stats(self, stats: UserStats) -> None:
        self.store.write(STATS_KEY, stats.model_dump(mode="json"))

    def load_history(self) -> History:
        raw = self.store.read(HISTORY_KEY)
        if raw is None:
            return {}
        if not isinstance(raw, dict):
            logger.warning("Discarding history record of type %s", type(raw).__name__)
            return {}
        # Validated per entry: invalid entries are dropped, their neighbours kept
        history: History = {}
        for exercise_id, entries in raw.items():
            if not isinstance(entries, list):
                logger.warning("Skipping history for %s: expected a list", exercise_id)
                continue
            logs: List[HistoryLog] = []
            for item in entries:
                try:
                    logs.append(HistoryLog.model_validate(item))
                except ValidationError as e:
                    logger.warning("Skipping invalid history entry for %s: %s", exercise_id, e)
            history[exercise_id] = logs
        return history

    def save_history(self, history: History) -> None:
        self.store.write(HISTORY_KEY, _history_adapter.dump_python(history, mode="json"))

    def load_custom_exercises(self) -> Dict[str, Exercise]:
        raw = self.store.read(CUSTOM_EXERCISES_KEY)
        if raw is None:
            return {}
        if not isinstance(raw, dict):
            logger.warning("Discarding custom exercise record of type %s", type(raw).__name__)
            return {}
        defs: Dict[str, Exercise] = {}
        for exercise_id, item in raw.items():
            try:
                defs[exercise_id] = Exercise.model_validate(item)
            except ValidationError as e:
                logger.warning("Skipping invalid custom exercise %s: %s", exercise_id, e)
        return defs

    def save_custom_exercise(self, exercise: Exercise) -> None:
        defs = self.load_custom_exercises()
        defs[exercise.id] = exercise
        self.store.write(CUSTOM_EXERCISES_KEY, _custom_adapter.dump_python(defs, mode="json"))

    def clear_all(self) -> None:
        for key in ALL_KEYS:
            self.store.remove(key)
        logger.info("All persisted records cleared")
