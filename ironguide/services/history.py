from __future__ import annotations

import logging
from datetime import date
from typing import List, Optional, Sequence

from ironguide.models.history import ExerciseHistory, History, HistoryLog, LastSession, TopSet
from .repository import Repository

logger = logging.getLogger(__name__)


def append_log(
    repo: Repository,
    exercise_id: str,
    weight: float,
    reps: float,
    set_number: int,
    today: date | None = None,
) -> HistoryLog:
    """Append one durable entry dated today. Never rejects or rewrites prior entries."""
    entry = HistoryLog(
        date=(today or date.today()).isoformat(),
        weight=weight,
        reps=reps,
        set_number=set_number,
    )
    history = repo.load_history()
    history.setdefault(exercise_id, []).append(entry)
    repo.save_history(history)
    logger.debug("History +1 for %s (%s entries)", exercise_id, len(history[exercise_id]))
    return entry


def top_set(logs: Sequence[HistoryLog]) -> HistoryLog:
    """Highest weight, ties broken by higher reps; the earliest entry wins a full tie."""
    return max(logs, key=lambda log: (log.weight, log.reps))


def last_session(logs: Sequence[HistoryLog], today: date | None = None) -> Optional[LastSession]:
    today_str = (today or date.today()).isoformat()
    previous = [log for log in logs if log.date != today_str]
    if not previous:
        return None
    last_date = max(log.date for log in previous)
    day_logs = [log for log in previous if log.date == last_date]
    best = top_set(day_logs)
    return LastSession(
        date=last_date,
        top_set=TopSet(weight=best.weight, reps=best.reps),
        set_count=len(day_logs),
    )


def summarize(logs: Sequence[HistoryLog], today: date | None = None) -> Optional[ExerciseHistory]:
    if not logs:
        return None
    # ISO dates sort lexically; sorted() keeps insertion order within a day
    newest_first: List[HistoryLog] = sorted(logs, key=lambda log: log.date, reverse=True)
    return ExerciseHistory(logs=newest_first, last_session=last_session(logs, today))


def get_exercise_history(
    source: Repository | History,
    exercise_id: str,
    today: date | None = None,
) -> Optional[ExerciseHistory]:
    history = source.load_history() if isinstance(source, Repository) else source
    return summarize(history.get(exercise_id, []), today)
