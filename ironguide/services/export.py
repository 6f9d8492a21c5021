from __future__ import annotations

import csv
import io
from typing import Iterable, List, Mapping

from ironguide.models.exercise import Exercise
from ironguide.models.history import History
from .catalog import resolve_exercise


def _names(history: History, custom: Mapping[str, Exercise] | Iterable[Exercise] | None) -> dict[str, Exercise]:
    extra = list(custom.values()) if isinstance(custom, Mapping) else list(custom or [])
    return {eid: resolve_exercise(eid, extra) for eid in history}


def history_to_csv(history: History, custom: Mapping[str, Exercise] | Iterable[Exercise] | None = None) -> bytes:
    defs = _names(history, custom)
    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow([
        "date",
        "exercise_id",
        "exercise_name",
        "set_number",
        "weight",
        "reps",
    ])
    for eid, logs in history.items():
        for log in logs:
            writer.writerow([
                log.date,
                eid,
                defs[eid].name,
                log.set_number,
                log.weight,
                log.reps,
            ])
    return output.getvalue().encode("utf-8")


def history_to_markdown(history: History, custom: Mapping[str, Exercise] | Iterable[Exercise] | None = None) -> str:
    defs = _names(history, custom)
    lines: List[str] = []
    total = sum(len(logs) for logs in history.values())
    lines.append(f"# Training History ({total} sets)\n")
    for eid, logs in history.items():
        if not logs:
            continue
        ex = defs[eid]
        lines.append(f"\n## {ex.name}")
        by_date: dict[str, list] = {}
        for log in logs:
            by_date.setdefault(log.date, []).append(log)
        for day in sorted(by_date, reverse=True):
            if ex.is_cardio:
                sets = ", ".join(f"{log.weight:g} km / {log.reps:g} min" for log in by_date[day])
            else:
                sets = ", ".join(f"{log.weight:g} kg x {log.reps:g}" for log in by_date[day])
            lines.append(f"- {day}: {sets}")
    return "\n".join(lines) + "\n"
