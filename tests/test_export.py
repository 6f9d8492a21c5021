from __future__ import annotations

import csv
import io

from ironguide.models import Exercise, HistoryLog
from ironguide.services.export import history_to_csv, history_to_markdown


def build_history() -> dict:
    return {
        "p_1": [
            HistoryLog(date="2026-10-12", weight=60, reps=8, set_number=1),
            HistoryLog(date="2026-10-14", weight=62.5, reps=6, set_number=1),
        ],
        "c_1": [HistoryLog(date="2026-10-14", weight=1.5, reps=12, set_number=1)],
        "custom_dips": [HistoryLog(date="2026-10-14", weight=0, reps=12, set_number=1)],
    }


def test_history_csv() -> None:
    dips = Exercise(id="custom_dips", name="Dips", sets=3, reps="12", rest_seconds=60)
    rows = list(csv.reader(io.StringIO(history_to_csv(build_history(), [dips]).decode("utf-8"))))
    assert rows[0] == ["date", "exercise_id", "exercise_name", "set_number", "weight", "reps"]
    assert len(rows) == 5
    assert rows[1][:3] == ["2026-10-12", "p_1", "Incline Dumbbell Press"]
    assert rows[-1][2] == "Dips"


def test_history_markdown() -> None:
    md = history_to_markdown(build_history())
    assert md.startswith("# Training History (4 sets)")
    assert "## Incline Dumbbell Press" in md
    # newest date first within an exercise
    assert md.index("2026-10-14: 62.5 kg x 6") < md.index("2026-10-12: 60 kg x 8")
    assert "1.5 km / 12 min" in md
    assert "## Custom Exercise" in md
