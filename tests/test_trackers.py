from __future__ import annotations

from datetime import date

from ironguide.models import UserStats
from ironguide.services.trackers import (
    add_water,
    roll_over,
    set_body_weight,
    supplement_stats,
    supplement_streak,
    toggle_supplement,
)

TODAY = date(2026, 10, 14)


def fresh(**kwargs) -> UserStats:
    data = {"last_updated": TODAY.isoformat()}
    data.update(kwargs)
    return UserStats(**data)


def test_water_accumulates() -> None:
    stats = fresh()
    stats = add_water(stats, 250)
    stats = add_water(stats, 250)
    assert stats.water_intake == 500
    assert add_water(stats, -1000).water_intake == 0


def test_roll_over_same_day_is_a_no_op() -> None:
    stats = fresh(water_intake=700, supplement_taken=True)
    assert roll_over(stats, TODAY) is stats


def test_roll_over_resets_daily_fields_only() -> None:
    stats = fresh(
        body_weight=81.5,
        water_intake=700,
        supplement_taken=True,
        supplement_history=["2026-10-12", "2026-10-13"],
        last_updated="2026-10-13",
    )
    rolled = roll_over(stats, TODAY)
    assert rolled.water_intake == 0
    assert rolled.supplement_taken is False
    assert rolled.supplement_history == ["2026-10-12", "2026-10-13"]
    assert rolled.body_weight == 81.5
    assert rolled.last_updated == "2026-10-14"


def test_toggle_supplement_tracks_today() -> None:
    stats = fresh(supplement_history=["2026-10-13"])
    on = toggle_supplement(stats, TODAY)
    assert on.supplement_taken
    assert on.supplement_history == ["2026-10-13", "2026-10-14"]
    off = toggle_supplement(on, TODAY)
    assert not off.supplement_taken
    assert off.supplement_history == ["2026-10-13"]


def test_toggle_does_not_duplicate_dates() -> None:
    stats = fresh(supplement_taken=False, supplement_history=["2026-10-14"])
    assert toggle_supplement(stats, TODAY).supplement_history == ["2026-10-14"]


def test_supplement_adherence_counts() -> None:
    history = ["2026-09-30", "2026-10-02", "2026-10-10", "2026-10-11", "2026-10-13", "2026-10-14"]
    counts = supplement_stats(history, TODAY)
    assert counts.this_week == 3
    assert counts.this_month == 5


def test_supplement_streak() -> None:
    history = ["2026-10-10", "2026-10-12", "2026-10-13"]
    # today not taken yet: yesterday's run still counts
    assert supplement_streak(history, TODAY) == 2
    assert supplement_streak(history + ["2026-10-14"], TODAY) == 3
    assert supplement_streak(["2026-10-01"], TODAY) == 0


def test_body_weight() -> None:
    assert set_body_weight(fresh(), 79.4).body_weight == 79.4
    assert set_body_weight(fresh(), -5).body_weight == 0.0


def test_water_rounds_to_whole_millilitres() -> None:
    assert add_water(fresh(), 250.7).water_intake == 251
    assert add_water(fresh(water_intake=100), 99.2).water_intake == 199
