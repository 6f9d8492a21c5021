from __future__ import annotations

from datetime import date

from ironguide.models import Exercise, HistoryLog, UserStats
from ironguide.services.analytics import (
    TRACKED_MUSCLES,
    calculate_calories,
    dashboard_stats,
    missed_muscles,
    personal_records,
    week_start,
    weekly_volume,
)

TODAY = date(2026, 10, 14)  # Wednesday; week starts Sunday 2026-10-11


def log(day: str, weight: float, reps: float, n: int = 1) -> HistoryLog:
    return HistoryLog(date=day, weight=weight, reps=reps, set_number=n)


def stats(body_weight: float = 80) -> UserStats:
    return UserStats(body_weight=body_weight, last_updated=TODAY.isoformat())


def test_calories_for_weighted_set() -> None:
    assert calculate_calories(100, 10, 6.0, is_cardio=False, body_weight=80) == 5.3


def test_calories_for_cardio_use_minutes() -> None:
    assert calculate_calories(3.2, 30, 6.0, is_cardio=True, body_weight=80) == 240.0


def test_calories_default_body_weight() -> None:
    # 4 MET * 75 kg * 40 s
    assert calculate_calories(20, 10, 4.0, body_weight=0) == 3.3
    assert calculate_calories(20, 10, 4.0) == 3.3


def test_week_start_is_most_recent_sunday() -> None:
    assert week_start(TODAY) == date(2026, 10, 11)
    assert week_start(date(2026, 10, 11)) == date(2026, 10, 11)
    assert week_start(date(2026, 10, 17)) == date(2026, 10, 11)
    assert week_start(date(2026, 10, 18)) == date(2026, 10, 18)


def test_weekly_volume_counts_this_week_only() -> None:
    history = {
        "p_1": [log("2026-10-10", 60, 8), log("2026-10-11", 60, 8), log("2026-10-13", 62, 8)],
        "pl_1": [log("2026-10-04", 50, 10)],
        "wu_2": [log("2026-10-13", 0, 15)],
        "c_1": [log("2026-10-12", 1.2, 10)],
    }
    volume = weekly_volume(history, today=TODAY)
    assert volume["Chest"] == 2
    assert volume["Back"] == 0
    assert volume["Cardio"] == 1
    assert "Warmup" not in volume

    history["p_3"] = [log(TODAY.isoformat(), 10, 15)]
    before = volume["Shoulders"]
    assert weekly_volume(history, today=TODAY)["Shoulders"] == before + 1


def test_missed_muscles_is_the_complement() -> None:
    volume = {m: 0 for m in TRACKED_MUSCLES}
    volume.update({"Chest": 3, "Legs": 1, "Cardio": 2})
    assert missed_muscles(volume) == ["Back", "Shoulders", "Triceps", "Biceps", "Abs"]


def test_personal_records_and_best_lift() -> None:
    history = {
        "p_1": [log("2026-10-01", 50, 10), log("2026-10-05", 60, 8), log("2026-10-12", 60, 9)],
        "l_1": [log("2026-10-06", 100, 8)],
        "c_1": [log("2026-10-06", 5, 30)],
    }
    result = dashboard_stats(history, stats(), today=TODAY)
    pr = result.personal_records["p_1"]
    assert (pr.weight, pr.date, pr.exercise_name) == (60, "2026-10-05", "Incline Dumbbell Press")
    assert "c_1" not in result.personal_records
    assert result.best_lift.exercise_name == "Romanian Deadlift (RDL)"
    assert result.best_lift.weight == 100


def test_bodyweight_only_exercise_has_no_record() -> None:
    assert personal_records({"p_3": [log("2026-10-12", 0, 15)]}) == {}


def test_unknown_exercise_falls_back_to_default_definition() -> None:
    history = {"mystery": [log("2026-10-12", 40, 10)]}
    result = dashboard_stats(history, stats(), today=TODAY)
    assert result.personal_records["mystery"].exercise_name == "Custom Exercise"
    assert sum(result.weekly_volume.values()) == 0
    # 4 MET * 80 kg * 40 s rounds to 3.6 kcal
    assert result.total_calories == 4


def test_custom_definitions_classify_history() -> None:
    history = {"custom_dips": [log("2026-10-12", 0, 12), log("2026-10-13", 10, 10)]}
    dips = Exercise(id="custom_dips", name="Dips", sets=3, reps="12", rest_seconds=60,
                    target_group="Triceps", met_value=5.0)
    result = dashboard_stats(history, stats(), custom={"custom_dips": dips}, today=TODAY)
    assert result.weekly_volume["Triceps"] == 2
    assert "Triceps" not in result.missed_muscles
    assert result.personal_records["custom_dips"].exercise_name == "Dips"


def test_weekly_calories_total() -> None:
    history = {
        "p_1": [log("2026-10-12", 60, 10), log("2026-10-12", 60, 10), log("2026-10-01", 60, 10)],
        "c_1": [log("2026-10-13", 2.0, 20)],
    }
    result = dashboard_stats(history, stats(80), today=TODAY)
    # two sets at 5 MET (4.4 kcal each) plus 20 minutes at 6 MET (160 kcal)
    assert result.total_calories == 169


def test_empty_history() -> None:
    result = dashboard_stats({}, None, today=TODAY)
    assert result.best_lift is None
    assert result.personal_records == {}
    assert result.missed_muscles == TRACKED_MUSCLES
    assert result.total_calories == 0


def test_weekly_volume_skips_warmup_tagged_exercises() -> None:
    mobility = Exercise(id="custom_band_raise", name="Band Raise", sets=1, reps="15", rest_seconds=0,
                        target_group="Shoulders", is_warmup=True)
    raises = Exercise(id="custom_lateral", name="Lateral Raise", sets=3, reps="15", rest_seconds=60,
                      target_group="Shoulders")
    history = {
        "custom_band_raise": [log("2026-10-13", 0, 15), log("2026-10-14", 0, 15)],
        "custom_lateral": [log("2026-10-14", 8, 15)],
    }
    assert weekly_volume(history, custom=[mobility], today=TODAY)["Shoulders"] == 0
    assert weekly_volume(history, custom=[mobility, raises], today=TODAY)["Shoulders"] == 1
