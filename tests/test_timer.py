from __future__ import annotations

from datetime import datetime

from ironguide.models import ActiveTimer
from ironguide.services.timer import format_clock, is_elapsed, now_ms, progress, remaining_seconds

T0 = 1_760_000_000_000


def test_remaining_is_derived_from_end_time() -> None:
    timer = ActiveTimer.starting_at(T0, 90, "bench")
    assert remaining_seconds(timer, T0) == 90
    assert remaining_seconds(timer, T0 + 1) == 90
    assert remaining_seconds(timer, T0 + 89_001) == 1
    assert remaining_seconds(timer, T0 + 90_000) == 0
    assert remaining_seconds(timer, T0 + 3_600_000) == 0
    assert is_elapsed(timer, T0 + 90_000)
    assert not is_elapsed(timer, T0 + 89_999)


def test_remaining_never_increases() -> None:
    timer = ActiveTimer.starting_at(T0, 120, "bench")
    previous = remaining_seconds(timer, T0)
    # irregular polling steps, including long gaps like a suspended process
    for at in (T0 + 150, T0 + 999, T0 + 1000, T0 + 45_321, T0 + 119_999, T0 + 120_000, T0 + 500_000):
        current = remaining_seconds(timer, at)
        assert current <= previous
        previous = current
    assert previous == 0


def test_progress_fraction() -> None:
    timer = ActiveTimer.starting_at(T0, 100, "bench")
    assert progress(timer, T0) == 1.0
    assert progress(timer, T0 + 50_000) == 0.5
    assert progress(timer, T0 + 200_000) == 0.0


def test_format_clock() -> None:
    assert format_clock(90) == "1:30"
    assert format_clock(5) == "0:05"
    assert format_clock(0) == "0:00"
    assert format_clock(-3) == "0:00"


def test_now_ms_from_datetime() -> None:
    moment = datetime(2026, 10, 14, 18, 0, 0)
    assert now_ms(moment) == int(moment.timestamp() * 1000)
