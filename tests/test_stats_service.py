# tests/test_stats_service.py

from __future__ import annotations

import pytest

from BackEnd.repos.store import STATS_KEY
from BackEnd.services.stats_service import StatsTracker


def test_first_session_starts_streak(store, clock) -> None:
    tracker = StatsTracker(store, clock)
    assert tracker.record_session(1500) == 25
    assert tracker.stats.currentStreak == 1
    assert tracker.stats.lastStudyDate == "2026-03-10"
    assert store.get(STATS_KEY) == {
        "currentStreak": 1,
        "lastStudyDate": "2026-03-10",
        "totalFocusMinutes": 25,
    }


def test_session_day_after_last_study_extends_streak(store, clock) -> None:
    store.set(STATS_KEY, {"currentStreak": 4, "lastStudyDate": "2026-03-09", "totalFocusMinutes": 100})
    tracker = StatsTracker(store, clock)
    tracker.record_session(600)
    assert tracker.current_streak == 5
    assert tracker.stats.lastStudyDate == "2026-03-10"
    assert tracker.total_focus_minutes == 110


def test_same_day_sessions_do_not_inflate_streak(store, clock) -> None:
    tracker = StatsTracker(store, clock)
    tracker.record_session(1500)
    tracker.record_session(1500)
    assert tracker.current_streak == 1
    assert tracker.total_focus_minutes == 50


@pytest.mark.parametrize("gap_days", [2, 3, 30])
def test_gap_resets_streak_to_one(store, clock, gap_days) -> None:
    tracker = StatsTracker(store, clock)
    tracker.record_session(60)
    tracker.record_session(60)
    clock.advance(days=1)
    tracker.record_session(60)
    assert tracker.current_streak == 2
    clock.advance(days=gap_days)
    tracker.record_session(60)
    assert tracker.current_streak == 1


@pytest.mark.parametrize(
    ("seconds", "minutes"),
    [(5, 0), (29, 0), (30, 1), (89, 1), (90, 2), (1500, 25)],
)
def test_minutes_round_half_up(store, clock, seconds, minutes) -> None:
    assert StatsTracker(store, clock).record_session(seconds) == minutes


def test_reset_zeroes_everything(store, clock) -> None:
    tracker = StatsTracker(store, clock)
    tracker.record_session(1500)
    tracker.reset()
    assert tracker.stats.currentStreak == 0
    assert tracker.stats.lastStudyDate is None
    assert tracker.stats.totalFocusMinutes == 0
    assert StatsTracker(store, clock).current_streak == 0
