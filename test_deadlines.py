# test_deadlines.py
from datetime import date, timedelta
from types import SimpleNamespace

import pytest

from app.config import DEFAULT_REMINDER_THRESHOLDS, parse_thresholds
from app.deadlines import (
    compute_deadline, days_remaining, deadline_warning, due_threshold, warning_level,
)

THRESHOLDS = (60, 45, 30, 7)


@pytest.mark.parametrize("discovery", [
    date(2025, 1, 1), date(2024, 2, 10), date(2023, 12, 31), date(2025, 11, 15),
])
def test_deadline_is_discovery_plus_sixty_days(discovery):
    deadline = compute_deadline(discovery)
    assert deadline == discovery + timedelta(days=60)
    assert (deadline - discovery).days == 60

def test_deadline_crosses_short_february():
    assert compute_deadline(date(2025, 1, 1)) == date(2025, 3, 2)
    # leap year: one day earlier on the calendar
    assert compute_deadline(date(2024, 1, 1)) == date(2024, 3, 1)

def test_days_remaining_counts_calendar_days():
    assert days_remaining(date(2025, 3, 2), date(2025, 2, 23)) == 7
    assert days_remaining(date(2025, 3, 2), date(2025, 3, 2)) == 0
    assert days_remaining(date(2025, 3, 2), date(2025, 3, 5)) == -3

@pytest.mark.parametrize("remaining,level", [
    (-2, "urgent"), (0, "urgent"), (7, "urgent"), (8, "warning"), (30, "warning"), (31, "info"), (60, "info"),
])
def test_warning_level_boundaries(remaining, level):
    assert warning_level(remaining) == level

def test_deadline_warning_payload():
    event = SimpleNamespace(id=42, event_type="fire", event_date=date(2025, 1, 1),
                            deadline_60_days=date(2025, 3, 2))
    banner = deadline_warning(event, date(2025, 2, 25))
    assert banner["days_remaining"] == 5
    assert banner["level"] == "urgent"
    assert banner["overdue"] is False
    assert banner["message"].startswith("URGENT: You have 5 days remaining")
    assert banner["file_claim_url"].endswith("/proof-of-loss?eventId=42")

    late = deadline_warning(event, date(2025, 3, 10))
    assert late["overdue"] is True
    assert "passed on 2025-03-02" in late["message"]


# --- threshold selection ---

@pytest.mark.parametrize("remaining", [60, 45, 30, 7])
def test_exact_mode_fires_only_on_threshold_day(remaining):
    assert due_threshold(remaining, [], THRESHOLDS, catch_up=False) == (remaining, [remaining])
    assert due_threshold(remaining - 1, [], THRESHOLDS, catch_up=False) == (None, [])
    assert due_threshold(remaining + 1, [], THRESHOLDS, catch_up=False) == (None, [])

def test_exact_mode_does_not_refire():
    assert due_threshold(7, [7], THRESHOLDS, catch_up=False) == (None, [])

def test_catch_up_sends_tightest_threshold_and_marks_superseded():
    threshold, marks = due_threshold(29, [60], THRESHOLDS, catch_up=True)
    assert threshold == 30
    assert marks == [45, 30]

def test_catch_up_nothing_due_between_thresholds():
    assert due_threshold(50, [60], THRESHOLDS, catch_up=True) == (None, [])
    assert due_threshold(61, [], THRESHOLDS, catch_up=True) == (None, [])

def test_catch_up_all_fired():
    assert due_threshold(3, [60, 45, 30, 7], THRESHOLDS, catch_up=True) == (None, [])

def test_past_deadline_never_due():
    assert due_threshold(-1, [], THRESHOLDS, catch_up=True) == (None, [])


# --- config parsing ---

def test_parse_thresholds():
    assert parse_thresholds("7, 30,60,45,30") == (60, 45, 30, 7)
    assert parse_thresholds("") == DEFAULT_REMINDER_THRESHOLDS
    assert parse_thresholds(None) == DEFAULT_REMINDER_THRESHOLDS

@pytest.mark.parametrize("raw", ["7,abc", "0", "-5,7"])
def test_parse_thresholds_rejects_bad_values(raw):
    with pytest.raises(ValueError):
        parse_thresholds(raw)
