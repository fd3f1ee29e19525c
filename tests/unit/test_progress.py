"""Unit tests for Period Progress Calculator (liferpg/gamification/progress.py)"""
import pytest
from datetime import date, datetime

from liferpg.gamification.progress import (
    Period,
    compute_progress,
    count_missed_tasks,
    period_bounds,
    round_half_up_percent,
)
from liferpg.models import TaskType


@pytest.fixture
def week_tasks(make_task):
    """Ten completed daily tasks from Monday 13 to Wednesday 15 May 2024"""
    dates = ["2024-05-13"] * 4 + ["2024-05-14"] * 3 + ["2024-05-15"] * 3
    return [make_task(task_date=d, completed=True) for d in dates]


# ============================================================================
# Period Bounds Tests
# ============================================================================

def test_period_bounds_week_starts_monday(today):
    """ISO week runs Monday to Sunday"""
    assert period_bounds(Period.WEEK, today) == (date(2024, 5, 13), date(2024, 5, 19))
    assert period_bounds(Period.WEEK, date(2024, 5, 13)) == (date(2024, 5, 13), date(2024, 5, 19))
    assert period_bounds(Period.WEEK, date(2024, 5, 19)) == (date(2024, 5, 13), date(2024, 5, 19))


def test_period_bounds_month_and_year(today):
    """Calendar month and year, leap February included"""
    assert period_bounds(Period.MONTH, today) == (date(2024, 5, 1), date(2024, 5, 31))
    assert period_bounds(Period.MONTH, date(2024, 2, 10)) == (date(2024, 2, 1), date(2024, 2, 29))
    assert period_bounds(Period.YEAR, today) == (date(2024, 1, 1), date(2024, 12, 31))


def test_period_bounds_accepts_string_period(today):
    """Plain strings are accepted for the period"""
    assert period_bounds("week", today) == period_bounds(Period.WEEK, today)


# ============================================================================
# Compute Progress Tests
# ============================================================================

def test_compute_progress_week_example(week_tasks, today):
    """dailyMin=3 over a 7-day week with 10 completed tasks"""
    progress = compute_progress(week_tasks, 3, Period.WEEK, today)

    assert progress.target == 21
    assert progress.completed == 10
    assert progress.absolute_percent == 48
    assert progress.days_passed == 3
    # 10 / 9 capped
    assert progress.pace_percent == 100


def test_pace_depends_only_on_days_passed(week_tasks):
    """Same tasks and target, different reference day: only pace changes"""
    wednesday = compute_progress(week_tasks, 3, Period.WEEK, date(2024, 5, 15))
    sunday = compute_progress(week_tasks, 3, Period.WEEK, date(2024, 5, 19))

    assert wednesday.target == sunday.target == 21
    assert wednesday.absolute_percent == sunday.absolute_percent == 48
    assert sunday.days_passed == 7
    assert sunday.pace_percent == 48
    assert wednesday.pace_percent == 100


def test_compute_progress_month_and_year(week_tasks, today):
    """Targets scale with the number of days in the period"""
    month = compute_progress(week_tasks, 3, Period.MONTH, today)
    year = compute_progress(week_tasks, 3, Period.YEAR, today)

    assert month.target == 93
    assert month.absolute_percent == 11
    assert month.days_passed == 15
    # 10 / 45
    assert month.pace_percent == 22

    assert year.target == 366 * 3
    assert year.absolute_percent == 1


def test_compute_progress_excludes_non_matching_tasks(make_task, today):
    """Goals, open tasks, undated, malformed and out-of-period tasks are not counted"""
    tasks = [
        make_task(task_date="2024-05-14", completed=True),
        make_task(task_date="2024-05-14", completed=False),
        make_task(task_date="2024-05-14", completed=True, task_type=TaskType.GOAL),
        make_task(task_date=None, completed=True),
        make_task(task_date="not-a-date", completed=True),
        make_task(task_date="2024-05-12", completed=True),
        make_task(task_date="2024-05-20", completed=True),
    ]

    progress = compute_progress(tasks, 3, Period.WEEK, today)

    assert progress.completed == 1


def test_compute_progress_inclusive_bounds(make_task, today):
    """Tasks on the first and last day of the period count"""
    tasks = [
        make_task(task_date="2024-05-13", completed=True),
        make_task(task_date="2024-05-19T21:00:00", completed=True),
    ]

    assert compute_progress(tasks, 1, Period.WEEK, today).completed == 2


def test_compute_progress_zero_target(make_task, today):
    """daily_min of 0 gives 0% absolute and a pace floor of one task"""
    tasks = [make_task(task_date="2024-05-14", completed=True)]

    progress = compute_progress(tasks, 0, Period.WEEK, today)

    assert progress.target == 0
    assert progress.absolute_percent == 0
    assert progress.pace_percent == 100


def test_compute_progress_no_tasks(today):
    """Empty task lists give zeros"""
    progress = compute_progress([], 3, Period.MONTH, today)

    assert progress.completed == 0
    assert progress.absolute_percent == 0
    assert progress.pace_percent == 0


def test_compute_progress_accepts_datetime(week_tasks):
    """A datetime reference point is reduced to its date"""
    progress = compute_progress(week_tasks, 3, Period.WEEK, datetime(2024, 5, 19, 23, 59))

    assert progress.days_passed == 7


def test_round_half_up_percent():
    """Halves round up, matching the displayed percentages"""
    assert round_half_up_percent(1, 8) == 13  # 12.5
    assert round_half_up_percent(10, 21) == 48
    assert round_half_up_percent(1, 3) == 33
    assert round_half_up_percent(2, 3) == 67


# ============================================================================
# Missed Tasks Tests
# ============================================================================

def test_count_missed_tasks(make_task, today):
    """Only open daily tasks dated before today are missed"""
    tasks = [
        make_task(task_date="2024-05-14"),
        make_task(task_date="2024-05-01"),
        make_task(task_date="2024-05-15"),
        make_task(task_date="2024-05-16"),
        make_task(task_date="2024-05-10", completed=True),
        make_task(task_date="2024-05-01", task_type=TaskType.GOAL),
        make_task(task_date="garbage"),
        make_task(task_date=None),
    ]

    assert count_missed_tasks(tasks, today) == 2
