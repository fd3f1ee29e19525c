"""
Period Progress Calculator

Completion statistics for the week, month or year containing a reference day.

Two percentages are reported and must never be conflated:
- absolute_percent: completed tasks against the target for the WHOLE period.
  Drives progress bars, which fill up over the period.
- pace_percent: completed tasks against the target for the days elapsed so
  far. Drives motivation messages ("are you on track today?").
"""

import calendar
import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Iterable, Optional, Tuple, Union

from liferpg.models import Task, TaskType
from liferpg.utils.datetime_helpers import as_date, parse_task_date

logger = logging.getLogger(__name__)


class Period(str, Enum):
    """Calendar windows"""
    WEEK = "week"  # ISO week, Monday to Sunday
    MONTH = "month"
    YEAR = "year"


@dataclass
class PeriodProgress:
    """Completion statistics for one calendar window"""
    completed: int
    target: int
    absolute_percent: int
    pace_percent: int
    start: date
    end: date
    days_passed: int


def round_half_up_percent(part: int, whole: int) -> int:
    """round(100 * part / whole) with halves rounded up, in integer arithmetic"""
    return (200 * part + whole) // (2 * whole)


def _clamp_percent(value: int) -> int:
    return max(0, min(100, value))


def period_bounds(period: Period, today: date) -> Tuple[date, date]:
    """First and last day (inclusive) of the period containing `today`"""
    period = Period(period)
    if period == Period.WEEK:
        start = today - timedelta(days=today.weekday())
        return start, start + timedelta(days=6)
    if period == Period.MONTH:
        last_day = calendar.monthrange(today.year, today.month)[1]
        return today.replace(day=1), today.replace(day=last_day)
    return date(today.year, 1, 1), date(today.year, 12, 31)


def count_completed_daily_tasks(tasks: Iterable[Task], start: date, end: date) -> int:
    """Completed daily tasks dated within [start, end]; undated or malformed dates are excluded"""
    count = 0
    for task in tasks:
        if task.type != TaskType.DAILY or not task.completed:
            continue
        task_date = parse_task_date(task.date)
        if task_date is not None and start <= task_date <= end:
            count += 1
    return count


def compute_progress(
    tasks: Iterable[Task],
    daily_min: int,
    period: Period,
    now: Optional[Union[date, datetime]] = None
) -> PeriodProgress:
    """
    Compute completion statistics for a calendar window

    Args:
        tasks: Player's tasks
        daily_min: Daily task target from the player's settings
        period: week, month or year
        now: Reference day; defaults to today in the configured timezone

    Returns:
        PeriodProgress
    """
    today = as_date(now)
    start, end = period_bounds(period, today)

    total_days = (end - start).days + 1
    target = total_days * daily_min
    completed = count_completed_daily_tasks(tasks, start, end)

    absolute_percent = 0 if target <= 0 else _clamp_percent(round_half_up_percent(completed, target))

    # Days of the period up to and including today
    days_passed = max(0, min(total_days, (today - start).days + 1))
    pace_target = max(1, days_passed * daily_min)
    pace_percent = _clamp_percent(round_half_up_percent(completed, pace_target))

    return PeriodProgress(
        completed=completed,
        target=target,
        absolute_percent=absolute_percent,
        pace_percent=pace_percent,
        start=start,
        end=end,
        days_passed=days_passed,
    )


def count_missed_tasks(tasks: Iterable[Task], today: Optional[Union[date, datetime]] = None) -> int:
    """
    Daily tasks dated before today that were never completed

    Tasks without a parseable date are not counted.
    """
    cutoff = as_date(today)
    missed = 0
    for task in tasks:
        if task.completed or task.type != TaskType.DAILY:
            continue
        task_date = parse_task_date(task.date)
        if task_date is not None and task_date < cutoff:
            missed += 1
    return missed
