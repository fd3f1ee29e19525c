"""
Date helpers for task scheduling data

Task dates arrive as ISO strings written by host applications ("2024-05-01",
"2024-05-01T09:30:00", "2024-05-01T09:30:00Z"). Anything unparseable is
reported as None so callers can exclude the task instead of failing.
"""

import logging
from datetime import datetime, date
from typing import Optional, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from liferpg import config

logger = logging.getLogger(__name__)


def parse_task_date(value: Optional[str]) -> Optional[date]:
    """
    Parse a task's date string into a calendar date

    Args:
        value: ISO date or datetime string

    Returns:
        The calendar date, or None when missing or malformed
    """
    if not value:
        return None

    try:
        return datetime.fromisoformat(value.strip()).date()
    except (ValueError, TypeError, AttributeError):
        logger.warning(f"Ignoring malformed task date '{value}'")
        return None


def get_default_timezone() -> ZoneInfo:
    """Get the configured timezone, falling back to UTC"""
    try:
        return ZoneInfo(config.DEFAULT_TIMEZONE)
    except (ZoneInfoNotFoundError, ValueError) as e:
        logger.error(f"Invalid timezone '{config.DEFAULT_TIMEZONE}': {e}")
        return ZoneInfo("UTC")


def today_local() -> date:
    """Today's date in the configured timezone"""
    return datetime.now(get_default_timezone()).date()


def as_date(value: Optional[Union[date, datetime]]) -> date:
    """
    Normalize an optional date/datetime reference point to a date

    None resolves to today in the configured timezone.
    """
    if value is None:
        return today_local()
    if isinstance(value, datetime):
        return value.date()
    return value
