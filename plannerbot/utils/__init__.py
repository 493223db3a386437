"""Utility functions and helpers package."""

from .dates import WEEKDAYS, add_months, day_key, last_day_of_month, start_of_week, to_day
from .logging import get_log_level, setup_logging

__all__ = [
    "WEEKDAYS",
    "add_months",
    "day_key",
    "get_log_level",
    "last_day_of_month",
    "setup_logging",
    "start_of_week",
    "to_day",
]
