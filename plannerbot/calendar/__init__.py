"""Calendar view: window resolution and day bucketing."""

from .bucketer import CalendarBucketer, build_calendar
from .models import CalendarDay, CalendarRange, CalendarTask, CalendarView
from .window import CalendarViewType, DateWindow, resolve_window

__all__ = [
    "CalendarBucketer",
    "CalendarDay",
    "CalendarRange",
    "CalendarTask",
    "CalendarView",
    "CalendarViewType",
    "DateWindow",
    "build_calendar",
    "resolve_window",
]
