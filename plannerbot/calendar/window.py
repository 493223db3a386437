"""Resolution of calendar views (day, week, month) into inclusive day windows."""

from collections.abc import Iterator
from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum
from typing import Union

from ..utils.dates import WEEKDAYS, iter_days, last_day_of_month, start_of_week


class CalendarViewType(str, Enum):
    """Supported calendar views."""

    DAY = "day"
    WEEK = "week"
    MONTH = "month"


@dataclass(frozen=True)
class DateWindow:
    """Inclusive ``[start, end]`` range of calendar days."""

    start: date
    end: date

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise ValueError(f"Window start {self.start} is after window end {self.end}")

    def __iter__(self) -> Iterator[date]:
        return iter_days(self.start, self.end)

    def __contains__(self, day: object) -> bool:
        return isinstance(day, date) and self.start <= day <= self.end

    def __len__(self) -> int:
        return (self.end - self.start).days + 1


def resolve_window(
    view: Union[CalendarViewType, str],
    anchor: date,
    week_starts_on: int = WEEKDAYS["sunday"],
) -> DateWindow:
    """Compute the days a calendar view shows around ``anchor``.

    The month view is padded to whole weeks, so it starts on the week start
    on or before the 1st and ends on the last day of the week holding the
    month's last day.

    Raises:
        ValueError: If ``view`` is not a known view
    """
    if isinstance(view, CalendarViewType):
        view_type = view
    else:
        view_type = CalendarViewType(str(view).strip().lower())

    if view_type is CalendarViewType.DAY:
        return DateWindow(anchor, anchor)

    if view_type is CalendarViewType.WEEK:
        start = start_of_week(anchor, week_starts_on)
        return DateWindow(start, start + timedelta(days=6))

    first = anchor.replace(day=1)
    last = anchor.replace(day=last_day_of_month(anchor.year, anchor.month))
    start = start_of_week(first, week_starts_on)
    end = start_of_week(last, week_starts_on) + timedelta(days=6)
    return DateWindow(start, end)
