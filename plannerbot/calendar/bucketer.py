"""Groups plain tasks and recurring occurrences by calendar day."""

import logging
from collections import defaultdict
from collections.abc import Iterable, Mapping
from typing import Any, Optional, Union

from pydantic import ValidationError

from ..config.settings import PlannerBotSettings, get_settings
from ..recurrence.exceptions import RecurrenceError
from ..recurrence.expander import RecurrenceExpander
from ..recurrence.models import Occurrence, SchedulableItem
from ..utils.dates import day_key, to_day
from .models import CalendarDay, CalendarRange, CalendarTask, CalendarView
from .window import DateWindow

logger = logging.getLogger(__name__)

ItemInput = Union[SchedulableItem, Mapping[str, Any]]


def _plain_task(item: SchedulableItem) -> CalendarTask:
    return CalendarTask(
        id=item.id,
        title=item.title,
        description=item.description,
        due_date=item.due_date,
        priority=item.priority,
        tags=list(item.tags),
        completed=item.completed,
        is_recurring=False,
    )


def _occurrence_task(occurrence: Occurrence) -> CalendarTask:
    return CalendarTask(
        id=occurrence.id,
        title=occurrence.title,
        description=occurrence.description,
        due_date=occurrence.due_date,
        priority=occurrence.priority,
        tags=list(occurrence.tags),
        completed=occurrence.completed,
        is_recurring=False,
        parent_task_id=occurrence.parent_task_id,
        occurrence_date=occurrence.due_date,
    )


class CalendarBucketer:
    """Builds a day-indexed calendar view for a window."""

    def __init__(
        self,
        settings: Optional[PlannerBotSettings] = None,
        expander: Optional[RecurrenceExpander] = None,
    ):
        self.settings = settings or get_settings()
        self.expander = expander or RecurrenceExpander(self.settings)
        self.timezone = self.settings.timezone

    def _coerce_items(self, items: Iterable[ItemInput]) -> list[SchedulableItem]:
        coerced = []
        for raw in items:
            if isinstance(raw, SchedulableItem):
                coerced.append(raw)
                continue
            try:
                coerced.append(SchedulableItem.model_validate(raw))
            except ValidationError as e:
                item_id = raw.get("id", "<no-id>") if isinstance(raw, Mapping) else "<no-id>"
                logger.warning("Skipping malformed item %s: %s", item_id, e)
        return coerced

    def build(
        self,
        items: Iterable[ItemInput],
        window: DateWindow,
        hide_completed: bool = False,
    ) -> CalendarView:
        """Bucket ``items`` into the days of ``window``.

        Plain items land on their due day; recurring items contribute their
        occurrences. An item whose rule is invalid, or whose expansion hits the
        strict iteration ceiling, is logged and contributes nothing; the other
        items are still placed.

        Args:
            items: Items or stored item mappings
            window: Days to cover; every day appears in the result
            hide_completed: Drop completed plain items

        Returns:
            CalendarView with one entry per day of the window
        """
        seeds = self._coerce_items(items)
        tasks_by_day: dict[str, list[CalendarTask]] = defaultdict(list)

        for item in seeds:
            if item.is_recurring or item.due_date is None:
                continue
            if hide_completed and item.completed:
                continue
            due_day = to_day(item.due_date, self.timezone)
            if due_day in window:
                tasks_by_day[day_key(due_day)].append(_plain_task(item))

        skipped = 0
        for item in seeds:
            if not item.is_recurring or item.recurrence_rule is None:
                continue
            try:
                occurrences = self.expander.expand(item, window.start, window.end)
            except RecurrenceError as e:
                skipped += 1
                logger.warning("Skipping recurring item %s: %s", item.id, e.message)
                continue
            for occurrence in occurrences:
                tasks_by_day[day_key(occurrence.occurrence_date)].append(_occurrence_task(occurrence))

        days = [CalendarDay(date=day_key(day), tasks=tasks_by_day.get(day_key(day), [])) for day in window]
        view = CalendarView(
            range=CalendarRange(start=day_key(window.start), end=day_key(window.end)),
            days=days,
        )
        logger.debug(
            "Built calendar [%s, %s]: %d items, %d tasks placed, %d recurring items skipped",
            window.start,
            window.end,
            len(seeds),
            view.task_count,
            skipped,
        )
        return view


def build_calendar(
    items: Iterable[ItemInput],
    window: DateWindow,
    hide_completed: bool = False,
    settings: Optional[PlannerBotSettings] = None,
) -> CalendarView:
    """Convenience wrapper around ``CalendarBucketer.build``."""
    return CalendarBucketer(settings).build(items, window, hide_completed=hide_completed)
