"""Recurrence expansion: materializes the occurrences of a recurring item inside a day window."""

import logging
from collections.abc import Mapping
from datetime import date, tzinfo
from typing import Any, Optional, Union

from ..config.settings import PlannerBotSettings, get_settings
from ..utils.dates import DateLike, day_key, to_day
from .cadences import DATE_RANGE_ERRORS, Cadence, cadence_for
from .exceptions import DegenerateCadenceError
from .materializer import materialize
from .models import NormalizedRule, Occurrence, RecurrenceRule, SchedulableItem
from .normalizer import normalize_rule

logger = logging.getLogger(__name__)


class RecurrenceExpander:
    """Expands recurring items into concrete occurrences for a query window.

    Expansion is pure: no state is kept between calls, so one expander can be
    shared freely and repeated calls with the same arguments return the same
    occurrences (including their identifiers).
    """

    def __init__(self, settings: Optional[PlannerBotSettings] = None):
        """Initialize RecurrenceExpander with settings.

        Args:
            settings: PlannerBot settings (defaults to the global instance)
        """
        self.settings = settings or get_settings()
        self.week_starts_on = self.settings.week_start_index
        self.timezone: tzinfo = self.settings.timezone
        self.max_iterations = self.settings.max_iterations
        self.fail_on_ceiling = self.settings.fail_on_iteration_ceiling

    def expand(
        self,
        item: SchedulableItem,
        window_from: DateLike,
        window_to: DateLike,
        rule: Optional[Union[RecurrenceRule, Mapping[str, Any]]] = None,
    ) -> list[Occurrence]:
        """Materialize every occurrence of ``item`` inside ``[window_from, window_to]``.

        Args:
            item: Seed item
            window_from: First day of the window (inclusive)
            window_to: Last day of the window (inclusive)
            rule: Rule to expand (defaults to ``item.recurrence_rule``)

        Returns:
            Occurrences in ascending date order; empty when the item is not
            recurring, has no rule or has no due date

        Raises:
            InvalidRuleError: If the rule cannot be normalized
            DegenerateCadenceError: If the iteration ceiling is hit and
                ``fail_on_iteration_ceiling`` is enabled
            ValueError: If ``window_from`` is after ``window_to``
        """
        start = to_day(window_from, self.timezone)
        end = to_day(window_to, self.timezone)
        if start > end:
            raise ValueError(f"Window start {start} is after window end {end}")

        rule = rule if rule is not None else item.recurrence_rule
        if not item.is_recurring or rule is None or item.due_date is None:
            return []

        seed_day = to_day(item.due_date, self.timezone)
        normalized = normalize_rule(rule, seed_day, self.timezone, item_id=item.id)

        landings = self.generate_days(seed_day, normalized, start, end, item_id=item.id)
        return [materialize(item, day, index, self.timezone) for index, day in landings]

    def generate_days(
        self,
        seed_day: date,
        rule: NormalizedRule,
        window_from: date,
        window_to: date,
        item_id: Optional[str] = None,
    ) -> list[tuple[int, date]]:
        """Accepted landing days in the window, each paired with its lifetime index."""
        if window_to < seed_day:
            return []
        if rule.end_date is not None and rule.end_date < max(window_from, seed_day):
            return []

        cadence = cadence_for(seed_day, rule, self.week_starts_on)

        accepted = 0
        step = 0
        if window_from > seed_day:
            accepted = self._accepted_before(cadence, rule, window_from)
            if rule.count is not None and accepted >= rule.count:
                logger.debug(
                    "Item %s exhausted its %d occurrences before %s",
                    item_id,
                    rule.count,
                    window_from,
                )
                return []
            step = cadence.step_at(window_from)

        results: list[tuple[int, date]] = []
        iterations = 0
        done = False

        while not done:
            try:
                step_start = cadence.step_start(step)
                landings = cadence.landings(step)
            except DATE_RANGE_ERRORS:
                logger.debug("Item %s ran past the last representable date", item_id)
                break

            if step_start > window_to or (rule.end_date is not None and step_start > rule.end_date):
                break

            if iterations >= self.max_iterations:
                self._ceiling_reached(item_id, rule, window_from, window_to)
                break
            iterations += 1

            for day in landings:
                if day > window_to or (rule.end_date is not None and day > rule.end_date):
                    done = True
                    break
                if day < window_from or day_key(day) in rule.exceptions:
                    continue
                results.append((accepted, day))
                accepted += 1
                if rule.count is not None and accepted >= rule.count:
                    done = True
                    break

            step += 1

        logger.debug(
            "Expanded item %s (%s every %d): %d occurrences in [%s, %s] after %d steps",
            item_id,
            rule.kind.value,
            rule.interval,
            len(results),
            window_from,
            window_to,
            iterations,
        )
        return results

    def _accepted_before(self, cadence: Cadence, rule: NormalizedRule, day: date) -> int:
        """Occurrences accepted in ``[seed, day)``; excepted landings do not count."""
        excepted = 0
        for key in rule.exceptions:
            excepted_day = date.fromisoformat(key)
            if cadence.seed <= excepted_day < day and cadence.is_landing(excepted_day):
                excepted += 1
        return cadence.landings_before(day) - excepted

    def _ceiling_reached(
        self, item_id: Optional[str], rule: NormalizedRule, window_from: date, window_to: date
    ) -> None:
        message = (
            f"Iteration ceiling of {self.max_iterations} reached expanding item {item_id} "
            f"({rule.kind.value} every {rule.interval}) over [{window_from}, {window_to}]"
        )
        if self.fail_on_ceiling:
            raise DegenerateCadenceError(message, item_id=item_id)
        logger.warning("%s; returning partial results", message)


def expand(
    seed: SchedulableItem,
    rule: Optional[Union[RecurrenceRule, Mapping[str, Any]]],
    window_from: DateLike,
    window_to: DateLike,
    settings: Optional[PlannerBotSettings] = None,
) -> list[Occurrence]:
    """Expand ``seed`` under ``rule`` over the inclusive window ``[window_from, window_to]``.

    Convenience wrapper around ``RecurrenceExpander.expand``.
    """
    return RecurrenceExpander(settings).expand(seed, window_from, window_to, rule=rule)
