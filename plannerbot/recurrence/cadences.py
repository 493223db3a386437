"""Per-kind cadences used by the expansion walk.

A cadence numbers its steps ``k = 0, 1, 2, ...`` from the seed day. Each step
has a start day and a (possibly empty) ascending list of landing days, all on
or after the seed and all before the next step's start. The walk in
``expander`` only relies on that contract, so adding a kind means adding a
cadence and registering it in ``CADENCES``.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from datetime import date, timedelta

from dateutil.relativedelta import relativedelta

from ..utils.dates import WEEKDAYS, add_months, clip_day, months_between, start_of_week
from .exceptions import InvalidRuleError
from .models import NormalizedRule, RecurrenceKind, RecurrenceUnit

logger = logging.getLogger(__name__)

# Errors raised by date arithmetic that runs past date.max
DATE_RANGE_ERRORS = (OverflowError, ValueError)


class Cadence(ABC):
    """Base class for a recurrence cadence anchored at a seed day."""

    #: Landings per step once past the seed's own step
    per_step: int = 1

    def __init__(self, seed: date, rule: NormalizedRule, week_starts_on: int = WEEKDAYS["sunday"]):
        self.seed = seed
        self.rule = rule
        self.interval = rule.interval
        self.week_starts_on = week_starts_on

    @abstractmethod
    def step_start(self, step: int) -> date:
        """First day covered by ``step``."""

    @abstractmethod
    def estimate_step(self, day: date) -> int:
        """Arithmetic guess of the step containing ``day`` (may be off by one)."""

    def landings(self, step: int) -> list[date]:
        """Landing days of ``step`` in ascending order, never before the seed."""
        return [self.step_start(step)]

    def step_at(self, day: date) -> int:
        """Largest step whose start is on or before ``day`` (0 when ``day`` precedes it)."""
        step = max(0, self.estimate_step(day))
        while step > 0 and self.step_start(step) > day:
            step -= 1
        while True:
            try:
                if self.step_start(step + 1) > day:
                    break
            except DATE_RANGE_ERRORS:
                break
            step += 1
        return step

    def landings_before(self, day: date) -> int:
        """Number of landing days in ``[seed, day)``."""
        if day <= self.seed:
            return 0
        step = self.step_at(day)
        total = sum(1 for landing in self.landings(step) if landing < day)
        if step > 0:
            total += len(self.landings(0)) + (step - 1) * self.per_step
        return total

    def is_landing(self, day: date) -> bool:
        if day < self.seed:
            return False
        return day in self.landings(self.step_at(day))


class DailyCadence(Cadence):
    """Every ``interval`` days from the seed."""

    def step_start(self, step: int) -> date:
        return self.seed + timedelta(days=step * self.interval)

    def estimate_step(self, day: date) -> int:
        return (day - self.seed).days // self.interval


class WeeklyCadence(Cadence):
    """Selected weekdays of every ``interval``-th week, weeks aligned to the week start."""

    def __init__(self, seed: date, rule: NormalizedRule, week_starts_on: int = WEEKDAYS["sunday"]):
        super().__init__(seed, rule, week_starts_on)
        self.anchor = start_of_week(seed, week_starts_on)
        self.offsets = sorted((weekday - week_starts_on) % 7 for weekday in rule.weekdays)
        self.per_step = len(self.offsets)

    def step_start(self, step: int) -> date:
        return self.anchor + timedelta(weeks=step * self.interval)

    def estimate_step(self, day: date) -> int:
        return (day - self.anchor).days // (7 * self.interval)

    def landings(self, step: int) -> list[date]:
        week = self.step_start(step)
        days = [week + timedelta(days=offset) for offset in self.offsets]
        return [day for day in days if day >= self.seed]


class MonthlyCadence(Cadence):
    """Day ``day_of_month`` of every ``interval``-th month, clipped to short months."""

    def __init__(self, seed: date, rule: NormalizedRule, week_starts_on: int = WEEKDAYS["sunday"]):
        super().__init__(seed, rule, week_starts_on)
        self.day_of_month = rule.day_of_month or seed.day
        self.first_month = seed.replace(day=1)

    def step_start(self, step: int) -> date:
        return add_months(self.first_month, step * self.interval)

    def estimate_step(self, day: date) -> int:
        return months_between(self.first_month, day) // self.interval

    def landings(self, step: int) -> list[date]:
        month = self.step_start(step)
        landing = clip_day(month.year, month.month, self.day_of_month)
        return [landing] if landing >= self.seed else []


class YearlyCadence(Cadence):
    """(``month``, ``day``) of every ``interval``-th year; Feb 29 falls back to Feb 28."""

    def __init__(self, seed: date, rule: NormalizedRule, week_starts_on: int = WEEKDAYS["sunday"]):
        super().__init__(seed, rule, week_starts_on)
        self.month = rule.month or seed.month
        self.day = rule.day or seed.day

    def step_start(self, step: int) -> date:
        return date(self.seed.year + step * self.interval, 1, 1)

    def estimate_step(self, day: date) -> int:
        return (day.year - self.seed.year) // self.interval

    def landings(self, step: int) -> list[date]:
        year = self.step_start(step).year
        landing = clip_day(year, self.month, self.day)
        return [landing] if landing >= self.seed else []


class CustomCadence(Cadence):
    """``interval`` x ``unit`` steps from the seed, one landing per step.

    Each step is measured from the seed rather than from the previous landing,
    so a seed on the 31st stepping by months returns to the 31st after
    passing through a shorter month.
    """

    def __init__(self, seed: date, rule: NormalizedRule, week_starts_on: int = WEEKDAYS["sunday"]):
        super().__init__(seed, rule, week_starts_on)
        if rule.unit is None:
            raise InvalidRuleError("Custom recurrence requires a unit")
        self.unit = RecurrenceUnit(rule.unit)

    def step_start(self, step: int) -> date:
        amount = step * self.interval
        if self.unit is RecurrenceUnit.DAY:
            return self.seed + timedelta(days=amount)
        if self.unit is RecurrenceUnit.WEEK:
            return self.seed + timedelta(weeks=amount)
        if self.unit is RecurrenceUnit.MONTH:
            return self.seed + relativedelta(months=amount)
        return self.seed + relativedelta(years=amount)

    def estimate_step(self, day: date) -> int:
        if self.unit is RecurrenceUnit.DAY:
            return (day - self.seed).days // self.interval
        if self.unit is RecurrenceUnit.WEEK:
            return (day - self.seed).days // (7 * self.interval)
        if self.unit is RecurrenceUnit.MONTH:
            return months_between(self.seed, day) // self.interval
        return (day.year - self.seed.year) // self.interval


CADENCES: dict[RecurrenceKind, type[Cadence]] = {
    RecurrenceKind.DAILY: DailyCadence,
    RecurrenceKind.WEEKLY: WeeklyCadence,
    RecurrenceKind.MONTHLY: MonthlyCadence,
    RecurrenceKind.YEARLY: YearlyCadence,
    RecurrenceKind.CUSTOM: CustomCadence,
}


def cadence_for(seed: date, rule: NormalizedRule, week_starts_on: int = WEEKDAYS["sunday"]) -> Cadence:
    """Select the cadence for ``rule.kind``.

    Raises:
        InvalidRuleError: If no cadence is registered for the kind
    """
    try:
        cadence_cls = CADENCES[RecurrenceKind(rule.kind)]
    except (KeyError, ValueError):
        raise InvalidRuleError(f"No cadence registered for kind {rule.kind!r}") from None
    return cadence_cls(seed, rule, week_starts_on)
