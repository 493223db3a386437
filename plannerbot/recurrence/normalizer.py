"""Validation and defaulting of raw recurrence rules."""

import logging
from collections.abc import Mapping
from datetime import date, tzinfo
from typing import Any, Optional, Union

from pydantic import ValidationError

from ..utils.dates import WEEKDAYS, day_key, to_day
from .exceptions import InvalidRuleError
from .models import NormalizedRule, RecurrenceKind, RecurrenceRule, RecurrenceUnit

logger = logging.getLogger(__name__)


def coerce_rule(raw: Union[RecurrenceRule, Mapping[str, Any]], item_id: Optional[str] = None) -> RecurrenceRule:
    """Turn a stored rule mapping into a ``RecurrenceRule``.

    Raises:
        InvalidRuleError: If the mapping does not describe a rule
    """
    if isinstance(raw, RecurrenceRule):
        return raw
    try:
        return RecurrenceRule.model_validate(raw)
    except ValidationError as e:
        raise InvalidRuleError(f"Malformed recurrence rule: {e}", item_id=item_id) from e


def _parse_kind(value: str, item_id: Optional[str]) -> RecurrenceKind:
    try:
        return RecurrenceKind(str(value).strip().lower())
    except ValueError:
        raise InvalidRuleError(f"Unrecognized recurrence kind: {value!r}", item_id=item_id) from None


def _parse_unit(value: Optional[str], item_id: Optional[str]) -> RecurrenceUnit:
    if not value:
        raise InvalidRuleError("Custom recurrence requires a unit", item_id=item_id)
    try:
        return RecurrenceUnit(str(value).strip().lower())
    except ValueError:
        raise InvalidRuleError(f"Unrecognized recurrence unit: {value!r}", item_id=item_id) from None


def _parse_weekdays(names: Optional[list[str]], seed: date, item_id: Optional[str]) -> tuple[int, ...]:
    if not names:
        return (seed.weekday(),)

    weekdays = set()
    for name in names:
        index = WEEKDAYS.get(str(name).strip().lower())
        if index is None:
            raise InvalidRuleError(f"Unrecognized weekday name: {name!r}", item_id=item_id)
        weekdays.add(index)
    return tuple(sorted(weekdays))


def _check_range(label: str, value: int, low: int, high: int, item_id: Optional[str]) -> int:
    if not low <= value <= high:
        raise InvalidRuleError(f"{label} must be between {low} and {high}, got {value}", item_id=item_id)
    return value


def _parse_day(label: str, value: Any, tz: Optional[tzinfo], item_id: Optional[str]) -> date:
    try:
        return to_day(value, tz)
    except (TypeError, ValueError) as e:
        raise InvalidRuleError(f"Invalid {label}: {value!r}", item_id=item_id) from e


def normalize_rule(
    raw: Union[RecurrenceRule, Mapping[str, Any]],
    seed: date,
    tz: Optional[tzinfo] = None,
    item_id: Optional[str] = None,
) -> NormalizedRule:
    """Validate a raw rule and resolve its anchors from the seed day.

    Args:
        raw: Rule model or stored mapping (camelCase or snake_case keys)
        seed: Seed day of the recurring item
        tz: Zone used to reduce aware timestamps (end date, exceptions) to days
        item_id: Identifier of the owning item, attached to raised errors

    Returns:
        NormalizedRule with interval defaulted and every anchor resolved

    Raises:
        InvalidRuleError: If the kind is unknown, the interval or count is not
            positive, a custom rule lacks a unit, or an anchor is out of range
    """
    rule = coerce_rule(raw, item_id)
    kind = _parse_kind(rule.kind, item_id)

    interval = 1 if rule.interval is None else rule.interval
    if interval < 1:
        raise InvalidRuleError(f"Interval must be at least 1, got {interval}", item_id=item_id)

    if rule.count is not None and rule.count < 1:
        raise InvalidRuleError(f"Count must be at least 1, got {rule.count}", item_id=item_id)

    fields: dict[str, Any] = {}
    if kind is RecurrenceKind.WEEKLY:
        fields["weekdays"] = _parse_weekdays(rule.days_of_week, seed, item_id)
    elif kind is RecurrenceKind.MONTHLY:
        dom = seed.day if rule.day_of_month is None else rule.day_of_month
        fields["day_of_month"] = _check_range("dayOfMonth", dom, 1, 31, item_id)
    elif kind is RecurrenceKind.YEARLY:
        month = seed.month if rule.month is None else rule.month
        day = seed.day if rule.day is None else rule.day
        fields["month"] = _check_range("month", month, 1, 12, item_id)
        fields["day"] = _check_range("day", day, 1, 31, item_id)
    elif kind is RecurrenceKind.CUSTOM:
        fields["unit"] = _parse_unit(rule.unit, item_id)

    end_date = None
    if rule.end_date is not None and rule.end_date != "":
        end_date = _parse_day("endDate", rule.end_date, tz, item_id)

    exceptions = frozenset(
        day_key(_parse_day("exception date", value, tz, item_id)) for value in rule.exceptions
    )

    normalized = NormalizedRule(
        kind=kind,
        interval=interval,
        end_date=end_date,
        count=rule.count,
        exceptions=exceptions,
        **fields,
    )
    logger.debug("Normalized rule for item %s: %s", item_id, normalized)
    return normalized
