"""Builds occurrence records for accepted landing days."""

from datetime import date, datetime, time, tzinfo
from typing import Optional

from ..utils.dates import day_key
from .models import OCCURRENCE_ID_SEPARATOR, Occurrence, SchedulableItem


def occurrence_id(seed_id: str, day: date) -> str:
    """Synthetic identifier for the occurrence of ``seed_id`` on ``day``.

    The same day always yields the same identifier. Seed ids never contain the
    separator, so an occurrence id cannot equal any seed's own id.

    Raises:
        ValueError: If ``seed_id`` contains the separator
    """
    if OCCURRENCE_ID_SEPARATOR in seed_id:
        raise ValueError(f"Seed id must not contain {OCCURRENCE_ID_SEPARATOR!r}: {seed_id!r}")
    return f"{seed_id}{OCCURRENCE_ID_SEPARATOR}{day_key(day)}"


def split_occurrence_id(value: str) -> tuple[str, date]:
    """Recover ``(seed id, day)`` from a synthetic occurrence identifier.

    Raises:
        ValueError: If ``value`` is not an occurrence identifier
    """
    seed_id, sep, key = value.partition(OCCURRENCE_ID_SEPARATOR)
    if not sep or not seed_id:
        raise ValueError(f"Not an occurrence identifier: {value!r}")
    return seed_id, date.fromisoformat(key)


def _due_at(seed: SchedulableItem, day: date, tz: Optional[tzinfo]) -> datetime:
    if seed.due_date is None:
        return datetime.combine(day, time.min)
    due = seed.due_date
    if due.tzinfo is not None and tz is not None:
        due = due.astimezone(tz)
    return datetime.combine(day, due.timetz())


def materialize(
    seed: SchedulableItem, day: date, index: int, tz: Optional[tzinfo] = None
) -> Occurrence:
    """Build the occurrence of ``seed`` landing on ``day``.

    Args:
        seed: Recurring item the occurrence is generated from
        day: Accepted landing day
        index: 0-based lifetime index of the occurrence
        tz: Zone the seed's time of day is expressed in

    Returns:
        Occurrence carrying the seed's display fields and ``completed=False``
    """
    return Occurrence(
        id=occurrence_id(seed.id, day),
        title=seed.title,
        description=seed.description,
        due_date=_due_at(seed, day, tz),
        priority=seed.priority,
        tags=list(seed.tags),
        completed=False,
        is_recurring=False,
        parent_task_id=seed.id,
        occurrence_date=day,
        is_generated=True,
        recurrence_index=index,
    )
