"""Recurrence expansion engine."""

from .cadences import CADENCES, Cadence, cadence_for
from .exceptions import DegenerateCadenceError, InvalidRuleError, RecurrenceError
from .expander import RecurrenceExpander, expand
from .materializer import materialize, occurrence_id, split_occurrence_id
from .models import (
    NormalizedRule,
    Occurrence,
    Priority,
    RecurrenceKind,
    RecurrenceRule,
    RecurrenceUnit,
    SchedulableItem,
)
from .normalizer import normalize_rule

__all__ = [
    "CADENCES",
    "Cadence",
    "DegenerateCadenceError",
    "InvalidRuleError",
    "NormalizedRule",
    "Occurrence",
    "Priority",
    "RecurrenceError",
    "RecurrenceExpander",
    "RecurrenceKind",
    "RecurrenceRule",
    "RecurrenceUnit",
    "SchedulableItem",
    "cadence_for",
    "expand",
    "materialize",
    "normalize_rule",
    "occurrence_id",
    "split_occurrence_id",
]
