"""Data models for recurring schedulable items and their generated occurrences."""

from dataclasses import dataclass
from datetime import date, datetime, time
from enum import Enum
from typing import Any, Optional, Union

from dateutil.parser import isoparse
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_serializer, field_validator
from pydantic.alias_generators import to_camel

DateInput = Union[datetime, date, str]

# Joins a seed id and a day key into an occurrence id
OCCURRENCE_ID_SEPARATOR = "::"


class Priority(str, Enum):
    """Task priority levels."""

    NONE = "none"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class RecurrenceKind(str, Enum):
    """Supported recurrence kinds."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"
    CUSTOM = "custom"


class RecurrenceUnit(str, Enum):
    """Step unit for custom recurrence."""

    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


class RecurrenceRule(BaseModel):
    """Raw recurrence rule as stored alongside a recurring item.

    Kind, weekday names and anchor ranges are checked by the normalizer, which
    raises ``InvalidRuleError``; loading an item with a bad rule succeeds.
    """

    kind: str = Field(
        ...,
        validation_alias=AliasChoices("type", "kind"),
        serialization_alias="type",
        description="daily, weekly, monthly, yearly or custom",
    )
    interval: Optional[int] = Field(default=None, description="Step count, defaults to 1")
    days_of_week: Optional[list[str]] = Field(default=None, description="Weekday names (weekly)")
    day_of_month: Optional[int] = Field(default=None, description="Anchor day (monthly)")
    month: Optional[int] = Field(default=None, description="Anchor month 1-12 (yearly)")
    day: Optional[int] = Field(default=None, description="Anchor day (yearly)")
    unit: Optional[str] = Field(default=None, description="day, week, month or year (custom)")
    end_date: Optional[DateInput] = Field(default=None, description="Inclusive last day")
    count: Optional[int] = Field(default=None, description="Lifetime occurrence cap")
    exceptions: list[DateInput] = Field(
        default_factory=list, description="Days to suppress (single-instance edits/deletions)"
    )

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class SchedulableItem(BaseModel):
    """A task as read from storage; recurring ones act as the expansion seed."""

    id: str = Field(..., description="Stable item identifier")
    title: str = Field(..., description="Display title")
    description: Optional[str] = Field(default=None, description="Display description")
    due_date: Optional[datetime] = Field(default=None, description="Seed due date")
    priority: Priority = Field(default=Priority.NONE, description="Task priority")
    tags: list[str] = Field(default_factory=list, description="Tag set")
    completed: bool = Field(default=False, description="Completion flag of the item itself")
    is_recurring: bool = Field(default=False, description="Recurring item flag")
    recurrence_rule: Optional[RecurrenceRule] = Field(default=None, description="Recurrence rule")

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        # YAML/JSON task files may store numeric identifiers
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("id")
    @classmethod
    def _check_id(cls, value: str) -> str:
        if OCCURRENCE_ID_SEPARATOR in value:
            raise ValueError(f"Item id must not contain {OCCURRENCE_ID_SEPARATOR!r}")
        return value

    @field_validator("due_date", mode="before")
    @classmethod
    def _coerce_due_date(cls, value: Any) -> Any:
        if isinstance(value, str) and value.strip():
            return isoparse(value.strip())
        if isinstance(value, date) and not isinstance(value, datetime):
            return datetime.combine(value, time.min)
        return value


@dataclass(frozen=True)
class NormalizedRule:
    """Validated rule with every anchor resolved against the seed date."""

    kind: RecurrenceKind
    interval: int = 1
    weekdays: tuple[int, ...] = ()
    day_of_month: Optional[int] = None
    month: Optional[int] = None
    day: Optional[int] = None
    unit: Optional[RecurrenceUnit] = None
    end_date: Optional[date] = None
    count: Optional[int] = None
    exceptions: frozenset[str] = frozenset()


class Occurrence(BaseModel):
    """A generated, never-persisted instance of a recurring item."""

    id: str = Field(..., description="Synthetic identifier: '<seed id>::<YYYY-MM-DD>'")
    title: str
    description: Optional[str] = None
    due_date: datetime = Field(..., description="Occurrence day at the seed's time of day")
    priority: Priority = Priority.NONE
    tags: list[str] = Field(default_factory=list)
    completed: bool = False
    is_recurring: bool = False
    parent_task_id: str = Field(..., description="Identifier of the seed item")
    occurrence_date: date = Field(..., description="Calendar day of this occurrence")
    is_generated: bool = True
    recurrence_index: int = Field(..., ge=0, description="0-based lifetime occurrence index")

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, use_enum_values=True, frozen=True
    )

    @field_serializer("due_date")
    def serialize_due_date(self, dt: datetime) -> str:
        """Serialize datetime to ISO format."""
        return dt.isoformat()

    @field_serializer("occurrence_date")
    def serialize_occurrence_date(self, day: date) -> str:
        return day.isoformat()
