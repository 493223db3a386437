"""Output models for the day-indexed calendar view."""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer
from pydantic.alias_generators import to_camel

from ..recurrence.models import Priority

_CAMEL_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True, use_enum_values=True)


class CalendarTask(BaseModel):
    """A plain task or a generated occurrence placed on a calendar day."""

    id: str
    title: str
    description: Optional[str] = None
    due_date: datetime
    priority: Priority = Priority.NONE
    tags: list[str] = Field(default_factory=list)
    completed: bool = False
    is_recurring: bool = False
    parent_task_id: Optional[str] = None
    occurrence_date: Optional[datetime] = None

    model_config = _CAMEL_CONFIG

    @field_serializer("due_date")
    def serialize_due_date(self, dt: datetime) -> str:
        return dt.isoformat()

    @field_serializer("occurrence_date", when_used="unless-none")
    def serialize_occurrence_date(self, dt: datetime) -> str:
        return dt.isoformat()


class CalendarDay(BaseModel):
    """All tasks falling on one calendar day."""

    date: str = Field(..., description="Day key (YYYY-MM-DD)")
    tasks: list[CalendarTask] = Field(default_factory=list)

    model_config = _CAMEL_CONFIG


class CalendarRange(BaseModel):
    start: str
    end: str


class CalendarView(BaseModel):
    """Every day of a window, in order, with the tasks that fall on it."""

    range: CalendarRange
    days: list[CalendarDay] = Field(default_factory=list)

    model_config = _CAMEL_CONFIG

    @property
    def task_count(self) -> int:
        return sum(len(day.tasks) for day in self.days)

    def get_day(self, key: str) -> Optional[CalendarDay]:
        """Look up a day by its ``YYYY-MM-DD`` key."""
        for day in self.days:
            if day.date == key:
                return day
        return None

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready payload with camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)
