"""Unit tests for calendar-day helpers."""

from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo

import pytest

from plannerbot.utils.dates import (
    WEEKDAYS,
    add_months,
    clip_day,
    day_key,
    iter_days,
    last_day_of_month,
    months_between,
    start_of_week,
    to_day,
)


@pytest.mark.unit
class TestToDay:
    """Tests for reducing date-like values to days."""

    def test_date_passes_through(self):
        assert to_day(date(2024, 6, 3)) == date(2024, 6, 3)

    def test_naive_datetime_keeps_wall_clock_day(self):
        assert to_day(datetime(2024, 6, 3, 23, 59), ZoneInfo("Asia/Tokyo")) == date(2024, 6, 3)

    def test_aware_datetime_is_converted(self):
        value = datetime(2024, 6, 3, 23, 30, tzinfo=timezone.utc)

        assert to_day(value, ZoneInfo("Asia/Tokyo")) == date(2024, 6, 4)
        assert to_day(value) == date(2024, 6, 3)

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("2024-06-03", date(2024, 6, 3)),
            (" 2024-06-03T10:00:00 ", date(2024, 6, 3)),
            ("2024-06-03T01:00:00+02:00", date(2024, 6, 3)),
        ],
    )
    def test_iso_strings(self, text, expected):
        assert to_day(text) == expected

    def test_unparseable_string(self):
        with pytest.raises(ValueError, match="Unable to parse date"):
            to_day("June third")

    def test_wrong_type(self):
        with pytest.raises(TypeError):
            to_day(20240603)


@pytest.mark.unit
class TestCalendarArithmetic:
    """Tests for month, week and range helpers."""

    def test_day_key(self):
        assert day_key(date(2024, 6, 3)) == "2024-06-03"
        assert day_key(datetime(2024, 6, 3, 18, 0)) == "2024-06-03"

    def test_day_key_pads_early_years(self):
        """Keys must parse back with date.fromisoformat for every year."""
        key = day_key(date(999, 2, 3))

        assert key == "0999-02-03"
        assert date.fromisoformat(key) == date(999, 2, 3)

    @pytest.mark.parametrize(
        ("year", "month", "expected"),
        [(2024, 2, 29), (2023, 2, 28), (1900, 2, 28), (2000, 2, 29), (2024, 4, 30), (2024, 12, 31)],
    )
    def test_last_day_of_month(self, year, month, expected):
        assert last_day_of_month(year, month) == expected

    def test_clip_day(self):
        assert clip_day(2023, 2, 31) == date(2023, 2, 28)
        assert clip_day(2024, 3, 15) == date(2024, 3, 15)

    def test_add_months_clips(self):
        assert add_months(date(2024, 1, 31), 1) == date(2024, 2, 29)
        assert add_months(date(2024, 3, 31), -1) == date(2024, 2, 29)
        assert add_months(date(2024, 11, 15), 3) == date(2025, 2, 15)

    def test_months_between(self):
        assert months_between(date(2023, 11, 30), date(2024, 2, 1)) == 3
        assert months_between(date(2024, 2, 1), date(2024, 2, 29)) == 0

    def test_start_of_week(self):
        wednesday = date(2024, 6, 5)

        assert start_of_week(wednesday) == date(2024, 6, 2)
        assert start_of_week(wednesday, WEEKDAYS["monday"]) == date(2024, 6, 3)
        assert start_of_week(date(2024, 6, 2)) == date(2024, 6, 2)

    def test_iter_days(self):
        assert list(iter_days(date(2024, 12, 30), date(2025, 1, 1))) == [
            date(2024, 12, 30),
            date(2024, 12, 31),
            date(2025, 1, 1),
        ]
        assert list(iter_days(date(2024, 1, 2), date(2024, 1, 1))) == []
