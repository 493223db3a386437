"""Unit tests for per-kind recurrence cadences."""

from datetime import date

import pytest

from plannerbot.recurrence.cadences import (
    CADENCES,
    CustomCadence,
    DailyCadence,
    MonthlyCadence,
    WeeklyCadence,
    YearlyCadence,
    cadence_for,
)
from plannerbot.recurrence.exceptions import InvalidRuleError
from plannerbot.recurrence.models import NormalizedRule, RecurrenceKind, RecurrenceUnit
from plannerbot.utils.dates import WEEKDAYS


def _brute_force_landings(cadence, until: date) -> list[date]:
    days = []
    step = 0
    while cadence.step_start(step) <= until:
        days.extend(day for day in cadence.landings(step) if day <= until)
        step += 1
    return days


@pytest.mark.unit
class TestCadenceRegistry:
    """Tests for cadence dispatch."""

    def test_every_kind_has_a_cadence(self):
        assert set(CADENCES) == set(RecurrenceKind)

    @pytest.mark.parametrize(
        ("kind", "extra", "expected"),
        [
            (RecurrenceKind.DAILY, {}, DailyCadence),
            (RecurrenceKind.WEEKLY, {"weekdays": (0,)}, WeeklyCadence),
            (RecurrenceKind.MONTHLY, {"day_of_month": 3}, MonthlyCadence),
            (RecurrenceKind.YEARLY, {"month": 6, "day": 3}, YearlyCadence),
            (RecurrenceKind.CUSTOM, {"unit": RecurrenceUnit.DAY}, CustomCadence),
        ],
    )
    def test_cadence_for_dispatches_on_kind(self, kind, extra, expected):
        cadence = cadence_for(date(2024, 6, 3), NormalizedRule(kind=kind, **extra))

        assert isinstance(cadence, expected)

    def test_custom_without_unit_is_invalid(self):
        with pytest.raises(InvalidRuleError):
            cadence_for(date(2024, 6, 3), NormalizedRule(kind=RecurrenceKind.CUSTOM))


@pytest.mark.unit
@pytest.mark.critical_path
class TestCadenceLandings:
    """Tests for landing days produced by each cadence."""

    def test_daily_interval(self):
        cadence = DailyCadence(date(2024, 6, 1), NormalizedRule(kind=RecurrenceKind.DAILY, interval=3))

        assert [cadence.landings(k)[0] for k in range(3)] == [
            date(2024, 6, 1),
            date(2024, 6, 4),
            date(2024, 6, 7),
        ]

    def test_weekly_seed_week_skips_days_before_seed(self):
        """Landings earlier in the seed's own week than the seed are not emitted."""
        rule = NormalizedRule(kind=RecurrenceKind.WEEKLY, weekdays=(0, 2, 4))
        cadence = WeeklyCadence(date(2024, 6, 5), rule)

        assert cadence.landings(0) == [date(2024, 6, 5), date(2024, 6, 7)]
        assert cadence.landings(1) == [date(2024, 6, 10), date(2024, 6, 12), date(2024, 6, 14)]

    def test_weekly_respects_week_start(self):
        """With Sunday weeks a Sunday landing precedes Monday; with Monday weeks it follows Saturday."""
        rule = NormalizedRule(kind=RecurrenceKind.WEEKLY, weekdays=(0, 6))
        sunday_weeks = WeeklyCadence(date(2024, 6, 2), rule, WEEKDAYS["sunday"])
        monday_weeks = WeeklyCadence(date(2024, 6, 2), rule, WEEKDAYS["monday"])

        assert sunday_weeks.landings(0) == [date(2024, 6, 2), date(2024, 6, 3)]
        assert monday_weeks.landings(0) == [date(2024, 6, 2)]
        assert monday_weeks.landings(1) == [date(2024, 6, 3), date(2024, 6, 9)]

    def test_weekly_interval_skips_weeks(self):
        rule = NormalizedRule(kind=RecurrenceKind.WEEKLY, interval=2, weekdays=(0,))
        cadence = WeeklyCadence(date(2024, 6, 3), rule)

        assert cadence.landings(1) == [date(2024, 6, 17)]

    def test_monthly_clips_to_month_end(self):
        rule = NormalizedRule(kind=RecurrenceKind.MONTHLY, day_of_month=31)
        cadence = MonthlyCadence(date(2024, 1, 31), rule)

        assert [cadence.landings(k)[0] for k in range(4)] == [
            date(2024, 1, 31),
            date(2024, 2, 29),
            date(2024, 3, 31),
            date(2024, 4, 30),
        ]

    def test_monthly_anchor_before_seed_day_skips_first_month(self):
        rule = NormalizedRule(kind=RecurrenceKind.MONTHLY, day_of_month=5)
        cadence = MonthlyCadence(date(2024, 6, 20), rule)

        assert cadence.landings(0) == []
        assert cadence.landings(1) == [date(2024, 7, 5)]

    def test_yearly_leap_day(self):
        rule = NormalizedRule(kind=RecurrenceKind.YEARLY, month=2, day=29)
        cadence = YearlyCadence(date(2024, 2, 29), rule)

        assert [cadence.landings(k)[0] for k in range(5)] == [
            date(2024, 2, 29),
            date(2025, 2, 28),
            date(2026, 2, 28),
            date(2027, 2, 28),
            date(2028, 2, 29),
        ]

    def test_custom_months_do_not_drift(self):
        """Steps are measured from the seed, so a short month does not pull later steps earlier."""
        rule = NormalizedRule(kind=RecurrenceKind.CUSTOM, unit=RecurrenceUnit.MONTH)
        cadence = CustomCadence(date(2024, 1, 31), rule)

        assert [cadence.step_start(k) for k in range(3)] == [
            date(2024, 1, 31),
            date(2024, 2, 29),
            date(2024, 3, 31),
        ]

    def test_custom_weeks(self):
        rule = NormalizedRule(kind=RecurrenceKind.CUSTOM, interval=2, unit=RecurrenceUnit.WEEK)
        cadence = CustomCadence(date(2024, 6, 3), rule)

        assert cadence.step_start(2) == date(2024, 7, 1)


@pytest.mark.unit
@pytest.mark.critical_path
class TestCadenceFastForward:
    """Arithmetic step lookup must agree with walking every step from the seed."""

    @pytest.fixture(
        params=[
            (DailyCadence, date(2023, 11, 7), {"kind": RecurrenceKind.DAILY, "interval": 5}),
            (
                WeeklyCadence,
                date(2023, 11, 8),
                {"kind": RecurrenceKind.WEEKLY, "interval": 3, "weekdays": (0, 2, 5)},
            ),
            (
                MonthlyCadence,
                date(2023, 8, 31),
                {"kind": RecurrenceKind.MONTHLY, "interval": 2, "day_of_month": 31},
            ),
            (
                YearlyCadence,
                date(2020, 2, 29),
                {"kind": RecurrenceKind.YEARLY, "month": 2, "day": 29},
            ),
            (
                CustomCadence,
                date(2023, 10, 31),
                {"kind": RecurrenceKind.CUSTOM, "interval": 1, "unit": RecurrenceUnit.MONTH},
            ),
        ],
        ids=["daily", "weekly", "monthly", "yearly", "custom"],
    )
    def cadence(self, request):
        cadence_cls, seed, fields = request.param
        return cadence_cls(seed, NormalizedRule(**fields))

    def test_landings_before_matches_walk(self, cadence):
        walked = _brute_force_landings(cadence, date(2026, 12, 31))

        for probe in (date(2024, 1, 1), date(2024, 2, 29), date(2025, 3, 1), date(2026, 7, 15)):
            expected = sum(1 for day in walked if day < probe)
            assert cadence.landings_before(probe) == expected, probe

    def test_is_landing_matches_walk(self, cadence):
        walked = set(_brute_force_landings(cadence, date(2024, 12, 31)))

        for day in (date(2024, 2, 28), date(2024, 2, 29), date(2024, 3, 4), date(2024, 10, 31)):
            assert cadence.is_landing(day) == (day in walked), day

    def test_nothing_lands_before_seed(self, cadence):
        assert cadence.landings_before(cadence.seed) == 0
        assert not cadence.is_landing(date(2000, 1, 1))
