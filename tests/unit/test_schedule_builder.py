"""
Тесты для ScheduleBuilder — построение графика денежных потоков

Проверяемые инварианты:
1. Первое событие: (-initial_amount, 0), последнее: (+final_amount, total_days)
2. day_offset = ceil(дни от start_date)
3. Вложения без суммы, с суммой <= 0 или вне периода не попадают в график
4. end_date <= start_date → InvalidScheduleError
5. Регулярные взносы: шаг INTERVAL_DAYS, граница end_date включена
"""

import logging
from datetime import date, datetime

import pytest

from yieldcalc.core.domain.frequency import Frequency
from yieldcalc.core.domain.requests import LumpSumRequest, PeriodicPlanRequest, SipRequest, TopUp
from yieldcalc.schedule.builder import (
    InvalidScheduleError,
    ScheduleBuilder,
    ScheduleError,
    build_lump_sum_schedule,
    build_periodic_schedule,
    day_offset,
)

START = date(2023, 1, 1)
END = date(2024, 1, 1)


# =============================================================================
# ТЕСТЫ: day_offset
# =============================================================================


class TestDayOffset:
    """Целые дни с округлением вверх."""

    def test_calendar_dates(self):
        assert day_offset(START, date(2023, 6, 30)) == 180
        assert day_offset(START, END) == 365

    def test_partial_day_rounds_up(self):
        assert day_offset(datetime(2023, 1, 1), datetime(2023, 1, 2, 6)) == 2

    def test_mixed_date_and_datetime(self):
        assert day_offset(START, datetime(2023, 1, 11)) == 10

    def test_reversed_is_negative(self):
        assert day_offset(END, START) == -365


# =============================================================================
# ТЕСТЫ: Lump-sum
# =============================================================================


class TestLumpSumSchedule:
    """График вложения одной суммой."""

    def test_without_top_ups(self):
        schedule = build_lump_sum_schedule(10000.0, START, (), 12000.0, END)

        assert schedule.amounts == (-10000.0, 12000.0)
        assert schedule.day_offsets == (0, 365)

    def test_top_up_offset(self):
        top_ups = [TopUp(amount=2000.0, date=date(2023, 6, 30))]
        schedule = build_lump_sum_schedule(10000.0, START, top_ups, 13500.0, END)

        assert schedule.amounts == (-10000.0, -2000.0, 13500.0)
        assert schedule.day_offsets == (0, 180, 365)

    def test_non_positive_top_ups_skipped(self):
        top_ups = [
            TopUp(amount=0.0, date=date(2023, 3, 1)),
            TopUp(amount=None, date=date(2023, 4, 1)),
            TopUp(amount=-500.0, date=date(2023, 5, 1)),
        ]
        schedule = build_lump_sum_schedule(10000.0, START, top_ups, 12000.0, END)

        assert len(schedule.events) == 2
        assert not schedule.has_interior_flows()

    def test_top_ups_sorted_by_date(self):
        top_ups = [
            TopUp(amount=300.0, date=date(2023, 9, 1)),
            TopUp(amount=100.0, date=date(2023, 2, 1)),
            TopUp(amount=200.0, date=date(2023, 5, 1)),
        ]
        schedule = build_lump_sum_schedule(10000.0, START, top_ups, 12000.0, END)

        assert schedule.amounts[1:-1] == (-100.0, -200.0, -300.0)
        assert list(schedule.day_offsets) == sorted(schedule.day_offsets)

    def test_top_up_outside_period_skipped(self, caplog):
        """Вложение вне периода отбрасывается, остальной график сохраняется."""
        top_ups = [
            TopUp(amount=500.0, date=date(2024, 1, 2)),
            TopUp(amount=700.0, date=date(2022, 12, 31)),
            TopUp(amount=2000.0, date=date(2023, 6, 30)),
        ]
        with caplog.at_level(logging.WARNING, logger="yieldcalc.schedule.builder"):
            schedule = build_lump_sum_schedule(10000.0, START, top_ups, 13500.0, END)

        assert schedule.amounts == (-10000.0, -2000.0, 13500.0)
        assert schedule.day_offsets == (0, 180, 365)
        assert caplog.text.count("skipped") == 2

    def test_top_up_on_end_date_kept(self):
        top_ups = [TopUp(amount=500.0, date=END)]
        schedule = build_lump_sum_schedule(10000.0, START, top_ups, 12000.0, END)
        assert schedule.day_offsets == (0, 365, 365)

    @pytest.mark.parametrize("end", [START, date(2022, 12, 1)])
    def test_non_positive_duration(self, end):
        with pytest.raises(InvalidScheduleError, match="must be after"):
            build_lump_sum_schedule(10000.0, START, (), 12000.0, end)

    def test_invalid_schedule_is_schedule_error(self):
        assert issubclass(InvalidScheduleError, ScheduleError)

    def test_non_finite_amount(self):
        with pytest.raises(ValueError, match="initial_amount"):
            build_lump_sum_schedule(float("nan"), START, (), 12000.0, END)


# =============================================================================
# ТЕСТЫ: Periodic plan
# =============================================================================


class TestPeriodicSchedule:
    """График регулярных взносов по календарю."""

    def test_monthly(self):
        schedule = build_periodic_schedule(10000.0, 1000.0, Frequency.MONTH, START, END, 24000.0)

        interior = schedule.interior_events
        assert len(interior) == 12
        assert [e.day_offset for e in interior] == list(range(30, 361, 30))
        assert all(e.amount == -1000.0 for e in interior)
        assert schedule.events[-1].day_offset == 365

    def test_quarterly_amount_scaled(self):
        schedule = build_periodic_schedule(10000.0, 1000.0, Frequency.QUARTER, START, END, 24000.0)

        interior = schedule.interior_events
        assert [e.day_offset for e in interior] == [90, 180, 270, 360]
        assert all(e.amount == pytest.approx(-3000.0) for e in interior)

    def test_weekly_count(self):
        schedule = build_periodic_schedule(10000.0, 1000.0, Frequency.WEEK, START, END, 24000.0)

        interior = schedule.interior_events
        assert len(interior) == 52
        assert interior[-1].day_offset == 364
        assert interior[0].amount == pytest.approx(-1000.0 * 7 / 30)

    def test_yearly_contribution_on_end_date(self):
        schedule = build_periodic_schedule(10000.0, 1000.0, Frequency.YEAR, START, END, 24000.0)

        assert schedule.amounts == (-10000.0, -12000.0, 24000.0)
        assert schedule.day_offsets == (0, 365, 365)

    def test_end_date_inclusive(self):
        schedule = build_periodic_schedule(
            10000.0, 1000.0, Frequency.MONTH, START, date(2023, 1, 31), 11500.0
        )
        assert schedule.day_offsets == (0, 30, 30)

    def test_string_frequency(self):
        schedule = build_periodic_schedule(10000.0, 1000.0, "quarter", START, END, 24000.0)
        assert len(schedule.interior_events) == 4

    def test_non_positive_duration(self):
        with pytest.raises(InvalidScheduleError):
            build_periodic_schedule(10000.0, 1000.0, Frequency.MONTH, END, START, 24000.0)


# =============================================================================
# ТЕСТЫ: Dispatch по запросу
# =============================================================================


class TestBuildFromRequest:
    """ScheduleBuilder.build по типу запроса."""

    def test_lump_sum_request(self):
        request = LumpSumRequest(
            initial_amount=10000.0, start_date=START, final_amount=12000.0, end_date=END
        )
        schedule = ScheduleBuilder().build(request)
        assert schedule.day_offsets == (0, 365)

    def test_periodic_request(self):
        request = PeriodicPlanRequest(
            initial_amount=10000.0,
            periodic_amount=1000.0,
            start_date=START,
            end_date=END,
            final_amount=24000.0,
        )
        schedule = ScheduleBuilder().build(request)
        assert len(schedule.interior_events) == 12

    def test_unsupported_request(self):
        request = SipRequest(initial_amount=1.0, periodic_amount=1.0, months=12, final_amount=2.0)
        with pytest.raises(TypeError, match="SipRequest"):
            ScheduleBuilder().build(request)
