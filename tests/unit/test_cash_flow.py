"""
Тесты для CashFlowEvent / CashFlowSchedule

Покрывает:
- Инварианты порядка (первое событие на дне 0, неубывающие day_offset)
- Immutability (frozen=True)
- Агрегаты: initial/final, взносы, total_invested
- Форму графика: промежуточные потоки, смена знака
"""

import pytest
from pydantic import ValidationError

from yieldcalc.core.domain.cash_flow import CashFlowEvent, CashFlowSchedule


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def top_up_schedule():
    """Вложение, одно дополнительное вложение, конечная сумма."""
    return CashFlowSchedule.from_pairs([(-10000.0, 0), (-2000.0, 180), (13500.0, 365)])


# =============================================================================
# ТЕСТЫ: Валидация
# =============================================================================


class TestScheduleValidation:
    """Инварианты CashFlowSchedule."""

    def test_first_event_must_start_at_day_zero(self):
        with pytest.raises(ValidationError, match="day_offset 0"):
            CashFlowSchedule.from_pairs([(-100.0, 5), (120.0, 365)])

    def test_offsets_must_not_decrease(self):
        with pytest.raises(ValidationError, match="non-decreasing"):
            CashFlowSchedule.from_pairs([(-100.0, 0), (-50.0, 200), (120.0, 100)])

    def test_empty_schedule_rejected(self):
        with pytest.raises(ValidationError):
            CashFlowSchedule(events=())

    def test_negative_offset_rejected(self):
        with pytest.raises(ValidationError):
            CashFlowEvent(amount=-1.0, day_offset=-1)

    def test_nan_amount_rejected(self):
        with pytest.raises(ValidationError):
            CashFlowEvent(amount=float("nan"), day_offset=0)

    def test_shared_offsets_not_merged(self):
        """События одного дня остаются отдельными."""
        schedule = CashFlowSchedule.from_pairs(
            [(-100.0, 0), (-10.0, 30), (-20.0, 30), (150.0, 30)]
        )
        assert len(schedule.events) == 4
        assert schedule.day_offsets == [0, 30, 30, 30]

    def test_frozen(self, top_up_schedule):
        with pytest.raises(ValidationError):
            top_up_schedule.events = ()
        with pytest.raises(ValidationError):
            top_up_schedule.events[0].amount = 0.0


# =============================================================================
# ТЕСТЫ: Агрегаты
# =============================================================================


class TestScheduleAggregates:
    """initial/final, взносы и total_invested."""

    def test_endpoints(self, top_up_schedule):
        assert top_up_schedule.initial_amount == 10000.0
        assert top_up_schedule.final_amount == 13500.0
        assert top_up_schedule.total_days == 365

    def test_contributions(self, top_up_schedule):
        assert top_up_schedule.contributions == [2000.0]
        assert top_up_schedule.total_invested == 12000.0

    def test_interior_withdrawal_not_counted_as_contribution(self):
        schedule = CashFlowSchedule.from_pairs([(-1000.0, 0), (200.0, 100), (900.0, 365)])
        assert schedule.contributions == []
        assert schedule.total_invested == 1000.0


# =============================================================================
# ТЕСТЫ: Форма графика
# =============================================================================


class TestScheduleShape:
    """has_interior_flows / has_sign_change."""

    def test_two_event_schedule_has_no_interior_flows(self):
        schedule = CashFlowSchedule.from_pairs([(-10000.0, 0), (12000.0, 365)])
        assert not schedule.has_interior_flows()

    def test_zero_interior_amounts_ignored(self):
        schedule = CashFlowSchedule.from_pairs([(-10000.0, 0), (0.0, 100), (12000.0, 365)])
        assert not schedule.has_interior_flows()

    def test_top_up_is_interior_flow(self, top_up_schedule):
        assert top_up_schedule.has_interior_flows()

    def test_sign_change(self, top_up_schedule):
        assert top_up_schedule.has_sign_change()
        all_negative = CashFlowSchedule.from_pairs([(-100.0, 0), (-50.0, 180), (-25.0, 365)])
        assert not all_negative.has_sign_change()
