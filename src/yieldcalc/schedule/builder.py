"""ScheduleBuilder: построение графика денежных потоков

Два режима:
- lump-sum: начальное вложение, дополнительные вложения по датам,
  конечная сумма на дату окончания
- periodic plan: начальное вложение и регулярные взносы с шагом
  INTERVAL_DAYS[frequency], пока дата взноса <= end_date (граница включена)

day_offset = ceil((event_date - start_date) / 1 day).

Длительность <= 0 (end_date <= start_date) → InvalidScheduleError.
Вызывающий код трактует это как "нет результата", а не как сбой.

Дополнительное вложение вне периода [start_date, end_date] отбрасывается
с предупреждением в лог.
"""

import logging
import math
from datetime import date, datetime, timedelta
from typing import Iterable, Union

from yieldcalc.core.domain.cash_flow import CashFlowEvent, CashFlowSchedule
from yieldcalc.core.domain.frequency import Frequency, interval_days
from yieldcalc.core.domain.frequency import periodic_amount as normalize_periodic_amount
from yieldcalc.core.domain.requests import LumpSumRequest, PeriodicPlanRequest, TopUp
from yieldcalc.core.math.numerical_safeguards import validate_finite

logger = logging.getLogger(__name__)

DateLike = Union[date, datetime]

_SECONDS_PER_DAY = 86400


# =============================================================================
# EXCEPTIONS
# =============================================================================


class ScheduleError(Exception):
    """Базовая ошибка построения графика."""

    pass


class InvalidScheduleError(ScheduleError):
    """
    График не может быть построен.

    Причина: длительность не положительна (end_date <= start_date).
    """

    pass


# =============================================================================
# HELPERS
# =============================================================================


def day_offset(start: DateLike, when: DateLike) -> int:
    """
    Число целых дней от start до when с округлением вверх.

    Examples:
        >>> day_offset(date(2023, 1, 1), date(2024, 1, 1))
        365
        >>> day_offset(datetime(2023, 1, 1), datetime(2023, 1, 2, 6))
        2
    """
    delta = _as_datetime(when) - _as_datetime(start)
    return math.ceil(delta.total_seconds() / _SECONDS_PER_DAY)


def _as_datetime(value: DateLike) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime(value.year, value.month, value.day)


def _total_days(start_date: DateLike, end_date: DateLike) -> int:
    days = day_offset(start_date, end_date)
    if days <= 0:
        raise InvalidScheduleError(
            f"Invalid schedule: end_date {end_date} must be after start_date {start_date}"
        )
    return days


# =============================================================================
# SCHEDULE BUILDER
# =============================================================================


class ScheduleBuilder:
    """Построение CashFlowSchedule из описания вложений.

    Stateless: каждый вызов строит новый график.
    """

    def build(self, request: Union[LumpSumRequest, PeriodicPlanRequest]) -> CashFlowSchedule:
        """Построение графика по типу запроса."""
        if isinstance(request, LumpSumRequest):
            return self.lump_sum(
                initial_amount=request.initial_amount,
                start_date=request.start_date,
                top_ups=request.top_ups,
                final_amount=request.final_amount,
                end_date=request.end_date,
            )
        if isinstance(request, PeriodicPlanRequest):
            return self.periodic(
                initial_amount=request.initial_amount,
                periodic_amount=request.periodic_amount,
                frequency=request.frequency,
                start_date=request.start_date,
                end_date=request.end_date,
                final_amount=request.final_amount,
            )
        raise TypeError(f"Unsupported request type: {type(request).__name__}")

    def lump_sum(
        self,
        initial_amount: float,
        start_date: DateLike,
        top_ups: Iterable[TopUp],
        final_amount: float,
        end_date: DateLike,
    ) -> CashFlowSchedule:
        """График lump-sum.

        Порядок событий:
        1. (-initial_amount, 0)
        2. (-amount, offset) для каждого вложения с amount > 0
           и датой внутри [start_date, end_date],
           по возрастанию offset (равные offset сохраняют порядок ввода)
        3. (+final_amount, total_days)

        Raises:
            InvalidScheduleError: end_date <= start_date
        """
        validate_finite(initial_amount, "initial_amount")
        validate_finite(final_amount, "final_amount")
        total_days = _total_days(start_date, end_date)

        contributions = []
        for top_up in top_ups:
            if not top_up.is_effective:
                continue
            offset = day_offset(start_date, top_up.date)
            if not 0 <= offset <= total_days:
                logger.warning(
                    "top-up of %.2f on %s outside [%s, %s] skipped",
                    top_up.amount, top_up.date, start_date, end_date,
                )
                continue
            contributions.append(CashFlowEvent(amount=-top_up.amount, day_offset=offset))
        contributions.sort(key=lambda e: e.day_offset)

        events = [CashFlowEvent(amount=-initial_amount, day_offset=0)]
        events.extend(contributions)
        events.append(CashFlowEvent(amount=final_amount, day_offset=total_days))

        logger.debug("lump-sum schedule: %d events over %d days", len(events), total_days)
        return CashFlowSchedule(events=tuple(events))

    def periodic(
        self,
        initial_amount: float,
        periodic_amount: float,
        frequency: Frequency,
        start_date: DateLike,
        end_date: DateLike,
        final_amount: float,
    ) -> CashFlowSchedule:
        """График регулярных взносов.

        periodic_amount — месячный эквивалент; сумма взноса пересчитывается
        под частоту. Первый взнос на start_date + INTERVAL_DAYS[frequency].
        """
        validate_finite(initial_amount, "initial_amount")
        validate_finite(periodic_amount, "periodic_amount")
        validate_finite(final_amount, "final_amount")
        total_days = _total_days(start_date, end_date)

        step = timedelta(days=interval_days(frequency))
        contribution = normalize_periodic_amount(periodic_amount, frequency)

        start = _as_datetime(start_date)
        end = _as_datetime(end_date)

        events = [CashFlowEvent(amount=-initial_amount, day_offset=0)]
        current = start + step
        while current <= end:
            events.append(
                CashFlowEvent(amount=-contribution, day_offset=day_offset(start, current))
            )
            current += step
        events.append(CashFlowEvent(amount=final_amount, day_offset=total_days))

        logger.debug(
            "periodic schedule: %d contributions of %.4f (%s) over %d days",
            len(events) - 2, contribution, Frequency(frequency).value, total_days,
        )
        return CashFlowSchedule(events=tuple(events))


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

_BUILDER = ScheduleBuilder()


def build_lump_sum_schedule(
    initial_amount: float,
    start_date: DateLike,
    top_ups: Iterable[TopUp],
    final_amount: float,
    end_date: DateLike,
) -> CashFlowSchedule:
    """
    График lump-sum.

    Raises:
        InvalidScheduleError: Если end_date <= start_date
    """
    return _BUILDER.lump_sum(initial_amount, start_date, top_ups, final_amount, end_date)


def build_periodic_schedule(
    initial_amount: float,
    periodic_amount: float,
    frequency: Frequency,
    start_date: DateLike,
    end_date: DateLike,
    final_amount: float,
) -> CashFlowSchedule:
    """
    График регулярных взносов.

    Raises:
        InvalidScheduleError: Если end_date <= start_date
    """
    return _BUILDER.periodic(
        initial_amount, periodic_amount, frequency, start_date, end_date, final_amount
    )
