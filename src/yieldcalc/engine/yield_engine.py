"""YieldEngine: выбор метода и расчёт годовой доходности

Маршрутизация:
- график без промежуточных потоков → closed-form CAGR
- график без смены знака → ставка 0, converged=False (корня нет)
- иначе → XIRR (Newton-Raphson) по полному графику
- SIP по числу месяцев → periodic-compounding солвер (всегда)

Агрегаты (total_invested, total_return) считаются простой арифметикой
и не зависят от того, какой солвер отработал.

Ни одно условие не является фатальным: невалидный график превращается
в нулевой отчёт, несходимость кодируется флагом converged.
"""

import logging
import math
from typing import Iterable, Optional

from yieldcalc.core.domain.cash_flow import CashFlowSchedule
from yieldcalc.core.domain.frequency import Frequency, periods_per_year
from yieldcalc.core.domain.frequency import periodic_amount as normalize_periodic_amount
from yieldcalc.core.domain.requests import (
    LumpSumRequest,
    PeriodicPlanRequest,
    SipRequest,
    TopUp,
)
from yieldcalc.core.domain.result import SolverMethod, SolverResult, YieldReport
from yieldcalc.core.math.closed_form import solve_closed_form
from yieldcalc.core.math.newton_raphson import (
    DEFAULT_SOLVER_CONFIG,
    SolverConfig,
    solve_sip_periodic,
    solve_xirr,
)
from yieldcalc.core.math.numerical_safeguards import validate_finite
from yieldcalc.schedule.builder import InvalidScheduleError, ScheduleBuilder

logger = logging.getLogger(__name__)


class YieldEngine:
    """Оркестратор расчёта доходности.

    Stateless: не хранит результатов между вызовами, безопасен для
    параллельного использования.
    """

    def __init__(
        self,
        config: SolverConfig = DEFAULT_SOLVER_CONFIG,
        builder: Optional[ScheduleBuilder] = None,
    ):
        self.config = config
        self.builder = builder or ScheduleBuilder()

    # -------------------------------------------------------------------------
    # Solvers
    # -------------------------------------------------------------------------

    def compute_yield(self, schedule: CashFlowSchedule) -> SolverResult:
        """Годовая ставка по графику.

        Args:
            schedule: График денежных потоков

        Returns:
            SolverResult (method=CAGR или XIRR)
        """
        if not schedule.has_interior_flows():
            result = solve_closed_form(schedule)
            if not result.converged:
                logger.warning("CAGR overflowed over %d days", schedule.total_days)
            return result

        if not schedule.has_sign_change():
            logger.warning(
                "schedule has no sign change (%d events), no rate exists",
                len(schedule.events),
            )
            return SolverResult.degenerate(SolverMethod.XIRR, converged=False)

        result = solve_xirr(schedule, self.config)
        if not result.converged:
            logger.warning(
                "XIRR did not converge after %d iterations, best estimate %.8f",
                result.iterations, result.rate,
            )
        return result

    def compute_sip_yield(
        self,
        initial_amount: float,
        periodic_amount: float,
        months: int,
        frequency: Frequency,
        final_amount: float,
    ) -> SolverResult:
        """Годовая ставка плана регулярных взносов по числу месяцев.

        periodic_amount — месячный эквивалент взноса.
        months <= 0 → rate=0, converged=True.
        """
        validate_finite(initial_amount, "initial_amount")
        validate_finite(periodic_amount, "periodic_amount")
        validate_finite(final_amount, "final_amount")

        if months <= 0:
            return SolverResult.degenerate(SolverMethod.SIP_PERIODIC)

        ppy = periods_per_year(frequency)
        result = solve_sip_periodic(
            initial_amount=initial_amount,
            periodic_amount=normalize_periodic_amount(periodic_amount, frequency),
            total_periods=total_periods(months, frequency),
            periods_per_year=ppy,
            target_value=final_amount,
            config=self.config,
        )
        if not result.converged:
            logger.warning(
                "SIP yield did not converge after %d iterations, best estimate %.8f",
                result.iterations, result.rate,
            )
        return result

    # -------------------------------------------------------------------------
    # Reports
    # -------------------------------------------------------------------------

    def schedule_report(self, schedule: CashFlowSchedule) -> YieldReport:
        """Ставка и агрегаты по готовому графику."""
        result = self.compute_yield(schedule)
        total_invested = schedule.total_invested
        return YieldReport(
            result=result,
            total_invested=total_invested,
            total_return=schedule.final_amount - total_invested,
            final_amount=schedule.final_amount,
            days=schedule.total_days,
        )

    def lump_sum_report(self, request: LumpSumRequest) -> YieldReport:
        """Отчёт для вложения одной суммой (с дополнительными вложениями)."""
        return self._report_from_request(request, fallback_method=SolverMethod.CAGR)

    def periodic_plan_report(self, request: PeriodicPlanRequest) -> YieldReport:
        """Отчёт для плана взносов по календарю (XIRR по графику)."""
        return self._report_from_request(request, fallback_method=SolverMethod.XIRR)

    def sip_report(self, request: SipRequest) -> YieldReport:
        """Отчёт для плана взносов по числу месяцев."""
        result = self.compute_sip_yield(
            initial_amount=request.initial_amount,
            periodic_amount=request.periodic_amount,
            months=request.months,
            frequency=request.frequency,
            final_amount=request.final_amount,
        )

        periods = total_periods(request.months, request.frequency) if request.months > 0 else 0
        total_invested = (
            request.initial_amount
            + normalize_periodic_amount(request.periodic_amount, request.frequency) * periods
        )
        return YieldReport(
            result=result,
            total_invested=total_invested,
            total_return=request.final_amount - total_invested,
            final_amount=request.final_amount,
            days=0,
        )

    def _report_from_request(self, request, fallback_method: SolverMethod) -> YieldReport:
        try:
            schedule = self.builder.build(request)
        except InvalidScheduleError as e:
            logger.warning("no result for invalid schedule: %s", e)
            return YieldReport.zero(fallback_method)
        return self.schedule_report(schedule)


# =============================================================================
# HELPERS
# =============================================================================


def total_periods(months: int, frequency: Frequency) -> int:
    """
    Число полных периодов: floor((months / 12) * periods_per_year).

    Examples:
        >>> total_periods(12, Frequency.MONTH)
        12
        >>> total_periods(18, Frequency.QUARTER)
        6
        >>> total_periods(6, Frequency.YEAR)
        0
    """
    return math.floor((months / 12) * periods_per_year(frequency))


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

_ENGINE = YieldEngine()


def solve_yield(schedule: CashFlowSchedule) -> SolverResult:
    """Годовая ставка по графику (CAGR или XIRR)."""
    return _ENGINE.compute_yield(schedule)


def solve_sip_yield(
    initial_amount: float,
    periodic_amount: float,
    months: int,
    frequency: Frequency,
    final_amount: float,
) -> SolverResult:
    """Годовая ставка плана регулярных взносов по числу месяцев."""
    return _ENGINE.compute_sip_yield(
        initial_amount, periodic_amount, months, frequency, final_amount
    )


def lump_sum_report(
    initial_amount: float,
    start_date,
    top_ups: Iterable[TopUp],
    final_amount: float,
    end_date,
) -> YieldReport:
    """Отчёт lump-sum; невалидный период даёт нулевой отчёт."""
    return _ENGINE.lump_sum_report(
        LumpSumRequest(
            initial_amount=initial_amount,
            start_date=start_date,
            top_ups=tuple(top_ups),
            final_amount=final_amount,
            end_date=end_date,
        )
    )
