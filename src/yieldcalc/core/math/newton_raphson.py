"""
Newton-Raphson Solver — XIRR, SIP periodic yield, periodic IRR

Общий итерационный движок поиска корня и три целевые функции:

1. XIRR по графику (CF_i, d_i):
    npv(r) = Σ CF_i / (1+r)^(d_i/365)
    npv'(r) = Σ -(d_i/365) · CF_i · (1+r)^(-d_i/365 - 1)
   Событие с d_i = 0 даёт CF_i в npv и 0 в производную.

2. SIP periodic yield (ставка за период p = r / periods_per_year):
    FV(r) = P0·(1+p)^n + A·((1+p)^n - 1)/p       (p != 0)
    FV(r) = P0 + A·n                              (p == 0)
    dFV/dr = [P0·n·(1+p)^(n-1) + A·(n·(1+p)^(n-1)/p - ((1+p)^n - 1)/p²)] / periods_per_year
   При p == 0 используется предел:
    dFV/dr = [P0·n + A·n·(n-1)/2] / periods_per_year

3. Periodic IRR по равноотстоящим периодам:
    npv(r) = Σ CF_t / (1+r)^t

УПРАВЛЕНИЕ ИТЕРАЦИЯМИ (SolverConfig):
- начальное приближение 0.10, не более 1000 итераций
- сходимость: |f(r)| < 1e-8
- производная ровно 0 → стоп, текущее r, converged=False
- выход r из допустимой полосы (-1, 10) → стоп, последнее r в полосе,
  converged=False
- переполнение при вычислении f(r) → стоп, текущее r, converged=False

Солвер никогда не выбрасывает исключение из-за несходимости:
вызывающий код проверяет converged.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Final, NamedTuple, Sequence

from yieldcalc.core.domain.cash_flow import CashFlowSchedule
from yieldcalc.core.domain.frequency import DAYS_PER_YEAR
from yieldcalc.core.domain.result import SolverMethod, SolverResult
from yieldcalc.core.math.numerical_safeguards import is_valid_float

logger = logging.getLogger(__name__)

# =============================================================================
# ПАРАМЕТРЫ СОЛВЕРА
# =============================================================================

# Начальное приближение годовой ставки (10%)
XIRR_INITIAL_GUESS: Final[float] = 0.10

# Абсолютная точность по значению целевой функции
SOLVER_TOLERANCE: Final[float] = 1e-8

# Максимальное число итераций
SOLVER_MAX_ITERATIONS: Final[int] = 1000

# Допустимая полоса ставки (открытый интервал)
RATE_LOWER_BOUND: Final[float] = -1.0
RATE_UPPER_BOUND: Final[float] = 10.0


@dataclass(frozen=True)
class SolverConfig:
    """Конфигурация Newton-Raphson солвера."""

    initial_guess: float = XIRR_INITIAL_GUESS
    tolerance: float = SOLVER_TOLERANCE
    max_iterations: int = SOLVER_MAX_ITERATIONS
    lower_bound: float = RATE_LOWER_BOUND
    upper_bound: float = RATE_UPPER_BOUND

    def in_band(self, rate: float) -> bool:
        return self.lower_bound < rate < self.upper_bound


DEFAULT_SOLVER_CONFIG: Final[SolverConfig] = SolverConfig()


# =============================================================================
# ОБЩИЙ ДВИЖОК
# =============================================================================


class StopReason(str, Enum):
    """Причина остановки итераций"""

    CONVERGED = "converged"
    ZERO_DERIVATIVE = "zero_derivative"
    OUT_OF_BAND = "out_of_band"
    OVERFLOW = "overflow"
    MAX_ITERATIONS = "max_iterations"


class NewtonResult(NamedTuple):
    """Сырой результат Newton-Raphson."""

    rate: float
    converged: bool
    iterations: int  # Число применённых шагов r ← r - f/f'
    stop_reason: StopReason
    residual: float  # Последнее вычисленное f(r)


# Целевая функция: r → (f(r), f'(r))
Objective = Callable[[float], tuple[float, float]]


def newton_raphson(
    objective: Objective,
    config: SolverConfig = DEFAULT_SOLVER_CONFIG,
) -> NewtonResult:
    """
    Поиск корня f(r) = 0 методом Newton-Raphson.

    Args:
        objective: Функция, возвращающая (f(r), f'(r))
        config: Параметры итераций

    Returns:
        NewtonResult; rate всегда лежит в допустимой полосе,
        если в ней лежит initial_guess
    """
    rate = config.initial_guess
    residual = float("nan")

    for iteration in range(config.max_iterations):
        try:
            residual, slope = objective(rate)
        except (OverflowError, ZeroDivisionError):
            return _stop(rate, iteration, StopReason.OVERFLOW, residual)

        if not (is_valid_float(residual) and is_valid_float(slope)):
            return _stop(rate, iteration, StopReason.OVERFLOW, residual)

        if abs(residual) < config.tolerance:
            return _stop(rate, iteration, StopReason.CONVERGED, residual)

        if slope == 0.0:
            return _stop(rate, iteration, StopReason.ZERO_DERIVATIVE, residual)

        next_rate = rate - residual / slope

        if not (is_valid_float(next_rate) and config.in_band(next_rate)):
            return _stop(rate, iteration, StopReason.OUT_OF_BAND, residual)

        rate = next_rate

    return _stop(rate, config.max_iterations, StopReason.MAX_ITERATIONS, residual)


def _stop(rate: float, iterations: int, reason: StopReason, residual: float) -> NewtonResult:
    logger.debug(
        "newton_raphson stopped: reason=%s rate=%.10f iterations=%d residual=%.3e",
        reason.value, rate, iterations, residual,
    )
    return NewtonResult(
        rate=rate,
        converged=reason is StopReason.CONVERGED,
        iterations=iterations,
        stop_reason=reason,
        residual=residual,
    )


def _to_solver_result(raw: NewtonResult, method: SolverMethod) -> SolverResult:
    return SolverResult(
        rate=raw.rate,
        converged=raw.converged,
        iterations=raw.iterations,
        method=method,
    )


# =============================================================================
# XIRR
# =============================================================================


def xnpv(rate: float, amounts: Sequence[float], day_offsets: Sequence[int]) -> float:
    """
    NPV графика при годовой ставке rate (actual/365).

    Examples:
        >>> round(xnpv(0.2, [-10000.0, 12000.0], [0, 365]), 6)
        0.0
    """
    total = 0.0
    for amount, days in zip(amounts, day_offsets):
        if days == 0:
            total += amount
        else:
            total += amount / (1.0 + rate) ** (days / DAYS_PER_YEAR)
    return total


def xnpv_derivative(rate: float, amounts: Sequence[float], day_offsets: Sequence[int]) -> float:
    """Аналитическая производная xnpv по rate."""
    total = 0.0
    for amount, days in zip(amounts, day_offsets):
        if days == 0:
            continue
        years = days / DAYS_PER_YEAR
        total += -years * amount * (1.0 + rate) ** (-years - 1.0)
    return total


def solve_xirr(
    schedule: CashFlowSchedule,
    config: SolverConfig = DEFAULT_SOLVER_CONFIG,
) -> SolverResult:
    """
    XIRR по полному графику (все события, без объединения дней).

    Args:
        schedule: График денежных потоков
        config: Параметры солвера

    Returns:
        SolverResult с method=XIRR
    """
    amounts = schedule.amounts
    day_offsets = schedule.day_offsets

    def objective(rate: float) -> tuple[float, float]:
        return (
            xnpv(rate, amounts, day_offsets),
            xnpv_derivative(rate, amounts, day_offsets),
        )

    return _to_solver_result(newton_raphson(objective, config), SolverMethod.XIRR)


# =============================================================================
# SIP PERIODIC YIELD
# =============================================================================


def sip_future_value(
    rate: float,
    initial_amount: float,
    periodic_amount: float,
    total_periods: int,
    periods_per_year: int,
) -> float:
    """
    Будущая стоимость плана при годовой ставке rate.

    Examples:
        >>> sip_future_value(0.0, 10000.0, 1000.0, 12, 12)
        22000.0
    """
    p = rate / periods_per_year
    if p == 0.0:
        return initial_amount + periodic_amount * total_periods

    growth = (1.0 + p) ** total_periods
    return initial_amount * growth + periodic_amount * (growth - 1.0) / p


def sip_future_value_derivative(
    rate: float,
    initial_amount: float,
    periodic_amount: float,
    total_periods: int,
    periods_per_year: int,
) -> float:
    """Производная sip_future_value по годовой ставке rate."""
    n = total_periods
    p = rate / periods_per_year

    if p == 0.0:
        d_dp = initial_amount * n + periodic_amount * n * (n - 1) / 2.0
        return d_dp / periods_per_year

    growth = (1.0 + p) ** n
    growth_prev = (1.0 + p) ** (n - 1)

    principal_term = initial_amount * n * growth_prev
    annuity_term = periodic_amount * n * growth_prev / p
    correction_term = periodic_amount * (growth - 1.0) / (p * p)

    return (principal_term + annuity_term - correction_term) / periods_per_year


def solve_sip_periodic(
    initial_amount: float,
    periodic_amount: float,
    total_periods: int,
    periods_per_year: int,
    target_value: float,
    config: SolverConfig = DEFAULT_SOLVER_CONFIG,
) -> SolverResult:
    """
    Годовая ставка, при которой FV плана равна target_value.

    Args:
        initial_amount: Начальное вложение P0
        periodic_amount: Взнос за период A (уже пересчитан под частоту)
        total_periods: Число полных периодов n
        periods_per_year: Периодов в году
        target_value: Текущая стоимость V
        config: Параметры солвера

    Returns:
        SolverResult с method=SIP_PERIODIC
    """

    def objective(rate: float) -> tuple[float, float]:
        args = (initial_amount, periodic_amount, total_periods, periods_per_year)
        return (
            sip_future_value(rate, *args) - target_value,
            sip_future_value_derivative(rate, *args),
        )

    return _to_solver_result(newton_raphson(objective, config), SolverMethod.SIP_PERIODIC)


# =============================================================================
# PERIODIC IRR
# =============================================================================


def solve_periodic_irr(
    cash_flows: Sequence[float],
    config: SolverConfig = DEFAULT_SOLVER_CONFIG,
) -> SolverResult:
    """
    IRR по равноотстоящим периодам: Σ CF_t / (1+r)^t = 0.

    Возвращаемая ставка относится к одному периоду, не к году.

    Args:
        cash_flows: Потоки по периодам t = 0, 1, 2, ...
        config: Параметры солвера

    Returns:
        SolverResult с method=IRR
    """
    flows = list(cash_flows)

    def objective(rate: float) -> tuple[float, float]:
        value = 0.0
        slope = 0.0
        for t, amount in enumerate(flows):
            value += amount / (1.0 + rate) ** t
            slope += -t * amount / (1.0 + rate) ** (t + 1)
        return value, slope

    return _to_solver_result(newton_raphson(objective, config), SolverMethod.IRR)
