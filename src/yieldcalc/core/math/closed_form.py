"""
Closed-form Yield — CAGR и простая годовая доходность

Используется, когда ставку можно выразить явно, без итераций:
вложение одной суммой и один вывод (конечная оценка).

ФОРМУЛЫ:
    cagr = (final / initial) ^ (365 / days) - 1
    compound_annual_rate = (total / principal) ^ (1 / years) - 1
    simple_annual_rate = (total - principal) / principal / days * 365

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. initial <= 0 или days <= 0 → ставка 0 (вырожденный ввод, не ошибка)
2. Отрицательная конечная сумма → ставка 0 (степень от отрицательного
   основания не определена в вещественных числах)
3. Для конечного ввода NaN не возвращается; переполнение степени → +inf (насыщение),
   solve_closed_form помечает такой результат converged=False
4. При фиксированных initial и days ставка не убывает по final
   (строго возрастает, пока результат конечен)
"""

import math
from typing import Final

from yieldcalc.core.domain.cash_flow import CashFlowSchedule
from yieldcalc.core.domain.frequency import DAYS_PER_YEAR
from yieldcalc.core.domain.result import SolverMethod, SolverResult
from yieldcalc.core.math.numerical_safeguards import safe_divide

# Нулевая ставка для вырожденного ввода
DEGENERATE_RATE: Final[float] = 0.0


# =============================================================================
# CAGR
# =============================================================================


def compound_annual_rate(principal: float, total: float, years: float) -> float:
    """
    Сложная годовая ставка по длительности в годах.

    Args:
        principal: Начальная сумма
        total: Конечная сумма
        years: Длительность (годы)

    Returns:
        Годовая ставка (доля), 0 для вырожденного ввода,
        +inf при переполнении

    Examples:
        >>> round(compound_annual_rate(10000.0, 12100.0, 2.0), 12)
        0.1
        >>> compound_annual_rate(0.0, 12000.0, 1.0)
        0.0
    """
    if principal <= 0 or years <= 0 or total < 0:
        return DEGENERATE_RATE

    ratio = total / principal
    if ratio == 0:
        return -1.0

    # ratio^(1/years) - 1 в лог-пространстве
    exponent = math.log(ratio) / years
    try:
        return math.expm1(exponent)
    except OverflowError:
        return math.inf


def cagr(initial: float, final: float, days: float) -> float:
    """
    CAGR по длительности в днях: (final / initial) ^ (365 / days) - 1.

    Examples:
        >>> round(cagr(10000.0, 12000.0, 365), 12)
        0.2
        >>> cagr(10000.0, 12000.0, 0)
        0.0
    """
    if days <= 0:
        return DEGENERATE_RATE
    return compound_annual_rate(initial, final, days / DAYS_PER_YEAR)


def simple_annual_rate(principal: float, total: float, days: float) -> float:
    """
    Простая (без капитализации) годовая ставка.

    Examples:
        >>> round(simple_annual_rate(10000.0, 10500.0, 365), 12)
        0.05
        >>> simple_annual_rate(10000.0, 10500.0, 0)
        0.0
    """
    if principal <= 0 or days <= 0:
        return DEGENERATE_RATE

    daily_rate = safe_divide(total - principal, principal * days)
    return daily_rate * DAYS_PER_YEAR


# =============================================================================
# CLOSED-FORM YIELD
# =============================================================================


def solve_closed_form(schedule: CashFlowSchedule) -> SolverResult:
    """
    CAGR для графика вида "вложение → вывод".

    Берёт первое и последнее событие графика. Вырожденный ввод
    (initial <= 0, days <= 0) даёт rate=0, converged=True.
    Переполнение (rate=+inf) даёт converged=False.

    Args:
        schedule: График без промежуточных потоков

    Returns:
        SolverResult с method=CAGR
    """
    rate = cagr(
        initial=schedule.initial_amount,
        final=schedule.final_amount,
        days=schedule.total_days,
    )
    return SolverResult(
        rate=rate,
        converged=math.isfinite(rate),
        iterations=0,
        method=SolverMethod.CAGR,
    )
