"""
SolverResult / YieldReport — Результаты расчёта доходности

Immutable Pydantic модели. Ставка хранится как доля (0.08 = 8%).
Несходимость не является ошибкой: она кодируется флагом converged=False
вместе с лучшей доступной оценкой ставки.
"""

from enum import Enum

from pydantic import BaseModel, Field


# =============================================================================
# ENUMS
# =============================================================================


class SolverMethod(str, Enum):
    """Метод, которым получена ставка"""

    CAGR = "cagr"
    XIRR = "xirr"
    SIP_PERIODIC = "sip-periodic"
    IRR = "irr"


# =============================================================================
# SOLVER RESULT
# =============================================================================


class SolverResult(BaseModel):
    """
    Результат одного решения.

    rate — годовая ставка (доля), кроме method=IRR, где это ставка за период.
    """

    rate: float = Field(..., description="Ставка (доля, например 0.08 = 8%)")
    converged: bool = Field(..., description="Достигнута ли точность солвера")
    iterations: int = Field(..., ge=0, description="Число применённых шагов Newton")
    method: SolverMethod = Field(..., description="Метод расчёта")

    model_config = {"frozen": True}

    @classmethod
    def degenerate(cls, method: SolverMethod, converged: bool = True) -> "SolverResult":
        """Нулевая ставка для вырожденного ввода."""
        return cls(rate=0.0, converged=converged, iterations=0, method=method)

    @property
    def rate_pct(self) -> float:
        """Ставка в процентах."""
        return self.rate * 100.0


# =============================================================================
# YIELD REPORT
# =============================================================================


class YieldReport(BaseModel):
    """
    Ставка плюс агрегаты по вложениям.

    total_invested = начальная сумма + все взносы
    total_return = final_amount - total_invested
    """

    result: SolverResult
    total_invested: float = Field(..., description="Сумма всех вложений")
    total_return: float = Field(..., description="Чистый результат (может быть отрицательным)")
    final_amount: float = Field(..., description="Конечная стоимость / сумма вывода")
    days: int = Field(..., ge=0, description="Длительность в днях (0 для SIP по периодам)")

    model_config = {"frozen": True}

    @classmethod
    def zero(cls, method: SolverMethod) -> "YieldReport":
        """Нейтральный отчёт для невалидного графика."""
        return cls(
            result=SolverResult.degenerate(method),
            total_invested=0.0,
            total_return=0.0,
            final_amount=0.0,
            days=0,
        )
