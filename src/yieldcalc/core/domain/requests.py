"""
Requests — Входные параметры расчёта

Immutable Pydantic модели, которые собирает внешний UI/сервис.
Все суммы неотрицательные по смыслу; знак применяется внутри ядра.
Нулевые и отрицательные значения не отклоняются: они дают вырожденный
(нулевой) результат.
"""

import datetime as dt
from typing import Optional

from pydantic import BaseModel, Field

from .frequency import Frequency, months_between


class TopUp(BaseModel):
    """
    Дополнительное вложение в режиме lump-sum.

    Вложения без суммы или с суммой <= 0 не попадают в график.
    """

    amount: Optional[float] = Field(None, allow_inf_nan=False, description="Сумма вложения")
    date: dt.date

    model_config = {"frozen": True}

    @property
    def is_effective(self) -> bool:
        return self.amount is not None and self.amount > 0


class LumpSumRequest(BaseModel):
    """Вложение одной суммой с возможными дополнительными вложениями."""

    initial_amount: float = Field(..., allow_inf_nan=False)
    start_date: dt.date
    top_ups: tuple[TopUp, ...] = Field(default=())
    final_amount: float = Field(..., allow_inf_nan=False)
    end_date: dt.date

    model_config = {"frozen": True}


class PeriodicPlanRequest(BaseModel):
    """
    План регулярных взносов по календарю.

    periodic_amount — месячный эквивалент взноса; пересчитывается под частоту.
    """

    initial_amount: float = Field(..., allow_inf_nan=False)
    periodic_amount: float = Field(..., allow_inf_nan=False)
    frequency: Frequency = Frequency.MONTH
    start_date: dt.date
    end_date: dt.date
    final_amount: float = Field(..., allow_inf_nan=False, description="Текущая рыночная стоимость")

    model_config = {"frozen": True}


class SipRequest(BaseModel):
    """
    План регулярных взносов по числу месяцев (без календаря).

    periodic_amount — месячный эквивалент взноса; пересчитывается под частоту.
    """

    initial_amount: float = Field(..., allow_inf_nan=False)
    periodic_amount: float = Field(..., allow_inf_nan=False)
    months: int
    frequency: Frequency = Frequency.MONTH
    final_amount: float = Field(..., allow_inf_nan=False)

    model_config = {"frozen": True}

    @classmethod
    def from_dates(
        cls,
        initial_amount: float,
        periodic_amount: float,
        start_date: dt.date,
        end_date: dt.date,
        frequency: Frequency,
        final_amount: float,
    ) -> "SipRequest":
        """Число месяцев берётся как полные календарные месяцы между датами."""
        return cls(
            initial_amount=initial_amount,
            periodic_amount=periodic_amount,
            months=months_between(start_date, end_date),
            frequency=frequency,
            final_amount=final_amount,
        )
