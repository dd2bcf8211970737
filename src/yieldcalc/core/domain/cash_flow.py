"""
CashFlowEvent / CashFlowSchedule — График денежных потоков

Конвенция знаков:
- amount < 0 — деньги уходят от инвестора (взнос)
- amount > 0 — деньги возвращаются инвестору (вывод или конечная оценка)

day_offset — целое число дней от первого события.

ИНВАРИАНТЫ:
1. Первое событие имеет day_offset == 0
2. day_offset не убывает
3. События с одинаковым day_offset НЕ объединяются
"""

from pydantic import BaseModel, Field, model_validator


class CashFlowEvent(BaseModel):
    """Одно событие графика."""

    amount: float = Field(..., allow_inf_nan=False, description="Сумма со знаком")
    day_offset: int = Field(..., ge=0, description="Дней от первого события")

    model_config = {"frozen": True}


class CashFlowSchedule(BaseModel):
    """
    Упорядоченный график денежных потоков.

    Immutable модель (frozen=True), создаётся заново на каждый расчёт.
    """

    events: tuple[CashFlowEvent, ...] = Field(..., min_length=1)

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_ordering(self) -> "CashFlowSchedule":
        if self.events[0].day_offset != 0:
            raise ValueError(
                f"first event must have day_offset 0, got {self.events[0].day_offset}"
            )

        for prev, curr in zip(self.events, self.events[1:]):
            if curr.day_offset < prev.day_offset:
                raise ValueError(
                    f"day_offset must be non-decreasing: {prev.day_offset} -> {curr.day_offset}"
                )
        return self

    @classmethod
    def from_pairs(cls, pairs) -> "CashFlowSchedule":
        """Построение из пар (amount, day_offset)."""
        return cls(
            events=tuple(
                CashFlowEvent(amount=amount, day_offset=day_offset)
                for amount, day_offset in pairs
            )
        )

    # Доступ к потокам

    @property
    def amounts(self) -> list[float]:
        return [e.amount for e in self.events]

    @property
    def day_offsets(self) -> list[int]:
        return [e.day_offset for e in self.events]

    @property
    def total_days(self) -> int:
        return self.events[-1].day_offset

    @property
    def initial_amount(self) -> float:
        """Начальное вложение (положительное число)."""
        return -self.events[0].amount

    @property
    def final_amount(self) -> float:
        return self.events[-1].amount

    @property
    def interior_events(self) -> tuple[CashFlowEvent, ...]:
        """События между первым и последним."""
        return self.events[1:-1]

    @property
    def contributions(self) -> list[float]:
        """Промежуточные взносы как положительные суммы."""
        return [-e.amount for e in self.interior_events if e.amount < 0]

    @property
    def total_invested(self) -> float:
        return self.initial_amount + sum(self.contributions)

    # Форма графика

    def has_interior_flows(self) -> bool:
        """
        Есть ненулевые потоки между первым и последним событием.

        Без них график сводится к вложению и выводу, и применима closed-form CAGR.
        """
        return any(e.amount != 0.0 for e in self.interior_events)

    def has_sign_change(self) -> bool:
        """Есть хотя бы один отрицательный и один положительный поток."""
        return any(a < 0 for a in self.amounts) and any(a > 0 for a in self.amounts)
