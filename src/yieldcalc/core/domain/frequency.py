"""
Frequency — Частота периодических взносов

Каждая частота связана с тремя НЕЗАВИСИМЫМИ конвенциями, которые
намеренно не согласованы между собой:

1. PERIODS_PER_YEAR — делитель годовой ставки для SIP-солвера
   {day: 365, week: 52, biweek: 26, month: 12, quarter: 4, year: 1}
2. INTERVAL_DAYS — шаг календаря при построении графика взносов
   {day: 1, week: 7, biweek: 14, month: 30, quarter: 90, year: 365}
3. periodic_amount() — пересчёт "месячного эквивалента" в сумму взноса
   day = m/30, week = m/(30/7), biweek = m/(30/14), month = m,
   quarter = m*3, year = m*12

Объединение таблиц изменило бы численные результаты, поэтому каждая
хранится отдельно.
"""

from datetime import date
from enum import Enum
from types import MappingProxyType
from typing import Final, Mapping


# =============================================================================
# ENUMS
# =============================================================================


class Frequency(str, Enum):
    """Частота взносов"""

    DAY = "day"
    WEEK = "week"
    BIWEEK = "biweek"
    MONTH = "month"
    QUARTER = "quarter"
    YEAR = "year"


# =============================================================================
# ТАБЛИЦЫ КОНВЕНЦИЙ
# =============================================================================

# Количество периодов в году (SIP periodic-rate solver)
PERIODS_PER_YEAR: Final[Mapping[Frequency, int]] = MappingProxyType({
    Frequency.DAY: 365,
    Frequency.WEEK: 52,
    Frequency.BIWEEK: 26,
    Frequency.MONTH: 12,
    Frequency.QUARTER: 4,
    Frequency.YEAR: 1,
})

# Количество дней в периоде (построение графика взносов)
INTERVAL_DAYS: Final[Mapping[Frequency, int]] = MappingProxyType({
    Frequency.DAY: 1,
    Frequency.WEEK: 7,
    Frequency.BIWEEK: 14,
    Frequency.MONTH: 30,
    Frequency.QUARTER: 90,
    Frequency.YEAR: 365,
})

DAYS_PER_MONTH: Final[int] = 30
DAYS_PER_YEAR: Final[int] = 365
MONTHS_PER_YEAR: Final[int] = 12


# =============================================================================
# ПЕРЕСЧЁТ СУММ
# =============================================================================


def periods_per_year(frequency: Frequency) -> int:
    """Количество периодов в году для частоты."""
    return PERIODS_PER_YEAR[Frequency(frequency)]


def interval_days(frequency: Frequency) -> int:
    """Шаг графика взносов в днях для частоты."""
    return INTERVAL_DAYS[Frequency(frequency)]


def periodic_amount(monthly_amount: float, frequency: Frequency) -> float:
    """
    Пересчёт месячного эквивалента взноса в сумму одного периода.

    Args:
        monthly_amount: Сумма взноса в пересчёте на месяц
        frequency: Частота взносов

    Returns:
        Сумма одного взноса для заданной частоты

    Examples:
        >>> periodic_amount(1000.0, Frequency.MONTH)
        1000.0
        >>> periodic_amount(1000.0, Frequency.QUARTER)
        3000.0
        >>> periodic_amount(3000.0, Frequency.DAY)
        100.0
    """
    frequency = Frequency(frequency)

    if frequency is Frequency.DAY:
        return monthly_amount / 30
    if frequency is Frequency.WEEK:
        return monthly_amount / (30 / 7)
    if frequency is Frequency.BIWEEK:
        return monthly_amount / (30 / 14)
    if frequency is Frequency.QUARTER:
        return monthly_amount * 3
    if frequency is Frequency.YEAR:
        return monthly_amount * 12
    return monthly_amount


# =============================================================================
# ПЕРИОДЫ И ДАТЫ
# =============================================================================


def period_to_days(period: float, unit: str) -> float:
    """
    Длительность периода в днях (30 дней в месяце, 365 в году).

    Неизвестная единица возвращает period без изменений.
    """
    if unit == "month":
        return period * DAYS_PER_MONTH
    if unit == "year":
        return period * DAYS_PER_YEAR
    return period


def period_to_years(period: float, unit: str) -> float:
    """
    Длительность периода в годах.

    Неизвестная единица возвращает period без изменений.
    """
    if unit == "day":
        return period / DAYS_PER_YEAR
    if unit == "month":
        return period / MONTHS_PER_YEAR
    return period


def months_between(start: date, end: date) -> int:
    """
    Количество полных календарных месяцев между датами (с отсечением).

    Месяц считается полным, если день месяца в end не меньше дня в start.
    Для end < start результат отрицательный.

    Examples:
        >>> months_between(date(2023, 1, 15), date(2024, 1, 15))
        12
        >>> months_between(date(2023, 1, 31), date(2023, 2, 28))
        0
    """
    if end < start:
        return -months_between(end, start)

    months = (end.year - start.year) * MONTHS_PER_YEAR + (end.month - start.month)
    if end.day < start.day:
        months -= 1
    return months
