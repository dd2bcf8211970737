"""
Numerical Safeguards — Safe Math Primitives

Модуль обеспечивает численную устойчивость расчётов доходности:
- Безопасное деление с защитой от деления на ноль
- NaN/Inf санитизация для предотвращения распространения невалидных значений
- Валидация входных сумм (finite) на границе ядра

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Деление на ноль никогда не происходит (возвращается fallback)
2. NaN/Inf никогда не пропагируют (заменяются на fallback)
3. Все операции детерминированы и воспроизводимы
"""

import math
from typing import Final

# =============================================================================
# EPSILON-ПАРАМЕТРЫ
# =============================================================================

# Epsilon для общих вычислений и сравнений
EPS_CALC: Final[float] = 1e-12


# =============================================================================
# БЕЗОПАСНОЕ ДЕЛЕНИЕ
# =============================================================================


def denom_safe_signed(value: float, eps: float = EPS_CALC) -> float:
    """
    Безопасный знаковый делитель с epsilon-защитой.

    denom_safe_signed(x, eps) = sign(x) * max(abs(x), eps)

    Examples:
        >>> denom_safe_signed(10.0, 1e-6)
        10.0
        >>> denom_safe_signed(-1e-9, 1e-6)
        -1e-06
        >>> denom_safe_signed(0.0, 1e-6)
        1e-06
    """
    if eps <= 0:
        raise ValueError(f"eps must be positive, got {eps}")

    if abs(value) >= eps:
        return value

    if value < 0:
        return -eps
    return eps


def safe_divide(
    numerator: float,
    denominator: float,
    eps: float = EPS_CALC,
    fallback: float = 0.0,
) -> float:
    """
    Безопасное деление с защитой от деления на ноль и NaN/Inf.

    Если denominator точно равен 0.0, возвращается fallback. Для малых
    ненулевых значений применяется epsilon-защита со знаком.

    Args:
        numerator: Числитель
        denominator: Знаменатель
        eps: Минимальный абсолютный порог для знаменателя
        fallback: Значение при делении на ноль (default: 0.0)

    Returns:
        Результат деления или fallback

    Examples:
        >>> safe_divide(10.0, 2.0)
        5.0
        >>> safe_divide(10.0, 0.0)
        0.0
    """
    num_clean = sanitize_float(numerator, fallback=0.0)
    denom_raw = sanitize_float(denominator, fallback=0.0)

    if denom_raw == 0.0:
        return fallback

    try:
        result = num_clean / denom_safe_signed(denom_raw, eps)
    except (ZeroDivisionError, OverflowError):
        return fallback

    return sanitize_float(result, fallback=fallback)


# =============================================================================
# NaN/Inf САНИТИЗАЦИЯ
# =============================================================================


def is_valid_float(value: float) -> bool:
    """True если значение finite (не NaN, не Inf)."""
    return math.isfinite(value)


def sanitize_float(value: float, fallback: float = 0.0) -> float:
    """
    Санитизация float: замена NaN/Inf на fallback значение.

    Examples:
        >>> sanitize_float(10.0)
        10.0
        >>> sanitize_float(float('nan'))
        0.0
        >>> sanitize_float(float('-inf'), fallback=-1.0)
        -1.0
    """
    if is_valid_float(value):
        return value
    return fallback


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def validate_finite(value: float, name: str) -> None:
    """
    Валидация, что значение является конечным числом.

    Знак не проверяется: нулевые и отрицательные суммы допустимы и
    обрабатываются как вырожденный ввод (нулевая доходность).

    Raises:
        ValueError: Если value NaN/Inf
    """
    if not is_valid_float(value):
        raise ValueError(f"{name} must be a valid float (not NaN/Inf), got {value}")
