"""
Numerical Safeguards — защитные примитивы для IEEE 754 double

Модуль отвечает за всё, что касается "сырого" binary64:
- Проверка конечности (NaN/Inf не допускаются в отчёты)
- Разбор double на битовые поля (sign / exponent / mantissa)
- Монотонное отображение double → int для подсчёта ULP-расстояния

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. NaN/Inf никогда не пропагируют в результат (ValueError до вычислений)
2. double_to_ordinal монотонна: x < y ⇔ ord(x) < ord(y); +0.0 и -0.0 → 0
3. Все операции детерминированы на любом IEEE-754 совместимом хосте
"""

import math
import struct
from typing import Final, NamedTuple

# =============================================================================
# ПАРАМЕТРЫ ФОРМАТА binary64
# =============================================================================

# Ширина полей IEEE 754 double precision
DOUBLE_EXPONENT_BITS: Final[int] = 11
DOUBLE_MANTISSA_BITS: Final[int] = 52
DOUBLE_EXPONENT_BIAS: Final[int] = 1023

_MAGNITUDE_MASK: Final[int] = (1 << 63) - 1


class DoubleFields(NamedTuple):
    """Битовые поля double: знак, смещённый порядок, мантисса (без скрытой 1)."""

    sign: int
    biased_exponent: int
    mantissa: int


# =============================================================================
# NaN/Inf ПРОВЕРКИ
# =============================================================================


def is_valid_float(value: float) -> bool:
    """
    Проверка, является ли float валидным (не NaN, не Inf).

    Args:
        value: Проверяемое значение

    Returns:
        True если значение конечное, False если NaN или Inf
    """
    return math.isfinite(value)


def validate_finite_double(value: float, name: str) -> None:
    """
    Валидация, что значение является конечным double.

    Args:
        value: Проверяемое значение
        name: Имя параметра (для сообщения об ошибке)

    Raises:
        ValueError: Если value NaN/Inf
    """
    if not is_valid_float(value):
        raise ValueError(f"{name} must be a finite double (not NaN/Inf), got {value}")


# =============================================================================
# БИТОВОЕ ПРЕДСТАВЛЕНИЕ
# =============================================================================


def double_to_bits(value: float) -> int:
    """Беззнаковое 64-битное слово, хранящее double."""
    return struct.unpack(">Q", struct.pack(">d", value))[0]


def double_fields(value: float) -> DoubleFields:
    """
    Разбор double на поля IEEE 754.

    Examples:
        >>> double_fields(1.0)
        DoubleFields(sign=0, biased_exponent=1023, mantissa=0)
        >>> double_fields(-2.0).sign
        1
    """
    bits = double_to_bits(value)
    return DoubleFields(
        sign=bits >> 63,
        biased_exponent=(bits >> DOUBLE_MANTISSA_BITS) & ((1 << DOUBLE_EXPONENT_BITS) - 1),
        mantissa=bits & ((1 << DOUBLE_MANTISSA_BITS) - 1),
    )


# =============================================================================
# ULP
# =============================================================================


def double_to_ordinal(value: float) -> int:
    """
    Монотонное отображение double в целое.

    Соседние представимые double отличаются ровно на 1.
    +0.0 и -0.0 отображаются в 0.

    Raises:
        ValueError: Если value NaN/Inf
    """
    validate_finite_double(value, "value")

    bits = double_to_bits(value)
    magnitude = bits & _MAGNITUDE_MASK
    if bits >> 63:
        return -magnitude
    return magnitude


def ulp_distance(x: float, y: float) -> int:
    """
    Количество шагов между двумя double по сетке представимых значений.

    Examples:
        >>> ulp_distance(1.0, 1.0)
        0
        >>> ulp_distance(0.30000000000000004, 0.3)
        1
    """
    return abs(double_to_ordinal(x) - double_to_ordinal(y))
