"""
Values — точное десятичное значение и его образ в binary64

Immutable Pydantic модели:
- DecimalValue: десятичный литерал, точное значение как Fraction
- BinaryFloatValue: double, полученный от хоста, с разбором на поля

DecimalValue никогда не проходит через float при вычислении exact.
"""

from fractions import Fraction

from pydantic import BaseModel, Field, field_validator

from src.core.math.decimal_literals import (
    DECIMAL_LITERAL_PATTERN,
    MAX_LITERAL_LENGTH_DEFAULT,
    fraction_to_decimal_text,
    nearest_double,
    parse_decimal_literal,
    shortest_round_trip_text,
    validate_decimal_literal,
)
from src.core.math.numerical_safeguards import (
    DoubleFields,
    double_fields,
    double_to_bits,
    validate_finite_double,
)


# =============================================================================
# DECIMAL VALUE
# =============================================================================


class DecimalValue(BaseModel):
    """
    Точное десятичное число.

    Хранит литерал как есть; exact и text вычисляются в рациональной
    арифметике. Для разбора пользовательского ввода использовать parse():
    он поднимает InvalidDecimalLiteral, а не pydantic ValidationError.
    """

    literal: str = Field(..., min_length=1, description="Десятичный литерал")

    model_config = {"frozen": True}

    @field_validator("literal")
    @classmethod
    def validate_literal(cls, v: str) -> str:
        if DECIMAL_LITERAL_PATTERN.fullmatch(v) is None:
            raise ValueError("not a decimal literal")
        return v

    @classmethod
    def parse(
        cls, literal: object, max_length: int = MAX_LITERAL_LENGTH_DEFAULT
    ) -> "DecimalValue":
        """
        Разбор литерала.

        Raises:
            InvalidDecimalLiteral: Если литерал невалиден
        """
        return cls(literal=validate_decimal_literal(literal, max_length))

    @property
    def exact(self) -> Fraction:
        """Точное рациональное значение."""
        return parse_decimal_literal(self.literal, max_length=len(self.literal))

    @property
    def text(self) -> str:
        """Каноническая запись ("+.50" → "0.5")."""
        return fraction_to_decimal_text(self.exact)

    def to_double(self) -> "BinaryFloatValue":
        """
        Ближайший double.

        Raises:
            InvalidDecimalLiteral: Если значение вне диапазона double
        """
        return BinaryFloatValue(value=nearest_double(self.literal))


# =============================================================================
# BINARY FLOAT VALUE
# =============================================================================


class BinaryFloatValue(BaseModel):
    """
    IEEE 754 double precision значение.

    Конечное (NaN/Inf отклоняются при создании).
    """

    value: float = Field(..., description="Значение double")

    model_config = {"frozen": True}

    @field_validator("value")
    @classmethod
    def validate_finite(cls, v: float) -> float:
        validate_finite_double(v, "value")
        return v

    @property
    def shortest(self) -> str:
        """Кратчайшая round-trip запись."""
        return shortest_round_trip_text(self.value)

    @property
    def exact(self) -> Fraction:
        """Точное значение, реально хранящееся в double."""
        return Fraction(self.value)

    @property
    def exact_text(self) -> str:
        return fraction_to_decimal_text(self.exact)

    @property
    def hex(self) -> str:
        return self.value.hex()

    @property
    def components(self) -> DoubleFields:
        return double_fields(self.value)

    @property
    def bits(self) -> str:
        """64 бита: 1 знак, 11 порядок, 52 мантисса."""
        return format(double_to_bits(self.value), "064b")
