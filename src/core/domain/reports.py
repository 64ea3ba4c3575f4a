"""
Reports — результаты диагностики округления

Immutable Pydantic модели, возвращаемые FloatingPointRoundingDemonstrator.
Полная совместимость с JSON Schema (contracts/schema/*.json).

Все числовые поля хранятся точной десятичной записью (str), без экспоненты.
"""

from typing import Final

from pydantic import BaseModel, Field

# Каноническая десятичная запись: без хвостовых нулей, без "+"
DECIMAL_TEXT_PATTERN: Final[str] = r"^-?[0-9]+(\.[0-9]*[1-9])?$"
NON_NEGATIVE_DECIMAL_TEXT_PATTERN: Final[str] = r"^[0-9]+(\.[0-9]*[1-9])?$"


# =============================================================================
# COMPARISON RESULT
# =============================================================================


class ComparisonResult(BaseModel):
    """
    Результат сравнения точной и binary64 суммы двух литералов.

    Инварианты:
    - difference >= 0
    - exact_match ⇔ difference == "0"
    - ulp_distance > 0 ⇒ exact_match is False
    """

    # Операнды
    a: str = Field(..., pattern=DECIMAL_TEXT_PATTERN, description="Первый операнд")
    b: str = Field(..., pattern=DECIMAL_TEXT_PATTERN, description="Второй операнд")

    # Суммы
    exact_sum: str = Field(
        ..., pattern=DECIMAL_TEXT_PATTERN, description="Точная десятичная сумма"
    )
    float_sum: str = Field(
        ...,
        pattern=DECIMAL_TEXT_PATTERN,
        description="Сумма в double, кратчайшая round-trip запись",
    )
    float_sum_exact: str = Field(
        ...,
        pattern=DECIMAL_TEXT_PATTERN,
        description="Точное значение double-суммы",
    )

    # Расхождение
    exact_match: bool = Field(..., description="exact_sum == float_sum")
    difference: str = Field(
        ...,
        pattern=NON_NEGATIVE_DECIMAL_TEXT_PATTERN,
        description="|exact_sum - float_sum|",
    )
    ulp_distance: int = Field(
        ...,
        ge=0,
        description="Шагов double между float-суммой и ближайшим к exact_sum double",
    )

    model_config = {"frozen": True}


# =============================================================================
# REPRESENTATION REPORT
# =============================================================================


class RepresentationReport(BaseModel):
    """
    Как десятичный литерал хранится в double.

    stored_exact содержит все цифры хранимого значения
    (для 0.1: 0.1000000000000000055511151231257827021181583404541015625).
    """

    literal: str = Field(..., min_length=1, description="Исходный литерал")
    exact: str = Field(..., pattern=DECIMAL_TEXT_PATTERN, description="Точное значение")
    nearest_double: str = Field(
        ..., pattern=DECIMAL_TEXT_PATTERN, description="Кратчайшая запись ближайшего double"
    )
    double_hex: str = Field(..., min_length=1, description="float.hex() ближайшего double")
    stored_exact: str = Field(
        ..., pattern=DECIMAL_TEXT_PATTERN, description="Точное хранимое значение"
    )
    representation_error: str = Field(
        ...,
        pattern=NON_NEGATIVE_DECIMAL_TEXT_PATTERN,
        description="|stored_exact - exact|",
    )
    exactly_representable: bool = Field(..., description="representation_error == 0")
    binary_expansion: str = Field(
        ..., min_length=1, description="Двоичная запись, период в скобках"
    )
    binary_expansion_truncated: bool = Field(
        ..., description="Разложение оборвано до нахождения периода"
    )

    model_config = {"frozen": True}
