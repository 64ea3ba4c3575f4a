"""Floating-Point Rounding Demonstrator — точная сумма против binary64.

Показывает, почему 0.1 + 0.2 != 0.3:
- Точная сумма считается в рациональной арифметике (Fraction)
- Сумма в double считается хостом (IEEE 754, round-half-even)
- Double-сумма выводится кратчайшей round-trip строкой и сравнивается
  с точной суммой как десятичное число

Компонент без состояния: каждый вызов независим, безопасен
для параллельного использования.
"""

import logging
from dataclasses import dataclass
from fractions import Fraction
from typing import Optional

from src.core.domain.reports import ComparisonResult, RepresentationReport
from src.core.domain.values import BinaryFloatValue, DecimalValue
from src.core.math.binary_expansion import MAX_EXPANSION_BITS_DEFAULT, binary_expansion
from src.core.math.decimal_literals import (
    MAX_LITERAL_LENGTH_DEFAULT,
    InvalidDecimalLiteral,
    fraction_to_decimal_text,
    parse_decimal_literal,
)
from src.core.math.numerical_safeguards import is_valid_float, ulp_distance

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DemonstratorConfig:
    """Конфигурация демонстратора.

    - max_literal_length: предел длины входного литерала
    - max_expansion_bits: предел длины двоичного разложения в explain()
    """
    max_literal_length: int = MAX_LITERAL_LENGTH_DEFAULT
    max_expansion_bits: int = MAX_EXPANSION_BITS_DEFAULT

    def __post_init__(self) -> None:
        if self.max_literal_length <= 0:
            raise ValueError(
                f"max_literal_length must be positive, got {self.max_literal_length}"
            )
        if self.max_expansion_bits <= 0:
            raise ValueError(
                f"max_expansion_bits must be positive, got {self.max_expansion_bits}"
            )


class FloatingPointRoundingDemonstrator:
    """Сравнение точной десятичной арифметики с IEEE 754 double.

    compare(a, b):
        exact_sum   = a + b                      (Fraction)
        float_sum   = shortest(double(a) + double(b))
        exact_match = exact_sum == float_sum
        difference  = |exact_sum - float_sum|

    explain(literal):
        ближайший double, его точное значение, ошибка представления,
        двоичное разложение с периодом.
    """

    def __init__(self, config: Optional[DemonstratorConfig] = None):
        """
        Args:
            config: конфигурация (опционально, используется default)
        """
        self.config = config or DemonstratorConfig()

    def _parse(self, literal: object) -> tuple[DecimalValue, BinaryFloatValue]:
        value = DecimalValue.parse(literal, self.config.max_literal_length)
        return value, value.to_double()

    def compare(self, a: object, b: object) -> ComparisonResult:
        """Сравнение точной и double суммы двух литералов.

        Args:
            a: первый десятичный литерал (str)
            b: второй десятичный литерал (str)

        Returns:
            ComparisonResult

        Raises:
            InvalidDecimalLiteral: литерал невалиден или сумма вне диапазона double
        """
        # 1. Валидация обоих операндов до вычислений
        a_value, a_double = self._parse(a)
        b_value, b_double = self._parse(b)

        # 2. Точная сумма
        exact_sum = a_value.exact + b_value.exact

        # 3. Сумма в double
        raw_sum = a_double.value + b_double.value
        if not is_valid_float(raw_sum):
            raise InvalidDecimalLiteral(
                f"{a_value.literal} + {b_value.literal}",
                "sum exceeds the double range",
            )
        float_sum = BinaryFloatValue(value=raw_sum)
        float_text = float_sum.shortest

        # 4. Обратный разбор кратчайшей записи как точного десятичного
        float_as_exact = parse_decimal_literal(float_text, max_length=len(float_text))
        difference = abs(exact_sum - float_as_exact)

        result = ComparisonResult(
            a=a_value.text,
            b=b_value.text,
            exact_sum=fraction_to_decimal_text(exact_sum),
            float_sum=float_text,
            float_sum_exact=float_sum.exact_text,
            exact_match=exact_sum == float_as_exact,
            difference=fraction_to_decimal_text(difference),
            ulp_distance=ulp_distance(self._nearest_double(exact_sum), raw_sum),
        )

        logger.debug(
            "compare %s + %s: exact=%s float=%s match=%s ulps=%d",
            result.a,
            result.b,
            result.exact_sum,
            result.float_sum,
            result.exact_match,
            result.ulp_distance,
        )
        return result

    def explain(self, literal: object) -> RepresentationReport:
        """Как литерал хранится в double.

        Args:
            literal: десятичный литерал (str)

        Returns:
            RepresentationReport

        Raises:
            InvalidDecimalLiteral: литерал невалиден или вне диапазона double
        """
        value, double = self._parse(literal)

        error = abs(double.exact - value.exact)
        expansion = binary_expansion(value.exact, self.config.max_expansion_bits)

        report = RepresentationReport(
            literal=value.literal,
            exact=value.text,
            nearest_double=double.shortest,
            double_hex=double.hex,
            stored_exact=double.exact_text,
            representation_error=fraction_to_decimal_text(error),
            exactly_representable=error == 0,
            binary_expansion=expansion.text,
            binary_expansion_truncated=expansion.truncated,
        )

        logger.debug(
            "explain %s: stored=%s error=%s expansion=%s",
            report.literal,
            report.stored_exact,
            report.representation_error,
            report.binary_expansion,
        )
        return report

    @staticmethod
    def _nearest_double(value: Fraction) -> float:
        # Fraction.__float__ округляет корректно (int / int)
        try:
            return float(value)
        except OverflowError as e:
            raise InvalidDecimalLiteral(
                fraction_to_decimal_text(value), "magnitude exceeds the double range"
            ) from e


# Экземпляр с конфигурацией по умолчанию
_DEFAULT_DEMONSTRATOR = FloatingPointRoundingDemonstrator()


def compare(a: object, b: object) -> ComparisonResult:
    """compare() на демонстраторе по умолчанию."""
    return _DEFAULT_DEMONSTRATOR.compare(a, b)


def explain(literal: object) -> RepresentationReport:
    """explain() на демонстраторе по умолчанию."""
    return _DEFAULT_DEMONSTRATOR.explain(literal)
