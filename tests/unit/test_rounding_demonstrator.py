"""
Тесты для FloatingPointRoundingDemonstrator

Проверяет:
1. Классический пример 0.1 + 0.2
2. Точно представимые суммы (0.5 + 0.5, 1 + 2)
3. Свойства: difference >= 0, exact_match ⇔ difference == 0, детерминизм
4. InvalidDecimalLiteral до вычислений, переполнение double
5. explain(): хранимое значение, ошибка представления, двоичное разложение
6. Конфигурацию и логирование
"""

import logging
import sys
from concurrent.futures import ThreadPoolExecutor
from fractions import Fraction

import pytest

from src.core.math.decimal_literals import InvalidDecimalLiteral, fraction_to_decimal_text
from src.diagnostics import (
    DemonstratorConfig,
    FloatingPointRoundingDemonstrator,
    compare,
    explain,
)

MAX_DOUBLE_LITERAL = "17976931348623157" + "0" * 292


@pytest.fixture
def demonstrator() -> FloatingPointRoundingDemonstrator:
    return FloatingPointRoundingDemonstrator()


# =============================================================================
# COMPARE — ИЗВЕСТНЫЕ ПРИМЕРЫ
# =============================================================================


class TestCompareKnownCases:
    """Классические примеры"""

    def test_one_tenth_plus_two_tenths(self, demonstrator) -> None:
        """0.1 + 0.2 = 0.30000000000000004 в double"""
        result = demonstrator.compare("0.1", "0.2")

        assert result.a == "0.1"
        assert result.b == "0.2"
        assert result.exact_sum == "0.3"
        assert result.float_sum == "0.30000000000000004"
        assert result.exact_match is False
        assert result.difference == "0.00000000000000004"
        assert result.ulp_distance == 1

    def test_float_sum_stored_above_three_tenths(self, demonstrator) -> None:
        """Хранимая сумма чуть больше 0.3"""
        result = demonstrator.compare("0.1", "0.2")

        assert result.float_sum_exact == (
            "0.3000000000000000444089209850062616169452667236328125"
        )
        assert Fraction(result.float_sum_exact) > Fraction(3, 10)

    def test_halves_exact(self, demonstrator) -> None:
        """0.5 точно представимо: 0.5 + 0.5 = 1"""
        result = demonstrator.compare("0.5", "0.5")

        assert result.exact_match is True
        assert result.exact_sum == "1"
        assert result.float_sum == "1"
        assert result.difference == "0"
        assert result.ulp_distance == 0

    def test_integers_exact(self, demonstrator) -> None:
        """1 + 2 = 3 без расхождения"""
        result = demonstrator.compare("1", "2")

        assert result.exact_match is True
        assert result.exact_sum == "3"
        assert result.float_sum == "3"
        assert result.float_sum_exact == "3"
        assert result.difference == "0"

    def test_negative_operands(self, demonstrator) -> None:
        """Знак не меняет величину расхождения"""
        result = demonstrator.compare("-0.1", "-0.2")

        assert result.exact_sum == "-0.3"
        assert result.float_sum == "-0.30000000000000004"
        assert result.difference == "0.00000000000000004"
        assert result.exact_match is False

    def test_subtraction_below(self, demonstrator) -> None:
        """0.3 + (-0.1) = 0.19999999999999998"""
        result = demonstrator.compare("0.3", "-0.1")

        assert result.exact_sum == "0.2"
        assert result.float_sum == "0.19999999999999998"
        assert result.difference == "0.00000000000000002"
        assert result.exact_match is False

    def test_one_tenth_plus_seven_tenths(self, demonstrator) -> None:
        """0.1 + 0.7 = 0.7999999999999999"""
        result = demonstrator.compare("0.1", "0.7")

        assert result.float_sum == "0.7999999999999999"
        assert result.difference == "0.0000000000000001"

    def test_shortest_text_hides_representation_error(self, demonstrator) -> None:
        """0.1 + 0 совпадает: кратчайшая запись double(0.1) равна "0.1" """
        result = demonstrator.compare("0.1", "0")

        assert result.exact_match is True
        assert result.ulp_distance == 0
        assert result.float_sum_exact != result.exact_sum

    def test_canonical_operands(self, demonstrator) -> None:
        """Операнды приводятся к канонической записи"""
        result = demonstrator.compare("+.50", "0010.")

        assert result.a == "0.5"
        assert result.b == "10"
        assert result.exact_sum == "10.5"

    def test_signed_zero_sum(self, demonstrator) -> None:
        """-0 + -0 в double даёт -0.0, вывод "0" """
        result = demonstrator.compare("-0", "-0")

        assert result.float_sum == "0"
        assert result.exact_match is True


# =============================================================================
# COMPARE — СВОЙСТВА
# =============================================================================


PAIRS = [
    ("0.1", "0.2"),
    ("0.5", "0.5"),
    ("1", "2"),
    ("0.1", "0.7"),
    ("1.1", "2.2"),
    ("-0.1", "0.3"),
    ("100000000000000000", "1"),
    ("9007199254740992", "1"),
    ("0.000001", "123.456"),
    ("3.14159265358979323846", "2.71828182845904523536"),
    ("0", "0"),
]


class TestCompareProperties:
    """Инварианты compare()"""

    @pytest.mark.parametrize("a, b", PAIRS)
    def test_difference_non_negative(self, demonstrator, a: str, b: str) -> None:
        """difference >= 0"""
        assert Fraction(demonstrator.compare(a, b).difference) >= 0

    @pytest.mark.parametrize("a, b", PAIRS)
    def test_exact_match_iff_zero_difference(self, demonstrator, a: str, b: str) -> None:
        """exact_match ⇔ difference == 0"""
        result = demonstrator.compare(a, b)
        assert result.exact_match == (result.difference == "0")

    @pytest.mark.parametrize("a, b", PAIRS)
    def test_exact_sum_is_exact(self, demonstrator, a: str, b: str) -> None:
        """exact_sum совпадает с суммой Fraction"""
        result = demonstrator.compare(a, b)
        assert Fraction(result.exact_sum) == Fraction(a) + Fraction(b)

    @pytest.mark.parametrize("a, b", PAIRS)
    def test_float_sum_matches_host(self, demonstrator, a: str, b: str) -> None:
        """float_sum восстанавливает double-сумму хоста"""
        result = demonstrator.compare(a, b)
        assert float(result.float_sum) == float(a) + float(b)

    @pytest.mark.parametrize("a, b", PAIRS)
    def test_ulp_distance_implies_mismatch(self, demonstrator, a: str, b: str) -> None:
        """Double-сумма не совпадает с ближайшим double → exact_match False"""
        result = demonstrator.compare(a, b)
        if result.ulp_distance > 0:
            assert result.exact_match is False

    def test_large_integer_rounding(self, demonstrator) -> None:
        """2^53 + 1 не представимо: сумма округляется к 2^53"""
        result = demonstrator.compare("9007199254740992", "1")

        assert result.exact_sum == "9007199254740993"
        assert result.float_sum == "9007199254740992"
        assert result.difference == "1"
        assert result.ulp_distance == 0

    def test_deterministic(self, demonstrator) -> None:
        """Повторный вызов даёт идентичный результат"""
        first = demonstrator.compare("0.1", "0.2")
        second = demonstrator.compare("0.1", "0.2")

        assert first == second
        assert first.model_dump() == second.model_dump()

    def test_commutative(self, demonstrator) -> None:
        """Сложение в double коммутативно"""
        ab = demonstrator.compare("0.1", "0.2")
        ba = demonstrator.compare("0.2", "0.1")

        assert ab.float_sum == ba.float_sum
        assert ab.difference == ba.difference

    def test_concurrent_callers(self, demonstrator) -> None:
        """Параллельные вызовы не влияют друг на друга"""
        with ThreadPoolExecutor(max_workers=4) as pool:
            results = list(pool.map(lambda pair: demonstrator.compare(*pair), PAIRS * 4))

        assert results == [demonstrator.compare(a, b) for a, b in PAIRS * 4]

    def test_exact_sum_beyond_int_string_limit(self, demonstrator) -> None:
        """Точная сумма длиннее 4300 цифр (предел str(int)) выводится полностью"""
        result = demonstrator.compare("1" * 300, "0." + "1" * 4090)

        assert result.exact_sum == "1" * 300 + "." + "1" * 4090
        assert result.exact_match is False
        assert len(result.difference.partition(".")[2]) == 4090


# =============================================================================
# COMPARE — ОШИБКИ
# =============================================================================


class TestCompareErrors:
    """InvalidDecimalLiteral"""

    def test_invalid_first_operand(self, demonstrator) -> None:
        """compare("abc", "1") → InvalidDecimalLiteral"""
        with pytest.raises(InvalidDecimalLiteral, match="'abc'"):
            demonstrator.compare("abc", "1")

    def test_invalid_second_operand(self, demonstrator) -> None:
        """Второй операнд проверяется так же"""
        with pytest.raises(InvalidDecimalLiteral, match="'1e5'"):
            demonstrator.compare("1", "1e5")

    @pytest.mark.parametrize("literal", ["", "1.2.3", " 1", "0x1", "NaN", "Infinity"])
    def test_malformed(self, demonstrator, literal: str) -> None:
        """Синтаксически невалидные литералы"""
        with pytest.raises(InvalidDecimalLiteral):
            demonstrator.compare(literal, "1")

    def test_non_string(self, demonstrator) -> None:
        """Числа вместо строк отклоняются"""
        with pytest.raises(InvalidDecimalLiteral, match="expected str"):
            demonstrator.compare(0.1, "0.2")

    def test_operand_overflow(self, demonstrator) -> None:
        """Операнд вне диапазона double"""
        with pytest.raises(InvalidDecimalLiteral, match="double range"):
            demonstrator.compare("1" + "0" * 400, "1")

    def test_sum_overflow(self, demonstrator) -> None:
        """Сумма вне диапазона double"""
        with pytest.raises(InvalidDecimalLiteral, match="sum exceeds the double range"):
            demonstrator.compare(MAX_DOUBLE_LITERAL, MAX_DOUBLE_LITERAL)

    def test_exact_sum_rounds_past_double_range(self, demonstrator) -> None:
        """Сумма double конечна, но точная сумма округляется за DBL_MAX"""
        # a чуть ниже середины между DBL_MAX и 2^1024, b меньше половины 2^-1074
        max_double = Fraction(sys.float_info.max)
        a = fraction_to_decimal_text(max_double + Fraction(2) ** 970 - Fraction(1, 2**1080))
        b = fraction_to_decimal_text(Fraction(1, 2**1079))
        assert float(a) + float(b) == sys.float_info.max

        with pytest.raises(InvalidDecimalLiteral, match="magnitude exceeds the double range"):
            demonstrator.compare(a, b)

    def test_error_is_value_error(self, demonstrator) -> None:
        """InvalidDecimalLiteral является ValueError"""
        with pytest.raises(ValueError):
            demonstrator.compare("abc", "1")


# =============================================================================
# EXPLAIN
# =============================================================================


class TestExplain:
    """Хранение отдельного литерала в double"""

    def test_one_tenth(self, demonstrator) -> None:
        """0.1: периодическая двоичная дробь, хранится с ошибкой"""
        report = demonstrator.explain("0.1")

        assert report.literal == "0.1"
        assert report.exact == "0.1"
        assert report.nearest_double == "0.1"
        assert report.double_hex == "0x1.999999999999ap-4"
        assert report.stored_exact == "0.1000000000000000055511151231257827021181583404541015625"
        assert report.representation_error == (
            "0.0000000000000000055511151231257827021181583404541015625"
        )
        assert report.exactly_representable is False
        assert report.binary_expansion == "0.0(0011)"
        assert report.binary_expansion_truncated is False

    def test_two_tenths(self, demonstrator) -> None:
        """0.2 = 0.(0011)"""
        report = demonstrator.explain("0.2")

        assert report.binary_expansion == "0.(0011)"
        assert report.stored_exact == "0.200000000000000011102230246251565404236316680908203125"
        assert report.exactly_representable is False

    def test_three_tenths_stored_below(self, demonstrator) -> None:
        """0.3 хранится чуть меньше 0.3"""
        report = demonstrator.explain("0.3")

        assert report.stored_exact == "0.299999999999999988897769753748434595763683319091796875"
        assert Fraction(report.stored_exact) < Fraction(3, 10)

    def test_half_exact(self, demonstrator) -> None:
        """0.5 = 0.1 в двоичной записи, точно представимо"""
        report = demonstrator.explain("0.5")

        assert report.exactly_representable is True
        assert report.representation_error == "0"
        assert report.stored_exact == "0.5"
        assert report.binary_expansion == "0.1"

    def test_integer(self, demonstrator) -> None:
        """Целые числа до 2^53 точно представимы"""
        report = demonstrator.explain("3")

        assert report.exactly_representable is True
        assert report.binary_expansion == "11"

    def test_terminating_but_not_representable(self, demonstrator) -> None:
        """2^53 + 1: конечная двоичная запись, но мантиссы не хватает"""
        report = demonstrator.explain("9007199254740993")

        assert report.exactly_representable is False
        assert report.representation_error == "1"
        assert "(" not in report.binary_expansion

    def test_truncated_expansion(self) -> None:
        """Период длиннее max_expansion_bits"""
        demonstrator = FloatingPointRoundingDemonstrator(
            DemonstratorConfig(max_expansion_bits=3)
        )
        report = demonstrator.explain("0.1")

        assert report.binary_expansion == "0.000..."
        assert report.binary_expansion_truncated is True

    def test_invalid(self, demonstrator) -> None:
        """Невалидный литерал → InvalidDecimalLiteral"""
        with pytest.raises(InvalidDecimalLiteral):
            demonstrator.explain("0,1")


# =============================================================================
# КОНФИГУРАЦИЯ, МОДУЛЬНЫЕ ФУНКЦИИ, ЛОГИРОВАНИЕ
# =============================================================================


class TestConfig:
    """DemonstratorConfig"""

    def test_defaults(self) -> None:
        """Значения по умолчанию"""
        config = FloatingPointRoundingDemonstrator().config
        assert config.max_literal_length == 4096
        assert config.max_expansion_bits == 256

    def test_literal_length_limit(self) -> None:
        """Литерал длиннее max_literal_length отклоняется"""
        demonstrator = FloatingPointRoundingDemonstrator(
            DemonstratorConfig(max_literal_length=3)
        )
        assert demonstrator.compare("0.1", "0.2").exact_sum == "0.3"
        with pytest.raises(InvalidDecimalLiteral, match="longer than 3 characters"):
            demonstrator.compare("0.25", "1")

    @pytest.mark.parametrize(
        "kwargs", [{"max_literal_length": 0}, {"max_expansion_bits": -1}]
    )
    def test_invalid_config(self, kwargs) -> None:
        """Неположительные пределы запрещены"""
        with pytest.raises(ValueError, match="must be positive"):
            DemonstratorConfig(**kwargs)


class TestModuleFunctions:
    """compare() / explain() на экземпляре по умолчанию"""

    def test_compare(self) -> None:
        assert compare("0.1", "0.2").float_sum == "0.30000000000000004"

    def test_explain(self) -> None:
        assert explain("0.1").binary_expansion == "0.0(0011)"


class TestLogging:
    """Debug-записи"""

    def test_compare_logged(self, demonstrator, caplog) -> None:
        """compare() пишет debug-запись с результатом"""
        with caplog.at_level(logging.DEBUG, logger="src.diagnostics.rounding_demonstrator"):
            demonstrator.compare("0.1", "0.2")

        assert "compare 0.1 + 0.2" in caplog.text
        assert "float=0.30000000000000004" in caplog.text
        assert "match=False" in caplog.text

    def test_explain_logged(self, demonstrator, caplog) -> None:
        """explain() пишет debug-запись с разложением"""
        with caplog.at_level(logging.DEBUG, logger="src.diagnostics.rounding_demonstrator"):
            demonstrator.explain("0.1")

        assert "expansion=0.0(0011)" in caplog.text
