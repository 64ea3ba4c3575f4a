"""
Decimal Literals — точный разбор и точный вывод десятичных чисел

Единственный допустимый путь между текстом и точным значением:
- Литерал → Fraction (без участия binary float)
- Fraction → каноническая десятичная строка
- Литерал → ближайший double (корректное округление хоста)
- double → кратчайшая round-trip строка

Грамматика литерала: [+-] цифры [. цифры], хотя бы одна цифра.
Экспонента, пробелы и подчёркивания запрещены.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. parse_decimal_literal никогда не использует float
2. fraction_to_decimal_text точен: без экспоненты, без хвостовых нулей
3. Ошибка разбора → InvalidDecimalLiteral до любых вычислений
"""

import re
from fractions import Fraction
from typing import Final

from src.core.math.numerical_safeguards import is_valid_float

# =============================================================================
# ПАРАМЕТРЫ
# =============================================================================

# Максимальная длина литерала (защита от DoS на длинной арифметике)
MAX_LITERAL_LENGTH_DEFAULT: Final[int] = 4096

DECIMAL_LITERAL_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)"
)

# Длина блока цифр при переводе int <-> str (ниже sys.get_int_max_str_digits)
_DIGIT_CHUNK: Final[int] = 1000


# =============================================================================
# EXCEPTIONS
# =============================================================================


class InvalidDecimalLiteral(ValueError):
    """
    Строка не является конечным десятичным литералом.

    Атрибуты:
        literal: исходное значение, переданное вызывающим
        reason: короткое описание причины отказа
    """

    def __init__(self, literal: object, reason: str):
        self.literal = literal
        self.reason = reason
        super().__init__(f"Invalid decimal literal {literal!r}: {reason}")


# =============================================================================
# РАЗБОР
# =============================================================================


def validate_decimal_literal(
    literal: object,
    max_length: int = MAX_LITERAL_LENGTH_DEFAULT,
) -> str:
    """
    Синтаксическая проверка литерала.

    Returns:
        Тот же литерал (str)

    Raises:
        InvalidDecimalLiteral: Если литерал не str, слишком длинный
            или не соответствует грамматике
    """
    if not isinstance(literal, str):
        raise InvalidDecimalLiteral(literal, f"expected str, got {type(literal).__name__}")

    if len(literal) > max_length:
        raise InvalidDecimalLiteral(
            literal[:32] + "...", f"longer than {max_length} characters"
        )

    if DECIMAL_LITERAL_PATTERN.fullmatch(literal) is None:
        raise InvalidDecimalLiteral(
            literal, "expected optional sign, digits and at most one decimal point"
        )

    return literal


def parse_decimal_literal(
    literal: object,
    max_length: int = MAX_LITERAL_LENGTH_DEFAULT,
) -> Fraction:
    """
    Точный разбор литерала в рациональное число.

    Examples:
        >>> parse_decimal_literal("0.1")
        Fraction(1, 10)
        >>> parse_decimal_literal("-.5")
        Fraction(-1, 2)
    """
    text = validate_decimal_literal(literal, max_length)

    sign = -1 if text[0] == "-" else 1
    integer_digits, _, fraction_digits = text.lstrip("+-").partition(".")
    numerator = _digits_to_int(integer_digits + fraction_digits)
    return Fraction(sign * numerator, 10 ** len(fraction_digits))


def _digits_to_int(digits: str) -> int:
    # int(str) ограничен 4300 цифрами, поэтому собираем по блокам
    value = 0
    for start in range(0, len(digits), _DIGIT_CHUNK):
        chunk = digits[start : start + _DIGIT_CHUNK]
        value = value * 10 ** len(chunk) + int(chunk)
    return value


def nearest_double(literal: str) -> float:
    """
    Ближайший к литералу double (round-half-even, как у float()).

    Raises:
        InvalidDecimalLiteral: Если литерал вне диапазона double
    """
    value = float(literal)
    if not is_valid_float(value):
        raise InvalidDecimalLiteral(literal, "magnitude exceeds the double range")
    return value


# =============================================================================
# ВЫВОД
# =============================================================================


def _factor_out(n: int, p: int) -> tuple[int, int]:
    count = 0
    while n % p == 0:
        n //= p
        count += 1
    return n, count


def _int_to_digits(n: int) -> str:
    # Обратное к _digits_to_int: str(int) упирается в тот же предел
    chunks = []
    base = 10**_DIGIT_CHUNK
    while n >= base:
        n, low = divmod(n, base)
        chunks.append(str(low).rjust(_DIGIT_CHUNK, "0"))
    chunks.append(str(n))
    return "".join(reversed(chunks))


def fraction_to_decimal_text(value: Fraction) -> str:
    """
    Точная десятичная запись конечной дроби.

    Знаменатель обязан иметь вид 2^i * 5^j.

    Examples:
        >>> fraction_to_decimal_text(Fraction(3, 10))
        '0.3'
        >>> fraction_to_decimal_text(Fraction(4, 10**17))
        '0.00000000000000004'
        >>> fraction_to_decimal_text(Fraction(3))
        '3'

    Raises:
        ValueError: Если дробь не имеет конечной десятичной записи
    """
    rest, twos = _factor_out(value.denominator, 2)
    rest, fives = _factor_out(rest, 5)
    if rest != 1:
        raise ValueError(f"{value} has no finite decimal expansion")

    scale = max(twos, fives)
    scaled = abs(value.numerator) * (10**scale // value.denominator)
    sign = "-" if value.numerator < 0 else ""

    if scale == 0:
        return f"{sign}{_int_to_digits(scaled)}"

    # Дробь несократима, поэтому последняя цифра scaled ненулевая
    digits = _int_to_digits(scaled).rjust(scale + 1, "0")
    return f"{sign}{digits[:-scale]}.{digits[-scale:]}"


def shortest_round_trip_text(value: float) -> str:
    """
    Кратчайшая десятичная строка, однозначно восстанавливающая double.

    Цифры берутся из repr() (алгоритм кратчайшего round-trip),
    запись приводится к позиционной форме без экспоненты.

    Examples:
        >>> shortest_round_trip_text(0.1 + 0.2)
        '0.30000000000000004'
        >>> shortest_round_trip_text(3.0)
        '3'
        >>> shortest_round_trip_text(1e-20)
        '0.00000000000000000001'
    """
    if not is_valid_float(value):
        raise ValueError(f"value must be a finite double, got {value}")
    return fraction_to_decimal_text(Fraction(repr(value)))
