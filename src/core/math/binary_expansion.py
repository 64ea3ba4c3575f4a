"""
Binary Expansion — запись рационального числа в системе счисления с основанием 2

Показывает, почему 0.1 не помещается в double: знаменатель 10 содержит
множитель 5, и двоичная дробь становится периодической:

    0.1 = 0.0(0011)_2      0.2 = 0.(0011)_2      0.5 = 0.1_2

Алгоритм: деление столбиком по основанию 2 с запоминанием остатков.
Повтор остатка означает начало периода.
"""

from fractions import Fraction
from typing import Final, NamedTuple

# Предел длины дробной части (период 5^k растёт как 4 * 5^(k-1))
MAX_EXPANSION_BITS_DEFAULT: Final[int] = 256


class BinaryExpansion(NamedTuple):
    """
    Двоичное разложение: знак, целая часть, предпериод, период.

    truncated=True означает, что разложение оборвано на max_bits
    и период не найден.
    """

    negative: bool
    integer_bits: str
    prefix: str
    cycle: str
    truncated: bool

    @property
    def is_terminating(self) -> bool:
        """Конечная двоичная дробь (точно представима при достаточной мантиссе)."""
        return not self.cycle and not self.truncated

    @property
    def text(self) -> str:
        sign = "-" if self.negative else ""
        result = f"{sign}{self.integer_bits}"
        if self.prefix or self.cycle:
            result += f".{self.prefix}"
            if self.cycle:
                result += f"({self.cycle})"
        if self.truncated:
            result += "..."
        return result


def binary_expansion(
    value: Fraction,
    max_bits: int = MAX_EXPANSION_BITS_DEFAULT,
) -> BinaryExpansion:
    """
    Двоичное разложение рационального числа с выделением периода.

    Args:
        value: Точное значение
        max_bits: Максимум разрядов дробной части

    Returns:
        BinaryExpansion

    Raises:
        ValueError: Если max_bits <= 0

    Examples:
        >>> binary_expansion(Fraction(1, 10)).text
        '0.0(0011)'
        >>> binary_expansion(Fraction(-3, 4)).text
        '-0.11'
    """
    if max_bits <= 0:
        raise ValueError(f"max_bits must be positive, got {max_bits}")

    magnitude = abs(value)
    denominator = magnitude.denominator
    integer_part, remainder = divmod(magnitude.numerator, denominator)

    bits: list[str] = []
    seen: dict[int, int] = {}
    cycle_start: int | None = None
    truncated = False

    while remainder:
        if remainder in seen:
            cycle_start = seen[remainder]
            break
        if len(bits) >= max_bits:
            truncated = True
            break
        seen[remainder] = len(bits)
        bit, remainder = divmod(remainder * 2, denominator)
        bits.append(str(bit))

    if cycle_start is None:
        prefix, cycle = "".join(bits), ""
    else:
        prefix, cycle = "".join(bits[:cycle_start]), "".join(bits[cycle_start:])

    return BinaryExpansion(
        negative=value < 0,
        integer_bits=format(integer_part, "b"),
        prefix=prefix,
        cycle=cycle,
        truncated=truncated,
    )
