"""
Core math modules

Точная десятичная арифметика, двоичные разложения и защитные
примитивы для IEEE 754 double.
"""

# Numerical Safeguards
from src.core.math.numerical_safeguards import (
    DOUBLE_EXPONENT_BIAS,
    DOUBLE_EXPONENT_BITS,
    DOUBLE_MANTISSA_BITS,
    DoubleFields,
    double_fields,
    double_to_bits,
    double_to_ordinal,
    is_valid_float,
    ulp_distance,
    validate_finite_double,
)

# Decimal Literals
from src.core.math.decimal_literals import (
    DECIMAL_LITERAL_PATTERN,
    MAX_LITERAL_LENGTH_DEFAULT,
    InvalidDecimalLiteral,
    fraction_to_decimal_text,
    nearest_double,
    parse_decimal_literal,
    shortest_round_trip_text,
    validate_decimal_literal,
)

# Binary Expansion
from src.core.math.binary_expansion import (
    MAX_EXPANSION_BITS_DEFAULT,
    BinaryExpansion,
    binary_expansion,
)

__all__ = [
    # Numerical Safeguards — Format constants
    "DOUBLE_EXPONENT_BIAS",
    "DOUBLE_EXPONENT_BITS",
    "DOUBLE_MANTISSA_BITS",
    # Numerical Safeguards — Types
    "DoubleFields",
    # Numerical Safeguards — Functions
    "double_fields",
    "double_to_bits",
    "double_to_ordinal",
    "is_valid_float",
    "ulp_distance",
    "validate_finite_double",
    # Decimal Literals — Constants
    "DECIMAL_LITERAL_PATTERN",
    "MAX_LITERAL_LENGTH_DEFAULT",
    # Decimal Literals — Exceptions
    "InvalidDecimalLiteral",
    # Decimal Literals — Functions
    "fraction_to_decimal_text",
    "nearest_double",
    "parse_decimal_literal",
    "shortest_round_trip_text",
    "validate_decimal_literal",
    # Binary Expansion
    "MAX_EXPANSION_BITS_DEFAULT",
    "BinaryExpansion",
    "binary_expansion",
]
