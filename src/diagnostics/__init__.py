"""Diagnostics — демонстрация ошибок округления IEEE 754.

- Сравнение точной десятичной суммы с суммой в double
- Разбор хранения отдельного литерала в double
"""

from .rounding_demonstrator import (
    DemonstratorConfig,
    FloatingPointRoundingDemonstrator,
    compare,
    explain,
)

__all__ = [
    "DemonstratorConfig",
    "FloatingPointRoundingDemonstrator",
    "compare",
    "explain",
]
