"""
Domain models and value objects.

Contains DecimalValue, BinaryFloatValue and the diagnostic reports.
"""

from src.core.domain.reports import (
    DECIMAL_TEXT_PATTERN,
    NON_NEGATIVE_DECIMAL_TEXT_PATTERN,
    ComparisonResult,
    RepresentationReport,
)
from src.core.domain.values import BinaryFloatValue, DecimalValue

__all__ = [
    # Values
    "DecimalValue",
    "BinaryFloatValue",
    # Reports
    "DECIMAL_TEXT_PATTERN",
    "NON_NEGATIVE_DECIMAL_TEXT_PATTERN",
    "ComparisonResult",
    "RepresentationReport",
]
