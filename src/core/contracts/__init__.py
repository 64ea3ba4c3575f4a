"""
Contract Validation Module

Валидация JSON представлений отчётов диагностики.
"""

from .validators import (
    ComparisonResultValidator,
    ContractValidator,
    RepresentationReportValidator,
    SchemaLoader,
    validate_comparison_result,
    validate_representation_report,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "ComparisonResultValidator",
    "RepresentationReportValidator",
    # Functions
    "validate_comparison_result",
    "validate_representation_report",
]
