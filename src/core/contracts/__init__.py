"""
Contract Validation Module

Модуль для валидации JSON контрактов (сводки датасетов).
"""

from .validators import (
    ContractValidator,
    DatasetSummaryValidator,
    SchemaLoader,
    validate_dataset_summary,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "DatasetSummaryValidator",
    # Functions
    "validate_dataset_summary",
]
