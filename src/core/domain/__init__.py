"""
Domain models and value objects.

Contains the tolerance policy and dataset/summary models.
"""

from src.core.domain.dataset import (
    DIGIT_CLASSES,
    DatasetSummary,
    ImageStatistics,
    MnistDataset,
)
from src.core.domain.tolerance import DEFAULT_POLICY, TolerancePolicy

__all__ = [
    # Tolerance
    "DEFAULT_POLICY",
    "TolerancePolicy",
    # Dataset
    "DIGIT_CLASSES",
    "DatasetSummary",
    "ImageStatistics",
    "MnistDataset",
]
