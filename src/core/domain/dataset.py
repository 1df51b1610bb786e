"""
Dataset — Модели загруженного датасета и его сводки

MnistDataset — неизменяемый контейнер numpy массивов (изображения + метки).
DatasetSummary — Immutable Pydantic модель сводной статистики.
Полная совместимость с JSON Schema (src/core/contracts/schema/dataset_summary.json).
"""

from dataclasses import dataclass
from typing import Dict, Final, Optional

import numpy as np
from pydantic import BaseModel, Field, field_validator

# Классы цифр MNIST
DIGIT_CLASSES: Final[tuple[str, ...]] = tuple(str(d) for d in range(10))


# =============================================================================
# DATASET
# =============================================================================


@dataclass(frozen=True)
class MnistDataset:
    """Загруженный датасет изображений и меток.

    images: (num_samples, rows * cols), float64, нормализовано в [0, 1]
    labels: (num_samples,), int64
    """

    images: np.ndarray
    labels: np.ndarray
    rows: int
    cols: int

    @property
    def num_samples(self) -> int:
        return int(self.images.shape[0])

    @property
    def num_features(self) -> int:
        return int(self.images.shape[1]) if self.images.ndim == 2 else 0


# =============================================================================
# SUMMARY MODELS
# =============================================================================


class ImageStatistics(BaseModel):
    """
    Статистика пикселей одного изображения.
    """

    mean: float = Field(..., ge=0, le=1, description="Среднее значение пикселя")
    std: float = Field(..., ge=0, description="Стандартное отклонение (population)")
    min: float = Field(..., ge=0, le=1, description="Минимальное значение пикселя")
    max: float = Field(..., ge=0, le=1, description="Максимальное значение пикселя")

    model_config = {"frozen": True}

    @field_validator("max")
    @classmethod
    def validate_max_not_below_min(cls, v: float, info) -> float:
        """Проверка, что max >= min"""
        if "min" in info.data and v < info.data["min"]:
            raise ValueError(f"max {v} must be >= min {info.data['min']}")
        return v


class DatasetSummary(BaseModel):
    """
    Сводка загруженного датасета.
    """

    name: str = Field(..., min_length=1, description="Имя датасета (train/test)")
    num_samples: int = Field(..., ge=0, description="Количество изображений")
    image_rows: int = Field(..., gt=0, description="Высота изображения (пиксели)")
    image_cols: int = Field(..., gt=0, description="Ширина изображения (пиксели)")
    num_features: int = Field(..., gt=0, description="Признаков на изображение (rows * cols)")
    first_image: Optional[ImageStatistics] = Field(
        None, description="Статистика первого изображения (nullable для пустого датасета)"
    )
    digit_counts: Dict[str, int] = Field(..., description="Количество образцов по цифрам 0-9")

    model_config = {"frozen": True}

    @field_validator("num_features")
    @classmethod
    def validate_num_features(cls, v: int, info) -> int:
        """Проверка, что num_features == image_rows * image_cols"""
        if "image_rows" in info.data and "image_cols" in info.data:
            expected = info.data["image_rows"] * info.data["image_cols"]
            if v != expected:
                raise ValueError(f"num_features {v} must equal image_rows * image_cols ({expected})")
        return v

    @field_validator("digit_counts")
    @classmethod
    def validate_digit_counts(cls, v: Dict[str, int]) -> Dict[str, int]:
        """Проверка, что ключи ровно '0'..'9' и счётчики неотрицательные"""
        if set(v) != set(DIGIT_CLASSES):
            raise ValueError(f"digit_counts keys must be {list(DIGIT_CLASSES)}, got {sorted(v)}")
        for digit, count in v.items():
            if count < 0:
                raise ValueError(f"digit_counts[{digit!r}] must be non-negative, got {count}")
        return v
