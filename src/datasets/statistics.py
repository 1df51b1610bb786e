"""
Statistics — Сводная статистика загруженного датасета

Формирует DatasetSummary (см. src.core.domain.dataset) для отчёта и JSON
контракта dataset_summary.
"""

from typing import Dict

import numpy as np

from src.core.domain.dataset import DIGIT_CLASSES, DatasetSummary, ImageStatistics, MnistDataset
from src.core.domain.tolerance import DEFAULT_POLICY, TolerancePolicy


def image_statistics(pixels: np.ndarray, policy: TolerancePolicy = DEFAULT_POLICY) -> ImageStatistics:
    """
    Статистика пикселей одного изображения.

    Все значения прижимаются к [0, 1] толерантным clamp, чтобы ошибка
    суммирования или допуск проверки диапазона не выводили их за границы контракта.

    Args:
        pixels: Непустой массив значений в [0, 1]
        policy: Политика толерантности

    Returns:
        ImageStatistics (std — population, ddof=0)
    """
    values = np.asarray(pixels, dtype=np.float64).ravel()
    if values.size == 0:
        raise ValueError("pixels must not be empty")

    return ImageStatistics(
        mean=policy.clamp(float(values.mean()), 0.0, 1.0),
        std=policy.clamp(float(values.std()), 0.0, 1.0),
        min=policy.clamp(float(values.min()), 0.0, 1.0),
        max=policy.clamp(float(values.max()), 0.0, 1.0),
    )


def digit_counts(labels: np.ndarray) -> Dict[str, int]:
    """Количество меток по цифрам 0-9 (метки вне диапазона не учитываются)."""
    labels = np.asarray(labels, dtype=np.int64)
    in_range = labels[(labels >= 0) & (labels < len(DIGIT_CLASSES))]
    counts = np.bincount(in_range, minlength=len(DIGIT_CLASSES))
    return {digit: int(counts[i]) for i, digit in enumerate(DIGIT_CLASSES)}


def summarize_dataset(
    dataset: MnistDataset,
    name: str,
    policy: TolerancePolicy = DEFAULT_POLICY,
) -> DatasetSummary:
    """
    Сводка датасета: размеры, статистика первого изображения, распределение цифр.

    Args:
        dataset: Загруженный датасет
        name: Имя датасета (например, 'train' или 'test')
        policy: Политика толерантности для статистики

    Returns:
        DatasetSummary (first_image = None для пустого датасета)
    """
    first_image = None
    if dataset.num_samples > 0:
        first_image = image_statistics(dataset.images[0], policy)

    return DatasetSummary(
        name=name,
        num_samples=dataset.num_samples,
        image_rows=dataset.rows,
        image_cols=dataset.cols,
        num_features=dataset.rows * dataset.cols,
        first_image=first_image,
        digit_counts=digit_counts(dataset.labels),
    )
