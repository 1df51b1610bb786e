"""
Общие fixtures: синтетические IDX файлы в tmp_path.
"""

import struct
from pathlib import Path

import numpy as np
import pytest

from src.datasets.idx_loader import (
    IMAGE_MAGIC,
    LABEL_MAGIC,
    TEST_IMAGES_FILE,
    TEST_LABELS_FILE,
    TRAIN_IMAGES_FILE,
    TRAIN_LABELS_FILE,
)


def write_idx_images(path: Path, pixels: np.ndarray, magic: int = IMAGE_MAGIC) -> Path:
    """Запись uint8 массива формы (count, rows, cols) в IDX файл изображений."""
    count, rows, cols = pixels.shape
    header = struct.pack(">IIII", magic, count, rows, cols)
    path.write_bytes(header + pixels.astype(np.uint8).tobytes())
    return path


def write_idx_labels(path: Path, labels: np.ndarray, magic: int = LABEL_MAGIC) -> Path:
    """Запись uint8 массива меток в IDX файл меток."""
    header = struct.pack(">II", magic, len(labels))
    path.write_bytes(header + np.asarray(labels, dtype=np.uint8).tobytes())
    return path


@pytest.fixture
def sample_pixels() -> np.ndarray:
    """Три изображения 4x3: градиент, пустое и полностью залитое."""
    gradient = np.arange(12, dtype=np.uint8).reshape(4, 3) * 23
    blank = np.zeros((4, 3), dtype=np.uint8)
    full = np.full((4, 3), 255, dtype=np.uint8)
    return np.stack([gradient, blank, full])


@pytest.fixture
def sample_labels() -> np.ndarray:
    return np.array([7, 0, 7], dtype=np.uint8)


@pytest.fixture
def idx_pair(tmp_path: Path, sample_pixels: np.ndarray, sample_labels: np.ndarray) -> tuple[Path, Path]:
    """Пара (images, labels) IDX файлов."""
    images = write_idx_images(tmp_path / "images-idx3-ubyte", sample_pixels)
    labels = write_idx_labels(tmp_path / "labels-idx1-ubyte", sample_labels)
    return images, labels


@pytest.fixture
def mnist_dir(tmp_path: Path, sample_pixels: np.ndarray, sample_labels: np.ndarray) -> Path:
    """Каталог с train/test файлами в раскладке MNIST."""
    data_dir = tmp_path / "mnist"
    data_dir.mkdir()
    write_idx_images(data_dir / TRAIN_IMAGES_FILE, sample_pixels)
    write_idx_labels(data_dir / TRAIN_LABELS_FILE, sample_labels)
    write_idx_images(data_dir / TEST_IMAGES_FILE, sample_pixels[:2])
    write_idx_labels(data_dir / TEST_LABELS_FILE, sample_labels[:2])
    return data_dir
