"""
IDX Loader — Загрузчик MNIST датасета

Формат IDX (big-endian):
- Файл изображений: magic 0x00000803, count, rows, cols (uint32), затем
  count * rows * cols байт пикселей
- Файл меток: magic 0x00000801, count (uint32), затем count байт меток

Пиксели нормализуются в [0, 1] делением на 255. После нормализации диапазон
проверяется толерантными сравнениями (TolerancePolicy).
"""

import logging
from pathlib import Path
from typing import Final

import numpy as np

from src.core.domain.dataset import MnistDataset
from src.core.domain.tolerance import DEFAULT_POLICY, TolerancePolicy

logger = logging.getLogger(__name__)

# =============================================================================
# CONSTANTS
# =============================================================================

IMAGE_MAGIC: Final[int] = 0x00000803
LABEL_MAGIC: Final[int] = 0x00000801

# Размеры заголовков (байты)
IMAGE_HEADER_SIZE: Final[int] = 16
LABEL_HEADER_SIZE: Final[int] = 8

# Максимальное значение пикселя (uint8)
PIXEL_MAX: Final[float] = 255.0

DEFAULT_DATA_PATH: Final[str] = "../data/mnist/"

TRAIN_IMAGES_FILE: Final[str] = "train-images-idx3-ubyte"
TRAIN_LABELS_FILE: Final[str] = "train-labels-idx1-ubyte"
TEST_IMAGES_FILE: Final[str] = "t10k-images-idx3-ubyte"
TEST_LABELS_FILE: Final[str] = "t10k-labels-idx1-ubyte"

_BIG_ENDIAN_U32 = np.dtype(">u4")


# =============================================================================
# EXCEPTIONS
# =============================================================================


class DatasetError(Exception):
    """Базовая ошибка загрузки датасета."""


class DatasetFileNotFoundError(DatasetError, FileNotFoundError):
    """Файл датасета не найден."""


class IdxFormatError(DatasetError, ValueError):
    """Неверный magic number или обрезанный файл."""


class DatasetMismatchError(DatasetError, ValueError):
    """Количество изображений не совпадает с количеством меток."""


class DatasetValueError(DatasetError, ValueError):
    """Значения пикселей вне [0, 1] или не finite."""


# =============================================================================
# IDX PARSING
# =============================================================================


def _read_bytes(path: Path) -> bytes:
    try:
        with open(path, "rb") as f:
            return f.read()
    except FileNotFoundError as exc:
        raise DatasetFileNotFoundError(f"Cannot open file: {path}") from exc


def _read_header(data: bytes, count: int, path: Path, kind: str) -> np.ndarray:
    size = count * _BIG_ENDIAN_U32.itemsize
    if len(data) < size:
        raise IdxFormatError(
            f"Truncated MNIST {kind} file header in {path}: expected {size} bytes, got {len(data)}"
        )
    return np.frombuffer(data, dtype=_BIG_ENDIAN_U32, count=count).astype(np.int64)


def read_idx_images(path: str | Path) -> tuple[np.ndarray, int, int]:
    """
    Чтение IDX файла изображений.

    Args:
        path: Путь к файлу (например, train-images-idx3-ubyte)

    Returns:
        (pixels, rows, cols), где pixels — uint8 массив формы (count, rows * cols)

    Raises:
        DatasetFileNotFoundError: Если файл не найден
        IdxFormatError: Если magic number неверный, размер изображения нулевой или файл обрезан
    """
    path = Path(path)
    data = _read_bytes(path)

    magic = int(_read_header(data, 1, path, "image")[0])
    if magic != IMAGE_MAGIC:
        raise IdxFormatError("Invalid MNIST image file format")

    _, count, rows, cols = (int(v) for v in _read_header(data, 4, path, "image"))
    logger.debug("Image header %s: count=%d rows=%d cols=%d", path, count, rows, cols)
    if rows == 0 or cols == 0:
        raise IdxFormatError(f"Invalid MNIST image dimensions in {path}: {rows}x{cols}")

    image_size = rows * cols
    total_size = count * image_size
    payload = data[IMAGE_HEADER_SIZE:]
    if len(payload) < total_size:
        raise IdxFormatError(
            f"Truncated MNIST image data in {path}: expected {total_size} bytes, got {len(payload)}"
        )

    if total_size == 0:
        return np.empty((count, image_size), dtype=np.uint8), rows, cols

    pixels = np.frombuffer(payload, dtype=np.uint8, count=total_size)
    return pixels.reshape(count, image_size), rows, cols


def read_idx_labels(path: str | Path) -> np.ndarray:
    """
    Чтение IDX файла меток.

    Returns:
        uint8 массив меток формы (count,)

    Raises:
        DatasetFileNotFoundError: Если файл не найден
        IdxFormatError: Если magic number неверный или файл обрезан
    """
    path = Path(path)
    data = _read_bytes(path)

    magic = int(_read_header(data, 1, path, "label")[0])
    if magic != LABEL_MAGIC:
        raise IdxFormatError("Invalid MNIST label file format")

    count = int(_read_header(data, 2, path, "label")[1])
    logger.debug("Label header %s: count=%d", path, count)

    payload = data[LABEL_HEADER_SIZE:]
    if len(payload) < count:
        raise IdxFormatError(
            f"Truncated MNIST label data in {path}: expected {count} bytes, got {len(payload)}"
        )

    if count == 0:
        return np.empty(0, dtype=np.uint8)
    return np.frombuffer(payload, dtype=np.uint8, count=count)


# =============================================================================
# VALIDATION
# =============================================================================


def validate_pixel_range(images: np.ndarray, policy: TolerancePolicy = DEFAULT_POLICY) -> None:
    """
    Проверка, что нормализованные пиксели лежат в [0, 1] с учётом толерантности.

    Raises:
        DatasetValueError: Если есть NaN/Inf или значения вне [0, 1] за пределами abs_tol
    """
    if images.size == 0:
        return

    if not np.isfinite(images).all():
        raise DatasetValueError("Pixel values must be finite")

    lowest = float(images.min())
    highest = float(images.max())
    if not policy.greater_or_equal(lowest, 0.0):
        raise DatasetValueError(f"Pixel value {lowest} below 0.0")
    if not policy.less_or_equal(highest, 1.0):
        raise DatasetValueError(f"Pixel value {highest} above 1.0")


# =============================================================================
# DATASET LOADING
# =============================================================================


def load_dataset(
    image_file: str | Path,
    label_file: str | Path,
    policy: TolerancePolicy = DEFAULT_POLICY,
) -> MnistDataset:
    """
    Загрузка пары файлов изображений и меток.

    Args:
        image_file: Путь к IDX файлу изображений
        label_file: Путь к IDX файлу меток
        policy: Политика толерантности для проверки диапазона пикселей

    Returns:
        MnistDataset с изображениями в [0, 1] и метками int64

    Raises:
        DatasetError: Любая ошибка формата, отсутствия файла или несовпадения размеров
    """
    pixels, rows, cols = read_idx_images(image_file)
    raw_labels = read_idx_labels(label_file)

    if pixels.shape[0] != raw_labels.shape[0]:
        raise DatasetMismatchError("Mismatch between number of images and labels")

    images = pixels.astype(np.float64) / PIXEL_MAX
    validate_pixel_range(images, policy)

    logger.info(
        "Loaded %d images (%dx%d) from %s", pixels.shape[0], rows, cols, Path(image_file).name
    )
    return MnistDataset(
        images=images,
        labels=raw_labels.astype(np.int64),
        rows=rows,
        cols=cols,
    )


def load_training(data_path: str | Path = DEFAULT_DATA_PATH) -> MnistDataset:
    """Загрузка обучающей выборки из data_path."""
    base = Path(data_path)
    return load_dataset(base / TRAIN_IMAGES_FILE, base / TRAIN_LABELS_FILE)


def load_test(data_path: str | Path = DEFAULT_DATA_PATH) -> MnistDataset:
    """Загрузка тестовой выборки из data_path."""
    base = Path(data_path)
    return load_dataset(base / TEST_IMAGES_FILE, base / TEST_LABELS_FILE)


def get_image(dataset: MnistDataset, index: int) -> np.ndarray:
    """
    Извлечение одного изображения формы (rows, cols).

    Raises:
        IndexError: Если index вне [0, num_samples)
    """
    if index < 0 or index >= dataset.labels.shape[0]:
        raise IndexError("Image index out of range")
    return dataset.images[index].reshape(dataset.rows, dataset.cols)
