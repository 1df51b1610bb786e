"""
Тесты для IDX Loader

Проверяет:
1. Разбор заголовков и данных IDX файлов
2. Нормализацию пикселей в [0, 1]
3. Ошибки формата (magic, обрезанные файлы) и отсутствующие файлы
4. Несовпадение количества изображений и меток
5. Извлечение одного изображения и проверку диапазона
"""

from pathlib import Path

import numpy as np
import pytest

from src.core.domain.tolerance import TolerancePolicy
from src.datasets.idx_loader import (
    IMAGE_MAGIC,
    LABEL_MAGIC,
    DatasetError,
    DatasetFileNotFoundError,
    DatasetMismatchError,
    DatasetValueError,
    IdxFormatError,
    get_image,
    load_dataset,
    load_test,
    load_training,
    read_idx_images,
    read_idx_labels,
    validate_pixel_range,
)
from tests.conftest import write_idx_images, write_idx_labels


# =============================================================================
# ТЕСТЫ РАЗБОРА IDX
# =============================================================================


class TestReadIdxImages:
    """Тесты для read_idx_images"""

    def test_header_and_shape(self, idx_pair: tuple[Path, Path]) -> None:
        """Размеры берутся из big-endian заголовка"""
        pixels, rows, cols = read_idx_images(idx_pair[0])
        assert (rows, cols) == (4, 3)
        assert pixels.shape == (3, 12)
        assert pixels.dtype == np.uint8

    def test_pixel_values_preserved(self, idx_pair: tuple[Path, Path], sample_pixels: np.ndarray) -> None:
        """Байты пикселей читаются без изменений"""
        pixels, _, _ = read_idx_images(idx_pair[0])
        np.testing.assert_array_equal(pixels, sample_pixels.reshape(3, 12))

    def test_invalid_magic(self, tmp_path: Path, sample_pixels: np.ndarray) -> None:
        """Неверный magic number"""
        path = write_idx_images(tmp_path / "bad", sample_pixels, magic=LABEL_MAGIC)
        with pytest.raises(IdxFormatError, match="Invalid MNIST image file format"):
            read_idx_images(path)

    def test_truncated_header(self, tmp_path: Path) -> None:
        """Обрезанный заголовок"""
        path = tmp_path / "short"
        path.write_bytes(IMAGE_MAGIC.to_bytes(4, "big") + b"\x00\x00")
        with pytest.raises(IdxFormatError, match="Truncated"):
            read_idx_images(path)

    def test_empty_file(self, tmp_path: Path) -> None:
        """Пустой файл"""
        path = tmp_path / "empty"
        path.write_bytes(b"")
        with pytest.raises(IdxFormatError):
            read_idx_images(path)

    def test_truncated_payload(self, tmp_path: Path, sample_pixels: np.ndarray) -> None:
        """Данных меньше, чем заявлено в заголовке"""
        path = write_idx_images(tmp_path / "images", sample_pixels)
        path.write_bytes(path.read_bytes()[:-5])
        with pytest.raises(IdxFormatError, match="Truncated MNIST image data"):
            read_idx_images(path)

    @pytest.mark.parametrize("count, rows, cols", [(1, 0, 0), (2, 0, 3), (2, 4, 0), (0, 0, 0)])
    def test_zero_dimensions(self, tmp_path: Path, count: int, rows: int, cols: int) -> None:
        """Нулевые rows или cols в заголовке"""
        path = write_idx_images(tmp_path / "images", np.zeros((count, rows, cols), dtype=np.uint8))
        with pytest.raises(IdxFormatError, match="Invalid MNIST image dimensions"):
            read_idx_images(path)

    def test_missing_file(self, tmp_path: Path) -> None:
        """Отсутствующий файл"""
        missing = tmp_path / "nope"
        with pytest.raises(DatasetFileNotFoundError, match="Cannot open file"):
            read_idx_images(missing)

    def test_missing_file_is_file_not_found(self, tmp_path: Path) -> None:
        """DatasetFileNotFoundError совместим с FileNotFoundError"""
        with pytest.raises(FileNotFoundError):
            read_idx_images(tmp_path / "nope")


class TestReadIdxLabels:
    """Тесты для read_idx_labels"""

    def test_labels(self, idx_pair: tuple[Path, Path]) -> None:
        """Метки читаются как uint8"""
        labels = read_idx_labels(idx_pair[1])
        np.testing.assert_array_equal(labels, [7, 0, 7])

    def test_invalid_magic(self, tmp_path: Path) -> None:
        """Неверный magic number"""
        path = write_idx_labels(tmp_path / "bad", np.array([1, 2]), magic=IMAGE_MAGIC)
        with pytest.raises(IdxFormatError, match="Invalid MNIST label file format"):
            read_idx_labels(path)

    def test_truncated_payload(self, tmp_path: Path) -> None:
        """Данных меньше, чем заявлено"""
        path = write_idx_labels(tmp_path / "labels", np.array([1, 2, 3]))
        path.write_bytes(path.read_bytes()[:-1])
        with pytest.raises(IdxFormatError, match="Truncated MNIST label data"):
            read_idx_labels(path)

    def test_zero_labels(self, tmp_path: Path) -> None:
        """Пустой файл меток с корректным заголовком"""
        path = write_idx_labels(tmp_path / "labels", np.array([], dtype=np.uint8))
        assert read_idx_labels(path).shape == (0,)


# =============================================================================
# ТЕСТЫ ЗАГРУЗКИ ДАТАСЕТА
# =============================================================================


class TestLoadDataset:
    """Тесты для load_dataset / load_training / load_test"""

    def test_normalization(self, idx_pair: tuple[Path, Path]) -> None:
        """Пиксели нормализованы делением на 255"""
        dataset = load_dataset(*idx_pair)
        assert dataset.images.dtype == np.float64
        assert dataset.images[1].max() == 0.0
        assert dataset.images[2].min() == 1.0
        assert dataset.images[0, 1] == pytest.approx(23 / 255.0)

    def test_labels_int64(self, idx_pair: tuple[Path, Path]) -> None:
        """Метки int64"""
        dataset = load_dataset(*idx_pair)
        assert dataset.labels.dtype == np.int64
        np.testing.assert_array_equal(dataset.labels, [7, 0, 7])

    def test_dimensions(self, idx_pair: tuple[Path, Path]) -> None:
        """Размеры датасета"""
        dataset = load_dataset(*idx_pair)
        assert dataset.num_samples == 3
        assert dataset.num_features == 12
        assert (dataset.rows, dataset.cols) == (4, 3)

    def test_count_mismatch(self, tmp_path: Path, sample_pixels: np.ndarray) -> None:
        """Количество изображений не совпадает с количеством меток"""
        images = write_idx_images(tmp_path / "images", sample_pixels)
        labels = write_idx_labels(tmp_path / "labels", np.array([1, 2]))
        with pytest.raises(DatasetMismatchError, match="Mismatch between number of images and labels"):
            load_dataset(images, labels)

    def test_errors_share_base_class(self, tmp_path: Path) -> None:
        """Все ошибки загрузки — DatasetError"""
        with pytest.raises(DatasetError):
            load_dataset(tmp_path / "missing-images", tmp_path / "missing-labels")

    def test_training_and_test_layout(self, mnist_dir: Path) -> None:
        """Стандартные имена файлов MNIST"""
        train = load_training(mnist_dir)
        test = load_test(str(mnist_dir))
        assert train.num_samples == 3
        assert test.num_samples == 2

    def test_missing_directory(self, tmp_path: Path) -> None:
        """Каталог без файлов"""
        with pytest.raises(DatasetFileNotFoundError):
            load_training(tmp_path)


class TestGetImage:
    """Тесты для get_image"""

    def test_shape_and_values(self, idx_pair: tuple[Path, Path], sample_pixels: np.ndarray) -> None:
        """Изображение восстанавливается в форме (rows, cols)"""
        dataset = load_dataset(*idx_pair)
        image = get_image(dataset, 0)
        assert image.shape == (4, 3)
        np.testing.assert_allclose(image, sample_pixels[0] / 255.0)

    @pytest.mark.parametrize("index", [3, 100, -1])
    def test_out_of_range(self, idx_pair: tuple[Path, Path], index: int) -> None:
        """Индекс вне диапазона"""
        dataset = load_dataset(*idx_pair)
        with pytest.raises(IndexError, match="Image index out of range"):
            get_image(dataset, index)


class TestValidatePixelRange:
    """Тесты для validate_pixel_range"""

    def test_valid_range(self) -> None:
        """Значения в [0, 1]"""
        validate_pixel_range(np.array([0.0, 0.5, 1.0]))

    def test_empty(self) -> None:
        """Пустой массив допустим"""
        validate_pixel_range(np.array([]))

    def test_within_tolerance(self) -> None:
        """Выход за границу в пределах abs_tol допустим"""
        validate_pixel_range(np.array([-1e-12, 1.0 + 1e-12]))

    def test_below_zero(self) -> None:
        """Значение ниже 0 за пределами толерантности"""
        with pytest.raises(DatasetValueError, match="below 0.0"):
            validate_pixel_range(np.array([-0.01, 0.5]))

    def test_above_one(self) -> None:
        """Значение выше 1 за пределами толерантности"""
        with pytest.raises(DatasetValueError, match="above 1.0"):
            validate_pixel_range(np.array([0.5, 1.01]))

    def test_custom_policy(self) -> None:
        """Пользовательская политика расширяет допуск"""
        validate_pixel_range(np.array([0.5, 1.01]), TolerancePolicy(abs_tol=0.05))

    def test_non_finite(self) -> None:
        """NaN/Inf отклоняются"""
        with pytest.raises(DatasetValueError, match="finite"):
            validate_pixel_range(np.array([0.5, np.nan]))
        with pytest.raises(DatasetValueError, match="finite"):
            validate_pixel_range(np.array([np.inf]))
