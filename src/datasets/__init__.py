"""
IDX (MNIST) dataset loading, statistics and console rendering.
"""

from src.datasets.console import print_image, render_image
from src.datasets.idx_loader import (
    DEFAULT_DATA_PATH,
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
from src.datasets.statistics import digit_counts, image_statistics, summarize_dataset

__all__ = [
    # Constants
    "DEFAULT_DATA_PATH",
    "IMAGE_MAGIC",
    "LABEL_MAGIC",
    # Exceptions
    "DatasetError",
    "DatasetFileNotFoundError",
    "DatasetMismatchError",
    "DatasetValueError",
    "IdxFormatError",
    # Loading
    "get_image",
    "load_dataset",
    "load_test",
    "load_training",
    "read_idx_images",
    "read_idx_labels",
    "validate_pixel_range",
    # Statistics
    "digit_counts",
    "image_statistics",
    "summarize_dataset",
    # Console
    "print_image",
    "render_image",
]
