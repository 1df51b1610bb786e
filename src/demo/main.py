"""
MNIST Demo — консольный драйвер

Загружает обучающую и тестовую выборки, печатает статистику, несколько
образцов изображений, статистику первого изображения и распределение цифр.
В режиме --json печатает сводки, проверенные контрактом dataset_summary.

Коды возврата:
    0 — успех
    1 — ошибка загрузки датасета (сообщение "Error: ..." в stderr)
    2 — неверные аргументы командной строки (argparse)
"""

import argparse
import json
import logging
import sys
from typing import Final, Optional, Sequence, TextIO

from pydantic import BaseModel, Field, ValidationError

from src.core.contracts import validate_dataset_summary
from src.core.domain.dataset import MnistDataset
from src.datasets.console import render_image
from src.datasets.idx_loader import DEFAULT_DATA_PATH, DatasetError, get_image, load_test, load_training
from src.datasets.statistics import summarize_dataset
from src.demo.logging_config import LOG_LEVELS, setup_logging

logger = logging.getLogger(__name__)

DEFAULT_SAMPLES: Final[int] = 30


# =============================================================================
# CONFIG
# =============================================================================


class DemoConfig(BaseModel):
    """Конфигурация демо (из аргументов командной строки)."""

    data_path: str = Field(DEFAULT_DATA_PATH, min_length=1, description="Каталог с IDX файлами")
    samples: int = Field(DEFAULT_SAMPLES, ge=0, description="Сколько образцов нарисовать")
    json_output: bool = Field(False, description="Печатать JSON сводки вместо отчёта")
    log_level: str = Field("WARNING", description="Уровень логирования")

    model_config = {"frozen": True}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mnist-demo",
        description="Load the MNIST IDX dataset and print statistics and sample images.",
    )
    parser.add_argument("--data-path", default=DEFAULT_DATA_PATH, help="directory with the IDX files")
    parser.add_argument("--samples", type=int, default=DEFAULT_SAMPLES, help="number of sample images to draw")
    parser.add_argument("--json", action="store_true", dest="json_output", help="print dataset summaries as JSON")
    parser.add_argument("--log-level", default="WARNING", choices=LOG_LEVELS, type=str.upper)
    return parser


def parse_config(argv: Optional[Sequence[str]] = None) -> DemoConfig:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        return DemoConfig(
            data_path=args.data_path,
            samples=args.samples,
            json_output=args.json_output,
            log_level=args.log_level,
        )
    except ValidationError as exc:
        parser.error(str(exc))


# =============================================================================
# REPORTS
# =============================================================================


def print_report(train: MnistDataset, test: MnistDataset, samples: int, out: TextIO) -> None:
    """Человекочитаемый отчёт по загруженным выборкам."""
    print("\n=== Dataset Statistics ===", file=out)
    print(f"Training set: {train.num_samples} samples", file=out)
    print(f"Test set: {test.num_samples} samples", file=out)
    print(
        f"Image dimensions: {train.rows}x{train.cols} pixels ({train.num_features} features)",
        file=out,
    )

    print("\n=== Sample Images ===", file=out)
    for i in range(min(samples, train.num_samples)):
        print(f"\nSample {i + 1} - Label: {int(train.labels[i])}", file=out)
        print(render_image(get_image(train, i)), file=out)

    summary = summarize_dataset(train, "train")

    print("\n=== Mathematical Analysis ===", file=out)
    if summary.first_image is not None:
        stats = summary.first_image
        print("First image statistics:", file=out)
        print(f"  Mean pixel value: {stats.mean:g}", file=out)
        print(f"  Standard deviation: {stats.std:g}", file=out)
        print(f"  Min pixel value: {stats.min:g}", file=out)
        print(f"  Max pixel value: {stats.max:g}", file=out)
    else:
        print("Training set is empty", file=out)

    print("\n=== Digit Distribution ===", file=out)
    for digit, count in summary.digit_counts.items():
        print(f"Digit {digit}: {count} samples", file=out)


def build_json_report(train: MnistDataset, test: MnistDataset) -> dict:
    """Сводки train/test, проверенные контрактом dataset_summary."""
    report = {}
    for name, dataset in (("train", train), ("test", test)):
        data = summarize_dataset(dataset, name).model_dump()
        validate_dataset_summary(data)
        report[name] = data
    return report


# =============================================================================
# ENTRY POINT
# =============================================================================


def run(config: DemoConfig, out: TextIO) -> None:
    if config.json_output:
        train = load_training(config.data_path)
        test = load_test(config.data_path)
        json.dump(build_json_report(train, test), out, indent=2)
        out.write("\n")
        return

    print("=== MNIST Dataset Demo ===", file=out)
    print("Loading MNIST training dataset...", file=out)
    train = load_training(config.data_path)
    print(f"✓ Loaded {train.num_samples} training images", file=out)

    print("Loading MNIST test dataset...", file=out)
    test = load_test(config.data_path)
    print(f"✓ Loaded {test.num_samples} test images", file=out)

    print_report(train, test, config.samples, out)

    print("\n✓ MNIST dataset successfully loaded and analyzed!", file=out)
    print("Ready for machine learning algorithms!", file=out)


def main(argv: Optional[Sequence[str]] = None) -> int:
    config = parse_config(argv)
    setup_logging(config.log_level)
    logger.debug("Demo config: %s", config.model_dump())

    try:
        run(config, sys.stdout)
    except (DatasetError, OSError) as exc:
        logger.debug("Dataset loading failed", exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
