"""
Console — Вывод изображения в консоль

Изображение рисуется в рамке из box-drawing символов, каждый пиксель
заменяется символом по яркости.
"""

import sys
from typing import Final, TextIO

import numpy as np

# Пороги яркости (верхняя граница, не включительно) и символы
SHADES: Final[tuple[tuple[float, str], ...]] = (
    (0.1, " "),
    (0.3, "·"),
    (0.5, "▪"),
    (0.7, "▫"),
)
FULL_SHADE: Final[str] = "█"


def pixel_char(pixel: float) -> str:
    for upper, char in SHADES:
        if pixel < upper:
            return char
    return FULL_SHADE


def render_image(image: np.ndarray) -> str:
    """
    Рендер 2D изображения (значения в [0, 1]) в многострочную строку.

    Args:
        image: Массив формы (rows, cols)

    Returns:
        Строка с рамкой, без завершающего перевода строки
    """
    if image.ndim != 2:
        raise ValueError(f"image must be 2-dimensional, got shape {image.shape}")

    width = image.shape[1]
    lines = ["┌" + "─" * width + "┐"]
    for row in image:
        lines.append("│" + "".join(pixel_char(float(p)) for p in row) + "│")
    lines.append("└" + "─" * width + "┘")
    return "\n".join(lines)


def print_image(image: np.ndarray, stream: TextIO | None = None) -> None:
    """Печать изображения в stream (по умолчанию sys.stdout)."""
    out = stream if stream is not None else sys.stdout
    out.write(render_image(image) + "\n")
