"""
Comparison — Толерантные сравнения float

Модуль содержит примитивы сравнения IEEE-754 double (Python float) с учётом
ошибок округления:
- Равенство по абсолютной, относительной и комбинированной толерантности
- Толерантные сравнения порядка (<, <=, >, >=)
- Проверки на ноль
- Метрики разницы (абсолютная, относительная)
- Совпадение знаков
- Толерантный clamp с прилипанием к границам

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Все функции чистые и тотальные: никаких исключений на любых float входах
2. NaN никогда не равен ничему (включая себя)
3. Бесконечности равны только бесконечностям того же знака
4. Толерантности не валидируются: отрицательное значение делает сравнение
   строже точного (см. TolerancePolicy для валидированной конфигурации)
5. Глобальное состояние — только неизменяемые константы
"""

import math
import sys
from typing import Final

# =============================================================================
# КОНСТАНТЫ ТОЛЕРАНТНОСТИ
# =============================================================================

# Абсолютная толерантность по умолчанию
DEFAULT_EPSILON: Final[float] = 1e-9

# Относительная толерантность по умолчанию (доля от большего по модулю операнда)
DEFAULT_RELATIVE_TOLERANCE: Final[float] = 1e-9

# Машинный epsilon: значения строго меньше по модулю считаются "фактически нулём"
MACHINE_EPSILON: Final[float] = sys.float_info.epsilon


def _is_effectively_zero(value: float) -> bool:
    return abs(value) < MACHINE_EPSILON


def _either_infinite(a: float, b: float) -> bool:
    return math.isinf(a) or math.isinf(b)


# =============================================================================
# РАВЕНСТВО
# =============================================================================


def is_equal(a: float, b: float, epsilon: float = DEFAULT_EPSILON) -> bool:
    """
    Равенство по абсолютной толерантности.

    Алгоритм:
        NaN → False
        inf → a == b (только бесконечности одного знака)
        иначе abs(a - b) <= epsilon

    Args:
        a: Первое значение
        b: Второе значение
        epsilon: Абсолютная толерантность (default: DEFAULT_EPSILON)

    Returns:
        True если значения равны в пределах epsilon

    Examples:
        >>> is_equal(1.0, 1.0 + 1e-10)
        True
        >>> is_equal(1.0, 1.0 + 1e-8)
        False
        >>> is_equal(float("nan"), float("nan"))
        False
    """
    if math.isnan(a) or math.isnan(b):
        return False
    if _either_infinite(a, b):
        return a == b
    return abs(a - b) <= epsilon


def is_equal_relative(
    a: float,
    b: float,
    relative_tolerance: float = DEFAULT_RELATIVE_TOLERANCE,
) -> bool:
    """
    Равенство по относительной толерантности.

    Алгоритм:
        NaN → False
        inf → a == b
        оба |x| < MACHINE_EPSILON → True (защита от деления на "почти ноль")
        иначе abs(a - b) <= relative_tolerance * max(abs(a), abs(b))

    Args:
        a: Первое значение
        b: Второе значение
        relative_tolerance: Относительная толерантность (default: DEFAULT_RELATIVE_TOLERANCE)

    Returns:
        True если значения равны в пределах относительной толерантности

    Examples:
        >>> is_equal_relative(1e10, 1e10 * (1 + 1e-10))
        True
        >>> is_equal_relative(1e10, 1e10 * (1 + 1e-8))
        False
        >>> is_equal_relative(1e-20, 0.0)
        True
    """
    if math.isnan(a) or math.isnan(b):
        return False
    if _either_infinite(a, b):
        return a == b
    if _is_effectively_zero(a) and _is_effectively_zero(b):
        return True

    max_value = max(abs(a), abs(b))
    return abs(a - b) <= relative_tolerance * max_value


def is_equal_combined(
    a: float,
    b: float,
    absolute_tolerance: float = DEFAULT_EPSILON,
    relative_tolerance: float = DEFAULT_RELATIVE_TOLERANCE,
) -> bool:
    """
    Равенство по объединённой политике: абсолютная ИЛИ относительная толерантность.

    Для значений около нуля срабатывает абсолютная проверка, для больших
    значений — относительная. Вызывающему не нужно выбирать политику.

    Алгоритм:
        NaN → False
        inf → a == b
        abs(a - b) <= absolute_tolerance
        или abs(a - b) <= relative_tolerance * max(abs(a), abs(b))

    Args:
        a: Первое значение
        b: Второе значение
        absolute_tolerance: Абсолютная толерантность (default: DEFAULT_EPSILON)
        relative_tolerance: Относительная толерантность (default: DEFAULT_RELATIVE_TOLERANCE)

    Returns:
        True если выполнена хотя бы одна из проверок

    Examples:
        >>> is_equal_combined(1e-15, 2e-15, 1e-14, 1e-6)
        True
        >>> is_equal_combined(1e10, 1e10 * (1 + 1e-10), 1e-5, 1e-9)
        True
        >>> is_equal_combined(1.0, 2.0, 1e-9, 1e-9)
        False
    """
    if math.isnan(a) or math.isnan(b):
        return False
    if _either_infinite(a, b):
        return a == b

    diff = abs(a - b)
    if diff <= absolute_tolerance:
        return True

    max_value = max(abs(a), abs(b))
    return diff <= relative_tolerance * max_value


# =============================================================================
# ТОЛЕРАНТНЫЙ ПОРЯДОК
# =============================================================================
# Полоса равенства шириной 2 * epsilon вокруг b: внутри неё значение
# одновременно "не меньше", "не больше" и равно.
# NaN даёт False через семантику операторов, inf сравнивается как обычно.


def is_less(a: float, b: float, epsilon: float = DEFAULT_EPSILON) -> bool:
    """a строго меньше b с учётом толерантности: a < b - epsilon."""
    return a < b - epsilon


def is_less_or_equal(a: float, b: float, epsilon: float = DEFAULT_EPSILON) -> bool:
    """a меньше или равно b с учётом толерантности: a <= b + epsilon."""
    return a <= b + epsilon


def is_greater(a: float, b: float, epsilon: float = DEFAULT_EPSILON) -> bool:
    """a строго больше b с учётом толерантности: a > b + epsilon."""
    return a > b + epsilon


def is_greater_or_equal(a: float, b: float, epsilon: float = DEFAULT_EPSILON) -> bool:
    """a больше или равно b с учётом толерантности: a >= b - epsilon."""
    return a >= b - epsilon


# =============================================================================
# ПРОВЕРКИ НА НОЛЬ
# =============================================================================


def is_zero(value: float, epsilon: float = DEFAULT_EPSILON) -> bool:
    """
    Проверка, близко ли значение к нулю.

    Args:
        value: Проверяемое значение
        epsilon: Абсолютная толерантность (default: DEFAULT_EPSILON)

    Returns:
        True если abs(value) <= epsilon
    """
    return abs(value) <= epsilon


def is_zero_relative(value: float, bound: float = DEFAULT_RELATIVE_TOLERANCE) -> bool:
    """
    Проверка на ноль с границей по умолчанию из относительной толерантности.

    ВАЖНО: второго операнда для масштабирования нет, поэтому bound
    интерпретируется как абсолютная граница. Относительной семантики здесь нет.

    Args:
        value: Проверяемое значение
        bound: Абсолютная граница (default: DEFAULT_RELATIVE_TOLERANCE)

    Returns:
        True если abs(value) <= bound
    """
    return abs(value) <= bound


# =============================================================================
# МЕТРИКИ РАЗНИЦЫ
# =============================================================================


def absolute_difference(a: float, b: float) -> float:
    """
    Абсолютная разница abs(a - b).

    Симметрична. NaN пропагирует, inf и -inf дают +inf.
    """
    return abs(a - b)


def relative_difference(a: float, b: float) -> float:
    """
    Относительная разница с опорным значением a.

    Функция НЕ симметрична: relative_difference(100, 110) == 0.1,
    relative_difference(110, 100) ~ 0.0909. Для симметричной проверки
    используйте is_equal_relative.

    Алгоритм:
        NaN → NaN
        inf: равные → 0.0, иначе → +inf
        оба фактически ноль → 0.0
        a фактически ноль → abs(a - b) / abs(b)
        иначе → abs(a - b) / abs(a)

    Args:
        a: Опорное значение
        b: Сравниваемое значение

    Returns:
        Относительная разница (>= 0, NaN или +inf)

    Examples:
        >>> relative_difference(100.0, 110.0)
        0.1
        >>> relative_difference(0.0, 1.0)
        1.0
        >>> relative_difference(float("inf"), float("-inf"))
        inf
    """
    if math.isnan(a) or math.isnan(b):
        return math.nan

    if _either_infinite(a, b):
        if a == b:
            return 0.0
        return math.inf

    a_zero = _is_effectively_zero(a)
    if a_zero and _is_effectively_zero(b):
        return 0.0

    # Опорное значение почти ноль: переключаемся на b
    if a_zero:
        return abs(a - b) / abs(b)

    return abs(a - b) / abs(a)


# =============================================================================
# ЗНАК И CLAMP
# =============================================================================


def same_sign(a: float, b: float) -> bool:
    """
    Проверка совпадения знаков.

    Ноль (в пределах DEFAULT_EPSILON) совместим с любым знаком, когда
    оба значения нулевые. Иначе: оба >= 0 или оба < 0.

    Examples:
        >>> same_sign(0.0, -1e-10)
        True
        >>> same_sign(1.0, -1.0)
        False
    """
    if is_zero(a) and is_zero(b):
        return True
    return (a >= 0 and b >= 0) or (a < 0 and b < 0)


def clamp(
    value: float,
    min_value: float,
    max_value: float,
    epsilon: float = DEFAULT_EPSILON,
) -> float:
    """
    Ограничение значения диапазоном с прилипанием к границам.

    Перепутанные границы (min_value > max_value) молча меняются местами.
    Значения в пределах epsilon от границы возвращаются ровно как граница,
    без численного "хвоста".

    Args:
        value: Исходное значение
        min_value: Нижняя граница
        max_value: Верхняя граница
        epsilon: Толерантность для проверки границ (default: DEFAULT_EPSILON)

    Returns:
        min_value, max_value или value без изменений

    Examples:
        >>> clamp(1e-10, 0.0, 10.0, 1e-9)
        0.0
        >>> clamp(15.0, 10.0, 0.0)
        10.0
        >>> clamp(5.0, 0.0, 10.0)
        5.0
    """
    if min_value > max_value:
        min_value, max_value = max_value, min_value

    if is_less_or_equal(value, min_value, epsilon):
        return min_value
    if is_greater_or_equal(value, max_value, epsilon):
        return max_value
    return value
