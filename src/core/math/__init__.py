"""
Core math modules

Примитивы толерантного сравнения float.
"""

from src.core.math.comparison import (
    # Tolerance constants
    DEFAULT_EPSILON,
    DEFAULT_RELATIVE_TOLERANCE,
    MACHINE_EPSILON,
    # Equality
    is_equal,
    is_equal_combined,
    is_equal_relative,
    # Ordering
    is_greater,
    is_greater_or_equal,
    is_less,
    is_less_or_equal,
    # Zero checks
    is_zero,
    is_zero_relative,
    # Differences
    absolute_difference,
    relative_difference,
    # Sign and clamp
    clamp,
    same_sign,
)

__all__ = [
    # Tolerance constants
    "DEFAULT_EPSILON",
    "DEFAULT_RELATIVE_TOLERANCE",
    "MACHINE_EPSILON",
    # Equality
    "is_equal",
    "is_equal_combined",
    "is_equal_relative",
    # Ordering
    "is_greater",
    "is_greater_or_equal",
    "is_less",
    "is_less_or_equal",
    # Zero checks
    "is_zero",
    "is_zero_relative",
    # Differences
    "absolute_difference",
    "relative_difference",
    # Sign and clamp
    "clamp",
    "same_sign",
]
