"""
TolerancePolicy — Валидированная конфигурация толерантностей

Immutable Pydantic модель, которая связывает пару (abs_tol, rel_tol) и
делегирует сравнения примитивам из src.core.math.comparison.

Примитивы сравнения толерантности не проверяют. Проверка выполняется здесь,
на границе конфигурации: отрицательные и нефинитные значения отклоняются
с pydantic.ValidationError.
"""

from pydantic import BaseModel, Field

from src.core.math.comparison import (
    DEFAULT_EPSILON,
    DEFAULT_RELATIVE_TOLERANCE,
    clamp,
    is_equal_combined,
    is_greater,
    is_greater_or_equal,
    is_less,
    is_less_or_equal,
    is_zero,
)


class TolerancePolicy(BaseModel):
    """
    Политика толерантности для сравнений float.

    Равенство — объединённая политика (абсолютная ИЛИ относительная),
    порядок, ноль и clamp используют только abs_tol.
    """

    abs_tol: float = Field(
        DEFAULT_EPSILON,
        ge=0,
        allow_inf_nan=False,
        description="Абсолютная толерантность",
    )
    rel_tol: float = Field(
        DEFAULT_RELATIVE_TOLERANCE,
        ge=0,
        allow_inf_nan=False,
        description="Относительная толерантность (доля от большего операнда)",
    )

    model_config = {"frozen": True}

    def equal(self, a: float, b: float) -> bool:
        return is_equal_combined(a, b, self.abs_tol, self.rel_tol)

    def less(self, a: float, b: float) -> bool:
        return is_less(a, b, self.abs_tol)

    def less_or_equal(self, a: float, b: float) -> bool:
        return is_less_or_equal(a, b, self.abs_tol)

    def greater(self, a: float, b: float) -> bool:
        return is_greater(a, b, self.abs_tol)

    def greater_or_equal(self, a: float, b: float) -> bool:
        return is_greater_or_equal(a, b, self.abs_tol)

    def zero(self, value: float) -> bool:
        return is_zero(value, self.abs_tol)

    def clamp(self, value: float, min_value: float, max_value: float) -> float:
        return clamp(value, min_value, max_value, self.abs_tol)


# Политика по умолчанию (константы модуля comparison)
DEFAULT_POLICY = TolerancePolicy()
