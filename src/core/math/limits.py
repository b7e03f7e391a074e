"""
Iteration Limits — статические границы циклов

Все итеративные алгоритмы модуля ограничены фиксированным числом шагов.
Границы выбраны так, чтобы гарантировать сходимость до полной точности,
а не как тайм-ауты:

- sqrt_iterations: итерации Newton-Raphson на 64-bit fixed-point. 8 шагов
  достаточно при начальном приближении 0.5*x + 0.5. При смене ширины
  fixed-point границу нужно перепроверить.
- series_terms: максимальная степень ряда Тейлора в log1p2x. Члены
  суммируются парами (нечётный, чётный), поэтому значение чётное.
- restoring_steps: число бит-позиций restoring log. 130 шагов покрывают
  весь диапазон [1, 4.768462] с точностью extended.

Immutable Pydantic модель.
"""

from typing import Final

from pydantic import BaseModel, Field, field_validator


class IterationLimits(BaseModel):
    """Границы итераций для sqrt / log1p2x / log_small."""

    sqrt_iterations: int = Field(
        8, ge=1, le=64, description="Итерации Newton-Raphson для sqrt_newton"
    )
    series_terms: int = Field(
        130, ge=2, description="Максимальная степень ряда Тейлора ln(1+u)"
    )
    restoring_steps: int = Field(
        130, ge=1, description="Число бит-позиций restoring log"
    )

    model_config = {"frozen": True}

    @field_validator("series_terms")
    @classmethod
    def validate_series_terms_even(cls, v: int) -> int:
        """Члены ряда суммируются парами u^i/i - u^(i+1)/(i+1)"""
        if v % 2:
            raise ValueError(f"series_terms must be even, got {v}")
        return v


DEFAULT_LIMITS: Final[IterationLimits] = IterationLimits()
