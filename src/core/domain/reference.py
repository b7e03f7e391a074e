"""
Reference Vectors — модели эталонных тестовых наборов

Эталонный набор (suite) — список аргументов, на которых функция модуля
сравнивается с платформенной реализацией (math / numpy). Аргументы
хранятся точно: шестнадцатеричная мантисса × 2^exponent либо
специальное значение. Соответствует схеме contracts/schema/reference_suite.json.

Immutable Pydantic модели.
"""

from enum import Enum
from typing import Any, Literal

import numpy as np
from pydantic import BaseModel, Field, model_validator

from src.core.math.fixed_point import int_to_float
from src.core.math.float_formats import FloatFormat, get_format


# =============================================================================
# ENUMS
# =============================================================================


class SpecialValue(str, Enum):
    """Специальные значения IEEE-754"""

    INF = "inf"
    NEG_INF = "-inf"
    NAN = "nan"
    NEG_ZERO = "-0"


class ReferenceFunction(str, Enum):
    """Проверяемая функция"""

    DECOMPOSE = "decompose"
    RECOMPOSE = "recompose"
    DIV_MOD = "div_mod"
    SQRT = "sqrt"
    LOG1P2X = "log1p2x"
    LOG_SMALL = "log_small"


# =============================================================================
# FLOAT LITERAL
# =============================================================================


class FloatLiteral(BaseModel):
    """
    Точная запись числа с плавающей точкой.

    Либо special, либо significand × 2^exponent (significand — hex строка
    со знаком, например "-0x3").
    """

    special: SpecialValue | None = Field(None, description="Специальное значение")
    significand: str | None = Field(
        None, pattern=r"^-?0x[0-9a-fA-F]+$", description="Целая мантисса (hex)"
    )
    exponent: int = Field(0, description="Двоичная экспонента")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_exactly_one_form(self) -> "FloatLiteral":
        """Ровно одна из форм: special или significand"""
        if (self.special is None) == (self.significand is None):
            raise ValueError("exactly one of 'special' and 'significand' must be set")
        return self

    def to_value(self, fmt: FloatFormat) -> Any:
        """
        Значение литерала в точности формата.

        Мантисса обязана помещаться в fmt.digits бит: литерал должен быть
        представим точно.

        Raises:
            ValueError: Если мантисса шире формата
        """
        if self.special is not None:
            if self.special is SpecialValue.NEG_ZERO:
                return fmt.cast("-0.0")
            return fmt.cast(self.special.value)

        text = self.significand or ""
        negative = text.startswith("-")
        magnitude = int(text.lstrip("-"), 16)
        if magnitude.bit_length() > fmt.digits:
            raise ValueError(
                f"significand {text} needs {magnitude.bit_length()} bits, "
                f"{fmt.name} has {fmt.digits}"
            )

        with np.errstate(over="ignore", under="ignore"):
            value = fmt.cast(np.ldexp(int_to_float(magnitude, fmt), self.exponent))
        return -value if negative else value


# =============================================================================
# REFERENCE CASE / SUITE
# =============================================================================


class ReferenceCase(BaseModel):
    """
    Один эталонный вызов.

    min_digits/max_digits ограничивают применимость по ширине мантиссы
    (например, extended-векторы для 64-bit long double).
    """

    case_id: str = Field(..., min_length=1, description="Идентификатор случая")
    format: Literal["single", "double", "extended"] = Field(..., description="Рабочая точность")
    args: list[FloatLiteral | int] = Field(..., min_length=1, description="Аргументы вызова")
    min_digits: int | None = Field(None, ge=1, description="Минимальная ширина мантиссы")
    max_digits: int | None = Field(None, ge=1, description="Максимальная ширина мантиссы")
    note: str | None = Field(None, description="Комментарий")

    model_config = {"frozen": True}

    @property
    def float_format(self) -> FloatFormat:
        return get_format(self.format)

    def applies(self) -> bool:
        """Случай применим к формату на текущей платформе."""
        digits = self.float_format.digits
        if self.min_digits is not None and digits < self.min_digits:
            return False
        if self.max_digits is not None and digits > self.max_digits:
            return False
        return True

    def values(self) -> list[Any]:
        """Аргументы: литералы в точности формата, целые как есть."""
        fmt = self.float_format
        return [arg.to_value(fmt) if isinstance(arg, FloatLiteral) else arg for arg in self.args]


class ReferenceSuite(BaseModel):
    """Эталонный набор для одной функции."""

    suite: str = Field(..., min_length=1, description="Имя набора")
    function: ReferenceFunction = Field(..., description="Проверяемая функция")
    cases: list[ReferenceCase] = Field(..., min_length=1, description="Случаи")

    model_config = {"frozen": True}

    def applicable_cases(self) -> list[ReferenceCase]:
        return [case for case in self.cases if case.applies()]
