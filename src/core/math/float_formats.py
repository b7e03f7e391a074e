"""
Float Formats — рабочие точности IEEE-754

Модуль описывает три рабочие точности, для которых реализованы примитивы:
- single   → numpy.float32
- double   → float (и numpy.float64)
- extended → numpy.longdouble (80-bit на x86, зависит от платформы)

Каждая точность представлена неизменяемым дескриптором FloatFormat.
Дескриптор знает тип скаляра, число значащих бит и умеет приводить
значения и константы к своей точности.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Константы задаются десятичными строками и парсятся в целевой точности
2. Переполнение и NaN являются штатными результатами: предупреждения numpy
   о них подавляются (см. ieee_quiet)
3. bool никогда не трактуется как число
"""

import functools
from dataclasses import dataclass
from typing import Any, Callable, Final, TypeVar

import numpy as np

F = TypeVar("F", bound=Callable[..., Any])


# =============================================================================
# EXCEPTIONS
# =============================================================================


class UnsupportedFormatError(TypeError):
    """
    Значение или имя формата не соответствует ни одной рабочей точности.

    Также возникает, если алгоритм не поддерживает точность (например,
    sqrt на 64-bit fixed-point для форматов шире 64 значащих бит).
    """

    pass


# =============================================================================
# КОНСТАНТЫ
# =============================================================================

# Десятичные представления с запасом точности для extended
FLOAT_CONSTANTS: Final[dict[str, str]] = {
    "e": "2.718281828459045235360287471352662498",
    "log2_e": "1.442695040888963407359924681001892137",
    "log2_10": "3.321928094887362347870319429489390175",
    "ln_2": "0.693147180559945309417232121458176568",
    "ln_10": "2.302585092994045684017991454684364208",
    "log10_2": "0.301029995663981195213738894724493027",
    "log10_e": "0.434294481903251827651128918916605082",
    "pi": "3.141592653589793238462643383279502884",
    "pi_inv": "0.318309886183790671537767526745028724",
    "sqrt_pi_inv": "1.128379167095512573896158903121545172",
    "sqrt_2": "1.414213562373095048801688724209698079",
}


# =============================================================================
# FLOAT FORMAT
# =============================================================================


@dataclass(frozen=True)
class FloatFormat:
    """
    Дескриптор рабочей точности.

    Attributes:
        name: Имя формата ("single", "double", "extended")
        scalar_type: Тип скаляра, в котором ведутся вычисления
        digits: Число значащих бит мантиссы (включая неявную единицу)
    """

    name: str
    scalar_type: type
    digits: int

    def cast(self, value: Any) -> Any:
        """Приведение значения (число или десятичная строка) к точности формата."""
        return self.scalar_type(value)

    @property
    def huge_val(self) -> Any:
        """Аналог HUGE_VAL: +infinity в точности формата."""
        return self.scalar_type("inf")

    @property
    def quiet_nan(self) -> Any:
        return self.scalar_type("nan")

    @property
    def fits_fixed64(self) -> bool:
        """Мантисса помещается в 64-bit fixed-point без потерь."""
        return self.digits <= 64

    def constant(self, name: str) -> Any:
        """
        Математическая константа в точности формата.

        Args:
            name: Ключ FLOAT_CONSTANTS (например, "ln_2")

        Raises:
            KeyError: Если константа неизвестна
        """
        return self.cast(FLOAT_CONSTANTS[name])


SINGLE: Final[FloatFormat] = FloatFormat("single", np.float32, 24)
DOUBLE: Final[FloatFormat] = FloatFormat("double", float, 53)
EXTENDED: Final[FloatFormat] = FloatFormat(
    "extended", np.longdouble, int(np.finfo(np.longdouble).nmant) + 1
)

FORMATS: Final[dict[str, FloatFormat]] = {
    SINGLE.name: SINGLE,
    DOUBLE.name: DOUBLE,
    EXTENDED.name: EXTENDED,
}

_FORMAT_BY_TYPE: Final[dict[type, FloatFormat]] = {
    float: DOUBLE,
    np.float64: DOUBLE,
    np.float32: SINGLE,
    np.longdouble: EXTENDED,
}


# =============================================================================
# РАЗРЕШЕНИЕ ФОРМАТА
# =============================================================================


def get_format(name: str) -> FloatFormat:
    """
    Формат по имени.

    Raises:
        UnsupportedFormatError: Если имя неизвестно
    """
    try:
        return FORMATS[name]
    except KeyError:
        raise UnsupportedFormatError(
            f"Unknown float format {name!r}, expected one of {sorted(FORMATS)}"
        ) from None


def resolve_format(value: Any) -> FloatFormat:
    """
    Определение рабочей точности по типу значения.

    Целые числа (int, но не bool) трактуются как double, как и в
    целочисленных перегрузках frexp/ldexp.

    Args:
        value: Скаляр float / numpy.float32 / numpy.float64 / numpy.longdouble / int

    Returns:
        FloatFormat, соответствующий типу

    Raises:
        UnsupportedFormatError: Для bool и нечисловых типов

    Examples:
        >>> resolve_format(1.5).name
        'double'
        >>> resolve_format(np.float32(1.5)).name
        'single'
    """
    if isinstance(value, (bool, np.bool_)):
        raise UnsupportedFormatError("bool is not a floating-point value")

    fmt = _FORMAT_BY_TYPE.get(type(value))
    if fmt is not None:
        return fmt

    if isinstance(value, (int, np.integer)):
        return DOUBLE

    raise UnsupportedFormatError(
        f"Unsupported scalar type {type(value).__name__} for value {value!r}"
    )


def coerce_format(fmt: FloatFormat | str) -> FloatFormat:
    """Формат по дескриптору или имени."""
    if isinstance(fmt, FloatFormat):
        return fmt
    return get_format(fmt)


def as_format(value: Any, fmt: FloatFormat | str | None = None) -> tuple[Any, FloatFormat]:
    """
    Приведение значения к рабочей точности.

    Args:
        value: Исходное значение
        fmt: Целевой формат или его имя (default: определяется по типу value)

    Returns:
        (значение в точности формата, формат)

    Raises:
        UnsupportedFormatError: Для bool, нечисловых типов и целых вне
            диапазона double
    """
    fmt = resolve_format(value) if fmt is None else coerce_format(fmt)

    if isinstance(value, (bool, np.bool_)):
        raise UnsupportedFormatError("bool is not a floating-point value")

    if isinstance(value, (int, np.integer)):
        # Через double, как static_cast<double> в целочисленных перегрузках
        try:
            value = float(value)
        except OverflowError as e:
            raise UnsupportedFormatError(
                f"int of {int(value).bit_length()} bits is outside the double range"
            ) from e

    return fmt.cast(value), fmt


def ieee_quiet(func: F) -> F:
    """
    Декоратор: подавляет предупреждения numpy об overflow/invalid.

    Переполнение до бесконечности и NaN — штатный канал ошибок IEEE-754,
    поэтому RuntimeWarning от numpy-скаляров здесь не нужен.
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        with np.errstate(over="ignore", invalid="ignore", under="ignore"):
            return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]
