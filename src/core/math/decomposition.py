"""
Decomposition — разложение float на (fraction, exponent) и обратная сборка

Аналоги frexp/ldexp без обращения к платформенной libm:
- decompose(x) → (fraction, exponent), x == fraction × 2^exponent,
  0.5 ≤ |fraction| < 1 для конечных ненулевых x
- recompose(fraction, exponent) → fraction × 2^exponent

Обе функции работают только умножением и делением на 2, поэтому для
любого конечного x (включая субнормальные) recompose(decompose(x)) точно
восстанавливает исходный битовый паттерн.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. 0, NaN, ±inf возвращаются как есть с exponent = 0 (без итераций)
2. Переполнение в recompose даёт бесконечность со знаком аргумента
3. Циклы ограничены диапазоном экспонент формата
"""

import operator
from typing import Any, NamedTuple

from src.core.math.float_formats import FloatFormat, as_format, ieee_quiet


class Decomposed(NamedTuple):
    """Результат decompose: value == fraction × 2^exponent."""

    fraction: Any
    exponent: int


# =============================================================================
# КЛАССИФИКАЦИЯ
# =============================================================================


def isnan(x: Any) -> bool:
    """NaN — единственное значение, не равное самому себе."""
    return bool(x != x)


def _isinf(x: Any) -> bool:
    return not isnan(x) and isnan(x - x)


@ieee_quiet
def isinf(x: Any) -> bool:
    """inf - inf == NaN; для конечных x разность равна нулю, NaN исключается отдельно."""
    return _isinf(x)


def _is_fixed_point(x: Any) -> bool:
    return bool(x == 0) or isnan(x) or isinf(x)


# =============================================================================
# DECOMPOSE / RECOMPOSE
# =============================================================================


def decompose(x: Any, fmt: FloatFormat | str | None = None) -> Decomposed:
    """
    Разложение x на нормализованную дробь и двоичную экспоненту (frexp).

    Args:
        x: Значение любой рабочей точности (int трактуется как double)
        fmt: Принудительный формат (default: по типу x)

    Returns:
        Decomposed(fraction, exponent)

    Examples:
        >>> decompose(3.0)
        Decomposed(fraction=0.75, exponent=2)
        >>> decompose(-0.1875)
        Decomposed(fraction=-0.75, exponent=-2)
        >>> decompose(0.0)
        Decomposed(fraction=0.0, exponent=0)
    """
    x, fmt = as_format(x, fmt)
    if _is_fixed_point(x):
        return Decomposed(x, 0)

    one = fmt.cast(1)
    half = fmt.cast(0.5)
    two = fmt.cast(2)
    exponent = 0

    # Строгие сравнения с обеих сторон для отрицательных x
    while x >= one or x <= -one:
        x /= two
        exponent += 1
    while -half < x < half:
        x *= two
        exponent -= 1

    return Decomposed(x, exponent)


@ieee_quiet
def recompose(fraction: Any, exponent: int, fmt: FloatFormat | str | None = None) -> Any:
    """
    Сборка fraction × 2^exponent (ldexp).

    Переполнение заменяется на huge_val формата со знаком fraction.

    Args:
        fraction: Мантисса (не обязательно нормализованная)
        exponent: Целая двоичная экспонента
        fmt: Принудительный формат (default: по типу fraction)

    Returns:
        fraction × 2^exponent в точности формата

    Raises:
        TypeError: Если exponent не целое

    Examples:
        >>> recompose(0.75, 2)
        3.0
        >>> recompose(3.0, -20)
        2.86102294921875e-06
        >>> recompose(-3.0, 5000)
        -inf
    """
    exponent = operator.index(exponent)
    x, fmt = as_format(fraction, fmt)
    if _is_fixed_point(x):
        return x

    two = fmt.cast(2)

    if exponent > 0:
        for _ in range(exponent):
            x *= two
            if _isinf(x):
                break
        if _isinf(x):
            x = fmt.huge_val if x > 0 else -fmt.huge_val
        return x

    for _ in range(-exponent):
        x /= two
        if x == 0:
            break
    return x
