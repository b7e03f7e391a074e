"""
Sqrt — корректно округлённый квадратный корень

Алгоритм:
1. x = fraction × 2^exponent (decompose), 0.5 ≤ fraction < 1
2. fraction → 64-bit fixed-point xx
3. yy = sqrt(xx) методом Newton-Raphson в целочисленной арифметике
   (деление через div_mod)
4. Для нечётной экспоненты yy делится на sqrt(0.5): получается оценка
   корня из удвоенной дроби, экспонента становится чётной
5. Оценка уточняется до точного floor-корня целочисленным сравнением
   квадратов; остаток даёт sticky-бит
6. Корень округляется до рабочей точности один раз (ties-to-even) и
   умножается на 2^(exponent/2 - 65)

Специальные значения:
- x < 0 → quiet NaN (ошибка области определения через NaN, не исключение)
- 0, ±inf, NaN → возвращаются как есть
"""

from typing import Any

from src.core.math.decomposition import decompose, isinf, isnan, recompose
from src.core.math.fixed_point import (
    FIXED64_BITS,
    FIXED64_HIGH_BIT,
    SQRT_HALF_FIXED64,
    UINT64_MASK,
    div_mod,
    int_to_float,
    round_to_digits,
    to_fixed64,
    validate_normalized,
)
from src.core.math.float_formats import FloatFormat, UnsupportedFormatError, as_format
from src.core.math.limits import DEFAULT_LIMITS, IterationLimits


# =============================================================================
# INTEGER SQRT
# =============================================================================


def sqrt_newton(xx: int, iterations: int = DEFAULT_LIMITS.sqrt_iterations) -> int:
    """
    Квадратный корень 64-bit fixed-point величины методом Newton-Raphson.

    y ← (y + xx/y) / 2, полностью в беззнаковой 64-bit арифметике.
    Начальное приближение 0.5*x + 0.5 уже нормализовано, поэтому 8 итераций
    сходятся до полной 64-bit точности.

    Среднее двух чисел считается как (y >> 1) + (q >> 1) с поправкой младшего
    бита: оба нечётные → +1; ровно одно нечётное → половина округляется к
    чётному.

    Args:
        xx: Нормализованная 64-bit fixed-point величина
        iterations: Число итераций (default: 8)

    Returns:
        sqrt(xx / 2^64) × 2^64

    Raises:
        FixedPointDomainError: Если xx не нормализовано
    """
    validate_normalized(xx, "xx")

    yy = (xx >> 1) | FIXED64_HIGH_BIT
    for _ in range(iterations):
        qq = div_mod(xx, yy).quotient
        yy_least = yy & 1
        qq_least = qq & 1
        yy = (yy >> 1) + (qq >> 1)
        if yy_least & qq_least:
            yy += 1
        elif yy_least | qq_least:
            yy += yy & 1
    return yy


def correct_floor_sqrt(estimate: int, square: int) -> tuple[int, bool]:
    """
    Уточнение оценки корня до floor(sqrt(square)).

    Оценка из sqrt_newton и деления на sqrt(1/2) отличается от точного
    корня на несколько единиц.

    Args:
        estimate: Приближение к sqrt(square)
        square: Неотрицательное целое

    Returns:
        (root, sticky): root = floor(sqrt(square)); sticky — корень не точный

    Examples:
        >>> correct_floor_sqrt(3, 10)
        (3, True)
        >>> correct_floor_sqrt(5, 16)
        (4, False)
    """
    root = estimate
    while root * root > square:
        root -= 1
    while (root + 1) * (root + 1) <= square:
        root += 1
    return root, root * root != square


# =============================================================================
# SQRT
# =============================================================================


def sqrt(
    x: Any,
    fmt: FloatFormat | str | None = None,
    limits: IterationLimits = DEFAULT_LIMITS,
) -> Any:
    """
    Корректно округлённый квадратный корень (round-to-nearest-even).

    Args:
        x: Аргумент любой рабочей точности с не более чем 64 значащими битами
        fmt: Принудительный формат (default: по типу x)
        limits: Границы итераций

    Returns:
        sqrt(x) в точности формата; NaN для x < 0

    Raises:
        UnsupportedFormatError: Если мантисса формата шире 64 бит

    Examples:
        >>> sqrt(2.0)
        1.4142135623730951
        >>> sqrt(64.0)
        8.0
        >>> sqrt(-1.0)
        nan
    """
    x, fmt = as_format(x, fmt)
    if not fmt.fits_fixed64:
        raise UnsupportedFormatError(
            f"sqrt requires at most 64 significand bits, {fmt.name} has {fmt.digits}"
        )

    if x < 0:
        return fmt.quiet_nan
    if x == 0 or isinf(x) or isnan(x):
        return x

    fraction, exponent = decompose(x, fmt)
    xx = to_fixed64(fraction, fmt)

    # Для xx у верхней границы диапазона корень равен ей же
    yy = UINT64_MASK
    if xx < yy - 1:
        yy = sqrt_newton(xx, limits.sqrt_iterations)

    if exponent & 1:
        # Нечётная степень двойки: деление на sqrt(1/2) даёт оценку sqrt(2 * xx * 2^64)
        quotient = div_mod(yy, SQRT_HALF_FIXED64)
        estimate = quotient.quotient << (FIXED64_BITS - quotient.scale)
        square = xx << (FIXED64_BITS + 1)
    else:
        estimate = yy
        square = xx << FIXED64_BITS

    # Один guard-бит: корень из square * 4 оценивается как estimate * 2
    root, sticky = correct_floor_sqrt(estimate << 1, square << 2)
    y = int_to_float(round_to_digits(root, fmt.digits, sticky), fmt)
    return recompose(y, (exponent >> 1) - FIXED64_BITS - 1, fmt)
