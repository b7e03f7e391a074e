"""
Logarithm — натуральный логарифм без таблиц

- log1p2x(n): ln(1 + 2^-n) рядом Тейлора с компенсированным суммированием
- log_small(x): ln(x) для x ∈ [1, 4.768462] алгоритмом restoring log

Restoring log (аналог restoring division в логарифмической области):
произведение e = Π(1 + 2^-i) по принятым позициям i растёт к x; на каждом
шаге кандидат e·(1 + 2^-i) принимается, если не превышает x, и тогда к
сумме добавляется ln(1 + 2^-i). Верхняя граница диапазона —
Π(1 + 2^-i) по всем i ≥ 0 ≈ 4.768462.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Все суммы ведутся в CompensatedSum (суммирование Кэхэна)
2. Ряд обрывается, когда очередной член не меняет сумму (насыщение ULP)
3. Число шагов ограничено IterationLimits (по умолчанию 130)
4. Нарушение области определения log_small → LogDomainViolation
"""

import operator
from typing import Any, Final

from src.core.math.decomposition import isnan, recompose
from src.core.math.float_formats import DOUBLE, FloatFormat, as_format, coerce_format
from src.core.math.limits import DEFAULT_LIMITS, IterationLimits
from src.core.math.summation import CompensatedSum

# Достаточное условие сходимости restoring log: 1 <= x <= LOG_SMALL_MAX
LOG_SMALL_MIN: Final[float] = 1.0
LOG_SMALL_MAX: Final[float] = 4.768462


# =============================================================================
# EXCEPTIONS
# =============================================================================


class LogDomainViolation(ValueError):
    """
    Аргумент log_small вне [1, LOG_SMALL_MAX] или NaN.

    Вызывающий код обязан заранее свести аргумент в этот диапазон.
    """

    pass


# =============================================================================
# LOG1P2X
# =============================================================================


def log1p2x(
    n: int,
    fmt: FloatFormat | str = DOUBLE,
    limits: IterationLimits = DEFAULT_LIMITS,
) -> Any:
    """
    ln(1 + 2^-n) для целого n >= 0.

    n == 0 — константа ln 2 (на u = 1 ряд сходится хуже всего).
    Для n > 0 суммируется ряд ln(1+u) = Σ (-1)^(i+1) u^i / i, u = 2^-n,
    парами u^i/i - u^(i+1)/(i+1), что уменьшает потери на сокращении.

    Args:
        n: Неотрицательное целое
        fmt: Рабочая точность (default: double)
        limits: Границы итераций (series_terms)

    Returns:
        ln(1 + 2^-n) в точности формата

    Raises:
        TypeError: Если n не целое
        ValueError: Если n < 0

    Examples:
        >>> log1p2x(0)
        0.6931471805599453
        >>> log1p2x(1)
        0.4054651081081644
    """
    n = operator.index(n)
    if n < 0:
        raise ValueError(f"n must be non-negative, got {n}")

    fmt = coerce_format(fmt)
    if n == 0:
        return fmt.constant("ln_2")

    one = fmt.cast(1)
    acc = CompensatedSum.zero(fmt)
    for i in range(1, limits.series_terms, 2):
        term = recompose(one / fmt.cast(i), -n * i, fmt)
        term -= recompose(one / fmt.cast(i + 1), -n * (i + 1), fmt)
        step = acc.add(term)
        if step.saturated_by(acc):
            break
        acc = step
    return acc.total


# =============================================================================
# RESTORING LOG
# =============================================================================


def validate_log_small_domain(x: Any) -> None:
    """
    Проверка предусловия log_small.

    Raises:
        LogDomainViolation: Если x NaN или вне [LOG_SMALL_MIN, LOG_SMALL_MAX]
    """
    if isnan(x) or not LOG_SMALL_MIN <= x <= LOG_SMALL_MAX:
        raise LogDomainViolation(
            f"log_small requires {LOG_SMALL_MIN} <= x <= {LOG_SMALL_MAX}, got {x}"
        )


def log_small(
    x: Any,
    fmt: FloatFormat | str | None = None,
    limits: IterationLimits = DEFAULT_LIMITS,
) -> Any:
    """
    ln(x) для x ∈ [1, 4.768462] алгоритмом restoring log.

    Args:
        x: Аргумент в диапазоне [1, LOG_SMALL_MAX]
        fmt: Принудительный формат (default: по типу x)
        limits: Границы итераций (restoring_steps, series_terms)

    Returns:
        ln(x) в точности формата

    Raises:
        LogDomainViolation: Если x вне диапазона

    Examples:
        >>> log_small(2.0)
        0.6931471805599453
        >>> log_small(1.0)
        0.0
    """
    x, fmt = as_format(x, fmt)
    validate_log_small_domain(x)

    if x == 1:
        return fmt.cast(0)

    acc = CompensatedSum.zero(fmt)
    e = fmt.cast(1)
    for i in range(limits.restoring_steps):
        candidate = e + recompose(e, -i, fmt)
        if candidate > x:
            continue
        e = candidate
        acc = acc.add(log1p2x(i, fmt, limits))
        if e == x:
            break
    return acc.total
