"""
Fixed Point — беззнаковая 64-bit fixed-point арифметика

64-bit fixed-point magnitude: целое в [0, 2^64), представляющее
вещественное число int / 2^64 из [0, 1). Нормализованная величина имеет
установленный бит 63, т.е. представляет число из [0.5, 1).

Модуль содержит:
- div_mod: деление двух fixed-point величин с нормализованным частным
- to_fixed64 / fraction64: извлечение 64 старших бит нормализованной дроби
- int_to_float: корректно округлённое (ties-to-even) преобразование целого
  в рабочую точность

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Знаменатель div_mod нормализован, иначе FixedPointDomainError
2. Частное всегда нормализовано и помещается в 64 бита
3. quotient / 2^scale == numerator / denominator (с усечением)
"""

from typing import Any, Final, NamedTuple

from src.core.math.decomposition import decompose
from src.core.math.float_formats import FloatFormat, as_format, coerce_format

# =============================================================================
# КОНСТАНТЫ
# =============================================================================

FIXED64_BITS: Final[int] = 64

UINT64_MASK: Final[int] = (1 << FIXED64_BITS) - 1

# Бит 63: признак нормализованной величины (значение >= 0.5)
FIXED64_HIGH_BIT: Final[int] = 1 << (FIXED64_BITS - 1)

# floor(sqrt(0.5) * 2^64)
SQRT_HALF_FIXED64: Final[int] = 0xB504F333F9DE6484

# Ширина фрагмента при точной сборке float из целого
_CHUNK_BITS: Final[int] = 16


# =============================================================================
# EXCEPTIONS
# =============================================================================


class FixedPointDomainError(ValueError):
    """
    Операнд вне области определения fixed-point примитива.

    Деление на ненормализованный (в том числе нулевой) знаменатель не
    определено; вместо неопределённого поведения выбрасывается исключение.
    """

    pass


class DivModResult(NamedTuple):
    """
    Результат div_mod.

    quotient / 2^scale == numerator / denominator; remainder — остаток
    деления numerator << scale на denominator.
    """

    quotient: int
    remainder: int
    scale: int


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def validate_fixed64(value: int, name: str) -> None:
    """
    Проверка, что value — 64-bit fixed-point величина.

    Raises:
        FixedPointDomainError: Если value не int или вне [0, 2^64)
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise FixedPointDomainError(f"{name} must be an int, got {type(value).__name__}")
    if value < 0 or value > UINT64_MASK:
        raise FixedPointDomainError(f"{name} must be in [0, 2^64), got {value:#x}")


def validate_normalized(value: int, name: str) -> None:
    """
    Проверка, что у value установлен бит 63.

    Raises:
        FixedPointDomainError: Если value не нормализовано
    """
    validate_fixed64(value, name)
    if not value & FIXED64_HIGH_BIT:
        raise FixedPointDomainError(f"{name} must be normalized (bit 63 set), got {value:#x}")


# =============================================================================
# DIV MOD
# =============================================================================


def div_mod(numerator: int, denominator: int) -> DivModResult:
    """
    Деление 64-bit fixed-point величин с нормализованным частным.

    Отношение двух величин из [0.5, 1) лежит в (0.5, 2). Если оно < 1,
    частное хранится с 64 дробными битами, иначе с 63. Вызывающий код
    восстанавливает экспоненту по полю scale.

    Args:
        numerator: Делимое, 64-bit fixed-point
        denominator: Делитель, нормализованный 64-bit fixed-point

    Returns:
        DivModResult(quotient, remainder, scale)

    Raises:
        FixedPointDomainError: Если делитель не нормализован или операнды вне диапазона

    Examples:
        >>> div_mod(0xB000000000000000, 0xD000000000000000).scale
        64
        >>> div_mod(0xD000000000000000, 0xB000000000000000).scale
        63
    """
    validate_fixed64(numerator, "numerator")
    validate_normalized(denominator, "denominator")

    scale = FIXED64_BITS - 1 if numerator >= denominator else FIXED64_BITS
    quotient, remainder = divmod(numerator << scale, denominator)
    return DivModResult(quotient, remainder, scale)


# =============================================================================
# ПРЕОБРАЗОВАНИЯ FLOAT ↔ FIXED
# =============================================================================


def to_fixed64(fraction: Any, fmt: FloatFormat | str | None = None) -> int:
    """
    64 старших бита нормализованной дроби.

    Биты извлекаются удвоением и вычитанием единицы: обе операции точны,
    поэтому результат равен floor(|fraction| * 2^64) для любой точности.

    Args:
        fraction: Дробь с 0.5 <= |fraction| < 1
        fmt: Формат (default: по типу fraction)

    Returns:
        Нормализованная 64-bit fixed-point величина

    Raises:
        FixedPointDomainError: Если |fraction| вне [0.5, 1)
    """
    f, fmt = as_format(fraction, fmt)
    one = fmt.cast(1)
    two = fmt.cast(2)
    if f < 0:
        f = -f
    if not fmt.cast(0.5) <= f < one:
        raise FixedPointDomainError(f"fraction must satisfy 0.5 <= |fraction| < 1, got {fraction!r}")

    fixed = 0
    for _ in range(FIXED64_BITS):
        f *= two
        fixed <<= 1
        if f >= one:
            fixed |= 1
            f -= one
    return fixed


def fraction64(x: Any, fmt: FloatFormat | str | None = None) -> int:
    """
    Нормализованная дробь x в виде 64-bit fixed-point.

    Examples:
        >>> hex(fraction64(11.0))
        '0xb000000000000000'
    """
    fraction, _ = decompose(x, fmt)
    return to_fixed64(fraction, fmt)


def round_to_digits(value: int, digits: int, sticky: bool = False) -> int:
    """
    Округление целого до digits значащих бит (round half to even).

    Отброшенные младшие биты заменяются нулями; результат может получить
    на один бит больше при переносе (например, 0b111 → 0b1000 при digits=2).

    sticky означает, что точное значение строго больше value (value —
    усечение). Тогда ровно половина в отброшенных битах округляется вверх.
    """
    excess = value.bit_length() - digits
    if excess <= 0:
        return value

    kept = value >> excess
    dropped = value & ((1 << excess) - 1)
    half = 1 << (excess - 1)
    if dropped > half or (dropped == half and (sticky or kept & 1)):
        kept += 1
    return kept << excess


def int_to_float(value: int, fmt: FloatFormat | str) -> Any:
    """
    Корректно округлённое преобразование неотрицательного целого в float.

    Сначала value округляется до fmt.digits значащих бит в целочисленной
    арифметике, затем собирается из 16-битных фрагментов. Каждая
    промежуточная сумма — префикс уже округлённого числа, поэтому
    представима точно.

    Args:
        value: Неотрицательное целое (обычно 64-bit fixed-point)
        fmt: Целевой формат

    Returns:
        Ближайшее к value число формата

    Raises:
        FixedPointDomainError: Если value отрицательное
    """
    fmt = coerce_format(fmt)
    if value < 0:
        raise FixedPointDomainError(f"value must be non-negative, got {value}")

    rounded = round_to_digits(value, fmt.digits)
    radix = fmt.cast(1 << _CHUNK_BITS)
    chunk_mask = (1 << _CHUNK_BITS) - 1

    result = fmt.cast(0)
    top = (rounded.bit_length() - 1) // _CHUNK_BITS * _CHUNK_BITS
    for shift in range(top, -1, -_CHUNK_BITS):
        result = result * radix + fmt.cast((rounded >> shift) & chunk_mask)
    return result
