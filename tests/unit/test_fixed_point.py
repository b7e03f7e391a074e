"""
Тесты для модуля Fixed Point

Проверяет:
1. div_mod: нормализованное частное, масштаб, остаток
2. Отказ на ненормализованном делителе и операндах вне 64 бит
3. Извлечение 64 бит дроби (to_fixed64 / fraction64)
4. Корректное округление int_to_float (ties-to-even)
"""

import numpy as np
import pytest

from src.core.math.decomposition import recompose
from src.core.math.fixed_point import (
    FIXED64_HIGH_BIT,
    SQRT_HALF_FIXED64,
    UINT64_MASK,
    FixedPointDomainError,
    div_mod,
    fraction64,
    int_to_float,
    round_to_digits,
    to_fixed64,
)
from src.core.math.float_formats import DOUBLE, EXTENDED, SINGLE

ELEVEN = 0xB000000000000000
THIRTEEN = 0xD000000000000000


# =============================================================================
# DIV MOD
# =============================================================================


class TestDivMod:
    """Тесты для div_mod"""

    def test_numerator_below_denominator(self) -> None:
        """11/13 < 1: 64 дробных бита"""
        result = div_mod(ELEVEN, THIRTEEN)
        assert result.scale == 64
        assert recompose(int_to_float(result.quotient, DOUBLE), -64) == 11.0 / 13.0

    def test_numerator_above_denominator(self) -> None:
        """13/11 > 1: 63 дробных бита"""
        result = div_mod(THIRTEEN, ELEVEN)
        assert result.scale == 63
        assert recompose(int_to_float(result.quotient, DOUBLE), -63) == 13.0 / 11.0

    def test_different_exponents(self) -> None:
        """13/22: дроби равны 0xD.../0xB..., разница экспонент учитывается снаружи"""
        result = div_mod(fraction64(13.0), fraction64(22.0))
        assert recompose(int_to_float(result.quotient, DOUBLE), -64) == 13.0 / 22.0

    def test_equal_operands(self) -> None:
        result = div_mod(THIRTEEN, THIRTEEN)
        assert result.quotient == FIXED64_HIGH_BIT
        assert result.remainder == 0
        assert result.scale == 63

    @pytest.mark.parametrize(
        "numerator,denominator",
        [
            (ELEVEN, THIRTEEN),
            (THIRTEEN, ELEVEN),
            (FIXED64_HIGH_BIT, UINT64_MASK),
            (UINT64_MASK, FIXED64_HIGH_BIT + 1),
            (1, FIXED64_HIGH_BIT),
        ],
    )
    def test_division_identity(self, numerator: int, denominator: int) -> None:
        """quotient * den + remainder == num << scale, 0 <= remainder < den"""
        quotient, remainder, scale = div_mod(numerator, denominator)
        assert quotient * denominator + remainder == numerator << scale
        assert 0 <= remainder < denominator

    @pytest.mark.parametrize(
        "numerator,denominator",
        [
            (ELEVEN, THIRTEEN),
            (THIRTEEN, ELEVEN),
            (FIXED64_HIGH_BIT, UINT64_MASK),
            (UINT64_MASK, FIXED64_HIGH_BIT),
        ],
    )
    def test_quotient_normalized_for_normalized_operands(
        self, numerator: int, denominator: int
    ) -> None:
        quotient = div_mod(numerator, denominator).quotient
        assert quotient & FIXED64_HIGH_BIT
        assert quotient <= UINT64_MASK

    def test_sqrt_half_constant(self) -> None:
        """SQRT_HALF_FIXED64 == floor(sqrt(0.5) * 2^64)"""
        assert SQRT_HALF_FIXED64**2 <= 1 << 127 < (SQRT_HALF_FIXED64 + 1) ** 2

    @pytest.mark.parametrize("denominator", [0, 1, FIXED64_HIGH_BIT - 1])
    def test_rejects_unnormalized_denominator(self, denominator: int) -> None:
        with pytest.raises(FixedPointDomainError, match="normalized"):
            div_mod(ELEVEN, denominator)

    @pytest.mark.parametrize("numerator", [-1, 1 << 64])
    def test_rejects_numerator_out_of_range(self, numerator: int) -> None:
        with pytest.raises(FixedPointDomainError):
            div_mod(numerator, THIRTEEN)

    def test_rejects_non_int(self) -> None:
        with pytest.raises(FixedPointDomainError, match="int"):
            div_mod(0.5, THIRTEEN)  # type: ignore[arg-type]
        with pytest.raises(FixedPointDomainError):
            div_mod(True, THIRTEEN)

    def test_domain_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            div_mod(ELEVEN, 0)


# =============================================================================
# FLOAT → FIXED
# =============================================================================


class TestToFixed64:
    """Тесты для to_fixed64 / fraction64"""

    def test_half(self) -> None:
        assert to_fixed64(0.5) == FIXED64_HIGH_BIT

    def test_sign_ignored(self) -> None:
        assert to_fixed64(-0.75) == 0xC000000000000000

    def test_largest_double_fraction(self) -> None:
        assert to_fixed64(0.9999999999999999) == 0xFFFFFFFFFFFFF800

    def test_float32(self) -> None:
        assert to_fixed64(np.float32(0.75)) == 0xC000000000000000

    @pytest.mark.parametrize("fraction", [1.0, 0.25, 0.0, 1.5, float("nan")])
    def test_rejects_unnormalized(self, fraction: float) -> None:
        with pytest.raises(FixedPointDomainError):
            to_fixed64(fraction)

    def test_fraction64(self) -> None:
        assert hex(fraction64(11.0)) == "0xb000000000000000"
        assert fraction64(13.0) == THIRTEEN
        assert fraction64(-22.0) == ELEVEN

    def test_fraction64_tenth(self) -> None:
        """0.1 = 0x1999999999999a × 2^-56: 53 значащих бита, далее нули"""
        assert fraction64(0.1) == 0xCCCCCCCCCCCCD000

    def test_fraction64_subnormal(self) -> None:
        assert fraction64(5e-324) == FIXED64_HIGH_BIT


# =============================================================================
# INTEGER → FLOAT
# =============================================================================


class TestRoundToDigits:
    """Тесты для round_to_digits"""

    def test_short_value_unchanged(self) -> None:
        assert round_to_digits(0b101, 3) == 0b101
        assert round_to_digits(0, 3) == 0

    def test_round_down(self) -> None:
        assert round_to_digits(0b1001, 3) == 0b1000

    def test_tie_to_even_up(self) -> None:
        assert round_to_digits(0b1011, 3) == 0b1100

    def test_above_half_up(self) -> None:
        assert round_to_digits(0b10011, 3) == 0b10100

    def test_carry_adds_bit(self) -> None:
        assert round_to_digits(0b111, 2) == 0b1000

    def test_sticky_breaks_tie_upwards(self) -> None:
        """Точное значение строго больше усечённого: половина округляется вверх"""
        assert round_to_digits(0b1001, 3, sticky=True) == 0b1010
        assert round_to_digits(0b1001, 3) == 0b1000

    def test_sticky_below_half_rounds_down(self) -> None:
        assert round_to_digits(0b1000, 3, sticky=True) == 0b1000
        assert round_to_digits(0b10001, 3, sticky=True) == 0b10000


class TestIntToFloat:
    """Тесты для int_to_float"""

    def test_exact_small(self) -> None:
        assert int_to_float(0, DOUBLE) == 0.0
        assert int_to_float(12345, DOUBLE) == 12345.0

    def test_tie_to_even(self) -> None:
        assert int_to_float(2**53 + 1, DOUBLE) == 2.0**53
        assert int_to_float(2**53 + 3, DOUBLE) == 2.0**53 + 4

    def test_uint64_max_rounds_up(self) -> None:
        assert int_to_float(UINT64_MASK, DOUBLE) == 2.0**64

    def test_matches_python_conversion(self) -> None:
        for value in (0xB504F333F9DE6484, 0xFFFFFFFFFFFFF7FF, 0x8000000000000401):
            assert int_to_float(value, DOUBLE) == float(value)

    def test_single(self) -> None:
        result = int_to_float(2**24 + 1, SINGLE)
        assert isinstance(result, np.float32)
        assert result == np.float32(2**24)

    def test_single_by_name(self) -> None:
        assert int_to_float(3, "single") == np.float32(3)

    def test_extended_power_of_two(self) -> None:
        result = int_to_float(FIXED64_HIGH_BIT, EXTENDED)
        assert isinstance(result, np.longdouble)
        assert result == np.longdouble(2) ** 63

    def test_extended_full_width(self) -> None:
        if EXTENDED.digits < 64:
            pytest.skip("long double короче 64 бит на этой платформе")
        result = int_to_float(UINT64_MASK, EXTENDED)
        assert result == np.longdouble(2) ** 64 - np.longdouble(1)

    def test_rejects_negative(self) -> None:
        with pytest.raises(FixedPointDomainError):
            int_to_float(-1, DOUBLE)
