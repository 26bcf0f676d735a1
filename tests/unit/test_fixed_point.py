"""
Unit tests для fixed-point арифметики

Покрытие:
- Валидация целочисленных сумм (bool/float/отрицательные)
- mul_div_floor: умножение до деления, floor
- ratio_wad: fallback при нулевом знаменателе
- wad_to_str: форматирование
"""

import pytest

from src.core.math.fixed_point import (
    ONE_WAD,
    mul_div_floor,
    ratio_wad,
    validate_amount,
    validate_positive_int,
    wad_to_str,
)


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


class TestValidateAmount:
    def test_accepts_zero_and_positive(self):
        assert validate_amount(0) == 0
        assert validate_amount(10**30) == 10**30

    def test_rejects_negative(self):
        with pytest.raises(ValueError, match="non-negative"):
            validate_amount(-1)

    def test_rejects_float(self):
        with pytest.raises(ValueError, match="must be int"):
            validate_amount(1.0)

    def test_rejects_bool(self):
        """bool является подклассом int, но не суммой"""
        with pytest.raises(ValueError, match="must be int"):
            validate_amount(True)

    def test_name_in_message(self):
        with pytest.raises(ValueError, match="reserves"):
            validate_amount(-5, "reserves")

    def test_positive_int_rejects_zero(self):
        with pytest.raises(ValueError, match="must be positive"):
            validate_positive_int(0, "denominator")


# =============================================================================
# MUL-DIV
# =============================================================================


class TestMulDivFloor:
    def test_exact_division(self):
        assert mul_div_floor(60_000_000 * 10**12, 10**18, 6 * 10**17) == 100 * 10**18

    def test_rounds_down(self):
        assert mul_div_floor(7, 1, 2) == 3
        assert mul_div_floor(1, 1, 3) == 0

    def test_multiplies_before_dividing(self):
        """(1 * 3) // 2 == 1, а (1 // 2) * 3 == 0"""
        assert mul_div_floor(1, 3, 2) == 1

    def test_no_intermediate_overflow(self):
        """Произведение шире 256 бит считается точно"""
        a = 2**200
        b = 2**200
        assert mul_div_floor(a, b, 2**300) == 2**100

    def test_zero_denominator_rejected(self):
        with pytest.raises(ValueError, match="denominator must be positive"):
            mul_div_floor(1, 1, 0)


# =============================================================================
# RATIO
# =============================================================================


class TestRatioWad:
    def test_double(self):
        assert ratio_wad(2, 1) == 2 * ONE_WAD

    def test_zero_denominator_returns_fallback(self):
        assert ratio_wad(0, 0) == ONE_WAD
        assert ratio_wad(5, 0, fallback=0) == 0

    def test_floor(self):
        assert ratio_wad(1, 3) == 333_333_333_333_333_333


class TestWadToStr:
    def test_formats(self):
        assert wad_to_str(2 * ONE_WAD) == "2.000000"
        assert wad_to_str(ONE_WAD + ONE_WAD // 2, places=2) == "1.50"

    def test_zero_places(self):
        assert wad_to_str(3 * ONE_WAD, places=0) == "3"
