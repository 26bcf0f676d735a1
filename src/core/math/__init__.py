"""
Core math modules

Целочисленная fixed-point арифметика (floor) и конверсия collateral <-> issued.
"""

# Fixed-point
from src.core.math.fixed_point import (
    ONE_WAD,
    mul_div_floor,
    ratio_wad,
    validate_amount,
    validate_positive_int,
    wad_to_str,
)

# Conversion
from src.core.math.conversion import CollateralQuote, ConversionEngine

__all__ = [
    # Fixed-point: Constants
    "ONE_WAD",
    # Fixed-point: Validation
    "validate_amount",
    "validate_positive_int",
    # Fixed-point: Arithmetic
    "mul_div_floor",
    "ratio_wad",
    "wad_to_str",
    # Conversion
    "CollateralQuote",
    "ConversionEngine",
]
