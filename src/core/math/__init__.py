"""
Core math modules

Конверсия цен между дробной нотацией US Treasuries и десятичным представлением.
"""

from src.core.math.fractional_price import (
    HALF_TICK_CHAR,
    TICK_SIZE,
    InvalidFractionalPrice,
    decode_fractional,
    encode_fractional,
    is_valid_fractional,
)

__all__ = [
    "HALF_TICK_CHAR",
    "TICK_SIZE",
    "InvalidFractionalPrice",
    "decode_fractional",
    "encode_fractional",
    "is_valid_fractional",
]
