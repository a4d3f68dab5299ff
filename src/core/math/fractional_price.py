"""
Fractional Price — дробная нотация цен US Treasuries

Формат: "<base>-<XY><z>"
- base: целая часть цены (>= 0)
- XY: две цифры, 32-е доли (00..31)
- z: восьмые доли 32-й (т.е. 256-е доли), цифра 0..7 или '+' вместо 4

Примеры:
    "99-000"  → 99.0
    "99-16+"  → 99 + 16/32 + 4/256 = 99.515625
    "100-317" → 100 + 31/32 + 7/256

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Разбор строгий: любая невалидная строка → InvalidFractionalPrice, никогда не 0.0
2. decode → encode для канонической строки возвращает исходную строку
   (канонически 4/256 записывается как '+'; "99-004" кодируется обратно как "99-00+")
3. Только ASCII цифры, base без ведущих нулей, без пробелов по краям
4. Кодирование усекает (не округляет) до 1/256
"""

import math
import re
from typing import Final


# =============================================================================
# КОНСТАНТЫ
# =============================================================================

# Знаменатели дробной нотации
THIRTY_SECONDS: Final[int] = 32
TWO_FIFTY_SIXTHS: Final[int] = 256

# Символ '+' обозначает 4/256 (половину 32-й)
HALF_TICK_CHAR: Final[str] = "+"
HALF_TICK_VALUE: Final[int] = 4

# Минимальный шаг цены
TICK_SIZE: Final[float] = 1.0 / TWO_FIFTY_SIXTHS

# Только ASCII цифры, base без ведущих нулей
_FRACTIONAL_RE: Final[re.Pattern[str]] = re.compile(r"(0|[1-9][0-9]*)-([0-9]{2})([0-7+])")


# =============================================================================
# ОШИБКИ
# =============================================================================


class InvalidFractionalPrice(ValueError):
    """Строка не соответствует нотации '<base>-<XY><z>'."""

    def __init__(self, text: object, reason: str):
        self.text = text
        self.reason = reason
        super().__init__(f"Invalid fractional price {text!r}: {reason}")


# =============================================================================
# DECODE / ENCODE
# =============================================================================


def decode_fractional(text: str) -> float:
    """
    Конверсия дробной нотации в десятичную цену.

    Args:
        text: Цена в нотации "<base>-<XY><z>"

    Returns:
        base + XY/32 + z/256

    Raises:
        InvalidFractionalPrice: Если строка не соответствует формату
            или XY вне диапазона 00..31

    Examples:
        >>> decode_fractional("99-16+")
        99.515625
        >>> decode_fractional("100-000")
        100.0
    """
    if not isinstance(text, str):
        raise InvalidFractionalPrice(text, "expected a string")

    match = _FRACTIONAL_RE.fullmatch(text)
    if match is None:
        raise InvalidFractionalPrice(text, "expected '<integer>-<XY><z>'")

    base = int(match.group(1))
    xy = int(match.group(2))
    z_char = match.group(3)

    if xy > THIRTY_SECONDS - 1:
        raise InvalidFractionalPrice(text, f"32nds component {xy} outside 00..31")

    z = HALF_TICK_VALUE if z_char == HALF_TICK_CHAR else int(z_char)

    return base + xy / THIRTY_SECONDS + z / TWO_FIFTY_SIXTHS


def encode_fractional(price: float) -> str:
    """
    Конверсия десятичной цены в дробную нотацию.

    Дробная часть усекается до 1/256 (как в исходной системе котирования).

    Args:
        price: Цена (>= 0, конечная)

    Returns:
        Строка "<base>-<XY><z>", z == '+' при остатке 4/256

    Raises:
        ValueError: Если цена отрицательная или не конечная

    Examples:
        >>> encode_fractional(99.515625)
        '99-16+'
        >>> encode_fractional(1.0 / 128)
        '0-002'
    """
    if not math.isfinite(price):
        raise ValueError(f"price must be finite, got {price}")
    if price < 0:
        raise ValueError(f"price must be non-negative, got {price}")

    base = int(price)
    fraction = price - base
    xy = int(fraction * THIRTY_SECONDS)
    z = int(fraction * TWO_FIFTY_SIXTHS) % 8

    z_char = HALF_TICK_CHAR if z == HALF_TICK_VALUE else str(z)
    return f"{base}-{xy:02d}{z_char}"


def is_valid_fractional(text: str) -> bool:
    """Проверка нотации без exception."""
    try:
        decode_fractional(text)
    except InvalidFractionalPrice:
        return False
    return True
