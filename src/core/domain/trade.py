"""
Trade — Модель сделки

Immutable Pydantic модель сделки, забуканной в торговую книгу (book).
Сделки приходят из внешнего источника или создаются из ExecutionOrder.
"""

from enum import Enum

from pydantic import BaseModel, Field

from src.core.math.fractional_price import encode_fractional

from .product import Bond


# =============================================================================
# ENUMS
# =============================================================================


class Side(str, Enum):
    """Направление сделки"""

    BUY = "BUY"
    SELL = "SELL"


# =============================================================================
# TRADE MODEL
# =============================================================================


class Trade(BaseModel):
    """
    Модель сделки.

    Immutable модель (frozen=True).
    """

    product: Bond
    trade_id: str = Field(..., min_length=1, description="Уникальный идентификатор сделки")
    price: float = Field(..., ge=0, description="Цена сделки")
    book: str = Field(..., min_length=1, description="Торговая книга (например, 'TRSY1')")
    quantity: int = Field(..., gt=0, description="Количество (всегда положительное)")
    side: Side = Field(..., description="Направление (BUY/SELL)")

    model_config = {"frozen": True}

    @property
    def product_id(self) -> str:
        return self.product.product_id

    def signed_quantity(self) -> int:
        """
        Количество со знаком.

        Returns:
            +quantity для BUY, −quantity для SELL
        """
        return self.quantity if self.side == Side.BUY else -self.quantity

    def to_fields(self) -> list[str]:
        return [
            self.product_id,
            self.trade_id,
            encode_fractional(self.price),
            self.book,
            str(self.quantity),
            self.side.value,
        ]
