"""
ExecutionOrder — Модель ордера на исполнение

Immutable Pydantic модель ордера, отправляемого на площадку алгоритмом исполнения.
"""

from enum import Enum

from pydantic import BaseModel, Field

from src.core.math.fractional_price import encode_fractional

from .market_data import PricingSide
from .product import Bond


# =============================================================================
# ENUMS
# =============================================================================


class OrderType(str, Enum):
    """Тип ордера"""

    FOK = "FOK"
    IOC = "IOC"
    MARKET = "MARKET"
    LIMIT = "LIMIT"
    STOP = "STOP"


class Market(str, Enum):
    """Площадка исполнения"""

    BROKERTEC = "BROKERTEC"
    ESPEED = "ESPEED"
    CME = "CME"


# =============================================================================
# EXECUTION ORDER MODEL
# =============================================================================


class ExecutionOrder(BaseModel):
    """
    Ордер на исполнение.

    Immutable модель (frozen=True).
    """

    product: Bond
    side: PricingSide = Field(..., description="Сторона стакана, по которой исполняемся")
    order_id: str = Field(..., min_length=1, description="Идентификатор ордера")
    order_type: OrderType = Field(..., description="Тип ордера")
    price: float = Field(..., ge=0, description="Цена")
    visible_quantity: int = Field(..., ge=0, description="Видимое количество")
    hidden_quantity: int = Field(..., ge=0, description="Скрытое количество")
    parent_order_id: str = Field(..., description="Идентификатор родительского ордера")
    is_child_order: bool = Field(..., description="Дочерний ордер")

    model_config = {"frozen": True}

    @property
    def product_id(self) -> str:
        return self.product.product_id

    def total_quantity(self) -> int:
        """Видимое + скрытое количество"""
        return self.visible_quantity + self.hidden_quantity

    def to_fields(self) -> list[str]:
        """Строковые поля для внешнего sink"""
        return [
            self.product_id,
            self.side.value,
            self.order_id,
            self.order_type.value,
            encode_fractional(self.price),
            str(self.visible_quantity),
            str(self.hidden_quantity),
            self.parent_order_id,
            "YES" if self.is_child_order else "NO",
        ]
