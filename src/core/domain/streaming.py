"""
PriceStream — Модель двусторонней котировки для стриминга

PriceStreamOrder — одна сторона (цена, видимое/скрытое количество, сторона).
PriceStream — пара bid/offer по продукту.
"""

from pydantic import BaseModel, Field, model_validator

from src.core.math.fractional_price import encode_fractional

from .market_data import PricingSide
from .product import Bond


class PriceStreamOrder(BaseModel):
    """Одна сторона стрим-котировки."""

    price: float = Field(..., ge=0, description="Цена")
    visible_quantity: int = Field(..., ge=0, description="Видимое количество")
    hidden_quantity: int = Field(..., ge=0, description="Скрытое количество")
    side: PricingSide

    model_config = {"frozen": True}

    def to_fields(self) -> list[str]:
        return [
            encode_fractional(self.price),
            str(self.visible_quantity),
            str(self.hidden_quantity),
            self.side.value,
        ]


class PriceStream(BaseModel):
    """
    Двусторонняя котировка по продукту.

    Immutable модель (frozen=True). bid_order всегда BID, offer_order всегда OFFER.
    """

    product: Bond
    bid_order: PriceStreamOrder
    offer_order: PriceStreamOrder

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_sides(self) -> "PriceStream":
        """Проверка сторон и того, что bid не выше offer"""
        if self.bid_order.side != PricingSide.BID:
            raise ValueError("bid_order must be on BID side")
        if self.offer_order.side != PricingSide.OFFER:
            raise ValueError("offer_order must be on OFFER side")
        if self.bid_order.price > self.offer_order.price:
            raise ValueError(
                f"bid {self.bid_order.price} above offer {self.offer_order.price}"
            )
        return self

    @property
    def product_id(self) -> str:
        return self.product.product_id

    def to_fields(self) -> list[str]:
        """product_id, затем поля bid стороны, затем поля offer стороны"""
        return [self.product_id, *self.bid_order.to_fields(), *self.offer_order.to_fields()]
