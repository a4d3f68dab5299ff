"""
Price — Модель внутренней цены

Immutable Pydantic модель: mid и bid/offer spread по продукту.
Строится из двусторонней котировки: mid = (bid + offer) / 2, spread = offer − bid.
"""

from pydantic import BaseModel, Field, model_validator

from src.core.math.fractional_price import encode_fractional

from .product import Bond


class Price(BaseModel):
    """Внутренняя цена продукта: mid и bid/offer spread."""

    product: Bond
    mid: float = Field(..., ge=0, description="Mid цена")
    bid_offer_spread: float = Field(..., ge=0, description="Bid/offer spread")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_bid_non_negative(self) -> "Price":
        """Bid сторона (mid − spread/2) не может быть отрицательной"""
        if self.mid - self.bid_offer_spread / 2.0 < 0:
            raise ValueError(
                f"spread {self.bid_offer_spread} too wide for mid {self.mid}"
            )
        return self

    @classmethod
    def from_bid_offer(cls, product: Bond, bid: float, offer: float) -> "Price":
        """
        Конструктор из двусторонней котировки.

        Args:
            product: Продукт
            bid: Цена bid
            offer: Цена offer (>= bid)

        Returns:
            Price с mid = (bid + offer) / 2 и spread = offer − bid
        """
        if offer < bid:
            raise ValueError(f"offer {offer} below bid {bid} for {product.product_id}")
        return cls(product=product, mid=(bid + offer) / 2.0, bid_offer_spread=offer - bid)

    @property
    def product_id(self) -> str:
        return self.product.product_id

    def to_fields(self) -> list[str]:
        """Строковые поля для внешнего sink: product_id, mid, spread"""
        return [
            self.product_id,
            encode_fractional(self.mid),
            encode_fractional(self.bid_offer_spread),
        ]
