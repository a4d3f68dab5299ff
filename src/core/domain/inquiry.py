"""
Inquiry — Модель клиентского запроса котировки

Immutable Pydantic модель. Переходы состояний не мутируют запись:
with_state() / with_price() возвращают новый экземпляр.
"""

from enum import Enum

from pydantic import BaseModel, Field

from src.core.math.fractional_price import encode_fractional

from .product import Bond
from .trade import Side


# =============================================================================
# ENUMS
# =============================================================================


class InquiryState(str, Enum):
    """Состояние inquiry"""

    RECEIVED = "RECEIVED"
    QUOTED = "QUOTED"
    DONE = "DONE"
    REJECTED = "REJECTED"
    CUSTOMER_REJECTED = "CUSTOMER_REJECTED"

    @property
    def is_terminal(self) -> bool:
        return self in (
            InquiryState.DONE,
            InquiryState.REJECTED,
            InquiryState.CUSTOMER_REJECTED,
        )


# =============================================================================
# INQUIRY MODEL
# =============================================================================


class Inquiry(BaseModel):
    """
    Клиентский запрос котировки.

    Immutable модель (frozen=True).
    """

    inquiry_id: str = Field(..., min_length=1, description="Идентификатор inquiry")
    product: Bond
    side: Side = Field(..., description="Направление клиента")
    quantity: int = Field(..., gt=0, description="Количество")
    price: float = Field(..., ge=0, description="Цена")
    state: InquiryState = Field(..., description="Состояние")

    model_config = {"frozen": True}

    @property
    def product_id(self) -> str:
        return self.product.product_id

    def with_state(self, state: InquiryState) -> "Inquiry":
        """Копия с новым состоянием"""
        return self.model_copy(update={"state": state})

    def with_price(self, price: float) -> "Inquiry":
        """Копия с новой ценой (состояние не меняется)"""
        if price < 0:
            raise ValueError(f"price must be non-negative, got {price}")
        return self.model_copy(update={"price": price})

    def to_fields(self) -> list[str]:
        return [
            self.inquiry_id,
            self.product_id,
            self.side.value,
            str(self.quantity),
            encode_fractional(self.price),
            self.state.value,
        ]
