"""
OrderBook — Модель стакана заявок

Immutable Pydantic модели: Order (ценовой уровень одной стороны), BidOffer (лучшие цены),
OrderBook (bid stack + offer stack по одному продукту).

Бизнес-логика стакана:
- best_bid_offer(): максимальный bid и минимальный offer (при равенстве цен побеждает первый)
- aggregate_depth(): свёртка заявок по точной цене, сумма количества на уровень

Оба метода — чистые функции снапшота, без состояния между снапшотами.
"""

from enum import Enum

from pydantic import BaseModel, Field, field_validator

from .product import Bond


# =============================================================================
# ENUMS
# =============================================================================


class PricingSide(str, Enum):
    """Сторона котировки"""

    BID = "BID"
    OFFER = "OFFER"


# =============================================================================
# ОШИБКИ
# =============================================================================


class EmptyBook(ValueError):
    """Запрос лучшей цены к пустой стороне стакана."""

    def __init__(self, product_id: str, side: PricingSide):
        self.product_id = product_id
        self.side = side
        super().__init__(f"{side.value} stack is empty for {product_id}")


# =============================================================================
# ORDER / BID-OFFER
# =============================================================================


class Order(BaseModel):
    """Заявка в стакане: цена, количество, сторона."""

    price: float = Field(..., ge=0, description="Цена (десятичная)")
    quantity: int = Field(..., gt=0, description="Количество (номинал)")
    side: PricingSide = Field(..., description="Сторона (BID/OFFER)")

    model_config = {"frozen": True}


class BidOffer(BaseModel):
    """Пара лучших заявок: bid и offer."""

    bid_order: Order
    offer_order: Order

    model_config = {"frozen": True}

    @property
    def spread(self) -> float:
        """Offer − bid на вершине стакана"""
        return self.offer_order.price - self.bid_order.price


# =============================================================================
# ORDER BOOK MODEL
# =============================================================================


class OrderBook(BaseModel):
    """
    Снапшот стакана по одному продукту.

    Immutable модель (frozen=True). Каждая сторона — последовательность заявок
    в порядке поступления; порядок важен только для tie-break лучшей цены.
    """

    product: Bond
    bid_stack: tuple[Order, ...] = Field(default_factory=tuple, description="Заявки на покупку")
    offer_stack: tuple[Order, ...] = Field(default_factory=tuple, description="Заявки на продажу")

    model_config = {"frozen": True}

    @field_validator("bid_stack")
    @classmethod
    def validate_bid_side(cls, v: tuple[Order, ...]) -> tuple[Order, ...]:
        """Все заявки bid stack должны иметь сторону BID"""
        for order in v:
            if order.side != PricingSide.BID:
                raise ValueError(f"bid_stack contains {order.side.value} order at {order.price}")
        return v

    @field_validator("offer_stack")
    @classmethod
    def validate_offer_side(cls, v: tuple[Order, ...]) -> tuple[Order, ...]:
        """Все заявки offer stack должны иметь сторону OFFER"""
        for order in v:
            if order.side != PricingSide.OFFER:
                raise ValueError(f"offer_stack contains {order.side.value} order at {order.price}")
        return v

    @property
    def product_id(self) -> str:
        return self.product.product_id

    def best_bid(self) -> Order:
        """
        Заявка с максимальной ценой bid.

        При равных ценах возвращается первая по порядку в стеке.

        Raises:
            EmptyBook: Если bid stack пуст
        """
        if not self.bid_stack:
            raise EmptyBook(self.product_id, PricingSide.BID)

        best = self.bid_stack[0]
        for order in self.bid_stack[1:]:
            if order.price > best.price:
                best = order
        return best

    def best_offer(self) -> Order:
        """
        Заявка с минимальной ценой offer.

        При равных ценах возвращается первая по порядку в стеке.

        Raises:
            EmptyBook: Если offer stack пуст
        """
        if not self.offer_stack:
            raise EmptyBook(self.product_id, PricingSide.OFFER)

        best = self.offer_stack[0]
        for order in self.offer_stack[1:]:
            if order.price < best.price:
                best = order
        return best

    def best_bid_offer(self) -> BidOffer:
        """
        Лучшие bid и offer.

        Raises:
            EmptyBook: Если любая из сторон пуста
        """
        return BidOffer(bid_order=self.best_bid(), offer_order=self.best_offer())

    def aggregate_depth(self) -> "OrderBook":
        """
        Агрегация глубины: одна заявка на каждую уникальную цену каждой стороны.

        Количество на уровне = сумма количеств всех заявок с этой ценой.
        Порядок детерминирован: bids по убыванию цены, offers по возрастанию.
        Повторная агрегация не меняет результат.

        Returns:
            Новый OrderBook с агрегированными уровнями
        """
        return OrderBook(
            product=self.product,
            bid_stack=_aggregate_side(self.bid_stack, PricingSide.BID, descending=True),
            offer_stack=_aggregate_side(self.offer_stack, PricingSide.OFFER, descending=False),
        )

    def total_quantity(self, side: PricingSide) -> int:
        """Суммарное количество по стороне"""
        stack = self.bid_stack if side == PricingSide.BID else self.offer_stack
        return sum(order.quantity for order in stack)


def _aggregate_side(
    stack: tuple[Order, ...], side: PricingSide, descending: bool
) -> tuple[Order, ...]:
    """Свёртка одной стороны стакана по точной цене."""
    levels: dict[float, int] = {}
    for order in stack:
        levels[order.price] = levels.get(order.price, 0) + order.quantity

    return tuple(
        Order(price=price, quantity=quantity, side=side)
        for price, quantity in sorted(levels.items(), reverse=descending)
    )
