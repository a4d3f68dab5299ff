"""TradeBookingService — букинг сделок в торговые книги.

Сделки поступают двумя путями:
- ingestion внешних сделок (on_message)
- исполненные ExecutionOrder через TradeBookingExecutionListener

Конверсия исполнения в сделку:
- исполнение по BID (продаём в bid) → SELL, по OFFER (покупаем offer) → BUY
- книга выбирается round-robin по TradeBookingConfig.books; счётчик
  увеличивается до выбора, поэтому первое исполнение идёт во вторую книгу
- quantity = visible + hidden, trade_id = order_id
"""

from dataclasses import dataclass
from typing import Optional

from src.core.domain.execution import ExecutionOrder
from src.core.domain.market_data import PricingSide
from src.core.domain.trade import Side, Trade
from src.core.logging import get_logger
from src.hub import PublishSubscribeHub, ServiceListener

logger = get_logger(__name__)


@dataclass(frozen=True)
class TradeBookingConfig:
    """Торговые книги для сделок из исполнений."""

    books: tuple[str, ...] = ("TRSY1", "TRSY2", "TRSY3")

    def __post_init__(self) -> None:
        if not self.books:
            raise ValueError("books must not be empty")


class TradeBookingService(PublishSubscribeHub[str, Trade]):
    """Keyed store сделок: trade_id → Trade."""

    def book_trade(self, trade: Trade) -> None:
        """Букинг сделки: сохранение и fan-out."""
        logger.info(
            "trade_booked",
            trade_id=trade.trade_id,
            product_id=trade.product_id,
            book=trade.book,
            side=trade.side.value,
            quantity=trade.quantity,
        )
        self.upsert(trade.trade_id, trade)

    def on_message(self, trade: Trade) -> None:
        """Сделка из ingestion."""
        self.book_trade(trade)


class TradeBookingExecutionListener(ServiceListener[ExecutionOrder]):
    """Listener стадии исполнения: каждое исполнение букается одной сделкой."""

    def __init__(self, service: TradeBookingService, config: Optional[TradeBookingConfig] = None):
        self.service = service
        self.config = config or TradeBookingConfig()
        self._booked_count = 0

    @property
    def booked_count(self) -> int:
        return self._booked_count

    def to_trade(self, order: ExecutionOrder) -> Trade:
        """Сделка по исполненному ордеру (продвигает round-robin книг)."""
        self._booked_count += 1
        books = self.config.books
        book = books[self._booked_count % len(books)]
        side = Side.SELL if order.side == PricingSide.BID else Side.BUY

        return Trade(
            product=order.product,
            trade_id=order.order_id,
            price=order.price,
            book=book,
            quantity=order.total_quantity(),
            side=side,
        )

    def process_add(self, data: ExecutionOrder) -> None:
        self.service.book_trade(self.to_trade(data))
