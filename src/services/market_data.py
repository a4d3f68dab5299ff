"""MarketDataService — стадия стакана заявок.

Хранит последний OrderBook по каждому продукту и публикует его listeners.
Запросы лучшей цены и агрегированной глубины делегируются снапшоту.
"""

from dataclasses import dataclass

from src.core.domain.market_data import BidOffer, OrderBook
from src.core.logging import get_logger
from src.hub import PublishSubscribeHub

logger = get_logger(__name__)


@dataclass(frozen=True)
class MarketDataConfig:
    """Конфигурация стадии стакана."""

    # Уровней на сторону; полный снапшот = 2 × book_depth строк
    book_depth: int = 10

    def __post_init__(self) -> None:
        if self.book_depth <= 0:
            raise ValueError(f"book_depth must be positive, got {self.book_depth}")

    @property
    def snapshot_size(self) -> int:
        return 2 * self.book_depth


class MarketDataService(PublishSubscribeHub[str, OrderBook]):
    """Keyed store стаканов: product_id → последний OrderBook."""

    def __init__(self, config: MarketDataConfig | None = None):
        super().__init__()
        self.config = config or MarketDataConfig()

    @property
    def book_depth(self) -> int:
        return self.config.book_depth

    def on_message(self, book: OrderBook) -> None:
        """Новый снапшот: сохранение и fan-out."""
        logger.debug(
            "order_book_received",
            product_id=book.product_id,
            bids=len(book.bid_stack),
            offers=len(book.offer_stack),
        )
        self.upsert(book.product_id, book)

    def get_best_bid_offer(self, product_id: str) -> BidOffer:
        """
        Лучшие bid/offer последнего снапшота.

        Raises:
            NotFound: Если по продукту ещё не было снапшота
            EmptyBook: Если одна из сторон пуста
        """
        return self.get(product_id).best_bid_offer()

    def aggregate_depth(self, product_id: str) -> OrderBook:
        """
        Агрегированная глубина последнего снапшота.

        Хранимый снапшот не изменяется.

        Raises:
            NotFound: Если по продукту ещё не было снапшота
        """
        return self.get(product_id).aggregate_depth()
