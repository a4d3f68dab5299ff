"""AlgoExecutionService — алгоритм агрессивного исполнения по стакану.

Для каждого снапшота OrderBook:
1. spread = best offer − best bid
2. если spread > spread_threshold (1/128) — no-op, ничего не эмитируется
3. иначе счётчик увеличивается; нечётный счётчик → бьём в лучший bid,
   чётный → в лучший offer (стороны чередуются, первое исполнение по bid)
4. ExecutionOrder (MARKET, hidden 0, order_id "AlgoExec<counter>") сохраняется
   по product_id и публикуется listeners

Счётчик общий для всех продуктов и растёт только на исполненных решениях.
"""

from dataclasses import dataclass
from typing import Final, Optional

from src.core.domain.execution import ExecutionOrder, OrderType
from src.core.domain.market_data import EmptyBook, OrderBook, PricingSide
from src.core.logging import get_logger
from src.hub import PublishSubscribeHub, ServiceListener

logger = get_logger(__name__)

# Порог spread: 1/128 (четыре 256-х)
DEFAULT_SPREAD_THRESHOLD: Final[float] = 1.0 / 128


@dataclass(frozen=True)
class AlgoExecutionConfig:
    """Параметры алгоритма исполнения."""

    spread_threshold: float = DEFAULT_SPREAD_THRESHOLD
    order_type: OrderType = OrderType.MARKET
    order_id_prefix: str = "AlgoExec"
    parent_order_id: str = "PARENT_ORDER_ID"

    def __post_init__(self) -> None:
        if self.spread_threshold < 0:
            raise ValueError(f"spread_threshold must be non-negative, got {self.spread_threshold}")


class AlgoExecutionService(PublishSubscribeHub[str, ExecutionOrder]):
    """Keyed store ордеров алгоритма: product_id → последний ExecutionOrder."""

    def __init__(self, config: Optional[AlgoExecutionConfig] = None):
        super().__init__()
        self.config = config or AlgoExecutionConfig()
        self._execution_count = 0

    @property
    def execution_count(self) -> int:
        """Количество исполненных решений."""
        return self._execution_count

    def algo_execution_trade(self, book: OrderBook) -> Optional[ExecutionOrder]:
        """
        Решение по снапшоту стакана.

        Args:
            book: Снапшот стакана

        Returns:
            Эмитированный ExecutionOrder или None, если spread шире порога

        Raises:
            EmptyBook: Если одна из сторон стакана пуста
        """
        bid_offer = book.best_bid_offer()
        spread = bid_offer.spread

        if spread > self.config.spread_threshold:
            logger.debug(
                "algo_execution_skipped",
                product_id=book.product_id,
                spread=spread,
                threshold=self.config.spread_threshold,
            )
            return None

        self._execution_count += 1
        if self._execution_count % 2 == 1:
            side = PricingSide.BID
            target = bid_offer.bid_order
        else:
            side = PricingSide.OFFER
            target = bid_offer.offer_order

        order = ExecutionOrder(
            product=book.product,
            side=side,
            order_id=f"{self.config.order_id_prefix}{self._execution_count}",
            order_type=self.config.order_type,
            price=target.price,
            visible_quantity=target.quantity,
            hidden_quantity=0,
            parent_order_id=self.config.parent_order_id,
            is_child_order=False,
        )

        logger.info(
            "algo_execution_emitted",
            product_id=order.product_id,
            order_id=order.order_id,
            side=side.value,
            price=order.price,
            quantity=order.visible_quantity,
        )
        self.upsert(order.product_id, order)
        return order


class AlgoExecutionListener(ServiceListener[OrderBook]):
    """Listener стадии стакана.

    Снапшот с пустой стороной пропускается с предупреждением: он не должен
    прерывать fan-out стакана к остальным listeners.
    """

    def __init__(self, service: AlgoExecutionService):
        self.service = service

    def process_add(self, data: OrderBook) -> None:
        try:
            self.service.algo_execution_trade(data)
        except EmptyBook as exc:
            logger.warning(
                "algo_execution_empty_book",
                product_id=exc.product_id,
                side=exc.side.value,
            )
