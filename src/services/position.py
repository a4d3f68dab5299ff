"""PositionService — позиции по продуктам в разрезе книг.

add_trade():
1. новая Position с signed quantity сделки в её книге (+BUY, −SELL)
2. аддитивное слияние с предыдущей позицией по продукту (если была)
3. сохранение и fan-out объединённой позиции

Позиция только накапливается, сброса нет.
"""

from src.core.domain.position import Position
from src.core.domain.trade import Trade
from src.core.logging import get_logger
from src.hub import PublishSubscribeHub, ServiceListener

from .historical_data import ServiceType

logger = get_logger(__name__)


class PositionService(PublishSubscribeHub[str, Position]):
    """Keyed store позиций: product_id → Position."""

    service_type = ServiceType.POSITION

    def add_trade(self, trade: Trade) -> Position:
        """
        Учёт сделки в позиции.

        Returns:
            Объединённая Position, опубликованная listeners
        """
        position = Position(product=trade.product).add_position(
            trade.book, trade.signed_quantity()
        )

        previous = self.find(trade.product_id)
        if previous is not None:
            position = position.merge(previous)

        logger.debug(
            "position_updated",
            product_id=position.product_id,
            book=trade.book,
            delta=trade.signed_quantity(),
            aggregate=position.aggregate_position(),
        )
        self.upsert(position.product_id, position)
        return position


class PositionServiceListener(ServiceListener[Trade]):
    """Listener стадии букинга сделок."""

    def __init__(self, service: PositionService):
        self.service = service

    def process_add(self, data: Trade) -> None:
        self.service.add_trade(data)
