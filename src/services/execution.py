"""ExecutionService — отправка алгоритмических ордеров на площадку."""

from src.core.domain.execution import ExecutionOrder, Market
from src.core.logging import get_logger
from src.hub import PublishSubscribeHub, ServiceListener

from .historical_data import ServiceType

logger = get_logger(__name__)


class ExecutionService(PublishSubscribeHub[str, ExecutionOrder]):
    """Keyed store исполненных ордеров: product_id → последний ExecutionOrder."""

    service_type = ServiceType.EXECUTION

    def __init__(self, market: Market = Market.BROKERTEC):
        super().__init__()
        self.market = market

    def execute_order(self, order: ExecutionOrder) -> None:
        logger.info(
            "order_executed",
            product_id=order.product_id,
            order_id=order.order_id,
            market=self.market.value,
        )
        self.upsert(order.product_id, order)


class ExecutionServiceListener(ServiceListener[ExecutionOrder]):
    """Listener стадии алгоритма исполнения."""

    def __init__(self, service: ExecutionService):
        self.service = service

    def process_add(self, data: ExecutionOrder) -> None:
        self.service.execute_order(data)
