"""StreamingService — публикация котировок клиентам."""

from src.core.domain.streaming import PriceStream
from src.core.logging import get_logger
from src.hub import PublishSubscribeHub, ServiceListener

from .historical_data import ServiceType

logger = get_logger(__name__)


class StreamingService(PublishSubscribeHub[str, PriceStream]):
    """Keyed store опубликованных котировок: product_id → последний PriceStream."""

    service_type = ServiceType.STREAMING

    def publish_price(self, stream: PriceStream) -> None:
        logger.debug("price_stream_published", product_id=stream.product_id)
        self.upsert(stream.product_id, stream)


class StreamingServiceListener(ServiceListener[PriceStream]):
    """Listener стадии алгоритмического стриминга."""

    def __init__(self, service: StreamingService):
        self.service = service

    def process_add(self, data: PriceStream) -> None:
        self.service.publish_price(data)
