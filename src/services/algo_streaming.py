"""AlgoStreamingService — построение двусторонних котировок из внутренних цен.

Каждая Price превращается ровно в один PriceStream:
- bid = mid − spread/2, offer = mid + spread/2
- visible = lot_sizes[counter % 2] (1 000 000 / 2 000 000 поочерёдно)
- hidden = hidden_multiplier × visible

Счётчик общий для всех продуктов, растёт на каждой котировке.
"""

from dataclasses import dataclass
from typing import Optional

from src.core.domain.market_data import PricingSide
from src.core.domain.pricing import Price
from src.core.domain.streaming import PriceStream, PriceStreamOrder
from src.core.logging import get_logger
from src.hub import PublishSubscribeHub, ServiceListener

logger = get_logger(__name__)


@dataclass(frozen=True)
class AlgoStreamingConfig:
    """Параметры размеров стрим-котировок."""

    lot_sizes: tuple[int, ...] = (1_000_000, 2_000_000)
    hidden_multiplier: int = 2

    def __post_init__(self) -> None:
        if not self.lot_sizes:
            raise ValueError("lot_sizes must not be empty")
        if any(size <= 0 for size in self.lot_sizes):
            raise ValueError(f"lot_sizes must be positive, got {self.lot_sizes}")
        if self.hidden_multiplier < 0:
            raise ValueError(f"hidden_multiplier must be non-negative, got {self.hidden_multiplier}")


class AlgoStreamingService(PublishSubscribeHub[str, PriceStream]):
    """Keyed store котировок алгоритма: product_id → последний PriceStream."""

    def __init__(self, config: Optional[AlgoStreamingConfig] = None):
        super().__init__()
        self.config = config or AlgoStreamingConfig()
        self._publish_count = 0

    @property
    def publish_count(self) -> int:
        return self._publish_count

    def algo_publish_price(self, price: Price) -> PriceStream:
        """
        Котировка по внутренней цене.

        Args:
            price: Mid и spread продукта

        Returns:
            Эмитированный PriceStream
        """
        lot_sizes = self.config.lot_sizes
        visible = lot_sizes[self._publish_count % len(lot_sizes)]
        hidden = self.config.hidden_multiplier * visible
        self._publish_count += 1

        half_spread = price.bid_offer_spread / 2.0
        stream = PriceStream(
            product=price.product,
            bid_order=PriceStreamOrder(
                price=price.mid - half_spread,
                visible_quantity=visible,
                hidden_quantity=hidden,
                side=PricingSide.BID,
            ),
            offer_order=PriceStreamOrder(
                price=price.mid + half_spread,
                visible_quantity=visible,
                hidden_quantity=hidden,
                side=PricingSide.OFFER,
            ),
        )

        logger.debug(
            "price_stream_built",
            product_id=stream.product_id,
            visible=visible,
            hidden=hidden,
        )
        self.upsert(stream.product_id, stream)
        return stream


class AlgoStreamingListener(ServiceListener[Price]):
    """Listener стадии цен."""

    def __init__(self, service: AlgoStreamingService):
        self.service = service

    def process_add(self, data: Price) -> None:
        self.service.algo_publish_price(data)
