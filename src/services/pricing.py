"""PricingService — стадия внутренних цен (mid + spread) по продукту."""

from src.core.domain.pricing import Price
from src.core.logging import get_logger
from src.hub import PublishSubscribeHub

logger = get_logger(__name__)


class PricingService(PublishSubscribeHub[str, Price]):
    """Keyed store цен: product_id → последняя Price."""

    def on_message(self, price: Price) -> None:
        logger.debug(
            "price_received",
            product_id=price.product_id,
            mid=price.mid,
            spread=price.bid_offer_spread,
        )
        self.upsert(price.product_id, price)
