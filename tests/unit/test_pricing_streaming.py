"""
Tests for pricing and algorithmic streaming stages

Coverage:
- bid/offer = mid ∓ spread/2
- чередование lot sizes 1M / 2M, hidden = 2 × visible
- общий счётчик для всех продуктов
- связка Pricing → AlgoStreaming → Streaming
"""

import pytest

from src.core.domain import Price, PricingSide
from src.hub import FunctionListener
from src.services import (
    AlgoStreamingConfig,
    AlgoStreamingListener,
    AlgoStreamingService,
    PricingService,
    StreamingService,
    StreamingServiceListener,
)


@pytest.fixture
def price_2y(bond_2y):
    return Price(product=bond_2y, mid=99.5, bid_offer_spread=1.0 / 64)


class TestAlgoStreamingService:
    """Тесты алгоритма стриминга."""

    def test_bid_offer_around_mid(self, price_2y):
        stream = AlgoStreamingService().algo_publish_price(price_2y)

        assert stream.bid_order.price == pytest.approx(99.5 - 1.0 / 128)
        assert stream.offer_order.price == pytest.approx(99.5 + 1.0 / 128)
        assert stream.bid_order.side == PricingSide.BID
        assert stream.offer_order.side == PricingSide.OFFER

    def test_lot_sizes_alternate(self, price_2y):
        service = AlgoStreamingService()
        streams = [service.algo_publish_price(price_2y) for _ in range(3)]

        assert [s.bid_order.visible_quantity for s in streams] == [1_000_000, 2_000_000, 1_000_000]
        assert [s.offer_order.hidden_quantity for s in streams] == [2_000_000, 4_000_000, 2_000_000]

    def test_counter_shared_across_products(self, price_2y, bond_10y):
        service = AlgoStreamingService()
        service.algo_publish_price(price_2y)
        stream_10y = service.algo_publish_price(Price(product=bond_10y, mid=101.0, bid_offer_spread=0.0))

        assert stream_10y.bid_order.visible_quantity == 2_000_000
        assert service.publish_count == 2

    def test_zero_spread(self, bond_10y):
        stream = AlgoStreamingService().algo_publish_price(Price(product=bond_10y, mid=101.0, bid_offer_spread=0.0))
        assert stream.bid_order.price == stream.offer_order.price == 101.0

    def test_custom_lot_sizes(self, price_2y):
        service = AlgoStreamingService(AlgoStreamingConfig(lot_sizes=(500_000,), hidden_multiplier=3))
        stream = service.algo_publish_price(price_2y)

        assert stream.bid_order.visible_quantity == 500_000
        assert stream.bid_order.hidden_quantity == 1_500_000

    def test_empty_lot_sizes_rejected(self):
        with pytest.raises(ValueError):
            AlgoStreamingConfig(lot_sizes=())


class TestStreamingPipeline:
    """Тесты связки Pricing → AlgoStreaming → Streaming."""

    def test_price_reaches_streaming(self, price_2y):
        pricing = PricingService()
        algo = AlgoStreamingService()
        streaming = StreamingService()
        pricing.add_listener(AlgoStreamingListener(algo))
        algo.add_listener(StreamingServiceListener(streaming))
        published: list = []
        streaming.add_listener(FunctionListener(published.append))

        pricing.on_message(price_2y)

        assert pricing.get("912828V23") == price_2y
        assert len(published) == 1
        assert streaming.get("912828V23") == published[0]
        assert published[0] == algo.get("912828V23")

    def test_exactly_one_stream_per_price(self, price_2y):
        pricing = PricingService()
        algo = AlgoStreamingService()
        pricing.add_listener(AlgoStreamingListener(algo))

        for _ in range(4):
            pricing.on_message(price_2y)

        assert algo.publish_count == 4
