"""
Domain models and value objects.

Contains fundamental domain entities: Bond, OrderBook, Price, ExecutionOrder,
PriceStream, Trade, Position, PV01, Inquiry.
"""

from src.core.domain.execution import ExecutionOrder, Market, OrderType
from src.core.domain.inquiry import Inquiry, InquiryState
from src.core.domain.market_data import BidOffer, EmptyBook, Order, OrderBook, PricingSide
from src.core.domain.position import Position
from src.core.domain.pricing import Price
from src.core.domain.product import (
    TREASURY_COUPONS,
    TREASURY_MATURITIES,
    TREASURY_PV01,
    Bond,
    BondCatalog,
    ConfigurationMissing,
    IdType,
)
from src.core.domain.risk import PV01, BucketedSector
from src.core.domain.streaming import PriceStream, PriceStreamOrder
from src.core.domain.trade import Side, Trade

__all__ = [
    # Product
    "Bond",
    "BondCatalog",
    "ConfigurationMissing",
    "IdType",
    "TREASURY_COUPONS",
    "TREASURY_MATURITIES",
    "TREASURY_PV01",
    # Market data
    "BidOffer",
    "EmptyBook",
    "Order",
    "OrderBook",
    "PricingSide",
    # Pricing
    "Price",
    # Execution
    "ExecutionOrder",
    "Market",
    "OrderType",
    # Streaming
    "PriceStream",
    "PriceStreamOrder",
    # Trade / Position / Risk
    "Side",
    "Trade",
    "Position",
    "PV01",
    "BucketedSector",
    # Inquiry
    "Inquiry",
    "InquiryState",
]
