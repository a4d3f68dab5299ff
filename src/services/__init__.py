"""
Services — стадии пайплайна поверх PublishSubscribeHub.

Market data → AlgoExecution → Execution → TradeBooking → Position → Risk
Pricing → AlgoStreaming → Streaming
Inquiry
HistoricalData — персистенция эмитируемых записей
"""

from src.services.algo_execution import (
    AlgoExecutionConfig,
    AlgoExecutionListener,
    AlgoExecutionService,
)
from src.services.algo_streaming import (
    AlgoStreamingConfig,
    AlgoStreamingListener,
    AlgoStreamingService,
)
from src.services.execution import ExecutionService, ExecutionServiceListener
from src.services.historical_data import (
    HistoricalDataConnector,
    HistoricalDataListener,
    HistoricalDataService,
    HistoricalRow,
    InMemoryHistoricalConnector,
    ServiceType,
)
from src.services.inquiry import InquiryService
from src.services.market_data import MarketDataConfig, MarketDataService
from src.services.position import PositionService, PositionServiceListener
from src.services.pricing import PricingService
from src.services.risk import RiskService, RiskServiceListener
from src.services.streaming import StreamingService, StreamingServiceListener
from src.services.trade_booking import (
    TradeBookingConfig,
    TradeBookingExecutionListener,
    TradeBookingService,
)

__all__ = [
    # Market data / execution
    "MarketDataConfig",
    "MarketDataService",
    "AlgoExecutionConfig",
    "AlgoExecutionListener",
    "AlgoExecutionService",
    "ExecutionService",
    "ExecutionServiceListener",
    # Pricing / streaming
    "PricingService",
    "AlgoStreamingConfig",
    "AlgoStreamingListener",
    "AlgoStreamingService",
    "StreamingService",
    "StreamingServiceListener",
    # Trades / positions / risk
    "TradeBookingConfig",
    "TradeBookingExecutionListener",
    "TradeBookingService",
    "PositionService",
    "PositionServiceListener",
    "RiskService",
    "RiskServiceListener",
    # Inquiry
    "InquiryService",
    # Historical data
    "HistoricalDataConnector",
    "HistoricalDataListener",
    "HistoricalDataService",
    "HistoricalRow",
    "InMemoryHistoricalConnector",
    "ServiceType",
]
