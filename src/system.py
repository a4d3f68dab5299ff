"""
TradingSystem — сборка пайплайна.

Связи стадий:
    MarketData → AlgoExecution → Execution → TradeBooking → Position → Risk
    Pricing → AlgoStreaming → Streaming
    Inquiry

Эмитирующие стадии (Execution, Streaming, Position, Risk, Inquiry) дополнительно
публикуют записи в HistoricalDataService. Historical listener регистрируется
первым, поэтому строки в connector идут в порядке распространения события.
"""

from dataclasses import dataclass, field
from typing import Final, Mapping, Optional

from src.connectors import (
    InquiryRecordConnector,
    OrderBookConnector,
    PriceQuoteConnector,
    TradeRecordConnector,
)
from src.core.domain.inquiry import Inquiry
from src.core.domain.product import TREASURY_PV01, BondCatalog
from src.core.domain.risk import PV01, BucketedSector
from src.core.logging import configure_logging, get_logger
from src.hub import PublishSubscribeHub
from src.services import (
    AlgoExecutionConfig,
    AlgoExecutionListener,
    AlgoExecutionService,
    AlgoStreamingConfig,
    AlgoStreamingListener,
    AlgoStreamingService,
    ExecutionService,
    ExecutionServiceListener,
    HistoricalDataConnector,
    HistoricalDataListener,
    HistoricalDataService,
    InMemoryHistoricalConnector,
    InquiryService,
    MarketDataConfig,
    MarketDataService,
    PositionService,
    PositionServiceListener,
    PricingService,
    RiskService,
    RiskServiceListener,
    ServiceType,
    StreamingService,
    StreamingServiceListener,
    TradeBookingConfig,
    TradeBookingExecutionListener,
    TradeBookingService,
)

logger = get_logger(__name__)

# Сектор → сроки выпусков
DEFAULT_SECTORS: Final[Mapping[str, tuple[int, ...]]] = {
    "FrontEnd": (2, 3),
    "Belly": (5, 7, 10),
    "LongEnd": (20, 30),
}


@dataclass(frozen=True)
class SystemConfig:
    """Конфигурация сборки."""

    market_data: MarketDataConfig = field(default_factory=MarketDataConfig)
    algo_execution: AlgoExecutionConfig = field(default_factory=AlgoExecutionConfig)
    algo_streaming: AlgoStreamingConfig = field(default_factory=AlgoStreamingConfig)
    trade_booking: TradeBookingConfig = field(default_factory=TradeBookingConfig)
    sectors: Mapping[str, tuple[int, ...]] = field(default_factory=lambda: dict(DEFAULT_SECTORS))
    log_level: str = "INFO"
    json_logs: bool = False


def build_sectors(
    catalog: BondCatalog, sectors: Mapping[str, tuple[int, ...]] = DEFAULT_SECTORS
) -> list[BucketedSector]:
    """
    Секторы из каталога.

    Raises:
        ConfigurationMissing: Если срок сектора не в каталоге
    """
    return [
        BucketedSector(name=name, products=tuple(catalog.by_maturity(years) for years in maturities))
        for name, maturities in sectors.items()
    ]


class TradingSystem:
    """Собранный пайплайн: сервисы, listeners, connectors."""

    def __init__(
        self,
        config: Optional[SystemConfig] = None,
        catalog: Optional[BondCatalog] = None,
        pv01_table: Mapping[str, float] = TREASURY_PV01,
        historical_connector: Optional[HistoricalDataConnector] = None,
    ):
        self.config = config or SystemConfig()
        configure_logging(level=self.config.log_level, json_output=self.config.json_logs)

        self.catalog = catalog or BondCatalog()
        self.historical_connector = historical_connector or InMemoryHistoricalConnector()

        # Стадии
        self.market_data = MarketDataService(self.config.market_data)
        self.pricing = PricingService()
        self.algo_execution = AlgoExecutionService(self.config.algo_execution)
        self.execution = ExecutionService()
        self.algo_streaming = AlgoStreamingService(self.config.algo_streaming)
        self.streaming = StreamingService()
        self.trade_booking = TradeBookingService()
        self.position = PositionService()
        self.risk = RiskService(pv01_table)
        self.inquiry = InquiryService()

        # Historical data
        self.historical: dict[ServiceType, HistoricalDataService] = {}
        self._link_historical(self.execution, ServiceType.EXECUTION)
        self._link_historical(self.streaming, ServiceType.STREAMING)
        self._link_historical(self.position, ServiceType.POSITION)
        self._link_historical(self.risk, ServiceType.RISK)
        self._link_historical(
            self.inquiry, ServiceType.INQUIRY, persist_key=_inquiry_key
        )

        # Связи стадий
        self.market_data.add_listener(AlgoExecutionListener(self.algo_execution))
        self.algo_execution.add_listener(ExecutionServiceListener(self.execution))
        self.execution.add_listener(
            TradeBookingExecutionListener(self.trade_booking, self.config.trade_booking)
        )
        self.trade_booking.add_listener(PositionServiceListener(self.position))
        self.position.add_listener(RiskServiceListener(self.risk))
        self.pricing.add_listener(AlgoStreamingListener(self.algo_streaming))
        self.algo_streaming.add_listener(StreamingServiceListener(self.streaming))

        # Ingestion
        self.order_book_connector = OrderBookConnector(self.market_data, self.catalog)
        self.price_quote_connector = PriceQuoteConnector(self.pricing, self.catalog)
        self.trade_record_connector = TradeRecordConnector(self.trade_booking, self.catalog)
        self.inquiry_record_connector = InquiryRecordConnector(self.inquiry, self.catalog)

        self.sectors = build_sectors(self.catalog, self.config.sectors)

        logger.info(
            "trading_system_built",
            products=len(self.catalog),
            book_depth=self.market_data.book_depth,
            sectors=[sector.name for sector in self.sectors],
        )

    def _link_historical(
        self, stage: PublishSubscribeHub, service_type: ServiceType, persist_key=None
    ) -> None:
        service = HistoricalDataService(service_type, self.historical_connector, persist_key)
        stage.add_listener(HistoricalDataListener(service))
        self.historical[service_type] = service

    def bucketed_risk(self) -> list[PV01]:
        """PV01 по всем секторам из последних известных рисков."""
        return [self.risk.get_bucketed_risk(sector) for sector in self.sectors]


def _inquiry_key(inquiry: Inquiry) -> str:
    return inquiry.inquiry_id
