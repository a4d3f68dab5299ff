"""
Ingestion connectors — входная граница пайплайна.

Каждый connector:
1. валидирует запись против JSON Schema контракта (jsonschema.ValidationError)
2. разрешает product_id через BondCatalog (ConfigurationMissing)
3. декодирует дробные цены (InvalidFractionalPrice)
4. только после этого передаёт доменную запись в сервис

Ошибка записи никогда не приводит к частичной мутации хаба.
"""

import json
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, Optional

from jsonschema import ValidationError

from src.core.contracts import (
    InquiryRecordValidator,
    OrderBookLineValidator,
    PriceQuoteValidator,
    TradeRecordValidator,
)
from src.core.domain.inquiry import Inquiry, InquiryState
from src.core.domain.market_data import Order, OrderBook, PricingSide
from src.core.domain.pricing import Price
from src.core.domain.product import BondCatalog, ConfigurationMissing
from src.core.domain.trade import Side, Trade
from src.core.logging import get_logger
from src.core.math.fractional_price import decode_fractional
from src.services.inquiry import InquiryService
from src.services.market_data import MarketDataService
from src.services.pricing import PricingService
from src.services.trade_booking import TradeBookingService

logger = get_logger(__name__)


def load_records(path: Path) -> Iterator[Dict[str, Any]]:
    """
    Чтение записей из JSON Lines файла (одна запись на строку).

    Пустые строки пропускаются.

    Raises:
        json.JSONDecodeError: Если строка не является валидным JSON
    """
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if line:
                yield json.loads(line)


# =============================================================================
# ORDER BOOK
# =============================================================================


class OrderBookConnector:
    """
    Сборка снапшотов стакана из потока строк.

    Строки накапливаются до 2 × book_depth, затем эмитируется один OrderBook.
    Продукт снапшота берётся из строки, закрывающей батч; смена продукта
    внутри батча логируется как warning.
    Неполный хвостовой батч отбрасывается при close().
    Невалидная строка отбрасывает весь незавершённый батч.
    """

    def __init__(self, service: MarketDataService, catalog: BondCatalog):
        self.service = service
        self.catalog = catalog
        self._validator = OrderBookLineValidator()
        self._pending: list[Order] = []
        self._batch_product_ids: set[str] = set()

    @property
    def batch_size(self) -> int:
        return self.service.config.snapshot_size

    @property
    def pending(self) -> int:
        """Строк в незавершённом батче"""
        return len(self._pending)

    def on_line(self, record: Dict[str, Any]) -> Optional[OrderBook]:
        """
        Одна строка стакана.

        Returns:
            Эмитированный OrderBook, если строка закрыла батч, иначе None

        Raises:
            ValidationError: Запись не соответствует контракту
            ConfigurationMissing: Продукт не в каталоге
            InvalidFractionalPrice: Невалидная цена
        """
        try:
            self._validator.validate(record)
            product = self.catalog.get(record["product_id"])
            order = Order(
                price=decode_fractional(record["price"]),
                quantity=record["quantity"],
                side=PricingSide(record["side"]),
            )
        except (ValidationError, ConfigurationMissing, ValueError):
            self._discard("invalid_line")
            raise

        self._pending.append(order)
        self._batch_product_ids.add(product.product_id)

        if len(self._pending) < self.batch_size:
            return None

        if len(self._batch_product_ids) > 1:
            logger.warning(
                "order_book_batch_mixed_products",
                product_ids=sorted(self._batch_product_ids),
                labelled_as=product.product_id,
            )

        orders = self._pending
        self._pending = []
        self._batch_product_ids = set()
        book = OrderBook(
            product=product,
            bid_stack=tuple(o for o in orders if o.side == PricingSide.BID),
            offer_stack=tuple(o for o in orders if o.side == PricingSide.OFFER),
        )
        self.service.on_message(book)
        return book

    def feed(self, records: Iterable[Dict[str, Any]]) -> int:
        """
        Поток строк целиком; хвостовой неполный батч отбрасывается,
        в том числе когда поток прерван ошибкой.

        Returns:
            Количество эмитированных снапшотов
        """
        emitted = 0
        try:
            for record in records:
                if self.on_line(record) is not None:
                    emitted += 1
        finally:
            self.close()
        return emitted

    def close(self) -> None:
        """Конец потока: неполный батч отбрасывается."""
        self._discard("end_of_stream")

    def _discard(self, reason: str) -> None:
        if self._pending:
            logger.debug(
                "order_book_partial_batch_discarded",
                reason=reason,
                lines=len(self._pending),
                batch_size=self.batch_size,
            )
        self._pending = []
        self._batch_product_ids = set()


# =============================================================================
# PRICES / TRADES / INQUIRIES
# =============================================================================


class PriceQuoteConnector:
    """Двусторонние котировки → Price → PricingService."""

    def __init__(self, service: PricingService, catalog: BondCatalog):
        self.service = service
        self.catalog = catalog
        self._validator = PriceQuoteValidator()

    def on_record(self, record: Dict[str, Any]) -> Price:
        self._validator.validate(record)
        price = Price.from_bid_offer(
            product=self.catalog.get(record["product_id"]),
            bid=decode_fractional(record["bid"]),
            offer=decode_fractional(record["offer"]),
        )
        self.service.on_message(price)
        return price

    def feed(self, records: Iterable[Dict[str, Any]]) -> int:
        count = 0
        for record in records:
            self.on_record(record)
            count += 1
        return count


class TradeRecordConnector:
    """Внешние сделки → Trade → TradeBookingService."""

    def __init__(self, service: TradeBookingService, catalog: BondCatalog):
        self.service = service
        self.catalog = catalog
        self._validator = TradeRecordValidator()

    def on_record(self, record: Dict[str, Any]) -> Trade:
        self._validator.validate(record)
        trade = Trade(
            product=self.catalog.get(record["product_id"]),
            trade_id=record["trade_id"],
            price=decode_fractional(record["price"]),
            book=record["book"],
            quantity=record["quantity"],
            side=Side(record["side"]),
        )
        self.service.on_message(trade)
        return trade

    def feed(self, records: Iterable[Dict[str, Any]]) -> int:
        count = 0
        for record in records:
            self.on_record(record)
            count += 1
        return count


class InquiryRecordConnector:
    """Клиентские запросы → Inquiry → InquiryService."""

    def __init__(self, service: InquiryService, catalog: BondCatalog):
        self.service = service
        self.catalog = catalog
        self._validator = InquiryRecordValidator()

    def on_record(self, record: Dict[str, Any]) -> Optional[Inquiry]:
        """
        Returns:
            Итоговая запись InquiryService или None для terminal состояния
        """
        self._validator.validate(record)
        inquiry = Inquiry(
            inquiry_id=record["inquiry_id"],
            product=self.catalog.get(record["product_id"]),
            side=Side(record["side"]),
            quantity=record["quantity"],
            price=decode_fractional(record["price"]),
            state=InquiryState(record["state"]),
        )
        return self.service.on_message(inquiry)

    def feed(self, records: Iterable[Dict[str, Any]]) -> int:
        count = 0
        for record in records:
            self.on_record(record)
            count += 1
        return count
