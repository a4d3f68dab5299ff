"""Connectors — ingestion адаптеры: валидация записи, разрешение продукта, разбор цен."""

from .ingestion import (
    InquiryRecordConnector,
    OrderBookConnector,
    PriceQuoteConnector,
    TradeRecordConnector,
    load_records,
)

__all__ = [
    "InquiryRecordConnector",
    "OrderBookConnector",
    "PriceQuoteConnector",
    "TradeRecordConnector",
    "load_records",
]
