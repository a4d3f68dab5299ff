"""
Contract Validation Module

JSON Schema контракты входящих записей пайплайна.
"""

from .validators import (
    ContractValidator,
    InquiryRecordValidator,
    OrderBookLineValidator,
    PriceQuoteValidator,
    SchemaLoader,
    TradeRecordValidator,
    validate_inquiry_record,
    validate_order_book_line,
    validate_price_quote,
    validate_trade_record,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "OrderBookLineValidator",
    "PriceQuoteValidator",
    "TradeRecordValidator",
    "InquiryRecordValidator",
    # Functions
    "validate_order_book_line",
    "validate_price_quote",
    "validate_trade_record",
    "validate_inquiry_record",
]
