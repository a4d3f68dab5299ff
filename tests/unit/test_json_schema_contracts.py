"""
Tests for JSON Schema Contract Validators

Coverage:
- Валидность самих схем
- Валидация правильных записей
- Детекция нарушений required / типов / enum / лишних полей
"""

import json

import pytest
from jsonschema import Draft202012Validator, ValidationError

from src.core.contracts import (
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


# =============================================================================
# FIXTURES - VALID DATA SAMPLES
# =============================================================================


@pytest.fixture
def valid_order_book_line():
    return {"product_id": "912828V23", "price": "99-16+", "quantity": 1000000, "side": "BID"}


@pytest.fixture
def valid_price_quote():
    return {"product_id": "912828V23", "bid": "99-160", "offer": "99-162"}


@pytest.fixture
def valid_trade_record():
    return {
        "product_id": "912828V23",
        "trade_id": "T1",
        "price": "99-160",
        "book": "TRSY1",
        "quantity": 1000000,
        "side": "BUY",
    }


@pytest.fixture
def valid_inquiry_record():
    return {
        "inquiry_id": "INQ1",
        "product_id": "912828V23",
        "side": "SELL",
        "quantity": 1000000,
        "price": "99-160",
        "state": "RECEIVED",
    }


# =============================================================================
# SCHEMA LOADING
# =============================================================================


class TestSchemaLoader:
    """Тесты загрузки схем."""

    @pytest.mark.parametrize(
        "schema_name", ["order_book_line", "price_quote", "trade_record", "inquiry_record"]
    )
    def test_schemas_are_valid(self, schema_name):
        loader = SchemaLoader()
        schema = loader.load_schema(schema_name)
        Draft202012Validator.check_schema(schema)

    def test_schema_cached(self):
        loader = SchemaLoader()
        assert loader.load_schema("price_quote") is loader.load_schema("price_quote")

    def test_missing_schema(self):
        with pytest.raises(FileNotFoundError):
            SchemaLoader().load_schema("does_not_exist")

    def test_invalid_schema_rejected(self, tmp_path):
        (tmp_path / "broken.json").write_text(json.dumps({"type": 42}), encoding="utf-8")
        with pytest.raises(ValueError):
            SchemaLoader(schema_dir=tmp_path).load_schema("broken")

    def test_missing_schema_dir(self, tmp_path):
        with pytest.raises(RuntimeError):
            SchemaLoader(schema_dir=tmp_path / "nowhere")


# =============================================================================
# VALIDATION
# =============================================================================


class TestOrderBookLineContract:
    """Тесты order_book_line."""

    def test_valid(self, valid_order_book_line):
        validate_order_book_line(valid_order_book_line)
        assert OrderBookLineValidator().is_valid(valid_order_book_line)

    def test_missing_price(self, valid_order_book_line):
        del valid_order_book_line["price"]
        with pytest.raises(ValidationError):
            validate_order_book_line(valid_order_book_line)

    def test_bad_side(self, valid_order_book_line):
        valid_order_book_line["side"] = "BUY"
        assert not OrderBookLineValidator().is_valid(valid_order_book_line)

    def test_non_positive_quantity(self, valid_order_book_line):
        valid_order_book_line["quantity"] = 0
        assert not OrderBookLineValidator().is_valid(valid_order_book_line)

    def test_numeric_price_rejected(self, valid_order_book_line):
        """Цена только в дробной нотации (строкой)."""
        valid_order_book_line["price"] = 99.5
        assert not OrderBookLineValidator().is_valid(valid_order_book_line)

    def test_extra_field_rejected(self, valid_order_book_line):
        valid_order_book_line["venue"] = "BROKERTEC"
        assert not OrderBookLineValidator().is_valid(valid_order_book_line)


class TestOtherContracts:
    """Тесты price_quote, trade_record, inquiry_record."""

    def test_valid_price_quote(self, valid_price_quote):
        validate_price_quote(valid_price_quote)

    def test_price_quote_missing_offer(self, valid_price_quote):
        del valid_price_quote["offer"]
        assert not PriceQuoteValidator().is_valid(valid_price_quote)

    def test_valid_trade_record(self, valid_trade_record):
        validate_trade_record(valid_trade_record)

    def test_trade_record_bad_side(self, valid_trade_record):
        valid_trade_record["side"] = "OFFER"
        errors = list(TradeRecordValidator().iter_errors(valid_trade_record))
        assert len(errors) == 1

    def test_valid_inquiry_record(self, valid_inquiry_record):
        validate_inquiry_record(valid_inquiry_record)

    def test_inquiry_record_unknown_state(self, valid_inquiry_record):
        valid_inquiry_record["state"] = "PENDING"
        with pytest.raises(ValidationError):
            InquiryRecordValidator().validate(valid_inquiry_record)
