"""
JSON Schema Contract Validators

Валидация входящих записей (ingestion) согласно JSON Schema контрактам.
Запись проверяется до разбора цен и до любой мутации хабов.

Схемы (src/core/contracts/schema/):
- order_book_line.json — строка стакана
- price_quote.json — двусторонняя котировка
- trade_record.json — внешняя сделка
- inquiry_record.json — клиентский запрос котировки
"""

import json
from pathlib import Path
from typing import Any, Dict, Iterator, Optional

import jsonschema
from jsonschema import Draft202012Validator, ValidationError


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов с кэшем.

    По умолчанию схемы берутся из каталога schema/ рядом с модулем.
    """

    def __init__(self, schema_dir: Optional[Path] = None):
        self._schema_dir = schema_dir or Path(__file__).parent / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        # Кэш загруженных схем
        self._schemas: Dict[str, Dict[str, Any]] = {}

    @property
    def schema_dir(self) -> Path:
        return self._schema_dir

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка JSON Schema файла.

        Args:
            schema_name: Имя схемы без расширения (например, 'order_book_line')

        Returns:
            Загруженная схема как dict

        Raises:
            FileNotFoundError: Если файл схемы не найден
            ValueError: Если схема не проходит meta-validation
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}") from e

        self._schemas[schema_name] = schema
        return schema


_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """Валидатор записи против одной JSON Schema."""

    def __init__(self, schema_name: str, loader: Optional[SchemaLoader] = None):
        self.schema_name = schema_name
        self.schema = (loader or _SCHEMA_LOADER).load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Raises:
            ValidationError: Если запись не соответствует схеме
        """
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]) -> Iterator[ValidationError]:
        return self.validator.iter_errors(data)


class OrderBookLineValidator(ContractValidator):
    def __init__(self):
        super().__init__("order_book_line")


class PriceQuoteValidator(ContractValidator):
    def __init__(self):
        super().__init__("price_quote")


class TradeRecordValidator(ContractValidator):
    def __init__(self):
        super().__init__("trade_record")


class InquiryRecordValidator(ContractValidator):
    def __init__(self):
        super().__init__("inquiry_record")


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_order_book_line(data: Dict[str, Any]) -> None:
    """Raises: ValidationError"""
    OrderBookLineValidator().validate(data)


def validate_price_quote(data: Dict[str, Any]) -> None:
    """Raises: ValidationError"""
    PriceQuoteValidator().validate(data)


def validate_trade_record(data: Dict[str, Any]) -> None:
    """Raises: ValidationError"""
    TradeRecordValidator().validate(data)


def validate_inquiry_record(data: Dict[str, Any]) -> None:
    """Raises: ValidationError"""
    InquiryRecordValidator().validate(data)
