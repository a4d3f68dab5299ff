"""HistoricalDataService — персистенция эмитируемых записей.

Стадия-наблюдатель: регистрируется listener'ом на эмитирующую стадию
(Position, Risk, Execution, Streaming, Inquiry), хранит последнюю запись по
persist key и передаёт строковые поля записи во внешний connector вместе
с тегом ServiceType, по которому connector маршрутизирует строки.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Generic, Optional, Protocol, TypeVar

from src.core.logging import get_logger
from src.hub import PublishSubscribeHub, ServiceListener

logger = get_logger(__name__)


class ServiceType(str, Enum):
    """Тег маршрутизации строк во внешний sink"""

    POSITION = "Position"
    RISK = "Risk"
    EXECUTION = "Execution"
    STREAMING = "Streaming"
    INQUIRY = "Inquiry"


class PersistableRecord(Protocol):
    """Запись, которую можно выгрузить строкой."""

    @property
    def product_id(self) -> str: ...

    def to_fields(self) -> list[str]: ...


R = TypeVar("R", bound=PersistableRecord)


class HistoricalDataConnector(Protocol):
    """Внешний sink строк."""

    def publish(self, service_type: ServiceType, persist_key: str, fields: list[str]) -> None: ...


@dataclass(frozen=True)
class HistoricalRow:
    """Одна опубликованная строка."""

    service_type: ServiceType
    persist_key: str
    fields: tuple[str, ...]


class InMemoryHistoricalConnector:
    """Connector, накапливающий строки в памяти (по порядку публикации)."""

    def __init__(self) -> None:
        self.rows: list[HistoricalRow] = []

    def publish(self, service_type: ServiceType, persist_key: str, fields: list[str]) -> None:
        self.rows.append(
            HistoricalRow(service_type=service_type, persist_key=persist_key, fields=tuple(fields))
        )

    def rows_for(self, service_type: ServiceType) -> list[HistoricalRow]:
        return [row for row in self.rows if row.service_type == service_type]


def _product_key(record: PersistableRecord) -> str:
    return record.product_id


class HistoricalDataService(PublishSubscribeHub[str, R], Generic[R]):
    """Keyed store последних записей + публикация в connector."""

    def __init__(
        self,
        service_type: ServiceType,
        connector: HistoricalDataConnector,
        persist_key: Optional[Callable[[R], str]] = None,
    ):
        """
        Args:
            service_type: тег строк этой стадии
            connector: внешний sink
            persist_key: ключ записи (по умолчанию product_id)
        """
        super().__init__(name=f"HistoricalDataService[{service_type.value}]")
        self.service_type = service_type
        self.connector = connector
        self._persist_key = persist_key or _product_key

    def persist_key(self, data: R) -> str:
        return self._persist_key(data)

    def persist_data(self, persist_key: str, data: R) -> None:
        """Сохранение записи и публикация её полей в connector."""
        self.upsert(persist_key, data)
        self.connector.publish(self.service_type, persist_key, data.to_fields())
        logger.debug(
            "historical_data_persisted",
            service_type=self.service_type.value,
            persist_key=persist_key,
        )


class HistoricalDataListener(ServiceListener[R]):
    """Listener эмитирующей стадии: каждая запись уходит в HistoricalDataService."""

    def __init__(self, service: HistoricalDataService[R]):
        self.service = service

    def process_add(self, data: R) -> None:
        self.service.persist_data(self.service.persist_key(data), data)

    def __repr__(self) -> str:
        return f"HistoricalDataListener({self.service.service_type.value})"
