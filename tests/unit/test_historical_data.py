"""
Tests for HistoricalDataService

Coverage:
- persist_data: хранение по ключу + строка в connector с тегом ServiceType
- HistoricalDataListener: ключ по умолчанию product_id, произвольный ключ
"""

from src.core.domain import Inquiry, InquiryState, Position, Side
from src.services import (
    HistoricalDataListener,
    HistoricalDataService,
    InMemoryHistoricalConnector,
    PositionService,
    ServiceType,
)


class TestHistoricalDataService:
    """Тесты персистенции."""

    def test_persist_publishes_fields(self, bond_2y):
        connector = InMemoryHistoricalConnector()
        service = HistoricalDataService(ServiceType.POSITION, connector)
        position = Position(product=bond_2y, books={"TRSY1": 100})

        service.persist_data("912828V23", position)

        assert service.get("912828V23") == position
        assert len(connector.rows) == 1
        row = connector.rows[0]
        assert row.service_type == ServiceType.POSITION
        assert row.persist_key == "912828V23"
        assert row.fields == ("912828V23", "TRSY1", "100")

    def test_listener_uses_product_id(self, bond_2y):
        connector = InMemoryHistoricalConnector()
        positions = PositionService()
        historical = HistoricalDataService(ServiceType.POSITION, connector)
        positions.add_listener(HistoricalDataListener(historical))

        positions.upsert("912828V23", Position(product=bond_2y, books={"TRSY1": 5}))

        assert list(historical.keys()) == ["912828V23"]

    def test_custom_persist_key(self, bond_2y):
        connector = InMemoryHistoricalConnector()
        historical = HistoricalDataService(
            ServiceType.INQUIRY, connector, persist_key=lambda inquiry: inquiry.inquiry_id
        )
        inquiry = Inquiry(
            inquiry_id="INQ7",
            product=bond_2y,
            side=Side.SELL,
            quantity=100,
            price=99.0,
            state=InquiryState.DONE,
        )

        HistoricalDataListener(historical).process_add(inquiry)

        assert connector.rows_for(ServiceType.INQUIRY)[0].persist_key == "INQ7"
        assert connector.rows_for(ServiceType.RISK) == []

    def test_service_type_values(self):
        assert [t.value for t in ServiceType] == ["Position", "Risk", "Execution", "Streaming", "Inquiry"]
