"""RiskService — PV01 по продуктам и секторам.

Таблица PV01 на единицу номинала передаётся при сборке системы.
add_position() строит PV01(product, pv01 на единицу, агрегатная позиция).
get_bucketed_risk() суммирует pv01 × quantity по продуктам сектора
из последних известных PV01; продукты без риска не участвуют.
"""

from typing import Mapping

from src.core.domain.position import Position
from src.core.domain.product import ConfigurationMissing
from src.core.domain.risk import PV01, BucketedSector
from src.core.logging import get_logger
from src.hub import PublishSubscribeHub, ServiceListener

from .historical_data import ServiceType

logger = get_logger(__name__)

PV01_TABLE = "pv01 table"


class RiskService(PublishSubscribeHub[str, PV01]):
    """Keyed store риска: product_id → PV01."""

    service_type = ServiceType.RISK

    def __init__(self, pv01_table: Mapping[str, float]):
        """
        Args:
            pv01_table: CUSIP → PV01 на единицу номинала
        """
        super().__init__()
        self._pv01_table = dict(pv01_table)

    def pv01_per_unit(self, product_id: str) -> float:
        """
        Raises:
            ConfigurationMissing: Если продукта нет в таблице PV01
        """
        try:
            return self._pv01_table[product_id]
        except KeyError:
            raise ConfigurationMissing(PV01_TABLE, product_id) from None

    def add_position(self, position: Position) -> PV01:
        """
        Пересчёт риска по позиции.

        Raises:
            ConfigurationMissing: Если продукта нет в таблице PV01
        """
        pv01 = PV01(
            product=position.product,
            pv01=self.pv01_per_unit(position.product_id),
            quantity=position.aggregate_position(),
        )
        logger.debug(
            "risk_updated",
            product_id=pv01.product_id,
            pv01=pv01.pv01,
            quantity=pv01.quantity,
        )
        self.upsert(pv01.product_id, pv01)
        return pv01

    def get_bucketed_risk(self, sector: BucketedSector) -> PV01:
        """
        Агрегированный PV01 сектора.

        Returns:
            PV01(product=sector, pv01=Σ pv01 × quantity, quantity=1)
        """
        total = 0.0
        for product_id in sector.product_ids():
            risk = self.find(product_id)
            if risk is not None:
                total += risk.total_pv01()

        return PV01(product=sector, pv01=total, quantity=1)


class RiskServiceListener(ServiceListener[Position]):
    """Listener стадии позиций.

    ConfigurationMissing ограничивается одним обновлением: ошибка логируется,
    остальные listeners позиции получают уведомление.
    """

    def __init__(self, service: RiskService):
        self.service = service

    def process_add(self, data: Position) -> None:
        try:
            self.service.add_position(data)
        except ConfigurationMissing as exc:
            logger.error(
                "risk_configuration_missing",
                product_id=exc.product_id,
                table=exc.table,
            )
