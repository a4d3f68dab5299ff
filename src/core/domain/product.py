"""
Bond — Модель продукта и справочные данные US Treasuries

Immutable Pydantic модель облигации, идентифицируемой по CUSIP.
Справочник on-the-run выпусков (2Y..30Y): CUSIP, купон, дата погашения и PV01 на единицу номинала.

Справочные таблицы не используются сервисами напрямую: они передаются
в BondCatalog / RiskService при сборке системы.
"""

from datetime import date
from enum import Enum
from typing import Final, Iterator, Mapping

from pydantic import BaseModel, Field, field_validator


# =============================================================================
# ENUMS
# =============================================================================


class IdType(str, Enum):
    """Тип идентификатора продукта"""

    CUSIP = "CUSIP"
    ISIN = "ISIN"


# =============================================================================
# ОШИБКИ
# =============================================================================


class ConfigurationMissing(KeyError):
    """Продукт отсутствует в справочной конфигурации (каталог, таблица PV01)."""

    def __init__(self, table: str, product_id: str):
        self.table = table
        self.product_id = product_id
        super().__init__(f"{product_id!r} not configured in {table}")


# =============================================================================
# BOND MODEL
# =============================================================================


class Bond(BaseModel):
    """
    Облигация US Treasury.

    Immutable модель (frozen=True); равенство и hash по всем полям.
    """

    product_id: str = Field(..., min_length=1, description="CUSIP (например, '912828V23')")
    id_type: IdType = Field(IdType.CUSIP, description="Тип идентификатора")
    ticker: str = Field(..., min_length=1, description="Тикер (например, 'US2Y')")
    coupon: float = Field(..., ge=0, lt=1, description="Купон (доля, 0.0425 = 4.25%)")
    maturity_date: date = Field(..., description="Дата погашения")

    model_config = {"frozen": True}

    @field_validator("ticker")
    @classmethod
    def validate_ticker(cls, v: str) -> str:
        """Тикер всегда в верхнем регистре"""
        return v.upper()


# =============================================================================
# СПРАВОЧНЫЕ ДАННЫЕ
# =============================================================================

# Срок (лет) → (CUSIP, дата погашения)
TREASURY_MATURITIES: Final[Mapping[int, tuple[str, date]]] = {
    2: ("912828V23", date(2026, 12, 15)),
    3: ("912828W22", date(2027, 12, 15)),
    5: ("912828X21", date(2029, 12, 15)),
    7: ("912828Y20", date(2031, 12, 15)),
    10: ("912828Z19", date(2034, 12, 15)),
    20: ("912810FZ8", date(2044, 12, 15)),
    30: ("912810GZ6", date(2054, 12, 15)),
}

# CUSIP → купон
TREASURY_COUPONS: Final[Mapping[str, float]] = {
    "912828V23": 0.0425,
    "912828W22": 0.0430,
    "912828X21": 0.0435,
    "912828Y20": 0.0440,
    "912828Z19": 0.0445,
    "912810FZ8": 0.0450,
    "912810GZ6": 0.0455,
}

# CUSIP → PV01 на единицу номинала
TREASURY_PV01: Final[Mapping[str, float]] = {
    "912828V23": 0.019,
    "912828W22": 0.028,
    "912828X21": 0.046,
    "912828Y20": 0.064,
    "912828Z19": 0.091,
    "912810FZ8": 0.142,
    "912810GZ6": 0.183,
}


# =============================================================================
# BOND CATALOG
# =============================================================================


class BondCatalog:
    """
    Каталог облигаций: разрешение CUSIP или срока в Bond.

    Используется ingestion-коннекторами на границе системы.
    """

    def __init__(
        self,
        maturities: Mapping[int, tuple[str, date]] = TREASURY_MATURITIES,
        coupons: Mapping[str, float] = TREASURY_COUPONS,
    ):
        self._bonds: dict[str, Bond] = {}
        self._by_maturity: dict[int, Bond] = {}

        for years, (cusip, maturity_date) in maturities.items():
            if cusip not in coupons:
                raise ConfigurationMissing("coupons", cusip)
            bond = Bond(
                product_id=cusip,
                id_type=IdType.CUSIP,
                ticker=f"US{years}Y",
                coupon=coupons[cusip],
                maturity_date=maturity_date,
            )
            self._bonds[cusip] = bond
            self._by_maturity[years] = bond

    def get(self, product_id: str) -> Bond:
        """
        Bond по CUSIP.

        Raises:
            ConfigurationMissing: Если CUSIP не в каталоге
        """
        try:
            return self._bonds[product_id]
        except KeyError:
            raise ConfigurationMissing("bond catalog", product_id) from None

    def by_maturity(self, years: int) -> Bond:
        """
        Bond по сроку (2, 3, 5, 7, 10, 20, 30).

        Raises:
            ConfigurationMissing: Если срок не в каталоге
        """
        try:
            return self._by_maturity[years]
        except KeyError:
            raise ConfigurationMissing("bond catalog", f"{years}Y") from None

    def __contains__(self, product_id: object) -> bool:
        return product_id in self._bonds

    def __iter__(self) -> Iterator[Bond]:
        return iter(self._bonds.values())

    def __len__(self) -> int:
        return len(self._bonds)
