"""
PV01 — Модель риска

PV01: чувствительность к сдвигу доходности на 1 bp, на единицу номинала, и количество,
к которому она относится. Продукт — облигация либо bucketed sector.
"""

from pydantic import BaseModel, Field, field_validator

from .product import Bond


class BucketedSector(BaseModel):
    """
    Сектор (bucket) — именованная группа продуктов для агрегации риска.

    Например: FrontEnd (2Y, 3Y), Belly (5Y, 7Y, 10Y), LongEnd (20Y, 30Y).
    """

    name: str = Field(..., min_length=1, description="Имя сектора")
    products: tuple[Bond, ...] = Field(..., description="Продукты сектора")

    model_config = {"frozen": True}

    @field_validator("products")
    @classmethod
    def validate_unique_products(cls, v: tuple[Bond, ...]) -> tuple[Bond, ...]:
        """Один продукт не может входить в сектор дважды"""
        ids = [bond.product_id for bond in v]
        if len(ids) != len(set(ids)):
            raise ValueError(f"duplicate products in sector: {ids}")
        return v

    @property
    def product_id(self) -> str:
        """Имя сектора выступает идентификатором продукта PV01"""
        return self.name

    def product_ids(self) -> list[str]:
        return [bond.product_id for bond in self.products]


class PV01(BaseModel):
    """
    PV01 по продукту или сектору.

    Immutable модель (frozen=True).
    Для отдельной облигации pv01 — PV01 на единицу номинала, quantity — агрегатная позиция.
    Для сектора pv01 — уже агрегированное значение, quantity — заглушка 1.
    """

    product: Bond | BucketedSector
    pv01: float = Field(..., description="PV01 (на единицу номинала или агрегированный)")
    quantity: int = Field(..., description="Количество, к которому относится PV01")

    model_config = {"frozen": True}

    @property
    def product_id(self) -> str:
        return self.product.product_id

    def total_pv01(self) -> float:
        """PV01 × количество"""
        return self.pv01 * self.quantity

    def to_fields(self) -> list[str]:
        return [self.product_id, f"{self.pv01:.6f}", str(self.quantity)]
