"""Общие fixtures: справочник облигаций и выпуски 2Y / 10Y."""

import pytest

from src.core.domain import Bond, BondCatalog


@pytest.fixture
def catalog() -> BondCatalog:
    return BondCatalog()


@pytest.fixture
def bond_2y(catalog: BondCatalog) -> Bond:
    return catalog.get("912828V23")


@pytest.fixture
def bond_10y(catalog: BondCatalog) -> Bond:
    return catalog.get("912828Z19")
