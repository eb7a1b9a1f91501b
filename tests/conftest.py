"""
Shared fixtures.
"""

import pytest

from greenexchange.domain.catalog import PropertyCatalog
from greenexchange.services.registry import ExchangeRegistry


@pytest.fixture
def beach_house() -> PropertyCatalog:
    """'Beach House' at the default base price with days 1-10 listed."""
    catalog = PropertyCatalog("Beach House")
    for day in range(1, 11):
        catalog.add_date(day)
    return catalog


@pytest.fixture
def registry() -> ExchangeRegistry:
    """Registry holding 'Beach House' with days 1-10."""
    registry = ExchangeRegistry()
    registry.create_property("Beach House", range(1, 11))
    return registry
