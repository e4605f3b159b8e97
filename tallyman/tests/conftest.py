"""
Pytest fixtures for Tallyman tests.
"""

import pytest

from tallyman.models import UnitKind, UnitOfMeasure
from tallyman.tests.testapp.models import Product


@pytest.fixture
def unidade(db):
    """Base unit."""
    return UnitOfMeasure.objects.create(name='Unit', short_name='un', kind=UnitKind.BASE)


@pytest.fixture
def box(db, unidade):
    """Pack unit: 1 Box = 12 Unit."""
    return UnitOfMeasure.objects.create(
        name='Box',
        short_name='bx',
        kind=UnitKind.PACK,
        base_unit=unidade,
        units_per_pack=12,
    )


@pytest.fixture
def product(db):
    """Product with 100 on hand."""
    return Product.objects.create(name='Parafuso', sku='PAR-01', quantity=100, qty_alert_threshold=10)


@pytest.fixture
def other_product(db):
    """Second product with 50 on hand."""
    return Product.objects.create(name='Porca', sku='POR-01', quantity=50)
