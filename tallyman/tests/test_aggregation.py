"""
Tests for batch aggregation.
"""

import itertools

import pytest

from tallyman.models import Direction
from tallyman.protocols import LineItem
from tallyman.services.aggregation import aggregate
from tallyman.services.units import UnitCatalog


CATALOG = UnitCatalog({'Box': 12, 'Unit': 1})


def item(product_id, quantity, unit=''):
    return LineItem(product_id=product_id, name=product_id, quantity=quantity, unit=unit)


class TestAggregate:

    def test_stock_out_converts_pack_units(self):
        deltas = aggregate([item('P1', 3, 'Box')], Direction.OUT, CATALOG)

        assert deltas == {'P1': -36}

    def test_stock_out_sums_repeated_products(self):
        deltas = aggregate([item('P1', 5), item('P1', 3)], Direction.OUT, CATALOG)

        assert deltas == {'P1': -8}

    def test_stock_in_does_not_convert(self):
        deltas = aggregate([item('P2', 2, 'Box')], Direction.IN, CATALOG)

        assert deltas == {'P2': 2}

    def test_stock_out_unknown_unit_counts_as_base(self):
        deltas = aggregate([item('P1', 4, 'Pallet')], Direction.OUT, CATALOG)

        assert deltas == {'P1': -4}

    def test_stock_out_without_resolver(self):
        assert aggregate([item('P1', 3, 'Box')], Direction.OUT) == {'P1': -3}

    def test_order_does_not_matter(self):
        items = [
            item('P1', 2, 'Box'),
            item('P2', 7),
            item('P1', 1),
            item('P3', 1, 'Box'),
            item('P2', 3, 'Unit'),
        ]
        expected = aggregate(items, Direction.OUT, CATALOG)

        for perm in itertools.permutations(items):
            assert aggregate(perm, Direction.OUT, CATALOG) == expected
        assert expected == {'P1': -25, 'P2': -10, 'P3': -12}

    def test_unknown_direction(self):
        with pytest.raises(ValueError):
            aggregate([item('P1', 1)], 'sideways', CATALOG)
