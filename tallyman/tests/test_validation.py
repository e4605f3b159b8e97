"""
Tests for batch/line item validation.
"""

from decimal import Decimal

import pytest

from tallyman.models import Direction
from tallyman.services.validation import validate_batch, validate_items


def payload(**overrides):
    data = {
        'direction': 'out',
        'reference': 'OS-991',
        'items': [{'product_id': '1', 'name': 'Parafuso', 'quantity': 3, 'unit': 'Box'}],
    }
    data.update(overrides)
    return data


class TestValidateBatch:

    def test_valid_payload_builds_draft(self):
        result = validate_batch(payload())

        assert result.is_valid
        assert result.batch.direction == Direction.OUT
        assert result.batch.reference == 'OS-991'
        assert result.batch.items[0].quantity == 3
        assert result.batch.items[0].unit == 'Box'

    def test_empty_items_rejected(self):
        result = validate_batch(payload(items=[]))

        assert not result.is_valid
        assert result.batch is None
        assert 'items' in result.issues

    def test_missing_items_rejected(self):
        data = payload()
        del data['items']

        assert 'items' in validate_batch(data).issues

    def test_direction_defaults_to_in(self):
        data = payload()
        del data['direction']

        assert validate_batch(data).batch.direction == Direction.IN

    def test_invalid_direction(self):
        assert 'direction' in validate_batch(payload(direction='sideways')).issues

    def test_not_a_dict(self):
        assert '__all__' in validate_batch(['nope']).issues

    def test_camel_case_wire_keys(self):
        result = validate_batch({
            'type': 'in',
            'batchName': 'Lote março',
            'items': [{
                'productId': '7',
                'name': 'Arruela',
                'quantity': 10,
                'unitPrice': 1.25,
                'batch': 'L-42',
            }],
        })

        assert result.is_valid
        draft = result.batch
        assert draft.direction == Direction.IN
        assert draft.batch_name == 'Lote março'
        assert draft.items[0].product_id == '7'
        assert draft.items[0].unit_price == Decimal('1.25')
        assert draft.items[0].batch_label == 'L-42'


class TestValidateItems:

    @pytest.mark.parametrize('quantity', [0, -1, 2.5, 'abc', None])
    def test_quantity_must_be_positive_integer(self, quantity):
        result = validate_items([{'product_id': '1', 'name': 'X', 'quantity': quantity}])

        assert 'items.0.quantity' in result.issues

    def test_product_id_required(self):
        result = validate_items([{'product_id': '  ', 'name': 'X', 'quantity': 1}])

        assert 'items.0.product_id' in result.issues

    def test_negative_unit_price(self):
        result = validate_items([{'product_id': '1', 'name': 'X', 'quantity': 1, 'unit_price': -1}])

        assert 'items.0.unit_price' in result.issues

    def test_issues_are_indexed_per_line(self):
        result = validate_items([
            {'product_id': '1', 'name': 'X', 'quantity': 1},
            {'product_id': '2', 'name': 'Y', 'quantity': 0},
            'garbage',
        ])

        assert set(result.issues) == {'items.1.quantity', 'items.2'}
        assert result.items == ()

    def test_optional_fields_default_blank(self):
        result = validate_items([{'product_id': 1, 'name': 'X', 'quantity': '4'}])

        item = result.items[0]
        assert item.product_id == '1'
        assert item.quantity == 4
        assert item.unit == ''
        assert item.sku == ''
        assert item.unit_price is None

    def test_quantity_above_column_range_rejected(self):
        result = validate_items([{'product_id': '1', 'name': 'X', 'quantity': 2147483648}])

        assert 'items.0.quantity' in result.issues

    @pytest.mark.parametrize('price,expected', [
        (0.1 + 0.2, Decimal('0.3000')),
        (1.23456, Decimal('1.2346')),
        ('19.9', Decimal('19.9000')),
        (1e12, Decimal('1000000000000.0000')),
    ])
    def test_unit_price_rounded_to_four_places(self, price, expected):
        result = validate_items([{'product_id': '1', 'name': 'X', 'quantity': 1, 'unitPrice': price}])

        assert result.is_valid
        assert result.items[0].unit_price == expected
