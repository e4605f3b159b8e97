"""
Tests for the JSON endpoints.
"""

import json

import pytest
from django.urls import reverse

from tallyman.models import StockBatch
from tallyman.tests.factories import line


pytestmark = pytest.mark.django_db


def post_json(client, data):
    body = data if isinstance(data, str) else json.dumps(data)
    return client.post(reverse('tallyman:batches'), data=body, content_type='application/json')


class TestSubmitView:

    def test_submit_returns_counts(self, client, product, box):
        response = post_json(client, {
            'type': 'out',
            'reference': 'OS-1',
            'items': [{'productId': str(product.pk), 'name': 'Parafuso', 'unit': 'Box', 'quantity': 3}],
        })

        assert response.status_code == 201
        body = response.json()
        assert body['matched'] == 1
        assert body['modified'] == 1
        assert body['upserts'] == 0
        assert StockBatch.objects.filter(pk=int(body['batchId'])).exists()
        product.refresh_from_db()
        assert product.quantity == 64

    def test_invalid_payload_is_400(self, client, db):
        response = post_json(client, {'type': 'out', 'items': []})

        assert response.status_code == 400
        body = response.json()
        assert body['error'] == 'Invalid payload'
        assert 'items' in body['issues']
        assert StockBatch.objects.count() == 0

    def test_malformed_json_is_400(self, client, db):
        response = post_json(client, '{not json')

        assert response.status_code == 400
        assert '__all__' in response.json()['issues']

    def test_unexpected_fault_is_generic_500(self, client, product, monkeypatch):
        from django.db import DatabaseError
        from tallyman.services.ledger import LedgerWriter

        def broken(self, draft):
            raise DatabaseError('connection refused on 10.0.0.5')

        monkeypatch.setattr(LedgerWriter, 'persist', broken)

        response = post_json(client, {'items': [line(product, 1)]})

        assert response.status_code == 500
        assert response.json() == {'error': 'Unexpected server error'}


class TestReadViews:

    def test_list(self, client, product):
        post_json(client, {'items': [line(product, 2)], 'batchName': 'Compra'})

        response = client.get(reverse('tallyman:batches'), {'page': 1, 'limit': 10})

        assert response.status_code == 200
        body = response.json()
        assert body['meta']['total'] == 1
        assert body['data'][0]['batchName'] == 'Compra'

    def test_list_bad_pagination(self, client, db):
        response = client.get(reverse('tallyman:batches'), {'page': 'x'})

        assert response.status_code == 400

    def test_detail(self, client, product):
        batch_id = post_json(client, {'items': [line(product, 2)]}).json()['batchId']

        response = client.get(reverse('tallyman:batch-detail', args=[batch_id]))

        assert response.status_code == 200
        body = response.json()
        assert body['batchId'] == batch_id
        assert body['type'] == 'in'
        assert body['items'][0]['quantity'] == 2

    def test_detail_not_found(self, client, db):
        response = client.get(reverse('tallyman:batch-detail', args=[404]))

        assert response.status_code == 404
        assert response.json()['code'] == 'BATCH_NOT_FOUND'

    def test_export(self, client, product):
        batch_id = post_json(client, {'items': [line(product, 2)]}).json()['batchId']

        response = client.get(reverse('tallyman:batch-export', args=[batch_id]))

        assert response.status_code == 200
        assert response['Content-Type'].startswith('text/csv')
        assert f'batch_{batch_id}.csv' in response['Content-Disposition']
        assert response.content.decode().splitlines()[1].startswith(f'PAR-01,{product.pk},')

    def test_method_not_allowed(self, client, db):
        response = client.delete(reverse('tallyman:batches'))

        assert response.status_code == 405

    def test_export_with_missing_product_model_is_generic_500(self, client, product, settings):
        batch_id = post_json(client, {'items': [line(product, 2)]}).json()['batchId']
        settings.TALLYMAN = {'PRODUCT_MODEL': 'nope.Missing'}

        response = client.get(reverse('tallyman:batch-export', args=[batch_id]))

        assert response.status_code == 500
        assert response.json() == {'error': 'Unexpected server error'}

    def test_detail_unexpected_fault_is_generic_500(self, client, product, monkeypatch):
        from django.db import DatabaseError
        from tallyman.service import Ledger

        batch_id = post_json(client, {'items': [line(product, 2)]}).json()['batchId']

        def broken(cls, batch):
            raise DatabaseError('connection refused on 10.0.0.5')

        monkeypatch.setattr(Ledger, 'detail', classmethod(broken))

        response = client.get(reverse('tallyman:batch-detail', args=[batch_id]))

        assert response.status_code == 500
        assert response.json() == {'error': 'Unexpected server error'}

    def test_export_not_found(self, client, db):
        response = client.get(reverse('tallyman:batch-export', args=[404]))

        assert response.status_code == 404
        assert response.json()['code'] == 'BATCH_NOT_FOUND'
