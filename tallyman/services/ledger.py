"""
Ledger writer and batch queries.

persist() is the first of the two writes of a submission. It runs in its
own transaction and commits before reconciliation starts, so a batch is on
record even if the quantities never get applied.
"""

import csv
import logging

from django.core.paginator import EmptyPage, Paginator
from django.db import transaction

from tallyman.conf import tallyman_settings
from tallyman.exceptions import LedgerError
from tallyman.models.batch import BatchLine, StockBatch
from tallyman.protocols.ledger import BatchDraft
from tallyman.services.products import products_by_id
from tallyman.signals import batch_persisted

logger = logging.getLogger('tallyman')

CSV_HEADER = [
    'sku',
    'product_id',
    'product_name',
    'unit',
    'quantity',
    'unit_price',
    'batch_label',
]


class LedgerWriter:
    """Append-only writer for StockBatch records."""

    def __init__(self, using: str | None = None):
        self.using = using

    def persist(self, draft: BatchDraft) -> StockBatch:
        """
        Write the batch and its lines as one new record.

        Raises:
            ValueError: If the draft has no items
        """
        if not draft.items:
            raise ValueError("Batch must have at least one item")

        with transaction.atomic(using=self.using):
            batch = StockBatch(
                direction=draft.direction,
                batch_name=draft.batch_name,
                reference=draft.reference,
                note=draft.note,
            )
            batch.save(using=self.using)
            BatchLine.objects.using(self.using).bulk_create([
                BatchLine(
                    batch=batch,
                    position=position,
                    product_id=item.product_id,
                    name=item.name,
                    sku=item.sku,
                    unit=item.unit,
                    quantity=item.quantity,
                    unit_price=item.unit_price,
                    batch_label=item.batch_label,
                )
                for position, item in enumerate(draft.items)
            ])

        logger.info(
            "ledger.batch.persisted",
            extra={
                "batch_id": batch.pk,
                "direction": batch.direction,
                "lines": len(draft.items),
                "reference": batch.reference or batch.batch_name,
            },
        )
        batch_persisted.send(sender=StockBatch, batch=batch)
        return batch


class BatchQueries:
    """Read-only batch queries (history, label feed, export)."""

    @classmethod
    def get_batch(cls, batch_id, using: str | None = None) -> StockBatch:
        """
        Fetch one batch.

        Raises:
            LedgerError('BATCH_NOT_FOUND'): Unknown or malformed id
        """
        try:
            pk = int(str(batch_id).strip())
        except (TypeError, ValueError):
            raise LedgerError('BATCH_NOT_FOUND', batch_id=batch_id) from None

        batch = StockBatch.objects.using(using).filter(pk=pk).first()
        if batch is None:
            raise LedgerError('BATCH_NOT_FOUND', batch_id=batch_id)
        return batch

    @classmethod
    def list_batches(cls, page: int = 1, limit: int | None = None,
                     sort: str = 'desc', direction: str | None = None,
                     using: str | None = None) -> dict:
        """
        Paginated batch history, newest first unless sort='asc'.

        Returns:
            {'data': [...], 'meta': {total, page, limit, pages, hasNext, hasPrev}}
        """
        page = max(int(page or 1), 1)
        limit = min(max(int(limit or tallyman_settings.PAGE_SIZE), 1),
                    tallyman_settings.MAX_PAGE_SIZE)

        qs = StockBatch.objects.using(using).with_summary()
        if direction:
            qs = qs.direction(direction)
        if sort == 'asc':
            qs = qs.order_by('created_at', 'pk')
        else:
            qs = qs.order_by('-created_at', '-pk')

        paginator = Paginator(qs, limit)
        try:
            rows = list(paginator.page(page).object_list)
        except EmptyPage:
            rows = []

        total = paginator.count
        return {
            'data': [cls.summarize(batch) for batch in rows],
            'meta': {
                'total': total,
                'page': page,
                'limit': limit,
                'pages': max(paginator.num_pages, 1),
                'hasNext': page * limit < total,
                'hasPrev': page > 1,
            },
        }

    @classmethod
    def summarize(cls, batch: StockBatch) -> dict:
        """History row for a batch annotated by with_summary()."""
        return {
            'id': str(batch.pk),
            'type': batch.direction,
            'batchName': batch.batch_name,
            'reference': batch.reference,
            'itemsCount': batch.item_count,
            'productTypesCount': batch.product_count,
            'reconciled': batch.reconciled,
            'createdAt': batch.created_at.isoformat(),
        }

    @classmethod
    def label_items(cls, batch: StockBatch) -> list[dict]:
        """Finalized line list handed to the label/print collaborator."""
        return [
            {
                'productId': line.product_id,
                'name': line.name,
                'sku': line.sku,
                'unit': line.unit,
                'quantity': line.quantity,
                'batchLabel': line.batch_label,
            }
            for line in batch.lines.order_by('position')
        ]

    @classmethod
    def detail(cls, batch: StockBatch) -> dict:
        return {
            'batchId': str(batch.pk),
            'type': batch.direction,
            'batchName': batch.batch_name,
            'reference': batch.reference,
            'note': batch.note,
            'reconciled': batch.reconciled,
            'createdAt': batch.created_at.isoformat(),
            'updatedAt': batch.updated_at.isoformat(),
            'items': cls.label_items(batch),
        }

    @classmethod
    def export_csv(cls, batch: StockBatch, out) -> None:
        """
        Write the batch lines as CSV to a file-like object.

        Product name/sku come from the live product when it still exists,
        otherwise from the snapshot stored on the line.
        """
        lines = list(batch.lines.order_by('position'))
        products = products_by_id([line.product_id for line in lines])

        writer = csv.writer(out, lineterminator='\n')
        writer.writerow(CSV_HEADER)
        for line in lines:
            product = products.get(line.product_id)
            writer.writerow([
                getattr(product, 'sku', None) or line.sku,
                line.product_id,
                getattr(product, 'name', None) or line.name,
                line.unit,
                line.quantity,
                '' if line.unit_price is None else line.unit_price,
                line.batch_label,
            ])
