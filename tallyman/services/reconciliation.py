"""
Reconciliation — applies per-product deltas to live product quantities.

Each product gets one independent increment:

    UPDATE product SET quantity = quantity + delta, updated_at = now
    WHERE pk = <product_id>

Increments are additive (F() expressions), so two concurrent batches on
the same product both land regardless of interleaving. There is no floor
check: stock-outs can take a quantity below zero.
"""

import logging

from django.db import DatabaseError, transaction
from django.db.models import F
from django.utils import timezone

from tallyman.conf import tallyman_settings
from tallyman.models.batch import StockBatch
from tallyman.protocols.ledger import ReconcileResult
from tallyman.services.products import coerce_pk, get_product_model

logger = logging.getLogger('tallyman')


class Reconciler:
    """
    Best-effort, per-product quantity updater.

    - Unordered: updates don't depend on each other
    - No upsert: a missing product is unmatched, never an error
    - A database error on one product is logged and skipped; the
      others still apply (each update runs in its own savepoint)
    """

    def __init__(self, product_model=None, using: str | None = None,
                 quantity_field: str | None = None,
                 updated_field: str | None = None):
        self.product_model = product_model or get_product_model()
        self.using = using
        self.quantity_field = quantity_field or tallyman_settings.PRODUCT_QUANTITY_FIELD
        if updated_field is None:
            updated_field = tallyman_settings.PRODUCT_UPDATED_FIELD
        self.updated_field = updated_field

    def _update_kwargs(self, delta: int) -> dict:
        kwargs = {self.quantity_field: F(self.quantity_field) + delta}
        if self.updated_field:
            kwargs[self.updated_field] = timezone.now()
        return kwargs

    def apply_one(self, product_id, delta: int) -> int:
        """Increment one product. Returns rows matched (0 or 1)."""
        pk = coerce_pk(self.product_model, product_id)
        if pk is None:
            return 0
        with transaction.atomic(using=self.using):
            return self.product_model._default_manager.using(self.using).filter(
                pk=pk
            ).update(**self._update_kwargs(delta))

    def apply(self, deltas: dict[str, int]) -> ReconcileResult:
        """
        Apply every delta independently.

        Returns:
            ReconcileResult with matched/modified/failed counts. Does not
            say which products were unmatched.
        """
        matched = modified = failed = 0

        for product_id, delta in deltas.items():
            try:
                rows = self.apply_one(product_id, delta)
            except DatabaseError:
                failed += 1
                logger.exception(
                    "ledger.reconcile.failed",
                    extra={"product_id": product_id, "delta": delta},
                )
                continue

            matched += rows
            if delta:
                modified += rows

        result = ReconcileResult(matched=matched, modified=modified, failed=failed)
        logger.info(
            "ledger.reconcile.applied",
            extra={
                "products": len(deltas),
                "matched": matched,
                "modified": modified,
                "failed": failed,
            },
        )
        return result

    def mark_reconciled(self, batch: StockBatch) -> bool:
        """
        Flag a batch as applied. The only write ever made to a persisted batch.

        Returns:
            True if the flag was set by this call
        """
        now = timezone.now()
        rows = StockBatch.objects.using(self.using).filter(
            pk=batch.pk, reconciled=False
        ).update(reconciled=True, reconciled_at=now)
        if rows:
            batch.reconciled = True
            batch.reconciled_at = now
        return bool(rows)
