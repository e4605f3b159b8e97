"""
StockBatch and BatchLine models — append-only ledger of stock movements.
"""

from django.db import models
from django.db.models import Count, Q, Sum
from django.db.models.functions import Coalesce
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from tallyman.exceptions import LedgerError
from tallyman.models.enums import Direction


class StockBatchQuerySet(models.QuerySet):
    """Custom QuerySet for StockBatch with convenience filters."""

    def unreconciled(self):
        """Batches whose quantities were never (fully) applied."""
        return self.filter(reconciled=False)

    def with_summary(self):
        """Annotate total quantity and distinct product count per batch."""
        return self.annotate(
            item_count=Coalesce(Sum('lines__quantity'), 0, output_field=models.IntegerField()),
            product_count=Count('lines__product_id', distinct=True),
        )

    def direction(self, direction):
        return self.filter(direction=direction)


class StockBatch(models.Model):
    """
    Immutable record of one stock-in or stock-out event.

    Rules:
    - NEVER update() or delete() the batch or its lines
    - Corrections are new batches in the opposite direction
    - Written BEFORE product quantities are reconciled, so the audit
      trail exists even when reconciliation fails halfway

    The only field written after insert is ``reconciled`` (and
    ``reconciled_at``), set by the Reconciler via a queryset update.
    """

    direction = models.CharField(
        max_length=3,
        choices=Direction.choices,
        default=Direction.IN,
        db_index=True,
        verbose_name=_('Direção'),
    )
    batch_name = models.CharField(
        max_length=200,
        blank=True,
        default='',
        db_index=True,
        verbose_name=_('Nome do Lote'),
    )
    reference = models.CharField(
        max_length=200,
        blank=True,
        default='',
        verbose_name=_('Referência'),
        help_text=_('Ex: "NF 1234", "OS-991"'),
    )
    note = models.TextField(blank=True, default='', verbose_name=_('Observação'))

    created_at = models.DateTimeField(db_index=True, verbose_name=_('Criado em'))
    updated_at = models.DateTimeField(db_index=True, verbose_name=_('Atualizado em'))

    # Divergence marker between ledger and live quantities
    reconciled = models.BooleanField(
        default=False,
        db_index=True,
        verbose_name=_('Conciliado'),
        help_text=_('Falso = quantidades dos produtos ainda não aplicadas'),
    )
    reconciled_at = models.DateTimeField(null=True, blank=True, verbose_name=_('Conciliado em'))

    objects = StockBatchQuerySet.as_manager()

    class Meta:
        verbose_name = _('Lote de Movimentação')
        verbose_name_plural = _('Lotes de Movimentação')
        ordering = ['-created_at']

    def save(self, *args, **kwargs):
        """Insert only — batches are immutable."""
        if self.pk:
            raise LedgerError('IMMUTABLE_BATCH', batch_id=self.pk)

        now = timezone.now()
        if self.created_at is None:
            self.created_at = now
        if self.updated_at is None:
            self.updated_at = self.created_at
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        """Prevent deletion — batches are immutable."""
        raise LedgerError('IMMUTABLE_BATCH', batch_id=self.pk)

    @property
    def sign(self) -> int:
        return -1 if self.direction == Direction.OUT else 1

    def __str__(self) -> str:
        label = self.batch_name or self.reference or f"#{self.pk}"
        return f"{self.get_direction_display()} {label}"


class BatchLine(models.Model):
    """
    One product/quantity/unit entry within a StockBatch.

    ``name`` and ``sku`` are snapshots taken at submission time; the
    product may be renamed or deleted later without touching the ledger.
    """

    batch = models.ForeignKey(
        StockBatch,
        on_delete=models.PROTECT,
        related_name='lines',
        verbose_name=_('Lote'),
    )
    position = models.PositiveIntegerField(default=0, verbose_name=_('Ordem'))

    product_id = models.CharField(max_length=64, db_index=True, verbose_name=_('ID do Produto'))
    name = models.CharField(max_length=255, verbose_name=_('Produto'))
    sku = models.CharField(max_length=100, blank=True, default='', verbose_name=_('SKU'))
    unit = models.CharField(max_length=100, blank=True, default='', verbose_name=_('Unidade'))
    quantity = models.PositiveIntegerField(verbose_name=_('Quantidade'))
    unit_price = models.DecimalField(
        max_digits=24,
        decimal_places=4,
        null=True,
        blank=True,
        verbose_name=_('Preço unitário'),
    )
    batch_label = models.CharField(
        max_length=100,
        blank=True,
        default='',
        verbose_name=_('Rótulo do lote'),
        help_text=_('Lote do fornecedor impresso na etiqueta'),
    )

    class Meta:
        verbose_name = _('Item do Lote')
        verbose_name_plural = _('Itens do Lote')
        ordering = ['batch', 'position']
        constraints = [
            models.CheckConstraint(
                condition=Q(quantity__gt=0),
                name='tallyman_batchline_quantity_positive',
            ),
        ]

    def save(self, *args, **kwargs):
        if self.pk:
            raise LedgerError('IMMUTABLE_BATCH', batch_id=self.batch_id)
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise LedgerError('IMMUTABLE_BATCH', batch_id=self.batch_id)

    def __str__(self) -> str:
        unit = f" {self.unit}" if self.unit else ""
        return f"{self.quantity}{unit} {self.name}"
