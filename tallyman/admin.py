"""
Tallyman Admin.

- UnitOfMeasure: list + edit (units are catalog data, edited here only)
- StockBatch: read-only audit trail with inline lines
"""

from django.contrib import admin
from django.utils.translation import gettext_lazy as _

from tallyman.models import BatchLine, StockBatch, UnitOfMeasure


# =========================================================================
# UNIT OF MEASURE ADMIN
# =========================================================================

@admin.register(UnitOfMeasure)
class UnitOfMeasureAdmin(admin.ModelAdmin):
    """UnitOfMeasure admin — editable."""

    list_display = ['name', 'short_name', 'kind', 'base_unit', 'units_per_pack', 'is_active']
    list_filter = ['kind', 'is_active']
    search_fields = ['name', 'short_name']
    readonly_fields = ['created_at', 'updated_at']
    autocomplete_fields = ['base_unit']


# =========================================================================
# STOCK BATCH ADMIN (read-only audit trail)
# =========================================================================

class BatchLineInline(admin.TabularInline):
    """Lines of a batch — read-only."""

    model = BatchLine
    extra = 0
    can_delete = False
    fields = ['position', 'product_id', 'name', 'sku', 'unit', 'quantity',
              'unit_price', 'batch_label']
    readonly_fields = fields

    def has_add_permission(self, request, obj=None):
        return False

    def has_change_permission(self, request, obj=None):
        return False


@admin.register(StockBatch)
class StockBatchAdmin(admin.ModelAdmin):
    """StockBatch admin — read-only. Immutable audit trail."""

    list_display = ['id', 'direction', 'batch_name', 'reference', 'lines_display',
                    'reconciled', 'created_at']
    list_filter = ['direction', 'reconciled', 'created_at']
    search_fields = ['batch_name', 'reference', 'lines__product_id', 'lines__name']
    readonly_fields = ['direction', 'batch_name', 'reference', 'note', 'created_at',
                       'updated_at', 'reconciled', 'reconciled_at']
    date_hierarchy = 'created_at'
    inlines = [BatchLineInline]

    def get_queryset(self, request):
        return super().get_queryset(request).with_summary()

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False

    @admin.display(description=_('Itens'), ordering='item_count')
    def lines_display(self, obj):
        return obj.item_count
