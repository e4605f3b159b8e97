"""
Batch validation — checks a raw payload before anything is written.

Returns either a BatchDraft or a field -> messages map; never both, never
a partial batch.

Usage:
    result = validate_batch({'direction': 'out', 'items': [...]})
    if not result.is_valid:
        return JsonResponse({'issues': result.issues}, status=400)
    draft = result.batch
"""

from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal

from django import forms
from django.utils.translation import gettext as _

from tallyman.models.enums import Direction
from tallyman.protocols.ledger import BatchDraft, LineItem

# Wire names used by the web client -> field names
ALIASES = {
    'productId': 'product_id',
    'unitPrice': 'unit_price',
    'batchName': 'batch_name',
    'batchLabel': 'batch_label',
    'batch': 'batch_label',
    'type': 'direction',
}

# Column limits of BatchLine
MAX_QUANTITY = 2147483647
MAX_UNIT_PRICE = Decimal('99999999999999999999.9999')
PRICE_SCALE = Decimal('0.0001')


def _quantize_price(value: Decimal | None) -> Decimal | None:
    """Round to the scale BatchLine.unit_price stores."""
    if value is None:
        return None
    return value.quantize(PRICE_SCALE, rounding=ROUND_HALF_UP)


class LineItemForm(forms.Form):
    """One submitted line."""

    product_id = forms.CharField(max_length=64)
    name = forms.CharField(max_length=255)
    sku = forms.CharField(max_length=100, required=False)
    unit = forms.CharField(max_length=100, required=False)
    quantity = forms.IntegerField(min_value=1, max_value=MAX_QUANTITY)
    unit_price = forms.DecimalField(min_value=0, max_value=MAX_UNIT_PRICE, required=False)
    batch_label = forms.CharField(max_length=100, required=False)

    def to_item(self) -> LineItem:
        data = self.cleaned_data
        return LineItem(
            product_id=data['product_id'],
            name=data['name'],
            quantity=data['quantity'],
            sku=data['sku'],
            unit=data['unit'],
            unit_price=_quantize_price(data['unit_price']),
            batch_label=data['batch_label'],
        )


class BatchForm(forms.Form):
    """Batch envelope (everything but the items)."""

    direction = forms.ChoiceField(choices=Direction.choices, required=False)
    batch_name = forms.CharField(max_length=200, required=False)
    reference = forms.CharField(max_length=200, required=False)
    note = forms.CharField(required=False, strip=False)

    def clean_direction(self):
        return self.cleaned_data.get('direction') or Direction.IN


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating a payload."""

    batch: BatchDraft | None = None
    items: tuple[LineItem, ...] = ()
    issues: dict[str, list[str]] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return not self.issues


def _normalize(data: dict) -> dict:
    """Map wire aliases onto field names; explicit field names win."""
    normalized = {}
    for key, value in data.items():
        target = ALIASES.get(key, key)
        if target != key and target in data:
            continue
        normalized[target] = value
    return normalized


def _form_issues(form: forms.Form, prefix: str = '') -> dict[str, list[str]]:
    return {
        f"{prefix}{name}": [str(message) for message in messages]
        for name, messages in form.errors.items()
    }


def validate_items(raw_items) -> ValidationResult:
    """
    Validate a bare list of line items.

    Issues are keyed by dotted path, e.g. ``items.2.quantity``.
    """
    if not isinstance(raw_items, (list, tuple)):
        return ValidationResult(issues={'items': [_('Informe uma lista de itens.')]})
    if not raw_items:
        return ValidationResult(issues={'items': [_('Informe ao menos um item.')]})

    items = []
    issues: dict[str, list[str]] = {}
    for index, raw in enumerate(raw_items):
        prefix = f"items.{index}."
        if not isinstance(raw, dict):
            issues[f"items.{index}"] = [_('Item inválido.')]
            continue
        form = LineItemForm(data=_normalize(raw))
        if form.is_valid():
            items.append(form.to_item())
        else:
            issues.update(_form_issues(form, prefix))

    if issues:
        return ValidationResult(issues=issues)
    return ValidationResult(items=tuple(items))


def validate_batch(payload) -> ValidationResult:
    """Validate a full batch payload (envelope + items)."""
    if not isinstance(payload, dict):
        return ValidationResult(issues={'__all__': [_('Corpo da requisição inválido.')]})

    data = _normalize(payload)
    envelope = BatchForm(data={k: v for k, v in data.items() if k != 'items'})
    issues = {} if envelope.is_valid() else _form_issues(envelope)

    lines = validate_items(data.get('items'))
    issues.update(lines.issues)

    if issues:
        return ValidationResult(issues=issues)

    cleaned = envelope.cleaned_data
    draft = BatchDraft(
        direction=cleaned['direction'],
        items=lines.items,
        batch_name=cleaned['batch_name'],
        reference=cleaned['reference'],
        note=cleaned['note'],
    )
    return ValidationResult(batch=draft, items=lines.items)
