"""
Product store access — the host project's product model, by configuration.

Tallyman never owns products. It only needs to find them by id, bump
their quantity, and read the low-stock threshold.
"""

from django.apps import apps
from django.core.exceptions import ValidationError
from django.db.models import F

from tallyman.conf import tallyman_settings
from tallyman.exceptions import LedgerError


def get_product_model():
    """Return the model configured in TALLYMAN['PRODUCT_MODEL']."""
    label = tallyman_settings.PRODUCT_MODEL
    if not label:
        raise LedgerError('PRODUCT_MODEL_MISSING')
    try:
        return apps.get_model(label, require_ready=False)
    except (LookupError, ValueError) as exc:
        raise LedgerError('PRODUCT_MODEL_MISSING', product_model=label) from exc


def coerce_pk(model, product_id):
    """Convert a submitted product id to the model's pk type (None if impossible)."""
    try:
        return model._meta.pk.to_python(product_id)
    except (ValidationError, ValueError, TypeError):
        return None


def products_by_id(product_ids, model=None, using=None) -> dict:
    """Existing products keyed by the string form of their pk."""
    model = model or get_product_model()
    pks = [pk for pk in (coerce_pk(model, pid) for pid in set(product_ids)) if pk is not None]
    if not pks:
        return {}
    qs = model._default_manager.using(using).filter(pk__in=pks)
    return {str(product.pk): product for product in qs}


def low_stock(product_ids=None, model=None, using=None):
    """
    Products at or below their alert threshold.

    Products without a threshold are never low. Returns an empty
    queryset when PRODUCT_ALERT_FIELD is blank.
    """
    model = model or get_product_model()
    qs = model._default_manager.using(using).all()
    alert_field = tallyman_settings.PRODUCT_ALERT_FIELD
    if not alert_field:
        return qs.none()

    quantity_field = tallyman_settings.PRODUCT_QUANTITY_FIELD
    qs = qs.filter(**{
        f"{alert_field}__isnull": False,
        f"{quantity_field}__lte": F(alert_field),
    })
    if product_ids is not None:
        pks = [pk for pk in (coerce_pk(model, pid) for pid in product_ids) if pk is not None]
        qs = qs.filter(pk__in=pks)
    return qs
