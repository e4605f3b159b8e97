"""
Tallyman configuration.

Usage in settings.py:
    TALLYMAN = {
        "PRODUCT_MODEL": "catalog.Product",
        "PRODUCT_QUANTITY_FIELD": "quantity",
        "PRODUCT_UPDATED_FIELD": "updated_at",
        "PRODUCT_ALERT_FIELD": "qty_alert_threshold",
        "PAGE_SIZE": 20,
        "MAX_PAGE_SIZE": 100,
    }
"""

from dataclasses import dataclass
from typing import Any

from django.conf import settings


@dataclass
class TallymanSettings:
    """Tallyman configuration settings."""

    # Product model whose quantity is reconciled ("app_label.ModelName")
    PRODUCT_MODEL: str = ""

    # Numeric field incremented by the reconciler
    PRODUCT_QUANTITY_FIELD: str = "quantity"

    # Timestamp touched on every increment ("" = don't touch)
    PRODUCT_UPDATED_FIELD: str = "updated_at"

    # Low-stock threshold field ("" = no low-stock checks)
    PRODUCT_ALERT_FIELD: str = "qty_alert_threshold"

    # Batch listing pagination
    PAGE_SIZE: int = 20
    MAX_PAGE_SIZE: int = 100


def get_tallyman_settings() -> TallymanSettings:
    """Load settings from Django settings."""
    user_settings: dict[str, Any] = getattr(settings, "TALLYMAN", {})
    return TallymanSettings(**{
        k: v for k, v in user_settings.items()
        if k in TallymanSettings.__dataclass_fields__
    })


class _LazySettings:
    """Lazy proxy that re-reads settings on every attribute access."""

    def __getattr__(self, name):
        return getattr(get_tallyman_settings(), name)


tallyman_settings = _LazySettings()
