"""
Enums for Tallyman models.
"""

from django.db import models
from django.utils.translation import gettext_lazy as _


class Direction(models.TextChoices):
    """
    Which way a batch moves stock.

    IN:  Stock-in. Quantities are added as submitted, in the product's
         own unit (no pack conversion).
    OUT: Stock-out. Pack units are converted to base units and subtracted.
    """
    IN = 'in', _('Entrada')
    OUT = 'out', _('Saída')


class UnitKind(models.TextChoices):
    """Unit of measure kind."""
    BASE = 'base', _('Unidade base')     # Indivisible unit, factor 1
    PACK = 'pack', _('Embalagem')        # Contains N base units
