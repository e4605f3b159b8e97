"""
Unit catalog — resolves unit names to base-unit conversion factors.

Usage:
    catalog = UnitCatalog.load()
    catalog.resolve('Caixa')   # 12
    catalog.resolve('Unidade') # 1
    catalog.resolve('???')     # 1 (unknown units count as base units)

The catalog is a snapshot: load it once per batch submission and drop it.
There is no cache across requests, so unit edits show up on the next batch.
"""

import logging

from tallyman.models.enums import UnitKind
from tallyman.models.unit import UnitOfMeasure

logger = logging.getLogger('tallyman')


class UnitCatalog:
    """In-memory snapshot of all units, keyed by name and short name."""

    def __init__(self, factors: dict[str, int] | None = None,
                 short_factors: dict[str, int] | None = None):
        self._factors = dict(factors or {})
        self._short_factors = dict(short_factors or {})

    @classmethod
    def load(cls, using: str | None = None) -> 'UnitCatalog':
        """Read every unit definition in one query."""
        qs = UnitOfMeasure.objects.all()
        if using:
            qs = qs.using(using)

        factors = {}
        short_factors = {}
        for name, short_name, kind, per_pack in qs.values_list(
            'name', 'short_name', 'kind', 'units_per_pack'
        ):
            factor = per_pack if kind == UnitKind.PACK and per_pack else 1
            factors[name] = factor
            if short_name:
                short_factors.setdefault(short_name, factor)

        logger.debug("ledger.units.loaded", extra={"units": len(factors)})
        return cls(factors, short_factors)

    def resolve(self, unit_name: str | None) -> int:
        """
        Base units per one `unit_name`.

        Blank or unknown names resolve to 1. This is deliberate
        permissiveness, not validation.
        """
        if not unit_name:
            return 1
        if unit_name in self._factors:
            return self._factors[unit_name]
        return self._short_factors.get(unit_name, 1)

    __call__ = resolve

    def __len__(self) -> int:
        return len(self._factors)

    def __contains__(self, unit_name) -> bool:
        return unit_name in self._factors or unit_name in self._short_factors
