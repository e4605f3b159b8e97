"""
Batch aggregation — folds line items into one signed delta per product.
"""

from collections.abc import Iterable

from tallyman.models.enums import Direction
from tallyman.protocols.ledger import LineItem, UnitResolver


def _no_conversion(unit_name: str | None) -> int:
    return 1


def aggregate(items: Iterable[LineItem], direction: str,
              resolver: UnitResolver | None = None) -> dict[str, int]:
    """
    Net quantity delta per product for one batch.

    Stock-out: each line contributes -(quantity * resolver(unit)).
    Stock-in:  each line contributes +quantity, unconverted; stock always
               enters in the product's own unit.

    Repeated products are summed, so the result is independent of item
    order and each product gets exactly one reconciliation update.

    Args:
        items: Validated line items
        direction: Direction.IN or Direction.OUT
        resolver: unit name -> factor (ignored for stock-in)

    Returns:
        {product_id: signed delta}
    """
    if direction == Direction.OUT:
        sign = -1
        factor_of = resolver or _no_conversion
    elif direction == Direction.IN:
        sign = 1
        factor_of = _no_conversion
    else:
        raise ValueError(f"Unknown direction: {direction!r}")

    deltas: dict[str, int] = {}
    for item in items:
        base_qty = item.quantity * factor_of(item.unit)
        deltas[item.product_id] = deltas.get(item.product_id, 0) + sign * base_qty
    return deltas
