"""Cart aggregate.

A cart belongs to exactly one buyer and maps product ids to desired
quantities. The client always sends the whole desired cart, so the only
mutation is a full replace; there is no add/remove-by-delta.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from storefront.domain.model.value_objects import Quantity


@dataclass
class Cart:
    """Per-buyer mapping of product id to a positive quantity.

    Invariant: no entry has a quantity <= 0.
    """

    buyer_id: str
    items: dict[str, int] = field(default_factory=dict)
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @staticmethod
    def empty(buyer_id: str) -> Cart:
        return Cart(buyer_id=buyer_id)

    @staticmethod
    def normalize(items: dict[str, int]) -> dict[str, int]:
        """Drop non-positive entries; validate the rest as quantities."""
        result: dict[str, int] = {}
        for product_id, qty in items.items():
            if isinstance(qty, int) and not isinstance(qty, bool) and qty <= 0:
                continue
            result[product_id] = Quantity(qty).value
        return result

    def replace(self, items: dict[str, int]) -> None:
        """Replace the whole cart with ``items`` (already normalized)."""
        self.items = dict(items)
        self.updated_at = datetime.now(timezone.utc)

    def clear(self) -> None:
        self.replace({})

    @property
    def is_empty(self) -> bool:
        return not self.items
