"""Order aggregate: the record a cart turns into at checkout.

The Order owns its line items. Once placed, items, prices, amount and the
address snapshot never change; only status and the paid flag move, and only
along the transitions defined here.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.address import AddressSnapshot
from storefront.domain.model.value_objects import Money, Quantity


class OrderStatus(Enum):
    PLACED = "Order Placed"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in (OrderStatus.DELIVERED, OrderStatus.CANCELLED)


class PaymentType(Enum):
    COD = "COD"


_ALLOWED_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PLACED: frozenset({OrderStatus.SHIPPED, OrderStatus.CANCELLED}),
    OrderStatus.SHIPPED: frozenset({OrderStatus.DELIVERED}),
    OrderStatus.DELIVERED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}


@dataclass(frozen=True)
class OrderLineItem:
    """A product, quantity and the unit price captured at placement."""

    product_id: str
    product_name: str
    quantity: Quantity
    unit_price: Money  # locked at placement time

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value


@dataclass
class Order:
    """Aggregate root for placed orders.

    Use ``Order.place_cod()`` for new orders; it enforces the creation
    rules. The ``__init__`` stays simple so the repository can reconstitute
    persisted orders without re-validating.
    """

    id: str
    buyer_id: str
    items: list[OrderLineItem]
    amount: Money
    address_id: str
    address: AddressSnapshot
    payment_type: PaymentType = PaymentType.COD
    status: OrderStatus = OrderStatus.PLACED
    is_paid: bool = False
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    idempotency_key: str | None = None

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def place_cod(
        id: str,
        buyer_id: str,
        items: list[OrderLineItem],
        address_id: str,
        address: AddressSnapshot,
        idempotency_key: str | None = None,
    ) -> Order:
        """Create a cash-on-delivery order; the amount is derived from items."""
        if not buyer_id:
            raise ValidationError("Buyer id is required")
        if not items:
            raise ValidationError("Order must contain at least one item")

        amount = Money.zero(items[0].unit_price.currency)
        for item in items:
            amount = amount + item.line_total

        return Order(
            id=id,
            buyer_id=buyer_id,
            items=list(items),
            amount=amount,
            address_id=address_id,
            address=address,
            payment_type=PaymentType.COD,
            status=OrderStatus.PLACED,
            is_paid=False,
            idempotency_key=idempotency_key,
        )

    # --- State transitions ----------------------------------------------------

    def transition_to(self, new_status: OrderStatus) -> None:
        """Move along Placed -> Shipped -> Delivered, or Placed -> Cancelled."""
        if new_status not in _ALLOWED_TRANSITIONS[self.status]:
            raise ValidationError(
                f"Cannot move order from '{self.status.value}' to '{new_status.value}'"
            )
        self.status = new_status
        # Cash is collected on delivery.
        if new_status is OrderStatus.DELIVERED and self.payment_type is PaymentType.COD:
            self.is_paid = True

    # --- Computed properties --------------------------------------------------

    @property
    def items_total(self) -> Money:
        result = Money.zero(self.amount.currency)
        for item in self.items:
            result = result + item.line_total
        return result
