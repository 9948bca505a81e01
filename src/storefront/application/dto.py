"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the HTTP/CLI layers and the application layer
without exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from storefront.domain.model.address import Address, AddressSnapshot
from storefront.domain.model.cart import Cart
from storefront.domain.model.order import Order
from storefront.domain.model.product import Product


@dataclass(frozen=True)
class CartDTO:
    buyer_id: str
    cart_items: dict[str, int]


@dataclass(frozen=True)
class ProductDTO:
    id: str
    name: str
    category: str
    price: Decimal
    offer_price: Decimal | None
    currency: str
    images: list[str]
    in_stock: bool
    rating: int


@dataclass(frozen=True)
class AddressDTO:
    id: str | None
    recipient: str
    street: str
    city: str
    state: str
    postal_code: str
    phone: str
    country: str | None


@dataclass(frozen=True)
class OrderLineItemDTO:
    product_id: str
    product_name: str
    quantity: int
    unit_price: Decimal
    line_total: Decimal


@dataclass(frozen=True)
class OrderDTO:
    id: str
    buyer_id: str
    items: list[OrderLineItemDTO]
    amount: Decimal
    currency: str
    address_id: str
    address: AddressDTO
    payment_type: str
    status: str
    is_paid: bool
    created_at: datetime


# --- Mapping ------------------------------------------------------------------


def cart_to_dto(cart: Cart) -> CartDTO:
    return CartDTO(buyer_id=cart.buyer_id, cart_items=dict(cart.items))


def product_to_dto(product: Product) -> ProductDTO:
    return ProductDTO(
        id=product.id,
        name=product.name,
        category=product.category,
        price=product.price.amount,
        offer_price=product.offer_price.amount if product.offer_price else None,
        currency=product.price.currency,
        images=list(product.images),
        in_stock=product.in_stock,
        rating=product.rating,
    )


def address_to_dto(address: Address) -> AddressDTO:
    return AddressDTO(
        id=address.id,
        recipient=address.recipient,
        street=address.street,
        city=address.city,
        state=address.state,
        postal_code=address.postal_code,
        phone=address.phone,
        country=address.country,
    )


def _snapshot_to_dto(address_id: str, snapshot: AddressSnapshot) -> AddressDTO:
    return AddressDTO(
        id=address_id,
        recipient=snapshot.recipient,
        street=snapshot.street,
        city=snapshot.city,
        state=snapshot.state,
        postal_code=snapshot.postal_code,
        phone=snapshot.phone,
        country=snapshot.country,
    )


def order_to_dto(order: Order) -> OrderDTO:
    return OrderDTO(
        id=order.id,
        buyer_id=order.buyer_id,
        items=[
            OrderLineItemDTO(
                product_id=item.product_id,
                product_name=item.product_name,
                quantity=item.quantity.value,
                unit_price=item.unit_price.amount,
                line_total=item.line_total.amount,
            )
            for item in order.items
        ],
        amount=order.amount.amount,
        currency=order.amount.currency,
        address_id=order.address_id,
        address=_snapshot_to_dto(order.address_id, order.address),
        payment_type=order.payment_type.value,
        status=order.status.value,
        is_paid=order.is_paid,
        created_at=order.created_at,
    )
