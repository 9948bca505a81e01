"""Pydantic request/response schemas for the HTTP API.

These are the external contract with the storefront client: camelCase
field names and a ``success`` envelope. They are kept separate from the
application DTOs.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict, PlainSerializer
from pydantic.alias_generators import to_camel

# Amounts are exact Decimals internally; the client wants JSON numbers.
Amount = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class _Schema(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------
class PlaceOrderRequest(_Schema):
    address_id: str
    idempotency_key: str | None = None


class UpdateOrderStatusRequest(_Schema):
    order_id: str
    status: str


class AddAddressRequest(_Schema):
    recipient: str
    street: str
    city: str
    state: str
    postal_code: str
    phone: str
    country: str | None = None


class ChangeStockRequest(_Schema):
    id: str
    in_stock: bool


# ---------------------------------------------------------------------------
# Shared sub-models
# ---------------------------------------------------------------------------
class ProductSchema(_Schema):
    id: str
    name: str
    category: str
    price: Amount
    offer_price: Amount | None = None
    currency: str
    images: list[str]
    in_stock: bool
    rating: int


class AddressSchema(_Schema):
    id: str | None = None
    recipient: str
    street: str
    city: str
    state: str
    postal_code: str
    phone: str
    country: str | None = None


class OrderItemSchema(_Schema):
    product_id: str
    product_name: str
    quantity: int
    unit_price: Amount
    line_total: Amount


class OrderSchema(_Schema):
    id: str
    buyer_id: str
    items: list[OrderItemSchema]
    amount: Amount
    currency: str
    address_id: str
    address: AddressSchema
    payment_type: str
    status: str
    is_paid: bool
    created_at: datetime


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------
class StatusResponse(_Schema):
    success: bool = True
    message: str | None = None


class CartResponse(_Schema):
    success: bool = True
    cart_items: dict[str, int]


class OrderResponse(_Schema):
    success: bool = True
    order: OrderSchema


class OrdersResponse(_Schema):
    success: bool = True
    orders: list[OrderSchema]


class AddressResponse(_Schema):
    success: bool = True
    address: AddressSchema


class AddressesResponse(_Schema):
    success: bool = True
    addresses: list[AddressSchema]


class ProductResponse(_Schema):
    success: bool = True
    product: ProductSchema


class ProductsResponse(_Schema):
    success: bool = True
    products: list[ProductSchema]
