"""FastAPI routes: cart, orders, addresses and catalog.

Endpoints are plain ``def`` functions, so the server runs them on its
thread pool. A client that disconnects mid-request does not interrupt the
handler; an order placement always either commits or rolls back.
"""

from typing import Annotated

from fastapi import APIRouter, Body

from storefront.application.add_address import AddAddressHandler
from storefront.application.delete_address import DeleteAddressHandler
from storefront.application.get_cart import GetCartHandler
from storefront.application.list_addresses import ListAddressesHandler
from storefront.application.list_orders import GetAllOrdersHandler, GetUserOrdersHandler
from storefront.application.place_order_cod import PlaceOrderCODHandler
from storefront.application.show_order import ShowOrderHandler
from storefront.application.show_products import ListProductsHandler, ShowProductHandler
from storefront.application.update_cart import UpdateCartHandler
from storefront.application.update_order_status import UpdateOrderStatusHandler
from storefront.application.update_product import ChangeStockHandler
from storefront.infrastructure.http.dependencies import ActorDep, SellerDep, ServicesDep
from storefront.infrastructure.http.schemas import (
    AddAddressRequest,
    AddressesResponse,
    AddressResponse,
    AddressSchema,
    CartResponse,
    ChangeStockRequest,
    OrderResponse,
    OrderSchema,
    OrdersResponse,
    PlaceOrderRequest,
    ProductResponse,
    ProductSchema,
    ProductsResponse,
    StatusResponse,
    UpdateOrderStatusRequest,
)

# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/api/cart", tags=["cart"])


@cart_router.post("/update", response_model=CartResponse)
def update_cart(
    actor: ActorDep,
    services: ServicesDep,
    items: Annotated[dict[str, int], Body()],
) -> CartResponse:
    """Replace the caller's cart with the posted ``{productId: quantity}`` map."""
    handler = UpdateCartHandler(services.unit_of_work(), services.cart_locks)
    cart = handler.handle(actor, items)
    return CartResponse(cart_items=cart.cart_items)


@cart_router.get("", response_model=CartResponse)
def get_cart(actor: ActorDep, services: ServicesDep) -> CartResponse:
    cart = GetCartHandler(services.unit_of_work()).handle(actor)
    return CartResponse(cart_items=cart.cart_items)


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/api/order", tags=["orders"])


@order_router.post("/cod", response_model=OrderResponse)
def place_order_cod(
    actor: ActorDep, services: ServicesDep, body: PlaceOrderRequest
) -> OrderResponse:
    handler = PlaceOrderCODHandler(services.unit_of_work(), services.cart_locks)
    order = handler.handle(actor, body.address_id, idempotency_key=body.idempotency_key)
    return OrderResponse(order=OrderSchema.model_validate(order))


@order_router.get("/user", response_model=OrdersResponse)
def get_user_orders(actor: ActorDep, services: ServicesDep) -> OrdersResponse:
    orders = GetUserOrdersHandler(services.unit_of_work()).handle(actor)
    return OrdersResponse(orders=[OrderSchema.model_validate(o) for o in orders])


@order_router.get("/seller", response_model=OrdersResponse)
def get_all_orders(actor: SellerDep, services: ServicesDep) -> OrdersResponse:
    orders = GetAllOrdersHandler(services.unit_of_work()).handle(actor)
    return OrdersResponse(orders=[OrderSchema.model_validate(o) for o in orders])


@order_router.post("/status", response_model=OrderResponse)
def update_order_status(
    actor: SellerDep, services: ServicesDep, body: UpdateOrderStatusRequest
) -> OrderResponse:
    handler = UpdateOrderStatusHandler(services.unit_of_work(), services.order_locks)
    order = handler.handle(actor, body.order_id, body.status)
    return OrderResponse(order=OrderSchema.model_validate(order))


@order_router.get("/{order_id}", response_model=OrderResponse)
def show_order(order_id: str, actor: ActorDep, services: ServicesDep) -> OrderResponse:
    order = ShowOrderHandler(services.unit_of_work()).handle(actor, order_id)
    return OrderResponse(order=OrderSchema.model_validate(order))


# ---------------------------------------------------------------------------
# Address Router
# ---------------------------------------------------------------------------
address_router = APIRouter(prefix="/api/address", tags=["addresses"])


@address_router.post("/add", response_model=AddressResponse)
def add_address(
    actor: ActorDep, services: ServicesDep, body: AddAddressRequest
) -> AddressResponse:
    address = AddAddressHandler(services.unit_of_work()).handle(
        actor, **body.model_dump()
    )
    return AddressResponse(address=AddressSchema.model_validate(address))


@address_router.get("/get", response_model=AddressesResponse)
def list_addresses(actor: ActorDep, services: ServicesDep) -> AddressesResponse:
    addresses = ListAddressesHandler(services.unit_of_work()).handle(actor)
    return AddressesResponse(
        addresses=[AddressSchema.model_validate(a) for a in addresses]
    )


@address_router.delete("/{address_id}", response_model=StatusResponse)
def delete_address(address_id: str, actor: ActorDep, services: ServicesDep) -> StatusResponse:
    DeleteAddressHandler(services.unit_of_work(), services.cart_locks).handle(
        actor, address_id
    )
    return StatusResponse(message="Address deleted")


# ---------------------------------------------------------------------------
# Product Router
# ---------------------------------------------------------------------------
product_router = APIRouter(prefix="/api/product", tags=["products"])


@product_router.get("/list", response_model=ProductsResponse)
def list_products(services: ServicesDep, category: str | None = None) -> ProductsResponse:
    products = ListProductsHandler(services.unit_of_work()).handle(category)
    return ProductsResponse(products=[ProductSchema.model_validate(p) for p in products])


@product_router.post("/stock", response_model=ProductResponse)
def change_stock(
    actor: SellerDep, services: ServicesDep, body: ChangeStockRequest
) -> ProductResponse:
    handler = ChangeStockHandler(services.unit_of_work(), services.product_locks)
    product = handler.handle(actor, body.id, body.in_stock)
    return ProductResponse(product=ProductSchema.model_validate(product))


@product_router.get("/{product_id}", response_model=ProductResponse)
def show_product(product_id: str, services: ServicesDep) -> ProductResponse:
    product = ShowProductHandler(services.unit_of_work()).handle(product_id)
    return ProductResponse(product=ProductSchema.model_validate(product))
