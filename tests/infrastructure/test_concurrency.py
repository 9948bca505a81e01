"""Concurrent requests against the real document store."""

import threading
import time
from decimal import Decimal

import pytest

from storefront.application.add_address import AddAddressHandler
from storefront.application.add_product import AddProductHandler
from storefront.application.delete_address import DeleteAddressHandler
from storefront.application.get_cart import GetCartHandler
from storefront.application.list_addresses import ListAddressesHandler
from storefront.application.list_orders import GetUserOrdersHandler
from storefront.application.place_order_cod import PlaceOrderCODHandler
from storefront.application.show_products import ListProductsHandler, ShowProductHandler
from storefront.application.update_cart import UpdateCartHandler
from storefront.application.update_order_status import UpdateOrderStatusHandler
from storefront.application.update_product import ChangeStockHandler, UpdateProductHandler
from storefront.domain.exceptions import (
    ConflictError,
    EmptyCartError,
    EntityNotFoundError,
    ValidationError,
)
from storefront.domain.model.actor import Actor
from storefront.infrastructure.bootstrap import build_services
from storefront.infrastructure.config import Settings
from storefront.infrastructure.persistence.json_address_repository import (
    JsonAddressRepository,
)
from storefront.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from storefront.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from storefront.infrastructure.seed import DEMO_PRODUCTS, seed_catalog

BUYER = Actor.buyer("u1")
SELLER = Actor.seller("s1")


@pytest.fixture()
def services(tmp_path):
    return build_services(Settings(data_file=tmp_path / "store.json"))


def _run_concurrently(*targets):
    """Start every target at the same moment and collect results or errors."""
    barrier = threading.Barrier(len(targets))
    results: list = [None] * len(targets)

    def runner(index, target):
        barrier.wait()
        try:
            results[index] = target()
        except Exception as exc:
            results[index] = exc

    threads = [
        threading.Thread(target=runner, args=(i, t)) for i, t in enumerate(targets)
    ]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=10)
    return results


def _slow(monkeypatch, repository_cls, method="get_by_id"):
    """Pause after each read so racing threads both see the same state."""
    original = getattr(repository_cls, method)

    def slowed(self, *args):
        result = original(self, *args)
        time.sleep(0.05)
        return result

    monkeypatch.setattr(repository_cls, method, slowed)


def _setup(services):
    apples = AddProductHandler(services.unit_of_work()).handle(
        SELLER, name="Apples", category="Fruits", price="120", offer_price="99"
    )
    milk = AddProductHandler(services.unit_of_work()).handle(
        SELLER, name="Milk", category="Dairy", price="32"
    )
    address = AddAddressHandler(services.unit_of_work()).handle(
        BUYER,
        recipient="Asha",
        street="1 Main St",
        city="Pune",
        state="MH",
        postal_code="411001",
        phone="999",
    )
    return apples, milk, address


class TestConcurrentCartUpdates:

    def test_last_writer_wins_whole_map(self, services):
        apples, milk, _ = _setup(services)
        first = {apples.id: 1}
        second = {milk.id: 3}

        def update(items):
            return lambda: UpdateCartHandler(
                services.unit_of_work(), services.cart_locks
            ).handle(BUYER, items)

        results = _run_concurrently(update(first), update(second))

        assert not any(isinstance(r, Exception) for r in results)
        final = GetCartHandler(services.unit_of_work()).handle(BUYER).cart_items
        assert final in (first, second)

    def test_different_buyers_do_not_interfere(self, services):
        apples, milk, _ = _setup(services)
        other = Actor.buyer("u2")

        def update(actor, items):
            return lambda: UpdateCartHandler(
                services.unit_of_work(), services.cart_locks
            ).handle(actor, items)

        _run_concurrently(update(BUYER, {apples.id: 2}), update(other, {milk.id: 1}))

        assert GetCartHandler(services.unit_of_work()).handle(BUYER).cart_items == {
            apples.id: 2
        }
        assert GetCartHandler(services.unit_of_work()).handle(other).cart_items == {
            milk.id: 1
        }


class TestConcurrentPlacement:

    def test_one_cart_becomes_one_order(self, services):
        apples, milk, address = _setup(services)
        UpdateCartHandler(services.unit_of_work(), services.cart_locks).handle(
            BUYER, {apples.id: 2, milk.id: 1}
        )

        def place():
            return PlaceOrderCODHandler(
                services.unit_of_work(), services.cart_locks
            ).handle(BUYER, address.id)

        results = _run_concurrently(place, place)

        placed = [r for r in results if not isinstance(r, Exception)]
        failed = [r for r in results if isinstance(r, Exception)]
        assert len(placed) == 1
        assert len(failed) == 1
        assert isinstance(failed[0], EmptyCartError)

        orders = GetUserOrdersHandler(services.unit_of_work()).handle(BUYER)
        assert [o.id for o in orders] == [placed[0].id]
        assert orders[0].amount == Decimal("230")
        assert GetCartHandler(services.unit_of_work()).handle(BUYER).cart_items == {}

    def test_retries_with_same_key_return_same_order(self, services):
        apples, _, address = _setup(services)
        UpdateCartHandler(services.unit_of_work(), services.cart_locks).handle(
            BUYER, {apples.id: 1}
        )

        def place():
            return PlaceOrderCODHandler(
                services.unit_of_work(), services.cart_locks
            ).handle(BUYER, address.id, idempotency_key="retry-1")

        results = _run_concurrently(place, place)

        assert not any(isinstance(r, Exception) for r in results)
        assert results[0].id == results[1].id
        assert len(GetUserOrdersHandler(services.unit_of_work()).handle(BUYER)) == 1


def _place(services, items) -> str:
    address = AddAddressHandler(services.unit_of_work()).handle(
        BUYER,
        recipient="Asha",
        street="2 Side St",
        city="Pune",
        state="MH",
        postal_code="411002",
        phone="999",
    )
    UpdateCartHandler(services.unit_of_work(), services.cart_locks).handle(BUYER, items)
    return PlaceOrderCODHandler(services.unit_of_work(), services.cart_locks).handle(
        BUYER, address.id
    ).id


class TestConcurrentStatusChanges:

    def test_only_one_transition_out_of_placed(self, services, monkeypatch):
        apples, _, _ = _setup(services)
        order_id = _place(services, {apples.id: 1})
        _slow(monkeypatch, JsonOrderRepository)

        def move(status):
            return lambda: UpdateOrderStatusHandler(
                services.unit_of_work(), services.order_locks
            ).handle(SELLER, order_id, status).status

        results = _run_concurrently(move("Cancelled"), move("Shipped"))

        accepted = [r for r in results if not isinstance(r, Exception)]
        rejected = [r for r in results if isinstance(r, Exception)]
        assert len(accepted) == 1
        assert len(rejected) == 1
        assert isinstance(rejected[0], ValidationError)

        with services.unit_of_work() as uow:
            assert uow.orders.get_by_id(order_id).status.value == accepted[0]


class TestConcurrentProductEdits:

    def test_price_and_stock_edits_both_land(self, services, monkeypatch):
        _, milk, _ = _setup(services)
        _slow(monkeypatch, JsonProductRepository)

        def out_of_stock():
            return ChangeStockHandler(
                services.unit_of_work(), services.product_locks
            ).handle(SELLER, milk.id, False)

        def reprice():
            return UpdateProductHandler(
                services.unit_of_work(), services.product_locks
            ).handle(SELLER, milk.id, "45")

        results = _run_concurrently(out_of_stock, reprice)

        assert not any(isinstance(r, Exception) for r in results)
        product = ShowProductHandler(services.unit_of_work()).handle(milk.id)
        assert product.in_stock is False
        assert product.price == Decimal("45")


class TestDeleteAddressDuringPlacement:

    def test_address_of_placed_order_survives(self, services, monkeypatch):
        apples, _, address = _setup(services)
        UpdateCartHandler(services.unit_of_work(), services.cart_locks).handle(
            BUYER, {apples.id: 1}
        )
        _slow(monkeypatch, JsonAddressRepository)

        def place():
            return PlaceOrderCODHandler(
                services.unit_of_work(), services.cart_locks
            ).handle(BUYER, address.id)

        def delete():
            return DeleteAddressHandler(
                services.unit_of_work(), services.cart_locks
            ).handle(BUYER, address.id)

        placed, deleted = _run_concurrently(place, delete)

        if isinstance(placed, Exception):
            # The delete went first; placement then finds no address.
            assert isinstance(placed, EntityNotFoundError)
            assert deleted is None
        else:
            assert isinstance(deleted, ConflictError)
            remaining = ListAddressesHandler(services.unit_of_work()).handle(BUYER)
            assert [a.id for a in remaining] == [address.id]


class TestConcurrentSeed:

    def test_racing_seeds_leave_one_catalog(self, services, monkeypatch):
        _slow(monkeypatch, JsonProductRepository, "list_all")

        def seed():
            return seed_catalog(services.unit_of_work(), SELLER)

        _run_concurrently(seed, seed)

        products = ListProductsHandler(services.unit_of_work()).handle()
        assert sorted(p.name for p in products) == sorted(
            p["name"] for p in DEMO_PRODUCTS
        )
