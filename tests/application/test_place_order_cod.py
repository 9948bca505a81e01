"""Integration tests for the PlaceOrderCOD use case."""

from decimal import Decimal

import pytest

from storefront.application.get_cart import GetCartHandler
from storefront.application.locking import KeyedLock
from storefront.application.place_order_cod import PlaceOrderCODHandler
from storefront.application.update_cart import UpdateCartHandler
from storefront.domain.exceptions import (
    EmptyCartError,
    EntityNotFoundError,
    Forbidden,
    OutOfStockError,
)
from storefront.domain.model.actor import Actor
from storefront.domain.model.address import Address
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from tests.fakes import FakeUnitOfWork

BUYER = Actor.buyer("u1")
OTHER_BUYER = Actor.buyer("u2")

ADDRESS_FIELDS = dict(
    recipient="Asha Rao",
    street="12 MG Road",
    city="Pune",
    state="MH",
    postal_code="411001",
    phone="9999999999",
)


class _World:
    """Fake repositories plus the handlers under test."""

    def __init__(self) -> None:
        self.uow = FakeUnitOfWork([
            Product(id="A", name="Apples", category="Fruits", price=Money.of("100"), offer_price=Money.of("90")),
            Product(id="B", name="Bread", category="Bakery", price=Money.of("50")),
            Product(id="C", name="Cheese", category="Dairy", price=Money.of("70")),
        ])
        self.locks = KeyedLock(timeout=1.0)
        self.place = PlaceOrderCODHandler(self.uow, self.locks)
        self.update_cart = UpdateCartHandler(self.uow, self.locks)
        self.get_cart = GetCartHandler(self.uow)
        for buyer_id, address_id in (("u1", "addr-u1"), ("u2", "addr-u2")):
            self.uow.addresses.save(
                Address.create(id=address_id, buyer_id=buyer_id, **ADDRESS_FIELDS)
            )

    def set_stock(self, product_id: str, in_stock: bool) -> None:
        product = self.uow.products.get_by_id(product_id)
        product.set_stock(in_stock)
        self.uow.products.save(product)

    def set_price(self, product_id: str, price: str, offer: str | None = None) -> None:
        product = self.uow.products.get_by_id(product_id)
        product.update_price(Money.of(price), Money.of(offer) if offer else None)
        self.uow.products.save(product)

    def remove_product(self, product_id: str) -> None:
        del self.uow.products._store[product_id]


class TestPlaceOrderHappyPath:

    def test_worked_example(self):
        world = _World()
        world.update_cart.handle(BUYER, {"A": 2, "B": 1})

        dto = world.place.handle(BUYER, "addr-u1")

        assert dto.amount == Decimal("230")
        assert dto.status == "Order Placed"
        assert dto.is_paid is False
        assert dto.payment_type == "COD"
        assert world.get_cart.handle(BUYER).cart_items == {}

    def test_line_items_capture_selling_price(self):
        world = _World()
        world.update_cart.handle(BUYER, {"A": 2, "B": 1})

        dto = world.place.handle(BUYER, "addr-u1")

        prices = {item.product_id: item.unit_price for item in dto.items}
        assert prices == {"A": Decimal("90"), "B": Decimal("50")}
        assert dto.amount == sum(i.unit_price * i.quantity for i in dto.items)

    def test_order_persisted_with_address_snapshot(self):
        world = _World()
        world.update_cart.handle(BUYER, {"B": 1})

        dto = world.place.handle(BUYER, "addr-u1")

        saved = world.uow.orders.get_by_id(dto.id)
        assert saved is not None
        assert saved.address_id == "addr-u1"
        assert saved.address.city == "Pune"

    def test_single_commit_for_order_and_cart(self):
        world = _World()
        world.update_cart.handle(BUYER, {"B": 1})
        commits_before = world.uow.commits

        world.place.handle(BUYER, "addr-u1")

        assert world.uow.commits == commits_before + 1


class TestPlaceOrderPriceLock:

    def test_price_snapshot_at_placement(self):
        world = _World()
        world.update_cart.handle(BUYER, {"B": 2})
        dto = world.place.handle(BUYER, "addr-u1")

        world.set_price("B", "999")

        saved = world.uow.orders.get_by_id(dto.id)
        assert saved.amount == Money.of("100")
        assert saved.items[0].unit_price == Money.of("50")

    def test_price_read_at_placement_not_cart_time(self):
        world = _World()
        world.update_cart.handle(BUYER, {"B": 1})
        world.set_price("B", "60", "55")

        dto = world.place.handle(BUYER, "addr-u1")

        assert dto.amount == Decimal("55")


class TestPlaceOrderValidation:

    def test_empty_cart_rejected(self):
        world = _World()
        with pytest.raises(EmptyCartError):
            world.place.handle(BUYER, "addr-u1")
        assert world.uow.orders.list_all() == []

    def test_emptied_cart_rejected(self):
        world = _World()
        world.update_cart.handle(BUYER, {"A": 1})
        world.update_cart.handle(BUYER, {"A": 0})
        with pytest.raises(EmptyCartError):
            world.place.handle(BUYER, "addr-u1")

    def test_out_of_stock_rejected_and_nothing_changes(self):
        world = _World()
        world.update_cart.handle(BUYER, {"A": 2, "C": 1})
        world.set_stock("C", False)

        with pytest.raises(OutOfStockError, match="Cheese") as excinfo:
            world.place.handle(BUYER, "addr-u1")

        assert excinfo.value.product_id == "C"
        assert world.uow.orders.list_all() == []
        assert world.get_cart.handle(BUYER).cart_items == {"A": 2, "C": 1}

    def test_removed_product_rejected(self):
        world = _World()
        world.update_cart.handle(BUYER, {"A": 1, "B": 1})
        world.remove_product("B")

        with pytest.raises(EntityNotFoundError, match="Product 'B'"):
            world.place.handle(BUYER, "addr-u1")

        assert world.uow.orders.list_all() == []
        assert world.get_cart.handle(BUYER).cart_items == {"A": 1, "B": 1}

    def test_unknown_address_rejected(self):
        world = _World()
        world.update_cart.handle(BUYER, {"A": 1})
        with pytest.raises(EntityNotFoundError, match="Address"):
            world.place.handle(BUYER, "nope")
        assert world.get_cart.handle(BUYER).cart_items == {"A": 1}

    def test_someone_elses_address_rejected(self):
        world = _World()
        world.update_cart.handle(BUYER, {"A": 1})
        with pytest.raises(EntityNotFoundError, match="Address"):
            world.place.handle(BUYER, "addr-u2")
        assert world.uow.orders.list_all() == []

    def test_seller_cannot_place_orders(self):
        world = _World()
        with pytest.raises(Forbidden):
            world.place.handle(Actor.seller("s1"), "addr-u1")


class TestPlaceOrderRetries:

    def test_second_attempt_without_key_finds_empty_cart(self):
        world = _World()
        world.update_cart.handle(BUYER, {"A": 1})
        world.place.handle(BUYER, "addr-u1")

        with pytest.raises(EmptyCartError):
            world.place.handle(BUYER, "addr-u1")
        assert len(world.uow.orders.list_all()) == 1

    def test_same_idempotency_key_returns_same_order(self):
        world = _World()
        world.update_cart.handle(BUYER, {"A": 1})

        first = world.place.handle(BUYER, "addr-u1", idempotency_key="k-1")
        second = world.place.handle(BUYER, "addr-u1", idempotency_key="k-1")

        assert first.id == second.id
        assert len(world.uow.orders.list_all()) == 1

    def test_idempotency_keys_are_scoped_per_buyer(self):
        world = _World()
        world.update_cart.handle(BUYER, {"A": 1})
        world.update_cart.handle(OTHER_BUYER, {"B": 1})

        mine = world.place.handle(BUYER, "addr-u1", idempotency_key="same")
        theirs = world.place.handle(OTHER_BUYER, "addr-u2", idempotency_key="same")

        assert mine.id != theirs.id
        assert theirs.buyer_id == "u2"

    def test_new_key_after_success_hits_empty_cart(self):
        world = _World()
        world.update_cart.handle(BUYER, {"A": 1})
        world.place.handle(BUYER, "addr-u1", idempotency_key="k-1")

        with pytest.raises(EmptyCartError):
            world.place.handle(BUYER, "addr-u1", idempotency_key="k-2")
