"""Unit tests for the Product aggregate."""

import pytest

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money


def _make_product(price: str = "100", offer: str | None = "90") -> Product:
    return Product.create(
        id="A",
        name="Fresh Apples",
        category="Fruits",
        price=Money.of(price),
        offer_price=Money.of(offer) if offer is not None else None,
    )


class TestProductCreation:

    def test_happy_path(self):
        product = _make_product()
        assert product.name == "Fresh Apples"
        assert product.in_stock is True
        assert product.images == []

    def test_name_is_trimmed(self):
        product = Product.create(
            id="A", name="  Milk ", category=" Dairy ", price=Money.of("60")
        )
        assert product.name == "Milk"
        assert product.category == "Dairy"

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError, match="name is required"):
            Product.create(id="A", name=" ", category="Fruits", price=Money.of("1"))

    def test_zero_price_rejected(self):
        with pytest.raises(ValidationError, match="greater than zero"):
            _make_product(price="0", offer=None)

    def test_offer_above_price_rejected(self):
        with pytest.raises(ValidationError, match="cannot exceed"):
            _make_product(price="50", offer="60")

    def test_offer_equal_to_price_accepted(self):
        product = _make_product(price="50", offer="50")
        assert product.selling_price == Money.of("50")

    def test_rating_out_of_range_rejected(self):
        with pytest.raises(ValidationError, match="Rating"):
            Product.create(
                id="A", name="Milk", category="Dairy", price=Money.of("60"), rating=6
            )


class TestSellingPrice:

    def test_offer_price_wins(self):
        assert _make_product("100", "90").selling_price == Money.of("90")

    def test_falls_back_to_price(self):
        assert _make_product("50", None).selling_price == Money.of("50")


class TestProductMutations:

    def test_update_price(self):
        product = _make_product()
        product.update_price(Money.of("120"), Money.of("99"))
        assert product.price == Money.of("120")
        assert product.selling_price == Money.of("99")

    def test_update_price_can_clear_offer(self):
        product = _make_product()
        product.update_price(Money.of("120"))
        assert product.offer_price is None
        assert product.selling_price == Money.of("120")

    def test_invalid_update_leaves_product_unchanged(self):
        product = _make_product()
        with pytest.raises(ValidationError):
            product.update_price(Money.of("10"), Money.of("20"))
        assert product.price == Money.of("100")
        assert product.offer_price == Money.of("90")

    def test_set_stock(self):
        product = _make_product()
        product.set_stock(False)
        assert product.in_stock is False
