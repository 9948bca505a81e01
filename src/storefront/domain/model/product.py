"""Product aggregate.

Products live independently of carts and orders. Prices change and items go
in and out of stock; carts only reference products by id, and orders copy
the selling price at placement time.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import Money

MAX_RATING = 5


@dataclass
class Product:
    """A product in the catalog.

    Kept as a mutable dataclass because price updates and stock toggles are
    legitimate mutations on the aggregate.
    """

    id: str
    name: str
    category: str
    price: Money
    offer_price: Money | None = None
    images: list[str] = field(default_factory=list)
    in_stock: bool = True
    rating: int = 0

    @staticmethod
    def create(
        id: str,
        name: str,
        category: str,
        price: Money,
        offer_price: Money | None = None,
        images: list[str] | None = None,
        in_stock: bool = True,
        rating: int = 0,
    ) -> Product:
        """Create a new catalog entry, enforcing all invariants."""
        if not name or not name.strip():
            raise ValidationError("Product name is required")
        if not category or not category.strip():
            raise ValidationError("Product category is required")
        if not 0 <= rating <= MAX_RATING:
            raise ValidationError(f"Rating must be between 0 and {MAX_RATING}")
        _check_prices(price, offer_price)
        return Product(
            id=id,
            name=name.strip(),
            category=category.strip(),
            price=price,
            offer_price=offer_price,
            images=list(images or []),
            in_stock=in_stock,
            rating=rating,
        )

    @property
    def selling_price(self) -> Money:
        """The price a buyer pays: the offer price when there is one."""
        if self.offer_price is not None:
            return self.offer_price
        return self.price

    def update_price(self, new_price: Money, new_offer_price: Money | None = None) -> None:
        """Change the list and offer price.

        Existing orders are unaffected: they captured a price snapshot at
        placement time.
        """
        _check_prices(new_price, new_offer_price)
        self.price = new_price
        self.offer_price = new_offer_price

    def set_stock(self, in_stock: bool) -> None:
        self.in_stock = in_stock


def _check_prices(price: Money, offer_price: Money | None) -> None:
    if price.amount <= 0:
        raise ValidationError("Product price must be greater than zero")
    if offer_price is None:
        return
    if offer_price.amount <= 0:
        raise ValidationError("Offer price must be greater than zero")
    if offer_price > price:
        raise ValidationError(
            f"Offer price {offer_price} cannot exceed price {price}"
        )
