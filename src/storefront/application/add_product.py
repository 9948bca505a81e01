"""Application service: Add Product use case."""

from __future__ import annotations

import structlog

from storefront.application.dto import ProductDTO, product_to_dto
from storefront.domain.model.actor import Actor, Role
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)


class AddProductHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        actor: Actor,
        name: str,
        category: str,
        price: str,
        offer_price: str | None = None,
        images: list[str] | None = None,
        in_stock: bool = True,
        rating: int = 0,
    ) -> ProductDTO:
        """Add a new product to the catalog."""
        actor.require_role(Role.SELLER)
        with self._uow:
            product = Product.create(
                id=self._uow.products.next_id(),
                name=name,
                category=category,
                price=Money.of(price),
                offer_price=Money.of(offer_price) if offer_price is not None else None,
                images=images,
                in_stock=in_stock,
                rating=rating,
            )
            self._uow.products.save(product)
            self._uow.commit()

        logger.info("product_added", product_id=product.id, name=product.name)
        return product_to_dto(product)
