"""Application services: seller-side catalog changes (price, stock).

A product document is rewritten whole on save; every edit holds the
product's lock from load to commit.
"""

from __future__ import annotations

import structlog

from storefront.application.dto import ProductDTO, product_to_dto
from storefront.application.locking import KeyedLock
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.actor import Actor, Role
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)


class UpdateProductHandler:

    def __init__(self, uow: UnitOfWork, product_locks: KeyedLock) -> None:
        self._uow = uow
        self._product_locks = product_locks

    def handle(
        self,
        actor: Actor,
        product_id: str,
        new_price: str,
        new_offer_price: str | None = None,
    ) -> ProductDTO:
        """Update a product's price and offer price.

        This does NOT affect any existing orders; they captured a
        price snapshot at placement time.
        """
        actor.require_role(Role.SELLER)
        with self._product_locks.hold(product_id), self._uow:
            product = self._uow.products.get_by_id(product_id)
            if product is None:
                raise EntityNotFoundError(f"Product '{product_id}' not found")
            product.update_price(
                Money.of(new_price),
                Money.of(new_offer_price) if new_offer_price is not None else None,
            )
            self._uow.products.save(product)
            self._uow.commit()

        logger.info(
            "price_updated",
            product_id=product_id,
            price=str(product.price.amount),
            offer_price=str(product.offer_price.amount) if product.offer_price else None,
        )
        return product_to_dto(product)


class ChangeStockHandler:

    def __init__(self, uow: UnitOfWork, product_locks: KeyedLock) -> None:
        self._uow = uow
        self._product_locks = product_locks

    def handle(self, actor: Actor, product_id: str, in_stock: bool) -> ProductDTO:
        actor.require_role(Role.SELLER)
        with self._product_locks.hold(product_id), self._uow:
            product = self._uow.products.get_by_id(product_id)
            if product is None:
                raise EntityNotFoundError(f"Product '{product_id}' not found")
            product.set_stock(in_stock)
            self._uow.products.save(product)
            self._uow.commit()

        logger.info("stock_changed", product_id=product_id, in_stock=in_stock)
        return product_to_dto(product)
