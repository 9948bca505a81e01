"""Demo catalog used by ``storefront seed``."""

from __future__ import annotations

import uuid

import structlog

from storefront.domain.model.actor import Actor, Role
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)

# Seeded ids derive from the product name, so two seed runs racing on an
# empty catalog write the same three documents.
_SEED_NAMESPACE = uuid.UUID("6f1c2a7e-3b4d-4e5f-9a8b-7c6d5e4f3a2b")

DEMO_PRODUCTS: list[dict] = [
    {
        "name": "Fresh Apples",
        "category": "Fruits",
        "price": "120",
        "offer_price": "99",
        "images": ["apple.jpg"],
        "rating": 4,
    },
    {
        "name": "Organic Milk",
        "category": "Dairy",
        "price": "60",
        "offer_price": "50",
        "images": ["milk.jpg"],
        "rating": 5,
    },
    {
        "name": "Brown Bread",
        "category": "Bakery",
        "price": "40",
        "offer_price": "35",
        "images": ["bread.jpg"],
        "rating": 4,
    },
]


def seed_product_id(name: str) -> str:
    return uuid.uuid5(_SEED_NAMESPACE, name).hex


def seed_catalog(uow: UnitOfWork, actor: Actor) -> int:
    """Add the demo products unless the catalog already has products.

    The emptiness check and the inserts share one unit of work and one
    commit. Returns how many products were created.
    """
    actor.require_role(Role.SELLER)
    with uow:
        if uow.products.list_all():
            return 0
        for fields in DEMO_PRODUCTS:
            product = Product.create(
                id=seed_product_id(fields["name"]),
                name=fields["name"],
                category=fields["category"],
                price=Money.of(fields["price"]),
                offer_price=Money.of(fields["offer_price"]),
                images=fields["images"],
                rating=fields["rating"],
            )
            uow.products.save(product)
        uow.commit()

    logger.info("catalog_seeded", products=len(DEMO_PRODUCTS), seller_id=actor.id)
    return len(DEMO_PRODUCTS)
