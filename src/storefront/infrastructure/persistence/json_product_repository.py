"""JSON-document-backed implementation of ProductRepository."""

from __future__ import annotations

import uuid
from decimal import Decimal

from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import DEFAULT_CURRENCY, Money
from storefront.domain.repository.product_repository import ProductRepository
from storefront.infrastructure.persistence.document_store import DocumentSession

COLLECTION = "products"


class JsonProductRepository(ProductRepository):

    def __init__(self, session: DocumentSession) -> None:
        self._session = session

    # --- ProductRepository interface ------------------------------------------

    def next_id(self) -> str:
        return uuid.uuid4().hex

    def get_by_id(self, product_id: str) -> Product | None:
        raw = self._session.get(COLLECTION, product_id)
        return self._to_domain(raw) if raw is not None else None

    def list_all(self) -> list[Product]:
        return [self._to_domain(raw) for raw in self._session.all(COLLECTION)]

    def save(self, product: Product) -> None:
        self._session.put(COLLECTION, product.id, self._to_raw(product))

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(product: Product) -> dict:
        return {
            "id": product.id,
            "name": product.name,
            "category": product.category,
            "price": str(product.price.amount),
            "offer_price": (
                str(product.offer_price.amount) if product.offer_price else None
            ),
            "currency": product.price.currency,
            "images": list(product.images),
            "in_stock": product.in_stock,
            "rating": product.rating,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        currency = raw.get("currency", DEFAULT_CURRENCY)
        offer = raw.get("offer_price")
        return Product(
            id=raw["id"],
            name=raw["name"],
            category=raw.get("category", ""),
            price=Money(Decimal(raw["price"]), currency),
            offer_price=Money(Decimal(offer), currency) if offer is not None else None,
            images=list(raw.get("images", [])),
            in_stock=raw.get("in_stock", True),
            rating=raw.get("rating", 0),
        )
