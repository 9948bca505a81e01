"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from dataclasses import dataclass

from storefront.application.identity_gate import IdentityGate
from storefront.application.locking import KeyedLock
from storefront.infrastructure.auth.jwt_codec import JwtTokenCodec
from storefront.infrastructure.config import Settings
from storefront.infrastructure.persistence.document_store import DocumentStore
from storefront.infrastructure.persistence.json_unit_of_work import JsonUnitOfWork


@dataclass
class Services:
    """Process-wide singletons.

    The store and the lock tables must be shared by every request: they are
    what serializes writers. Cart locks are keyed by buyer id, order and
    product locks by document id. Units of work are cheap and made per use.
    """

    settings: Settings
    store: DocumentStore
    cart_locks: KeyedLock
    order_locks: KeyedLock
    product_locks: KeyedLock
    tokens: JwtTokenCodec
    identity_gate: IdentityGate

    def unit_of_work(self) -> JsonUnitOfWork:
        return JsonUnitOfWork(self.store)


def build_services(settings: Settings | None = None) -> Services:
    settings = settings or Settings.from_env()
    tokens = JwtTokenCodec(
        secret=settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        ttl_days=settings.token_ttl_days,
    )
    return Services(
        settings=settings,
        store=DocumentStore(settings.data_file, timeout=settings.storage_timeout),
        cart_locks=KeyedLock(timeout=settings.storage_timeout),
        order_locks=KeyedLock(timeout=settings.storage_timeout),
        product_locks=KeyedLock(timeout=settings.storage_timeout),
        tokens=tokens,
        identity_gate=IdentityGate(tokens),
    )
