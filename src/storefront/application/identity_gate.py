"""Identity gate: turns a credential token into an authenticated Actor.

Token format and signing are the codec's business; the gate only cares
that a verified token yields an actor id and a role.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.exceptions import Unauthenticated
from storefront.domain.model.actor import Actor, Role


class TokenCodec(ABC):

    @abstractmethod
    def issue(self, actor_id: str, role: Role) -> str:
        """Return a signed token for the actor."""

    @abstractmethod
    def decode(self, token: str) -> Actor:
        """Verify ``token``; raise Unauthenticated if it is not valid."""


class IdentityGate:

    def __init__(self, codec: TokenCodec) -> None:
        self._codec = codec

    def resolve(self, token: str | None) -> Actor:
        if not token:
            raise Unauthenticated("Not authorized, login again")
        return self._codec.decode(token)

    def require_role(self, token: str | None, role: Role) -> Actor:
        """Resolve the token and check the actor holds ``role``."""
        actor = self.resolve(token)
        actor.require_role(role)
        return actor
