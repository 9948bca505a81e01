"""Authenticated actor identity.

Every application operation receives an ``Actor`` produced by the identity
gate and checks its role once, on entry.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from storefront.domain.exceptions import Forbidden


class Role(Enum):
    BUYER = "buyer"
    SELLER = "seller"


@dataclass(frozen=True)
class Actor:
    id: str
    role: Role

    def require_role(self, role: Role) -> None:
        """Raise Forbidden unless this actor holds ``role``."""
        if self.role is not role:
            raise Forbidden(
                f"This operation requires the {role.value} role"
            )

    @staticmethod
    def buyer(actor_id: str) -> Actor:
        return Actor(id=actor_id, role=Role.BUYER)

    @staticmethod
    def seller(actor_id: str) -> Actor:
        return Actor(id=actor_id, role=Role.SELLER)
