"""FastAPI dependencies: services lookup and caller identity.

Buyers and sellers log in separately and the client keeps one cookie per
role: ``token`` for the buyer and ``sellerToken`` for the seller. Each
endpoint reads the cookie of the role it serves first.
"""

from typing import Annotated

from fastapi import Cookie, Depends, Request

from storefront.domain.model.actor import Actor
from storefront.infrastructure.bootstrap import Services


def get_services(request: Request) -> Services:
    return request.app.state.services


def current_actor(
    services: Annotated[Services, Depends(get_services)],
    token: Annotated[str | None, Cookie()] = None,
    seller_token: Annotated[str | None, Cookie(alias="sellerToken")] = None,
) -> Actor:
    """Resolve the credential cookie; the operation itself checks the role."""
    return services.identity_gate.resolve(token or seller_token)


def current_seller(
    services: Annotated[Services, Depends(get_services)],
    token: Annotated[str | None, Cookie()] = None,
    seller_token: Annotated[str | None, Cookie(alias="sellerToken")] = None,
) -> Actor:
    return services.identity_gate.resolve(seller_token or token)


ServicesDep = Annotated[Services, Depends(get_services)]
ActorDep = Annotated[Actor, Depends(current_actor)]
SellerDep = Annotated[Actor, Depends(current_seller)]
