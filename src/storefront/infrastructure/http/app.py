"""FastAPI application factory."""

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import Services, build_services
from storefront.infrastructure.http.errors import (
    domain_exception_handler,
    unhandled_exception_handler,
    validation_exception_handler,
)
from storefront.infrastructure.http.routes import (
    address_router,
    cart_router,
    order_router,
    product_router,
)


def create_app(services: Services | None = None) -> FastAPI:
    services = services or build_services()

    app = FastAPI(title="Storefront API")
    app.state.services = services

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(services.settings.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(DomainException, domain_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    app.include_router(cart_router)
    app.include_router(order_router)
    app.include_router(address_router)
    app.include_router(product_router)

    @app.get("/")
    def read_root() -> dict:
        return {"message": "Storefront API is running"}

    return app
