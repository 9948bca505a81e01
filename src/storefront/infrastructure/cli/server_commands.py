"""CLI commands for running the HTTP server and seeding demo data."""

from __future__ import annotations

import click
import uvicorn

from storefront.domain.model.actor import Actor
from storefront.infrastructure.bootstrap import build_services
from storefront.infrastructure.seed import seed_catalog


@click.command("seed")
def seed() -> None:
    """Add demo products if the catalog is empty."""
    created = seed_catalog(build_services().unit_of_work(), Actor.seller("cli"))
    if created:
        click.echo(f"Seeded {created} products.")
    else:
        click.echo("Products already exist; nothing seeded.")


@click.command("serve")
@click.option("--host", default="0.0.0.0", show_default=True)
@click.option("--port", default=5000, type=int, show_default=True)
def serve(host: str, port: int) -> None:
    """Run the HTTP API."""
    uvicorn.run(
        "storefront.infrastructure.http.app:create_app",
        factory=True,
        host=host,
        port=port,
        log_config=None,
    )
