"""CLI command for issuing credential tokens in development."""

from __future__ import annotations

import click

from storefront.domain.model.actor import Role
from storefront.infrastructure.bootstrap import build_services


@click.command("issue")
@click.option("--actor-id", required=True, help="Buyer or seller id (token subject).")
@click.option(
    "--role",
    required=True,
    type=click.Choice([r.value for r in Role]),
    help="Role carried by the token.",
)
def token_issue(actor_id: str, role: str) -> None:
    """Print a signed token to send as the ``token`` cookie."""
    codec = build_services().tokens
    click.echo(codec.issue(actor_id, Role(role)))
