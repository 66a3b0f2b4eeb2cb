"""One-shot CLI commands for the product catalog."""

from __future__ import annotations

import click

from storefront.application.browse_catalog import SORT_KEYS
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import shop_session
from storefront.infrastructure.cli.display import display_products


@click.command("list")
@click.option("--search", "query", default="", help="Filter by name or category.")
@click.option("--sort", type=click.Choice(SORT_KEYS), default="default", help="Sort order.")
@click.pass_context
def catalog_list(ctx: click.Context, query: str, sort: str) -> None:
    """Fetch the catalog and list it."""
    session = shop_session(ctx.obj["settings"], ctx.obj.get("gateway"))

    try:
        session.refresh_catalog().handle()
        products = session.browse_catalog().handle(query=query, sort=sort)
    except DomainException as exc:
        raise click.ClickException(str(exc))
    finally:
        session.gateway.close()

    display_products(products)
