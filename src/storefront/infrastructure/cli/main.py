from __future__ import annotations

from decimal import Decimal, InvalidOperation

import click

from storefront.infrastructure.bootstrap import configure_logging
from storefront.infrastructure.cli.catalog_commands import catalog_list
from storefront.infrastructure.cli.session_commands import shop
from storefront.infrastructure.config import ConfigError, load_settings


@click.group()
@click.option("--api-url", default=None, help="Store backend base URL.")
@click.option("--tax-rate", default=None, help="Tax rate as a fraction (e.g. 0.18).")
@click.option(
    "--checkout-mode",
    type=click.Choice(["batch", "per-line"]),
    default=None,
    help="Submit the cart in one request or one request per line.",
)
@click.option(
    "--verify-stock",
    is_flag=True,
    default=False,
    help="Ask the backend to confirm stock before adding to the cart.",
)
@click.option("-v", "--verbose", is_flag=True, default=False, help="Debug logging.")
@click.pass_context
def cli(
    ctx: click.Context,
    api_url: str | None,
    tax_rate: str | None,
    checkout_mode: str | None,
    verify_stock: bool,
    verbose: bool,
) -> None:
    """Storefront: shop against a store backend from the terminal"""
    ctx.ensure_object(dict)
    try:
        settings = ctx.obj.get("settings") or load_settings()
        settings = settings.override(
            api_url=api_url.rstrip("/") if api_url else None,
            tax_rate=_parse_rate(tax_rate) if tax_rate is not None else None,
            checkout_mode=checkout_mode,
            verify_stock=True if verify_stock else None,
        )
    except ConfigError as exc:
        raise click.ClickException(str(exc))

    configure_logging("DEBUG" if verbose else settings.log_level)
    ctx.obj["settings"] = settings


@cli.group()
def catalog() -> None:
    """Browse the product catalog."""


def _parse_rate(raw: str) -> Decimal:
    try:
        rate = Decimal(raw)
    except InvalidOperation:
        raise ConfigError(f"Invalid tax rate '{raw}'")
    if not rate.is_finite():
        raise ConfigError(f"Invalid tax rate '{raw}'")
    return rate


# Register subcommands
catalog.add_command(catalog_list)
cli.add_command(shop)
