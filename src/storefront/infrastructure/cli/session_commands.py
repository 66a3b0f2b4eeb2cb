"""Interactive shop session.

``storefront shop`` fetches the catalog once, then reads one command
per line until ``quit`` or end of input. Each line is split with shlex
and dispatched through the ``session_cli`` click group, so commands run
strictly one after another against the same ShopSession. The cart
exists only for the lifetime of the session.
"""

from __future__ import annotations

import functools
import logging
import shlex

import click

from storefront.application.browse_catalog import SORT_KEYS
from storefront.domain.exceptions import CheckoutIncompleteError, DomainException
from storefront.infrastructure.bootstrap import ShopSession, shop_session
from storefront.infrastructure.cli.display import display_cart, display_products

logger = logging.getLogger(__name__)

QUIT_WORDS = ("quit", "exit", "q")


def _domain_errors(f):
    """Surface domain errors as click errors so the session can report them."""

    @functools.wraps(f)
    def wrapper(*args, **kwargs):
        try:
            return f(*args, **kwargs)
        except CheckoutIncompleteError as exc:
            raise click.ClickException(
                f"{exc}\n"
                f"  submitted: {_ids(exc.submitted)}\n"
                f"  not sent:  {_ids(exc.unsent)} (still in your cart)"
            )
        except DomainException as exc:
            raise click.ClickException(str(exc))

    return wrapper


def _ids(ids: list[int]) -> str:
    return ", ".join(f"#{i}" for i in ids) or "none"


# ---------------------------------------------------------------------------
# Commands available inside the session
# ---------------------------------------------------------------------------


@click.group(name="session", add_help_option=False)
def session_cli() -> None:
    """Commands: list, sort, add, update, remove, cart, wish, wishlist,
    refresh, checkout, help, quit."""


@session_cli.command("list")
@click.argument("query", nargs=-1)
@click.pass_obj
@_domain_errors
def list_products(session: ShopSession, query: tuple[str, ...]) -> None:
    """List products, optionally filtered by a search query."""
    products = session.browse_catalog().handle(query=" ".join(query), sort=session.sort)
    display_products(products)


@session_cli.command("sort")
@click.argument("key", type=click.Choice(SORT_KEYS))
@click.pass_obj
@_domain_errors
def sort_products(session: ShopSession, key: str) -> None:
    """Set the listing order."""
    session.sort = key
    display_products(session.browse_catalog().handle(sort=key))


@session_cli.command("add")
@click.argument("product_id", type=int)
@click.argument("quantity", type=int, default=1)
@click.pass_obj
@_domain_errors
def add(session: ShopSession, product_id: int, quantity: int) -> None:
    """Add QUANTITY (default 1) of a product to the cart."""
    dto = session.add_to_cart().handle(product_id, quantity)
    click.echo(f"Added {quantity} x #{product_id}. Cart: {dto.item_count} items, {dto.total}")


@session_cli.command("update")
@click.argument("product_id", type=int)
@click.argument("quantity", type=int)
@click.pass_obj
@_domain_errors
def update(session: ShopSession, product_id: int, quantity: int) -> None:
    """Set a cart line's quantity (0 removes it)."""
    dto = session.update_cart_item().handle(product_id, quantity)
    display_cart(dto)


@session_cli.command("remove")
@click.argument("product_id", type=int)
@click.pass_obj
@_domain_errors
def remove(session: ShopSession, product_id: int) -> None:
    """Remove a product from the cart."""
    dto = session.remove_from_cart().handle(product_id)
    display_cart(dto)


@session_cli.command("cart")
@click.pass_obj
@_domain_errors
def show_cart(session: ShopSession) -> None:
    """Show the cart with subtotal, tax and total."""
    display_cart(session.show_cart().handle())


@session_cli.command("wish")
@click.argument("product_id", type=int)
@click.pass_obj
@_domain_errors
def wish(session: ShopSession, product_id: int) -> None:
    """Add a product to the wishlist, or remove it if already there."""
    if session.toggle_wishlist().handle(product_id):
        click.echo(f"#{product_id} added to wishlist.")
    else:
        click.echo(f"#{product_id} removed from wishlist.")


@session_cli.command("wishlist")
@click.pass_obj
@_domain_errors
def show_wishlist(session: ShopSession) -> None:
    """List wishlisted products."""
    products = [
        p for p in session.browse_catalog().handle(sort=session.sort) if p.wishlisted
    ]
    if not products:
        click.echo("Your wishlist is empty.")
        return
    display_products(products)


@session_cli.command("refresh")
@click.pass_obj
@_domain_errors
def refresh(session: ShopSession) -> None:
    """Fetch the catalog again."""
    result = session.refresh_catalog().handle()
    click.echo(f"Catalog refreshed: {len(result.products)} products.")
    if result.over_stock:
        click.echo(f"Warning: cart quantities now exceed stock for {_ids(result.over_stock)}")


@session_cli.command("checkout")
@click.pass_obj
@_domain_errors
def checkout(session: ShopSession) -> None:
    """Place the order."""
    result = session.checkout().handle()
    click.echo(f"Order placed: {result.item_count} items, {result.total}.")


@session_cli.command("help")
def show_help() -> None:
    """Show available commands."""
    for name, command in session_cli.commands.items():
        click.echo(f"  {name:<10} {command.get_short_help_str(60)}")
    click.echo(f"  {'quit':<10} End the session.")


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def run_line(session: ShopSession, line: str) -> None:
    """Parse and run one session command, reporting errors inline."""
    try:
        args = shlex.split(line)
    except ValueError as exc:
        click.echo(f"Error: {exc}", err=True)
        return
    if not args:
        return

    try:
        session_cli.main(args=args, prog_name="", obj=session, standalone_mode=False)
    except click.ClickException as exc:
        exc.show()


@click.command("shop")
@click.pass_context
def shop(ctx: click.Context) -> None:
    """Start an interactive shopping session."""
    session = shop_session(ctx.obj["settings"], ctx.obj.get("gateway"))

    try:
        try:
            result = session.refresh_catalog().handle()
        except DomainException as exc:
            raise click.ClickException(f"Failed to load products: {exc}")

        click.echo(f"{len(result.products)} products loaded. Type 'help' for commands.")
        while True:
            try:
                line = click.prompt("shop", default="", show_default=False, prompt_suffix="> ")
            except click.Abort:
                click.echo()
                break
            if line.strip().lower() in QUIT_WORDS:
                break
            run_line(session, line)
    finally:
        session.gateway.close()

    if not session.cart.is_empty:
        logger.info("Session ended with %d unsubmitted cart lines", len(session.cart))
