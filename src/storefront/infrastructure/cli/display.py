"""Shared table formatting for the CLI."""

from __future__ import annotations

import click

from storefront.application.dto import CartDTO, ProductDTO


def display_products(products: list[ProductDTO]) -> None:
    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Name':<24} {'Category':<14} {'Price':>10} {'Stock':>6}")
    click.echo("-" * 64)
    for p in products:
        marker = " *" if p.wishlisted else ""
        stock = p.stock if p.in_stock else "out"
        click.echo(
            f"{p.id:<6} {p.name + marker:<24} {p.category:<14} {p.price:>10} {stock:>6}"
        )


def display_cart(dto: CartDTO) -> None:
    if not dto.lines:
        click.echo("Your cart is empty.")
        return

    click.echo(f"  {'ID':<5} {'Product':<20} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*53}")
    for line in dto.lines:
        click.echo(
            f"  {line.product_id:<5} {line.product_name:<20} {line.quantity:>5} "
            f"{line.unit_price:>10} {line.line_total:>10}"
        )
    click.echo(f"  {'-'*53}")
    click.echo(f"  {'Subtotal':<33} {dto.subtotal:>20}")
    click.echo(f"  {'Tax (' + dto.tax_rate + ')':<33} {dto.tax:>20}")
    click.echo(f"  {'Total':<33} {dto.total:>20}")
    click.echo(f"  {'Items':<33} {dto.item_count:>20}")
