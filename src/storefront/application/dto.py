"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals (Money, Quantity, the Cart itself) to the
outside world.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ProductDTO:
    """Output: a catalog product as displayed to the user."""

    id: int
    name: str
    category: str
    price: str  # formatted, e.g. "₹40.00"
    stock: int
    in_stock: bool
    wishlisted: bool = False


@dataclass(frozen=True)
class CartLineDTO:
    product_id: int
    product_name: str
    quantity: int
    unit_price: str
    line_total: str


@dataclass(frozen=True)
class CartDTO:
    """Output: the cart with its computed summary."""

    lines: list[CartLineDTO]
    subtotal: str
    tax: str
    tax_rate: str  # e.g. "18%"
    total: str
    item_count: int


@dataclass(frozen=True)
class CatalogRefreshDTO:
    products: list[ProductDTO]
    over_stock: list[int] = field(default_factory=list)


@dataclass(frozen=True)
class CheckoutResultDTO:
    mode: str
    submitted: list[int]
    total: str
    item_count: int
