"""Product record.

Products are reference data owned by the store backend. The client only
ever holds a snapshot of them, replaced wholesale on each catalog fetch,
so the price and stock seen here are authoritative only until the next
round trip.
"""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import Money


@dataclass(frozen=True)
class Product:
    """A product as last reported by the catalog endpoint."""

    id: int
    name: str
    price: Money
    stock: int
    category: str = ""

    def __post_init__(self) -> None:
        if not isinstance(self.id, int) or isinstance(self.id, bool):
            raise ValidationError(f"Product ID must be an integer, got {self.id!r}")
        if not self.name or not self.name.strip():
            raise ValidationError(f"Product #{self.id} has no name")
        if not isinstance(self.stock, int) or self.stock < 0:
            raise ValidationError(
                f"Stock for {self.name} must be a non-negative integer, got {self.stock!r}"
            )

    @property
    def in_stock(self) -> bool:
        return self.stock > 0
