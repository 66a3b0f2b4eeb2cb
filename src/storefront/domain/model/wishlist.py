"""Wishlist: products the shopper wants to remember, with no quantity."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class Wishlist:

    product_ids: list[int] = field(default_factory=list)

    def toggle(self, product_id: int) -> bool:
        """Add the product if absent, remove it if present.

        Returns True if the product is on the wishlist afterwards.
        """
        if product_id in self.product_ids:
            self.product_ids.remove(product_id)
            return False
        self.product_ids.append(product_id)
        return True

    def __contains__(self, product_id: object) -> bool:
        return product_id in self.product_ids

    def __len__(self) -> int:
        return len(self.product_ids)

    def retain(self, product_ids: set[int]) -> None:
        """Drop every wishlisted product not in *product_ids*."""
        self.product_ids = [pid for pid in self.product_ids if pid in product_ids]
