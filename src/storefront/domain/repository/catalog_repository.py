"""Abstract repository for the cached product catalog.

Defined in the domain layer so the cart never depends on where the
snapshot came from. The concrete in-memory implementation lives in the
infrastructure layer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.product import Product


class ProductCatalog(ABC):

    @abstractmethod
    def get_by_id(self, product_id: int) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in the snapshot, in catalog order."""

    @abstractmethod
    def replace_all(self, products: list[Product]) -> None:
        """Swap the whole snapshot for a freshly fetched one."""
