"""In-memory implementation of ProductCatalog.

Holds the most recent catalog fetch for the lifetime of the session.
Nothing is written to disk.
"""

from __future__ import annotations

from storefront.domain.model.product import Product
from storefront.domain.repository.catalog_repository import ProductCatalog


class InMemoryProductCatalog(ProductCatalog):

    def __init__(self, products: list[Product] | None = None) -> None:
        self._store: dict[int, Product] = {}
        self.replace_all(products or [])

    # --- ProductCatalog interface ---------------------------------------------

    def get_by_id(self, product_id: int) -> Product | None:
        return self._store.get(product_id)

    def list_all(self) -> list[Product]:
        return list(self._store.values())

    def replace_all(self, products: list[Product]) -> None:
        # dicts keep insertion order, so catalog order survives
        self._store = {p.id: p for p in products}
