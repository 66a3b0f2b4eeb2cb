"""Application service: Browse Catalog use case (query).

Search and sort run over the cached snapshot; they never hit the
backend.
"""

from __future__ import annotations

from storefront.application.dto import ProductDTO
from storefront.application.mapping import product_to_dto
from storefront.domain.exceptions import ValidationError
from storefront.domain.model.product import Product
from storefront.domain.model.wishlist import Wishlist
from storefront.domain.repository.catalog_repository import ProductCatalog

SORT_KEYS = ("default", "price-asc", "price-desc", "category")


class BrowseCatalogHandler:

    def __init__(self, catalog: ProductCatalog, wishlist: Wishlist | None = None) -> None:
        self._catalog = catalog
        self._wishlist = wishlist

    def handle(self, query: str = "", sort: str = "default") -> list[ProductDTO]:
        """List products matching *query* in name or category, sorted by *sort*."""
        if sort not in SORT_KEYS:
            raise ValidationError(
                f"Unknown sort '{sort}'. Expected one of: {', '.join(SORT_KEYS)}"
            )

        needle = query.strip().lower()
        products = [p for p in self._catalog.list_all() if self._matches(p, needle)]

        # sorted() is stable, so ties keep catalog order
        if sort == "price-asc":
            products = sorted(products, key=lambda p: p.price.amount)
        elif sort == "price-desc":
            products = sorted(products, key=lambda p: p.price.amount, reverse=True)
        elif sort == "category":
            products = sorted(products, key=lambda p: p.category.lower())

        return [product_to_dto(p, self._wishlist) for p in products]

    @staticmethod
    def _matches(product: Product, needle: str) -> bool:
        if not needle:
            return True
        return needle in product.name.lower() or needle in product.category.lower()
