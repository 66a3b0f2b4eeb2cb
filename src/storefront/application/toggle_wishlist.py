"""Application service: Toggle Wishlist use case."""

from __future__ import annotations

from storefront.domain.exceptions import UnknownProductError
from storefront.domain.model.wishlist import Wishlist
from storefront.domain.repository.catalog_repository import ProductCatalog


class ToggleWishlistHandler:

    def __init__(self, wishlist: Wishlist, catalog: ProductCatalog) -> None:
        self._wishlist = wishlist
        self._catalog = catalog

    def handle(self, product_id: int) -> bool:
        """Return True if the product is wishlisted after the toggle."""
        if product_id not in self._wishlist and self._catalog.get_by_id(product_id) is None:
            raise UnknownProductError(f"Product #{product_id} not found in catalog")
        return self._wishlist.toggle(product_id)
