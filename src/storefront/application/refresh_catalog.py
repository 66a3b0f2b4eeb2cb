"""Application service: Refresh Catalog use case.

Fetches the product list from the backend, swaps it into the local
snapshot, and re-checks the cart against the new stock figures.
"""

from __future__ import annotations

import logging

from storefront.application.dto import CatalogRefreshDTO
from storefront.application.mapping import product_to_dto
from storefront.domain.gateway.store_gateway import StoreGateway
from storefront.domain.model.cart import Cart
from storefront.domain.model.wishlist import Wishlist
from storefront.domain.repository.catalog_repository import ProductCatalog

logger = logging.getLogger(__name__)


class RefreshCatalogHandler:

    def __init__(
        self,
        gateway: StoreGateway,
        catalog: ProductCatalog,
        cart: Cart,
        wishlist: Wishlist | None = None,
    ) -> None:
        self._gateway = gateway
        self._catalog = catalog
        self._cart = cart
        self._wishlist = wishlist

    def handle(self) -> CatalogRefreshDTO:
        products = self._gateway.fetch_products()
        self._catalog.replace_all(products)
        over_stock = self._cart.reconcile()

        if self._wishlist is not None:
            # Forget wishlisted products that are no longer listed
            self._wishlist.retain({p.id for p in products})

        logger.info("Catalog refreshed: %d products", len(products))
        if over_stock:
            logger.warning("Cart lines now above stock: %s", over_stock)

        return CatalogRefreshDTO(
            products=[product_to_dto(p, self._wishlist) for p in products],
            over_stock=over_stock,
        )
