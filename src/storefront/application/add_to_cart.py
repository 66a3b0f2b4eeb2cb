"""Application service: Add To Cart use case.

Validates against the local snapshot first so obviously bad requests
never reach the network, optionally asks the backend to confirm stock,
then commits to the cart. The commit runs the cart's own checks again,
so whatever the backend said, the cart invariants still hold.
"""

from __future__ import annotations

import logging

from storefront.application.dto import CartDTO
from storefront.application.mapping import cart_to_dto
from storefront.domain.gateway.store_gateway import StoreGateway
from storefront.domain.model.cart import Cart
from storefront.domain.repository.catalog_repository import ProductCatalog

logger = logging.getLogger(__name__)


class AddToCartHandler:

    def __init__(
        self,
        cart: Cart,
        catalog: ProductCatalog,
        gateway: StoreGateway | None = None,
        verify_stock: bool = False,
    ) -> None:
        self._cart = cart
        self._catalog = catalog
        self._gateway = gateway
        self._verify_stock = verify_stock

    def handle(self, product_id: int, quantity: int = 1) -> CartDTO:
        self._cart.check_add(product_id, quantity)

        if self._verify_stock and self._gateway is not None:
            logger.debug("Verifying stock for #%d x%d", product_id, quantity)
            self._gateway.check_stock(product_id, quantity)

        self._cart.add_item(product_id, quantity)
        return cart_to_dto(self._cart, self._catalog)
