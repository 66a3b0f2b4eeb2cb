"""Application service: Remove From Cart use case."""

from __future__ import annotations

from storefront.application.dto import CartDTO
from storefront.application.mapping import cart_to_dto
from storefront.domain.model.cart import Cart
from storefront.domain.repository.catalog_repository import ProductCatalog


class RemoveFromCartHandler:

    def __init__(self, cart: Cart, catalog: ProductCatalog) -> None:
        self._cart = cart
        self._catalog = catalog

    def handle(self, product_id: int) -> CartDTO:
        self._cart.remove_item(product_id)
        return cart_to_dto(self._cart, self._catalog)
