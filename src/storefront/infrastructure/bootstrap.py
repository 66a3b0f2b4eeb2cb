"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.

A ShopSession owns the per-session state (catalog snapshot, cart,
wishlist) explicitly; nothing lives in module globals, so each session
and each test gets its own isolated copy.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from storefront.application.add_to_cart import AddToCartHandler
from storefront.application.browse_catalog import BrowseCatalogHandler
from storefront.application.checkout import CheckoutHandler
from storefront.application.refresh_catalog import RefreshCatalogHandler
from storefront.application.remove_from_cart import RemoveFromCartHandler
from storefront.application.show_cart import ShowCartHandler
from storefront.application.toggle_wishlist import ToggleWishlistHandler
from storefront.application.update_cart_item import UpdateCartItemHandler
from storefront.domain.gateway.store_gateway import StoreGateway
from storefront.domain.model.cart import Cart
from storefront.domain.model.value_objects import TaxRate
from storefront.domain.model.wishlist import Wishlist
from storefront.infrastructure.config import Settings
from storefront.infrastructure.http.store_client import HttpStoreGateway
from storefront.infrastructure.persistence.in_memory_catalog import (
    InMemoryProductCatalog,
)

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def configure_logging(level: str) -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)


def store_gateway(settings: Settings) -> HttpStoreGateway:
    return HttpStoreGateway.from_settings(settings)


@dataclass
class ShopSession:
    settings: Settings
    gateway: StoreGateway
    catalog: InMemoryProductCatalog = field(default_factory=InMemoryProductCatalog)
    wishlist: Wishlist = field(default_factory=Wishlist)
    sort: str = "default"
    cart: Cart = field(init=False)

    def __post_init__(self) -> None:
        self.cart = Cart(self.catalog, TaxRate(self.settings.tax_rate))

    # --- Handler factories ----------------------------------------------------

    def refresh_catalog(self) -> RefreshCatalogHandler:
        return RefreshCatalogHandler(self.gateway, self.catalog, self.cart, self.wishlist)

    def browse_catalog(self) -> BrowseCatalogHandler:
        return BrowseCatalogHandler(self.catalog, self.wishlist)

    def add_to_cart(self) -> AddToCartHandler:
        return AddToCartHandler(
            self.cart,
            self.catalog,
            gateway=self.gateway,
            verify_stock=self.settings.verify_stock,
        )

    def update_cart_item(self) -> UpdateCartItemHandler:
        return UpdateCartItemHandler(self.cart, self.catalog)

    def remove_from_cart(self) -> RemoveFromCartHandler:
        return RemoveFromCartHandler(self.cart, self.catalog)

    def show_cart(self) -> ShowCartHandler:
        return ShowCartHandler(self.cart, self.catalog)

    def toggle_wishlist(self) -> ToggleWishlistHandler:
        return ToggleWishlistHandler(self.wishlist, self.catalog)

    def checkout(self) -> CheckoutHandler:
        return CheckoutHandler(
            self.cart, self.catalog, self.gateway, mode=self.settings.checkout_mode
        )


def shop_session(settings: Settings, gateway: StoreGateway | None = None) -> ShopSession:
    return ShopSession(settings=settings, gateway=gateway or store_gateway(settings))
