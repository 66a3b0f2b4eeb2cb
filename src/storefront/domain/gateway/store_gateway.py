"""Abstract gateway to the store backend.

The backend owns stock, orders and persistence. Every method either
succeeds or raises a DomainException subclass; implementations must
not leak transport-specific exceptions.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.product import Product


class StoreGateway(ABC):

    @abstractmethod
    def fetch_products(self) -> list[Product]:
        """Return the current catalog."""

    @abstractmethod
    def check_stock(self, product_id: int, quantity: int) -> None:
        """Ask the backend whether *quantity* more units can be reserved.

        Raises StockExceededError when the backend says no.
        """

    @abstractmethod
    def submit_order(self, line: dict) -> None:
        """Submit a single ``{"productId", "quantity"}`` order line."""

    @abstractmethod
    def submit_cart(self, lines: list[dict]) -> None:
        """Submit the whole serialized cart as one order."""

    def close(self) -> None:
        """Release any transport resources. No-op by default."""
