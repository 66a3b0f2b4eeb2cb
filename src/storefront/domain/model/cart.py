"""Cart aggregate, the core of the client.

The Cart owns its entries and enforces the stock-bound quantity rules
against the catalog snapshot it was given. It is created empty, lives
only as long as the shop session, and is never persisted.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from storefront.domain.exceptions import (
    InvalidQuantityError,
    StockExceededError,
    UnknownProductError,
    ValidationError,
)
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import (
    DEFAULT_CURRENCY,
    Money,
    Quantity,
    TaxRate,
)
from storefront.domain.repository.catalog_repository import ProductCatalog

logger = logging.getLogger(__name__)


@dataclass
class CartEntry:
    """One (product, quantity) pairing held client-side until checkout.

    Only the product ID is kept; price and stock are always read from
    the catalog snapshot so a refresh is reflected immediately.
    """

    product_id: int
    quantity: Quantity

    def to_payload(self) -> dict:
        return {"productId": self.product_id, "quantity": self.quantity.value}


@dataclass(frozen=True)
class CartSummary:
    subtotal: Money
    tax: Money
    total: Money
    item_count: int


class Cart:
    """Aggregate root for the shopping cart.

    Invariants:
    - at most one entry per product ID
    - every entry satisfies ``0 < quantity <= product.stock`` against the
      snapshot at the time of the last mutation
    - a failed mutation leaves the cart exactly as it was
    """

    def __init__(self, catalog: ProductCatalog, tax_rate: TaxRate | None = None) -> None:
        self._catalog = catalog
        self._tax_rate = tax_rate if tax_rate is not None else TaxRate.none()
        self._entries: list[CartEntry] = []

    # --- Mutations ------------------------------------------------------------

    def add_item(self, product_id: int, quantity: int) -> CartSummary:
        """Add *quantity* units, merging with an existing entry if present."""
        combined = self.check_add(product_id, quantity)

        existing = self._find_entry(product_id)
        if existing:
            existing.quantity = combined
        else:
            self._entries.append(CartEntry(product_id=product_id, quantity=combined))

        logger.debug("Cart: product #%d now x%d", product_id, combined.value)
        return self.compute_summary()

    def check_add(self, product_id: int, quantity: int) -> Quantity:
        """Validate an add without applying it.

        Returns the quantity the entry would hold afterwards.
        """
        requested = Quantity(quantity)
        product = self._resolve(product_id)
        self._assert_same_currency(product)

        existing = self._find_entry(product_id)
        combined = requested + existing.quantity if existing else requested
        self._assert_within_stock(product, combined.value)
        return combined

    def update_quantity(self, product_id: int, new_quantity: int) -> CartSummary:
        """Replace an entry's quantity; zero or less removes it."""
        if not isinstance(new_quantity, int) or isinstance(new_quantity, bool):
            raise InvalidQuantityError(
                f"Quantity must be an integer, got {type(new_quantity).__name__}"
            )

        if new_quantity <= 0:
            self.remove_item(product_id)
            return self.compute_summary()

        entry = self._find_entry(product_id)
        if entry is None:
            raise UnknownProductError(f"Product #{product_id} is not in the cart")

        product = self._resolve(product_id)
        self._assert_within_stock(product, new_quantity)
        entry.quantity = Quantity(new_quantity)
        return self.compute_summary()

    def remove_item(self, product_id: int) -> None:
        """Remove an entry. Removing an absent product is a no-op."""
        self._entries = [e for e in self._entries if e.product_id != product_id]

    def clear(self) -> None:
        self._entries = []

    def reconcile(self) -> list[int]:
        """Re-check entries against a freshly replaced catalog snapshot.

        Entries whose product disappeared are dropped. Entries that now
        exceed stock are kept as-is (the backend re-validates at checkout)
        and their product IDs are returned.
        """
        kept: list[CartEntry] = []
        over_stock: list[int] = []
        for entry in self._entries:
            product = self._catalog.get_by_id(entry.product_id)
            if product is None:
                logger.info("Dropping product #%d from cart: no longer listed", entry.product_id)
                continue
            if entry.quantity.value > product.stock:
                over_stock.append(entry.product_id)
            kept.append(entry)
        self._entries = kept
        return over_stock

    # --- Queries --------------------------------------------------------------

    def compute_summary(self) -> CartSummary:
        """Subtotal, tax, total and item count at current catalog prices."""
        subtotal = Money.zero(self._currency())
        item_count = 0
        for entry in self._entries:
            product = self._resolve(entry.product_id)
            subtotal = subtotal + product.price * entry.quantity.value
            item_count += entry.quantity.value

        subtotal = subtotal.rounded()
        tax = subtotal.apply_rate(self._tax_rate)
        return CartSummary(
            subtotal=subtotal,
            tax=tax,
            total=subtotal + tax,
            item_count=item_count,
        )

    def serialize_for_checkout(self) -> list[dict]:
        """Order-submission payload: one record per entry, in cart order."""
        return [entry.to_payload() for entry in self._entries]

    def quantity_of(self, product_id: int) -> int:
        entry = self._find_entry(product_id)
        return entry.quantity.value if entry else 0

    @property
    def entries(self) -> list[CartEntry]:
        return list(self._entries)

    @property
    def tax_rate(self) -> TaxRate:
        return self._tax_rate

    @property
    def is_empty(self) -> bool:
        return not self._entries

    def __len__(self) -> int:
        return len(self._entries)

    # --- Internal helpers -----------------------------------------------------

    def _resolve(self, product_id: int) -> Product:
        product = self._catalog.get_by_id(product_id)
        if product is None:
            raise UnknownProductError(f"Product #{product_id} not found in catalog")
        return product

    def _find_entry(self, product_id: int) -> CartEntry | None:
        for entry in self._entries:
            if entry.product_id == product_id:
                return entry
        return None

    def _currency(self) -> str:
        for entry in self._entries:
            product = self._catalog.get_by_id(entry.product_id)
            if product is not None:
                return product.price.currency
        products = self._catalog.list_all()
        return products[0].price.currency if products else DEFAULT_CURRENCY

    def _assert_same_currency(self, product: Product) -> None:
        if self._entries and product.price.currency != self._currency():
            raise ValidationError(
                f"Cannot add {product.name}: priced in {product.price.currency}, "
                f"cart is in {self._currency()}"
            )

    @staticmethod
    def _assert_within_stock(product: Product, quantity: int) -> None:
        if quantity > product.stock:
            raise StockExceededError(
                f"Not enough stock for {product.name} "
                f"(requested {quantity}, {product.stock} available)"
            )
