"""Application service: Checkout use case.

Submits the cart to the backend's order API and clears it once the
backend has accepted everything.

Two submission modes:

- ``batch``: the whole serialized cart goes out in one request, so the
  backend can accept or reject it atomically.
- ``per-line``: one request per cart line, sent sequentially, each
  waiting for the previous response. This is best-effort and
  NON-ATOMIC: if a line fails, lines already accepted stay accepted on
  the backend. Those lines are removed from the local cart so a retry
  does not submit them twice, and the raised CheckoutIncompleteError
  says which product IDs went through and which were not sent.
"""

from __future__ import annotations

import logging

from storefront.application.dto import CheckoutResultDTO
from storefront.application.refresh_catalog import RefreshCatalogHandler
from storefront.domain.exceptions import (
    CheckoutIncompleteError,
    NetworkFailureError,
    ValidationError,
)
from storefront.domain.gateway.store_gateway import StoreGateway
from storefront.domain.model.cart import Cart
from storefront.domain.repository.catalog_repository import ProductCatalog

logger = logging.getLogger(__name__)

BATCH = "batch"
PER_LINE = "per-line"
CHECKOUT_MODES = (BATCH, PER_LINE)


class CheckoutHandler:

    def __init__(
        self,
        cart: Cart,
        catalog: ProductCatalog,
        gateway: StoreGateway,
        mode: str = BATCH,
    ) -> None:
        if mode not in CHECKOUT_MODES:
            raise ValidationError(
                f"Unknown checkout mode '{mode}'. Expected one of: {', '.join(CHECKOUT_MODES)}"
            )
        self._cart = cart
        self._catalog = catalog
        self._gateway = gateway
        self._mode = mode

    def handle(self) -> CheckoutResultDTO:
        if self._cart.is_empty:
            raise ValidationError("Your cart is empty")

        summary = self._cart.compute_summary()
        payload = self._cart.serialize_for_checkout()

        if self._mode == BATCH:
            self._gateway.submit_cart(payload)
        else:
            self._submit_line_by_line(payload)

        submitted = [line["productId"] for line in payload]
        self._cart.clear()
        logger.info("Checkout complete: %d lines, total %s", len(payload), summary.total)

        # Stock has changed on the backend; pick up the new figures.
        # The order is already placed, so a failed refresh is not a failed checkout.
        try:
            RefreshCatalogHandler(self._gateway, self._catalog, self._cart).handle()
        except NetworkFailureError as exc:
            logger.warning("Catalog refresh after checkout failed: %s", exc)

        return CheckoutResultDTO(
            mode=self._mode,
            submitted=submitted,
            total=str(summary.total),
            item_count=summary.item_count,
        )

    def _submit_line_by_line(self, payload: list[dict]) -> None:
        submitted: list[int] = []
        for line in payload:
            try:
                self._gateway.submit_order(line)
            except NetworkFailureError as exc:
                unsent = [p["productId"] for p in payload[len(submitted):]]
                for product_id in submitted:
                    self._cart.remove_item(product_id)
                logger.warning(
                    "Checkout stopped at product #%d: %s (submitted=%s, unsent=%s)",
                    line["productId"], exc, submitted, unsent,
                )
                raise CheckoutIncompleteError(
                    f"Checkout failed at product #{line['productId']}: {exc}",
                    submitted=submitted,
                    unsent=unsent,
                ) from exc
            submitted.append(line["productId"])
            logger.debug("Submitted order line %s", line)
