"""HTTP implementation of StoreGateway, backed by httpx.

This is the deserialization boundary: backend records arrive with
inconsistent field casing (``id`` in some deployments, ``ID`` in
others) and are normalized into Product here, once. Every httpx error
and non-success status is turned into a NetworkFailureError so no
transport types leak past this module.
"""

from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation

import httpx

from storefront.domain.exceptions import (
    DomainException,
    NetworkFailureError,
    StockExceededError,
)
from storefront.domain.gateway.store_gateway import StoreGateway
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import DEFAULT_CURRENCY, Money
from storefront.infrastructure.config import Settings

logger = logging.getLogger(__name__)

# Statuses the stock-check endpoint uses to say "not enough stock"
_STOCK_REJECTED = (httpx.codes.BAD_REQUEST, httpx.codes.CONFLICT)


class _Rejected(NetworkFailureError):
    """Non-success HTTP status; carries the status for callers that care."""

    def __init__(self, status_code: int, detail: str) -> None:
        message = f"Store rejected the request ({status_code})"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail


class HttpStoreGateway(StoreGateway):

    def __init__(self, client: httpx.Client, settings: Settings) -> None:
        self._client = client
        self._settings = settings

    @classmethod
    def from_settings(cls, settings: Settings) -> HttpStoreGateway:
        client = httpx.Client(
            base_url=settings.api_url,
            timeout=settings.timeout,
            headers={"Accept": "application/json"},
        )
        return cls(client, settings)

    def close(self) -> None:
        self._client.close()

    # --- StoreGateway interface -----------------------------------------------

    def fetch_products(self) -> list[Product]:
        response = self._request("GET", self._settings.products_path)
        try:
            raw = response.json()
        except ValueError as exc:
            raise NetworkFailureError("Catalog response is not valid JSON") from exc

        # Some backends wrap the list: {"products": [...]}
        if isinstance(raw, dict) and "products" in raw:
            raw = raw["products"]
        if not isinstance(raw, list):
            raise NetworkFailureError("Catalog response is not a list of products")

        return [self._to_domain(item) for item in raw]

    def check_stock(self, product_id: int, quantity: int) -> None:
        try:
            self._request(
                "POST",
                self._settings.stock_check_path,
                json={"productId": product_id, "quantity": quantity},
            )
        except _Rejected as exc:
            if exc.status_code in _STOCK_REJECTED:
                raise StockExceededError(
                    exc.detail or f"Not enough stock for product #{product_id}"
                ) from exc
            raise NetworkFailureError(
                exc.detail or "Failed to verify stock availability"
            ) from exc

    def submit_order(self, line: dict) -> None:
        self._request("POST", self._settings.order_path, json=line)

    def submit_cart(self, lines: list[dict]) -> None:
        self._request("POST", self._settings.checkout_path, json=lines)

    # --- Transport ------------------------------------------------------------

    def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        logger.debug("%s %s %s", method, path, kwargs.get("json", ""))
        try:
            response = self._client.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise NetworkFailureError(f"Could not reach the store: {exc}") from exc

        if response.is_success:
            return response

        detail = response.text.strip()
        logger.warning("%s %s -> %d %s", method, path, response.status_code, detail)
        raise _Rejected(response.status_code, detail)

    # --- Deserialization ------------------------------------------------------

    def _to_domain(self, raw: object) -> Product:
        if not isinstance(raw, dict):
            raise NetworkFailureError(f"Malformed product record: {raw!r}")
        fields = {str(k).lower(): v for k, v in raw.items()}
        try:
            return Product(
                id=_whole_number(fields["id"]),
                name=str(fields["name"]),
                price=Money(
                    Decimal(str(fields["price"])),
                    fields.get("currency") or self._settings.currency or DEFAULT_CURRENCY,
                ),
                stock=_whole_number(fields.get("stock", 0)),
                category=str(fields.get("category") or ""),
            )
        except (KeyError, TypeError, ValueError, InvalidOperation, DomainException) as exc:
            raise NetworkFailureError(f"Malformed product record: {raw!r}") from exc



def _whole_number(value: object) -> int:
    if isinstance(value, bool):
        raise TypeError(f"expected a whole number, got {value!r}")
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"expected a whole number, got {value!r}")
        return int(value)
    return int(value)
