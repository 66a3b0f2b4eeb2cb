"""Runtime settings, read once from the environment.

A ``.env`` file in the working directory is loaded first if present;
real environment variables win over it.
"""

from __future__ import annotations

import math
import os
from dataclasses import dataclass, replace
from decimal import Decimal, InvalidOperation

from dotenv import find_dotenv, load_dotenv

_PREFIX = "STOREFRONT_"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigError(ValueError):
    """An environment variable holds a value that cannot be used."""


def _get_env(key: str, default: str) -> str:
    v = os.getenv(_PREFIX + key)
    if v is None or v.strip() == "":
        return default
    return v.strip()


def _get_bool(key: str, default: bool) -> bool:
    v = _get_env(key, str(default)).lower()
    if v in _TRUE:
        return True
    if v in _FALSE:
        return False
    raise ConfigError(f"{_PREFIX}{key} must be a boolean, got {v!r}")


def _get_decimal(key: str, default: str) -> Decimal:
    v = _get_env(key, default)
    try:
        value = Decimal(v)
    except InvalidOperation as exc:
        raise ConfigError(f"{_PREFIX}{key} must be a number, got {v!r}") from exc
    if not value.is_finite():
        raise ConfigError(f"{_PREFIX}{key} must be a finite number, got {v!r}")
    return value


def _get_float(key: str, default: float) -> float:
    v = _get_env(key, str(default))
    try:
        value = float(v)
    except ValueError as exc:
        raise ConfigError(f"{_PREFIX}{key} must be a number, got {v!r}") from exc
    if not math.isfinite(value):
        raise ConfigError(f"{_PREFIX}{key} must be a finite number, got {v!r}")
    return value


@dataclass(frozen=True)
class Settings:
    api_url: str = "http://localhost:8080"
    products_path: str = "/api/products"
    checkout_path: str = "/api/checkout"
    order_path: str = "/api/orders"
    stock_check_path: str = "/check-stock"
    tax_rate: Decimal = Decimal("0.18")
    currency: str = "INR"
    checkout_mode: str = "batch"
    verify_stock: bool = False
    timeout: float = 10.0
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        if self.checkout_mode not in ("batch", "per-line"):
            raise ConfigError(
                f"checkout mode must be 'batch' or 'per-line', got {self.checkout_mode!r}"
            )
        if not self.tax_rate.is_finite() or not Decimal("0") <= self.tax_rate < Decimal("1"):
            raise ConfigError(f"tax rate must be in [0, 1), got {self.tax_rate}")
        if not math.isfinite(self.timeout) or self.timeout <= 0:
            raise ConfigError(f"timeout must be positive, got {self.timeout}")
        if self.log_level not in LOG_LEVELS:
            raise ConfigError(
                f"log level must be one of {', '.join(LOG_LEVELS)}, got {self.log_level!r}"
            )

    def override(self, **changes) -> Settings:
        """Return a copy with the non-None values in *changes* applied."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})


def load_settings() -> Settings:
    load_dotenv(find_dotenv(usecwd=True))
    return Settings(
        api_url=_get_env("API_URL", Settings.api_url).rstrip("/"),
        products_path=_get_env("PRODUCTS_PATH", Settings.products_path),
        checkout_path=_get_env("CHECKOUT_PATH", Settings.checkout_path),
        order_path=_get_env("ORDER_PATH", Settings.order_path),
        stock_check_path=_get_env("STOCK_CHECK_PATH", Settings.stock_check_path),
        tax_rate=_get_decimal("TAX_RATE", str(Settings.tax_rate)),
        currency=_get_env("CURRENCY", Settings.currency).upper(),
        checkout_mode=_get_env("CHECKOUT_MODE", Settings.checkout_mode).lower(),
        verify_stock=_get_bool("VERIFY_STOCK", Settings.verify_stock),
        timeout=_get_float("TIMEOUT", Settings.timeout),
        log_level=_get_env("LOG_LEVEL", Settings.log_level).upper(),
    )
