"""Tests for environment-driven settings."""

import os
from decimal import Decimal

import pytest

from storefront.infrastructure.config import ConfigError, Settings, load_settings

_VARS = (
    "API_URL", "PRODUCTS_PATH", "CHECKOUT_PATH", "ORDER_PATH", "STOCK_CHECK_PATH",
    "TAX_RATE", "CURRENCY", "CHECKOUT_MODE", "VERIFY_STOCK", "TIMEOUT", "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for name in _VARS:
        monkeypatch.delenv(f"STOREFRONT_{name}", raising=False)
    # keep a stray .env in the repo from leaking in
    monkeypatch.chdir(tmp_path)


class TestLoadSettings:

    def test_defaults(self):
        s = load_settings()
        assert s.api_url == "http://localhost:8080"
        assert s.tax_rate == Decimal("0.18")
        assert s.checkout_mode == "batch"
        assert s.verify_stock is False
        assert s.log_level == "WARNING"

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("STOREFRONT_API_URL", "http://shop.test:9000/")
        monkeypatch.setenv("STOREFRONT_TAX_RATE", "0")
        monkeypatch.setenv("STOREFRONT_CHECKOUT_MODE", "PER-LINE")
        monkeypatch.setenv("STOREFRONT_VERIFY_STOCK", "yes")
        monkeypatch.setenv("STOREFRONT_TIMEOUT", "2.5")
        s = load_settings()
        assert s.api_url == "http://shop.test:9000"
        assert s.tax_rate == Decimal("0")
        assert s.checkout_mode == "per-line"
        assert s.verify_stock is True
        assert s.timeout == 2.5

    def test_dotenv_file_is_read(self, tmp_path):
        (tmp_path / ".env").write_text("STOREFRONT_CURRENCY=usd\n", encoding="utf-8")
        try:
            assert load_settings().currency == "USD"
        finally:
            # load_dotenv writes straight into os.environ
            os.environ.pop("STOREFRONT_CURRENCY", None)

    def test_log_level_is_case_insensitive(self, monkeypatch):
        monkeypatch.setenv("STOREFRONT_LOG_LEVEL", "debug")
        assert load_settings().log_level == "DEBUG"

    @pytest.mark.parametrize("name,value", [
        ("TAX_RATE", "eighteen"),
        ("TAX_RATE", "1.5"),
        ("CHECKOUT_MODE", "parallel"),
        ("VERIFY_STOCK", "maybe"),
        ("TIMEOUT", "0"),
        ("TAX_RATE", "nan"),
        ("TAX_RATE", "Infinity"),
        ("TIMEOUT", "nan"),
        ("TIMEOUT", "inf"),
        ("LOG_LEVEL", "LOUD"),
    ])
    def test_invalid_values_rejected(self, monkeypatch, name, value):
        monkeypatch.setenv(f"STOREFRONT_{name}", value)
        with pytest.raises(ConfigError):
            load_settings()


class TestOverride:

    def test_none_values_are_ignored(self):
        s = Settings().override(api_url=None, checkout_mode="per-line")
        assert s.api_url == "http://localhost:8080"
        assert s.checkout_mode == "per-line"

    @pytest.mark.parametrize("field,value", [
        ("tax_rate", Decimal("NaN")),
        ("timeout", float("nan")),
        ("log_level", "verbose"),
    ])
    def test_invalid_values_rejected(self, field, value):
        with pytest.raises(ConfigError):
            Settings().override(**{field: value})
