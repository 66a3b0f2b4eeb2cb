"""CLI tests: drive the click commands with CliRunner and a fake gateway."""

from decimal import Decimal

import pytest
from click.testing import CliRunner

from storefront.infrastructure.cli.main import cli
from storefront.infrastructure.config import Settings
from tests.fakes import FakeStoreGateway


@pytest.fixture
def gateway():
    return FakeStoreGateway()


def _run(gateway, args, input=None, **settings):
    obj = {"settings": Settings(**settings), "gateway": gateway}
    return CliRunner().invoke(cli, args, input=input, obj=obj)


class TestCatalogList:

    def test_lists_products(self, gateway):
        result = _run(gateway, ["catalog", "list"])
        assert result.exit_code == 0, result.output
        assert "Laptop" in result.output
        assert "₹120.50" in result.output
        assert gateway.closed

    def test_search_and_sort(self, gateway):
        result = _run(gateway, ["catalog", "list", "--search", "accessories", "--sort", "price-desc"])
        assert result.exit_code == 0, result.output
        assert result.output.index("Keyboard") < result.output.index("Mouse")
        assert "Laptop" not in result.output

    def test_network_failure_is_reported(self, gateway):
        gateway.fail_fetch = True
        result = _run(gateway, ["catalog", "list"])
        assert result.exit_code == 1
        assert "Could not reach the store" in result.output


class TestShopSession:

    def test_add_view_and_checkout(self, gateway):
        script = "add 1 3\nadd 2 2\ncart\ncheckout\nquit\n"
        result = _run(gateway, ["shop"], input=script)
        assert result.exit_code == 0, result.output
        assert "4 products loaded" in result.output
        assert "₹140.00" in result.output
        assert "₹25.20" in result.output
        assert "Order placed: 5 items, ₹165.20." in result.output
        assert gateway.carts == [[
            {"productId": 1, "quantity": 3},
            {"productId": 2, "quantity": 2},
        ]]
        assert gateway.closed

    def test_zero_tax_rate_option(self, gateway):
        script = "add 1 3\nadd 2 2\ncheckout\n"
        result = CliRunner().invoke(
            cli,
            ["--tax-rate", "0", "shop"],
            input=script,
            obj={"settings": Settings(), "gateway": gateway},
        )
        assert result.exit_code == 0, result.output
        assert "Order placed: 5 items, ₹140.00." in result.output

    def test_errors_do_not_end_the_session(self, gateway):
        script = "add 2 9\nadd 99\nadd x\nbogus\nadd 2 1\ncart\n"
        result = _run(gateway, ["shop"], input=script)
        assert result.exit_code == 0, result.output
        assert "Not enough stock for Mouse" in result.output
        assert "Product #99 not found" in result.output
        assert "No such command" in result.output
        assert "Added 1 x #2" in result.output

    def test_update_and_remove(self, gateway):
        script = "add 1 2\nadd 4 1\nupdate 1 0\nremove 4\ncart\n"
        result = _run(gateway, ["shop"], input=script)
        assert result.exit_code == 0, result.output
        # shown once by "remove", once by "cart"
        assert result.output.count("Your cart is empty.") == 2

    def test_empty_cart_checkout(self, gateway):
        result = _run(gateway, ["shop"], input="checkout\n")
        assert "Your cart is empty" in result.output
        assert gateway.carts == []

    def test_partial_per_line_checkout_is_reported(self, gateway):
        gateway.fail_order_for.add(2)
        script = "add 1 1\nadd 2 1\nadd 4 1\ncheckout\ncart\n"
        result = _run(gateway, ["shop"], input=script, checkout_mode="per-line")
        assert "submitted: #1" in result.output
        assert "not sent:  #2, #4" in result.output
        assert gateway.orders == [{"productId": 1, "quantity": 1}]

    def test_wishlist(self, gateway):
        script = "wish 4\nwishlist\nwish 4\nwishlist\n"
        result = _run(gateway, ["shop"], input=script)
        assert "#4 added to wishlist." in result.output
        assert "Keyboard *" in result.output
        assert "#4 removed from wishlist." in result.output
        assert "Your wishlist is empty." in result.output

    def test_verify_stock_flag(self, gateway):
        gateway.reject_stock_for.add(1)
        result = _run(gateway, ["shop"], input="add 1 1\n", verify_stock=True)
        assert "Insufficient stock" in result.output
        assert gateway.stock_checks == [(1, 1)]

    def test_catalog_load_failure_aborts(self, gateway):
        gateway.fail_fetch = True
        result = _run(gateway, ["shop"], input="quit\n")
        assert result.exit_code == 1
        assert "Failed to load products" in result.output

    def test_help_lists_commands(self, gateway):
        result = _run(gateway, ["shop"], input="help\n")
        for name in ("add", "update", "remove", "cart", "checkout", "quit"):
            assert f"  {name}" in result.output


class TestGlobalOptions:

    def test_invalid_tax_rate(self, gateway):
        result = CliRunner().invoke(
            cli, ["--tax-rate", "2", "catalog", "list"],
            obj={"settings": Settings(), "gateway": gateway},
        )
        assert result.exit_code == 1
        assert "tax rate" in result.output

    @pytest.mark.parametrize("rate", ["nan", "inf"])
    def test_non_finite_tax_rate(self, gateway, rate):
        result = CliRunner().invoke(
            cli, ["--tax-rate", rate, "catalog", "list"],
            obj={"settings": Settings(), "gateway": gateway},
        )
        assert result.exit_code == 1
        assert "Invalid tax rate" in result.output

    def test_options_override_settings(self, gateway):
        obj = {"settings": Settings(), "gateway": gateway}
        result = CliRunner().invoke(
            cli, ["--checkout-mode", "per-line", "--verify-stock", "catalog", "list"], obj=obj
        )
        assert result.exit_code == 0, result.output
        assert obj["settings"].checkout_mode == "per-line"
        assert obj["settings"].verify_stock is True
        assert obj["settings"].tax_rate == Decimal("0.18")
