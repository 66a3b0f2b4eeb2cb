"""Integration tests for the update / remove / show cart use cases."""

import pytest

from storefront.application.remove_from_cart import RemoveFromCartHandler
from storefront.application.show_cart import ShowCartHandler
from storefront.application.update_cart_item import UpdateCartItemHandler
from storefront.domain.exceptions import StockExceededError
from storefront.domain.model.cart import Cart
from storefront.domain.model.value_objects import TaxRate
from storefront.infrastructure.persistence.in_memory_catalog import (
    InMemoryProductCatalog,
)
from tests.fakes import make_products


@pytest.fixture
def catalog():
    return InMemoryProductCatalog(make_products())


@pytest.fixture
def cart(catalog):
    cart = Cart(catalog, TaxRate.of("0.18"))
    cart.add_item(1, 3)
    cart.add_item(2, 2)
    return cart


class TestUpdateCartItem:

    def test_update_changes_line_total(self, cart, catalog):
        dto = UpdateCartItemHandler(cart, catalog).handle(2, 1)
        mouse = dto.lines[1]
        assert (mouse.quantity, mouse.line_total) == (1, "₹10.00")
        assert dto.item_count == 4

    def test_update_to_zero_removes_line(self, cart, catalog):
        dto = UpdateCartItemHandler(cart, catalog).handle(1, 0)
        assert [line.product_id for line in dto.lines] == [2]

    def test_update_above_stock_rejected(self, cart, catalog):
        with pytest.raises(StockExceededError):
            UpdateCartItemHandler(cart, catalog).handle(2, 9)
        assert cart.quantity_of(2) == 2


class TestRemoveFromCart:

    def test_remove(self, cart, catalog):
        dto = RemoveFromCartHandler(cart, catalog).handle(1)
        assert [line.product_id for line in dto.lines] == [2]

    def test_remove_absent_is_silent(self, cart, catalog):
        dto = RemoveFromCartHandler(cart, catalog).handle(4)
        assert len(dto.lines) == 2


class TestShowCart:

    def test_summary_matches_gst_example(self, cart, catalog):
        dto = ShowCartHandler(cart, catalog).handle()
        assert dto.subtotal == "₹140.00"
        assert dto.tax == "₹25.20"
        assert dto.total == "₹165.20"
        assert dto.item_count == 5

    def test_lines_in_cart_order(self, cart, catalog):
        dto = ShowCartHandler(cart, catalog).handle()
        assert [(line.product_name, line.unit_price) for line in dto.lines] == [
            ("Laptop", "₹40.00"),
            ("Mouse", "₹10.00"),
        ]
