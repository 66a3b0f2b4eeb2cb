"""Unit tests for the Product record."""

import pytest

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money


class TestProduct:

    def test_in_stock(self):
        assert Product(id=1, name="Pen", price=Money.of("2"), stock=1).in_stock
        assert not Product(id=1, name="Pen", price=Money.of("2"), stock=0).in_stock

    def test_negative_stock_rejected(self):
        with pytest.raises(ValidationError, match="non-negative"):
            Product(id=1, name="Pen", price=Money.of("2"), stock=-1)

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError, match="has no name"):
            Product(id=1, name="  ", price=Money.of("2"), stock=1)

    def test_string_id_rejected(self):
        with pytest.raises(ValidationError, match="must be an integer"):
            Product(id="1", name="Pen", price=Money.of("2"), stock=1)
