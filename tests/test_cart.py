"""
Tests for Cart Manager
"""
from decimal import Decimal

import pytest

from storefront.cart import CartLine, cart_item_count, cart_total
from storefront.errors import ERROR_INVALID_PRODUCT, InvalidProductError


class TestCartLine:
    """Tests for CartLine dataclass."""

    def test_price_normalized_to_decimal(self):
        line = CartLine(id=5, name="Test", price=19.99, quantity=2)

        assert line.id == "5"
        assert line.price == Decimal("19.99")
        assert line.line_total == Decimal("39.98")

    def test_negative_price_rejected(self):
        with pytest.raises(ValueError):
            CartLine(id="5", price=-1)

    def test_from_dict_requires_id(self):
        with pytest.raises(KeyError):
            CartLine.from_dict({"name": "No id", "price": 1, "quantity": 1})

    def test_from_dict_rejects_zero_quantity(self):
        with pytest.raises(ValueError):
            CartLine.from_dict({"id": "5", "price": 1, "quantity": 0})

    def test_to_dict_keeps_price_as_decimal_string(self):
        data = CartLine(id="5", name="Test", price="12.50", quantity=3, slug="test").to_dict()

        assert data == {
            "id": "5",
            "name": "Test",
            "price": "12.50",
            "quantity": 3,
            "image": "",
            "slug": "test",
        }

    def test_to_json_uses_numbers(self):
        data = CartLine(id="5", price="12.50", quantity=3).to_json()

        assert data["price"] == 12.5
        assert data["line_total"] == 37.5


class TestTotals:
    def test_total_and_item_count(self):
        lines = [
            CartLine(id="1", price=10, quantity=2),
            CartLine(id="2", price=5, quantity=3),
        ]

        assert cart_total(lines) == Decimal("35")
        assert cart_item_count(lines) == 5

    def test_empty_cart_totals(self):
        assert cart_total([]) == 0
        assert cart_item_count([]) == 0


class TestCartManager:
    def test_add_new_item(self, cart, headphones):
        lines = cart.add_item(headphones)

        assert len(lines) == 1
        assert lines[0].id == "101"
        assert lines[0].quantity == 1
        assert cart.get_cart() == lines

    def test_add_same_item_twice_merges(self, cart, headphones):
        cart.add_item(headphones, 2)
        lines = cart.add_item(headphones, 3)

        assert len(lines) == 1
        assert lines[0].quantity == 5

    def test_add_keeps_price_from_first_add(self, cart, headphones):
        cart.add_item(headphones)
        lines = cart.add_item({**headphones, "price": 99})

        assert lines[0].price == Decimal("10")

    def test_add_strips_legacy_prefix(self, cart, headphones):
        lines = cart.add_item({**headphones, "id": "p101"})

        assert lines[0].id == "101"

    def test_add_invalid_id_rejected(self, cart, headphones):
        with pytest.raises(InvalidProductError) as exc:
            cart.add_item({**headphones, "id": "pABC"})

        assert str(exc.value) == ERROR_INVALID_PRODUCT
        assert cart.get_cart() == []

    @pytest.mark.parametrize("quantity", [0, -1, True, 1.5])
    def test_add_invalid_quantity_rejected(self, cart, headphones, quantity):
        with pytest.raises(ValueError):
            cart.add_item(headphones, quantity)

    def test_add_cart_line_instance(self, cart):
        lines = cart.add_item(CartLine(id="7", name="Mug", price=3, quantity=9), 2)

        assert lines[0].quantity == 2

    def test_remove_item(self, cart, headphones, speaker):
        cart.add_item(headphones)
        cart.add_item(speaker)

        lines = cart.remove_item("101")

        assert [line.id for line in lines] == ["202"]

    def test_update_quantity(self, cart, headphones):
        cart.add_item(headphones)

        lines = cart.update_quantity("101", 4)

        assert lines[0].quantity == 4

    @pytest.mark.parametrize("quantity", [0, -3])
    def test_update_quantity_to_zero_or_below_removes(self, cart, headphones, speaker, quantity):
        cart.add_item(headphones)
        cart.add_item(speaker)

        lines = cart.update_quantity("101", quantity)

        assert [line.id for line in lines] == ["202"]
        assert all(line.quantity > 0 for line in cart.get_cart())

    @pytest.mark.parametrize("quantity", [0.5, 2.5, True, "3"])
    def test_update_quantity_rejects_non_integer(self, cart, headphones, quantity):
        cart.add_item(headphones)
        events = []
        cart.subscribe(events.append)

        with pytest.raises(ValueError):
            cart.update_quantity("101", quantity)

        assert cart.get_cart()[0].quantity == 1
        assert events == []

    def test_update_unknown_item_is_noop(self, cart, headphones):
        cart.add_item(headphones)
        events = []
        cart.subscribe(events.append)

        lines = cart.update_quantity("999", 3)

        assert [line.id for line in lines] == ["101"]
        assert events == []

    def test_clear(self, cart, headphones):
        cart.add_item(headphones)

        assert cart.clear() == []
        assert cart.get_cart() == []

    def test_total_and_count_from_storage(self, cart, headphones, speaker):
        cart.add_item(headphones, 2)
        cart.add_item(speaker, 3)

        assert cart.total() == Decimal("35")
        assert cart.item_count() == 5

    def test_summary_formats_totals(self, storefront, headphones):
        storefront.cart.add_item(headphones, 2)

        summary = storefront.cart.summary(storefront.formatter)

        assert summary["item_count"] == 2
        assert summary["total"] == 20.0
        assert summary["total_display"] == "$20.00"
        assert summary["items"][0]["line_total_display"] == "$20.00"
