"""
Tests for order payload building and the checkout service
"""
from unittest.mock import AsyncMock, MagicMock

import pytest

from storefront.cart import CartLine
from storefront.checkout import CheckoutService, build_line_items, build_order_payload
from storefront.errors import (
    ERROR_INVALID_CHECKOUT_PRODUCT,
    CheckoutError,
    EmptyCartError,
    InvalidProductError,
    WooCommerceError,
)
from storefront.woocommerce.models import OrderConfirmation, ShippingMethod

BILLING = {
    "first_name": "Ada",
    "last_name": "Lovelace",
    "email": "ada@shop.test",
    "phone": "",
    "address_1": "1 Analytical St",
    "city": "London",
    "country": "GB",
}


@pytest.fixture
def woo_client():
    client = MagicMock()
    client.create_order = AsyncMock(return_value=OrderConfirmation(
        order_id=77, order_number="77", status="processing", total="25.00",
    ))
    return client


class TestOrderPayload:
    def test_line_items(self):
        items = build_line_items([CartLine(id="p5", price="12.5", quantity=2)])

        assert items == [{
            "product_id": 5,
            "quantity": 2,
            "price": "12.50",
            "subtotal": "25.00",
            "total": "25.00",
        }]

    def test_invalid_product_rejected(self):
        with pytest.raises(InvalidProductError) as exc_info:
            build_line_items([CartLine(id="pABC", price=1)])

        assert str(exc_info.value) == ERROR_INVALID_CHECKOUT_PRODUCT

    def test_shipping_defaults_to_billing(self):
        payload = build_order_payload([CartLine(id="5", price=1)], BILLING)

        assert payload["payment_method"] == "cod"
        assert payload["set_paid"] is False
        assert payload["customer_id"] == 0
        assert payload["shipping"]["city"] == "London"
        assert "email" not in payload["shipping"]
        assert "phone" not in payload["billing"]
        assert "shipping_lines" not in payload

    def test_shipping_line_and_customer(self):
        method = ShippingMethod(instance_id=1, method_id="flat_rate", title="Courier", cost=7.5)

        payload = build_order_payload(
            [CartLine(id="5", price=1)], BILLING, {"city": "Paris"}, customer_id=42, shipping_method=method,
        )

        assert payload["customer_id"] == 42
        assert payload["shipping"] == {"city": "Paris"}
        assert payload["shipping_lines"] == [{"method_id": "flat_rate", "method_title": "Courier", "total": "7.50"}]


class TestCheckoutService:
    @pytest.mark.asyncio
    async def test_success_clears_cart(self, cart, headphones, woo_client):
        cart.add_item(headphones, 2)

        confirmation = await CheckoutService(woo_client, cart).place_order(BILLING)

        assert confirmation.order_number == "77"
        assert cart.get_cart() == []
        payload = woo_client.create_order.call_args.args[0]
        assert payload["line_items"][0]["product_id"] == 101

    @pytest.mark.asyncio
    async def test_failure_keeps_cart(self, cart, headphones, woo_client):
        cart.add_item(headphones)
        woo_client.create_order.side_effect = WooCommerceError("Invalid billing email")

        with pytest.raises(CheckoutError, match="Invalid billing email"):
            await CheckoutService(woo_client, cart).place_order(BILLING)

        assert len(cart.get_cart()) == 1

    @pytest.mark.asyncio
    async def test_empty_cart(self, cart, woo_client):
        with pytest.raises(EmptyCartError):
            await CheckoutService(woo_client, cart).place_order(BILLING)

        woo_client.create_order.assert_not_called()

    @pytest.mark.asyncio
    async def test_invalid_line_not_submitted(self, storage, cart, woo_client):
        cart.store.write([CartLine(id="pABC", price=1)])

        with pytest.raises(InvalidProductError):
            await CheckoutService(woo_client, cart).place_order(BILLING)

        woo_client.create_order.assert_not_called()
        assert len(cart.get_cart()) == 1
