"""
Checkout - turns the cart into a WooCommerce order.

The cart is cleared only after WooCommerce confirms the order; on any
failure it is left untouched and the error message goes back to the shopper.
"""
from typing import Any, Optional

from storefront.cart import CartLine, CartManager, normalize_product_id
from storefront.errors import (
    ERROR_CART_EMPTY,
    ERROR_INVALID_CHECKOUT_PRODUCT,
    CheckoutError,
    EmptyCartError,
    InvalidProductError,
    WooCommerceError,
)
from storefront.logging import get_logger, sanitize_id_for_logging
from storefront.services.money import money_str
from storefront.woocommerce.client import WooCommerceClient
from storefront.woocommerce.models import OrderConfirmation, ShippingMethod

logger = get_logger(__name__)

PAYMENT_METHOD = "cod"
PAYMENT_METHOD_TITLE = "Cash on Delivery"

BILLING_FIELDS = (
    "first_name", "last_name", "email", "phone",
    "address_1", "address_2", "city", "state", "postcode", "country",
)
SHIPPING_FIELDS = (
    "first_name", "last_name",
    "address_1", "address_2", "city", "state", "postcode", "country",
)


def _address(data: Optional[dict[str, Any]], fields: tuple[str, ...]) -> dict[str, str]:
    data = data or {}
    return {f: str(data[f]) for f in fields if data.get(f) not in (None, "")}


def build_line_items(lines: list[CartLine]) -> list[dict[str, Any]]:
    """
    WooCommerce line_items for the cart.

    Raises:
        InvalidProductError: a line id is not a product id even after
            stripping the legacy prefix
    """
    items = []
    for line in lines:
        product_id = normalize_product_id(line.id)
        if product_id is None:
            logger.error("Invalid product ID at checkout: %s", sanitize_id_for_logging(line.id))
            raise InvalidProductError(ERROR_INVALID_CHECKOUT_PRODUCT, product_id=line.id)
        items.append({
            "product_id": int(product_id),
            "quantity": line.quantity,
            "price": money_str(line.price),
            "subtotal": money_str(line.line_total),
            "total": money_str(line.line_total),
        })
    return items


def build_order_payload(
    lines: list[CartLine],
    billing: dict[str, Any],
    shipping: Optional[dict[str, Any]] = None,
    customer_id: Optional[int] = None,
    shipping_method: Optional[ShippingMethod] = None,
) -> dict[str, Any]:
    """
    Order payload for POST /orders.

    Shipping address defaults to the billing address.
    """
    payload: dict[str, Any] = {
        "payment_method": PAYMENT_METHOD,
        "payment_method_title": PAYMENT_METHOD_TITLE,
        "set_paid": False,
        "billing": _address(billing, BILLING_FIELDS),
        "shipping": _address(shipping if shipping else billing, SHIPPING_FIELDS),
        "line_items": build_line_items(lines),
        "customer_id": int(customer_id or 0),
    }
    if shipping_method is not None:
        payload["shipping_lines"] = [{
            "method_id": shipping_method.method_id,
            "method_title": shipping_method.title,
            "total": money_str(shipping_method.cost),
        }]
    return payload


class CheckoutService:
    """Places orders for one storefront cart."""

    def __init__(self, client: WooCommerceClient, cart: CartManager):
        self.client = client
        self.cart = cart

    async def place_order(
        self,
        billing: dict[str, Any],
        shipping: Optional[dict[str, Any]] = None,
        customer_id: Optional[int] = None,
        shipping_method: Optional[ShippingMethod] = None,
    ) -> OrderConfirmation:
        """
        Submit the cart as an order and clear the cart on success.

        Raises:
            CheckoutError: empty cart, or WooCommerce rejected the order
            InvalidProductError: cart holds an invalid product id
        """
        lines = self.cart.get_cart()
        if not lines:
            raise EmptyCartError(ERROR_CART_EMPTY)

        payload = build_order_payload(lines, billing, shipping, customer_id, shipping_method)

        try:
            confirmation = await self.client.create_order(payload)
        except WooCommerceError as e:
            logger.error("WooCommerce order creation failed: %s", e)
            raise CheckoutError(str(e)) from e

        self.cart.clear()
        logger.info("Order #%s placed, cart cleared", confirmation.order_number)
        return confirmation
