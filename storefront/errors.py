"""
Common Error Constants and Exceptions

Centralized error messages to avoid string duplication.
"""

# Product errors
ERROR_INVALID_PRODUCT = "Invalid product, please refresh"
ERROR_INVALID_CHECKOUT_PRODUCT = "Invalid product. Please clear your cart and add products again."
ERROR_INVALID_QUANTITY = "quantity must be a positive integer"

# Checkout errors
ERROR_CART_EMPTY = "Your cart is empty"
ERROR_ORDER_FAILED = "Order creation failed"

# Order lookup / customer errors
ERROR_ORDER_LOOKUP_REQUIRED = "customer_id, order_id or phone parameter required"
ERROR_NO_ORDERS_FOR_PHONE = "No orders found for provided phone"
ERROR_CUSTOMER_REQUIRED = "customer_id is required"
ERROR_ADDRESS_REQUIRED = "billing or shipping required"

# Upstream errors
ERROR_WOOCOMMERCE_UNAVAILABLE = "WooCommerce API unavailable"
ERROR_CREDENTIALS_MISSING = "WooCommerce credentials not configured"
ERROR_ZONE_REQUIRED = "zone_id is required"


class StorefrontError(Exception):
    """Base class for errors surfaced to the shopper."""


class InvalidProductError(StorefrontError, ValueError):
    """Product identifier is not a positive WooCommerce id."""

    def __init__(self, message: str = ERROR_INVALID_PRODUCT, product_id: str | None = None):
        super().__init__(message)
        self.product_id = product_id


class CheckoutError(StorefrontError):
    """Order could not be placed."""


class EmptyCartError(CheckoutError):
    """Checkout attempted with nothing in the cart."""


class WooCommerceError(StorefrontError):
    """Non-2xx response or transport failure talking to WordPress/WooCommerce."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class ConfigurationError(StorefrontError):
    """Required environment variable is missing."""
