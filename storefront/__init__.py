"""
Storefront Core Module

This package contains the storefront building blocks:
- storage: key-value storage medium (memory or Upstash Redis)
- events: change-notification bridge
- cart: cart aggregate, persistent list adapter, legacy-id reconciler
- wishlist: per-identity wishlist aggregate
- woocommerce: WooCommerce / WordPress REST clients and transforms
- checkout: order submission glue

Note: Imports are lazy so the HTTP layer can load without Redis or httpx
configuration being present.
"""

__all__ = [
    "Storefront",
    "get_storage",
]


def __getattr__(name):
    """Lazy attribute access for clean serverless loading."""
    if name == "Storefront":
        from storefront.app import Storefront
        return Storefront
    if name == "get_storage":
        from storefront.storage import get_storage
        return get_storage
    raise AttributeError(f"module 'storefront' has no attribute '{name}'")
