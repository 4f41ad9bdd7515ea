"""
Storefront configuration.

Values are read from environment variables once at import time; tests patch
the module attributes or the environment before constructing clients.
"""

import os

from storefront.errors import ERROR_CREDENTIALS_MISSING, ConfigurationError

# WordPress / WooCommerce
WORDPRESS_SITE_URL = os.environ.get("WORDPRESS_SITE_URL", "").rstrip("/")
WOOCOMMERCE_CONSUMER_KEY = os.environ.get("WOOCOMMERCE_CONSUMER_KEY", "")
WOOCOMMERCE_CONSUMER_SECRET = os.environ.get("WOOCOMMERCE_CONSUMER_SECRET", "")
WP_API_URL = os.environ.get("WP_API_URL", "")

# Upstash Redis (durable storage medium)
UPSTASH_REDIS_REST_URL = os.environ.get("UPSTASH_REDIS_REST_URL", "")
UPSTASH_REDIS_REST_TOKEN = os.environ.get("UPSTASH_REDIS_REST_TOKEN", "")

# Cart / wishlist storage
CART_STORAGE_KEY = os.environ.get("CART_STORAGE_KEY", "storefront_cart")
WISHLIST_KEY_PREFIX = "wishlist_"

# Legacy static catalog ids looked like "p12"
LEGACY_ID_PREFIX = os.environ.get("LEGACY_ID_PREFIX", "p")
LEGACY_ID_RECONCILE = os.environ.get("LEGACY_ID_RECONCILE", "true").lower() == "true"

HTTP_TIMEOUT = float(os.environ.get("HTTP_TIMEOUT", "10"))

CORS_ORIGINS = [
    o.strip() for o in os.environ.get("CORS_ORIGINS", "*").split(",") if o.strip()
]


def _required(name: str, value: str, message: str = "Missing required env") -> str:
    if not value or not value.strip():
        raise ConfigurationError(f"{message}: {name}")
    return value


def get_site_config() -> tuple[str, str, str]:
    """
    Get WooCommerce site URL and REST credentials.

    Returns:
        Tuple of (site_url, consumer_key, consumer_secret)

    Raises:
        ConfigurationError: if any of the three is not set
    """
    site_url = _required("WORDPRESS_SITE_URL", WORDPRESS_SITE_URL)
    consumer_key = _required("WOOCOMMERCE_CONSUMER_KEY", WOOCOMMERCE_CONSUMER_KEY, ERROR_CREDENTIALS_MISSING)
    consumer_secret = _required("WOOCOMMERCE_CONSUMER_SECRET", WOOCOMMERCE_CONSUMER_SECRET, ERROR_CREDENTIALS_MISSING)
    return site_url, consumer_key, consumer_secret


def get_wp_api_base() -> str:
    """WordPress REST base, always ending in /wp-json."""
    base = WP_API_URL or WORDPRESS_SITE_URL
    base = _required("WP_API_URL", base).rstrip("/")
    return base if base.endswith("/wp-json") else f"{base}/wp-json"
