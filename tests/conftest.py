"""Pytest configuration and fixtures"""
import os

import pytest

# Set test environment variables before storefront.config is imported
os.environ.setdefault("WORDPRESS_SITE_URL", "https://shop.test")
os.environ.setdefault("WOOCOMMERCE_CONSUMER_KEY", "ck_test")
os.environ.setdefault("WOOCOMMERCE_CONSUMER_SECRET", "cs_test")
os.environ.setdefault("WP_API_URL", "https://shop.test")
os.environ.pop("UPSTASH_REDIS_REST_URL", None)
os.environ.pop("UPSTASH_REDIS_REST_TOKEN", None)

from storefront.app import Storefront  # noqa: E402
from storefront.storage import MemoryStorage  # noqa: E402


@pytest.fixture
def storage():
    """Empty in-memory storage"""
    return MemoryStorage()


@pytest.fixture
def storefront(storage):
    """Started storefront over empty storage"""
    return Storefront(storage).start()


@pytest.fixture
def cart(storefront):
    return storefront.cart


@pytest.fixture
def headphones():
    """Cart item payload as sent by a product card"""
    return {
        "id": "101",
        "name": "Wireless Headphones",
        "price": 10,
        "image": "https://shop.test/img/101.jpg",
        "slug": "wireless-headphones",
    }


@pytest.fixture
def speaker():
    return {
        "id": "202",
        "name": "Bluetooth Speaker",
        "price": 5,
        "image": "https://shop.test/img/202.jpg",
        "slug": "bluetooth-speaker",
    }


@pytest.fixture
def woo_product():
    """Raw WooCommerce product"""
    return {
        "id": 101,
        "name": "Wireless Headphones",
        "slug": "wireless-headphones",
        "categories": [{"id": 7, "slug": "audio"}],
        "price": "80.00",
        "regular_price": "100.00",
        "sale_price": "80.00",
        "images": [
            {"src": "http://shop.test/img/101.jpg"},
            {"src": "https://shop.test/img/101-b.jpg"},
        ],
        "average_rating": "4.50",
        "stock_status": "instock",
        "short_description": "<p>Great <b>sound</b></p>",
        "description": "<p>Long description</p>",
        "attributes": [
            {"name": "Color", "options": ["Black", {"name": "White"}]},
            {"name": "Brand", "options": ["Acme"]},
        ],
        "meta_data": [],
    }
