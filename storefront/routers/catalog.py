"""
Catalog Router

Read-only proxy over WooCommerce / WordPress: products, categories, store
currency settings, shipping zones and methods, navigation menus.
"""
from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from storefront.errors import ERROR_ZONE_REQUIRED, WooCommerceError
from storefront.logging import get_logger
from storefront.services.currency import FALLBACK_CURRENCY
from storefront.woocommerce.transform import choose_default_method, with_free_shipping_fallback

from .deps import get_woocommerce_client, get_wordpress_client, remember_currency, upstream_error

logger = get_logger(__name__)

router = APIRouter(tags=["catalog"])


@router.get("/products")
async def list_products(
    category: Optional[str] = None,
    slug: Optional[str] = None,
    search: Optional[str] = None,
    per_page: int = Query(100, ge=1, le=100),
):
    client = get_woocommerce_client()
    try:
        products = await client.get_products(category=category, slug=slug, search=search, per_page=per_page)
    except WooCommerceError as e:
        raise upstream_error(e)
    return [p.to_json() for p in products]


@router.get("/categories")
async def list_categories(parent: Optional[int] = None):
    client = get_woocommerce_client()
    try:
        categories = await client.get_categories(parent=parent)
    except WooCommerceError as e:
        raise upstream_error(e)
    return [c.to_json() for c in categories]


@router.get("/settings")
async def get_settings():
    """Store currency settings; defaults plus the error when WooCommerce fails."""
    client = get_woocommerce_client()
    try:
        settings = await client.get_currency_settings()
    except WooCommerceError as e:
        logger.warning("Using fallback currency settings: %s", e)
        return {"error": str(e), **FALLBACK_CURRENCY.to_dict()}
    remember_currency(settings)
    return settings.to_dict()


@router.get("/shipping/zones")
async def list_shipping_zones():
    client = get_woocommerce_client()
    try:
        zones = await client.get_shipping_zones()
    except WooCommerceError as e:
        raise upstream_error(e)
    return [z.to_json() for z in zones]


@router.get("/shipping/methods")
async def list_shipping_methods(zone_id: Optional[int] = None):
    """
    Enabled methods for a zone plus the default choice.

    Falls back to free shipping when the zone has none or WooCommerce fails.
    """
    if zone_id is None:
        raise HTTPException(status_code=400, detail=ERROR_ZONE_REQUIRED)

    client = get_woocommerce_client()
    try:
        methods = await client.get_shipping_methods(zone_id)
    except WooCommerceError as e:
        logger.warning("Shipping methods fetch failed, using free shipping fallback: %s", e)
        methods = []

    methods = with_free_shipping_fallback(methods)
    default = choose_default_method(methods)
    return {
        "zone_id": zone_id,
        "methods": [m.to_json() for m in methods],
        "default": default.to_json() if default else None,
        "cost": default.cost if default else 0.0,
    }


@router.get("/menus/{location}")
async def get_menu(location: str):
    client = get_wordpress_client()
    try:
        menu = await client.get_menu(location)
    except WooCommerceError as e:
        raise upstream_error(e)
    return {"menu": [item.to_json() for item in menu]}


@router.get("/site/assets")
async def get_site_assets():
    """
    Logo and favicon for the storefront header and browser tab.

    Media searches that fail are skipped, so this always answers; the
    favicon falls back to /favicon.ico.
    """
    assets = await get_wordpress_client().get_site_assets()
    return assets.to_json()
