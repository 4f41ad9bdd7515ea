"""
WooCommerce / WordPress REST clients.

Thin async wrappers over httpx: one request per read, no retries, no caching.
WooCommerce REST credentials travel as consumer_key/consumer_secret query
parameters, the way the store's REST keys are issued.
"""
from typing import Any, Optional

import httpx

from storefront import config
from storefront.errors import (
    ERROR_ADDRESS_REQUIRED,
    ERROR_ORDER_FAILED,
    ERROR_WOOCOMMERCE_UNAVAILABLE,
    WooCommerceError,
)
from storefront.logging import get_logger, mask_phone, sanitize_string_for_logging
from storefront.services.currency import FALLBACK_CURRENCY, CURRENCY_POSITIONS, CurrencySettings
from storefront.woocommerce.models import (
    Category,
    CustomerAddresses,
    MenuItem,
    Order,
    OrderConfirmation,
    Product,
    ShippingMethod,
    ShippingZone,
    SiteAssets,
)
from storefront.woocommerce.transform import (
    build_menu_tree,
    phone_matches,
    simplify_shipping_methods,
    transform_category,
    transform_menu_items,
    transform_order,
    transform_product,
    transform_zones,
)

logger = get_logger(__name__)


def _error_message(response: httpx.Response, fallback: str) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return f"{fallback}: {response.status_code} {response.reason_phrase}"


class _RestClient:
    """Shared lazy httpx client handling."""

    def __init__(self, base_url: str, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = base_url.rstrip("/")
        self._transport = transport
        self._http_client: httpx.AsyncClient | None = None

    def _get_http_client(self) -> httpx.AsyncClient:
        """Lazy creation of shared httpx client with timeouts."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=httpx.Timeout(config.HTTP_TIMEOUT, connect=5.0),
                limits=httpx.Limits(max_connections=10, max_keepalive_connections=5),
                transport=self._transport,
            )
        return self._http_client

    async def aclose(self) -> None:
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None

    async def _request(self, method: str, path: str, *, params=None, json=None, error: str) -> Any:
        client = self._get_http_client()
        try:
            response = await client.request(method, path, params=params, json=json)
        except httpx.HTTPError as e:
            logger.error("%s %s failed: %s", method, path, type(e).__name__)
            raise WooCommerceError(f"{ERROR_WOOCOMMERCE_UNAVAILABLE}: {type(e).__name__}") from e

        if response.is_error:
            message = _error_message(response, error)
            logger.error("%s %s -> %s: %s", method, path, response.status_code, sanitize_string_for_logging(message))
            raise WooCommerceError(message, status_code=response.status_code)

        try:
            return response.json()
        except ValueError as e:
            raise WooCommerceError(f"{error}: invalid JSON", status_code=response.status_code) from e


class WooCommerceClient(_RestClient):
    """WooCommerce REST API v3 client."""

    API_PREFIX = "/wp-json/wc/v3"

    def __init__(
        self,
        site_url: str,
        consumer_key: str,
        consumer_secret: str,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(site_url, transport)
        self.consumer_key = consumer_key
        self.consumer_secret = consumer_secret

    @classmethod
    def from_env(cls) -> "WooCommerceClient":
        site_url, key, secret = config.get_site_config()
        return cls(site_url, key, secret)

    def _auth(self, params: Optional[dict[str, Any]] = None) -> dict[str, Any]:
        return {
            **(params or {}),
            "consumer_key": self.consumer_key,
            "consumer_secret": self.consumer_secret,
        }

    async def _get(self, path: str, params: Optional[dict[str, Any]] = None, error: str = "WooCommerce API error") -> Any:
        return await self._request("GET", f"{self.API_PREFIX}{path}", params=self._auth(params), error=error)

    # ==================== CATALOG ====================

    async def get_products(
        self,
        category: Optional[str] = None,
        slug: Optional[str] = None,
        search: Optional[str] = None,
        per_page: int = 100,
    ) -> list[Product]:
        """
        List products, optionally filtered.

        Args:
            category: Category slug; resolved to a category id first. An
                unknown slug means no category filter.
            slug: Product slug (single product pages)
            search: Free-text search
            per_page: Page size (WooCommerce caps it at 100)
        """
        params: dict[str, Any] = {"per_page": per_page}

        if category:
            categories = await self._get("/products/categories", {"slug": category})
            if isinstance(categories, list) and categories:
                params["category"] = categories[0]["id"]
        if slug:
            params["slug"] = slug
        if search:
            params["search"] = search

        raw = await self._get("/products", params)
        products = [transform_product(p) for p in (raw if isinstance(raw, list) else [])]
        logger.info("Fetched %d products", len(products))
        return products

    async def get_categories(self, per_page: int = 100, parent: Optional[int] = None) -> list[Category]:
        params: dict[str, Any] = {"per_page": per_page, "hide_empty": "false"}
        if parent is not None:
            params["parent"] = parent
        raw = await self._get("/products/categories", params, error="Unable to fetch categories")
        return [transform_category(c) for c in (raw if isinstance(raw, list) else [])]

    # ==================== SHIPPING ====================

    async def get_shipping_zones(self) -> list[ShippingZone]:
        raw = await self._get("/shipping/zones", error="Unable to fetch shipping zones")
        return transform_zones(raw if isinstance(raw, list) else [])

    async def get_shipping_methods(self, zone_id: int) -> list[ShippingMethod]:
        raw = await self._get(
            f"/shipping/zones/{int(zone_id)}/methods",
            {"per_page": 100},
            error="Unable to fetch shipping methods",
        )
        return simplify_shipping_methods(raw if isinstance(raw, list) else [])

    # ==================== SETTINGS ====================

    async def _setting_value(self, settings: list[dict[str, Any]], setting_id: str, fallback: str) -> str:
        """Look a general setting up in the list, else fetch it on its own."""
        match = next((s for s in settings if isinstance(s, dict) and s.get("id") == setting_id), None)
        if match is not None and match.get("value") is not None:
            return str(match["value"])

        try:
            single = await self._get(f"/settings/general/{setting_id}", {"context": "edit"})
        except WooCommerceError as e:
            logger.warning("Settings fallback fetch failed for %s: %s", setting_id, e)
            return fallback
        if isinstance(single, dict) and single.get("value") is not None:
            return str(single["value"])
        return fallback

    async def get_currency_settings(self) -> CurrencySettings:
        """Currency display settings from WooCommerce > Settings > General."""
        default = FALLBACK_CURRENCY
        raw = await self._get(
            "/settings/general",
            {"context": "edit", "per_page": 100},
            error="Unable to fetch WooCommerce settings",
        )
        settings = raw if isinstance(raw, list) else []

        code = (await self._setting_value(settings, "woocommerce_currency", default.code)).upper()
        position = (await self._setting_value(settings, "woocommerce_currency_pos", default.position)).lower()
        if position not in CURRENCY_POSITIONS:
            position = default.position
        thousand = await self._setting_value(settings, "woocommerce_price_thousand_sep", default.thousand_separator)
        decimal_sep = await self._setting_value(settings, "woocommerce_price_decimal_sep", default.decimal_separator)
        decimals_raw = await self._setting_value(settings, "woocommerce_price_num_decimals", str(default.decimals))
        try:
            decimals = max(0, int(float(decimals_raw)))
        except ValueError:
            decimals = default.decimals

        symbol = code
        try:
            currency = await self._get(f"/data/currencies/{code.lower()}", {"context": "edit"})
            if isinstance(currency, dict) and str(currency.get("symbol") or "").strip():
                symbol = str(currency["symbol"]).strip()
        except WooCommerceError as e:
            logger.warning("Currency symbol fetch failed: %s", e)

        return CurrencySettings(
            code=code,
            symbol=symbol,
            position=position,
            thousand_separator=thousand,
            decimal_separator=decimal_sep,
            decimals=decimals,
        )

    # ==================== ORDERS ====================

    async def create_order(self, payload: dict[str, Any]) -> OrderConfirmation:
        """POST a new order; returns its id, number, status and total."""
        order = await self._request(
            "POST",
            f"{self.API_PREFIX}/orders",
            params=self._auth(),
            json=payload,
            error=ERROR_ORDER_FAILED,
        )
        if not isinstance(order, dict) or "id" not in order:
            raise WooCommerceError(ERROR_ORDER_FAILED)
        logger.info("Order created: %s", order["id"])
        return OrderConfirmation(
            order_id=int(order["id"]),
            order_number=str(order.get("number") or order["id"]),
            status=str(order.get("status") or ""),
            total=str(order.get("total") or "0"),
            payment_url=order.get("payment_url") or None,
        )


    async def get_order(self, order_id: int) -> Order:
        raw = await self._get(f"/orders/{int(order_id)}", error="Unable to fetch order")
        if not isinstance(raw, dict) or "id" not in raw:
            raise WooCommerceError("Unable to fetch order: unexpected response")
        return transform_order(raw)

    async def _recent_orders(self, params: Optional[dict[str, Any]] = None) -> list[dict[str, Any]]:
        raw = await self._get(
            "/orders",
            {**(params or {}), "per_page": 100, "orderby": "date", "order": "desc"},
            error="Unable to fetch orders",
        )
        return [o for o in raw if isinstance(o, dict) and "id" in o] if isinstance(raw, list) else []

    async def get_customer_orders(self, customer_id: int) -> list[Order]:
        """Up to 100 orders of one customer, newest first."""
        orders = await self._recent_orders({"customer": int(customer_id)})
        logger.info("Fetched %d orders for customer", len(orders))
        return [transform_order(o) for o in orders]

    async def find_order_by_phone(self, phone: str) -> Optional[Order]:
        """
        Newest of the last 100 orders whose billing phone matches.

        Matching compares the last ten digits, so country codes and
        punctuation do not matter.
        """
        for order in await self._recent_orders():
            billing = order.get("billing") if isinstance(order.get("billing"), dict) else {}
            if phone_matches(billing.get("phone"), phone):
                return transform_order(order)
        logger.info("No order found for phone %s", mask_phone(phone))
        return None

    # ==================== CUSTOMERS ====================

    async def get_customer_addresses(self, customer_id: int) -> CustomerAddresses:
        raw = await self._get(f"/customers/{int(customer_id)}", error="Unable to fetch customer")
        raw = raw if isinstance(raw, dict) else {}
        return CustomerAddresses(billing=raw.get("billing") or {}, shipping=raw.get("shipping") or {})

    async def update_customer_addresses(
        self,
        customer_id: int,
        billing: Optional[dict[str, Any]] = None,
        shipping: Optional[dict[str, Any]] = None,
    ) -> CustomerAddresses:
        """
        Save billing and/or shipping address on the customer.

        Raises:
            ValueError: neither address given
            WooCommerceError: WooCommerce rejected the update
        """
        payload = {k: v for k, v in (("billing", billing), ("shipping", shipping)) if v}
        if not payload:
            raise ValueError(ERROR_ADDRESS_REQUIRED)
        raw = await self._request(
            "PUT",
            f"{self.API_PREFIX}/customers/{int(customer_id)}",
            params=self._auth(),
            json=payload,
            error="Customer update failed",
        )
        raw = raw if isinstance(raw, dict) else {}
        return CustomerAddresses(billing=raw.get("billing") or {}, shipping=raw.get("shipping") or {})


class WordPressClient(_RestClient):
    """WordPress REST client for menus and site assets."""

    LOGO_TERMS = ("site-logo", "logo", "brand", "header logo")
    FAVICON_TERMS = ("site-icon", "favicon", "icon-32", "icon-64")

    @property
    def site_url(self) -> str:
        return self.base_url.removesuffix("/wp-json")

    @classmethod
    def from_env(cls) -> "WordPressClient":
        return cls(config.get_wp_api_base())

    async def get_menu_items(self, location: str) -> list[MenuItem]:
        raw = await self._request("GET", f"/custom/v1/menu/{location}", error="Menu fetch failed")
        return transform_menu_items(raw if isinstance(raw, list) else [])

    async def get_menu(self, location: str) -> list[MenuItem]:
        """Menu for a theme location as a tree."""
        return build_menu_tree(await self.get_menu_items(location))

    async def find_media_url(self, terms: tuple[str, ...]) -> Optional[str]:
        """First image in the media library matching one of the terms, in order."""
        for term in terms:
            try:
                media = await self._request(
                    "GET",
                    "/wp/v2/media",
                    params={"search": term, "per_page": 5, "_fields": "source_url,media_type,alt_text"},
                    error="Media search failed",
                )
            except WooCommerceError as e:
                logger.debug("Media search for %r failed: %s", term, e)
                continue
            for item in media if isinstance(media, list) else []:
                if isinstance(item, dict) and item.get("media_type") == "image" and item.get("source_url"):
                    return str(item["source_url"])
        return None

    async def get_site_assets(self) -> SiteAssets:
        """Logo and favicon URLs; the favicon falls back to /favicon.ico."""
        logo_url = await self.find_media_url(self.LOGO_TERMS)
        favicon_url = await self.find_media_url(self.FAVICON_TERMS)
        return SiteAssets(
            logo_url=logo_url,
            favicon_url=favicon_url or f"{self.site_url}/favicon.ico",
            site_url=self.site_url,
        )
