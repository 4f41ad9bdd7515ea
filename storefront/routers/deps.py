"""
Shared Dependencies for Routers

Lazy-loaded singletons (REST clients, storage) and one Storefront per
browser session, so cold starts stay cheap.
"""
from collections import OrderedDict
from typing import Optional

from fastapi import Header, HTTPException

from storefront.app import Storefront
from storefront.errors import ConfigurationError, WooCommerceError
from storefront.identity import Identity
from storefront.logging import get_logger, sanitize_id_for_logging
from storefront.services.currency import CurrencySettings
from storefront.storage import NamespacedStorage, get_storage
from storefront.woocommerce.client import WooCommerceClient, WordPressClient

logger = get_logger(__name__)

MAX_SESSIONS = 1024

# ==================== LAZY SINGLETONS ====================

_woocommerce_client: Optional[WooCommerceClient] = None
_wordpress_client: Optional[WordPressClient] = None
_currency_settings: Optional[CurrencySettings] = None
_sessions: "OrderedDict[str, Storefront]" = OrderedDict()


def get_woocommerce_client() -> WooCommerceClient:
    """Get or create the WooCommerce client (503 when not configured)."""
    global _woocommerce_client
    if _woocommerce_client is None:
        try:
            _woocommerce_client = WooCommerceClient.from_env()
        except ConfigurationError as e:
            logger.error("WooCommerce not configured: %s", e)
            raise HTTPException(status_code=503, detail=str(e))
    return _woocommerce_client


def get_wordpress_client() -> WordPressClient:
    """Get or create the WordPress client (503 when not configured)."""
    global _wordpress_client
    if _wordpress_client is None:
        try:
            _wordpress_client = WordPressClient.from_env()
        except ConfigurationError as e:
            logger.error("WordPress not configured: %s", e)
            raise HTTPException(status_code=503, detail=str(e))
    return _wordpress_client


def remember_currency(settings: CurrencySettings) -> None:
    """Latest store currency settings; applied to every session's formatter."""
    global _currency_settings
    _currency_settings = settings
    for storefront in _sessions.values():
        storefront.set_currency(settings)


# ==================== SESSIONS ====================

def get_storefront(
    x_session_id: str = Header(..., min_length=1, max_length=128),
    x_user_id: Optional[str] = Header(None, max_length=64),
) -> Storefront:
    """
    Storefront for the calling browser session.

    Built and reconciled once per session; X-User-Id (set by the auth layer)
    selects whose wishlist is active.
    """
    storefront = _sessions.get(x_session_id)
    if storefront is None:
        storage = NamespacedStorage(get_storage(), f"session:{x_session_id}")
        storefront = Storefront(storage, currency=_currency_settings).start()
        _sessions[x_session_id] = storefront
        logger.debug("Session storefront created: %s", sanitize_id_for_logging(x_session_id))
        while len(_sessions) > MAX_SESSIONS:
            _sessions.popitem(last=False)
    else:
        _sessions.move_to_end(x_session_id)

    identity = Identity(id=x_user_id) if x_user_id else None
    if identity != storefront.identity:
        storefront.set_identity(identity)
    return storefront


def upstream_error(e: WooCommerceError) -> HTTPException:
    """WooCommerce failures surface as 502 with the upstream message; 404 passes through."""
    return HTTPException(status_code=404 if e.status_code == 404 else 502, detail=str(e))


# ==================== SHUTDOWN HELPERS ====================

async def shutdown_services() -> None:
    """Close http clients and forget sessions."""
    global _woocommerce_client, _wordpress_client, _currency_settings
    for client in (_woocommerce_client, _wordpress_client):
        if client is not None:
            try:
                await client.aclose()
            except Exception as e:
                logger.warning("Failed to close http client: %s", e)
    _woocommerce_client = None
    _wordpress_client = None
    _currency_settings = None
    _sessions.clear()
