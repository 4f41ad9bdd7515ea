"""
Storefront composition root.

One Storefront is built per shopper session at start-up and handed to
whatever needs cart or wishlist access. It owns the broadcasters, so
observers live exactly as long as the store they watch.
"""
from typing import Optional

from storefront import config
from storefront.cart import CartLine, CartManager, JsonListStore, ReconcileResult, reconcile_cart
from storefront.events import ChangeBroadcaster
from storefront.identity import Identity
from storefront.logging import get_logger
from storefront.services.currency import FALLBACK_CURRENCY, CurrencyFormatter, CurrencySettings
from storefront.storage import KeyValueStorage
from storefront.wishlist import WishlistManager

logger = get_logger(__name__)


class Storefront:
    """Cart, wishlist and currency formatter for one session."""

    def __init__(
        self,
        storage: KeyValueStorage,
        identity: Optional[Identity] = None,
        currency: Optional[CurrencySettings] = None,
        cart_key: Optional[str] = None,
    ) -> None:
        self.storage = storage
        self.cart_events = ChangeBroadcaster("cart-updated")
        self.wishlist_events = ChangeBroadcaster("wishlist-updated")
        self.cart = CartManager(
            JsonListStore(storage, cart_key or config.CART_STORAGE_KEY, CartLine.from_dict, self.cart_events)
        )
        self.wishlist = WishlistManager(storage, self.wishlist_events, identity)
        self.formatter = CurrencyFormatter(currency or FALLBACK_CURRENCY)
        self.reconcile_result: Optional[ReconcileResult] = None
        self._started = False

    @property
    def identity(self) -> Optional[Identity]:
        return self.wishlist.identity

    def start(self) -> "Storefront":
        """Run start-up work once: the legacy cart id reconciliation."""
        if self._started:
            return self
        self._started = True
        if config.LEGACY_ID_RECONCILE:
            self.reconcile_result = reconcile_cart(self.cart)
        else:
            logger.debug("Legacy id reconciliation disabled")
        return self

    def set_identity(self, identity: Optional[Identity]) -> None:
        self.wishlist.switch_identity(identity)

    def set_currency(self, settings: CurrencySettings) -> None:
        self.formatter = CurrencyFormatter(settings)
