"""Wishlist Domain Service.

One wishlist per owner identity (guest or user id), stored under
`wishlist_<owner>`. Switching identity switches the active list; guest items
are not carried over to a signed-in user.
"""
from typing import Any, Callable, Optional, Union

from storefront import config
from storefront.cart.store import JsonListStore
from storefront.events import ChangeBroadcaster
from storefront.identity import Identity, owner_key
from storefront.logging import get_logger
from storefront.storage import KeyValueStorage
from storefront.wishlist.models import WishlistEntry

logger = get_logger(__name__)


def wishlist_key(identity: Optional[Identity]) -> str:
    return f"{config.WISHLIST_KEY_PREFIX}{owner_key(identity)}"


class WishlistManager:
    """Wishlist aggregate: most recently wished first, no quantities."""

    def __init__(
        self,
        storage: KeyValueStorage,
        broadcaster: Optional[ChangeBroadcaster] = None,
        identity: Optional[Identity] = None,
    ) -> None:
        self.identity = identity
        self.store: JsonListStore[WishlistEntry] = JsonListStore(
            storage,
            wishlist_key(identity),
            WishlistEntry.from_dict,
            broadcaster or ChangeBroadcaster("wishlist-updated"),
        )

    @property
    def key(self) -> str:
        return self.store.key

    def subscribe(self, listener: Callable[[list[WishlistEntry]], None]) -> Callable[[], None]:
        return self.store.broadcaster.subscribe(listener)

    def switch_identity(self, identity: Optional[Identity]) -> list[WishlistEntry]:
        """
        Make another owner's wishlist active.

        Observers receive the newly active list. Nothing is merged.
        """
        new_key = wishlist_key(identity)
        self.identity = identity
        if new_key == self.store.key:
            return self.items()
        logger.debug("Wishlist owner switched to %s", owner_key(identity))
        self.store.rekey(new_key)
        items = self.items()
        self.store.broadcaster.publish(items)
        return items

    def items(self) -> list[WishlistEntry]:
        return self.store.read()

    def add(self, entry: Union[WishlistEntry, dict[str, Any]]) -> list[WishlistEntry]:
        if not isinstance(entry, WishlistEntry):
            entry = WishlistEntry.from_dict(entry)
        items = self.store.read()
        if any(i.id == entry.id for i in items):
            return items
        return self.store.write([entry, *items])

    def remove(self, product_id: str) -> list[WishlistEntry]:
        items = [i for i in self.store.read() if i.id != str(product_id)]
        return self.store.write(items)

    def toggle(self, entry: Union[WishlistEntry, dict[str, Any]]) -> bool:
        """Add if absent, remove if present. Returns True when the item is now wished."""
        if not isinstance(entry, WishlistEntry):
            entry = WishlistEntry.from_dict(entry)
        if self.is_wished(entry.id):
            self.remove(entry.id)
            return False
        self.add(entry)
        return True

    def is_wished(self, product_id: str) -> bool:
        return any(i.id == str(product_id) for i in self.store.read())

    def clear(self) -> list[WishlistEntry]:
        return self.store.write([])
