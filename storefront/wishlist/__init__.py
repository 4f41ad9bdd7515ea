"""Wishlist package: entry model and per-identity manager."""
from .models import WishlistEntry
from .service import WishlistManager, wishlist_key

__all__ = ["WishlistEntry", "WishlistManager", "wishlist_key"]
