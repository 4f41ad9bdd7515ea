"""Cart package: models, persistent list adapter, manager and reconciler."""
from .models import CartLine, cart_item_count, cart_total
from .reconcile import ReconcileResult, normalize_product_id, reconcile_cart
from .service import CartManager
from .store import JsonListStore

__all__ = [
    "CartLine",
    "CartManager",
    "JsonListStore",
    "ReconcileResult",
    "cart_item_count",
    "cart_total",
    "normalize_product_id",
    "reconcile_cart",
]
