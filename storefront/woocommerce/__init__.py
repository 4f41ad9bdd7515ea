"""WooCommerce / WordPress collaborators: REST clients, models and transforms."""
from .client import WooCommerceClient, WordPressClient
from .models import (
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
from .transform import build_menu_tree, choose_default_method

__all__ = [
    "Category",
    "CustomerAddresses",
    "MenuItem",
    "Order",
    "OrderConfirmation",
    "Product",
    "ShippingMethod",
    "ShippingZone",
    "SiteAssets",
    "WooCommerceClient",
    "WordPressClient",
    "build_menu_tree",
    "choose_default_method",
]
