"""
Pydantic models for the WooCommerce / WordPress data the storefront exposes.

Field names follow the JSON the storefront frontend reads (camelCase
aliases), and unknown upstream keys are dropped at the boundary.
"""
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class _Model(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    def to_json(self) -> dict:
        return self.model_dump(by_alias=True)


class ProductAttribute(_Model):
    name: Optional[str] = None
    options: list[str] = Field(default_factory=list)


class Product(_Model):
    id: str
    name: str = ""
    slug: str = ""
    category: str = "uncategorized"
    price: float = 0.0
    original_price: float = Field(0.0, alias="originalPrice")
    discount: int = 0
    image: str = ""
    rating: float = 0.0
    in_stock: bool = Field(False, alias="inStock")
    description: str = ""
    full_description: str = Field("", alias="fullDescription")
    images: list[str] = Field(default_factory=list)
    brand: Optional[str] = None
    attributes: list[ProductAttribute] = Field(default_factory=list)


class Category(_Model):
    id: int
    name: str = ""
    slug: str = ""
    image: Optional[str] = None
    description: str = ""
    count: int = 0


class ShippingZone(_Model):
    id: int
    name: str = ""


class ShippingMethod(_Model):
    instance_id: int = 0
    method_id: str = ""
    title: str = ""
    cost: float = 0.0


FREE_SHIPPING_FALLBACK = ShippingMethod(
    instance_id=0, method_id="free_shipping", title="Free shipping", cost=0.0
)


class MenuItem(_Model):
    id: int
    title: str = ""
    url: str = "#"
    menu_item_parent: int = 0
    menu_order: Optional[int] = None
    children: list["MenuItem"] = Field(default_factory=list)


class OrderConfirmation(_Model):
    order_id: int = Field(alias="orderId")
    order_number: str = Field(alias="orderNumber")
    status: str = ""
    total: str = "0"
    payment_url: Optional[str] = Field(None, alias="paymentUrl")


class OrderLineItem(_Model):
    id: str
    name: str = ""
    quantity: int = 0
    price: float = 0.0
    total: float = 0.0
    image: str = ""


class Order(_Model):
    """Order as shown on the account and order-tracking pages."""
    id: str
    order_number: str = Field("", alias="orderNumber")
    date: Optional[str] = None
    status: str = ""
    total: float = 0.0
    currency: str = ""
    items: list[OrderLineItem] = Field(default_factory=list)
    billing: dict[str, Any] = Field(default_factory=dict)
    shipping: dict[str, Any] = Field(default_factory=dict)
    payment_method: str = Field("", alias="paymentMethod")


class CustomerAddresses(_Model):
    billing: dict[str, Any] = Field(default_factory=dict)
    shipping: dict[str, Any] = Field(default_factory=dict)


class SiteAssets(_Model):
    logo_url: Optional[str] = Field(None, alias="logoUrl")
    favicon_url: str = Field(alias="faviconUrl")
    site_url: str = Field(alias="siteUrl")
