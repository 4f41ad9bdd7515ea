"""
Storefront API Pydantic Models

Request bodies for the cart, wishlist and checkout endpoints.
"""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# ==================== CART MODELS ====================

class AddToCartRequest(BaseModel):
    id: str
    name: str = ""
    price: float = Field(0, ge=0)
    image: str = ""
    slug: str = ""
    quantity: int = Field(1, ge=1)


class UpdateCartItemRequest(BaseModel):
    quantity: int  # 0 or below removes the line


# ==================== WISHLIST MODELS ====================

class WishlistItemRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str = ""
    slug: str = ""
    price: float = Field(0, ge=0)
    image: str = ""
    original_price: Optional[float] = Field(None, alias="originalPrice")
    discount: Optional[int] = None
    in_stock: Optional[bool] = Field(None, alias="inStock")


# ==================== CHECKOUT MODELS ====================

class Address(BaseModel):
    first_name: str = ""
    last_name: str = ""
    email: Optional[str] = None
    phone: Optional[str] = None
    address_1: str = ""
    address_2: Optional[str] = None
    city: str = ""
    state: str = ""
    postcode: str = ""
    country: str = ""


class CheckoutRequest(BaseModel):
    billing: Address
    shipping: Optional[Address] = None
    customer_id: Optional[int] = None
    shipping_zone_id: Optional[int] = None


# ==================== CUSTOMER MODELS ====================

class AddressesUpdateRequest(BaseModel):
    customer_id: Optional[int] = None
    billing: Optional[Address] = None
    shipping: Optional[Address] = None
