"""Wishlist models."""
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Optional

from storefront.services.money import to_decimal, to_float


@dataclass
class WishlistEntry:
    """Saved-for-later product. `id` is unique within a wishlist."""
    id: str
    name: str = ""
    slug: str = ""
    price: Decimal = Decimal("0")
    image: str = ""
    original_price: Optional[Decimal] = None
    discount: Optional[int] = None
    in_stock: Optional[bool] = None

    def __post_init__(self):
        self.id = str(self.id)
        self.price = to_decimal(self.price)
        if self.original_price is not None:
            self.original_price = to_decimal(self.original_price)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "slug": self.slug,
            "price": str(self.price),
            "image": self.image,
        }
        if self.original_price is not None:
            data["originalPrice"] = str(self.original_price)
        if self.discount is not None:
            data["discount"] = self.discount
        if self.in_stock is not None:
            data["inStock"] = self.in_stock
        return data

    def to_json(self) -> dict[str, Any]:
        """API shape: prices as numbers."""
        data = self.to_dict()
        data["price"] = to_float(self.price)
        if self.original_price is not None:
            data["originalPrice"] = to_float(self.original_price)
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "WishlistEntry":
        """Create from a stored record or request body (camelCase or snake_case)."""
        if data.get("id") in (None, ""):
            raise KeyError("id")

        original = data.get("originalPrice", data.get("original_price"))
        discount = data.get("discount")
        in_stock = data.get("inStock", data.get("in_stock"))

        return cls(
            id=str(data["id"]),
            name=str(data.get("name") or ""),
            slug=str(data.get("slug") or ""),
            price=to_decimal(data.get("price")),
            image=str(data.get("image") or ""),
            original_price=None if original is None else to_decimal(original),
            discount=None if discount is None else int(discount),
            in_stock=None if in_stock is None else bool(in_stock),
        )
