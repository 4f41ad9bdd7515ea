"""Cart models with Decimal-based pricing."""
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from storefront.services.money import multiply, to_decimal, to_float


@dataclass
class CartLine:
    """One product row in the cart. `id` is unique within a cart."""
    id: str
    name: str = ""
    price: Decimal = field(default_factory=lambda: Decimal("0"))
    quantity: int = 1
    image: str = ""
    slug: str = ""

    def __post_init__(self):
        self.id = str(self.id)
        self.price = to_decimal(self.price)
        if self.price < 0:
            raise ValueError("price must be non-negative")

    @property
    def line_total(self) -> Decimal:
        """Unit price times quantity."""
        return multiply(self.price, self.quantity)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the JSON shape kept in storage (price as a decimal string)."""
        return {
            "id": self.id,
            "name": self.name,
            "price": str(self.price),
            "quantity": self.quantity,
            "image": self.image,
            "slug": self.slug,
        }

    def to_json(self) -> dict[str, Any]:
        """API shape: numeric price and line total."""
        return {
            **self.to_dict(),
            "price": to_float(self.price),
            "line_total": to_float(self.line_total),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CartLine":
        """
        Create from a stored record.

        Raises:
            KeyError: no id
            ValueError/TypeError: quantity not a positive integer or negative price
        """
        if data.get("id") in (None, ""):
            raise KeyError("id")
        quantity = data.get("quantity", 1)
        if isinstance(quantity, bool) or int(quantity) != quantity or int(quantity) < 1:
            raise ValueError(f"invalid quantity: {quantity!r}")
        return cls(
            id=str(data["id"]),
            name=str(data.get("name") or ""),
            price=to_decimal(data.get("price")),
            quantity=int(quantity),
            image=str(data.get("image") or ""),
            slug=str(data.get("slug") or ""),
        )


def cart_total(lines: list[CartLine]) -> Decimal:
    """Sum of price * quantity over all lines."""
    return sum((line.line_total for line in lines), Decimal("0"))


def cart_item_count(lines: list[CartLine]) -> int:
    """Sum of quantities over all lines."""
    return sum(line.quantity for line in lines)
