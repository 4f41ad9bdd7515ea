"""Cart manager: read-modify-write operations over the persisted cart."""
from dataclasses import replace
from decimal import Decimal
from typing import Any, Callable, Optional, Union

from storefront.cart.models import CartLine, cart_item_count, cart_total
from storefront.cart.reconcile import normalize_product_id
from storefront.cart.store import JsonListStore
from storefront.errors import ERROR_INVALID_QUANTITY, InvalidProductError
from storefront.logging import get_logger, sanitize_id_for_logging
from storefront.services.currency import CurrencyFormatter
from storefront.services.money import to_float

logger = get_logger(__name__)


class CartManager:
    """
    Manages the shopping cart kept in a JsonListStore.

    Every mutation reads the stored list, changes it, writes it back and
    returns the full updated list. Writes publish "cart-updated" on the
    store's broadcaster.
    """

    def __init__(self, store: JsonListStore[CartLine]):
        self.store = store

    def subscribe(self, listener: Callable[[list[CartLine]], None]) -> Callable[[], None]:
        return self.store.broadcaster.subscribe(listener)

    def get_cart(self) -> list[CartLine]:
        return self.store.read()

    def add_item(self, item: Union[CartLine, dict[str, Any]], quantity: int = 1) -> list[CartLine]:
        """
        Add a product, merging with an existing line of the same id.

        Raises:
            InvalidProductError: id is not a WooCommerce product id
            ValueError: quantity is not a positive integer
        """
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
            raise ValueError(ERROR_INVALID_QUANTITY)

        raw_id = item.id if isinstance(item, CartLine) else item.get("id")
        product_id = normalize_product_id(raw_id)
        if product_id is None:
            logger.warning("Rejected add-to-cart for invalid id %s", sanitize_id_for_logging(str(raw_id)))
            raise InvalidProductError(product_id=None if raw_id is None else str(raw_id))

        if isinstance(item, CartLine):
            line = replace(item, id=product_id, quantity=quantity)
        else:
            line = CartLine.from_dict({**item, "id": product_id, "quantity": quantity})

        cart = self.store.read()
        existing = next((i for i in cart if i.id == product_id), None)
        if existing:
            existing.quantity += quantity
        else:
            cart.append(line)

        return self.store.write(cart)

    def remove_item(self, product_id: str) -> list[CartLine]:
        cart = [i for i in self.store.read() if i.id != str(product_id)]
        return self.store.write(cart)

    def update_quantity(self, product_id: str, quantity: int) -> list[CartLine]:
        """
        Set a line's quantity; zero or below removes it. Unknown ids are a no-op.

        Raises:
            ValueError: quantity is not an integer
        """
        if isinstance(quantity, bool) or not isinstance(quantity, int):
            raise ValueError(ERROR_INVALID_QUANTITY)
        product_id = str(product_id)
        cart = self.store.read()
        line = next((i for i in cart if i.id == product_id), None)
        if line is None:
            return cart
        if quantity <= 0:
            return self.remove_item(product_id)
        line.quantity = quantity
        return self.store.write(cart)

    def clear(self) -> list[CartLine]:
        return self.store.write([])

    def total(self, lines: Optional[list[CartLine]] = None) -> Decimal:
        return cart_total(self.get_cart() if lines is None else lines)

    def item_count(self, lines: Optional[list[CartLine]] = None) -> int:
        return cart_item_count(self.get_cart() if lines is None else lines)

    def summary(self, formatter: CurrencyFormatter, lines: Optional[list[CartLine]] = None) -> dict:
        """Cart summary with display strings for the API."""
        lines = self.get_cart() if lines is None else lines
        total = cart_total(lines)
        return {
            "items": [
                {
                    **line.to_json(),
                    "line_total_display": formatter.format(line.line_total),
                }
                for line in lines
            ],
            "item_count": cart_item_count(lines),
            "total": to_float(total),
            "total_display": formatter.format(total),
            "currency": formatter.currency,
        }
