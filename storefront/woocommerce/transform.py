"""Pure transformations from WooCommerce / WordPress REST payloads."""
import re
from decimal import Decimal
from typing import Any, Iterable, Optional

from storefront.logging import get_logger
from storefront.services.money import discount_percent, to_decimal, to_float
from storefront.woocommerce.models import (
    FREE_SHIPPING_FALLBACK,
    Category,
    MenuItem,
    Order,
    OrderLineItem,
    Product,
    ProductAttribute,
    ShippingMethod,
    ShippingZone,
)

logger = get_logger(__name__)

PLACEHOLDER_IMAGE = "https://images.unsplash.com/photo-1505740420928-5e560c06d30e?w=500&h=500&fit=crop"

_TAG_RE = re.compile(r"<[^>]*>")
_BRAND_SLUG_RE = re.compile(r"(^|[_-])(brand|productbrand|yith_brand)(-|$)")
_BRAND_META_KEYS = ("brand", "_brand", "product_brand", "yith_product_brand")
SUPPORTED_SHIPPING_METHODS = ("flat_rate", "free_shipping")


def strip_tags(value: Optional[str]) -> str:
    return _TAG_RE.sub("", value or "")


def https_image(url: Optional[str]) -> Optional[str]:
    """Upgrade http:// image URLs so they load on an https storefront."""
    if not url:
        return None
    if url.startswith("http://"):
        return "https://" + url[len("http://"):]
    return url


def _option_name(option: Any) -> str:
    if isinstance(option, str):
        return option
    if isinstance(option, dict):
        return str(option.get("name") or option.get("title") or "")
    return ""


def extract_brand(product: dict[str, Any]) -> Optional[str]:
    """
    Brand from a "brand" attribute first, then from plugin meta keys.

    Meta values may be a string, an object with name/title or a list of those.
    """
    attributes = product.get("attributes") if isinstance(product.get("attributes"), list) else []
    for attr in attributes:
        if not isinstance(attr, dict):
            continue
        name = str(attr.get("name") or "").lower()
        slug = str(attr.get("slug") or "").lower()
        if name == "brand" or _BRAND_SLUG_RE.search(slug):
            options = attr.get("options") or []
            if options and isinstance(options[0], str):
                return options[0]
            break

    meta = product.get("meta_data") if isinstance(product.get("meta_data"), list) else []
    for entry in meta:
        if not isinstance(entry, dict):
            continue
        if str(entry.get("key") or "").lower() not in _BRAND_META_KEYS:
            continue
        value = entry.get("value")
        if isinstance(value, str) and value.strip():
            return value.strip()
        if isinstance(value, list) and value:
            value = value[0]
        if isinstance(value, dict):
            name = _option_name(value)
            return name or None
        return None

    return None


def transform_product(product: dict[str, Any]) -> Product:
    """Reshape one WooCommerce product for the storefront."""
    price = to_decimal(product.get("price"))
    regular = product.get("regular_price")
    original_price = to_decimal(regular) if regular not in (None, "") else price
    sale = product.get("sale_price")
    discount = discount_percent(regular, sale) if sale not in (None, "") else 0

    categories = product.get("categories") or []
    category = (categories[0].get("slug") if categories and isinstance(categories[0], dict) else None)

    images = [
        https_image(img.get("src")) for img in (product.get("images") or []) if isinstance(img, dict) and img.get("src")
    ]

    attributes = [
        ProductAttribute(
            name=attr.get("name"),
            options=[o for o in (_option_name(opt) for opt in (attr.get("options") or [])) if o],
        )
        for attr in (product.get("attributes") or [])
        if isinstance(attr, dict)
    ]

    short_description = strip_tags(product.get("short_description"))
    description = short_description or strip_tags(product.get("description"))

    return Product(
        id=str(product["id"]),
        name=product.get("name") or "",
        slug=product.get("slug") or "",
        category=category or "uncategorized",
        price=to_float(price),
        original_price=to_float(original_price),
        discount=discount,
        image=images[0] if images else PLACEHOLDER_IMAGE,
        rating=to_float(product.get("average_rating")),
        in_stock=product.get("stock_status") == "instock",
        description=description,
        full_description=product.get("description") or "",
        images=images,
        brand=extract_brand(product),
        attributes=attributes,
    )


def transform_category(category: dict[str, Any]) -> Category:
    image = category.get("image") if isinstance(category.get("image"), dict) else {}
    return Category(
        id=int(category["id"]),
        name=category.get("name") or "",
        slug=category.get("slug") or "",
        image=https_image(image.get("src")),
        description=strip_tags(category.get("description")),
        count=int(category.get("count") or 0),
    )


def transform_zones(zones: Iterable[dict[str, Any]]) -> list[ShippingZone]:
    return [ShippingZone(id=int(z["id"]), name=z.get("name") or "") for z in zones if isinstance(z, dict)]


def _is_enabled(flag: Any) -> bool:
    if isinstance(flag, str):
        return flag == "yes"
    return bool(flag)


def _flat_rate_cost(settings: Any) -> float:
    """settings.cost is either {"value": "5.00"} or a bare value."""
    if not isinstance(settings, dict):
        return 0.0
    raw = settings.get("cost")
    if isinstance(raw, dict):
        raw = raw.get("value")
    if raw in (None, ""):
        return 0.0
    try:
        return float(Decimal(str(raw).strip()))
    except ArithmeticError:
        # Woo allows formulas like "10 * [qty]"; those cannot be priced here
        return 0.0


def simplify_shipping_methods(methods: Iterable[dict[str, Any]]) -> list[ShippingMethod]:
    """Keep enabled flat_rate / free_shipping methods with their cost."""
    simplified = []
    for method in methods:
        if not isinstance(method, dict):
            continue
        method_id = str(method.get("method_id") or "")
        if not _is_enabled(method.get("enabled")) or method_id not in SUPPORTED_SHIPPING_METHODS:
            continue
        cost = _flat_rate_cost(method.get("settings")) if method_id == "flat_rate" else 0.0
        default_title = "Free shipping" if method_id == "free_shipping" else "Shipping"
        simplified.append(
            ShippingMethod(
                instance_id=int(method.get("id") or 0),
                method_id=method_id,
                title=str(method.get("title") or default_title),
                cost=cost,
            )
        )
    return simplified


def with_free_shipping_fallback(methods: list[ShippingMethod]) -> list[ShippingMethod]:
    return methods if methods else [FREE_SHIPPING_FALLBACK.model_copy()]


def choose_default_method(methods: list[ShippingMethod]) -> Optional[ShippingMethod]:
    """Prefer free shipping, else the cheapest method."""
    if not methods:
        return None
    free = next((m for m in methods if m.method_id == "free_shipping"), None)
    if free:
        return free
    return min(methods, key=lambda m: m.cost or 0)


def transform_menu_items(raw_items: Iterable[dict[str, Any]]) -> list[MenuItem]:
    """Flatten WordPress menu rows (ID/title/url/menu_item_parent)."""
    items = []
    for raw in raw_items:
        if not isinstance(raw, dict):
            continue
        order = raw.get("menu_order")
        items.append(
            MenuItem(
                id=int(raw.get("ID", raw.get("id", 0))),
                title=str(raw.get("title") or ""),
                url=str(raw.get("url") or "#"),
                menu_item_parent=int(raw.get("menu_item_parent") or 0),
                menu_order=order if isinstance(order, int) and not isinstance(order, bool) else None,
            )
        )
    return items


def build_menu_tree(items: list[MenuItem]) -> list[MenuItem]:
    """
    Nest menu items under their parents, sorted by menu_order at every level.

    Items whose parent is missing, and items on a parent cycle, become roots.
    """
    nodes = {item.id: item.model_copy(update={"children": []}) for item in items}
    tree: list[MenuItem] = []

    def on_cycle(node_id: int) -> bool:
        seen = set()
        current = nodes[node_id].menu_item_parent
        while current in nodes and current not in seen:
            if current == node_id:
                return True
            seen.add(current)
            current = nodes[current].menu_item_parent
        return False

    for node in nodes.values():
        parent_id = node.menu_item_parent
        if parent_id and parent_id in nodes and not on_cycle(node.id):
            nodes[parent_id].children.append(node)
        else:
            tree.append(node)

    def sort_nodes(level: list[MenuItem]) -> None:
        level.sort(key=lambda n: n.menu_order or 0)
        for n in level:
            if n.children:
                sort_nodes(n.children)

    sort_nodes(tree)
    return tree


def transform_order(order: dict[str, Any]) -> Order:
    """Reshape a WooCommerce order for the account and tracking pages."""
    items = []
    for item in order.get("line_items") or []:
        if not isinstance(item, dict):
            continue
        image = item.get("image") if isinstance(item.get("image"), dict) else {}
        items.append(
            OrderLineItem(
                id=str(item.get("id", "")),
                name=item.get("name") or "",
                quantity=int(item.get("quantity") or 0),
                price=to_float(item.get("price")),
                total=to_float(item.get("total")),
                image=image.get("src") or "",
            )
        )

    return Order(
        id=str(order["id"]),
        order_number=str(order.get("number") or order["id"]),
        date=order.get("date_created"),
        status=order.get("status") or "",
        total=to_float(order.get("total")),
        currency=order.get("currency") or "",
        items=items,
        billing=order.get("billing") if isinstance(order.get("billing"), dict) else {},
        shipping=order.get("shipping") if isinstance(order.get("shipping"), dict) else {},
        payment_method=order.get("payment_method_title") or "",
    )


def phone_digits(phone: Optional[str]) -> str:
    return "".join(ch for ch in str(phone or "") if ch.isdigit())


def phone_matches(order_phone: Optional[str], query: Optional[str]) -> bool:
    """
    Billing phone ends with the query's last ten digits.

    Comparing suffixes lets "+880 1712-345678" match "01712345678".
    """
    wanted = phone_digits(query)[-10:]
    have = phone_digits(order_phone)
    return bool(wanted and have) and have.endswith(wanted)
