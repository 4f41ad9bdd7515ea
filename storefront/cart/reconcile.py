"""
Legacy-ID reconciliation.

An earlier static catalog namespaced product ids with a one-character prefix
("p12"). Carts persisted back then still carry those ids; WooCommerce ids are
positive integers. The reconciler runs once per process start: it strips the
prefix, evicts lines whose id is still not a positive integer and writes the
cleaned cart back.
"""
from dataclasses import dataclass, field, replace
from typing import Optional, TYPE_CHECKING

from storefront import config
from storefront.cart.models import CartLine
from storefront.logging import get_logger, sanitize_id_for_logging, sanitize_string_for_logging

if TYPE_CHECKING:
    from storefront.cart.service import CartManager

logger = get_logger(__name__)


def normalize_product_id(raw, prefix: Optional[str] = None) -> Optional[str]:
    """
    Canonical WooCommerce product id for a stored or incoming id.

    Strips one leading legacy prefix, then parses base-10.

    Returns:
        The id as a plain positive integer string, or None if invalid
    """
    if raw is None:
        return None
    prefix = config.LEGACY_ID_PREFIX if prefix is None else prefix
    value = str(raw).strip()
    if prefix and value.startswith(prefix):
        value = value[len(prefix):]
    try:
        number = int(value, 10)
    except ValueError:
        return None
    if number <= 0:
        return None
    return str(number)


@dataclass
class ReconcileResult:
    """Outcome of one reconciliation pass."""
    kept: list[CartLine] = field(default_factory=list)
    evicted: list[CartLine] = field(default_factory=list)
    rewritten: int = 0
    merged: int = 0

    @property
    def changed(self) -> bool:
        return bool(self.evicted or self.rewritten or self.merged)


def reconcile_lines(lines: list[CartLine], prefix: Optional[str] = None) -> ReconcileResult:
    """Pure part of the pass: classify lines without touching storage."""
    result = ReconcileResult()
    by_id: dict[str, CartLine] = {}

    for line in lines:
        product_id = normalize_product_id(line.id, prefix)
        if product_id is None:
            logger.info(
                "Removing invalid cart item: %s %s",
                sanitize_id_for_logging(line.id),
                sanitize_string_for_logging(line.name),
            )
            result.evicted.append(line)
            continue

        if product_id != line.id:
            result.rewritten += 1

        # "p5" and "5" are the same product once stripped
        existing = by_id.get(product_id)
        if existing is not None:
            existing.quantity += line.quantity
            result.merged += 1
            continue

        cleaned = replace(line, id=product_id)
        by_id[product_id] = cleaned
        result.kept.append(cleaned)

    return result


def reconcile_cart(cart: "CartManager", prefix: Optional[str] = None) -> ReconcileResult:
    """
    Run the reconciliation against the stored cart.

    Writes back only when something was evicted, rewritten or merged.
    """
    lines = cart.get_cart()
    result = reconcile_lines(lines, prefix)

    if result.changed:
        cart.store.write(result.kept)
        logger.info(
            "Cleaned cart: %d invalid removed, %d ids rewritten, %d merged",
            len(result.evicted),
            result.rewritten,
            result.merged,
        )

    return result
