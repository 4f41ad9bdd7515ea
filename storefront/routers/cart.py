"""
Cart Router

Cart endpoints for the current browser session. Every response carries the
full cart with totals formatted in the store currency.
"""
from fastapi import APIRouter, Depends, HTTPException

from storefront.app import Storefront
from storefront.errors import InvalidProductError
from storefront.logging import get_logger

from .deps import get_storefront
from .models import AddToCartRequest, UpdateCartItemRequest

logger = get_logger(__name__)

router = APIRouter(prefix="/cart", tags=["cart"])


@router.get("")
async def get_cart(storefront: Storefront = Depends(get_storefront)):
    """Current cart with totals."""
    return storefront.cart.summary(storefront.formatter)


@router.post("/items")
async def add_to_cart(request: AddToCartRequest, storefront: Storefront = Depends(get_storefront)):
    """Add a product; an existing line's quantity is increased."""
    item = request.model_dump(exclude={"quantity"})
    try:
        lines = storefront.cart.add_item(item, request.quantity)
    except InvalidProductError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return storefront.cart.summary(storefront.formatter, lines)


@router.patch("/items/{product_id}")
async def update_cart_item(
    product_id: str,
    request: UpdateCartItemRequest,
    storefront: Storefront = Depends(get_storefront),
):
    """Set a line's quantity; zero removes it."""
    lines = storefront.cart.update_quantity(product_id, request.quantity)
    return storefront.cart.summary(storefront.formatter, lines)


@router.delete("/items/{product_id}")
async def remove_cart_item(product_id: str, storefront: Storefront = Depends(get_storefront)):
    lines = storefront.cart.remove_item(product_id)
    return storefront.cart.summary(storefront.formatter, lines)


@router.delete("")
async def clear_cart(storefront: Storefront = Depends(get_storefront)):
    lines = storefront.cart.clear()
    return storefront.cart.summary(storefront.formatter, lines)
