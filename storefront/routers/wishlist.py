"""
Wishlist Router

Wishlist of the session's current identity (X-User-Id, or guest).
"""
from fastapi import APIRouter, Depends

from storefront.app import Storefront

from .deps import get_storefront
from .models import WishlistItemRequest

router = APIRouter(prefix="/wishlist", tags=["wishlist"])


def _response(storefront: Storefront, items=None) -> dict:
    items = storefront.wishlist.items() if items is None else items
    return {
        "owner": storefront.wishlist.key,
        "items": [i.to_json() for i in items],
        "count": len(items),
    }


@router.get("")
async def get_wishlist(storefront: Storefront = Depends(get_storefront)):
    return _response(storefront)


@router.post("/items")
async def add_to_wishlist(request: WishlistItemRequest, storefront: Storefront = Depends(get_storefront)):
    items = storefront.wishlist.add(request.model_dump())
    return _response(storefront, items)


@router.post("/toggle")
async def toggle_wishlist(request: WishlistItemRequest, storefront: Storefront = Depends(get_storefront)):
    """Add if absent, remove if present."""
    wished = storefront.wishlist.toggle(request.model_dump())
    return {**_response(storefront), "wished": wished}


@router.get("/items/{product_id}")
async def is_wished(product_id: str, storefront: Storefront = Depends(get_storefront)):
    return {"id": product_id, "wished": storefront.wishlist.is_wished(product_id)}


@router.delete("/items/{product_id}")
async def remove_from_wishlist(product_id: str, storefront: Storefront = Depends(get_storefront)):
    items = storefront.wishlist.remove(product_id)
    return _response(storefront, items)


@router.delete("")
async def clear_wishlist(storefront: Storefront = Depends(get_storefront)):
    items = storefront.wishlist.clear()
    return _response(storefront, items)
