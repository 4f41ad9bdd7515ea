"""Storefront API routers."""
from fastapi import APIRouter

from .addresses import router as addresses_router
from .cart import router as cart_router
from .catalog import router as catalog_router
from .checkout import router as checkout_router
from .orders import router as orders_router
from .wishlist import router as wishlist_router

router = APIRouter()
router.include_router(cart_router)
router.include_router(wishlist_router)
router.include_router(catalog_router)
router.include_router(checkout_router)
router.include_router(orders_router)
router.include_router(addresses_router)

__all__ = ["router"]
