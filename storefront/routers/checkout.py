"""
Checkout Router

Submits the session cart as a cash-on-delivery WooCommerce order.
"""
from fastapi import APIRouter, Depends, HTTPException

from storefront.app import Storefront
from storefront.checkout import CheckoutService
from storefront.errors import CheckoutError, EmptyCartError, InvalidProductError, WooCommerceError
from storefront.logging import get_logger
from storefront.woocommerce.transform import choose_default_method, with_free_shipping_fallback

from .deps import get_storefront, get_woocommerce_client
from .models import CheckoutRequest

logger = get_logger(__name__)

router = APIRouter(tags=["checkout"])


@router.post("/checkout")
async def place_order(request: CheckoutRequest, storefront: Storefront = Depends(get_storefront)):
    client = get_woocommerce_client()

    shipping_method = None
    if request.shipping_zone_id is not None:
        try:
            methods = await client.get_shipping_methods(request.shipping_zone_id)
        except WooCommerceError as e:
            logger.warning("Shipping methods unavailable at checkout: %s", e)
            methods = []
        shipping_method = choose_default_method(with_free_shipping_fallback(methods))

    service = CheckoutService(client, storefront.cart)
    try:
        confirmation = await service.place_order(
            billing=request.billing.model_dump(exclude_none=True),
            shipping=request.shipping.model_dump(exclude_none=True) if request.shipping else None,
            customer_id=request.customer_id,
            shipping_method=shipping_method,
        )
    except (InvalidProductError, EmptyCartError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    except CheckoutError as e:
        raise HTTPException(status_code=502, detail=str(e))

    return {
        **confirmation.to_json(),
        "message": f"Order #{confirmation.order_number} placed successfully!",
    }
