"""
Orders Router

Order lookup for the account page (by customer) and the order-tracking
page (by order number or billing phone).
"""
from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from storefront.errors import ERROR_NO_ORDERS_FOR_PHONE, ERROR_ORDER_LOOKUP_REQUIRED, WooCommerceError

from .deps import get_woocommerce_client, upstream_error

router = APIRouter(tags=["orders"])


@router.get("/orders")
async def get_orders(
    order_id: Optional[int] = Query(None, ge=1),
    customer_id: Optional[int] = Query(None, ge=1),
    phone: Optional[str] = Query(None, max_length=32),
):
    """
    One lookup per call, first match wins: order_id, then customer_id, then phone.

    order_id and phone return a single order; customer_id returns a list.
    """
    if order_id is None and customer_id is None and not phone:
        raise HTTPException(status_code=400, detail=ERROR_ORDER_LOOKUP_REQUIRED)

    client = get_woocommerce_client()
    try:
        if order_id is not None:
            return (await client.get_order(order_id)).to_json()
        if customer_id is not None:
            return [o.to_json() for o in await client.get_customer_orders(customer_id)]
        order = await client.find_order_by_phone(phone)
    except WooCommerceError as e:
        raise upstream_error(e)

    if order is None:
        raise HTTPException(status_code=404, detail=ERROR_NO_ORDERS_FOR_PHONE)
    return order.to_json()
