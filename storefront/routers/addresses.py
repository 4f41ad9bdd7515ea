"""
Addresses Router

Saved billing/shipping addresses of a WooCommerce customer, used to
prefill checkout.
"""
from typing import Optional

from fastapi import APIRouter, HTTPException

from storefront.errors import ERROR_ADDRESS_REQUIRED, ERROR_CUSTOMER_REQUIRED, WooCommerceError

from .deps import get_woocommerce_client, upstream_error
from .models import AddressesUpdateRequest

router = APIRouter(prefix="/addresses", tags=["addresses"])


@router.get("")
async def get_addresses(customer_id: Optional[int] = None):
    if customer_id is None:
        raise HTTPException(status_code=400, detail=ERROR_CUSTOMER_REQUIRED)

    client = get_woocommerce_client()
    try:
        addresses = await client.get_customer_addresses(customer_id)
    except WooCommerceError as e:
        raise upstream_error(e)
    return addresses.to_json()


@router.put("")
async def update_addresses(request: AddressesUpdateRequest, customer_id: Optional[int] = None):
    """Body customer_id wins over the query parameter; only given fields are sent."""
    target = request.customer_id if request.customer_id is not None else customer_id
    if target is None:
        raise HTTPException(status_code=400, detail=ERROR_CUSTOMER_REQUIRED)

    billing = request.billing.model_dump(exclude_unset=True) if request.billing else None
    shipping = request.shipping.model_dump(exclude_unset=True) if request.shipping else None
    if not billing and not shipping:
        raise HTTPException(status_code=400, detail=ERROR_ADDRESS_REQUIRED)

    client = get_woocommerce_client()
    try:
        addresses = await client.update_customer_addresses(target, billing=billing, shipping=shipping)
    except WooCommerceError as e:
        raise upstream_error(e)
    return addresses.to_json()
