"""Cart accessors.

Every call is a single round trip; the returned body is the server's
view of the cart after the operation.
"""
from __future__ import annotations

from . import logger
from . import endpoints
from .http_client import HTTPClient

log = logger.get("CART")


async def get_cart(client: HTTPClient, token: str) -> dict:
    """Get current cart contents."""
    return await client.get(endpoints.CART, token=token)


async def add_to_cart(
    client: HTTPClient,
    token: str,
    product_id: str,
    count: int = 1,
) -> dict:
    """
    Add product to cart.

    Adding a product that is already in the cart bumps its count
    server-side instead of creating a second line.

    Args:
        client: HTTP client
        token: Session token
        product_id: Product id
        count: Quantity to add

    Returns:
        Cart body from response
    """
    log.info(f"Adding {product_id} x{count}")
    payload = endpoints.cart_add_payload(product_id, count)
    return await client.post(endpoints.CART, json=payload, token=token)


async def update_cart_item(
    client: HTTPClient,
    token: str,
    product_id: str,
    count: int,
) -> dict:
    """Set the quantity of a cart line."""
    log.info(f"Setting {product_id} to x{count}")
    return await client.put(
        endpoints.path(endpoints.CART_ITEM, product_id=product_id),
        json=endpoints.cart_update_payload(count),
        token=token,
    )


async def remove_cart_item(client: HTTPClient, token: str, product_id: str) -> dict:
    """Remove a cart line."""
    log.info(f"Removing {product_id}")
    return await client.delete(
        endpoints.path(endpoints.CART_ITEM, product_id=product_id),
        token=token,
    )


async def clear_cart(client: HTTPClient, token: str) -> dict:
    """Clear all items from cart."""
    log.info("Clearing cart")
    return await client.delete(endpoints.CART, token=token)
