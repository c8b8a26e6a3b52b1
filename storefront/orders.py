"""Order accessors: listing, cash orders and hosted checkout sessions."""
from __future__ import annotations

from . import logger
from . import endpoints
from .http_client import HTTPClient

log = logger.get("ORDERS")


async def get_orders(client: HTTPClient, token: str) -> dict:
    """List all orders visible to the token."""
    return await client.get(endpoints.ORDERS, token=token)


async def get_user_orders(client: HTTPClient, token: str, user_id: str) -> list:
    """List one user's orders. The API answers with a bare list."""
    return await client.get(
        endpoints.path(endpoints.USER_ORDERS, user_id=user_id),
        token=token,
    )


async def create_cash_order(
    client: HTTPClient,
    token: str,
    cart_id: str,
    address_id: str,
) -> dict:
    """
    Place a cash-on-delivery order for a cart.

    The server turns the cart into an order and empties it.
    """
    log.info(f"Placing cash order for cart {cart_id}")
    return await client.post(
        endpoints.path(endpoints.CASH_ORDER, cart_id=cart_id),
        json=endpoints.cash_order_payload(address_id),
        token=token,
    )


async def create_checkout_session(
    client: HTTPClient,
    token: str,
    cart_id: str,
    return_url: str,
) -> dict:
    """
    Open a hosted payment session for a cart.

    Returns:
        Body with session.url, the external page to send the user to
    """
    log.info(f"Opening checkout session for cart {cart_id}")
    return await client.post(
        endpoints.path(endpoints.CHECKOUT_SESSION, cart_id=cart_id),
        params={"url": return_url},
        token=token,
    )


async def delete_order(client: HTTPClient, token: str, order_id: str) -> dict:
    log.info(f"Deleting order {order_id}")
    return await client.delete(
        endpoints.path(endpoints.ORDER, order_id=order_id),
        token=token,
    )
