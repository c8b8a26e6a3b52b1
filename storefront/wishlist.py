"""Wishlist accessors."""
from __future__ import annotations

from . import endpoints
from .http_client import HTTPClient


async def get_wishlist(client: HTTPClient, token: str) -> dict:
    return await client.get(endpoints.WISHLIST, token=token)


async def add_to_wishlist(client: HTTPClient, token: str, product_id: str) -> dict:
    return await client.post(
        endpoints.WISHLIST,
        json=endpoints.wishlist_payload(product_id),
        token=token,
    )


async def remove_from_wishlist(client: HTTPClient, token: str, product_id: str) -> dict:
    return await client.delete(
        endpoints.path(endpoints.WISHLIST_ITEM, product_id=product_id),
        token=token,
    )
