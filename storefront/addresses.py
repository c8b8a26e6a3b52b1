"""Shipping address accessors. Addresses are created and deleted, never edited."""
from __future__ import annotations

from . import endpoints
from .http_client import HTTPClient


async def get_addresses(client: HTTPClient, token: str) -> dict:
    return await client.get(endpoints.ADDRESSES, token=token)


async def get_address(client: HTTPClient, token: str, address_id: str) -> dict:
    return await client.get(
        endpoints.path(endpoints.ADDRESS, address_id=address_id),
        token=token,
    )


async def add_address(
    client: HTTPClient,
    token: str,
    name: str,
    details: str,
    phone: str,
    city: str,
) -> dict:
    return await client.post(
        endpoints.ADDRESSES,
        json=endpoints.address_payload(name, details, phone, city),
        token=token,
    )


async def remove_address(client: HTTPClient, token: str, address_id: str) -> dict:
    return await client.delete(
        endpoints.path(endpoints.ADDRESS, address_id=address_id),
        token=token,
    )
