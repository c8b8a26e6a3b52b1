"""Category, subcategory and brand accessors."""
from __future__ import annotations

from . import endpoints
from .http_client import HTTPClient


async def get_categories(client: HTTPClient) -> dict:
    return await client.get(endpoints.CATEGORIES)


async def get_category(client: HTTPClient, category_id: str) -> dict:
    return await client.get(endpoints.path(endpoints.CATEGORY, category_id=category_id))


async def get_subcategories(client: HTTPClient, category_id: str) -> dict:
    """
    List subcategories of a category.

    The API answers with an empty body for categories without
    subcategories; that comes back as an empty collection.
    """
    data = await client.get(
        endpoints.path(endpoints.SUBCATEGORIES, category_id=category_id)
    )
    return data if data is not None else {"results": 0, "data": []}


async def get_brands(client: HTTPClient) -> dict:
    return await client.get(endpoints.BRANDS)


async def get_brand(client: HTTPClient, brand_id: str) -> dict:
    return await client.get(endpoints.path(endpoints.BRAND, brand_id=brand_id))
