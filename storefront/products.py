"""Product accessors."""
from __future__ import annotations

from . import logger
from . import endpoints
from .http_client import HTTPClient

log = logger.get("PRODUCTS")


async def get_products(client: HTTPClient, **filters: str) -> dict:
    """
    List products, optionally filtered.

    Args:
        client: HTTP client
        filters: At most one of brand/category/subcategory ids

    Returns:
        Collection body ({"results": n, "data": [...]})
    """
    params = {k: v for k, v in filters.items() if v} or None
    log.debug(f"Fetching products {params or ''}")
    return await client.get(endpoints.PRODUCTS, params=params)


async def get_product(client: HTTPClient, product_id: str) -> dict:
    """Get a single product ({"data": {...}})."""
    return await client.get(endpoints.path(endpoints.PRODUCT, product_id=product_id))


async def get_products_by_brand(client: HTTPClient, brand_id: str) -> dict:
    return await get_products(client, brand=brand_id)


async def get_products_by_category(client: HTTPClient, category_id: str) -> dict:
    return await get_products(client, category=category_id)


async def get_products_by_subcategory(client: HTTPClient, subcategory_id: str) -> dict:
    return await get_products(client, subcategory=subcategory_id)
