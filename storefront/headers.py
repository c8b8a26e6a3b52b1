"""Request headers for the commerce API."""
from __future__ import annotations

from typing import Optional

from . import __version__
from .endpoints import TOKEN_HEADER

USER_AGENT = f"storefront/{__version__}"


def get_headers(token: Optional[str] = None, has_body: bool = False) -> dict:
    """
    Get headers for an API request.

    Args:
        token: Raw session token, sent as-is in the custom token header
        has_body: Whether the request carries a JSON body
    """
    headers = {
        "User-Agent": USER_AGENT,
        "Accept": "application/json, text/plain, */*",
    }

    if has_body:
        headers["Content-Type"] = "application/json"

    if token:
        headers[TOKEN_HEADER] = token

    return headers
