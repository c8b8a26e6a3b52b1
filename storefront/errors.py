"""Error taxonomy for storefront operations.

Every failure a page can surface derives from StoreError, so callers
only ever need one except clause to turn a failure into a notice.
"""
from __future__ import annotations

from typing import Any, Optional


class StoreError(Exception):
    """Base class for all storefront failures."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class TransportError(StoreError):
    """The API could not be reached."""


class MalformedResponseError(StoreError):
    """The API answered with a body that is not JSON."""


class ApiError(StoreError):
    """The API rejected the request (HTTP error or failure marker in body)."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        payload: Any = None,
    ):
        self.status_code = status_code
        self.payload = payload
        super().__init__(message)


class AuthenticationError(ApiError):
    """Credentials were rejected or no token came back."""


class PreconditionError(StoreError):
    """Something required locally (token, cart, address) is missing."""


class TokenStoreError(StoreError):
    """The token could not be written to or removed from its store."""
