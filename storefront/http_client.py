"""Shared HTTP client with token auth and uniform error handling."""
from __future__ import annotations

from typing import Any, Optional

import httpx

from . import logger
from .endpoints import BASE_URL
from .errors import ApiError, MalformedResponseError, TransportError
from .headers import get_headers

log = logger.get("HTTP")

# Application-level failure marker the API puts in otherwise 2xx bodies
FAILURE_MARKER = ("statusMsg", "fail")

EMPTY_ERROR_BODY = "API returned an error with no body"
INVALID_JSON = "Invalid JSON response"
GENERIC_FAILURE = "Something went wrong"


def parse_response(response: httpx.Response) -> Any:
    """
    Turn a response into parsed JSON or raise a uniform error.

    Returns:
        Parsed body, or None for an empty 2xx body

    Raises:
        ApiError: Non-2xx status or failure marker in body
        MalformedResponseError: Body is not JSON
    """
    if not response.content:
        if not response.is_success:
            raise ApiError(EMPTY_ERROR_BODY, status_code=response.status_code)
        return None

    try:
        data = response.json()
    except ValueError:
        raise MalformedResponseError(INVALID_JSON)

    key, value = FAILURE_MARKER
    failed = isinstance(data, dict) and data.get(key) == value

    if not response.is_success or failed:
        message = data.get("message") if isinstance(data, dict) else None
        log.warning(f"API error ({response.status_code}): {message or GENERIC_FAILURE}")
        raise ApiError(
            message or GENERIC_FAILURE,
            status_code=response.status_code,
            payload=data,
        )

    return data


class HTTPClient:
    """Pooled async client for the commerce API. One attempt per call, no timeout."""

    def __init__(
        self,
        base_url: str = BASE_URL,
        http2: bool = True,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.http2 = http2
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None
        self._limits = httpx.Limits(
            max_keepalive_connections=20,
            max_connections=100,
            keepalive_expiry=30.0,
        )

    async def __aenter__(self) -> "HTTPClient":
        await self.start()
        return self

    async def __aexit__(self, *args) -> None:
        await self.close()

    async def start(self) -> None:
        """Initialize the client."""
        if self._client is None:
            client_kwargs = {
                "base_url": self.base_url,
                "http2": self.http2,
                "timeout": None,
                "limits": self._limits,
                "follow_redirects": True,
            }
            if self._transport is not None:
                client_kwargs["transport"] = self._transport

            self._client = httpx.AsyncClient(**client_kwargs)
            log.debug(f"HTTP client initialized for {self.base_url}")

    async def close(self) -> None:
        """Close the client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    @property
    def client(self) -> httpx.AsyncClient:
        """Get the underlying client."""
        if self._client is None:
            raise RuntimeError("Client not started. Call start() first.")
        return self._client

    async def request(
        self,
        method: str,
        path: str,
        json: Optional[dict] = None,
        params: Optional[dict] = None,
        token: Optional[str] = None,
    ) -> Any:
        """
        Make a single request and return the parsed body.

        Args:
            method: HTTP method
            path: Path relative to the API base URL
            json: JSON body
            params: Query string parameters
            token: Raw session token for the token header

        Returns:
            Parsed JSON body, or None for an empty successful response

        Raises:
            TransportError: Network failure
            MalformedResponseError: Non-JSON body
            ApiError: Rejected by the API
        """
        headers = get_headers(token=token, has_body=json is not None)
        log.debug(f"{method} {path}{' (auth)' if token else ''}")

        try:
            response = await self.client.request(
                method=method,
                url=path,
                headers=headers,
                json=json,
                params=params,
            )
        except httpx.RequestError as e:
            log.warning(f"Request error on {method} {path}: {e}")
            raise TransportError(f"Network error: {e}") from e

        return parse_response(response)

    async def get(self, path: str, **kwargs) -> Any:
        """GET request."""
        return await self.request("GET", path, **kwargs)

    async def post(self, path: str, **kwargs) -> Any:
        """POST request."""
        return await self.request("POST", path, **kwargs)

    async def put(self, path: str, **kwargs) -> Any:
        """PUT request."""
        return await self.request("PUT", path, **kwargs)

    async def delete(self, path: str, **kwargs) -> Any:
        """DELETE request."""
        return await self.request("DELETE", path, **kwargs)
