"""Authentication and user accessors."""
from __future__ import annotations

from . import logger
from . import endpoints
from .errors import ApiError, AuthenticationError
from .http_client import HTTPClient

log = logger.get("AUTH")

INVALID_CREDENTIALS = "Invalid credentials"


async def sign_in(client: HTTPClient, email: str, password: str) -> dict:
    """
    Exchange credentials for a token.

    Returns:
        Body with "token" and "user"

    Raises:
        AuthenticationError: Rejected credentials or no token in reply
    """
    try:
        data = await client.post(
            endpoints.SIGNIN,
            json=endpoints.signin_payload(email, password),
        )
    except ApiError as e:
        raise AuthenticationError(
            e.message or INVALID_CREDENTIALS,
            status_code=e.status_code,
            payload=e.payload,
        ) from e

    if not isinstance(data, dict) or not data.get("token"):
        log.warning("Sign-in reply carried no token")
        raise AuthenticationError(INVALID_CREDENTIALS, payload=data)

    return data


async def sign_up(
    client: HTTPClient,
    name: str,
    email: str,
    password: str,
    re_password: str,
    phone: str,
) -> dict:
    """Register a new account."""
    return await client.post(
        endpoints.SIGNUP,
        json=endpoints.signup_payload(name, email, password, re_password, phone),
    )


async def get_me(client: HTTPClient, token: str) -> dict:
    """Get the signed-in user's profile ({"data": {...}})."""
    return await client.get(endpoints.ME, token=token)
