"""Session and token management.

The session owns the auth token: it exchanges credentials for one,
persists it through a token store and hands it to every accessor call
that needs it. Stores are injectable so tests never touch the disk.
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional, Protocol

from . import logger
from . import auth
from .errors import PreconditionError, StoreError, TokenStoreError
from .http_client import HTTPClient
from .models import User

log = logger.get("SESSION")

TOKEN_KEY = "userToken"
NOT_SIGNED_IN = "You must be signed in."


class AuthState(Enum):
    """Session states."""

    ANONYMOUS = "anonymous"
    AUTHENTICATING = "authenticating"
    AUTHENTICATED = "authenticated"
    ERROR = "error"


class TokenStore(Protocol):
    """Persistent key-value slot holding the raw token."""

    def load(self) -> Optional[str]: ...

    def save(self, token: str) -> None: ...

    def clear(self) -> None: ...


@dataclass
class MemoryTokenStore:
    """Token store kept in memory."""

    token: Optional[str] = field(default=None, repr=False)

    def load(self) -> Optional[str]:
        return self.token

    def save(self, token: str) -> None:
        self.token = token

    def clear(self) -> None:
        self.token = None


@dataclass
class FileTokenStore:
    """Token store backed by a JSON file with a single key."""

    path: Path

    def load(self) -> Optional[str]:
        if not self.path.exists():
            return None

        try:
            data = json.loads(self.path.read_text())
        except (json.JSONDecodeError, OSError) as e:
            log.warning(f"Unreadable token file {self.path}: {e}")
            return None

        if not isinstance(data, dict):
            return None
        return data.get(TOKEN_KEY) or None

    def save(self, token: str) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps({TOKEN_KEY: token}, indent=2))
        except OSError as e:
            raise TokenStoreError(f"Could not save session to {self.path}: {e}") from e
        log.debug(f"Saved token to {self.path}")

    def clear(self) -> None:
        if not self.path.exists():
            return
        try:
            self.path.unlink()
        except OSError as e:
            raise TokenStoreError(f"Could not remove session file {self.path}: {e}") from e
        log.debug(f"Removed token file {self.path}")


@dataclass
class Session:
    """Authentication state machine over a token store."""

    client: HTTPClient
    store: TokenStore = field(default_factory=MemoryTokenStore)
    state: AuthState = AuthState.ANONYMOUS
    user: Optional[User] = None
    error: Optional[str] = None
    _token: Optional[str] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        # Adopt a token left by an earlier run
        self._token = self.store.load()
        if self._token:
            self.state = AuthState.AUTHENTICATED
            log.debug("Restored stored token")

    @property
    def token(self) -> Optional[str]:
        return self._token

    @property
    def is_authenticated(self) -> bool:
        return self.state == AuthState.AUTHENTICATED and bool(self._token)

    def require_token(self) -> str:
        """Get the token or fail before any network call is made."""
        if not self.is_authenticated:
            raise PreconditionError(NOT_SIGNED_IN)
        return self._token

    async def sign_in(self, email: str, password: str) -> User:
        """
        Exchange credentials for a token and persist it.

        Raises:
            AuthenticationError: Credentials rejected
            TransportError: API unreachable
            TokenStoreError: Token could not be persisted
        """
        self.state = AuthState.AUTHENTICATING
        self.error = None
        log.info(f"Signing in as {email}")

        try:
            data = await auth.sign_in(self.client, email, password)
            self.store.save(data["token"])
        except StoreError as e:
            self._reset(AuthState.ERROR)
            self.error = e.message
            log.warning(f"Sign-in failed: {e.message}")
            raise

        self._token = data["token"]
        self.user = User.from_api(data.get("user") or {})
        self.state = AuthState.AUTHENTICATED
        log.success(f"Signed in as {self.user.name or email}")
        return self.user

    async def register(
        self,
        name: str,
        email: str,
        password: str,
        re_password: str,
        phone: str,
    ) -> dict:
        """Create an account. The session stays as it was; sign in afterwards."""
        data = await auth.sign_up(self.client, name, email, password, re_password, phone)
        log.success(f"Registered {email}")
        return data

    def _reset(self, state: AuthState) -> None:
        """Drop the in-memory token, then the stored one."""
        self._token = None
        self.user = None
        self.state = state
        try:
            self.store.clear()
        except TokenStoreError as e:
            log.warning(e.message)

    def sign_out(self) -> None:
        """
        Forget the token, locally and in the store.

        Raises:
            TokenStoreError: The stored token could not be removed
        """
        self._token = None
        self.user = None
        self.error = None
        self.state = AuthState.ANONYMOUS
        self.store.clear()
        log.info("Signed out")
