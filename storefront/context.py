"""Store context: the one object every page receives."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

import httpx

from . import logger
from .config import Config
from .http_client import HTTPClient
from .notifier import Notifier
from .session import FileTokenStore, Session, TokenStore

log = logger.get("CONTEXT")


@dataclass
class StoreContext:
    """Config, HTTP client, session and notice channel bundled together."""

    config: Config
    client: HTTPClient
    session: Session
    notifier: Notifier = field(default_factory=Notifier)

    @classmethod
    def create(
        cls,
        config: Optional[Config] = None,
        store: Optional[TokenStore] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        notifier: Optional[Notifier] = None,
    ) -> StoreContext:
        """
        Wire a context from config.

        Args:
            config: Settings; defaults to Config.load()
            store: Token store; defaults to a file store at config.token_path
            transport: httpx transport override (tests)
            notifier: Notice channel; a fresh one if omitted
        """
        config = config or Config.load()
        client = HTTPClient(
            base_url=config.api_url,
            http2=config.http2,
            transport=transport,
        )
        session = Session(client=client, store=store or FileTokenStore(config.token_path))
        log.debug(f"Context ready (session: {session.state.value})")
        return cls(
            config=config,
            client=client,
            session=session,
            notifier=notifier or Notifier(),
        )

    async def __aenter__(self) -> StoreContext:
        await self.client.start()
        return self

    async def __aexit__(self, *args) -> None:
        await self.client.close()
