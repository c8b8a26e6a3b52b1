"""Shared fixtures: a seeded fake API and contexts wired to it."""

import pytest
import pytest_asyncio

from storefront.config import Config
from storefront.context import StoreContext
from storefront.session import MemoryTokenStore
from tests.fakes import BASE_URL, RETURN_URL, VALID_EMAIL, VALID_PASSWORD, FakeStoreApi


@pytest.fixture
def api():
    """Fresh fake backend with a small catalog and one user."""
    return FakeStoreApi.seeded()


@pytest.fixture
def config(tmp_path):
    return Config(
        api_url=BASE_URL,
        token_path=tmp_path / "session.json",
        return_url=RETURN_URL,
        http2=False,
    )


@pytest_asyncio.fixture
async def ctx(api, config):
    """Anonymous context talking to the fake backend."""
    async with StoreContext.create(
        config=config,
        store=MemoryTokenStore(),
        transport=api.transport(),
    ) as context:
        yield context


@pytest_asyncio.fixture
async def signed_in(ctx, api):
    """Context with a signed-in session; sign-in traffic and notices cleared."""
    await ctx.session.sign_in(VALID_EMAIL, VALID_PASSWORD)
    ctx.notifier.drain()
    api.requests.clear()
    return ctx
