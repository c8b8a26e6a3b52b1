"""Session state machine and token stores."""

import json

import pytest

from storefront.errors import AuthenticationError, PreconditionError, TokenStoreError
from storefront.session import (
    TOKEN_KEY,
    AuthState,
    FileTokenStore,
    MemoryTokenStore,
    Session,
)
from tests.fakes import VALID_EMAIL, VALID_PASSWORD


class TestFileTokenStore:

    def test_save_load_clear(self, tmp_path):
        store = FileTokenStore(tmp_path / "nested" / "session.json")
        assert store.load() is None

        store.save("abc")
        assert json.loads(store.path.read_text()) == {TOKEN_KEY: "abc"}
        assert store.load() == "abc"

        store.clear()
        assert not store.path.exists()
        assert store.load() is None

    def test_unreadable_file_is_no_token(self, tmp_path):
        path = tmp_path / "session.json"
        path.write_text("{not json")
        assert FileTokenStore(path).load() is None


class TestSignIn:

    @pytest.mark.asyncio
    async def test_valid_credentials_persist_token(self, ctx):
        user = await ctx.session.sign_in(VALID_EMAIL, VALID_PASSWORD)

        assert ctx.session.state == AuthState.AUTHENTICATED
        assert ctx.session.token == f"tok-{VALID_EMAIL}"
        assert ctx.session.store.load() == f"tok-{VALID_EMAIL}"
        assert user.name == "Ada"

    @pytest.mark.asyncio
    async def test_invalid_credentials_leave_no_token(self, ctx):
        with pytest.raises(AuthenticationError):
            await ctx.session.sign_in(VALID_EMAIL, "wrong")

        assert ctx.session.state == AuthState.ERROR
        assert ctx.session.token is None
        assert ctx.session.store.load() is None
        assert ctx.session.error == "Incorrect email or password"

    @pytest.mark.asyncio
    async def test_failed_retry_drops_previous_token(self, ctx):
        await ctx.session.sign_in(VALID_EMAIL, VALID_PASSWORD)

        with pytest.raises(AuthenticationError):
            await ctx.session.sign_in(VALID_EMAIL, "wrong")

        assert ctx.session.store.load() is None
        assert not ctx.session.is_authenticated

    @pytest.mark.asyncio
    async def test_file_store_persists_across_sessions(self, ctx, tmp_path):
        store = FileTokenStore(tmp_path / "session.json")
        session = Session(client=ctx.client, store=store)
        await session.sign_in(VALID_EMAIL, VALID_PASSWORD)

        restored = Session(client=ctx.client, store=FileTokenStore(tmp_path / "session.json"))
        assert restored.state == AuthState.AUTHENTICATED
        assert restored.require_token() == f"tok-{VALID_EMAIL}"


class TestSessionLifecycle:

    @pytest.mark.asyncio
    async def test_starts_anonymous_with_empty_store(self, ctx):
        assert ctx.session.state == AuthState.ANONYMOUS
        with pytest.raises(PreconditionError):
            ctx.session.require_token()

    @pytest.mark.asyncio
    async def test_adopts_stored_token(self, ctx):
        session = Session(client=ctx.client, store=MemoryTokenStore("stored"))
        assert session.is_authenticated
        assert session.token == "stored"

    @pytest.mark.asyncio
    async def test_sign_out_clears_store(self, ctx):
        await ctx.session.sign_in(VALID_EMAIL, VALID_PASSWORD)
        ctx.session.sign_out()

        assert ctx.session.state == AuthState.ANONYMOUS
        assert ctx.session.store.load() is None
        assert ctx.session.user is None

    @pytest.mark.asyncio
    async def test_register_does_not_sign_in(self, ctx, api):
        await ctx.session.register("Bob", "bob@example.com", "pw12345", "pw12345", "0101")

        assert "bob@example.com" in api.users
        assert ctx.session.state == AuthState.ANONYMOUS
        assert ctx.session.store.load() is None

    @pytest.mark.asyncio
    async def test_token_not_in_repr(self, ctx):
        session = Session(client=ctx.client, store=MemoryTokenStore("secret-token"))
        assert "secret-token" not in repr(session)


class TestUnwritableStore:

    def test_file_store_errors_are_store_errors(self, tmp_path):
        store = FileTokenStore(tmp_path)

        with pytest.raises(TokenStoreError):
            store.save("abc")
        with pytest.raises(TokenStoreError):
            store.clear()

    @pytest.mark.asyncio
    async def test_sign_in_fails_cleanly_when_token_cannot_be_saved(self, ctx, tmp_path):
        session = Session(client=ctx.client, store=FileTokenStore(tmp_path))

        with pytest.raises(TokenStoreError):
            await session.sign_in(VALID_EMAIL, VALID_PASSWORD)

        assert session.state == AuthState.ERROR
        assert session.token is None
        assert session.user is None
        assert session.error.startswith("Could not save session")

    @pytest.mark.asyncio
    async def test_sign_out_reports_unremovable_token(self, ctx, tmp_path):
        session = Session(client=ctx.client, store=FileTokenStore(tmp_path))

        with pytest.raises(TokenStoreError):
            session.sign_out()
        assert session.state == AuthState.ANONYMOUS
        assert session.token is None
