"""CLI commands wired to the fake backend."""

import pytest
from loguru import logger
from typer.testing import CliRunner

from storefront import __version__
from storefront import main
from storefront.context import StoreContext
from storefront.session import MemoryTokenStore
from tests.fakes import CHECKOUT_URL, VALID_EMAIL, VALID_PASSWORD

runner = CliRunner()


@pytest.fixture
def store():
    return MemoryTokenStore()


@pytest.fixture(autouse=True)
def wired(api, config, store, monkeypatch, tmp_path):
    """Point every command at the fake API with a shared token store."""
    monkeypatch.chdir(tmp_path)

    class Wired:
        @staticmethod
        def create(notifier=None):
            return StoreContext.create(
                config=config,
                store=store,
                transport=api.transport(),
                notifier=notifier,
            )

    monkeypatch.setattr(main, "StoreContext", Wired)
    yield
    logger.remove()


def _login():
    result = runner.invoke(main.app, ["login", "-e", VALID_EMAIL, "-p", VALID_PASSWORD])
    assert result.exit_code == 0, result.output


def test_version():
    result = runner.invoke(main.app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_products_listing():
    result = runner.invoke(main.app, ["products", "--brand", "brand-zed"])
    assert result.exit_code == 0, result.output
    assert "Oxford Shirt" in result.output
    assert "Linen Shirt" not in result.output


def test_product_not_found_exits_nonzero():
    result = runner.invoke(main.app, ["product", "missing"])
    assert result.exit_code == 1
    assert "Failed to load product." in result.output


def test_login_persists_token(store):
    _login()
    assert store.load() == f"tok-{VALID_EMAIL}"


def test_login_failure(store):
    result = runner.invoke(main.app, ["login", "-e", VALID_EMAIL, "-p", "wrong"])
    assert result.exit_code == 1
    assert store.load() is None


def test_cart_requires_login():
    result = runner.invoke(main.app, ["cart"])
    assert result.exit_code == 1
    assert "You must be signed in." in result.output


def test_cart_add_then_show():
    _login()

    result = runner.invoke(main.app, ["cart-add", "p1", "--count", "2"])
    assert result.exit_code == 0, result.output
    assert "Product added to cart successfully!" in result.output
    assert "Linen Shirt" in result.output

    result = runner.invoke(main.app, ["cart-remove", "p1"])
    assert result.exit_code == 0, result.output
    assert "No products in your cart" in result.output


def test_checkout_needs_one_method():
    result = runner.invoke(main.app, ["checkout"])
    assert result.exit_code == 2


def test_checkout_empty_cart_fails():
    _login()
    result = runner.invoke(main.app, ["checkout", "--online"])
    assert result.exit_code == 1
    assert "Your cart is empty." in result.output


def test_online_checkout_prints_redirect():
    _login()
    runner.invoke(main.app, ["cart-add", "p3"])

    result = runner.invoke(main.app, ["checkout", "--online"])

    assert result.exit_code == 0, result.output
    assert CHECKOUT_URL in result.output


def test_logout(store):
    _login()
    result = runner.invoke(main.app, ["logout"])
    assert result.exit_code == 0
    assert store.load() is None


def test_delete_unknown_order_fails():
    _login()
    result = runner.invoke(main.app, ["orders", "--delete", "order-missing"])
    assert result.exit_code == 1
    assert "Failed to delete order." in result.output


def test_show_address(api):
    _login()
    runner.invoke(main.app, ["address-add", "--name", "Home", "--details", "12 Nile St",
                             "--phone", "0100", "--city", "Cairo"])
    address_id = api.addresses[VALID_EMAIL][0]["_id"]

    result = runner.invoke(main.app, ["address", address_id])

    assert result.exit_code == 0, result.output
    assert "Cairo" in result.output
