"""Checkout: local precondition checks, online and cash flows."""

import httpx
import pytest

from storefront import addresses, cart
from storefront.pages import EMPTY_CART, MISSING_ADDRESS, CheckoutPage
from tests.fakes import CHECKOUT_URL, RETURN_URL, VALID_EMAIL


async def _checkout(ctx, api, *product_ids, with_address=True):
    token = ctx.session.token
    for pid in product_ids:
        await cart.add_to_cart(ctx.client, token, pid)
    if with_address:
        await addresses.add_address(ctx.client, token, "Home", "12 Nile St", "0100", "Cairo")

    page = CheckoutPage(ctx)
    assert await page.load()
    api.requests.clear()
    ctx.notifier.drain()
    return page


class TestPreconditions:

    @pytest.mark.asyncio
    async def test_empty_cart_rejected_without_network(self, signed_in, api):
        page = await _checkout(signed_in, api)

        assert not await page.pay_online()
        assert not await page.pay_cash()

        assert api.requests == []
        assert [n.message for n in signed_in.notifier.errors()] == [EMPTY_CART, EMPTY_CART]

    @pytest.mark.asyncio
    async def test_unloaded_cart_rejected_without_network(self, signed_in, api):
        page = CheckoutPage(signed_in)

        assert not await page.pay_online()
        assert api.requests == []

    @pytest.mark.asyncio
    async def test_cash_without_address_rejected_without_network(self, signed_in, api):
        page = await _checkout(signed_in, api, "p1", with_address=False)

        assert page.address is None
        assert not await page.pay_cash()

        assert api.requests == []
        assert signed_in.notifier.last.message == MISSING_ADDRESS

    @pytest.mark.asyncio
    async def test_anonymous_checkout_rejected(self, ctx, api):
        page = CheckoutPage(ctx)
        assert not await page.load()
        assert not await page.pay_cash()
        assert api.requests == []


class TestOnlinePayment:

    @pytest.mark.asyncio
    async def test_returns_hosted_redirect(self, signed_in, api):
        page = await _checkout(signed_in, api, "p1")

        assert await page.pay_online()

        assert page.redirect_url == CHECKOUT_URL
        request = api.requests[-1]
        assert request.url.path.endswith(f"/orders/checkout-session/{page.cart_id}")
        assert request.url.params["url"] == RETURN_URL

    @pytest.mark.asyncio
    async def test_reply_without_url(self, signed_in, api, monkeypatch):
        page = await _checkout(signed_in, api, "p1")
        original = api.order

        def no_session(method, parts, body, email, request):
            if parts[1] == "checkout-session":
                return httpx.Response(200, json={"status": "success"})
            return original(method, parts, body, email, request)

        monkeypatch.setattr(api, "order", no_session)

        assert await page.pay_online()
        assert page.redirect_url is None
        assert signed_in.notifier.last.message == "Order placed without redirect."


class TestCashOnDelivery:

    @pytest.mark.asyncio
    async def test_places_order_and_refreshes_cart(self, signed_in, api):
        page = await _checkout(signed_in, api, "p1", "p2")
        address_id = page.address["_id"]

        assert await page.pay_cash()

        assert api.paths() == [f"POST /orders/{page.cart_id}", "GET /cart"]
        assert page.order["shippingAddress"]["_id"] == address_id
        assert page.order["totalOrderPrice"] == 1050
        assert page.is_empty
        assert signed_in.notifier.last.message == "Cash order placed successfully!"
        assert len(api.orders) == 1

    @pytest.mark.asyncio
    async def test_selected_address_is_used(self, signed_in, api):
        token = signed_in.session.token
        await addresses.add_address(signed_in.client, token, "Work", "5 Tahrir Sq", "0111", "Giza")
        page = await _checkout(signed_in, api, "p3")

        work = next(a for a in page.addresses if a["name"] == "Work")
        assert page.select_address(work["_id"])
        assert await page.pay_cash()

        assert api.orders[0]["shippingAddress"]["city"] == "Giza"

    @pytest.mark.asyncio
    async def test_unknown_address_selection(self, signed_in, api):
        page = await _checkout(signed_in, api, "p1")
        assert not page.select_address("addr-missing")
        assert page.address is not None

    @pytest.mark.asyncio
    async def test_server_rejection_is_reported(self, signed_in, api):
        page = await _checkout(signed_in, api, "p1")
        api.carts[VALID_EMAIL]["_id"] = "cart-other"

        assert not await page.pay_cash()
        assert "Could not place cash order." in page.error
        assert api.orders == []
