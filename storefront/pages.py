"""View-state pages.

A page fetches what it shows through the accessors, keeps the server's
answer as-is in its own state and reports every outcome to the notice
channel. Pages never update their state from a mutation's reply: after
any write they fetch the affected resource again.

Page methods do not raise StoreError. Loads return the fetched value
(None on failure); actions return True/False.
"""
from __future__ import annotations

import asyncio
from typing import Any, List, Optional

from . import logger
from . import addresses as addresses_api
from . import auth as auth_api
from . import cart as cart_api
from . import catalog as catalog_api
from . import orders as orders_api
from . import products as products_api
from . import wishlist as wishlist_api
from .context import StoreContext
from .errors import PreconditionError, StoreError
from .models import Address, Cart, User, collection
from .session import AuthState

log = logger.get("PAGES")

EMPTY_CART = "Your cart is empty."
MISSING_ADDRESS = "No saved address found. Please add one in your profile."
NO_PRODUCT = "No product selected."
UNKNOWN_USER = "Could not determine the signed-in user."


class Page:
    """Shared plumbing: loading flag, last error, token lookup."""

    def __init__(self, ctx: StoreContext):
        self.ctx = ctx
        self.loading = False
        self.error: Optional[str] = None

    @property
    def client(self):
        return self.ctx.client

    @property
    def notifier(self):
        return self.ctx.notifier

    def _begin(self) -> None:
        self.loading = True
        self.error = None

    def _fail(self, message: str, exc: Optional[StoreError] = None) -> None:
        """Surface a failure as an error notice."""
        if isinstance(exc, PreconditionError):
            message = exc.message
        elif exc is not None:
            log.warning(f"{type(self).__name__}: {message} ({exc.message})")
            message = f"{message} ({exc.message})"
        self.error = message
        self.notifier.error(message)

    def _token(self) -> Optional[str]:
        """Current token, or None after surfacing a sign-in notice."""
        try:
            return self.ctx.session.require_token()
        except PreconditionError as e:
            self._fail(e.message)
            return None


# =============================================================================
# CATALOG
# =============================================================================

class ProductsPage(Page):
    """Product listing, optionally narrowed to a brand, category or subcategory."""

    def __init__(self, ctx: StoreContext):
        super().__init__(ctx)
        self.products: List[dict] = []
        self.results = 0

    async def load(
        self,
        brand: Optional[str] = None,
        category: Optional[str] = None,
        subcategory: Optional[str] = None,
    ) -> Optional[List[dict]]:
        self._begin()
        try:
            body = await products_api.get_products(
                self.client,
                brand=brand,
                category=category,
                subcategory=subcategory,
            )
        except StoreError as e:
            self._fail("Failed to load products.", e)
            return None
        finally:
            self.loading = False

        self.products = collection(body)
        self.results = (body or {}).get("results", len(self.products))
        return self.products


class ProductPage(Page):
    """Product details with add-to-cart and add-to-wishlist actions."""

    def __init__(self, ctx: StoreContext):
        super().__init__(ctx)
        self.product: Optional[dict] = None

    @property
    def product_id(self) -> Optional[str]:
        return self.product.get("_id") if self.product else None

    async def load(self, product_id: str) -> Optional[dict]:
        self._begin()
        try:
            body = await products_api.get_product(self.client, product_id)
        except StoreError as e:
            self._fail("Failed to load product.", e)
            return None
        finally:
            self.loading = False

        self.product = (body or {}).get("data")
        return self.product

    def _target(self, product_id: Optional[str]) -> Optional[str]:
        """Explicit id, else the loaded product's; a notice when neither exists."""
        product_id = product_id or self.product_id
        if not product_id:
            self._fail(NO_PRODUCT)
        return product_id

    async def add_to_cart(self, product_id: Optional[str] = None, count: int = 1) -> bool:
        token = self._token()
        if not token:
            return False
        product_id = self._target(product_id)
        if not product_id:
            return False

        try:
            await cart_api.add_to_cart(self.client, token, product_id, count)
        except StoreError as e:
            self._fail("Error adding product to cart.", e)
            return False

        self.notifier.success("Product added to cart successfully!")
        return True

    async def add_to_wishlist(self, product_id: Optional[str] = None) -> bool:
        token = self._token()
        if not token:
            return False
        product_id = self._target(product_id)
        if not product_id:
            return False

        try:
            await wishlist_api.add_to_wishlist(self.client, token, product_id)
        except StoreError as e:
            self._fail("Error adding product to wishlist.", e)
            return False

        self.notifier.success("Product added to wishlist!")
        return True


class CategoriesPage(Page):
    """Category listing; opening one loads its subcategories and products."""

    def __init__(self, ctx: StoreContext):
        super().__init__(ctx)
        self.categories: List[dict] = []
        self.category: Optional[dict] = None
        self.subcategories: List[dict] = []
        self.products: List[dict] = []

    async def load(self) -> Optional[List[dict]]:
        self._begin()
        try:
            body = await catalog_api.get_categories(self.client)
        except StoreError as e:
            self._fail("Failed to load categories.", e)
            return None
        finally:
            self.loading = False

        self.categories = collection(body)
        return self.categories

    async def open(self, category_id: str) -> Optional[dict]:
        self._begin()
        try:
            category, subcategories, products = await asyncio.gather(
                catalog_api.get_category(self.client, category_id),
                catalog_api.get_subcategories(self.client, category_id),
                products_api.get_products_by_category(self.client, category_id),
            )
        except StoreError as e:
            self._fail("Failed to load category.", e)
            return None
        finally:
            self.loading = False

        self.category = (category or {}).get("data")
        self.subcategories = collection(subcategories)
        self.products = collection(products)
        return self.category


class SubcategoryPage(Page):
    """Products of one subcategory."""

    def __init__(self, ctx: StoreContext):
        super().__init__(ctx)
        self.products: List[dict] = []

    async def load(self, subcategory_id: str) -> Optional[List[dict]]:
        self._begin()
        try:
            body = await products_api.get_products_by_subcategory(self.client, subcategory_id)
        except StoreError as e:
            self._fail("Failed to load products.", e)
            return None
        finally:
            self.loading = False

        self.products = collection(body)
        return self.products


class BrandsPage(Page):
    """Brand listing; opening one loads its products."""

    def __init__(self, ctx: StoreContext):
        super().__init__(ctx)
        self.brands: List[dict] = []
        self.brand: Optional[dict] = None
        self.products: List[dict] = []

    async def load(self) -> Optional[List[dict]]:
        self._begin()
        try:
            body = await catalog_api.get_brands(self.client)
        except StoreError as e:
            self._fail("Failed to load brands.", e)
            return None
        finally:
            self.loading = False

        self.brands = collection(body)
        return self.brands

    async def open(self, brand_id: str) -> Optional[dict]:
        self._begin()
        try:
            brand, products = await asyncio.gather(
                catalog_api.get_brand(self.client, brand_id),
                products_api.get_products_by_brand(self.client, brand_id),
            )
        except StoreError as e:
            self._fail("Failed to load brand.", e)
            return None
        finally:
            self.loading = False

        self.brand = (brand or {}).get("data")
        self.products = collection(products)
        return self.brand


# =============================================================================
# CART / WISHLIST
# =============================================================================

class CartPage(Page):
    """Cart view. Every mutation is followed by a full cart fetch."""

    def __init__(self, ctx: StoreContext):
        super().__init__(ctx)
        self.cart: Optional[dict] = None

    @property
    def model(self) -> Cart:
        return Cart.from_api(self.cart)

    @property
    def is_empty(self) -> bool:
        return self.cart is None or self.model.is_empty

    async def load(self) -> Optional[dict]:
        token = self._token()
        if not token:
            return None

        self._begin()
        try:
            self.cart = await cart_api.get_cart(self.client, token)
        except StoreError as e:
            self._fail("Failed to load cart. Please try again.", e)
            return None
        finally:
            self.loading = False

        return self.cart

    async def remove(self, product_id: str) -> bool:
        token = self._token()
        if not token:
            return False

        try:
            await cart_api.remove_cart_item(self.client, token, product_id)
        except StoreError as e:
            self._fail("Failed to remove item.", e)
            return False

        self.notifier.success("Item removed from cart.")
        await self.load()
        return True

    async def update(self, product_id: str, count: int) -> bool:
        """Set a line's quantity. Counts below one are ignored."""
        if count < 1:
            return False

        token = self._token()
        if not token:
            return False

        try:
            await cart_api.update_cart_item(self.client, token, product_id, count)
        except StoreError as e:
            self._fail("Failed to update quantity.", e)
            return False

        self.notifier.success("Cart updated.")
        await self.load()
        return True

    async def increment(self, product_id: str) -> bool:
        line = self.model.line_for(product_id)
        return await self.update(product_id, (line.count if line else 0) + 1)

    async def decrement(self, product_id: str) -> bool:
        line = self.model.line_for(product_id)
        if not line:
            return False
        return await self.update(product_id, line.count - 1)

    async def clear(self) -> bool:
        token = self._token()
        if not token:
            return False

        try:
            await cart_api.clear_cart(self.client, token)
        except StoreError as e:
            self._fail("Failed to clear cart.", e)
            return False

        self.notifier.success("Cart cleared.")
        await self.load()
        return True


class WishlistPage(Page):
    """Wishlist view plus the add/remove toggle shown on product cards."""

    def __init__(self, ctx: StoreContext):
        super().__init__(ctx)
        self.items: List[dict] = []

    def contains(self, product_id: str) -> bool:
        return any(p.get("_id") == product_id for p in self.items)

    async def load(self) -> Optional[List[dict]]:
        token = self._token()
        if not token:
            return None

        self._begin()
        try:
            body = await wishlist_api.get_wishlist(self.client, token)
        except StoreError as e:
            self._fail("Failed to load wishlist.", e)
            return None
        finally:
            self.loading = False

        self.items = collection(body)
        return self.items

    async def add(self, product_id: str) -> bool:
        token = self._token()
        if not token:
            return False

        try:
            await wishlist_api.add_to_wishlist(self.client, token, product_id)
        except StoreError as e:
            self._fail("Error adding to wishlist.", e)
            return False

        self.notifier.success("Added to wishlist")
        await self.load()
        return True

    async def remove(self, product_id: str) -> bool:
        token = self._token()
        if not token:
            return False

        try:
            await wishlist_api.remove_from_wishlist(self.client, token, product_id)
        except StoreError as e:
            self._fail("Error removing from wishlist.", e)
            return False

        self.notifier.success("Removed from wishlist")
        await self.load()
        return True

    async def toggle(self, product_id: str) -> bool:
        if self.contains(product_id):
            return await self.remove(product_id)
        return await self.add(product_id)


# =============================================================================
# CHECKOUT / ORDERS
# =============================================================================

class CheckoutPage(Page):
    """
    Checkout with two exclusive flows.

    Online payment opens a hosted session and exposes its redirect URL;
    cash on delivery places the order directly against a saved address.
    Both refuse to run, without touching the network, when the cart is
    empty or not loaded; cash also needs an address.
    """

    def __init__(self, ctx: StoreContext):
        super().__init__(ctx)
        self.cart: Optional[dict] = None
        self.addresses: List[dict] = []
        self.address: Optional[dict] = None
        self.redirect_url: Optional[str] = None
        self.order: Optional[dict] = None

    @property
    def cart_id(self) -> Optional[str]:
        return Cart.from_api(self.cart).id if self.cart else None

    @property
    def is_empty(self) -> bool:
        return self.cart is None or Cart.from_api(self.cart).is_empty

    async def load(self) -> bool:
        """Fetch cart and saved addresses; the first address is preselected."""
        token = self._token()
        if not token:
            return False

        self._begin()
        results = await asyncio.gather(
            cart_api.get_cart(self.client, token),
            addresses_api.get_addresses(self.client, token),
            return_exceptions=True,
        )
        self.loading = False

        cart, addresses = results
        ok = True

        if isinstance(cart, StoreError):
            self._fail("Could not fetch cart.", cart)
            ok = False
        elif isinstance(cart, BaseException):
            raise cart
        else:
            self.cart = cart

        if isinstance(addresses, StoreError):
            self._fail("Could not fetch address.", addresses)
            ok = False
        elif isinstance(addresses, BaseException):
            raise addresses
        else:
            self.addresses = collection(addresses)
            self.address = self.addresses[0] if self.addresses else None

        return ok

    def select_address(self, address_id: str) -> bool:
        match = next((a for a in self.addresses if a.get("_id") == address_id), None)
        if match is None:
            self._fail(f"Unknown address {address_id}.")
            return False
        self.address = match
        return True

    def _require_cart(self) -> Optional[str]:
        if self.is_empty or not self.cart_id:
            self._fail(EMPTY_CART)
            return None
        return self.cart_id

    async def pay_online(self) -> bool:
        """Open a hosted payment session; redirect_url is set when one comes back."""
        token = self._token()
        if not token:
            return False
        cart_id = self._require_cart()
        if not cart_id:
            return False

        self.redirect_url = None
        self._begin()
        try:
            body = await orders_api.create_checkout_session(
                self.client, token, cart_id, self.ctx.config.return_url
            )
        except StoreError as e:
            self._fail("Payment failed to start.", e)
            return False
        finally:
            self.loading = False

        session = (body or {}).get("session") or {}
        self.redirect_url = session.get("url")

        if self.redirect_url:
            self.notifier.info("Redirecting to payment...")
        else:
            self.notifier.success("Order placed without redirect.")
        return True

    async def pay_cash(self) -> bool:
        """Place a cash-on-delivery order, then refresh the (now empty) cart."""
        token = self._token()
        if not token:
            return False
        cart_id = self._require_cart()
        if not cart_id:
            return False
        if not self.address or not self.address.get("_id"):
            self._fail(MISSING_ADDRESS)
            return False

        self._begin()
        try:
            body = await orders_api.create_cash_order(
                self.client, token, cart_id, self.address["_id"]
            )
        except StoreError as e:
            self._fail("Could not place cash order.", e)
            return False
        finally:
            self.loading = False

        self.order = (body or {}).get("data")
        self.notifier.success("Cash order placed successfully!")

        try:
            self.cart = await cart_api.get_cart(self.client, token)
        except StoreError as e:
            log.debug(f"Cart refresh after order failed: {e.message}")
            self.cart = None
        return True


class OrdersPage(Page):
    """The signed-in user's orders."""

    def __init__(self, ctx: StoreContext):
        super().__init__(ctx)
        self.orders: List[dict] = []

    async def _user_id(self, token: str) -> str:
        session = self.ctx.session
        if session.user is None or not session.user.id:
            body = await auth_api.get_me(self.client, token)
            session.user = User.from_api((body or {}).get("data") or {})
        if not session.user.id:
            raise PreconditionError(UNKNOWN_USER)
        return session.user.id

    async def load(self, all_orders: bool = False) -> Optional[List[dict]]:
        token = self._token()
        if not token:
            return None

        self._begin()
        try:
            if all_orders:
                body = await orders_api.get_orders(self.client, token)
            else:
                user_id = await self._user_id(token)
                body = await orders_api.get_user_orders(self.client, token, user_id)
        except StoreError as e:
            self._fail("Failed to load orders.", e)
            return None
        finally:
            self.loading = False

        self.orders = collection(body)
        return self.orders

    async def delete(self, order_id: str, all_orders: bool = False) -> bool:
        """Delete one order, then list orders again."""
        token = self._token()
        if not token:
            return False

        try:
            await orders_api.delete_order(self.client, token, order_id)
        except StoreError as e:
            self._fail("Failed to delete order.", e)
            return False

        self.notifier.success("Order deleted.")
        await self.load(all_orders=all_orders)
        return True


# =============================================================================
# PROFILE / AUTH
# =============================================================================

class ProfilePage(Page):
    """User profile and saved addresses."""

    def __init__(self, ctx: StoreContext):
        super().__init__(ctx)
        self.user: Optional[dict] = None
        self.addresses: List[dict] = []
        self.address: Optional[dict] = None

    @property
    def address_models(self) -> List[Address]:
        return [Address.from_api(a) for a in self.addresses]

    async def load(self) -> bool:
        token = self._token()
        if not token:
            return False

        self._begin()
        results = await asyncio.gather(
            auth_api.get_me(self.client, token),
            addresses_api.get_addresses(self.client, token),
            return_exceptions=True,
        )
        self.loading = False

        me, addresses = results
        ok = True

        if isinstance(me, StoreError):
            self._fail("Failed to load profile.", me)
            ok = False
        elif isinstance(me, BaseException):
            raise me
        else:
            self.user = (me or {}).get("data")
            if self.user and self.ctx.session.user is None:
                self.ctx.session.user = User.from_api(self.user)

        if isinstance(addresses, StoreError):
            self._fail("Failed to load addresses.", addresses)
            ok = False
        elif isinstance(addresses, BaseException):
            raise addresses
        else:
            self.addresses = collection(addresses)

        return ok

    async def load_address(self, address_id: str) -> Optional[dict]:
        token = self._token()
        if not token:
            return None

        self._begin()
        try:
            body = await addresses_api.get_address(self.client, token, address_id)
        except StoreError as e:
            self._fail("Failed to load address.", e)
            return None
        finally:
            self.loading = False

        self.address = (body or {}).get("data")
        return self.address

    async def _reload_addresses(self, token: str) -> None:
        try:
            self.addresses = collection(await addresses_api.get_addresses(self.client, token))
        except StoreError as e:
            self._fail("Failed to load addresses.", e)

    async def add_address(self, name: str, details: str, phone: str, city: str) -> bool:
        token = self._token()
        if not token:
            return False

        self._begin()
        try:
            await addresses_api.add_address(self.client, token, name, details, phone, city)
        except StoreError as e:
            self._fail("Failed to add address.", e)
            return False
        finally:
            self.loading = False

        self.notifier.success("Address added!")
        await self._reload_addresses(token)
        return True

    async def remove_address(self, address_id: str) -> bool:
        token = self._token()
        if not token:
            return False

        self._begin()
        try:
            await addresses_api.remove_address(self.client, token, address_id)
        except StoreError as e:
            self._fail("Failed to remove address.", e)
            return False
        finally:
            self.loading = False

        self.notifier.success("Address removed!")
        await self._reload_addresses(token)
        return True


class SignInPage(Page):
    """Credential form on top of the session."""

    @property
    def state(self) -> AuthState:
        return self.ctx.session.state

    async def submit(self, email: str, password: str) -> bool:
        self._begin()
        try:
            user = await self.ctx.session.sign_in(email, password)
        except StoreError as e:
            self._fail("Sign in failed.", e)
            return False
        finally:
            self.loading = False

        self.notifier.success(f"Welcome back, {user.name or email}!")
        return True

    def sign_out(self) -> bool:
        try:
            self.ctx.session.sign_out()
        except StoreError as e:
            self._fail("Sign out failed.", e)
            return False

        self.notifier.info("Signed out.")
        return True


class RegisterPage(Page):
    """Sign-up form. Success leaves the user signed out, ready to sign in."""

    def __init__(self, ctx: StoreContext):
        super().__init__(ctx)
        self.result: Optional[Any] = None

    async def submit(
        self,
        name: str,
        email: str,
        phone: str,
        password: str,
        confirm_password: str,
    ) -> bool:
        self._begin()
        try:
            self.result = await self.ctx.session.register(
                name, email, password, confirm_password, phone
            )
        except StoreError as e:
            self._fail("Failed to register.", e)
            return False
        finally:
            self.loading = False

        self.notifier.success("Registration successful! Please log in.")
        return True
