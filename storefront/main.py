"""CLI entry point using typer."""

import asyncio
from typing import Awaitable, Callable, Optional

import typer

from . import __version__
from . import logger
from .context import StoreContext
from .display import (
    addresses_table,
    cart_view,
    categories_table,
    console,
    orders_table,
    product_panel,
    products_table,
    profile_panel,
    show_notice,
    wishlist_view,
)
from .notifier import Notifier
from .pages import (
    BrandsPage,
    CartPage,
    CategoriesPage,
    CheckoutPage,
    OrdersPage,
    ProductPage,
    ProductsPage,
    ProfilePage,
    RegisterPage,
    SignInPage,
    SubcategoryPage,
    WishlistPage,
)


def version_callback(value: bool):
    if value:
        console.print(f"[bold]storefront[/] v{__version__}")
        raise typer.Exit()


app = typer.Typer(
    name="storefront",
    help="Storefront - browse, shop and check out from the terminal",
    add_completion=False,
)


@app.callback()
def main_callback(
    version: Optional[bool] = typer.Option(
        None, "--version", "-v", callback=version_callback, is_eager=True,
        help="Show version and exit"
    ),
    debug: bool = typer.Option(False, "--debug", "-d", help="Enable debug logging"),
):
    """Storefront - terminal client for the commerce API."""
    logger.setup(debug=debug)


def run(action: Callable[[StoreContext], Awaitable[bool]]) -> None:
    """Run one page action in a fresh context; exit 1 when it fails."""

    async def runner() -> bool:
        ctx = StoreContext.create(notifier=Notifier(listener=show_notice))
        async with ctx:
            return await action(ctx)

    if not asyncio.run(runner()):
        raise typer.Exit(1)


# =============================================================================
# CATALOG
# =============================================================================

@app.command()
def products(
    brand: Optional[str] = typer.Option(None, "--brand", "-b", help="Brand id"),
    category: Optional[str] = typer.Option(None, "--category", "-c", help="Category id"),
    subcategory: Optional[str] = typer.Option(None, "--subcategory", "-s", help="Subcategory id"),
):
    """List products, optionally filtered."""

    async def action(ctx: StoreContext) -> bool:
        if subcategory and not (brand or category):
            page = SubcategoryPage(ctx)
            if await page.load(subcategory) is None:
                return False
        else:
            page = ProductsPage(ctx)
            if await page.load(brand=brand, category=category, subcategory=subcategory) is None:
                return False
        console.print(products_table(page.products))
        return True

    run(action)


@app.command()
def product(product_id: str = typer.Argument(..., help="Product id")):
    """Show product details."""

    async def action(ctx: StoreContext) -> bool:
        page = ProductPage(ctx)
        if await page.load(product_id) is None:
            return False
        console.print(product_panel(page.product))
        return True

    run(action)


@app.command()
def categories(category_id: Optional[str] = typer.Argument(None, help="Open one category")):
    """List categories, or show one with its subcategories and products."""

    async def action(ctx: StoreContext) -> bool:
        page = CategoriesPage(ctx)

        if category_id is None:
            if await page.load() is None:
                return False
            console.print(categories_table(page.categories))
            return True

        if await page.open(category_id) is None:
            return False
        name = page.category.get("name", category_id)
        console.print(categories_table(page.subcategories, title=f"{name} / subcategories"))
        console.print(products_table(page.products, title=name))
        return True

    run(action)


@app.command()
def brands(brand_id: Optional[str] = typer.Argument(None, help="Open one brand")):
    """List brands, or show one brand's products."""

    async def action(ctx: StoreContext) -> bool:
        page = BrandsPage(ctx)

        if brand_id is None:
            if await page.load() is None:
                return False
            console.print(categories_table(page.brands, title="Brands"))
            return True

        if await page.open(brand_id) is None:
            return False
        console.print(products_table(page.products, title=page.brand.get("name", brand_id)))
        return True

    run(action)


# =============================================================================
# CART / WISHLIST
# =============================================================================

async def _show_cart(page: CartPage) -> bool:
    if page.cart is None and await page.load() is None:
        return False
    console.print(cart_view(page.cart))
    return True


@app.command()
def cart():
    """Show the cart."""

    async def action(ctx: StoreContext) -> bool:
        return await _show_cart(CartPage(ctx))

    run(action)


@app.command(name="cart-add")
def cart_add(
    product_id: str = typer.Argument(..., help="Product id"),
    count: int = typer.Option(1, "--count", "-n", min=1, help="Quantity"),
):
    """Add a product to the cart."""

    async def action(ctx: StoreContext) -> bool:
        if not await ProductPage(ctx).add_to_cart(product_id, count):
            return False
        return await _show_cart(CartPage(ctx))

    run(action)


@app.command(name="cart-update")
def cart_update(
    product_id: str = typer.Argument(..., help="Product id"),
    count: int = typer.Argument(..., min=1, help="New quantity"),
):
    """Set the quantity of a cart line."""

    async def action(ctx: StoreContext) -> bool:
        page = CartPage(ctx)
        if not await page.update(product_id, count):
            return False
        return await _show_cart(page)

    run(action)


@app.command(name="cart-remove")
def cart_remove(product_id: str = typer.Argument(..., help="Product id")):
    """Remove a product from the cart."""

    async def action(ctx: StoreContext) -> bool:
        page = CartPage(ctx)
        if not await page.remove(product_id):
            return False
        return await _show_cart(page)

    run(action)


@app.command(name="cart-clear")
def cart_clear():
    """Empty the cart."""

    async def action(ctx: StoreContext) -> bool:
        page = CartPage(ctx)
        if not await page.clear():
            return False
        return await _show_cart(page)

    run(action)


@app.command()
def wishlist():
    """Show the wishlist."""

    async def action(ctx: StoreContext) -> bool:
        page = WishlistPage(ctx)
        if await page.load() is None:
            return False
        console.print(wishlist_view(page.items))
        return True

    run(action)


@app.command(name="wishlist-add")
def wishlist_add(product_id: str = typer.Argument(..., help="Product id")):
    """Add a product to the wishlist."""

    async def action(ctx: StoreContext) -> bool:
        page = WishlistPage(ctx)
        if not await page.add(product_id):
            return False
        console.print(wishlist_view(page.items))
        return True

    run(action)


@app.command(name="wishlist-remove")
def wishlist_remove(product_id: str = typer.Argument(..., help="Product id")):
    """Remove a product from the wishlist."""

    async def action(ctx: StoreContext) -> bool:
        page = WishlistPage(ctx)
        if not await page.remove(product_id):
            return False
        console.print(wishlist_view(page.items))
        return True

    run(action)


# =============================================================================
# CHECKOUT / ORDERS
# =============================================================================

@app.command()
def checkout(
    cash: bool = typer.Option(False, "--cash", help="Cash on delivery"),
    online: bool = typer.Option(False, "--online", help="Hosted online payment"),
    address_id: Optional[str] = typer.Option(
        None, "--address", "-a", help="Address id (default: first saved)"
    ),
):
    """Check out the cart with one payment method."""
    if cash == online:
        console.print("[red]Choose exactly one of --cash or --online[/]")
        raise typer.Exit(2)

    async def action(ctx: StoreContext) -> bool:
        page = CheckoutPage(ctx)
        await page.load()

        if address_id and not page.select_address(address_id):
            return False

        if online:
            if not await page.pay_online():
                return False
            if page.redirect_url:
                console.print(f"Complete payment at: [link={page.redirect_url}]{page.redirect_url}[/]")
            return True

        return await page.pay_cash()

    run(action)


@app.command()
def orders(
    all_orders: bool = typer.Option(False, "--all", help="List every order the token can see"),
    delete: Optional[str] = typer.Option(None, "--delete", help="Delete this order id first"),
):
    """List your orders."""

    async def action(ctx: StoreContext) -> bool:
        page = OrdersPage(ctx)
        if delete:
            if not await page.delete(delete, all_orders=all_orders):
                return False
        elif await page.load(all_orders=all_orders) is None:
            return False
        console.print(orders_table(page.orders))
        return True

    run(action)


# =============================================================================
# PROFILE / AUTH
# =============================================================================

@app.command()
def profile():
    """Show your profile and saved addresses."""

    async def action(ctx: StoreContext) -> bool:
        page = ProfilePage(ctx)
        ok = await page.load()
        if page.user:
            console.print(profile_panel(page.user))
        console.print(addresses_table(page.addresses))
        return ok

    run(action)


@app.command()
def address(address_id: str = typer.Argument(..., help="Address id")):
    """Show one saved address."""

    async def action(ctx: StoreContext) -> bool:
        page = ProfilePage(ctx)
        if await page.load_address(address_id) is None:
            return False
        console.print(addresses_table([page.address]))
        return True

    run(action)


@app.command(name="address-add")
def address_add(
    name: str = typer.Option(..., "--name", prompt=True, help="Label, e.g. Home"),
    details: str = typer.Option(..., "--details", prompt=True),
    phone: str = typer.Option(..., "--phone", prompt=True),
    city: str = typer.Option(..., "--city", prompt=True),
):
    """Save a shipping address."""

    async def action(ctx: StoreContext) -> bool:
        page = ProfilePage(ctx)
        if not await page.add_address(name, details, phone, city):
            return False
        console.print(addresses_table(page.addresses))
        return True

    run(action)


@app.command(name="address-remove")
def address_remove(address_id: str = typer.Argument(..., help="Address id")):
    """Delete a saved address."""

    async def action(ctx: StoreContext) -> bool:
        page = ProfilePage(ctx)
        if not await page.remove_address(address_id):
            return False
        console.print(addresses_table(page.addresses))
        return True

    run(action)


@app.command()
def login(
    email: str = typer.Option(..., "--email", "-e", prompt=True),
    password: str = typer.Option(..., "--password", "-p", prompt=True, hide_input=True),
):
    """Sign in and store the session token."""

    async def action(ctx: StoreContext) -> bool:
        return await SignInPage(ctx).submit(email, password)

    run(action)


@app.command()
def register(
    name: str = typer.Option(..., "--name", prompt=True),
    email: str = typer.Option(..., "--email", "-e", prompt=True),
    phone: str = typer.Option(..., "--phone", prompt=True),
    password: str = typer.Option(
        ..., "--password", "-p", prompt=True, hide_input=True, confirmation_prompt=True
    ),
):
    """Create an account."""

    async def action(ctx: StoreContext) -> bool:
        return await RegisterPage(ctx).submit(name, email, phone, password, password)

    run(action)


@app.command()
def logout():
    """Forget the stored session token."""

    async def action(ctx: StoreContext) -> bool:
        return SignInPage(ctx).sign_out()

    run(action)


def main():
    """Entry point."""
    app()


if __name__ == "__main__":
    main()
