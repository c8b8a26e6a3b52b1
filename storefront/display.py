"""Terminal rendering with rich."""
from __future__ import annotations

from typing import List, Optional

from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich import box

from .models import Address, Cart, Category, Order, Product, User
from .notifier import Notice

# Brand colors
BRAND_PRIMARY = "#7C3AED"
BRAND_SECONDARY = "#2563EB"
BRAND_SUCCESS = "#00D26A"
BRAND_ERROR = "#FF3B3B"
BRAND_WARNING = "#FFA500"

console = Console()

NOTICE_STYLES = {
    "success": (BRAND_SUCCESS, "✓"),
    "info": (BRAND_SECONDARY, "●"),
    "warning": (BRAND_WARNING, "⚠"),
    "error": (BRAND_ERROR, "✗"),
}

EMPTY_CART_TEXT = "No products in your cart"
EMPTY_WISHLIST_TEXT = "Your wishlist is empty"


def format_price(amount: Optional[float]) -> str:
    """Format an amount in the store currency."""
    return f"EGP {amount or 0:,.2f}"


def _table(title: str) -> Table:
    return Table(
        show_header=True,
        header_style=f"bold {BRAND_PRIMARY}",
        border_style=BRAND_SECONDARY,
        box=box.ROUNDED,
        title=f"[bold {BRAND_PRIMARY}]◆[/] [bold]{title}[/]",
        title_justify="left",
        padding=(0, 1),
    )


def show_notice(notice: Notice) -> None:
    """Print a single notice; used as the notifier listener."""
    color, icon = NOTICE_STYLES.get(notice.level, NOTICE_STYLES["info"])
    console.print(f"[{color}]{icon}[/] {notice.message}")


def products_table(products: List[dict], title: str = "Products") -> Table:
    table = _table(f"{title} ({len(products)})")

    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("Title", min_width=24)
    table.add_column("Brand", style="cyan")
    table.add_column("Category", style="dim")
    table.add_column("Price", justify="right")
    table.add_column("Rating", justify="right")
    table.add_column("Stock", justify="right")

    for raw in products:
        p = Product.from_api(raw)
        price = format_price(p.price)
        if p.price_after_discount:
            price = f"[strike dim]{price}[/] {format_price(p.price_after_discount)}"
        stock = str(p.quantity) if p.in_stock else f"[{BRAND_ERROR}]out[/]"

        table.add_row(
            p.id,
            p.title,
            p.brand_name or "-",
            p.category_name or "-",
            price,
            f"★ {p.ratings_average} ({p.ratings_quantity})",
            stock,
        )

    return table


def product_panel(raw: dict) -> Panel:
    """Product details."""
    p = Product.from_api(raw)
    lines = [
        f"[bold]{p.title}[/]",
        f"[dim]{p.id}[/]",
        "",
        p.description,
        "",
        f"Price: [bold]{format_price(p.price_after_discount or p.price)}[/]",
        f"Rating: ★ {p.ratings_average} ({p.ratings_quantity} reviews)",
        f"In stock: {p.quantity}",
    ]
    if p.brand_name:
        lines.append(f"Brand: {p.brand_name}")
    if p.category_name:
        lines.append(f"Category: {p.category_name}")

    return Panel("\n".join(lines), border_style=BRAND_SECONDARY, padding=(0, 2))


def categories_table(items: List[dict], title: str = "Categories") -> Table:
    """Categories, subcategories and brands all render the same way."""
    table = _table(title)

    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("Name", min_width=20)
    table.add_column("Slug", style="dim")

    for raw in items:
        c = Category.from_api(raw)
        table.add_row(c.id, c.name, c.slug)

    return table


def cart_view(body: Optional[dict]):
    """Cart lines and totals, or the empty-cart state."""
    cart = Cart.from_api(body)

    if cart.is_empty:
        return Panel(
            Text(EMPTY_CART_TEXT, justify="center"),
            border_style="dim",
            padding=(1, 2),
        )

    table = _table(f"{cart.num_items} item{'s' if cart.num_items > 1 else ''} in your cart")
    table.add_column("Product ID", style="dim", no_wrap=True)
    table.add_column("Title", min_width=24)
    table.add_column("Qty", justify="right")
    table.add_column("Price", justify="right")
    table.add_column("Subtotal", justify="right")

    for line in cart.lines:
        table.add_row(
            line.product_id,
            line.title,
            str(line.count),
            format_price(line.price),
            format_price(line.subtotal),
        )

    total = Panel(
        f"Total: [bold]{format_price(cart.total_price)}[/]",
        border_style=BRAND_SECONDARY,
        padding=(0, 1),
    )
    return Group(table, total)


def wishlist_view(items: List[dict]):
    if not items:
        return Panel(Text(EMPTY_WISHLIST_TEXT, justify="center"), border_style="dim")
    return products_table(items, title="Wishlist")


def addresses_table(items: List[dict]) -> Table:
    table = _table("Addresses")

    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("Name")
    table.add_column("City", style="cyan")
    table.add_column("Details")
    table.add_column("Phone", style="dim")

    for raw in items:
        a = Address.from_api(raw)
        table.add_row(a.id, a.name, a.city, a.details, a.phone)

    return table


def orders_table(items: List[dict]) -> Table:
    table = _table(f"Orders ({len(items)})")

    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("Date")
    table.add_column("Items", justify="right")
    table.add_column("Total", justify="right")
    table.add_column("Payment")
    table.add_column("Paid", justify="center")
    table.add_column("Delivered", justify="center")

    for raw in items:
        o = Order.from_api(raw)
        table.add_row(
            o.id,
            o.created_at[:10],
            str(sum(line.count for line in o.lines)),
            format_price(o.total_price),
            o.payment_method or "-",
            f"[{BRAND_SUCCESS}]✓[/]" if o.is_paid else "[dim]✗[/]",
            f"[{BRAND_SUCCESS}]✓[/]" if o.is_delivered else "[dim]✗[/]",
        )

    return table


def profile_panel(raw: Optional[dict]) -> Panel:
    user = User.from_api(raw or {})
    body = "\n".join([
        f"[bold]{user.name or '-'}[/]",
        f"Email: {user.email or '-'}",
        f"Phone: {user.phone or '-'}",
    ])
    return Panel(body, title="Profile", border_style=BRAND_SECONDARY, padding=(0, 2))
