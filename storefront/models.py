"""Typed views over API payloads.

These mirror what the API sends; nothing here is validated or owned
locally. Unknown keys are ignored and missing ones fall back to defaults.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Union


def _ref_id(value) -> Optional[str]:
    """Id of a reference that may be embedded or a bare id."""
    if isinstance(value, dict):
        return value.get("_id") or value.get("id")
    return value


def _ref_name(value) -> str:
    if isinstance(value, dict):
        return value.get("name", "")
    return ""


@dataclass
class Category:
    """Category, subcategory or brand; all three share one shape."""

    id: str
    name: str
    slug: str = ""
    image: str = ""
    category_id: Optional[str] = None

    @classmethod
    def from_api(cls, data: dict) -> Category:
        return cls(
            id=data.get("_id", ""),
            name=data.get("name", ""),
            slug=data.get("slug", ""),
            image=data.get("image", ""),
            category_id=_ref_id(data.get("category")),
        )


Brand = Category
Subcategory = Category


@dataclass
class Product:
    """A catalog product."""

    id: str
    title: str
    price: float = 0
    price_after_discount: Optional[float] = None
    image_cover: str = ""
    images: List[str] = field(default_factory=list)
    quantity: int = 0
    sold: int = 0
    ratings_average: float = 0
    ratings_quantity: int = 0
    description: str = ""
    category_id: Optional[str] = None
    category_name: str = ""
    brand_id: Optional[str] = None
    brand_name: str = ""
    subcategory_ids: List[str] = field(default_factory=list)

    @classmethod
    def from_api(cls, data: dict) -> Product:
        subcategories = data.get("subcategory") or []
        return cls(
            id=data.get("_id") or data.get("id", ""),
            title=data.get("title", ""),
            price=data.get("price", 0),
            price_after_discount=data.get("priceAfterDiscount"),
            image_cover=data.get("imageCover", ""),
            images=list(data.get("images") or []),
            quantity=data.get("quantity", 0),
            sold=data.get("sold", 0) or 0,
            ratings_average=data.get("ratingsAverage", 0),
            ratings_quantity=data.get("ratingsQuantity", 0),
            description=data.get("description", ""),
            category_id=_ref_id(data.get("category")),
            category_name=_ref_name(data.get("category")),
            brand_id=_ref_id(data.get("brand")),
            brand_name=_ref_name(data.get("brand")),
            subcategory_ids=[_ref_id(s) for s in subcategories if _ref_id(s)],
        )

    @property
    def in_stock(self) -> bool:
        return self.quantity > 0


@dataclass
class CartLine:
    """One product-and-quantity entry; price is the snapshot at add time."""

    id: str
    product: Union[Product, str]
    count: int
    price: float

    @classmethod
    def from_api(cls, data: dict) -> CartLine:
        product = data.get("product")
        return cls(
            id=data.get("_id", ""),
            product=Product.from_api(product) if isinstance(product, dict) else product,
            count=data.get("count", 0),
            price=data.get("price", 0),
        )

    @property
    def product_id(self) -> str:
        if isinstance(self.product, Product):
            return self.product.id
        return self.product

    @property
    def title(self) -> str:
        if isinstance(self.product, Product):
            return self.product.title
        return self.product

    @property
    def subtotal(self) -> float:
        return self.count * self.price


@dataclass
class Cart:
    """Server view of the user's cart."""

    id: Optional[str]
    owner: Optional[str] = None
    lines: List[CartLine] = field(default_factory=list)
    total_price: float = 0
    num_items: int = 0

    @classmethod
    def from_api(cls, body: Optional[dict]) -> Cart:
        """Build from a full cart response ({numOfCartItems, cartId, data})."""
        body = body or {}
        data = body.get("data") or {}
        lines = [CartLine.from_api(p) for p in data.get("products") or []]
        return cls(
            id=data.get("_id") or body.get("cartId"),
            owner=data.get("cartOwner"),
            lines=lines,
            total_price=data.get("totalCartPrice", 0),
            num_items=body.get("numOfCartItems", len(lines)),
        )

    @property
    def is_empty(self) -> bool:
        return self.num_items == 0

    def line_for(self, product_id: str) -> Optional[CartLine]:
        return next((line for line in self.lines if line.product_id == product_id), None)


@dataclass
class Address:
    """User-owned shipping address."""

    id: str
    name: str = ""
    details: str = ""
    phone: str = ""
    city: str = ""

    @classmethod
    def from_api(cls, data: dict) -> Address:
        return cls(
            id=data.get("_id", ""),
            name=data.get("name", ""),
            details=data.get("details", ""),
            phone=data.get("phone", ""),
            city=data.get("city", ""),
        )


@dataclass
class User:
    id: str
    name: str = ""
    email: str = ""
    phone: str = ""
    role: str = "user"

    @classmethod
    def from_api(cls, data: dict) -> User:
        return cls(
            id=data.get("_id") or data.get("id", ""),
            name=data.get("name", ""),
            email=data.get("email", ""),
            phone=data.get("phone", ""),
            role=data.get("role", "user"),
        )


@dataclass
class Order:
    """A placed order. The client never changes it after creation."""

    id: str
    user_name: str = ""
    lines: List[CartLine] = field(default_factory=list)
    total_price: float = 0
    payment_method: str = ""
    is_paid: bool = False
    is_delivered: bool = False
    created_at: str = ""
    shipping_city: str = ""

    @classmethod
    def from_api(cls, data: dict) -> Order:
        user = data.get("user") or {}
        shipping = data.get("shippingAddress") or {}
        return cls(
            id=data.get("_id") or str(data.get("id", "")),
            user_name=user.get("name", "") if isinstance(user, dict) else "",
            lines=[CartLine.from_api(i) for i in data.get("cartItems") or []],
            total_price=data.get("totalOrderPrice", 0),
            payment_method=data.get("paymentMethodType", ""),
            is_paid=bool(data.get("isPaid")),
            is_delivered=bool(data.get("isDelivered")),
            created_at=data.get("createdAt", ""),
            shipping_city=shipping.get("city", "") if isinstance(shipping, dict) else "",
        )


def collection(body) -> list:
    """Items of a collection response; bare lists pass through."""
    if body is None:
        return []
    if isinstance(body, list):
        return body
    return body.get("data") or []
