"""
Commerce API endpoints.

All persistent state lives behind this one JSON API: catalog, cart,
wishlist, orders, addresses and authentication. Paths are relative to
BASE_URL and formatted with keyword arguments.
"""

# =============================================================================
# BASE CONFIGURATION
# =============================================================================
BASE_URL = "https://ecommerce.routemisr.com/api/v1"

# Custom auth header carrying the raw token (no "Bearer" prefix)
TOKEN_HEADER = "token"


# =============================================================================
# CATALOG
# =============================================================================
PRODUCTS = "/products"                   # GET, accepts brand/category/subcategory filters
PRODUCT = "/products/{product_id}"       # GET
CATEGORIES = "/categories"               # GET
CATEGORY = "/categories/{category_id}"   # GET
SUBCATEGORIES = "/categories/{category_id}/subcategories"  # GET
BRANDS = "/brands"                       # GET
BRAND = "/brands/{brand_id}"             # GET


# =============================================================================
# CART / WISHLIST
# =============================================================================
# Same endpoint for GET (view), POST (add) and DELETE (clear)
CART = "/cart"
CART_ITEM = "/cart/{product_id}"          # PUT (count), DELETE (remove)
WISHLIST = "/wishlist"                    # GET, POST
WISHLIST_ITEM = "/wishlist/{product_id}"  # DELETE


# =============================================================================
# ORDERS
# =============================================================================
ORDERS = "/orders"                        # GET
USER_ORDERS = "/orders/user/{user_id}"    # GET
CASH_ORDER = "/orders/{cart_id}"          # POST
ORDER = "/orders/{order_id}"              # DELETE
CHECKOUT_SESSION = "/orders/checkout-session/{cart_id}"  # POST ?url=<return url>


# =============================================================================
# ADDRESSES / USERS / AUTH
# =============================================================================
ADDRESSES = "/addresses"                  # GET, POST
ADDRESS = "/addresses/{address_id}"       # GET, DELETE
SIGNIN = "/auth/signin"                   # POST
SIGNUP = "/auth/signup"                   # POST
ME = "/users/getMe"                       # GET


# =============================================================================
# PAYLOAD TEMPLATES
# =============================================================================

def cart_add_payload(product_id: str, count: int = 1) -> dict:
    """Build add-to-cart payload."""
    return {"productId": product_id, "count": count}


def cart_update_payload(count: int) -> dict:
    """Build quantity update payload."""
    return {"count": count}


def wishlist_payload(product_id: str) -> dict:
    return {"productId": product_id}


def cash_order_payload(address_id: str) -> dict:
    """Build cash-on-delivery payload; the API takes the address id only."""
    return {"shippingAddress": address_id}


def address_payload(name: str, details: str, phone: str, city: str) -> dict:
    return {"name": name, "details": details, "phone": phone, "city": city}


def signin_payload(email: str, password: str) -> dict:
    return {"email": email, "password": password}


def signup_payload(
    name: str,
    email: str,
    password: str,
    re_password: str,
    phone: str,
) -> dict:
    """Build sign-up payload. The API checks that both passwords match."""
    return {
        "name": name,
        "email": email,
        "password": password,
        "rePassword": re_password,
        "phone": phone,
    }


def path(endpoint: str, **kwargs) -> str:
    """Fill an endpoint template."""
    return endpoint.format(**kwargs)
