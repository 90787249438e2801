"""Product search and display helpers for the dashboard."""

from __future__ import annotations

from typing import List, Optional, Sequence

from .models import DEFAULT_DISPLAY_NAME, Product, User

EMPTY_RESULT_TEXT = "No products found."
MISSING_NAME_TEXT = "No Name"


def matches_query(product: Product, query: str) -> bool:
    """Case-insensitive substring match on the product name.

    A product without a name matches only the empty query.
    """
    if not query:
        return True
    if not product.name:
        return False
    return query.casefold() in product.name.casefold()


def filter_products(products: Sequence[Product], query: Optional[str]) -> List[Product]:
    """Return the products whose name contains ``query``, in their original order.

    The result holds the same objects as ``products``; an empty query returns
    every product.
    """
    query = query or ""
    if not query:
        return list(products)
    return [product for product in products if matches_query(product, query)]


def format_price(price: Optional[float]) -> str:
    return f"Rs. {price if price is not None else 0.0}"


def display_name(product: Product) -> str:
    return product.name or MISSING_NAME_TEXT


def greeting(user: Optional[User]) -> str:
    name = user.display_name if user else DEFAULT_DISPLAY_NAME
    return f"Welcome, {name}!"
