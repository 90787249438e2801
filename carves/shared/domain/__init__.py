"""
Shared Domain Module
====================

Storefront records and catalog search.
"""

from .models import AuthIdentity, CartItem, Product, User, WishlistItem
from .catalog import filter_products, format_price, greeting, matches_query

__all__ = [
    "AuthIdentity",
    "CartItem",
    "Product",
    "User",
    "WishlistItem",
    "filter_products",
    "format_price",
    "greeting",
    "matches_query",
]
