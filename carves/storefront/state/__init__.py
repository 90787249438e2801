"""FletXr Reactive State for the storefront.

Architecture:
- AppState: shell state (status, log feed, notifications)
- ProductState: catalog and search-filtered view
- CartState / WishlistState: add-item commands
- UserState: cached identity and profile
- Store: service locator for accessing state from any component
"""

from .app_state import AppState
from .cart_state import CartState
from .product_state import ProductState
from .store import Store
from .subscription import Subscription
from .user_state import UserState
from .wishlist_state import WishlistState

__all__ = [
    "AppState",
    "CartState",
    "ProductState",
    "Store",
    "Subscription",
    "UserState",
    "WishlistState",
]
