"""Global State Store - Service Locator Pattern.

Gives every screen access to the same reactive state holders.
"""

from __future__ import annotations

from typing import Optional

from carves.shared.core.event_bus import EventBus
from carves.shared.infrastructure.identity import IdentityProvider
from carves.shared.infrastructure.persistence.factory import RepositoryBundle

from .app_state import AppState
from .cart_state import CartState
from .product_state import ProductState
from .user_state import UserState
from .wishlist_state import WishlistState


class Store:
    """Global state store for the storefront.

    Usage:
        # During app initialization
        Store.initialize(event_bus, repositories, identity)

        # In any UI component
        store = Store.get()
        store.products.set_query("oak")
    """

    _instance: Optional['Store'] = None

    def __init__(
        self,
        event_bus: EventBus,
        repositories: RepositoryBundle,
        identity: IdentityProvider,
    ) -> None:
        """Build every state holder around the shared bus and repositories.

        Note: Do not call directly. Use Store.initialize() instead.
        """
        self.bus = event_bus
        self.repositories = repositories
        self.app = AppState(event_bus)
        self.products = ProductState(repositories.products, event_bus)
        self.cart = CartState(repositories.cart, event_bus)
        self.wishlist = WishlistState(repositories.wishlist, event_bus)
        self.user = UserState(repositories.users, identity, event_bus)

    @classmethod
    def initialize(
        cls,
        event_bus: EventBus,
        repositories: RepositoryBundle,
        identity: IdentityProvider,
    ) -> 'Store':
        """Initialize the global store instance.

        Should be called once during application startup before any UI
        components are created.

        Raises:
            RuntimeError: If store is already initialized
        """
        if cls._instance is not None:
            raise RuntimeError("Store already initialized!")

        cls._instance = cls(event_bus, repositories, identity)
        return cls._instance

    @classmethod
    def get(cls) -> 'Store':
        """Get the global store instance.

        Raises:
            RuntimeError: If store has not been initialized
        """
        if cls._instance is None:
            raise RuntimeError("Store not initialized! Call Store.initialize() first.")
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset the store instance. Primarily used for testing."""
        cls._instance = None
