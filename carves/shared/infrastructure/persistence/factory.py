"""
Repository factory for the storefront.

Centralizes repository creation from the store configuration.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

import httpx

from carves.shared.core.configuration import StoreConfig
from carves.shared.infrastructure.persistence.base import (
    CartRepository,
    ProductRepository,
    UserRepository,
    WishlistRepository,
)
from carves.shared.infrastructure.persistence.firebase_service import (
    FirebaseCartRepository,
    FirebaseProductRepository,
    FirebaseRestClient,
    FirebaseUserRepository,
    FirebaseWishlistRepository,
)
from carves.shared.infrastructure.persistence.memory import (
    SAMPLE_PRODUCTS,
    InMemoryCartRepository,
    InMemoryProductRepository,
    InMemoryUserRepository,
    InMemoryWishlistRepository,
)

logger = logging.getLogger(__name__)


class BackendType(str, Enum):
    """Supported store backends."""
    FIREBASE = "firebase"
    MEMORY = "memory"


@dataclass
class RepositoryBundle:
    """The four repositories a storefront session needs."""
    backend: BackendType
    products: ProductRepository
    cart: CartRepository
    wishlist: WishlistRepository
    users: UserRepository
    client: Optional[FirebaseRestClient] = field(default=None, repr=False)

    async def aclose(self) -> None:
        if self.client is not None:
            await self.client.aclose()


class RepositoryFactory:
    """Factory for repository bundles."""

    @staticmethod
    def backend_for(config: StoreConfig) -> BackendType:
        if config.offline:
            return BackendType.MEMORY
        if not config.database_url:
            logger.warning("No database_url configured; falling back to in-memory store")
            return BackendType.MEMORY
        return BackendType.FIREBASE

    @staticmethod
    def create(
        config: StoreConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> RepositoryBundle:
        """Create repositories for the configured backend.

        Args:
            config: Store section of the system configuration
            transport: Optional httpx transport (mock transports in tests)

        Returns:
            RepositoryBundle wired to one shared HTTP client, or to memory
        """
        backend = RepositoryFactory.backend_for(config)

        if backend == BackendType.MEMORY:
            logger.info("Using in-memory repositories")
            return RepositoryBundle(
                backend=backend,
                products=InMemoryProductRepository(SAMPLE_PRODUCTS),
                cart=InMemoryCartRepository(),
                wishlist=InMemoryWishlistRepository(),
                users=InMemoryUserRepository(),
            )

        client = FirebaseRestClient(
            config.database_url or "",
            auth_token=config.auth_token,
            timeout=config.timeout,
            transport=transport,
        )
        logger.info(f"Using Firebase repositories at {client.database_url}")
        return RepositoryBundle(
            backend=backend,
            products=FirebaseProductRepository(client, config.products_collection),
            cart=FirebaseCartRepository(client, config.cart_collection),
            wishlist=FirebaseWishlistRepository(client, config.wishlist_collection),
            users=FirebaseUserRepository(client, config.users_collection),
            client=client,
        )


def build_repositories(config: StoreConfig) -> RepositoryBundle:
    return RepositoryFactory.create(config)
