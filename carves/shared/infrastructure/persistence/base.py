"""Repository contracts consumed by the storefront state holders."""

from __future__ import annotations

from typing import List, Protocol, runtime_checkable

from carves.shared.domain.models import CartItem, Product, User, WishlistItem


@runtime_checkable
class ProductRepository(Protocol):
    async def fetch_all(self) -> List[Product]:
        """Return the whole product collection. Raises NetworkError."""
        ...


@runtime_checkable
class CartRepository(Protocol):
    async def insert(self, item: CartItem) -> str:
        """Store ``item`` and return the generated id. Raises StoreWriteError."""
        ...


@runtime_checkable
class WishlistRepository(Protocol):
    async def insert(self, item: WishlistItem) -> str:
        """Store ``item`` and return the generated id. Raises StoreWriteError."""
        ...


@runtime_checkable
class UserRepository(Protocol):
    async def fetch_by_id(self, uid: str) -> User:
        """Return the profile for ``uid``. Raises NotFoundError or NetworkError."""
        ...
