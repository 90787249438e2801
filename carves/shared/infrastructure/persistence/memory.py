"""In-memory repositories for offline mode and tests."""

from __future__ import annotations

import asyncio
from typing import Dict, Iterable, List, Optional
from uuid import uuid4

from carves.shared.core.errors import NotFoundError, RepositoryError
from carves.shared.domain.models import CartItem, Product, User, WishlistItem


class _FailureSwitch:
    """Lets a caller make the next operations fail with a chosen error."""

    def __init__(self) -> None:
        self._failure: Optional[RepositoryError] = None

    def fail_with(self, error: Optional[RepositoryError]) -> None:
        self._failure = error

    def _raise_if_failing(self) -> None:
        if self._failure is not None:
            raise self._failure


class InMemoryProductRepository(_FailureSwitch):
    def __init__(self, products: Iterable[Product] = (), delay: float = 0.0) -> None:
        super().__init__()
        self.products: List[Product] = list(products)
        self.delay = delay
        self.fetch_count = 0

    async def fetch_all(self) -> List[Product]:
        self.fetch_count += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        self._raise_if_failing()
        return list(self.products)


class InMemoryCartRepository(_FailureSwitch):
    def __init__(self) -> None:
        super().__init__()
        self.records: Dict[str, CartItem] = {}

    async def insert(self, item: CartItem) -> str:
        self._raise_if_failing()
        key = uuid4().hex
        self.records[key] = item.model_copy(update={"id": key})
        return key


class InMemoryWishlistRepository(_FailureSwitch):
    def __init__(self) -> None:
        super().__init__()
        self.records: Dict[str, WishlistItem] = {}

    async def insert(self, item: WishlistItem) -> str:
        self._raise_if_failing()
        key = uuid4().hex
        self.records[key] = item
        return key


class InMemoryUserRepository(_FailureSwitch):
    def __init__(self, users: Iterable[User] = ()) -> None:
        super().__init__()
        self.users: Dict[str, User] = {user.uid: user for user in users}

    async def fetch_by_id(self, uid: str) -> User:
        self._raise_if_failing()
        try:
            return self.users[uid]
        except KeyError:
            raise NotFoundError("users", uid) from None


# Used when the app runs with ``store.offline`` enabled
SAMPLE_PRODUCTS = [
    Product(name="Oak Bowl", price=2500.0, description="Hand-turned oak serving bowl"),
    Product(name="Teak Tray", price=3200.0, description="Carved teak tray with handles"),
    Product(name="Ebony Elephant", price=4800.0, description="Polished ebony figurine"),
    Product(name="Mahogany Mask", price=6500.0, description="Traditional devil mask"),
]

__all__ = [
    "InMemoryCartRepository",
    "InMemoryProductRepository",
    "InMemoryUserRepository",
    "InMemoryWishlistRepository",
    "SAMPLE_PRODUCTS",
]
