import asyncio
from typing import List

import pytest

from carves.shared.core.event_bus import EventBus
from carves.shared.domain.models import AuthIdentity, Product, User
from carves.shared.infrastructure.identity import SessionIdentityProvider
from carves.shared.infrastructure.persistence.factory import BackendType, RepositoryBundle
from carves.shared.infrastructure.persistence.memory import (
    InMemoryCartRepository,
    InMemoryProductRepository,
    InMemoryUserRepository,
    InMemoryWishlistRepository,
)
from carves.storefront.state import Store


class GatedProductRepository:
    """Product repository whose fetches block until the test releases them.

    Every ``fetch_all`` call waits on its own gate, in call order.
    """

    def __init__(self, products: List[Product]) -> None:
        self.products = products
        self.gates: List[asyncio.Event] = []

    async def fetch_all(self) -> List[Product]:
        gate = asyncio.Event()
        self.gates.append(gate)
        await gate.wait()
        return list(self.products)

    def release(self, call: int = 0) -> None:
        self.gates[call].set()


@pytest.fixture
def catalog() -> List[Product]:
    return [
        Product(name="Oak Bowl", price=2500.0, description="Serving bowl"),
        Product(name="Teak Tray", price=3200.0, description="Tray"),
        Product(name="Small oak spoon", price=400.0),
        Product(name=None, price=100.0),
    ]


@pytest.fixture
def gated_repository(catalog) -> GatedProductRepository:
    return GatedProductRepository(catalog)


@pytest.fixture
def bus() -> EventBus:
    return EventBus()


@pytest.fixture
def tester() -> User:
    return User(uid="u-1", first_name="Nimal", image="https://img.example/u-1.png")


@pytest.fixture
def repositories(catalog, tester) -> RepositoryBundle:
    return RepositoryBundle(
        backend=BackendType.MEMORY,
        products=InMemoryProductRepository(catalog),
        cart=InMemoryCartRepository(),
        wishlist=InMemoryWishlistRepository(),
        users=InMemoryUserRepository([tester]),
    )


@pytest.fixture
def identity(tester) -> SessionIdentityProvider:
    return SessionIdentityProvider(AuthIdentity(uid=tester.uid, email="nimal@example.com"))


@pytest.fixture
def store(bus, repositories, identity):
    Store.reset()
    yield Store.initialize(bus, repositories, identity)
    Store.reset()
