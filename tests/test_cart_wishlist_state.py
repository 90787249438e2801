"""CartState and WishlistState commands."""

import pytest

from carves.shared.core import events
from carves.shared.core.errors import StoreWriteError
from carves.shared.domain.models import CartItem, Product, WishlistItem
from carves.shared.infrastructure.persistence.memory import (
    InMemoryCartRepository,
    InMemoryWishlistRepository,
)
from carves.storefront.state import CartState, WishlistState


@pytest.fixture
def bowl() -> Product:
    return Product(name="Oak Bowl", price=2500.0, image="bowl.png")


@pytest.mark.asyncio
async def test_repeated_add_creates_distinct_entries(bowl):
    repo = InMemoryCartRepository()
    state = CartState(repo)

    first = await state.add_to_cart(CartItem.from_product(bowl))
    second = await state.add_to_cart(CartItem.from_product(bowl))

    assert first.id and second.id
    assert first.id != second.id
    assert len(repo.records) == 2
    assert all(item.quantity == 1 for item in repo.records.values())
    assert {item.product_name for item in repo.records.values()} == {"Oak Bowl"}


@pytest.mark.asyncio
async def test_add_to_cart_returns_copy_with_store_id(bowl):
    repo = InMemoryCartRepository()
    item = CartItem.from_product(bowl)

    stored = await CartState(repo).add_to_cart(item)

    assert item.id == ""
    assert stored.id in repo.records
    assert stored.product_price == 2500.0


@pytest.mark.asyncio
async def test_cart_write_failure_propagates(bowl):
    repo = InMemoryCartRepository()
    repo.fail_with(StoreWriteError("permission denied"))

    with pytest.raises(StoreWriteError):
        await CartState(repo).add_to_cart(CartItem.from_product(bowl))
    assert repo.records == {}


@pytest.mark.asyncio
async def test_add_to_cart_publishes_confirmation(bowl, bus):
    notifications, added = [], []

    async def on_notification(payload):
        notifications.append(payload["message"])

    async def on_added(payload):
        added.append(payload)

    await bus.subscribe(events.TOPIC_NOTIFICATION, on_notification)
    await bus.subscribe(events.TOPIC_CART_ITEM_ADDED, on_added)

    stored = await CartState(InMemoryCartRepository(), bus).add_to_cart(CartItem.from_product(bowl))
    await bus.wait_until_idle()

    assert notifications == ["Added to cart"]
    assert added == [{"id": stored.id, "product_name": "Oak Bowl", "quantity": 1}]


@pytest.mark.asyncio
async def test_add_to_wishlist_returns_store_id(bowl, bus):
    notifications = []

    async def on_notification(payload):
        notifications.append(payload["message"])

    await bus.subscribe(events.TOPIC_NOTIFICATION, on_notification)
    repo = InMemoryWishlistRepository()
    item = WishlistItem.from_product(bowl)

    item_id = await WishlistState(repo, bus).add_to_wishlist(item)
    await bus.wait_until_idle()

    assert repo.records[item_id] == item
    assert "id" not in item.model_dump()
    assert notifications == ["Added to wishlist"]


@pytest.mark.asyncio
async def test_wishlist_write_failure_propagates(bowl):
    repo = InMemoryWishlistRepository()
    repo.fail_with(StoreWriteError("quota"))

    with pytest.raises(StoreWriteError):
        await WishlistState(repo).add_to_wishlist(WishlistItem.from_product(bowl))
