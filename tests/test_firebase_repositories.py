"""Firebase REST repositories against an httpx mock transport."""

import json

import httpx
import pytest

from carves.shared.core.configuration import StoreConfig
from carves.shared.core.errors import NetworkError, NotFoundError, StoreWriteError
from carves.shared.domain.models import CartItem, WishlistItem
from carves.shared.infrastructure.persistence.factory import BackendType, RepositoryFactory
from carves.shared.infrastructure.persistence.firebase_service import FirebaseRestClient

DATABASE_URL = "https://yala-carves-default-rtdb.firebaseio.com"


class FakeRealtimeDatabase:
    """Minimal stand-in for the Realtime Database REST surface."""

    def __init__(self, tree=None, fail_with_status=None):
        self.tree = tree or {}
        self.fail_with_status = fail_with_status
        self.requests = []
        self._next_key = 0

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail_with_status:
            return httpx.Response(self.fail_with_status, json={"error": "Permission denied"})

        segments = request.url.path.removesuffix(".json").strip("/").split("/")
        if request.method == "GET":
            node = self.tree
            for segment in segments:
                node = node.get(segment) if isinstance(node, dict) else None
            return httpx.Response(200, content=json.dumps(node).encode())

        if request.method == "POST":
            self._next_key += 1
            key = f"-Nkey{self._next_key}"
            self.tree.setdefault(segments[0], {})[key] = json.loads(request.content)
            return httpx.Response(200, json={"name": key})

        return httpx.Response(405)


def make_bundle(db, **overrides):
    config = StoreConfig(database_url=DATABASE_URL, auth_token="secret", **overrides)
    return RepositoryFactory.create(config, transport=httpx.MockTransport(db))


@pytest.mark.asyncio
async def test_fetch_all_parses_products():
    db = FakeRealtimeDatabase({
        "products": {
            "-a": {"productName": "Oak Bowl", "productPrice": 2500, "productDescription": "Bowl", "image": "a.png"},
            "-b": {"productName": "Teak Tray", "productPrice": 3200.5},
        }
    })
    bundle = make_bundle(db)

    products = await bundle.products.fetch_all()
    await bundle.aclose()

    assert bundle.backend == BackendType.FIREBASE
    assert [p.name for p in products] == ["Oak Bowl", "Teak Tray"]
    assert products[1].price == 3200.5
    assert products[1].description == ""
    assert db.requests[0].url.params["auth"] == "secret"


@pytest.mark.asyncio
async def test_fetch_all_handles_empty_and_array_collections():
    bundle = make_bundle(FakeRealtimeDatabase({}))
    assert await bundle.products.fetch_all() == []

    array_db = FakeRealtimeDatabase({"products": [None, {"productName": "Ebony Elephant"}, "junk"]})
    products = await make_bundle(array_db).products.fetch_all()
    assert [p.name for p in products] == ["Ebony Elephant"]


@pytest.mark.asyncio
async def test_fetch_all_maps_http_errors():
    bundle = make_bundle(FakeRealtimeDatabase(fail_with_status=401))
    with pytest.raises(NetworkError):
        await bundle.products.fetch_all()


@pytest.mark.asyncio
async def test_fetch_all_maps_transport_errors():
    def unreachable(request):
        raise httpx.ConnectError("connection refused", request=request)

    config = StoreConfig(database_url=DATABASE_URL)
    bundle = RepositoryFactory.create(config, transport=httpx.MockTransport(unreachable))
    with pytest.raises(NetworkError) as exc_info:
        await bundle.products.fetch_all()
    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)


@pytest.mark.asyncio
async def test_cart_insert_returns_generated_key_each_time():
    db = FakeRealtimeDatabase()
    bundle = make_bundle(db, cart_collection="carts")
    item = CartItem(product_name="Oak Bowl", product_price=2500.0, image="a.png")

    first = await bundle.cart.insert(item)
    second = await bundle.cart.insert(item)

    assert first != second
    assert set(db.tree["carts"]) == {first, second}
    assert db.tree["carts"][first] == {
        "productName": "Oak Bowl",
        "productPrice": 2500.0,
        "image": "a.png",
        "quantity": 1,
    }


@pytest.mark.asyncio
async def test_wishlist_insert_and_write_failure():
    db = FakeRealtimeDatabase()
    bundle = make_bundle(db)
    key = await bundle.wishlist.insert(WishlistItem(product_name="Teak Tray", product_price=3200.0))
    assert db.tree["wishlist"][key]["productName"] == "Teak Tray"

    failing = make_bundle(FakeRealtimeDatabase(fail_with_status=500))
    with pytest.raises(StoreWriteError):
        await failing.cart.insert(CartItem(product_name="Oak Bowl"))


@pytest.mark.asyncio
async def test_user_fetch_by_id():
    db = FakeRealtimeDatabase({"users": {"u-1": {"firstName": "Nimal", "image": "n.png"}}})
    bundle = make_bundle(db)

    user = await bundle.users.fetch_by_id("u-1")
    assert user.uid == "u-1"
    assert user.first_name == "Nimal"

    with pytest.raises(NotFoundError) as exc_info:
        await bundle.users.fetch_by_id("ghost")
    assert exc_info.value.key == "ghost"


def test_offline_or_unconfigured_store_uses_memory():
    assert RepositoryFactory.create(StoreConfig(offline=True)).backend == BackendType.MEMORY
    bundle = RepositoryFactory.create(StoreConfig())
    assert bundle.backend == BackendType.MEMORY
    assert bundle.client is None


@pytest.mark.asyncio
async def test_null_product_fields_read_as_defaults():
    db = FakeRealtimeDatabase({
        "products": {
            "-a": {"productName": "Jak Spoon", "productPrice": None, "productDescription": None, "image": None},
        }
    })

    products = await make_bundle(db).products.fetch_all()

    assert len(products) == 1
    assert products[0].price == 0.0
    assert products[0].description == ""
    assert products[0].image == ""


def test_rest_client_requires_database_url():
    with pytest.raises(ValueError):
        FirebaseRestClient("")
