"""Firebase Realtime Database repositories over the REST API.

Collections are addressed as ``/<collection>.json``:

  GET  /products.json         → {"<key>": {productName, productPrice, ...}, ...} or null
  POST /cart.json             → {"name": "<generated key>"}
  GET  /users/<uid>.json      → {firstName, image, ...} or null

The optional database token is sent as the ``auth`` query parameter.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from carves.shared.core.errors import NetworkError, NotFoundError, StoreWriteError
from carves.shared.domain.models import CartItem, Product, User, WishlistItem

logger = logging.getLogger(__name__)


class FirebaseRestClient:
    """Thin async JSON client for one Realtime Database instance."""

    def __init__(
        self,
        database_url: str,
        auth_token: Optional[str] = None,
        timeout: float = 15.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        if not database_url:
            raise ValueError("database_url is required for the Firebase store")
        self.database_url = database_url.rstrip("/")
        self._auth_token = auth_token
        self._client = httpx.AsyncClient(
            base_url=self.database_url,
            headers={"Content-Type": "application/json"},
            timeout=timeout,
            transport=transport,
        )

    def _params(self) -> Dict[str, str]:
        return {"auth": self._auth_token} if self._auth_token else {}

    @staticmethod
    def path_for(*segments: str) -> str:
        return "/" + "/".join(quote(segment, safe="") for segment in segments) + ".json"

    async def get_json(self, *segments: str) -> Any:
        """GET a node; raises NetworkError on transport or HTTP failure."""
        path = self.path_for(*segments)
        try:
            resp = await self._client.get(path, params=self._params())
            resp.raise_for_status()
            return resp.json()
        except httpx.HTTPError as e:
            logger.error("firebase: method=get path=%s result=error error=%s", path, e)
            raise NetworkError(f"GET {path} failed: {e}") from e
        except ValueError as e:
            logger.error("firebase: method=get path=%s result=invalid_json", path)
            raise NetworkError(f"GET {path} returned invalid JSON") from e

    async def post_json(self, payload: Dict[str, Any], *segments: str) -> str:
        """POST a new child and return the key the store generated."""
        path = self.path_for(*segments)
        try:
            resp = await self._client.post(path, json=payload, params=self._params())
            resp.raise_for_status()
            body = resp.json()
        except httpx.HTTPError as e:
            logger.error("firebase: method=post path=%s result=error error=%s", path, e)
            raise StoreWriteError(f"POST {path} failed: {e}") from e
        except ValueError as e:
            raise StoreWriteError(f"POST {path} returned invalid JSON") from e

        key = body.get("name") if isinstance(body, dict) else None
        if not key:
            raise StoreWriteError(f"POST {path} did not return a generated key")
        logger.info("firebase: method=post path=%s result=success key=%s", path, key)
        return key

    async def aclose(self) -> None:
        await self._client.aclose()


def _children(node: Any) -> List[tuple[str, Dict[str, Any]]]:
    """Flatten a collection node into (key, record) pairs.

    Collections with integer keys come back as JSON arrays with null holes.
    """
    if node is None:
        return []
    if isinstance(node, dict):
        items = list(node.items())
    elif isinstance(node, list):
        items = [(str(index), value) for index, value in enumerate(node)]
    else:
        raise NetworkError(f"Unexpected collection payload: {type(node).__name__}")
    return [(key, value) for key, value in items if isinstance(value, dict)]


class FirebaseProductRepository:
    def __init__(self, client: FirebaseRestClient, collection: str = "products") -> None:
        self.client = client
        self.collection = collection

    async def fetch_all(self) -> List[Product]:
        node = await self.client.get_json(self.collection)
        products: List[Product] = []
        for key, record in _children(node):
            try:
                products.append(Product.model_validate(record))
            except ValidationError as e:
                logger.warning(f"Skipping malformed product '{key}': {e.error_count()} error(s)")
        logger.info(f"Fetched {len(products)} products from '{self.collection}'")
        return products


class FirebaseCartRepository:
    def __init__(self, client: FirebaseRestClient, collection: str = "cart") -> None:
        self.client = client
        self.collection = collection

    async def insert(self, item: CartItem) -> str:
        return await self.client.post_json(item.to_record(), self.collection)


class FirebaseWishlistRepository:
    def __init__(self, client: FirebaseRestClient, collection: str = "wishlist") -> None:
        self.client = client
        self.collection = collection

    async def insert(self, item: WishlistItem) -> str:
        return await self.client.post_json(item.to_record(), self.collection)


class FirebaseUserRepository:
    def __init__(self, client: FirebaseRestClient, collection: str = "users") -> None:
        self.client = client
        self.collection = collection

    async def fetch_by_id(self, uid: str) -> User:
        record = await self.client.get_json(self.collection, uid)
        if record is None:
            raise NotFoundError(self.collection, uid)
        if not isinstance(record, dict):
            raise NetworkError(f"Malformed user record '{uid}'")
        try:
            return User.model_validate({**record, "uid": record.get("uid") or uid})
        except ValidationError as e:
            raise NetworkError(f"Malformed user record '{uid}': {e.error_count()} error(s)") from e
