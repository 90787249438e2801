"""Product list state: full catalog plus the query-filtered view.

The dashboard loads the catalog once per activation and re-filters the cached
list on every keystroke, so searching never goes back to the store.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional

from fletx.core import RxBool, RxList, RxStr

from carves.shared.core import events
from carves.shared.core.errors import RepositoryError
from carves.shared.core.event_bus import EventBus, EventPayload
from carves.shared.domain.catalog import filter_products
from carves.shared.domain.models import Product
from carves.shared.infrastructure.persistence.base import ProductRepository

from .subscription import Subscription, listen_all

logger = logging.getLogger(__name__)


class ProductState:
    """Reactive search/filter state for the product dashboard.

    ``filtered_products`` is always recomputed from the last successfully
    loaded catalog and the current query; it is replaced wholesale, never
    patched. Concurrent ``load_all`` calls are not sequenced: whichever
    completes last wins. ``loading`` stays True while any of them is in flight.
    """

    def __init__(self, repository: ProductRepository, event_bus: Optional[EventBus] = None) -> None:
        """Initialize product state.

        Args:
            repository: Source of the full product collection
            event_bus: Optional bus for load notifications
        """
        self.repository = repository
        self.bus = event_bus

        self.filtered_products: RxList[Product] = RxList([])
        self.loading: RxBool = RxBool(False)
        self.error: RxStr = RxStr("")

        self._products: List[Product] = []
        self._query = ""
        self._in_flight = 0

    @property
    def products(self) -> List[Product]:
        """The last successfully loaded catalog."""
        return list(self._products)

    @property
    def query(self) -> str:
        return self._query

    @property
    def is_empty(self) -> bool:
        return not self.loading.value and not self.filtered_products.value

    # --- Public Actions ---

    async def load_all(self) -> List[Product]:
        """Fetch the whole catalog and recompute the filtered view.

        On failure the previous catalog and view are kept, ``error`` holds the
        message and the repository error is re-raised. ``loading`` is recomputed
        on every exit path, cancellation included.

        Returns:
            The recomputed filtered view
        """
        self._in_flight += 1
        self.loading.value = True
        logger.info("Loading product catalog")
        try:
            await self._publish(events.TOPIC_PRODUCTS_LOADING, events.create_products_loading_event(self._query))
            products = await self.repository.fetch_all()
        except RepositoryError as e:
            self.error.value = str(e) or e.__class__.__name__
            logger.error(f"Product catalog load failed: {e}")
            await self._publish(events.TOPIC_PRODUCTS_FAILED, events.create_products_failed_event(self.error.value))
            raise
        else:
            self._products = list(products)
            self.error.value = ""
            self._recompute()
        finally:
            self._in_flight -= 1
            self.loading.value = self._in_flight > 0

        logger.info(f"Loaded {len(self._products)} products ({len(self.filtered_products.value)} visible)")
        await self._publish(
            events.TOPIC_PRODUCTS_LOADED,
            events.create_products_loaded_event(
                total=len(self._products),
                visible=len(self.filtered_products.value),
                query=self._query,
            ),
        )
        return list(self.filtered_products.value)

    def set_query(self, query: Optional[str]) -> List[Product]:
        """Store ``query`` and recompute the filtered view synchronously."""
        self._query = query or ""
        self._recompute()
        return list(self.filtered_products.value)

    def subscribe(self, callback: Callable[..., None]) -> Subscription:
        """Call ``callback`` whenever the view, the loading flag or the error changes."""
        return listen_all([self.filtered_products, self.loading, self.error], callback)

    # --- Internals ---

    def _recompute(self) -> None:
        self.filtered_products.value = filter_products(self._products, self._query)

    async def _publish(self, topic: str, payload: EventPayload) -> None:
        if self.bus is not None:
            await self.bus.publish(topic, payload)
