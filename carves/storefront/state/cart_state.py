"""Add-to-cart command handling."""

from __future__ import annotations

import logging
from typing import Optional

from carves.shared.core import events
from carves.shared.core.event_bus import EventBus
from carves.shared.domain.models import CartItem
from carves.shared.infrastructure.persistence.base import CartRepository

logger = logging.getLogger(__name__)

CART_CONFIRMATION = "Added to cart"


class CartState:
    """Hands cart items to the remote store; keeps no local copy.

    Identical products are not merged: every call creates a separate entry.
    """

    def __init__(self, repository: CartRepository, event_bus: Optional[EventBus] = None) -> None:
        self.repository = repository
        self.bus = event_bus

    async def add_to_cart(self, item: CartItem) -> CartItem:
        """Insert ``item`` and return it with the store-assigned id.

        Raises:
            StoreWriteError: If the store rejects the insert
        """
        item_id = await self.repository.insert(item)
        stored = item.model_copy(update={"id": item_id})
        logger.info(f"Cart item {item_id} added: {stored.product_name} x{stored.quantity}")

        if self.bus is not None:
            await self.bus.publish(
                events.TOPIC_CART_ITEM_ADDED,
                events.create_cart_item_added_event(item_id, stored.product_name, stored.quantity),
            )
            await self.bus.publish(
                events.TOPIC_NOTIFICATION,
                events.create_notification_event(CART_CONFIRMATION, "success"),
            )
        return stored
