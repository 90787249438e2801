"""Add-to-wishlist command handling."""

from __future__ import annotations

import logging
from typing import Optional

from carves.shared.core import events
from carves.shared.core.event_bus import EventBus
from carves.shared.domain.models import WishlistItem
from carves.shared.infrastructure.persistence.base import WishlistRepository

logger = logging.getLogger(__name__)

WISHLIST_CONFIRMATION = "Added to wishlist"


class WishlistState:
    def __init__(self, repository: WishlistRepository, event_bus: Optional[EventBus] = None) -> None:
        self.repository = repository
        self.bus = event_bus

    async def add_to_wishlist(self, item: WishlistItem) -> str:
        """Insert ``item`` and return the store id. The item itself carries no id."""
        item_id = await self.repository.insert(item)
        logger.info(f"Wishlist item {item_id} added: {item.product_name}")

        if self.bus is not None:
            await self.bus.publish(
                events.TOPIC_WISHLIST_ITEM_ADDED,
                events.create_wishlist_item_added_event(item_id, item.product_name),
            )
            await self.bus.publish(
                events.TOPIC_NOTIFICATION,
                events.create_notification_event(WISHLIST_CONFIRMATION, "success"),
            )
        return item_id
