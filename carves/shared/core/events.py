"""Canonical event definitions for the Yala Carves storefront."""

from __future__ import annotations

import time
from typing import Literal

from .event_bus import EventPayload

# Shell topics
TOPIC_LOGS_EVENT = "logs.event"
TOPIC_NOTIFICATION = "ui.notification"

# Catalog topics
TOPIC_PRODUCTS_LOADING = "products.loading"
TOPIC_PRODUCTS_LOADED = "products.loaded"
TOPIC_PRODUCTS_FAILED = "products.failed"

# Mutation topics
TOPIC_CART_ITEM_ADDED = "cart.item_added"
TOPIC_WISHLIST_ITEM_ADDED = "wishlist.item_added"

# Session topics
TOPIC_USER_LOADED = "user.loaded"


def create_logs_event(
    message: str,
    level: Literal["info", "warning", "error", "success"] = "info",
    topic: str | None = None,
) -> EventPayload:
    """Create a log feed event."""
    return {
        "message": message,
        "level": level,
        "topic": topic,
        "ts": time.time(),
    }


def create_notification_event(message: str, kind: str = "info") -> EventPayload:
    """Create a transient confirmation message for the UI (e.g. a snack bar)."""
    return {
        "message": message,
        "kind": kind,
        "ts": time.time(),
    }


def create_products_loading_event(query: str) -> EventPayload:
    return {"query": query}


def create_products_loaded_event(total: int, visible: int, query: str) -> EventPayload:
    """Create a products loaded event.

    Args:
        total: Size of the full product list
        visible: Size of the filtered view after recomputation
        query: Search query the view was filtered with
    """
    return {
        "total": total,
        "visible": visible,
        "query": query,
    }


def create_products_failed_event(error: str) -> EventPayload:
    return {"error": error}


def create_cart_item_added_event(item_id: str, product_name: str, quantity: int) -> EventPayload:
    return {
        "id": item_id,
        "product_name": product_name,
        "quantity": quantity,
    }


def create_wishlist_item_added_event(item_id: str, product_name: str) -> EventPayload:
    return {
        "id": item_id,
        "product_name": product_name,
    }


def create_user_loaded_event(uid: str, first_name: str | None) -> EventPayload:
    return {
        "uid": uid,
        "first_name": first_name,
    }
