"""Application Shell State.

Log feed and transient notifications, driven by EventBus topics
and exposed through FletXr reactive fields.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from fletx.core import RxBool, RxList

from carves.shared.core import events
from carves.shared.core.event_bus import EventBus, EventPayload

# Oldest entries are dropped past this many
MAX_LOG_ENTRIES = 200


class AppState:
    """Reactive state for the storefront shell.

    Subscribes to shell topics on the EventBus and mirrors them into reactive
    properties the UI listens to.
    """

    def __init__(self, event_bus: EventBus) -> None:
        """Initialize application state.

        Args:
            event_bus: The shared event bus for cross-cutting concerns
        """
        self.bus = event_bus

        self.is_ready: RxBool = RxBool(False)

        # Log entries (each is a dict: {message, level, ts})
        self.logs: RxList[Dict[str, Any]] = RxList([])

        # Confirmation messages, e.g. "Added to cart"; the UI shows the newest
        self.notifications: RxList[Dict[str, Any]] = RxList([])

        self._started = False

    async def initialize(self) -> None:
        """Bind to EventBus topics. Safe to call more than once."""
        if self._started:
            return

        await self.bus.subscribe(events.TOPIC_LOGS_EVENT, self._handle_log_event)
        await self.bus.subscribe(events.TOPIC_NOTIFICATION, self._handle_notification)

        self._started = True
        self.is_ready.value = True

    # --- Public Actions ---

    async def publish(self, topic: str, payload: EventPayload) -> None:
        await self.bus.publish(topic, payload)

    async def push_log(self, message: str, level: str = "info") -> None:
        """Add a message to the log feed via the bus."""
        await self.publish(events.TOPIC_LOGS_EVENT, events.create_logs_event(message, level))  # type: ignore[arg-type]

    def latest_notification(self) -> Optional[str]:
        items = self.notifications.value
        return items[-1].get("message") if items else None

    # --- Event Handlers ---

    async def _handle_log_event(self, payload: EventPayload) -> None:
        if payload:
            self._append_log(payload)

    async def _handle_notification(self, payload: EventPayload) -> None:
        if payload.get("message"):
            self.notifications.value = _capped(self.notifications.value, payload)

    def _append_log(self, entry: Dict[str, Any]) -> None:
        self.logs.value = _capped(self.logs.value, entry)


def _capped(entries: List[Dict[str, Any]], entry: Dict[str, Any]) -> List[Dict[str, Any]]:
    return [*entries, entry][-MAX_LOG_ENTRIES:]
