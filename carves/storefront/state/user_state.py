"""Signed-in user state for the dashboard greeting."""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from fletx.core import RxDict

from carves.shared.core import events
from carves.shared.core.event_bus import EventBus
from carves.shared.domain import catalog
from carves.shared.domain.models import AuthIdentity, User
from carves.shared.infrastructure.identity import IdentityProvider
from carves.shared.infrastructure.persistence.base import UserRepository

from .subscription import Subscription, listen_all

logger = logging.getLogger(__name__)


class UserState:
    """Reads the cached identity and exposes the fetched profile reactively."""

    def __init__(
        self,
        repository: UserRepository,
        identity: IdentityProvider,
        event_bus: Optional[EventBus] = None,
    ) -> None:
        self.repository = repository
        self.identity = identity
        self.bus = event_bus

        # Profile fields as dumped from the User model; empty until loaded
        self.user: RxDict[str, Any] = RxDict({})
        self._profile: Optional[User] = None

    @property
    def profile(self) -> Optional[User]:
        return self._profile

    @property
    def greeting(self) -> str:
        return catalog.greeting(self._profile)

    def get_current_user(self) -> Optional[AuthIdentity]:
        """Return the locally cached authenticated identity, if any."""
        return self.identity.current_user()

    async def get_user_by_id(self, uid: str) -> User:
        """Fetch the profile for ``uid`` and publish it to ``user``.

        Raises:
            NotFoundError: If no profile exists for ``uid``
            NetworkError: If the store cannot be reached
        """
        profile = await self.repository.fetch_by_id(uid)
        self._profile = profile
        self.user.value = profile.model_dump()
        logger.info(f"Loaded profile for {uid}")

        if self.bus is not None:
            await self.bus.publish(
                events.TOPIC_USER_LOADED,
                events.create_user_loaded_event(profile.uid, profile.first_name),
            )
        return profile

    async def refresh(self) -> Optional[User]:
        """Reload the signed-in user's profile; no-op when nobody is signed in."""
        current = self.get_current_user()
        if current is None:
            logger.debug("No signed-in user; skipping profile refresh")
            return None
        return await self.get_user_by_id(current.uid)

    def clear(self) -> None:
        self._profile = None
        self.user.value = {}

    def subscribe(self, callback: Callable[..., None]) -> Subscription:
        return listen_all([self.user], callback)
