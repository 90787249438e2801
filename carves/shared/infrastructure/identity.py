"""Locally cached identity of the signed-in account.

Sign-in itself happens in the external identity provider; this module only
holds what it hands back so screens can ask "who is signed in?" offline.
"""

from __future__ import annotations

import logging
from typing import Optional, Protocol

from carves.shared.domain.models import AuthIdentity

logger = logging.getLogger(__name__)


class IdentityProvider(Protocol):
    def current_user(self) -> Optional[AuthIdentity]:
        ...


class SessionIdentityProvider:
    """Holds the identity for the lifetime of the app session."""

    def __init__(self, identity: Optional[AuthIdentity] = None) -> None:
        self._identity = identity

    def current_user(self) -> Optional[AuthIdentity]:
        return self._identity

    def sign_in(self, identity: AuthIdentity) -> None:
        logger.info(f"Signed in as {identity.uid}")
        self._identity = identity

    def sign_out(self) -> None:
        if self._identity is not None:
            logger.info(f"Signed out {self._identity.uid}")
        self._identity = None
