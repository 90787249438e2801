"""Service registry for cross-module access to initialized services."""

from __future__ import annotations

import atexit
import logging
from typing import TYPE_CHECKING, Callable, List, Optional

if TYPE_CHECKING:
    from carves.shared.infrastructure.persistence.factory import RepositoryBundle

logger = logging.getLogger(__name__)

# Repositories built at startup
_repositories: Optional["RepositoryBundle"] = None

# Global cleanup management
_cleanup_registered = False
_cleanup_handlers: List[Callable[[], None]] = []


def set_repositories(repositories: "RepositoryBundle") -> None:
    """Set the repositories shared by all screens."""
    global _repositories
    _repositories = repositories


def get_repositories() -> Optional["RepositoryBundle"]:
    return _repositories


def register_cleanup_handler(handler: Callable[[], None]) -> None:
    """Register a cleanup handler to be called on application exit."""
    global _cleanup_registered
    _cleanup_handlers.append(handler)
    if not _cleanup_registered:
        atexit.register(run_cleanup)
        _cleanup_registered = True
        logger.debug("Registered atexit cleanup handler")


def run_cleanup() -> None:
    """Run and forget every registered cleanup handler."""
    logger.info("Running application cleanup...")
    while _cleanup_handlers:
        handler = _cleanup_handlers.pop()
        try:
            handler()
        except Exception as e:
            logger.warning(f"Error in cleanup handler: {e}")
    logger.info("Application cleanup completed")


def clear_registry() -> None:
    """Forget registered services and handlers."""
    global _repositories
    _repositories = None
    _cleanup_handlers.clear()
