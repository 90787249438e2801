"""
Shared Core Module
==================

Event system, error taxonomy, configuration and service registry.
"""

# Event System
from .event_bus import EventBus, EventPayload
from . import events

# Errors
from .errors import NetworkError, NotFoundError, RepositoryError, StoreWriteError

# Service Registry
from .service_registry import (
    get_repositories,
    set_repositories,
    register_cleanup_handler,
    run_cleanup,
)

# Configuration
from .configuration import (
    ConfigManager,
    SystemConfig,
    get_config_manager,
    get_config,
    ValidationLevel,
)

__all__ = [
    # Event System
    "EventBus",
    "EventPayload",
    "events",
    # Errors
    "RepositoryError",
    "NetworkError",
    "StoreWriteError",
    "NotFoundError",
    # Service Registry
    "get_repositories",
    "set_repositories",
    "register_cleanup_handler",
    "run_cleanup",
    # Configuration
    "ConfigManager",
    "SystemConfig",
    "get_config_manager",
    "get_config",
    "ValidationLevel",
]
