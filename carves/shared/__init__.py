"""
Yala Carves Shared Kernel
=========================

Business records and infrastructure used by the storefront screens.

Architecture:
- core: EventBus, errors, configuration, service registry
- domain: Products, cart/wishlist items, users, catalog search
- infrastructure: Remote store repositories and the cached identity
"""

__version__ = "0.3.0"

__all__ = []
