"""
Shared Infrastructure Module
============================

Technical adapters: remote store repositories and the cached identity.
"""

from .identity import IdentityProvider, SessionIdentityProvider
from .persistence import (
    BackendType,
    RepositoryBundle,
    RepositoryFactory,
    build_repositories,
)

__all__ = [
    "IdentityProvider",
    "SessionIdentityProvider",
    "BackendType",
    "RepositoryBundle",
    "RepositoryFactory",
    "build_repositories",
]
