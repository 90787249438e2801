from .base import CartRepository, ProductRepository, UserRepository, WishlistRepository
from .factory import BackendType, RepositoryBundle, RepositoryFactory, build_repositories

__all__ = [
    "BackendType",
    "CartRepository",
    "ProductRepository",
    "RepositoryBundle",
    "RepositoryFactory",
    "UserRepository",
    "WishlistRepository",
    "build_repositories",
]
