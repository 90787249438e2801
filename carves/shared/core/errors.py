"""Errors raised by the remote repositories.

State holders let these propagate; the dashboard controller is the boundary
that logs them and reports them to the log feed.
"""

from __future__ import annotations


class RepositoryError(RuntimeError):
    """Base class for failures reported by a remote repository."""


class NetworkError(RepositoryError):
    """Raised when the store cannot be reached or refuses a read."""


class StoreWriteError(RepositoryError):
    """Raised when the store rejects or fails an insert."""


class NotFoundError(RepositoryError):
    """Raised when a record requested by identifier does not exist."""

    def __init__(self, collection: str, key: str) -> None:
        super().__init__(f"No record '{key}' in '{collection}'")
        self.collection = collection
        self.key = key
