"""Grouping of reactive listeners so a screen can drop them in one call."""

from __future__ import annotations

from typing import Any, Callable, Iterable, List


def listen_all(fields: Iterable[Any], callback: Callable[..., None]) -> "Subscription":
    """Register ``callback`` on every reactive field and group the observers."""
    return Subscription([field.listen(callback) for field in fields])


class Subscription:
    """Handle returned by ``subscribe``; call ``dispose()`` on teardown."""

    def __init__(self, observers: List[Any]) -> None:
        self._observers = list(observers)

    @property
    def active(self) -> bool:
        return bool(self._observers)

    def dispose(self) -> None:
        while self._observers:
            self._observers.pop().dispose()

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, *exc_info) -> None:
        self.dispose()
