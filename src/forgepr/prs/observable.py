"""Minimal publish/subscribe value holder."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Generic, TypeVar

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Observable(Generic[T]):
    """A value that notifies subscribers when it changes.

    Subscribers receive the current value immediately on subscribe and
    then every distinct new value. Setting the same value again is a no-op.
    """

    def __init__(self, initial: T) -> None:
        self._value = initial
        self._subscribers: list[Callable[[T], None]] = []

    @property
    def value(self) -> T:
        """Get the current value."""
        return self._value

    def set(self, value: T) -> None:
        """Replace the value and notify subscribers if it changed."""
        if value == self._value:
            return
        self._value = value
        for callback in list(self._subscribers):
            self._notify(callback, value)

    def subscribe(self, callback: Callable[[T], None]) -> Callable[[], None]:
        """Register a callback.

        Args:
            callback: Called with each value.

        Returns:
            A function that removes the subscription.
        """
        self._subscribers.append(callback)
        self._notify(callback, self._value)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    @property
    def subscriber_count(self) -> int:
        """Get number of active subscribers."""
        return len(self._subscribers)

    @staticmethod
    def _notify(callback: Callable[[T], None], value: T) -> None:
        try:
            callback(value)
        except Exception:
            logger.exception("Observable subscriber %r failed", callback)

    def __repr__(self) -> str:
        """Get string representation."""
        return f"Observable({self._value!r})"
