"""Cached value that replays its latest value to subscribers."""

from __future__ import annotations

import asyncio
import logging
from collections import deque
from typing import (
    Any,
    AsyncIterator,
    Callable,
    Deque,
    Generic,
    List,
    Optional,
    TypeVar,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

_UNSET: Any = object()
_END: Any = object()


class ValueNotSetError(LookupError):
    """Raised when reading a cached value that has never been published."""


class Subscription(Generic[T]):
    """Handle returned by :meth:`CachedValue.subscribe`."""

    def __init__(
        self,
        owner: "CachedValue[T]",
        on_value: Callable[[T], None],
        on_close: Optional[Callable[[], None]] = None,
    ) -> None:
        self._owner = owner
        self.on_value = on_value
        self.on_close = on_close
        self.active = True

    def cancel(self) -> None:
        """Stop receiving values. Safe to call more than once."""
        if not self.active:
            return
        self.active = False
        self._owner._detach(self)


class CachedValue(Generic[T]):
    """Holds the last known value of ``T`` and republishes it.

    A cached value is either unset, set, or closed. Subscribers that join
    while a value is held receive it synchronously from ``subscribe`` and
    then every later publish, in publish order. Closing is terminal: later
    publishes are ignored but the last value can still be read.
    """

    def __init__(self, name: str, seed: Any = _UNSET) -> None:
        """Create a cached value.

        Args:
            name: Label used in log messages
            seed: Optional initial value; omit to start unset
        """
        self.name = name
        self._value: Any = seed
        self._subscribers: List[Subscription[T]] = []
        self._pending: Deque[T] = deque()
        self._delivering = False
        self._closed = False

    @property
    def has_value(self) -> bool:
        return self._value is not _UNSET

    @property
    def is_closed(self) -> bool:
        return self._closed

    @property
    def value(self) -> T:
        """Return the current value.

        Raises:
            ValueNotSetError: If nothing has been published yet
        """
        if self._value is _UNSET:
            raise ValueNotSetError(f"{self.name} has no value yet")
        return self._value

    def get(self, default: Optional[T] = None) -> Optional[T]:
        """Return the current value, or ``default`` when unset."""
        if self._value is _UNSET:
            return default
        return self._value

    def publish(self, value: T) -> bool:
        """Store ``value`` and notify subscribers.

        Values published from inside a subscriber callback are delivered
        after the current delivery completes. Until then ``value`` read from
        within that callback still returns the value being delivered.

        Returns:
            False if the cached value is closed and nothing happened
        """
        if self._closed:
            logger.debug(f"Ignoring publish to closed {self.name}")
            return False

        self._pending.append(value)
        if self._delivering:
            return True

        self._delivering = True
        try:
            while self._pending:
                current = self._pending.popleft()
                self._value = current
                for subscription in list(self._subscribers):
                    if subscription.active:
                        self._notify(subscription, current)
        finally:
            self._delivering = False
        return True

    def subscribe(
        self,
        on_value: Callable[[T], None],
        on_close: Optional[Callable[[], None]] = None,
    ) -> Subscription[T]:
        """Register callbacks for published values and for closing.

        Args:
            on_value: Called with the current value (if any) immediately,
                then with each published value
            on_close: Called once when the cached value is closed

        Returns:
            Subscription handle; call ``cancel()`` to detach
        """
        subscription = Subscription(self, on_value, on_close)

        if self._closed:
            subscription.active = False
            if self.has_value:
                self._notify(subscription, self._value)
            self._notify_closed(subscription)
            return subscription

        self._subscribers.append(subscription)
        if self.has_value:
            self._notify(subscription, self._value)
        return subscription

    async def stream(self) -> AsyncIterator[T]:
        """Iterate over the current value and later publishes until closed."""
        queue: asyncio.Queue = asyncio.Queue()
        subscription = self.subscribe(
            queue.put_nowait, lambda: queue.put_nowait(_END)
        )
        try:
            while True:
                item = await queue.get()
                if item is _END:
                    return
                yield item
        finally:
            subscription.cancel()

    def __aiter__(self) -> AsyncIterator[T]:
        return self.stream()

    def close(self) -> None:
        """Close the cached value and notify subscribers. Idempotent."""
        if self._closed:
            return
        self._closed = True
        self._pending.clear()

        subscribers, self._subscribers = self._subscribers, []
        for subscription in subscribers:
            if subscription.active:
                subscription.active = False
                self._notify_closed(subscription)

    def _detach(self, subscription: Subscription[T]) -> None:
        try:
            self._subscribers.remove(subscription)
        except ValueError:
            pass

    def _notify(self, subscription: Subscription[T], value: T) -> None:
        try:
            subscription.on_value(value)
        except Exception as e:
            logger.error(f"Error in subscriber of {self.name}: {e}")

    def _notify_closed(self, subscription: Subscription[T]) -> None:
        if subscription.on_close is None:
            return
        try:
            subscription.on_close()
        except Exception as e:
            logger.error(f"Error in close handler of {self.name}: {e}")

    def __repr__(self) -> str:
        state = "closed" if self._closed else ("set" if self.has_value else "unset")
        return f"<CachedValue {self.name} {state}>"
