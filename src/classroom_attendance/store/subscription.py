from __future__ import annotations

import queue
import threading
from typing import Any, Callable, Generic, Iterator, List, Optional, TypeVar

from ..core.exceptions import SnapshotTimeout, StoreError
from .model import Document

T = TypeVar("T")
U = TypeVar("U")

_CLOSED = object()


class _Channel:
    """Snapshot queue shared by a subscription and its mapped views."""

    def __init__(self) -> None:
        self.queue: "queue.Queue[Any]" = queue.Queue()
        self.lock = threading.Lock()
        self.closed = False
        self.unsubscribe: Optional[Callable[[], None]] = None

    def put(self, item: Any) -> None:
        with self.lock:
            if self.closed:
                return
            self.queue.put(item)

    def close(self) -> None:
        with self.lock:
            if self.closed:
                return
            self.closed = True
            unsubscribe, self.unsubscribe = self.unsubscribe, None
        if unsubscribe is not None:
            unsubscribe()
        self.queue.put(_CLOSED)


class Subscription(Generic[T]):
    """Handle on a live query.

    Iterating yields one full result-set per change until close() is called.
    Use it as a context manager so the listener is always released:

        with store.subscribe(query) as sub:
            first = sub.next_snapshot()
    """

    def __init__(self, *, _channel: Optional[_Channel] = None, _transform: Optional[Callable[[Any], T]] = None):
        self._channel = _channel or _Channel()
        self._transform = _transform

    # Backend side

    def bind(self, unsubscribe: Callable[[], None]) -> None:
        """Attach the callable that detaches the backend listener."""

        with self._channel.lock:
            if not self._channel.closed:
                self._channel.unsubscribe = unsubscribe
                return
        unsubscribe()

    def push(self, documents: List[Document]) -> None:
        self._channel.put(list(documents))

    def fail(self, error: BaseException) -> None:
        self._channel.put(error)

    # Consumer side

    @property
    def closed(self) -> bool:
        return self._channel.closed

    def close(self) -> None:
        self._channel.close()

    def map(self, fn: Callable[[T], U]) -> "Subscription[U]":
        """View of the same subscription with fn applied to each snapshot.

        Both handles share one queue: consume from only one of them.
        """

        inner = self._transform

        def composed(snapshot: Any) -> U:
            return fn(inner(snapshot) if inner else snapshot)

        return Subscription(_channel=self._channel, _transform=composed)

    def next_snapshot(self, timeout: Optional[float] = None) -> T:
        try:
            return self._next(timeout)
        except StopIteration:
            raise StoreError("subscription is closed")

    def _next(self, timeout: Optional[float]) -> T:
        if self._channel.closed:
            raise StopIteration
        try:
            item = self._channel.queue.get(timeout=timeout)
        except queue.Empty:
            raise SnapshotTimeout(f"no snapshot received within {timeout} seconds")

        if item is _CLOSED:
            # Leave the marker for any other view blocked on the same queue.
            self._channel.queue.put(_CLOSED)
            raise StopIteration
        if isinstance(item, StoreError):
            raise item
        if isinstance(item, BaseException):
            raise StoreError(str(item)) from item
        return self._transform(item) if self._transform else item

    def __iter__(self) -> Iterator[T]:
        return self

    def __next__(self) -> T:
        return self._next(None)

    def __enter__(self) -> "Subscription[T]":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
