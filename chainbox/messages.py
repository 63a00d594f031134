"""Messages passed between processes, closable channels and panic-style recovery."""

from __future__ import annotations

import functools
import threading
from collections import deque
from dataclasses import dataclass
from typing import Any, Callable, Deque, Generic, Iterator, Optional, TypeVar

T = TypeVar("T")


@dataclass
class Data:
    """A single message travelling through a chain."""

    value: Any = None


class ChannelClosed(Exception):
    """Raised when sending on a closed channel or receiving from a drained one."""


class Channel(Generic[T]):
    """A bounded FIFO that can be closed, after which it drains and then ends.

    A capacity below one is treated as one, so senders always block once the
    channel holds an item that nobody has taken yet.
    """

    def __init__(self, maxsize: int = 0) -> None:
        self._maxsize = max(1, maxsize)
        self._items: Deque[T] = deque()
        self._closed = False
        self._cond = threading.Condition()

    @property
    def maxsize(self) -> int:
        return self._maxsize

    @property
    def closed(self) -> bool:
        with self._cond:
            return self._closed

    def __len__(self) -> int:
        with self._cond:
            return len(self._items)

    def put(self, item: T) -> None:
        """Add an item, blocking while the channel is full."""
        with self._cond:
            while not self._closed and len(self._items) >= self._maxsize:
                self._cond.wait()
            if self._closed:
                raise ChannelClosed("send on closed channel")
            self._items.append(item)
            self._cond.notify_all()

    def get(self, timeout: Optional[float] = None) -> T:
        """Take the oldest item.

        Raises ChannelClosed once the channel is closed and empty, and
        TimeoutError if nothing arrives within ``timeout`` seconds.
        """
        with self._cond:
            ready = self._cond.wait_for(
                lambda: bool(self._items) or self._closed, timeout
            )
            if not ready:
                raise TimeoutError("no message received in time")
            if self._items:
                item = self._items.popleft()
                self._cond.notify_all()
                return item
            raise ChannelClosed("receive from closed channel")

    def close(self) -> None:
        """Close the channel; items already queued can still be received."""
        with self._cond:
            if self._closed:
                raise ChannelClosed("close of closed channel")
            self._closed = True
            self._cond.notify_all()

    def __iter__(self) -> Iterator[T]:
        """Yield items until the channel is closed and drained."""
        while True:
            try:
                item = self.get()
            except ChannelClosed:
                return
            yield item


def recovered(func: Callable[..., Any]) -> Callable[..., Any]:
    """Run ``func``, printing any exception it raises and returning None instead."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except Exception as exc:  # noqa: BLE001 - deliberate catch-all
            print(exc)
            return None

    return wrapper