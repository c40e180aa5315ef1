"""Thread-safe channels with close, cancel and select.

A channel with capacity 0 is a rendezvous point: ``send`` only returns once
a receiver has taken the item. Channels that should be waited on together
with :func:`select` must share one ``threading.Condition``.
"""

import threading
from collections import deque
from typing import Any, Generic, Optional, TypeVar

T = TypeVar("T")


class ChannelClosed(Exception):
    """Send on a closed channel."""


class ChannelCancelled(Exception):
    """The receiving side gave up on the channel."""


class Channel(Generic[T]):
    """A bounded FIFO handoff between threads."""

    def __init__(self, capacity: int = 0, condition: Optional[threading.Condition] = None):
        if capacity < 0:
            raise ValueError("capacity must be >= 0")
        self.capacity = capacity
        self._cond = condition or threading.Condition()
        self._buffer: deque[T] = deque()
        self._closed = False
        self._cancelled = False
        self._sent = 0
        self._taken = 0

    @property
    def condition(self) -> threading.Condition:
        return self._cond

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def _raise_if_unusable(self) -> None:
        if self._cancelled:
            raise ChannelCancelled()
        if self._closed:
            raise ChannelClosed()

    def send(self, item: T) -> None:
        """Send an item, blocking while the channel is full.

        On an unbuffered channel this also waits until a receiver has taken
        the item.

        Raises:
            ChannelClosed: If the channel was closed
            ChannelCancelled: If the channel was cancelled before or while waiting
        """
        with self._cond:
            limit = max(self.capacity, 1)
            self._cond.wait_for(
                lambda: self._cancelled or self._closed or len(self._buffer) < limit
            )
            self._raise_if_unusable()
            self._buffer.append(item)
            self._sent += 1
            ticket = self._sent
            self._cond.notify_all()

            if self.capacity == 0:
                self._cond.wait_for(lambda: self._cancelled or self._taken >= ticket)
                if self._taken < ticket:
                    raise ChannelCancelled()

    def offer(self, item: T) -> bool:
        """Buffer an item without blocking.

        Returns False if the channel is closed, cancelled or full. An
        unbuffered channel never accepts offers.
        """
        with self._cond:
            if self._closed or self._cancelled or len(self._buffer) >= self.capacity:
                return False
            self._buffer.append(item)
            self._sent += 1
            self._cond.notify_all()
            return True

    def close(self) -> None:
        """Mark the end of the stream. Buffered items can still be received."""
        with self._cond:
            self._closed = True
            self._cond.notify_all()

    def cancel(self) -> None:
        """Abandon the channel, dropping buffered items and releasing senders."""
        with self._cond:
            self._cancelled = True
            self._buffer.clear()
            self._cond.notify_all()

    def _poll(self) -> Optional[tuple[Optional[T], bool]]:
        # Caller holds the condition.
        if self._buffer and not self._cancelled:
            item = self._buffer.popleft()
            self._taken += 1
            self._cond.notify_all()
            return item, True
        if self._closed or self._cancelled:
            return None, False
        return None

    def recv(self, timeout: Optional[float] = None) -> tuple[Optional[T], bool]:
        """Receive the next item.

        Returns:
            ``(item, True)`` for a value, ``(None, False)`` once the channel is
            closed and drained (or cancelled)

        Raises:
            TimeoutError: If nothing arrived within ``timeout`` seconds
        """
        _, item, ok = select(self, timeout=timeout)
        return item, ok

    def __iter__(self):
        while True:
            item, ok = self.recv()
            if not ok:
                return
            yield item


def select(*channels: Channel[Any], timeout: Optional[float] = None) -> tuple[int, Any, bool]:
    """Wait until one of the channels has a value or is exhausted.

    Channels are checked in argument order, so earlier channels win when
    several are ready.

    Returns:
        ``(index, item, ok)`` where ``ok`` is False if channel ``index`` is
        closed and drained

    Raises:
        ValueError: If no channels are given or they do not share a condition
        TimeoutError: If nothing became ready within ``timeout`` seconds
    """
    if not channels:
        raise ValueError("select needs at least one channel")
    cond = channels[0].condition
    if any(ch.condition is not cond for ch in channels):
        raise ValueError("channels passed to select must share a condition")

    ready: list[tuple[int, Any, bool]] = []

    def poll_all() -> bool:
        for index, ch in enumerate(channels):
            polled = ch._poll()
            if polled is not None:
                ready.append((index, polled[0], polled[1]))
                return True
        return False

    with cond:
        if not cond.wait_for(poll_all, timeout=timeout):
            raise TimeoutError("no channel became ready")
    return ready[0]
