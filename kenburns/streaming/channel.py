# © Copyright 2025 Stuart Parmenter
# SPDX-License-Identifier: MIT

import threading
from typing import Generic, Optional, TypeVar


T = TypeVar("T")


class RendezvousChannel(Generic[T]):
    """Capacity-zero handoff between one producer thread and one consumer.

    send() offers a single item and blocks until the consumer has taken it,
    so at most one undelivered item exists at any time. The consumer side
    never blocks with try_receive(). There is no close/drain protocol.
    """

    def __init__(self):
        self._cond = threading.Condition()
        self._item: Optional[T] = None
        self._offered = False
        self._taken = 0
        self._sent = 0

    @property
    def pending(self) -> bool:
        """Whether an item is currently offered and not yet taken."""
        with self._cond:
            return self._offered

    def send(self, item: T) -> None:
        """Offer item and wait until it has been received."""
        with self._cond:
            # single producer, but keep concurrent senders from clobbering the slot
            self._cond.wait_for(lambda: not self._offered)
            self._item = item
            self._offered = True
            self._sent += 1
            ticket = self._sent
            self._cond.notify_all()
            self._cond.wait_for(lambda: self._taken >= ticket)

    def _take(self) -> T:
        item = self._item
        self._item = None
        self._offered = False
        self._taken += 1
        self._cond.notify_all()
        return item  # type: ignore[return-value]

    def try_receive(self) -> Optional[T]:
        """Take the offered item if there is one; never blocks."""
        with self._cond:
            if not self._offered:
                return None
            return self._take()

    def receive(self, timeout: Optional[float] = None) -> Optional[T]:
        """Block until an item is offered (or timeout elapses) and take it."""
        with self._cond:
            if not self._cond.wait_for(lambda: self._offered, timeout=timeout):
                return None
            return self._take()
