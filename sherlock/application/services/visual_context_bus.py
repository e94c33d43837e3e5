"""
Process-wide holder of "who is in view right now".

One current VisualContextSnapshot plus synchronous fan-out to subscribers.
The snapshot is replaced wholesale on every update. Subscribers run in
registration order; an exception in one is logged and the rest still run.
An unsubscribed callback is never invoked afterwards, including when it is
removed while a fan-out is in progress.
"""
import dataclasses
import itertools
import logging
import threading
import time
from typing import Callable, Dict, Optional

from ...domain.models.visual_context import VisualContextSnapshot

logger = logging.getLogger(__name__)

Subscriber = Callable[[VisualContextSnapshot], None]


class VisualContextBus:
    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._snapshot: Optional[VisualContextSnapshot] = None
        self._subscribers: Dict[int, Subscriber] = {}
        self._tokens = itertools.count()
        self._lock = threading.RLock()
        self._clock = clock

    def current(self) -> Optional[VisualContextSnapshot]:
        with self._lock:
            return self._snapshot

    def update(self, snapshot: VisualContextSnapshot) -> None:
        if not isinstance(snapshot, VisualContextSnapshot):
            raise TypeError(f"Expected VisualContextSnapshot, got {type(snapshot).__name__}")
        if snapshot.last_seen is None:
            snapshot = dataclasses.replace(snapshot, last_seen=self._clock())

        with self._lock:
            self._snapshot = snapshot
            for token in list(self._subscribers):
                callback = self._subscribers.get(token)
                if callback is None:
                    continue
                try:
                    callback(snapshot)
                except Exception:
                    logger.exception(f"Visual context subscriber {token} failed")

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register a callback; returns a function that unsubscribes it."""
        with self._lock:
            token = next(self._tokens)
            self._subscribers[token] = callback

        def unsubscribe() -> None:
            with self._lock:
                self._subscribers.pop(token, None)

        return unsubscribe

    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subscribers)

    def clear(self) -> None:
        """Drop the snapshot and all subscribers (shutdown)."""
        with self._lock:
            self._snapshot = None
            self._subscribers.clear()
