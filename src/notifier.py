"""Synchronous publish/subscribe primitive.

A Notifier keeps callbacks in registration order and broadcasts a single
value to all of them. A subscriber that raises is logged and skipped; the
remaining subscribers still receive the value. OSError is the exception:
it propagates to whoever triggered the broadcast.
"""
from __future__ import annotations
import logging
from typing import Any, Callable, List

logger = logging.getLogger(__name__)

Callback = Callable[[Any], None]


class Subscription:
    """Disposal handle returned by Notifier.subscribe()."""

    def __init__(self, notifier: 'Notifier', callback: Callback):
        self._notifier = notifier
        self.callback = callback
        self.active = True

    def dispose(self) -> None:
        if not self.active:
            return
        self.active = False
        self._notifier._discard(self)

    def __repr__(self) -> str:  # pragma: no cover - convenience only
        return f"Subscription(callback={self.callback!r}, active={self.active})"


class Notifier:
    def __init__(self, name: str = 'notifier'):
        self.name = name
        self._subscriptions: List[Subscription] = []

    def subscribe(self, callback: Callback) -> Subscription:
        """Register callback; the same callable may be registered twice."""
        sub = Subscription(self, callback)
        self._subscriptions.append(sub)
        return sub

    def notify(self, value: Any) -> None:
        """Invoke every subscriber with value, in registration order."""
        for sub in list(self._subscriptions):
            try:
                sub.callback(value)
            except OSError:
                # write failures reach the caller that mutated the collection
                raise
            except Exception:
                logger.exception('Subscriber %r of %s failed on %r', sub.callback, self.name, value)

    def _discard(self, sub: Subscription) -> None:
        # identity match: equal callables registered twice are distinct subscriptions
        for i, existing in enumerate(self._subscriptions):
            if existing is sub:
                del self._subscriptions[i]
                return

    def __len__(self) -> int:
        return len(self._subscriptions)
