"""Synchronous event bus between the host and the terminal engine.

The host publishes events from its own thread; subscribers run inline,
in subscription order, before ``publish`` returns. Everything stays on
one thread, so the session registry needs no locking.
"""
from __future__ import annotations

import logging
from collections.abc import Callable

from termtoggle.adapters.events import HostEvent

logger = logging.getLogger(__name__)

Handler = Callable[[HostEvent], None]


class EventBus:
    """Dispatch typed host events to subscribers keyed by event class."""

    def __init__(self) -> None:
        self._handlers: dict[type[HostEvent], list[Handler]] = {}

    def subscribe(self, event_cls: type[HostEvent], handler: Handler) -> Callable[[], None]:
        """Register *handler* for *event_cls*; returns an unsubscribe callable."""
        self._handlers.setdefault(event_cls, []).append(handler)

        def _unsubscribe() -> None:
            handlers = self._handlers.get(event_cls, [])
            if handler in handlers:
                handlers.remove(handler)

        return _unsubscribe

    def publish(self, event: HostEvent) -> None:
        for handler in list(self._handlers.get(type(event), [])):
            try:
                handler(event)
            except Exception:
                logger.exception(
                    "EventBus handler %r failed for %s", handler, event.event_type
                )
