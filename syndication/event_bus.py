"""
In-memory event bus standing in for the host's hook system.

The syndication engine fires named hooks with positional arguments
(``fire("syn_post_pull_new_post", result, post, site, transport, client)``)
and every registered handler receives the resulting Event. In a real
deployment the host environment provides this facility; this module gives
the notifier, the demo, and the tests something concrete to subscribe to.

Design decisions:
- Synchronous delivery in the publisher's thread
- Handlers are called in registration order
- Name-based subscriptions, plus a wildcard for audit/debugging
- No persistence; the in-memory event log is opt-in (``log_events=True``)
- A handler that raises is logged and skipped; the remaining handlers still run
"""

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Optional
from uuid import uuid4

logger = logging.getLogger("event_bus")


@dataclass
class Event:
    """
    A single hook firing.

    Attributes:
        event_type: Hook name (used for routing)
        args: Positional arguments exactly as the publisher passed them
        source: Which component fired the hook
        event_id: Unique identifier for this firing
        timestamp: When the hook fired
    """
    event_type: str
    args: tuple[Any, ...] = ()
    source: str = "syndication-engine"
    event_id: str = field(default_factory=lambda: str(uuid4()))
    timestamp: datetime = field(default_factory=datetime.utcnow)

    def __str__(self) -> str:
        return (
            f"Event({self.event_type}, id={self.event_id[:8]}, "
            f"args={len(self.args)}, source={self.source})"
        )


# Type alias for event handler functions
EventHandler = Callable[[Event], Any]


class EventBus:
    """
    Simple in-memory pub/sub bus.

    Example usage:
        bus = EventBus()

        def on_new_post(event):
            result, post, site, transport_type, client = event.args[:5]
            ...
        bus.subscribe("syn_post_pull_new_post", on_new_post)

        bus.fire("syn_post_pull_new_post", 9, post, site, "WP_XMLRPC", client)
    """

    def __init__(self, log_events: bool = False):
        """
        Args:
            log_events: Keep every published event in memory (off by default)
        """
        # Map of event_type -> list of handlers
        self._subscribers: dict[str, list[EventHandler]] = defaultdict(list)

        self._event_log: list[Event] = []
        self._log_events: bool = log_events

    def subscribe(self, event_type: str, handler: EventHandler) -> None:
        """
        Subscribe to a hook.

        Args:
            event_type: Hook name (e.g., "syn_post_pull_new_post")
            handler: Called with the Event each time the hook fires

        Note: The same handler can be subscribed multiple times (will be called multiple times).
        """
        self._subscribers[event_type].append(handler)
        logger.debug(f"Subscribed handler to '{event_type}' events")

    def subscribe_all(self, handler: EventHandler) -> None:
        """Subscribe to every hook (useful for logging, debugging, or audit)."""
        self._subscribers["*"].append(handler)
        logger.debug("Subscribed handler to ALL events")

    def unsubscribe(self, event_type: str, handler: EventHandler) -> bool:
        """
        Unsubscribe a handler from a hook.

        Returns:
            True if the handler was found and removed, False otherwise
        """
        try:
            self._subscribers[event_type].remove(handler)
            logger.debug(f"Unsubscribed handler from '{event_type}' events")
            return True
        except ValueError:
            return False

    def publish(self, event: Event) -> int:
        """
        Deliver an event to all subscribers.

        Args:
            event: The event to publish

        Returns:
            Number of handlers that received the event

        Note: Handlers are called synchronously in the order they subscribed.
        If a handler raises an exception, it's logged but doesn't stop other handlers.
        """
        if self._log_events:
            self._event_log.append(event)

        logger.info(f"Publishing: {event}")

        handlers_called = 0

        type_handlers = self._subscribers.get(event.event_type, [])
        all_handlers = self._subscribers.get("*", [])

        for handler in type_handlers + all_handlers:
            handlers_called += 1
            try:
                handler(event)
            except Exception as e:
                logger.exception(f"Handler raised exception for {event}: {e!r}")

        if handlers_called == 0:
            logger.warning(f"No handlers for event type '{event.event_type}'")

        return handlers_called

    def fire(self, event_type: str, *args: Any, source: str = "syndication-engine") -> int:
        """Build an Event from positional args and publish it."""
        return self.publish(Event(event_type=event_type, args=args, source=source))

    def get_subscriber_count(self, event_type: str) -> int:
        """Get the number of subscribers for an event type."""
        return len(self._subscribers.get(event_type, []))

    def get_event_log(self) -> list[Event]:
        """Get the log of published events (empty unless logging is enabled)."""
        return self._event_log.copy()

    def clear_event_log(self) -> None:
        """Clear the event log."""
        self._event_log.clear()

    def clear_subscribers(self) -> None:
        """Remove all subscribers (useful for testing)."""
        self._subscribers.clear()

    def set_logging(self, enabled: bool) -> None:
        """Enable or disable event logging."""
        self._log_events = enabled


# Module-level singleton for convenience
_default_bus: Optional[EventBus] = None


def get_event_bus() -> EventBus:
    """Get the default event bus singleton."""
    global _default_bus
    if _default_bus is None:
        _default_bus = EventBus()
    return _default_bus


def reset_event_bus() -> EventBus:
    """Reset the default event bus (useful for testing)."""
    global _default_bus
    _default_bus = EventBus()
    return _default_bus
