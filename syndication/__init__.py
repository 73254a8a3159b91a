"""
Syndication notifier.

This package turns the syndication engine's post lifecycle hooks into uniform
notifications:
- The engine fires hooks on the event bus (pull/push, new/update/delete)
- SyndicationNotifier subscribes to all five hooks
- EventNormalizer and the result classifier build one NotificationEvent per hook
- NotificationDispatcher hands it to a notification sink

The notifier, normalizer and dispatcher import from ``syndication.notifier``,
``syndication.normalizer`` and ``syndication.dispatcher`` directly.
"""

from syndication.errors import (
    MalformedEventError,
    PostNotFoundError,
    ResolutionError,
    SinkFailure,
    SyndicationError,
    SyndicationNotifierError,
)
from syndication.event_bus import Event, EventBus, get_event_bus, reset_event_bus
from syndication.events import HOOKS, EventTypes

__all__ = [
    "Event",
    "EventBus",
    "get_event_bus",
    "reset_event_bus",
    "EventTypes",
    "HOOKS",
    "MalformedEventError",
    "PostNotFoundError",
    "ResolutionError",
    "SinkFailure",
    "SyndicationError",
    "SyndicationNotifierError",
]
