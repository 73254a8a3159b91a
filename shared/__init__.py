"""
Shared infrastructure for the syndication notifier.

This package contains the pieces the notifier consumes rather than owns:
- Domain models (PostRecord, SiteRef, Status, NotificationEvent, ...)
- Settings loaded from the environment
- A JSON-backed Post Store
- Reference notification sinks (log, in-memory)

Only models and settings are re-exported here; import the store and sinks
from their modules.
"""

from shared.config import Settings, get_settings
from shared.models import (
    Direction,
    DispatchResult,
    EventKind,
    NotificationEvent,
    NotificationExtra,
    PostRecord,
    SiteRef,
    Status,
    SyndicationEvent,
)

__all__ = [
    "Direction",
    "DispatchResult",
    "EventKind",
    "NotificationEvent",
    "NotificationExtra",
    "PostRecord",
    "SiteRef",
    "Status",
    "SyndicationEvent",
    "Settings",
    "get_settings",
]
