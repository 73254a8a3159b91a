"""
Reference notification sinks.

A sink is wherever a notification finally ends up: a log, an email, a webhook.
The notifier only knows the sink protocol below; these two implementations
exist for the demo, the API and the tests.

Design decisions:
- All deliveries are logged to console for visibility
- MemorySink tracks what it received for test assertions
- Delivery failures can be simulated for testing error handling
"""

import logging
import random
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Protocol, Union, runtime_checkable

from shared.models import EventKind, NotificationEvent, NotificationExtra, Status
from syndication.errors import SyndicationError

# Configure logging for notification sinks
logger = logging.getLogger("notifications")


@runtime_checkable
class NotificationSink(Protocol):
    """Anything that can accept a canonical notification."""

    def notify(
        self,
        site_id: int,
        event_kind: EventKind,
        status: Status,
        log_time: Optional[str],
        extra: NotificationExtra,
    ) -> Union[bool, SyndicationError]:
        """Deliver a notification. Returns True, False, or an error value."""
        ...


def format_notification(site_id: int, event_kind: EventKind, status: Status) -> str:
    """One-line rendering used by the log output."""
    mark = "✓" if status.ok else "✗"
    kind = EventKind(event_kind).value
    return f"{mark} site={site_id} event={kind} message={status.message}"


class LogSink:
    """Writes every notification to the ``notifications`` logger."""

    def notify(
        self,
        site_id: int,
        event_kind: EventKind,
        status: Status,
        log_time: Optional[str],
        extra: NotificationExtra,
    ) -> bool:
        line = format_notification(site_id, event_kind, status)
        if log_time:
            line += f" log_time={log_time}"
        if status.ok:
            logger.info(f"[SYNDICATION] {line}")
        else:
            logger.warning(f"[SYNDICATION] {line} transport={extra.transport_type}")
        return True


@dataclass
class DeliveryRecord:
    """What a MemorySink received, plus whether it accepted it."""
    notification: NotificationEvent
    accepted: bool
    timestamp: datetime = field(default_factory=datetime.utcnow)

    def __str__(self) -> str:
        n = self.notification
        return format_notification(n.site_id, n.event_kind, n.status)


class MemorySink:
    """
    Keeps every notification in memory.

    Can simulate delivery failures (returns False) for testing how the
    dispatcher reports them.
    """

    def __init__(self, fail_rate: float = 0.0):
        """
        Args:
            fail_rate: Probability of rejecting a notification (0.0 to 1.0), for testing.
        """
        self.fail_rate = fail_rate
        self.deliveries: list[DeliveryRecord] = []

    def notify(
        self,
        site_id: int,
        event_kind: EventKind,
        status: Status,
        log_time: Optional[str],
        extra: NotificationExtra,
    ) -> bool:
        notification = NotificationEvent(
            site_id=site_id,
            event_kind=event_kind,
            status=status,
            log_time=log_time,
            extra=extra,
        )
        accepted = not (self.fail_rate > 0 and random.random() < self.fail_rate)
        record = DeliveryRecord(notification=notification, accepted=accepted)
        self.deliveries.append(record)

        if accepted:
            logger.info(f"[MEMORY] {record}")
        else:
            logger.error(f"[MEMORY FAILED] {record} | Simulated delivery failure")
        return accepted

    @property
    def notifications(self) -> list[NotificationEvent]:
        """Notifications that were accepted, in delivery order."""
        return [d.notification for d in self.deliveries if d.accepted]

    def get_sent_count(self) -> int:
        return len(self.notifications)

    def find_for_site(self, site_id: int) -> list[NotificationEvent]:
        """Accepted notifications about one site."""
        return [n for n in self.notifications if n.site_id == site_id]

    def clear_history(self):
        """Clear delivery history (useful between tests)."""
        self.deliveries.clear()


def build_sink(kind: str, fail_rate: float = 0.0) -> NotificationSink:
    """
    Build a sink by name.

    Raises:
        ValueError: If the sink name is not recognized
    """
    if kind == "log":
        return LogSink()
    elif kind == "memory":
        return MemorySink(fail_rate=fail_rate)
    else:
        raise ValueError(f"Unknown sink: {kind}")
