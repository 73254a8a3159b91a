"""
Notification dispatcher.

Hands canonical notifications to the configured sink and reports what the
sink actually did. There is no retry logic here; a sink that wants retries
implements them itself.
"""

import logging
from typing import Optional

from shared.models import DispatchResult, EventKind, NotificationEvent, NotificationExtra, Status
from shared.sinks import NotificationSink
from syndication.errors import SinkFailure, SyndicationError

logger = logging.getLogger("syndication_dispatcher")


class NotificationDispatcher:
    """Forwards notifications to a NotificationSink."""

    def __init__(self, sink: NotificationSink):
        self.sink = sink

    def dispatch(
        self,
        site_id: int,
        event_kind: EventKind,
        status: Status,
        log_time: Optional[str],
        extra: NotificationExtra,
    ) -> DispatchResult:
        """
        Deliver one notification.

        Returns:
            DispatchResult(ok=True) if the sink accepted it, ok=False with the
            sink's reason if it rejected it

        Raises:
            SinkFailure: If the sink raised while delivering
        """
        try:
            outcome = self.sink.notify(site_id, event_kind, status, log_time, extra)
        except Exception as e:
            logger.error(f"Sink {type(self.sink).__name__} raised for site {site_id}: {e!r}")
            raise SinkFailure(f"Sink failed to deliver notification for site {site_id}: {e}") from e

        if isinstance(outcome, SyndicationError):
            message = outcome.error_message() or "sink error"
            logger.warning(f"Sink reported an error for site {site_id}: {message}")
            return DispatchResult(ok=False, message=message)

        if outcome is True:
            return DispatchResult(ok=True, message="delivered")

        logger.warning(f"Sink rejected notification for site {site_id}")
        return DispatchResult(ok=False, message="sink rejected notification")

    def dispatch_event(self, notification: NotificationEvent) -> DispatchResult:
        """Deliver a NotificationEvent."""
        return self.dispatch(
            notification.site_id,
            notification.event_kind,
            notification.status,
            notification.log_time,
            notification.extra,
        )
