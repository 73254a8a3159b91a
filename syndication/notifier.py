"""
Syndication notifier.

Listens to the engine's five post lifecycle hooks and turns each firing into
one notification. This is the composition root: it owns the bus subscription
and hands everything else to the normalizer and dispatcher.

Design decisions:
- Collaborators are injected; nothing subscribes on construction
- ``start()`` subscribes once; calling it again is a logged no-op
- There is no stop(): the subscription lives as long as the process
- Resolution, malformed-event and sink failures propagate out of the handler;
  the event bus logs them and carries on with the next handler
"""

import logging
from typing import Any, Optional

from pydantic import ValidationError

from shared.config import Settings, get_settings
from shared.models import DispatchResult, EventKind, SyndicationEvent
from shared.post_store import PostStore
from shared.sinks import NotificationSink, build_sink
from syndication.dispatcher import NotificationDispatcher
from syndication.errors import MalformedEventError
from syndication.event_bus import Event, EventBus, get_event_bus
from syndication.events import HOOKS, EventTypes, HookSpec
from syndication.normalizer import EventNormalizer

logger = logging.getLogger("syndication_notifier")


class SyndicationNotifier:
    """
    Hook-driven notifier for syndicated posts.

    Example:
        notifier = SyndicationNotifier(
            event_bus=bus,
            post_store=PostStore(),
            sink=LogSink(),
        )
        notifier.start()

        # Every lifecycle hook the engine fires now produces a notification
        bus.publish(pull_new_post(9, post, site, "WP_RSS", client))
    """

    def __init__(
        self,
        post_store: PostStore,
        sink: Optional[NotificationSink] = None,
        event_bus: Optional[EventBus] = None,
        dispatcher: Optional[NotificationDispatcher] = None,
    ):
        """
        Args:
            post_store: Resolves bare post ids to post records
            sink: Where notifications go (ignored if ``dispatcher`` is given)
            event_bus: Bus to subscribe to (defaults to singleton)
            dispatcher: Pre-built dispatcher, for callers that wrap the sink
        """
        if dispatcher is None:
            if sink is None:
                raise ValueError("SyndicationNotifier needs a sink or a dispatcher")
            dispatcher = NotificationDispatcher(sink)

        self.event_bus = event_bus or get_event_bus()
        self.normalizer = EventNormalizer(post_store)
        self.dispatcher = dispatcher

        self._handlers = {
            EventTypes.PULL_NEW_POST: self._handle_pull,
            EventTypes.PULL_EDIT_POST: self._handle_pull,
            EventTypes.PUSH_DELETE_POST: self._handle_push_delete,
            EventTypes.PUSH_NEW_POST: self._handle_push,
            EventTypes.PUSH_EDIT_POST: self._handle_push,
        }
        self._started = False

    @property
    def started(self) -> bool:
        return self._started

    def start(self) -> None:
        """Subscribe to all five lifecycle hooks, once."""
        if self._started:
            logger.warning("SyndicationNotifier already started")
            return

        for hook_name, handler in self._handlers.items():
            self.event_bus.subscribe(hook_name, handler)

        self._started = True
        logger.info(f"SyndicationNotifier started - subscribed to {len(self._handlers)} hooks")

    def handle_hook(self, event: Event) -> DispatchResult:
        """
        Handle a hook Event directly, without going through the bus.

        Unlike a bus delivery, every failure reaches the caller.

        Raises:
            MalformedEventError: If the hook is unknown or has too few args
        """
        handler = self._handlers.get(event.event_type)
        if handler is None:
            raise MalformedEventError(f"Unknown hook: {event.event_type}")
        return handler(event)

    # =========================================================================
    # Bus Handlers
    # =========================================================================

    @staticmethod
    def _accepted_args(event: Event) -> tuple[HookSpec, tuple[Any, ...]]:
        """Look up the hook and slice off the args it accepts."""
        spec = HOOKS[event.event_type]
        if len(event.args) < spec.accepted_args:
            raise MalformedEventError(
                f"{event.event_type} expects {spec.accepted_args} args, got {len(event.args)}"
            )
        return spec, event.args[:spec.accepted_args]

    @staticmethod
    def _syndication_event(**fields: Any) -> SyndicationEvent:
        try:
            return SyndicationEvent(**fields)
        except ValidationError as e:
            raise MalformedEventError(f"Unusable hook arguments: {e}") from e

    def _handle_pull(self, event: Event) -> DispatchResult:
        spec, (result, post, site, transport_type, client) = self._accepted_args(event)
        return self.handle(self._syndication_event(
            kind=spec.kind,
            direction=spec.direction,
            result=result,
            post=post,
            site=site,
            transport_type=transport_type,
            client=client,
        ))

    def _handle_push(self, event: Event) -> DispatchResult:
        # The trailing ``info`` arg is past the accepted count and never read
        spec, (result, post_id, site, transport_type, client) = self._accepted_args(event)
        return self.handle(self._syndication_event(
            kind=spec.kind,
            direction=spec.direction,
            result=result,
            post=post_id,
            site=site,
            transport_type=transport_type,
            client=client,
        ))

    def _handle_push_delete(self, event: Event) -> DispatchResult:
        spec, (result, external_id, post_id, site_id, transport_type, client) = self._accepted_args(event)
        return self.handle(self._syndication_event(
            kind=spec.kind,
            direction=spec.direction,
            result=result,
            post=post_id,
            site=site_id,
            transport_type=transport_type,
            client=client,
            external_id=external_id,
        ))

    # =========================================================================
    # Notification Entry Points
    # =========================================================================

    def handle(self, event: SyndicationEvent) -> DispatchResult:
        """Normalize one SyndicationEvent and dispatch the result."""
        logger.info(
            f"Handling {event.direction.value}/{event.kind.value}: "
            f"transport={event.transport_type}, external_id={event.external_id}"
        )
        notification = self.normalizer.normalize_event(event)
        outcome = self.dispatcher.dispatch_event(notification)
        if not outcome.ok:
            logger.warning(
                f"Notification for site {notification.site_id} not delivered: {outcome.message}"
            )
        return outcome

    def notify_new(self, result, post, site, transport_type, client) -> DispatchResult:
        """Notify about a post that was created by a pull or push."""
        return self._notify_post_event(EventKind.NEW, result, post, site, transport_type, client)

    def notify_update(self, result, post, site, transport_type, client) -> DispatchResult:
        """Notify about a post that was updated by a pull or push."""
        return self._notify_post_event(EventKind.UPDATE, result, post, site, transport_type, client)

    def notify_delete(self, result, external_id, post, site, transport_type, client) -> DispatchResult:
        """Notify about a post deleted on a remote site. ``external_id`` is not used."""
        return self._notify_post_event(EventKind.DELETE, result, post, site, transport_type, client)

    def _notify_post_event(self, kind, result, post, site, transport_type, client) -> DispatchResult:
        notification = self.normalizer.normalize(kind, result, post, site, transport_type, client)
        return self.dispatcher.dispatch_event(notification)


def create_notifier(
    settings: Optional[Settings] = None,
    event_bus: Optional[EventBus] = None,
) -> SyndicationNotifier:
    """Build a notifier wired from settings. The caller still has to start() it."""
    settings = settings or get_settings()
    sink = build_sink(settings.sink, fail_rate=settings.sink_fail_rate)
    return SyndicationNotifier(
        post_store=PostStore(data_dir=settings.data_dir),
        sink=sink,
        event_bus=event_bus,
    )
