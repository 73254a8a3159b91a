"""
Event normalizer.

Every hook reduces to the same call:
``normalize(kind, result, post, site, transport_type, client)``. The
normalizer resolves whatever the engine passed as post and site into proper
records, classifies the result, and assembles a NotificationEvent.

The ambiguous "post object or post id" union never leaves this module.
"""

import logging
from collections.abc import Mapping
from typing import Any, Optional

from pydantic import ValidationError

from shared.models import (
    EventKind,
    NotificationEvent,
    NotificationExtra,
    PostRecord,
    SiteRef,
    SyndicationEvent,
)
from shared.post_store import PostStore
from syndication.errors import MalformedEventError
from syndication.results import classify

logger = logging.getLogger("syndication_normalizer")


class EventNormalizer:
    """Turns raw hook arguments into canonical notification records."""

    def __init__(self, post_store: PostStore):
        self.post_store = post_store

    def resolve_post(self, post: Any) -> PostRecord:
        """
        Turn a post reference into a PostRecord.

        Raises:
            PostNotFoundError: If ``post`` is an id the store doesn't know
            MalformedEventError: If ``post`` is neither a record nor an id
        """
        if isinstance(post, PostRecord):
            return post
        # bool is an int subclass but never a post id
        if isinstance(post, int) and not isinstance(post, bool):
            return self.post_store.resolve(post)
        if isinstance(post, Mapping):
            try:
                return PostRecord.model_validate(dict(post))
            except ValidationError as e:
                raise MalformedEventError(f"Unusable post record: {e}") from e
        raise MalformedEventError(f"Unusable post reference: {post!r}")

    def resolve_site(self, site: Any) -> SiteRef:
        """Turn a site reference (record, id, mapping, or object) into a SiteRef."""
        if isinstance(site, SiteRef):
            return site
        if isinstance(site, int) and not isinstance(site, bool):
            return SiteRef(id=site)
        if isinstance(site, Mapping):
            try:
                return SiteRef.model_validate(dict(site))
            except ValidationError as e:
                raise MalformedEventError(f"Unusable site record: {e}") from e

        site_id = getattr(site, "id", getattr(site, "ID", None))
        if isinstance(site_id, int) and not isinstance(site_id, bool):
            return SiteRef(id=site_id)
        raise MalformedEventError(f"Unusable site reference: {site!r}")

    def normalize(
        self,
        kind: EventKind,
        result: Any,
        post: Any,
        site: Any,
        transport_type: Optional[str],
        client: Any,
    ) -> NotificationEvent:
        """
        Build the canonical record for one hook firing.

        ``result``, ``transport_type`` and ``client`` are carried verbatim in
        ``extra``; ``post`` is carried in its resolved form.
        """
        record = self.resolve_post(post)
        site_ref = self.resolve_site(site)
        status = classify(result, record)

        logger.debug(f"Normalized {EventKind(kind).value} for post {record.id} on site {site_ref.id}: {status}")

        return NotificationEvent(
            site_id=site_ref.id,
            event_kind=kind,
            status=status,
            log_time=record.log_time,
            extra=NotificationExtra(
                post=record,
                result=result,
                transport_type=transport_type,
                client=client,
            ),
        )

    def normalize_event(self, event: SyndicationEvent) -> NotificationEvent:
        """Normalize an already-named SyndicationEvent."""
        return self.normalize(
            event.kind,
            event.result,
            event.post,
            event.site,
            event.transport_type,
            event.client,
        )
