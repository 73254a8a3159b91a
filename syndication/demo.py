"""
Demonstration script for the syndication notifier.

Plays the engine's part for one post's lifecycle and shows the notifications
that come out the other end.
"""

import logging

from shared.models import PostRecord, SiteRef
from shared.post_store import PostStore
from shared.sinks import MemorySink
from syndication.errors import SyndicationError
from syndication.event_bus import reset_event_bus
from syndication.events import (
    pull_edit_post,
    pull_new_post,
    push_delete_post,
    push_new_post,
)
from syndication.notifier import SyndicationNotifier

# Configure logging to see what's happening
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(name)-24s | %(levelname)-5s | %(message)s",
    datefmt="%H:%M:%S",
)


def run_lifecycle_demo() -> MemorySink:
    """
    Fire one of each kind of hook and print the notifications.

    This shows:
    1. A pulled post arriving as a record (new), then being updated
    2. A push reported by post id, resolved through the Post Store
    3. A push that failed with a structured engine error
    4. A remote delete
    """
    print("\n" + "=" * 70)
    print("SYNDICATION DEMO: Post lifecycle notifications")
    print("=" * 70 + "\n")

    event_bus = reset_event_bus()
    post_store = PostStore()
    sink = MemorySink()

    notifier = SyndicationNotifier(post_store=post_store, sink=sink, event_bus=event_bus)
    notifier.start()

    site = SiteRef(id=42)
    client = "WP_XMLRPC client"
    pulled = PostRecord(id=5, guid="hello")

    print("-" * 70)
    print("ACTION: Engine pulls post 5 from a remote feed, then updates it")
    print("-" * 70 + "\n")
    event_bus.publish(pull_new_post(9, pulled, site, "WP_RSS", client))
    post_store.set_post_meta(5, "is_update", "2026-10-18 14:02:11")
    event_bus.publish(pull_edit_post(9, post_store.resolve(5), site, "WP_RSS", client))

    print("\n" + "-" * 70)
    print("ACTION: Engine pushes post 12 to site 42; a second push fails")
    print("-" * 70 + "\n")
    event_bus.publish(push_new_post(1201, 12, site, "WP_XMLRPC", client, info={"remote": True}))
    failure = SyndicationError("push-failed", "Remote site returned 500")
    event_bus.publish(push_new_post(failure, 12, site, "WP_XMLRPC", client))

    print("\n" + "-" * 70)
    print("ACTION: Engine deletes post 12 from site 42")
    print("-" * 70 + "\n")
    event_bus.publish(push_delete_post(True, "1201", 12, 42, "WP_XMLRPC", client))

    print("\n" + "-" * 70)
    print("RESULT: Notifications delivered to the sink")
    print("-" * 70)
    for record in sink.deliveries:
        print(f"  {record}")
    print()

    return sink


if __name__ == "__main__":
    run_lifecycle_demo()
