"""
Hook definitions for the syndication engine.

The engine fires five post-level lifecycle hooks. Their argument lists are not
consistent: pulls hand over a post record, pushes hand over a post id, and the
delete hook squeezes an external id in front of everything else. This module
pins down each hook's name, the number of positional args the notifier reads,
and which kind/direction it maps to.

Design decisions:
- Hook names match the engine's own names, so the notifier is a drop-in listener
- Helper functions build properly shaped Events for publishers and tests
- Trailing args beyond the accepted count (push ``info``) are ignored, the way
  a host hook system with an accepted-args count behaves
"""

from dataclasses import dataclass
from typing import Any, Optional

from shared.models import Direction, EventKind
from syndication.event_bus import Event


# =============================================================================
# Hook Name Constants
# =============================================================================

class EventTypes:
    """Constants for the hook names the engine fires."""
    PULL_NEW_POST = "syn_post_pull_new_post"
    PULL_EDIT_POST = "syn_post_pull_edit_post"
    PUSH_DELETE_POST = "syn_post_push_delete_post"
    PUSH_NEW_POST = "syn_post_push_new_post"
    PUSH_EDIT_POST = "syn_post_push_edit_post"


@dataclass(frozen=True)
class HookSpec:
    """Shape of one hook: what it means and how many args we read."""
    name: str
    kind: EventKind
    direction: Direction
    accepted_args: int


HOOKS: dict[str, HookSpec] = {
    spec.name: spec
    for spec in (
        HookSpec(EventTypes.PULL_NEW_POST, EventKind.NEW, Direction.PULL, 5),
        HookSpec(EventTypes.PULL_EDIT_POST, EventKind.UPDATE, Direction.PULL, 5),
        HookSpec(EventTypes.PUSH_DELETE_POST, EventKind.DELETE, Direction.PUSH, 6),
        HookSpec(EventTypes.PUSH_NEW_POST, EventKind.NEW, Direction.PUSH, 5),
        HookSpec(EventTypes.PUSH_EDIT_POST, EventKind.UPDATE, Direction.PUSH, 5),
    )
}


# =============================================================================
# Pull Hooks
# =============================================================================

def pull_new_post(
    result: Any,
    post: Any,
    site: Any,
    transport_type: str,
    client: Any,
    source: str = "syndication-engine",
) -> Event:
    """
    Create a pull-new-post Event.

    Fired after the engine imported a post it had not seen before.
    ``result`` is the new local post id, or a failure/error value.
    """
    return Event(
        event_type=EventTypes.PULL_NEW_POST,
        args=(result, post, site, transport_type, client),
        source=source,
    )


def pull_edit_post(
    result: Any,
    post: Any,
    site: Any,
    transport_type: str,
    client: Any,
    source: str = "syndication-engine",
) -> Event:
    """Create a pull-edit-post Event (an imported post was updated)."""
    return Event(
        event_type=EventTypes.PULL_EDIT_POST,
        args=(result, post, site, transport_type, client),
        source=source,
    )


# =============================================================================
# Push Hooks
# =============================================================================

def push_new_post(
    result: Any,
    post_id: int,
    site: Any,
    transport_type: str,
    client: Any,
    info: Optional[Any] = None,
    source: str = "syndication-engine",
) -> Event:
    """
    Create a push-new-post Event.

    ``result`` is the remote post id on success. ``info`` travels with the
    event but is past the accepted-args count, so the notifier never reads it.
    """
    return Event(
        event_type=EventTypes.PUSH_NEW_POST,
        args=(result, post_id, site, transport_type, client, info),
        source=source,
    )


def push_edit_post(
    result: Any,
    post_id: int,
    site: Any,
    transport_type: str,
    client: Any,
    info: Optional[Any] = None,
    source: str = "syndication-engine",
) -> Event:
    """Create a push-edit-post Event."""
    return Event(
        event_type=EventTypes.PUSH_EDIT_POST,
        args=(result, post_id, site, transport_type, client, info),
        source=source,
    )


def push_delete_post(
    result: Any,
    external_id: Any,
    post_id: int,
    site_id: int,
    transport_type: str,
    client: Any,
    source: str = "syndication-engine",
) -> Event:
    """
    Create a push-delete-post Event.

    Note the different shape: the remote id comes second and the site is
    passed by id, not as a site object.
    """
    return Event(
        event_type=EventTypes.PUSH_DELETE_POST,
        args=(result, external_id, post_id, site_id, transport_type, client),
        source=source,
    )
