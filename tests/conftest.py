"""
Shared pytest fixtures for the syndication notifier tests.

These fixtures provide consistent test data and fresh collaborators per test.
"""

import pytest
from pathlib import Path

from shared.models import PostRecord, SiteRef
from shared.post_store import PostStore
from shared.sinks import MemorySink
from syndication.event_bus import EventBus
from syndication.notifier import SyndicationNotifier


@pytest.fixture
def data_dir() -> Path:
    """Path to the fixture data directory."""
    return Path(__file__).parent.parent / "data"


@pytest.fixture
def post_store(data_dir: Path) -> PostStore:
    """
    Fresh PostStore instance for each test.

    Uses the real JSON fixtures but creates a new instance
    so in-memory writes don't leak between tests.
    """
    return PostStore(data_dir=data_dir)


@pytest.fixture
def memory_sink() -> MemorySink:
    """Fresh MemorySink that accepts everything."""
    return MemorySink(fail_rate=0.0)


@pytest.fixture
def event_bus() -> EventBus:
    """Fresh event bus for each test."""
    return EventBus()


@pytest.fixture
def notifier(post_store: PostStore, memory_sink: MemorySink, event_bus: EventBus) -> SyndicationNotifier:
    """A started notifier wired to the fresh bus, store and sink."""
    notifier = SyndicationNotifier(post_store=post_store, sink=memory_sink, event_bus=event_bus)
    notifier.start()
    return notifier


# =============================================================================
# Post / Site Fixtures
# =============================================================================

@pytest.fixture
def hello_post() -> PostRecord:
    """Post 5 with guid "hello" and no metadata."""
    return PostRecord(id=5, guid="hello")


@pytest.fixture
def updated_post_id() -> int:
    """Post 12 in posts.json; carries an is_update meta value."""
    return 12


@pytest.fixture
def unsafe_guid_post_id() -> int:
    """Post 21 in posts.json; its guid has an embedded script block."""
    return 21


@pytest.fixture
def site() -> SiteRef:
    """Site 42 (Partner newsroom)."""
    return SiteRef(id=42)


@pytest.fixture
def client() -> object:
    """Stand-in for the engine's transport client object."""
    return object()
