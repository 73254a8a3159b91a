"""
FastAPI application for the syndication notifier.

This application provides:
1. A hook ingress (/hooks/{hook_name}) so a remote syndication engine can fire
   lifecycle hooks over HTTP
2. Inspection endpoints for the notifications the in-memory sink received
3. Read-only access to the post and site fixtures

Run with:
    uv run uvicorn api.main:app --reload

Then visit http://localhost:8000/docs for interactive API documentation.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, Optional

from fastapi import Depends, FastAPI, HTTPException
from pydantic import BaseModel, Field

from shared.config import get_settings
from shared.models import NotificationEvent
from shared.sinks import MemorySink
from syndication.errors import MalformedEventError, PostNotFoundError, SinkFailure
from syndication.event_bus import Event, EventBus
from syndication.events import HOOKS
from syndication.notifier import SyndicationNotifier, create_notifier

# Configure logging
logging.basicConfig(
    level=get_settings().log_level,
    format="%(asctime)s | %(name)-24s | %(levelname)-5s | %(message)s",
    datefmt="%H:%M:%S",
)

logger = logging.getLogger("syndication_api")


# Request/response models
class HookRequest(BaseModel):
    """Positional args for one hook firing, exactly as the engine passes them."""
    args: list[Any] = Field(default_factory=list)


class HookResponse(BaseModel):
    """What happened to one hook firing."""
    hook: str
    kind: str
    direction: str
    ok: bool
    message: str


class HookInfo(BaseModel):
    name: str
    kind: str
    direction: str
    accepted_args: int


class NotificationOut(BaseModel):
    site_id: int
    event_kind: str
    ok: bool
    message: str
    log_time: Optional[str] = None
    post_id: int
    transport_type: Optional[str] = None

    @classmethod
    def from_event(cls, notification: NotificationEvent) -> "NotificationOut":
        return cls(
            site_id=notification.site_id,
            event_kind=notification.event_kind.value,
            ok=notification.status.ok,
            message=notification.status.message,
            log_time=notification.log_time,
            post_id=notification.extra.post.id,
            transport_type=notification.extra.transport_type,
        )


# Module-level instances (replaced in tests via reset_api_state)
_notifier: Optional[SyndicationNotifier] = None


def get_notifier() -> SyndicationNotifier:
    """Get the notifier, building and starting it from settings on first use."""
    global _notifier
    if _notifier is None:
        _notifier = create_notifier(event_bus=EventBus())
        _notifier.start()
    return _notifier


def reset_api_state(notifier: Optional[SyndicationNotifier] = None) -> None:
    """Reset API state (for testing)."""
    global _notifier
    _notifier = notifier


def get_memory_sink(notifier: SyndicationNotifier = Depends(get_notifier)) -> MemorySink:
    """The notifier's sink, if it is a MemorySink."""
    sink = notifier.dispatcher.sink
    if not isinstance(sink, MemorySink):
        raise HTTPException(
            status_code=409,
            detail="Notifications are only kept when SYNDICATION_SINK=memory",
        )
    return sink


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown."""
    logger.info("Starting Syndication Notifier API")
    yield
    logger.info("Shutting down")


app = FastAPI(
    title="Syndication Notifier",
    description="""
    Turns a syndication engine's post lifecycle hooks into uniform notifications.

    ## Endpoints

    - `/hooks` - List the hooks the notifier listens to
    - `/hooks/{hook_name}` - Fire a hook with the engine's positional args
    - `/notifications` - Notifications received by the in-memory sink
    - `/data/*` - Post and site fixtures
    """,
    version="1.0.0",
    lifespan=lifespan,
)


# =============================================================================
# Health Check
# =============================================================================

@app.get("/health", tags=["Health"])
def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "syndication-notifier"}


# =============================================================================
# Hooks
# =============================================================================

@app.get("/hooks", response_model=list[HookInfo], tags=["Hooks"])
def list_hooks():
    """List every hook with the kind it maps to and the args it accepts."""
    return [
        HookInfo(
            name=spec.name,
            kind=spec.kind.value,
            direction=spec.direction.value,
            accepted_args=spec.accepted_args,
        )
        for spec in HOOKS.values()
    ]


@app.post("/hooks/{hook_name}", response_model=HookResponse, tags=["Hooks"])
def fire_hook(
    hook_name: str,
    request: HookRequest,
    notifier: SyndicationNotifier = Depends(get_notifier),
):
    """
    Fire one lifecycle hook.

    The args are handled exactly as if the engine had fired the hook
    in-process. Unlike an in-process bus delivery, failures come back as
    HTTP errors instead of only being logged.
    """
    spec = HOOKS.get(hook_name)
    if spec is None:
        raise HTTPException(status_code=404, detail=f"Unknown hook: {hook_name}")

    event = Event(event_type=hook_name, args=tuple(request.args), source="http")
    try:
        outcome = notifier.handle_hook(event)
    except MalformedEventError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except PostNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except SinkFailure as e:
        raise HTTPException(status_code=502, detail=str(e))

    return HookResponse(
        hook=hook_name,
        kind=spec.kind.value,
        direction=spec.direction.value,
        ok=outcome.ok,
        message=outcome.message,
    )


# =============================================================================
# Notifications
# =============================================================================

@app.get("/notifications", response_model=list[NotificationOut], tags=["Notifications"])
def list_notifications(site_id: Optional[int] = None, sink: MemorySink = Depends(get_memory_sink)):
    """Notifications the in-memory sink accepted, oldest first."""
    notifications = sink.find_for_site(site_id) if site_id is not None else sink.notifications
    return [NotificationOut.from_event(n) for n in notifications]


@app.delete("/notifications", tags=["Notifications"])
def clear_notifications(sink: MemorySink = Depends(get_memory_sink)):
    """Forget everything the in-memory sink received."""
    cleared = len(sink.deliveries)
    sink.clear_history()
    return {"cleared": cleared}


# =============================================================================
# Data Endpoints
# =============================================================================

@app.get("/data/posts", tags=["Data"])
def get_posts(notifier: SyndicationNotifier = Depends(get_notifier)):
    """Get all posts known to the Post Store."""
    store = notifier.normalizer.post_store
    return [p.model_dump() for p in store.get_posts()]


@app.get("/data/sites", tags=["Data"])
def get_sites(notifier: SyndicationNotifier = Depends(get_notifier)):
    """Get all syndicated sites."""
    store = notifier.normalizer.post_store
    return [s.model_dump() for s in store.get_sites()]
