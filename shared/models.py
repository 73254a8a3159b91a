"""
Domain models for the syndication notifier.

These models describe the records that flow from the syndication engine's
lifecycle hooks to a notification sink. The engine itself (pulling, pushing,
storing posts) lives elsewhere; only the shapes it hands us are modelled here.

Design decisions:
- Using Pydantic for validation and serialization
- Engine payloads are loosely shaped, so post/site models accept the engine's
  array-style key names as aliases and keep unknown fields
- Result values are a closed tagged variant decided once at the bus boundary
"""

from enum import Enum
from typing import Any, Literal, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


# =============================================================================
# Enums
# =============================================================================

class EventKind(str, Enum):
    """What happened to the post."""
    NEW = "new"
    UPDATE = "update"
    DELETE = "delete"


class Direction(str, Enum):
    """Whether the engine was importing (pull) or exporting (push) the post."""
    PULL = "pull"
    PUSH = "push"


# =============================================================================
# Engine-owned references
# =============================================================================

class PostRecord(BaseModel):
    """
    A resolved post.

    The engine hands posts over either as this record (array-shaped, with keys
    like ``post_guid`` and ``postmeta``) or as a bare numeric id that has to be
    resolved through the Post Store first.
    """
    id: int = Field(..., validation_alias=AliasChoices("id", "ID"))
    guid: str = Field(default="", validation_alias=AliasChoices("guid", "post_guid"))
    post_meta: dict[str, Any] = Field(
        default_factory=dict,
        validation_alias=AliasChoices("post_meta", "postmeta"),
        description="Post metadata; 'is_update' carries the log time",
    )

    model_config = ConfigDict(
        extra="allow",
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )

    @property
    def log_time(self) -> Optional[str]:
        """The post's ``is_update`` meta value as text, or None when it is unset or null."""
        value = self.post_meta.get("is_update")
        return str(value) if value is not None else None


class SiteRef(BaseModel):
    """The syndicated site. We only ever read its id."""
    id: int = Field(..., validation_alias=AliasChoices("id", "ID"))

    model_config = ConfigDict(extra="allow", populate_by_name=True)


# =============================================================================
# Result values (tagged variant)
# =============================================================================

class Failure(BaseModel):
    """The engine reported a plain failure (false, empty, zero)."""
    tag: Literal["failure"] = "failure"


class EngineError(BaseModel):
    """The engine reported a structured error with a readable message."""
    tag: Literal["error"] = "error"
    message: str = ""


class Success(BaseModel):
    """
    The engine succeeded.

    For pulls ``id`` is the new/updated local post id, for pushes it is the
    remote target id; pushes may also carry extra ``info``.
    """
    tag: Literal["success"] = "success"
    id: Any
    info: Any = None


ResultValue = Union[Failure, EngineError, Success]


# =============================================================================
# Status and notification records
# =============================================================================

class Status(BaseModel):
    """Uniform outcome of a syndication operation."""
    ok: bool
    message: str

    model_config = ConfigDict(frozen=True)


class SyndicationEvent(BaseModel):
    """
    One hook firing, after positional args have been mapped to names.

    ``post`` and ``site`` may still be bare ids here; the normalizer resolves
    them before anything else looks at the event.
    """
    kind: EventKind
    direction: Direction
    result: Any = None
    post: Any = Field(..., description="PostRecord, mapping, or bare post id")
    site: Any = Field(..., description="SiteRef, mapping, object with an id, or bare site id")
    transport_type: Optional[str] = None
    client: Any = None
    external_id: Any = Field(default=None, description="Remote id from the engine, carried verbatim")

    model_config = ConfigDict(arbitrary_types_allowed=True)


class NotificationExtra(BaseModel):
    """Diagnostic payload carried alongside a notification."""
    post: PostRecord
    result: Any = Field(default=None, description="Raw engine result, verbatim")
    transport_type: Optional[str] = None
    client: Any = None

    model_config = ConfigDict(arbitrary_types_allowed=True)


class NotificationEvent(BaseModel):
    """
    Canonical notification record handed from the normalizer to the dispatcher.

    Built fresh per hook firing and never stored by the notifier.
    """
    site_id: int
    event_kind: EventKind
    status: Status
    log_time: Optional[str] = None
    extra: NotificationExtra

    model_config = ConfigDict(arbitrary_types_allowed=True)


class DispatchResult(BaseModel):
    """Outcome of handing a notification to the sink. Mirrors ``Status``."""
    ok: bool
    message: str
