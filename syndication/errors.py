"""
Exceptions raised by the syndication notifier.

``SyndicationError`` is the odd one out: the engine hands it to us as a result
value rather than raising it, so it is only ever inspected, never raised here.
"""

from typing import Any


class SyndicationNotifierError(Exception):
    """Base class for everything the notifier raises."""


class ResolutionError(SyndicationNotifierError):
    """A post reference could not be turned into a post record."""


class PostNotFoundError(ResolutionError):
    """The Post Store has no post with the given id."""

    def __init__(self, post_id: int):
        self.post_id = post_id
        super().__init__(f"Post not found: {post_id}")


class MalformedEventError(SyndicationNotifierError):
    """A hook fired with arguments we cannot make sense of."""


class SinkFailure(SyndicationNotifierError):
    """The notification sink raised while delivering a notification."""


class SyndicationError(Exception):
    """
    Structured error reported by the syndication engine for a pull/push.

    Example:
        result = SyndicationError("push-failed", "Remote site returned 500")
        result.error_message()  # "Remote site returned 500"
    """

    def __init__(self, code: str = "", message: str = "", data: Any = None):
        self.code = code
        self.message = message
        self.data = data
        super().__init__(message or code)

    def error_message(self) -> str:
        """Human-readable message for this error."""
        return self.message
