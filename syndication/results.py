"""
Result classification for pull/push outcomes.

The engine reports the outcome of a pull or push as a loosely typed value:
``False``/``0``/``None`` for a plain failure, a SyndicationError for a
structured failure, or the affected post id on success. ``coerce_result``
turns that value into a closed ResultValue once, at the bus boundary, and
``classify`` maps it to a Status with a total match.

Design decisions:
- Nothing in here raises; a result we cannot read is reported as "fail"
- Falsiness follows the engine's loose comparison, so "0" is a failure too
- The success message keeps the engine's "<guid>,<int id>" format, including
  its integer coercion (non-numeric ids become 0)
"""

import logging
import math
import re
from typing import Any

from shared.models import EngineError, Failure, PostRecord, ResultValue, Status, Success
from syndication.errors import SyndicationError

logger = logging.getLogger("syndication_results")

FAIL_MESSAGE = "fail"

_SCRIPT_STYLE_RE = re.compile(r"<(script|style)[^>]*?>.*?</\1>", re.IGNORECASE | re.DOTALL)
_TAG_RE = re.compile(r"<[^>]*(?:>|$)")
# A '<' that cannot open a tag is text, not markup
_LONE_LT_RE = re.compile(r"<(?![a-zA-Z/!?])")
_WHITESPACE_RE = re.compile(r"[\r\n\t ]+")
_OCTET_RE = re.compile(r"%[a-fA-F0-9]{2}")
_INT_PREFIX_RE = re.compile(r"\s*([+-]?\d+)")


def sanitize_text_field(value: Any) -> str:
    """
    Reduce a value to plain text safe for logs and display.

    Removes script/style blocks with their content, strips every other tag,
    collapses whitespace and line breaks, drops percent-encoded octets, trims.

    >>> sanitize_text_field("abc<script>")
    'abc'
    """
    if value is None:
        return ""
    text = str(value)

    text = _LONE_LT_RE.sub("&lt;", text)
    text = _SCRIPT_STYLE_RE.sub("", text)
    text = _TAG_RE.sub("", text)
    text = _WHITESPACE_RE.sub(" ", text)

    found_octets = False
    while _OCTET_RE.search(text):
        text = _OCTET_RE.sub("", text)
        found_octets = True
    if found_octets:
        text = _WHITESPACE_RE.sub(" ", text)

    return text.strip()


def intval(value: Any) -> int:
    """
    Coerce a value to an int the way the engine does.

    Numeric strings use their leading integer ("12abc" -> 12); anything that
    isn't numeric becomes 0.
    """
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            return 0
        return int(value)
    if isinstance(value, (str, bytes)):
        if isinstance(value, bytes):
            value = value.decode("utf-8", errors="ignore")
        match = _INT_PREFIX_RE.match(value)
        return int(match.group(1)) if match else 0
    return 0


def is_loosely_falsy(value: Any) -> bool:
    """True for the values the engine treats as ``== false``."""
    if isinstance(value, str):
        return value in ("", "0")
    try:
        return not value
    except Exception:
        # Objects with a broken __bool__/__len__ are still a value
        return False


def coerce_result(raw: Any) -> ResultValue:
    """
    Decide which kind of result the engine handed us.

    Already-coerced values pass through unchanged. A push may report its
    target id and info together as a 2-tuple.
    """
    if isinstance(raw, (Failure, EngineError, Success)):
        return raw

    if isinstance(raw, SyndicationError):
        try:
            message = raw.error_message()
        except Exception as e:
            logger.warning(f"Could not read engine error message: {e!r}")
            message = ""
        return EngineError(message=str(message) if message else "")

    if is_loosely_falsy(raw):
        return Failure()

    if isinstance(raw, tuple) and len(raw) == 2:
        target_id, info = raw
        if is_loosely_falsy(target_id):
            return Failure()
        return Success(id=target_id, info=info)

    return Success(id=raw)


def classify(result: Any, post: PostRecord) -> Status:
    """
    Map a pull/push result to a Status.

    Args:
        result: A ResultValue or the raw engine value
        post: The resolved post the result is about

    Returns:
        ok=False with the engine's message (or "fail") for failures,
        ok=True with "<guid>,<id>" for successes
    """
    value = coerce_result(result)

    if isinstance(value, EngineError):
        return Status(ok=False, message=value.message or FAIL_MESSAGE)

    if isinstance(value, Failure):
        return Status(ok=False, message=FAIL_MESSAGE)

    guid = sanitize_text_field(getattr(post, "guid", ""))
    return Status(ok=True, message=f"{guid},{intval(value.id)}")
