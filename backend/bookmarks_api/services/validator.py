"""
Bookmarks API — Bookmark Payload Validator
============================================

What:  Turns an untrusted JSON mapping into an accepted bookmark record (create)
       or a set of field changes (update), or raises ValidationError.
How:   Plain functions over the raw mapping, checked in a fixed order so the
       first problem found decides the reason returned (fail-fast).
Who:   Called by BookmarkService before any store write.

Presence rules:
    - title / url are missing when absent or falsy ("" or null).
    - rating is missing only when absent or null. A rating of 0 is a real
      value inside the valid range and must never be treated as missing.

Reason strings are part of the public API and are returned verbatim.
"""

import re
import uuid
from typing import Any, Dict, Mapping

from pydantic import AnyUrl, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from bookmarks_api.exceptions import ValidationError
from bookmarks_api.schemas.bookmark import BookmarkRecord

REQUIRED_FIELDS = ("title", "url", "rating")
UPDATABLE_FIELDS = ("title", "url", "description", "rating")

MIN_RATING = 0
MAX_RATING = 5

RATING_RANGE_MESSAGE = f"'rating' must be a number between {MIN_RATING} and {MAX_RATING}"
INVALID_URL_MESSAGE = "'url' must be a valid URL"
EMPTY_UPDATE_MESSAGE = "Request body must contain either 'title', 'url', or 'rating'"

WEB_SCHEMES = ("http", "https")

# RFC 3986 unreserved, reserved and percent characters; no whitespace or controls
_URI_CHARS = re.compile(r"[A-Za-z0-9\-._~:/?#\[\]@!$&'()*+,;=%]+")

_any_url = TypeAdapter(AnyUrl)


def required_message(field: str) -> str:
    return f"'{field}' is required"


def _is_missing(payload: Mapping[str, Any], field: str) -> bool:
    if field not in payload:
        return True
    value = payload[field]
    if field == "rating":
        return value is None
    return not value


def is_web_url(value: Any) -> bool:
    """
    True when value is an absolute http(s) URL with a host, written exactly
    as it will be stored.

    The pydantic parser trims whitespace and percent-encodes stray characters
    in what it returns, but the raw string is what gets persisted, so the raw
    string must already be made of URI characters only. AnyUrl carries no
    length cap.
    """
    if not isinstance(value, str) or not _URI_CHARS.fullmatch(value):
        return False
    try:
        url = _any_url.validate_python(value)
    except PydanticValidationError:
        return False
    return url.scheme in WEB_SCHEMES and bool(url.host)


def normalize_rating(value: Any) -> int:
    """
    Return value as an int in [0, 5] or raise ValidationError.

    Booleans and strings are rejected even though Python would coerce them;
    integral floats (3.0, as JSON may deliver them) are accepted.
    """
    if isinstance(value, bool):
        raise ValidationError(RATING_RANGE_MESSAGE, field="rating")
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if not isinstance(value, int) or not MIN_RATING <= value <= MAX_RATING:
        raise ValidationError(RATING_RANGE_MESSAGE, field="rating")
    return value


def _check_text(payload: Mapping[str, Any], field: str) -> None:
    value = payload.get(field)
    if value is not None and not isinstance(value, str):
        raise ValidationError(f"'{field}' must be a string", field=field)


def validate_create(payload: Mapping[str, Any]) -> BookmarkRecord:
    """
    Validate a create payload and assign a fresh id.

    Check order:
        1. title, url, rating presence (first missing one wins)
        2. title type
        3. rating range
        4. url well-formedness
        5. description type (it is never required)

    Returns:
        BookmarkRecord with a new UUID4 id and the fields copied verbatim
        (no sanitization happens at write time).

    Raises:
        ValidationError with plain_text=True; the message is the exact
        reason sent back as the 400 body.
    """
    try:
        for field in REQUIRED_FIELDS:
            if _is_missing(payload, field):
                raise ValidationError(required_message(field), field=field)

        _check_text(payload, "title")
        rating = normalize_rating(payload["rating"])

        if not is_web_url(payload["url"]):
            raise ValidationError(INVALID_URL_MESSAGE, field="url")

        _check_text(payload, "description")
    except ValidationError as exc:
        exc.plain_text = True
        raise

    return BookmarkRecord(
        id=str(uuid.uuid4()),
        title=payload["title"],
        url=payload["url"],
        description=payload.get("description"),
        rating=rating,
    )


def validate_update(payload: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Validate a partial update.

    Only the four recognized fields are considered; anything else is
    ignored. At least one of them must be present as a key. Every field
    that is present is held to the same rules as on create, except that
    description may be null to clear it.

    Returns:
        Dict of field name → new value, containing only supplied fields.

    Raises:
        ValidationError: empty update, or the first invalid field.
    """
    changes = {field: payload[field] for field in UPDATABLE_FIELDS if field in payload}
    if not changes:
        raise ValidationError(EMPTY_UPDATE_MESSAGE)

    if "title" in changes:
        if _is_missing(changes, "title"):
            raise ValidationError(required_message("title"), field="title")
        _check_text(changes, "title")

    if "url" in changes:
        if _is_missing(changes, "url"):
            raise ValidationError(required_message("url"), field="url")
        if not is_web_url(changes["url"]):
            raise ValidationError(INVALID_URL_MESSAGE, field="url")

    if "description" in changes:
        _check_text(changes, "description")

    if "rating" in changes:
        changes["rating"] = normalize_rating(changes["rating"])

    return changes
