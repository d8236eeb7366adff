"""Normalization of raw metadata mappings into values the content model accepts."""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from datetime import date, datetime, timezone
from typing import Any

from mbrao.content.locales import split_locales
from mbrao.exceptions import InvalidDateError
from mbrao.validators import is_email, is_url

logger = logging.getLogger(__name__)

# Metadata keys with a dedicated field on Content. Everything else is extension metadata.
CONTENT_FIELDS = (
    "uid",
    "locales",
    "title",
    "summary",
    "tags",
    "more",
    "author",
    "date",
    "updated_at",
    "published",
)

_LOCALIZED_FIELDS = ("title", "summary")
_DATE_FIELDS = ("date", "updated_at")
_DATE_ALIASES = {"created_at": "date"}

AUTHOR_FIELDS = ("uid", "name", "email", "website", "image")

_TRUE_RE = re.compile(r"^(1|true|yes|t|y)$", re.IGNORECASE)


def stringify_keys(value: Any) -> Any:
    """Recursively convert mapping keys to strings."""
    if isinstance(value, Mapping):
        return {str(k): stringify_keys(v) for k, v in value.items()}
    if isinstance(value, list):
        return [stringify_keys(v) for v in value]
    return value


def coerce_date(value: Any) -> datetime:
    """Turn a datetime, date, UNIX timestamp or ISO-8601 string into an aware datetime.

    Naive values are assumed to be UTC. Raises InvalidDateError otherwise.
    """
    if isinstance(value, datetime):
        result = value
    elif isinstance(value, date):
        result = datetime(value.year, value.month, value.day)
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return datetime.fromtimestamp(value, tz=timezone.utc)
        except (OverflowError, OSError, ValueError) as e:
            raise InvalidDateError(value) from e
    elif isinstance(value, str) and value.strip():
        try:
            result = datetime.fromisoformat(value.strip())
        except ValueError as e:
            raise InvalidDateError(value) from e
    else:
        raise InvalidDateError(value)

    if result.tzinfo is None:
        result = result.replace(tzinfo=timezone.utc)
    return result


def coerce_tags(value: Any) -> list[str]:
    """Tags from a list or a comma-separated string: stripped, unique, in order."""
    if value is None:
        return []
    if isinstance(value, str):
        items = value.split(",")
    elif isinstance(value, (list, tuple, set)):
        items = list(value)
    else:
        items = [value]

    tags: list[str] = []
    for item in items:
        tag = str(item).strip()
        if tag and tag not in tags:
            tags.append(tag)
    return tags


def coerce_localized(value: Any) -> str | dict[str, str]:
    """A plain string, or a locale-keyed mapping of strings."""
    if value is None:
        return ""
    if isinstance(value, Mapping):
        return {str(k).strip(): "" if v is None else str(v) for k, v in value.items()}
    return str(value)


def to_boolean(value: Any) -> bool:
    """Strict flag parsing: only True, 1, 1.0 and "1", "true", "yes", "t", "y" are true."""
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value == 1
    if isinstance(value, str):
        return _TRUE_RE.match(value.strip()) is not None
    return False


def coerce_flag(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() not in ("", "false", "no", "off", "0")
    return bool(value)


def normalize_author(value: Any) -> dict[str, Any] | None:
    """Author from a name string or a mapping; invalid email/website/image are cleared."""
    if value is None:
        return None
    if isinstance(value, str):
        value = {"name": value}
    if not isinstance(value, Mapping):
        logger.warning("Ignoring author of unsupported type %s", type(value).__name__)
        return None

    data = stringify_keys(value)
    author: dict[str, Any] = {}
    for key in AUTHOR_FIELDS:
        if data.get(key) is not None:
            author[key] = str(data.pop(key)).strip()
        else:
            data.pop(key, None)

    if "email" in author and not is_email(author["email"]):
        logger.warning("Dropping invalid author email %r", author["email"])
        del author["email"]
    for key in ("website", "image"):
        if key in author and not is_url(author[key]):
            logger.warning("Dropping invalid author %s %r", key, author[key])
            del author[key]

    extra = data.pop("metadata", None)
    metadata = dict(extra) if isinstance(extra, Mapping) else {}
    metadata.update(data)
    author["metadata"] = metadata
    return author


def normalize_metadata(raw: Mapping[str, Any] | None) -> dict[str, Any]:
    """Normalize a raw metadata mapping.

    Keys become strings; known fields are coerced (tags split, dates parsed,
    author validated). Values that fail validation are dropped with a warning.
    Unrecognized keys are returned untouched.
    """
    if not raw:
        return {}

    data = stringify_keys(raw)
    for alias, target in _DATE_ALIASES.items():
        if alias in data:
            value = data.pop(alias)
            data.setdefault(target, value)

    result: dict[str, Any] = {}
    for key, value in data.items():
        if key in _LOCALIZED_FIELDS:
            result[key] = coerce_localized(value)
        elif key in _DATE_FIELDS:
            if value is None:
                continue
            try:
                result[key] = coerce_date(value)
            except InvalidDateError:
                logger.warning("Dropping invalid %s %r", key, value)
        elif key == "tags":
            result[key] = coerce_tags(value)
        elif key == "locales":
            result[key] = split_locales(value)
        elif key == "author":
            author = normalize_author(value)
            if author is not None:
                result[key] = author
        elif key == "published":
            result[key] = coerce_flag(value)
        elif key in ("uid", "more"):
            result[key] = None if value is None else str(value)
        else:
            result[key] = value
    return result
