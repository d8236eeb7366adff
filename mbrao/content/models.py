"""Pydantic models for parsed content."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from functools import cached_property
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from mbrao.content.locales import ALL_LOCALES, filter_localized, split_locales, validate_locales
from mbrao.content.normalize import CONTENT_FIELDS, normalize_author, normalize_metadata

Localized = str | dict[str, str]


class Author(BaseModel):
    """Author of a piece of content."""

    model_config = ConfigDict(frozen=True)

    name: str | None = None
    email: str | None = None
    website: str | None = None
    image: str | None = None
    uid: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def create(cls, data: Any) -> Author | None:
        """Build an author from a name or a mapping, clearing invalid contact fields."""
        normalized = normalize_author(data)
        if normalized is None:
            return None
        return cls(**normalized)


class Content(BaseModel):
    """Normalized record produced by parsing raw content."""

    model_config = ConfigDict(frozen=True)

    uid: str | None = None
    locales: list[str] = Field(default_factory=list)
    title: Localized = ""
    summary: Localized = ""
    body: Localized = ""
    tags: list[str] = Field(default_factory=list)
    more: str | None = None
    author: Author | None = None
    date: datetime | None = None
    updated_at: datetime | None = None
    published: bool = True
    metadata: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def create(cls, metadata: Mapping[str, Any] | None = None, body: Any = "") -> Content:
        """Build content from a (raw or normalized) metadata mapping and a body.

        Keys without a dedicated field end up in ``metadata``.
        """
        data = normalize_metadata(metadata)
        fields: dict[str, Any] = {key: data.pop(key) for key in CONTENT_FIELDS if key in data}

        if "author" in fields:
            fields["author"] = Author(**fields["author"])

        extension: dict[str, Any] = {}
        nested = data.pop("metadata", None)
        if isinstance(nested, Mapping):
            extension.update(nested)
        extension.update(data)
        extension.pop("body", None)

        if isinstance(body, Mapping):
            body = {str(k).strip(): str(v) for k, v in body.items()}
        elif body is None:
            body = ""

        return cls(body=body, metadata=extension, **fields)

    def with_body(self, body: Localized) -> Content:
        """Copy with another body. Memoized views are not carried over."""
        fields = {name: getattr(self, name) for name in type(self).model_fields}
        fields["body"] = body
        return type(self)(**fields)

    # -- locale handling ---------------------------------------------------

    @cached_property
    def available_locales(self) -> list[str]:
        """Every locale this content mentions, in declaration then field order."""
        found = list(self.locales)
        for value in (self.title, self.summary, self.body):
            if isinstance(value, dict):
                for key in value:
                    for locale in split_locales(key):
                        if locale not in found:
                            found.append(locale)
        return found

    def enabled_for_locales(self, *locales: Any) -> bool:
        """True when no locale restriction applies or any requested locale is enabled."""
        requested = split_locales(list(locales))
        if not requested or not self.locales or ALL_LOCALES in self.locales:
            return True
        return ALL_LOCALES in requested or any(locale in self.locales for locale in requested)

    def get_title(self, locales: Any = None) -> Localized:
        return self._localized(self.title, locales)

    def get_summary(self, locales: Any = None) -> Localized:
        return self._localized(self.summary, locales)

    def get_body(self, locales: Any = None) -> Localized:
        return self._localized(self.body, locales)

    def _localized(self, value: Localized, locales: Any) -> Localized:
        requested = validate_locales(locales, self)
        return filter_localized(value, requested)
