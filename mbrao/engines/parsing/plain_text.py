"""Parsing engine for plain text posts with a YAML metadata block.

    {{metadata}}
    title: Hello
    tags: [a, b]
    {{/metadata}}
    Body text, optionally with {{content: it}}localized{{/content}} sections.
"""

from __future__ import annotations

import re
from typing import Any

import yaml

from mbrao.content.locales import (
    ALL_LOCALES,
    filter_locale_sections,
    filter_localized,
    split_locales,
    validate_locales,
)
from mbrao.content.models import Content
from mbrao.content.normalize import normalize_metadata
from mbrao.engines.base import ParsingEngine
from mbrao.engines.registry import EngineRole, register_engine
from mbrao.exceptions import InvalidMetadataError

_METADATA_RE = re.compile(r"\A\s*\{\{metadata\}\}(.*?)\{\{/metadata\}\}", re.DOTALL)


@register_engine("plain_text", EngineRole.parsing)
class PlainTextEngine(ParsingEngine):
    def separate_components(self, raw: str, options: dict[str, Any] | None = None) -> tuple[str, str]:
        match = _METADATA_RE.match(raw)
        if match is None:
            return "", raw
        return match.group(1).strip(), raw[match.end():]

    def parse_metadata(self, raw_metadata: str, options: dict[str, Any] | None = None) -> dict[str, Any]:
        """Load the YAML metadata block.

        Invalid YAML (or a document that is not a mapping) raises
        InvalidMetadataError, unless ``options["default"]`` is given, which is
        then returned instead.
        """
        options = options or {}
        if not raw_metadata or not raw_metadata.strip():
            return {}

        try:
            data = yaml.safe_load(raw_metadata)
        except yaml.YAMLError as e:
            if "default" in options:
                return options["default"]
            raise InvalidMetadataError(f"Invalid YAML metadata: {e}", e) from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            if "default" in options:
                return options["default"]
            raise InvalidMetadataError(f"Metadata must be a mapping, got {type(data).__name__}")
        return normalize_metadata(data)

    def filter_content(
        self, content: Content | str, locales: Any = None, options: dict[str, Any] | None = None
    ) -> str | dict[str, str]:
        """Keep the body sections enabled for ``locales``.

        A single locale (or ``*``) gives a string, several locales a
        locale-keyed dict.
        """
        if isinstance(content, Content):
            requested = validate_locales(locales, content)
            body = filter_localized(content.body, requested)
        else:
            requested = validate_locales(locales)
            body = content

        if isinstance(body, dict):
            if ALL_LOCALES in requested:
                return {key: filter_locale_sections(text, requested) for key, text in body.items()}
            return {key: filter_locale_sections(text, split_locales(key)) for key, text in body.items()}
        if len(requested) == 1 or ALL_LOCALES in requested:
            return filter_locale_sections(body, requested)
        return {locale: filter_locale_sections(body, [locale]) for locale in requested}
