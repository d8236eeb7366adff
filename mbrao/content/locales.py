"""Locale handling for localized content fields and locale-marked body sections.

A localized field is either a plain string (valid for every locale) or a
mapping whose keys are locale tags. A key may list several locales separated by
commas (``"en,it"``) and ``*`` matches every locale.

Bodies may also carry inline sections that apply to some locales only::

    {{content: en,it}}Only in English and Italian{{/content}}
    {{content: !en}}Everywhere but English{{/content}}
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from typing import Any

from mbrao.exceptions import UnavailableLocalizationError

ALL_LOCALES = "*"

_SECTION_RE = re.compile(r"\{\{content:\s*([^}]*?)\s*\}\}(.*?)\{\{/content\}\}", re.DOTALL)


def split_locales(value: Any) -> list[str]:
    """Turn ``"en, it"``, ``["en", "it"]`` or nested lists into a unique, ordered list."""
    if value is None:
        return []
    if isinstance(value, str):
        items: Iterable[Any] = value.split(",")
    elif isinstance(value, Iterable):
        items = value
    else:
        items = [value]

    result: list[str] = []
    for item in items:
        if isinstance(item, (list, tuple, set)):
            candidates = split_locales(item)
        else:
            candidates = [str(item).strip()]
        for locale in candidates:
            if locale and locale not in result:
                result.append(locale)
    return result


def default_locale() -> str:
    # Imported here: the parser module depends on this package.
    from mbrao.parser import Parser

    return Parser.instance().locale


def validate_locales(locales: Any = None, content: Any = None) -> list[str]:
    """Normalize requested locales, defaulting to the parser's locale.

    If ``content`` is given, raises UnavailableLocalizationError when it is not
    enabled for any of the requested locales.
    """
    requested = split_locales(locales) or [default_locale()]
    if content is not None and not content.enabled_for_locales(requested):
        raise UnavailableLocalizationError(requested)
    return requested


def filter_localized(value: Any, locales: list[str]) -> Any:
    """Pick the values of a localized field for the requested locales.

    A locale without its own value falls back to the ``*`` value. Returns a
    single value when only one entry survives, a locale-keyed dict otherwise.
    """
    if not isinstance(value, Mapping):
        return value

    if ALL_LOCALES in locales:
        everything = dict(value)
        return _collapse(everything)

    fallback = None
    has_fallback = False
    found: dict[str, Any] = {}
    for key, text in value.items():
        key_locales = split_locales(key)
        if ALL_LOCALES in key_locales and not has_fallback:
            fallback, has_fallback = text, True
        for locale in key_locales:
            if locale in locales and locale not in found:
                found[locale] = text

    result: dict[str, Any] = {}
    for locale in locales:
        if locale in found:
            result[locale] = found[locale]
        elif has_fallback:
            result[locale] = fallback

    if not result:
        raise UnavailableLocalizationError(locales)
    return _collapse(result)


def section_enabled(spec: str, locales: list[str]) -> bool:
    """Whether a ``{{content: ...}}`` section applies to any requested locale."""
    if ALL_LOCALES in locales:
        return True

    entries = split_locales(spec)
    allowed = [e for e in entries if not e.startswith("!")]
    denied = [e[1:].strip() for e in entries if e.startswith("!")]

    if denied and any(locale in denied for locale in locales):
        return False
    if not allowed:
        return True
    return ALL_LOCALES in allowed or any(locale in allowed for locale in locales)


def filter_locale_sections(text: str, locales: list[str]) -> str:
    """Keep unmarked text and the sections enabled for ``locales``; drop the rest."""
    return _SECTION_RE.sub(
        lambda m: m.group(2) if section_enabled(m.group(1), locales) else "",
        text,
    )


def _collapse(values: dict[str, Any]) -> Any:
    if len(values) == 1:
        return next(iter(values.values()))
    return values
