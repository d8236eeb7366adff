"""Content model: normalized records, authors, and locale filtering."""

from mbrao.content.locales import (
    ALL_LOCALES,
    filter_locale_sections,
    filter_localized,
    split_locales,
    validate_locales,
)
from mbrao.content.models import Author, Content
from mbrao.content.normalize import coerce_date, coerce_tags, normalize_metadata

__all__ = [
    "ALL_LOCALES",
    "Author",
    "Content",
    "coerce_date",
    "coerce_tags",
    "filter_locale_sections",
    "filter_localized",
    "normalize_metadata",
    "split_locales",
    "validate_locales",
]
