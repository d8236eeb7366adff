"""Email and URL predicates used when normalizing author metadata."""

from __future__ import annotations

import re
from urllib.parse import urlsplit

_EMAIL_RE = re.compile(
    r"^[\w.!#$%&'*+/=?^`{|}~-]+"
    r"@(?:[a-z0-9](?:[a-z0-9-]*[a-z0-9])?\.)+[a-z]{2,}$",
    re.IGNORECASE,
)

URL_SCHEMES = frozenset({"http", "https", "ftp", "ftps"})


def is_email(value: object) -> bool:
    """Return True if value looks like ``local@domain.tld``."""
    if not isinstance(value, str):
        return False
    return _EMAIL_RE.fullmatch(value) is not None


def is_url(value: object) -> bool:
    """Return True for ``scheme://host[...]`` strings with a known scheme."""
    if not isinstance(value, str):
        return False

    if not value or any(ch.isspace() for ch in value):
        return False

    try:
        parts = urlsplit(value)
        hostname = parts.hostname
    except ValueError:
        return False

    return parts.scheme.lower() in URL_SCHEMES and bool(hostname)
