"""Base classes every parsing and rendering engine derives from."""

from __future__ import annotations

from typing import Any

from mbrao.content.models import Content
from mbrao.content.normalize import to_boolean
from mbrao.exceptions import UnimplementedError


class ParsingEngine:
    """Turns raw content into a Content record.

    Subclasses implement ``separate_components`` and ``parse_metadata`` and get
    the two-stage ``parse`` for free, or override ``parse`` for a single-pass
    parse. Missing operations raise UnimplementedError when called.
    """

    def separate_components(self, raw: str, options: dict[str, Any] | None = None) -> tuple[str, str]:
        """Split raw input into its unparsed metadata section and its body."""
        raise UnimplementedError(type(self).__name__, "separate_components")

    def parse_metadata(self, raw_metadata: str, options: dict[str, Any] | None = None) -> dict[str, Any]:
        """Turn the metadata section into a string-keyed mapping of normalized values."""
        raise UnimplementedError(type(self).__name__, "parse_metadata")

    def filter_content(
        self, content: Content | str, locales: Any = None, options: dict[str, Any] | None = None
    ) -> str | dict[str, str]:
        """Return the body of ``content`` restricted to ``locales``."""
        raise UnimplementedError(type(self).__name__, "filter_content")

    def parse(self, raw: str, options: dict[str, Any] | None = None) -> Content:
        """Separate, parse metadata, then build the Content.

        ``options["metadata"]`` false skips separation and keeps the whole input
        as body; ``options["content"]`` false empties the body.
        """
        options = options or {}

        if to_boolean(options.get("metadata", True)):
            raw_metadata, body = self.separate_components(raw, options)
            metadata = self.parse_metadata(raw_metadata, options)
        else:
            metadata, body = {}, raw

        if not to_boolean(options.get("content", True)):
            body = ""

        return Content.create(metadata, body)


class RenderingEngine:
    """Turns a Content record (or a plain body) into output markup."""

    def render(
        self,
        content: Content | str,
        options: dict[str, Any] | None = None,
        locals: dict[str, Any] | None = None,
    ) -> str:
        raise UnimplementedError(type(self).__name__, "render")

    def filter_content(self, content: Content | str, locales: Any = None) -> str | dict[str, str]:
        if isinstance(content, Content):
            return content.get_body(locales)
        return content
