"""Rendering engine producing HTML from Markdown bodies."""

from __future__ import annotations

import logging
from string import Template
from typing import Any

import markdown

from mbrao.content.locales import filter_locale_sections, validate_locales
from mbrao.content.models import Content
from mbrao.engines.base import RenderingEngine
from mbrao.engines.registry import EngineRole, register_engine
from mbrao.exceptions import RenderingError

logger = logging.getLogger(__name__)

DEFAULT_EXTENSIONS = ["extra", "toc", "sane_lists"]


@register_engine("html_pipeline", EngineRole.rendering)
class HtmlPipelineEngine(RenderingEngine):
    """Locale filter -> ``$name`` interpolation of locals -> Markdown to HTML.

    Recognized options: ``locales`` (default: the parser locale),
    ``extensions`` (Markdown extension names) and ``output_format``.
    """

    def render(
        self,
        content: Content | str,
        options: dict[str, Any] | None = None,
        locals: dict[str, Any] | None = None,
    ) -> str:
        options = options or {}
        locales = validate_locales(options.get("locales"))

        body = self.filter_content(content, locales)
        if isinstance(body, dict):
            # One rendered block per locale, in request order.
            body = "\n\n".join(body.values())
        text = filter_locale_sections(body, locales)

        if locals:
            text = Template(text).safe_substitute({str(k): v for k, v in locals.items()})

        extensions = options.get("extensions") or DEFAULT_EXTENSIONS
        if isinstance(extensions, str):
            extensions = [e.strip() for e in extensions.split(",") if e.strip()]
        try:
            md = markdown.Markdown(
                extensions=extensions,
                output_format=options.get("output_format", "html"),
            )
            html = md.convert(text)
        except Exception as e:
            raise RenderingError("html_pipeline", e) from e

        logger.debug("rendered %d chars of markdown into %d chars of html", len(text), len(html))
        return html
