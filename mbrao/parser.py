"""Parser façade: the configurable entry point for parsing and rendering."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from enum import Enum
from typing import Any

from mbrao.config.models import MbraoConfig, ParseOptions, RenderOptions
from mbrao.content.models import Content
from mbrao.engines import EngineRegistry, EngineRole, default_registry
from mbrao.validators import is_email, is_url

logger = logging.getLogger(__name__)


def _option_data(options: Mapping[Any, Any] | None) -> dict[str, Any]:
    data: dict[str, Any] = {}
    for key, value in (options or {}).items():
        if isinstance(key, Enum):
            key = key.value
        data[str(key).lstrip(":")] = value
    return data


class Parser:
    """Resolves engines by name and delegates parse/render to them.

    Defaults for locale and engines come from the MbraoConfig given at
    construction; explicit options always win over it. ``Parser.instance()``
    holds the process-wide default parser used by ``mbrao.parse`` and
    ``mbrao.render``.
    """

    _instance: Parser | None = None

    is_email = staticmethod(is_email)
    is_url = staticmethod(is_url)

    def __init__(
        self,
        config: MbraoConfig | None = None,
        registry: EngineRegistry | None = None,
    ) -> None:
        self.config = config if config is not None else MbraoConfig()
        self.registry = registry if registry is not None else default_registry

    # -- singleton ---------------------------------------------------------

    @classmethod
    def instance(cls, force_new: bool = False) -> Parser:
        """Return the default parser. ``force_new`` builds a fresh, uncached one."""
        if force_new:
            return cls()
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def set_instance(cls, parser: Parser | None) -> None:
        """Replace (or with None, reset) the default parser."""
        cls._instance = parser

    # -- configuration -----------------------------------------------------

    @property
    def locale(self) -> str:
        return self.config.locale

    @locale.setter
    def locale(self, value: Any) -> None:
        self.config.locale = value

    @property
    def parsing_engine(self) -> str:
        return self.config.parsing_engine

    @parsing_engine.setter
    def parsing_engine(self, value: Any) -> None:
        self.config.parsing_engine = value

    @property
    def rendering_engine(self) -> str:
        return self.config.rendering_engine

    @rendering_engine.setter
    def rendering_engine(self, value: Any) -> None:
        self.config.rendering_engine = value

    # -- operations --------------------------------------------------------

    def create_engine(self, name: Any, role: EngineRole | str = EngineRole.parsing) -> Any:
        """Resolve the engine registered for (name, role)."""
        return self.registry.resolve(name, role)

    def parse(self, content: str, options: Mapping[Any, Any] | ParseOptions | None = None) -> Content:
        """Parse raw content with the requested (or default) parsing engine.

        The engine receives the sanitized, string-keyed options. The
        ``metadata`` and ``content`` flags are enforced again on the result, so
        engines overriding ``parse`` need not honor them.
        """
        opts = self.parse_options(options)
        engine = self.create_engine(opts.engine, EngineRole.parsing)
        logger.debug("parsing %d chars with %s", len(content or ""), opts.engine)

        result = engine.parse(content, opts.to_mapping())
        if not isinstance(result, Content):
            return result

        if not opts.metadata:
            stripped = Content(body=result.body)
            if result != stripped:
                result = stripped
        if not opts.content and result.body:
            result = result.with_body("")
        return result

    def render(
        self,
        content: Content | str,
        options: Mapping[Any, Any] | RenderOptions | None = None,
        locals: Mapping[str, Any] | None = None,
    ) -> str:
        """Render content with the requested (or default) rendering engine.

        ``locales``, ``extensions`` and ``output_format`` left out of ``options``
        are taken from this parser's config.
        """
        opts = self.render_options(options)
        engine = self.create_engine(opts.engine, EngineRole.rendering)
        logger.debug("rendering with %s", opts.engine)
        return engine.render(content, opts.to_mapping(), locals)

    def parse_options(self, options: Mapping[Any, Any] | ParseOptions | None) -> ParseOptions:
        if isinstance(options, ParseOptions):
            return options
        data = _option_data(options)
        if data.get("engine") in (None, ""):
            data["engine"] = self.parsing_engine
        return ParseOptions(**data)

    def render_options(self, options: Mapping[Any, Any] | RenderOptions | None) -> RenderOptions:
        if isinstance(options, RenderOptions):
            data = options.to_mapping()
        else:
            data = _option_data(options)
        if data.get("engine") in (None, ""):
            data["engine"] = self.rendering_engine
        if not data.get("locales"):
            data["locales"] = [self.locale]
        if not data.get("extensions"):
            data["extensions"] = list(self.config.rendering.extensions)
        if not data.get("output_format"):
            data["output_format"] = self.config.rendering.output_format
        return RenderOptions(**data)


def parse(content: str, options: Mapping[Any, Any] | None = None) -> Content:
    """Parse with the default parser."""
    return Parser.instance().parse(content, options)


def render(
    content: Content | str,
    options: Mapping[Any, Any] | None = None,
    locals: Mapping[str, Any] | None = None,
) -> str:
    """Render with the default parser."""
    return Parser.instance().render(content, options, locals)
