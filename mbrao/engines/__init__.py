"""Engine contract, registry, and the built-in parsing and rendering engines."""

from mbrao.engines.base import ParsingEngine, RenderingEngine
from mbrao.engines.registry import (
    EngineRegistry,
    EngineRole,
    canonical_name,
    default_registry,
    register_engine,
)

# Built-in engines register themselves on import.
from mbrao.engines.parsing import PlainTextEngine
from mbrao.engines.rendering import HtmlPipelineEngine

__all__ = [
    "EngineRegistry",
    "EngineRole",
    "HtmlPipelineEngine",
    "ParsingEngine",
    "PlainTextEngine",
    "RenderingEngine",
    "canonical_name",
    "default_registry",
    "register_engine",
]
