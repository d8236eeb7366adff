"""A content parser and renderer with embedded metadata support."""

from mbrao.config import MbraoConfig, ParseOptions, RenderOptions, load_config
from mbrao.content import Author, Content
from mbrao.engines import (
    EngineRegistry,
    EngineRole,
    ParsingEngine,
    RenderingEngine,
    default_registry,
    register_engine,
)
from mbrao.exceptions import (
    InvalidDateError,
    InvalidEngineError,
    InvalidMetadataError,
    MbraoError,
    ParsingError,
    RenderingError,
    UnavailableLocalizationError,
    UnimplementedError,
    UnknownEngineError,
)
from mbrao.parser import Parser, parse, render
from mbrao.validators import is_email, is_url
from mbrao.version import VERSION

__version__ = VERSION

__all__ = [
    "Author",
    "Content",
    "EngineRegistry",
    "EngineRole",
    "InvalidDateError",
    "InvalidEngineError",
    "InvalidMetadataError",
    "MbraoConfig",
    "MbraoError",
    "ParseOptions",
    "Parser",
    "ParsingEngine",
    "ParsingError",
    "RenderOptions",
    "RenderingEngine",
    "RenderingError",
    "UnavailableLocalizationError",
    "UnimplementedError",
    "UnknownEngineError",
    "default_registry",
    "is_email",
    "is_url",
    "load_config",
    "parse",
    "register_engine",
    "render",
]
