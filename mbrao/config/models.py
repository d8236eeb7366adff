from __future__ import annotations

from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from mbrao.content.normalize import to_boolean
from mbrao.engines.registry import canonical_name

DEFAULT_LOCALE = "en"
DEFAULT_PARSING_ENGINE = "plain_text"
DEFAULT_RENDERING_ENGINE = "html_pipeline"
DEFAULT_MARKDOWN_EXTENSIONS = ["extra", "toc", "sane_lists"]


def coerce_string(value: Any) -> str:
    """Enum members become their value, everything else its str() form."""
    if value is None:
        return ""
    if isinstance(value, Enum):
        value = value.value
    return str(value).strip()


class RenderingConfig(BaseModel):
    extensions: list[str] = Field(default_factory=lambda: list(DEFAULT_MARKDOWN_EXTENSIONS))
    output_format: Literal["html", "xhtml"] = "html"


class MbraoConfig(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    locale: str = DEFAULT_LOCALE
    parsing_engine: str = DEFAULT_PARSING_ENGINE
    rendering_engine: str = DEFAULT_RENDERING_ENGINE
    rendering: RenderingConfig = Field(default_factory=RenderingConfig)
    log_level: Literal["debug", "info", "warn", "error"] = "info"
    log_format: Literal["text", "json"] = "text"

    @field_validator("locale", mode="before")
    @classmethod
    def validate_locale(cls, v: Any) -> str:
        return coerce_string(v) or DEFAULT_LOCALE

    @field_validator("parsing_engine", mode="before")
    @classmethod
    def validate_parsing_engine(cls, v: Any) -> str:
        return canonical_name(v) or DEFAULT_PARSING_ENGINE

    @field_validator("rendering_engine", mode="before")
    @classmethod
    def validate_rendering_engine(cls, v: Any) -> str:
        return canonical_name(v) or DEFAULT_RENDERING_ENGINE


class ParseOptions(BaseModel):
    """Options accepted by ``Parser.parse``; unknown keys are kept and forwarded."""

    model_config = ConfigDict(extra="allow")

    metadata: bool = True
    content: bool = True
    engine: str

    @field_validator("metadata", "content", mode="before")
    @classmethod
    def coerce_flag(cls, v: Any) -> bool:
        return to_boolean(v)

    @field_validator("engine", mode="before")
    @classmethod
    def validate_engine(cls, v: Any) -> str:
        return canonical_name(v)

    def to_mapping(self) -> dict[str, Any]:
        return {str(k): v for k, v in self.model_dump().items()}


class RenderOptions(BaseModel):
    """Options accepted by ``Parser.render``; unknown keys are kept and forwarded."""

    model_config = ConfigDict(extra="allow")

    engine: str

    @field_validator("engine", mode="before")
    @classmethod
    def validate_engine(cls, v: Any) -> str:
        return canonical_name(v)

    def to_mapping(self) -> dict[str, Any]:
        return {str(k): v for k, v in self.model_dump().items()}
