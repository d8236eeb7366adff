"""Error types raised by the parsing and rendering pipeline."""

from __future__ import annotations

from typing import Any


class MbraoError(Exception):
    """Base class for every error raised by mbrao."""


class UnknownEngineError(MbraoError):
    """Raised when no engine is registered for a (name, role) pair."""

    def __init__(self, name: Any, role: str) -> None:
        self.name = name
        self.role = role
        super().__init__(f"No {role} engine found with name '{name}'")


class InvalidEngineError(MbraoError):
    """Raised when registering a class that does not implement the role's contract."""

    def __init__(self, name: str, role: str, engine_cls: Any) -> None:
        self.name = name
        self.role = role
        self.engine_cls = engine_cls
        super().__init__(
            f"Cannot register {engine_cls!r} as {role} engine '{name}': "
            f"it does not implement the {role} engine interface"
        )


class UnimplementedError(MbraoError, NotImplementedError):
    """Raised when an engine is missing a required operation."""

    def __init__(self, engine: str, operation: str) -> None:
        self.engine = engine
        self.operation = operation
        super().__init__(f"{engine} does not implement {operation}()")


class ParsingError(MbraoError):
    """Raised when raw content cannot be parsed."""


class InvalidMetadataError(ParsingError):
    """Raised when the metadata section is not a valid document."""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        super().__init__(message)
        if cause is not None:
            self.__cause__ = cause


class InvalidDateError(ParsingError):
    """Raised when a metadata value cannot be turned into a timestamp."""

    def __init__(self, value: Any) -> None:
        self.value = value
        super().__init__(f"Invalid date: {value!r}")


class RenderingError(MbraoError):
    """Wraps failures of the underlying rendering library."""

    def __init__(self, engine: str, cause: Exception) -> None:
        self.engine = engine
        super().__init__(f"{engine} render failed: {cause}")
        self.__cause__ = cause


class UnavailableLocalizationError(MbraoError):
    """Raised when none of the requested locales is available."""

    def __init__(self, locales: list[str]) -> None:
        self.locales = locales
        super().__init__(f"Content is not available for locales: {', '.join(locales)}")
