"""Engine registration and resolution.

Engines register under a (name, role) key, either explicitly via
``register_engine`` or through the ``mbrao.parsing_engines`` /
``mbrao.rendering_engines`` entry point groups. Each registry keeps one
instance per key. Instances are shared without locking, so engines must not
keep unsynchronized mutable state.
"""

from __future__ import annotations

import importlib.metadata
import logging
import re
from collections.abc import Callable
from enum import Enum
from typing import Any, TypeVar

from mbrao.engines.base import ParsingEngine, RenderingEngine
from mbrao.exceptions import InvalidEngineError, UnknownEngineError

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=type)


class EngineRole(str, Enum):
    """Capability namespace of an engine."""

    parsing = "parsing"
    rendering = "rendering"


_ROLE_BASES: dict[EngineRole, type] = {
    EngineRole.parsing: ParsingEngine,
    EngineRole.rendering: RenderingEngine,
}


def canonical_name(name: Any) -> str:
    """Normalize an engine name: ``PlainText``, ``plain-text`` and ``:plain_text`` all give ``plain_text``."""
    if name is None:
        return ""
    if isinstance(name, Enum):
        name = name.value
    text = str(name).strip().lstrip(":")
    text = re.sub(r"(?<=[a-z0-9])(?=[A-Z])", "_", text)
    text = re.sub(r"(?<=[A-Z])(?=[A-Z][a-z])", "_", text)
    text = re.sub(r"[\s\-]+", "_", text)
    return text.lower()


class EngineRegistry:
    """Maps (name, role) to engine classes and caches one instance per pair."""

    # Entry point group names
    GROUPS = {
        EngineRole.parsing: "mbrao.parsing_engines",
        EngineRole.rendering: "mbrao.rendering_engines",
    }

    def __init__(self) -> None:
        self._classes: dict[tuple[str, EngineRole], type] = {}
        self._instances: dict[tuple[str, EngineRole], Any] = {}

    def register(self, name: Any, role: EngineRole | str, engine_cls: type) -> type:
        """Register ``engine_cls`` for (name, role). Returns the class."""
        role = EngineRole(role)
        key = (canonical_name(name), role)
        base = _ROLE_BASES[role]
        if not isinstance(engine_cls, type) or not issubclass(engine_cls, base):
            raise InvalidEngineError(key[0], role.value, engine_cls)

        self._classes[key] = engine_cls
        self._instances.pop(key, None)
        logger.debug("registered %s engine %s -> %s", role.value, key[0], engine_cls.__name__)
        return engine_cls

    def unregister(self, name: Any, role: EngineRole | str) -> None:
        key = (canonical_name(name), EngineRole(role))
        self._classes.pop(key, None)
        self._instances.pop(key, None)

    def is_registered(self, name: Any, role: EngineRole | str) -> bool:
        return (canonical_name(name), EngineRole(role)) in self._classes

    def resolve(self, name: Any, role: EngineRole | str = EngineRole.parsing) -> Any:
        """Return the cached engine instance for (name, role), creating it on first use.

        Raises UnknownEngineError if nothing is registered under that key.
        """
        role = EngineRole(role)
        key = (canonical_name(name), role)

        instance = self._instances.get(key)
        if instance is not None:
            return instance

        engine_cls = self._classes.get(key)
        if engine_cls is None:
            engine_cls = self._load_from_entry_point(*key)
        if engine_cls is None:
            raise UnknownEngineError(name, role.value)

        instance = engine_cls()
        self._instances[key] = instance
        logger.debug("instantiated %s engine %s", role.value, key[0])
        return instance

    def names(self, role: EngineRole | str) -> list[str]:
        """Explicitly registered engine names for a role."""
        role = EngineRole(role)
        return sorted(name for name, r in self._classes if r is role)

    def discover(self) -> dict[str, list[str]]:
        """Registered plus entry-point engines. Returns {role: [name, ...]}."""
        result: dict[str, list[str]] = {}
        for role, group in self.GROUPS.items():
            names = set(self.names(role))
            names.update(canonical_name(ep.name) for ep in importlib.metadata.entry_points(group=group))
            result[role.value] = sorted(names)
        return result

    def clear_cache(self) -> None:
        """Drop every cached instance; registrations are kept."""
        self._instances.clear()

    def _load_from_entry_point(self, name: str, role: EngineRole) -> type | None:
        """Try to load and register a named entry point for the role."""
        eps = importlib.metadata.entry_points(group=self.GROUPS[role])
        for ep in eps:
            if canonical_name(ep.name) == name:
                return self.register(name, role, ep.load())
        return None


default_registry = EngineRegistry()


def register_engine(name: Any, role: EngineRole | str) -> Callable[[E], E]:
    """Class decorator registering an engine in the default registry."""

    def decorator(engine_cls: E) -> E:
        default_registry.register(name, role, engine_cls)
        return engine_cls

    return decorator
