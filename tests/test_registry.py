"""Tests for mbrao.engines.registry — naming, registration, resolution, entry points."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

from mbrao.engines import (
    EngineRegistry,
    EngineRole,
    HtmlPipelineEngine,
    ParsingEngine,
    PlainTextEngine,
    RenderingEngine,
    canonical_name,
    default_registry,
    register_engine,
)
from mbrao.exceptions import InvalidEngineError, UnknownEngineError


# -- Helpers ----------------------------------------------------------------


class _CustomParser(ParsingEngine):
    pass


class _CustomRenderer(RenderingEngine):
    pass


def make_entry_point(name: str, load_return=None):
    """Build a mock entry point with .name and .load()."""
    ep = MagicMock()
    ep.name = name
    ep.load.return_value = load_return or MagicMock()
    return ep


def _ep_side_effect(mapping: dict[str, list]):
    """Return a side_effect function for entry_points(group=...)."""
    def _side_effect(*, group):
        return mapping.get(group, [])
    return _side_effect


# -- canonical_name ---------------------------------------------------------


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("plain_text", "plain_text"),
        ("PlainText", "plain_text"),
        ("plain-text", "plain_text"),
        (":plain_text", "plain_text"),
        ("HTMLPipeline", "html_pipeline"),
        (EngineRole.parsing, "parsing"),
        (None, ""),
    ],
)
def test_canonical_name(raw, expected):
    assert canonical_name(raw) == expected


# -- Registration ----------------------------------------------------------


def test_builtin_engines_are_registered():
    assert default_registry.is_registered("plain_text", EngineRole.parsing)
    assert default_registry.is_registered("html_pipeline", EngineRole.rendering)
    assert not default_registry.is_registered("plain_text", EngineRole.rendering)


def test_register_rejects_class_of_wrong_role():
    registry = EngineRegistry()
    with pytest.raises(InvalidEngineError) as exc_info:
        registry.register("custom", EngineRole.parsing, _CustomRenderer)
    assert exc_info.value.name == "custom"
    assert exc_info.value.role == "parsing"


def test_register_rejects_non_classes():
    registry = EngineRegistry()
    with pytest.raises(InvalidEngineError):
        registry.register("custom", "rendering", object())


def test_register_rejects_unknown_role():
    registry = EngineRegistry()
    with pytest.raises(ValueError):
        registry.register("custom", "templating", _CustomParser)


def test_register_engine_decorator_uses_default_registry():
    @register_engine("decorated", "parsing")
    class Decorated(ParsingEngine):
        pass

    try:
        assert isinstance(default_registry.resolve("decorated", "parsing"), Decorated)
    finally:
        default_registry.unregister("decorated", "parsing")
    assert not default_registry.is_registered("decorated", "parsing")


# -- Resolution ------------------------------------------------------------


def test_resolve_returns_cached_instance():
    registry = EngineRegistry()
    registry.register("custom", EngineRole.parsing, _CustomParser)

    first = registry.resolve("custom", EngineRole.parsing)
    assert isinstance(first, _CustomParser)
    assert registry.resolve("Custom", "parsing") is first


def test_roles_are_separate_namespaces():
    registry = EngineRegistry()
    registry.register("custom", EngineRole.parsing, _CustomParser)
    registry.register("custom", EngineRole.rendering, _CustomRenderer)

    assert isinstance(registry.resolve("custom", EngineRole.parsing), _CustomParser)
    assert isinstance(registry.resolve("custom", EngineRole.rendering), _CustomRenderer)


def test_reregistering_drops_cached_instance():
    registry = EngineRegistry()
    registry.register("custom", EngineRole.parsing, _CustomParser)
    first = registry.resolve("custom")

    registry.register("custom", EngineRole.parsing, _CustomParser)
    assert registry.resolve("custom") is not first


def test_clear_cache_keeps_registrations():
    registry = EngineRegistry()
    registry.register("custom", EngineRole.parsing, _CustomParser)
    first = registry.resolve("custom")

    registry.clear_cache()
    second = registry.resolve("custom")
    assert second is not first
    assert isinstance(second, _CustomParser)


def test_default_registry_builds_builtin_engines():
    assert isinstance(default_registry.resolve("plain_text"), PlainTextEngine)
    assert isinstance(default_registry.resolve("html_pipeline", "rendering"), HtmlPipelineEngine)


@patch("mbrao.engines.registry.importlib.metadata.entry_points")
def test_unknown_engine_raises(mock_eps):
    mock_eps.side_effect = _ep_side_effect({})
    registry = EngineRegistry()
    registry.register("custom", EngineRole.parsing, _CustomParser)

    with pytest.raises(UnknownEngineError) as exc_info:
        registry.resolve("invalid", EngineRole.parsing)
    assert exc_info.value.name == "invalid"
    assert exc_info.value.role == "parsing"
    assert "invalid" in str(exc_info.value)


@patch("mbrao.engines.registry.importlib.metadata.entry_points")
def test_no_fallback_across_roles(mock_eps):
    """A parsing engine never satisfies a rendering lookup."""
    mock_eps.side_effect = _ep_side_effect({})
    registry = EngineRegistry()
    registry.register("custom", EngineRole.parsing, _CustomParser)

    with pytest.raises(UnknownEngineError) as exc_info:
        registry.resolve("custom", EngineRole.rendering)
    assert exc_info.value.role == "rendering"


# -- Entry points ----------------------------------------------------------


@patch("mbrao.engines.registry.importlib.metadata.entry_points")
def test_resolve_loads_entry_point_once(mock_eps):
    mock_eps.side_effect = _ep_side_effect({
        "mbrao.parsing_engines": [make_entry_point("Fancy", _CustomParser)],
    })
    registry = EngineRegistry()

    engine = registry.resolve("fancy", EngineRole.parsing)
    assert isinstance(engine, _CustomParser)
    assert registry.resolve("fancy", EngineRole.parsing) is engine
    assert mock_eps.call_count == 1
    assert registry.is_registered("fancy", EngineRole.parsing)


@patch("mbrao.engines.registry.importlib.metadata.entry_points")
def test_entry_point_with_wrong_interface_is_rejected(mock_eps):
    mock_eps.side_effect = _ep_side_effect({
        "mbrao.rendering_engines": [make_entry_point("broken", _CustomParser)],
    })
    registry = EngineRegistry()

    with pytest.raises(InvalidEngineError):
        registry.resolve("broken", EngineRole.rendering)


@patch("mbrao.engines.registry.importlib.metadata.entry_points")
def test_discover_merges_registered_and_entry_points(mock_eps):
    mock_eps.side_effect = _ep_side_effect({
        "mbrao.rendering_engines": [make_entry_point("latex")],
    })
    registry = EngineRegistry()
    registry.register("custom", EngineRole.parsing, _CustomParser)

    assert registry.discover() == {"parsing": ["custom"], "rendering": ["latex"]}
