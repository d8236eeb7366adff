"""Shared test fixtures for mbrao."""

import pytest

from mbrao.engines import EngineRegistry, EngineRole, ParsingEngine
from mbrao.parser import Parser


class KeyValueEngine(ParsingEngine):
    """Metadata is ``key: value`` lines before a ``---`` line; the rest is body."""

    def separate_components(self, raw, options=None):
        head, sep, tail = raw.partition("\n---\n")
        if not sep:
            return "", raw
        return head, tail

    def parse_metadata(self, raw_metadata, options=None):
        result = {}
        for line in raw_metadata.splitlines():
            key, _, value = line.partition(":")
            if key.strip():
                result[key.strip()] = value.strip()
        return result


@pytest.fixture(autouse=True)
def _reset_default_parser():
    Parser.set_instance(None)
    yield
    Parser.set_instance(None)


@pytest.fixture
def registry():
    """An isolated registry with a trivial key/value parsing engine."""
    reg = EngineRegistry()
    reg.register("key_value", EngineRole.parsing, KeyValueEngine)
    return reg


@pytest.fixture
def parser(registry):
    return Parser(registry=registry)


@pytest.fixture
def sample_post():
    return (
        "{{metadata}}\n"
        "uid: post-1\n"
        "title:\n"
        "  en: Hello\n"
        '  "*": Ciao\n'
        "tags: [news, python, news]\n"
        "author:\n"
        "  name: Jane Doe\n"
        "  email: jane@example.com\n"
        "  website: https://jane.example.com\n"
        "date: 2024-03-01 10:00:00\n"
        "series: intro\n"
        "{{/metadata}}\n"
        "Hello **there**{{content: it}} e ciao{{/content}}"
    )
