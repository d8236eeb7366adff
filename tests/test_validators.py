"""Tests for mbrao.validators."""

import pytest

from mbrao.parser import Parser
from mbrao.validators import is_email, is_url


class TestIsEmail:
    @pytest.mark.parametrize(
        "value",
        ["valid@email.com", "this.is.9@email.com", "this.is.9@email.com.uk", "a@b.co.uk"],
    )
    def test_accepts_valid_addresses(self, value):
        assert is_email(value) is True

    @pytest.mark.parametrize(
        "value",
        ["valid@localhost", "INVALID", "@example.com", "a b@example.com", "a@example", ""],
    )
    def test_rejects_malformed_addresses(self, value):
        assert is_email(value) is False

    @pytest.mark.parametrize("value", [" a@b.com ", "a@b.com\n", "\ta@b.com"])
    def test_rejects_surrounding_whitespace(self, value):
        assert is_email(value) is False

    @pytest.mark.parametrize("value", [None, [], {}, 42])
    def test_rejects_non_strings(self, value):
        assert is_email(value) is False


class TestIsUrl:
    @pytest.mark.parametrize(
        "value",
        [
            "http://google.it",
            "https://example.com/a/b",
            "ftp://ftp.google.com",
            "http://google.it/?q=FOO+BAR",
        ],
    )
    def test_accepts_valid_urls(self, value):
        assert is_url(value) is True

    @pytest.mark.parametrize(
        "value",
        [
            "INVALID",
            "google.it",
            "mailto:a@b.com",
            "http://",
            "gopher://x.org",
            "http://a b.com",
            " http://google.it ",
        ],
    )
    def test_rejects_malformed_urls(self, value):
        assert is_url(value) is False

    @pytest.mark.parametrize("value", [None, [], {}, 3.14])
    def test_rejects_non_strings(self, value):
        assert is_url(value) is False


def test_parser_reexports_validators():
    assert Parser.is_email("valid@email.com")
    assert not Parser.is_url(None)
