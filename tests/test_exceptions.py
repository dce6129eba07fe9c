"""Tests for the urlql exception hierarchy."""

import pytest

from urlql.exceptions import (
    ControlError,
    InvalidControlError,
    LexicalError,
    ParseError,
    QuerySyntaxError,
    QueryTooLongError,
    UrlqlError,
)


class TestUrlqlError:
    def test_message_only(self):
        err = UrlqlError("Something failed")
        assert str(err) == "Something failed"
        assert err.details == {}

    def test_message_with_details(self):
        err = UrlqlError("Bad value", key="$limit", value="x")
        assert str(err) == "Bad value (key='$limit', value='x')"

    def test_details_only(self):
        assert str(UrlqlError(key="k")) == "key='k'"

    def test_repr(self):
        err = UrlqlError("Oops", a=1)
        assert repr(err) == "UrlqlError(message='Oops', details={'a': 1})"


class TestParseError:
    def test_offset_and_token(self):
        err = QuerySyntaxError("Expected word", offset=5, token="=")
        assert err.offset == 5
        assert err.token == "="
        assert err.details == {"offset": 5, "token": "="}
        assert str(err) == "Expected word (offset=5, token='=')"

    def test_end_of_input_has_no_token(self):
        err = QuerySyntaxError("Unexpected end of input", offset=3)
        assert err.token is None


@pytest.mark.parametrize(
    "exc_class,parent",
    [
        (ParseError, UrlqlError),
        (LexicalError, ParseError),
        (QuerySyntaxError, ParseError),
        (ControlError, UrlqlError),
        (InvalidControlError, ControlError),
        (QueryTooLongError, UrlqlError),
    ],
)
def test_hierarchy(exc_class, parent):
    assert issubclass(exc_class, parent)
    with pytest.raises(parent):
        raise exc_class("boom")


def test_query_syntax_error_does_not_shadow_builtin():
    assert not issubclass(QuerySyntaxError, SyntaxError)
