"""Tests for predicate nodes and regex literals."""

import re

import pytest

from urlql.literals import RegexLiteral
from urlql.nodes import Comparison, Logical, is_operator_map, ops_of


class TestComparison:
    def test_to_dict_is_a_copy(self):
        node = Comparison({"age": {"$gte": 18}})
        d = node.to_dict()
        d["age"]["$gte"] = 99
        assert node.fields == {"age": {"$gte": 18}}

    def test_equality(self):
        assert Comparison({"a": 1}) == Comparison({"a": 1})
        assert Comparison({"a": 1}) != Comparison({"a": 2})
        assert Comparison({"a": 1}) != Logical("$and", [Comparison({"a": 1})])

    def test_repr(self):
        assert "Comparison:" in repr(Comparison({"a": 1}))

    def test_empty_is_falsy(self):
        assert not Comparison()
        assert Comparison({"a": 1})


class TestLogical:
    def test_to_dict(self):
        node = Logical("$or", [Comparison({"a": 1}), Logical("$and", [Comparison({"b": 2}), Comparison({"b": 3})])])
        assert node.to_dict() == {"$or": [{"a": 1}, {"$and": [{"b": 2}, {"b": 3}]}]}

    def test_requires_children(self):
        with pytest.raises(ValueError):
            Logical("$and", [])

    def test_rejects_unknown_connector(self):
        with pytest.raises(ValueError):
            Logical("$not", [Comparison({"a": 1})])

    def test_repr(self):
        assert "$or" in repr(Logical("$or", [Comparison({"a": 1})]))


def test_ops_of():
    assert ops_of(5) == ["$eq"]
    assert ops_of(None) == ["$eq"]
    assert ops_of(RegexLiteral(pattern="x")) == ["$eq"]
    assert ops_of({"$gt": 1, "$lt": 2}) == ["$gt", "$lt"]
    assert is_operator_map({"$in": [1]})
    assert not is_operator_map([1])


class TestRegexLiteral:
    def test_from_source(self):
        lit = RegexLiteral.from_source("/^Jo/i")
        assert lit.pattern == "^Jo"
        assert lit.flags == "i"

    def test_from_source_with_escaped_slash(self):
        lit = RegexLiteral.from_source(r"/a\/b/")
        assert lit.pattern == r"a\/b"
        assert lit.flags == ""

    def test_compile_flags(self):
        pattern = RegexLiteral(pattern="^a.+z$", flags="ims").compile()
        assert pattern.flags & re.IGNORECASE
        assert pattern.flags & re.MULTILINE
        assert pattern.flags & re.DOTALL
        assert pattern.search("A\nZ")

    def test_unicode_flag_is_accepted(self):
        assert RegexLiteral(pattern="é", flags="u").compile().search("café")

    def test_unknown_flag_is_rejected(self):
        with pytest.raises(ValueError, match="'g'"):
            RegexLiteral(pattern="x", flags="g")

    def test_unknown_flag_in_source_is_rejected(self):
        with pytest.raises(ValueError, match="'g'"):
            RegexLiteral.from_source("/x/gi")

    def test_str(self):
        assert str(RegexLiteral(pattern="^Jo", flags="i")) == "/^Jo/i"

    def test_value_semantics(self):
        assert RegexLiteral(pattern="x", flags="i") == RegexLiteral(pattern="x", flags="i")
        assert len({RegexLiteral(pattern="x"), RegexLiteral(pattern="x")}) == 1
