"""
urlql: a compact, URL-safe query language for GET requests.

Exposes `parse_urlql` for whole query strings and `parse_filter` for
already-decoded filter expressions, plus the node and token types.
"""

from .exceptions import LexicalError, ParseError, QuerySyntaxError, UrlqlError
from .insights import InsightTracker
from .literals import RegexLiteral
from .nodes import Comparison, Logical, PredicateNode
from .parser import Parser, parse_filter
from .query import UrlqlQuery, parse_urlql
from .tokens import Token, TokenKind, lex

__version__ = "0.1.0"

__all__ = [
    "parse_urlql",
    "parse_filter",
    "lex",
    "Parser",
    "UrlqlQuery",
    "InsightTracker",
    "Comparison",
    "Logical",
    "PredicateNode",
    "RegexLiteral",
    "Token",
    "TokenKind",
    "UrlqlError",
    "ParseError",
    "LexicalError",
    "QuerySyntaxError",
]
