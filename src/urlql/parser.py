"""Recursive-descent parser for urlql filter expressions.

Grammar (``&`` binds tighter than ``^``)::

    expression  := disjunction
    disjunction := conjunction ( "^" conjunction )*
    conjunction := term ( "&" term )*
    term        := "(" disjunction ")"
                 | literal ("<"|"<=") field ("<"|"<=") literal     # between
                 | ("$exists"|"$!exists") "=" field ("," field)*
                 | field ["!"] "{" literal ("," literal)* "}"      # in / nin
                 | field operator literal

A leading literal is legal only as the lower bound of a between clause.
The parser looks two tokens ahead to decide; otherwise it rewinds and
parses a plain comparison, which then rejects the literal.
"""

from typing import Any, Dict, List, Optional, Sequence, Tuple

from .exceptions import QuerySyntaxError
from .insights import InsightTracker
from .literals import RegexLiteral
from .logger import Logger
from .merge import merge_conjunction
from .nodes import Comparison, Logical, PredicateNode
from .settings import settings
from .tokens import Token, TokenKind, lex

__all__ = ("Parser", "parse_filter", "OPERATOR_MAP")

OPERATOR_MAP: Dict[TokenKind, str] = {
    TokenKind.OP_EQ: "$eq",
    TokenKind.OP_NE: "$ne",
    TokenKind.OP_GT: "$gt",
    TokenKind.OP_GTE: "$gte",
    TokenKind.OP_LT: "$lt",
    TokenKind.OP_LTE: "$lte",
    TokenKind.OP_REGEX: "$regex",
}

_BETWEEN_OPS = (TokenKind.OP_LT, TokenKind.OP_LTE)
_BETWEEN_BOUNDS = (TokenKind.NUMBER, TokenKind.STRING, TokenKind.TEXT)
_EXISTS_KEYWORDS = {"$exists": True, "$!exists": False}

logger = Logger("Parser")


class Parser:
    """Cursor over a token list producing a predicate tree.

    Every recognized field/operator pair is recorded in `insights`. A parser
    instance handles one expression; create a new one per input.

    Args:
        tokens: Output of `lex`
        insights: Tracker to record into; a fresh one is created if omitted
        source: The text `tokens` came from, used for end-of-input offsets
        max_depth: Deepest allowed group, defaults to ``settings.MAX_NESTING_DEPTH``
    """

    def __init__(
        self,
        tokens: Sequence[Token],
        insights: Optional[InsightTracker] = None,
        source: Optional[str] = None,
        max_depth: Optional[int] = None,
    ) -> None:
        self.tokens = list(tokens)
        self.insights = insights if insights is not None else InsightTracker()
        self.pos = 0
        self.depth = 0
        self.max_depth = max_depth if max_depth is not None else settings.MAX_NESTING_DEPTH
        if source is not None:
            self._eof_offset = len(source)
        elif self.tokens:
            self._eof_offset = self.tokens[-1].end
        else:
            self._eof_offset = 0

    # -------------------
    # Cursor helpers
    # -------------------

    def peek(self, ahead: int = 0) -> Optional[Token]:
        index = self.pos + ahead
        if index < len(self.tokens):
            return self.tokens[index]
        return None

    def peek_kind(self, ahead: int = 0) -> Optional[TokenKind]:
        tok = self.peek(ahead)
        return tok.kind if tok is not None else None

    def consume(self, kind: Optional[TokenKind] = None) -> Token:
        tok = self.peek()
        if tok is None:
            expected = f", expected {kind.value}" if kind is not None else ""
            raise QuerySyntaxError(f"Unexpected end of input{expected}", offset=self._eof_offset)
        if kind is not None and tok.kind is not kind:
            raise QuerySyntaxError(
                f"Expected {kind.value}, got {tok.text!r}",
                offset=tok.offset,
                token=tok.text,
            )
        self.pos += 1
        return tok

    def match(self, kind: TokenKind) -> bool:
        if self.peek_kind() is kind:
            self.pos += 1
            return True
        return False

    def expect_eof(self) -> None:
        tok = self.peek()
        if tok is not None:
            raise QuerySyntaxError(
                f"Unexpected token {tok.text!r}, end of input expected",
                offset=tok.offset,
                token=tok.text,
            )

    # -------------------
    # Grammar
    # -------------------

    def parse_expression(self) -> PredicateNode:
        return self.parse_disjunction()

    def parse_disjunction(self) -> PredicateNode:
        nodes = [self.parse_conjunction()]
        while self.match(TokenKind.OR):
            nodes.append(self.parse_conjunction())
        if len(nodes) == 1:
            return nodes[0]
        return Logical("$or", nodes)

    def parse_conjunction(self) -> PredicateNode:
        nodes = [self.parse_term()]
        while self.match(TokenKind.AND):
            nodes.append(self.parse_term())
        return merge_conjunction(nodes)

    def parse_term(self) -> PredicateNode:
        lparen = self.peek()
        if self.match(TokenKind.LPAREN):
            self.depth += 1
            if self.depth > self.max_depth:
                raise QuerySyntaxError(
                    "Nesting too deep",
                    offset=lparen.offset,
                    token=lparen.text,
                    limit=self.max_depth,
                )
            inside = self.parse_disjunction()
            self.consume(TokenKind.RPAREN)
            self.depth -= 1
            return inside

        if self.peek_kind() in _BETWEEN_BOUNDS:
            node = self._parse_between()
            if node is not None:
                return node

        tok = self.peek()
        if tok is not None and tok.kind is TokenKind.KEYWORD and tok.text in _EXISTS_KEYWORDS:
            return self._parse_exists()

        if self.peek_kind() is TokenKind.WORD and (
            self.peek_kind(1) is TokenKind.LBRACE
            or (self.peek_kind(1) is TokenKind.BANG and self.peek_kind(2) is TokenKind.LBRACE)
        ):
            return self._parse_membership()

        return self._parse_comparison()

    def _parse_between(self) -> Optional[Comparison]:
        start = self.pos
        lower = self.parse_literal()
        if self.peek_kind() not in _BETWEEN_OPS:
            self.pos = start
            return None
        lower_op = "$gt" if self.consume().kind is TokenKind.OP_LT else "$gte"
        field = self.consume(TokenKind.WORD).text
        upper_tok = self.consume()
        if upper_tok.kind not in _BETWEEN_OPS:
            raise QuerySyntaxError(
                f"Invalid between syntax, expected '<' or '<=', got {upper_tok.text!r}",
                offset=upper_tok.offset,
                token=upper_tok.text,
            )
        upper_op = "$lt" if upper_tok.kind is TokenKind.OP_LT else "$lte"
        upper = self.parse_literal()
        self.insights.record(field, lower_op)
        self.insights.record(field, upper_op)
        return Comparison({field: {lower_op: lower, upper_op: upper}})

    def _parse_exists(self) -> Comparison:
        positive = _EXISTS_KEYWORDS[self.consume(TokenKind.KEYWORD).text]
        self.consume(TokenKind.OP_EQ)
        fields = [self.consume(TokenKind.WORD).text]
        while self.match(TokenKind.COMMA):
            fields.append(self.consume(TokenKind.WORD).text)
        for field in fields:
            self.insights.record(field, "$exists")
        return Comparison({field: {"$exists": positive} for field in fields})

    def _parse_membership(self) -> Comparison:
        field = self.consume(TokenKind.WORD).text
        op = "$nin" if self.match(TokenKind.BANG) else "$in"
        self.consume(TokenKind.LBRACE)
        values = [self.parse_literal()]
        while self.match(TokenKind.COMMA):
            values.append(self.parse_literal())
        self.consume(TokenKind.RBRACE)
        self.insights.record(field, op)
        return Comparison({field: {op: values}})

    def _parse_comparison(self) -> Comparison:
        field = self.consume(TokenKind.WORD).text
        op_tok = self.consume()
        op = OPERATOR_MAP.get(op_tok.kind)
        if op is None:
            raise QuerySyntaxError(
                f"Unsupported operator {op_tok.text!r}",
                offset=op_tok.offset,
                token=op_tok.text,
            )
        value = self.parse_literal()
        self.insights.record(field, op)
        if op == "$eq":
            return Comparison({field: value})
        return Comparison({field: {op: value}})

    def parse_literal(self) -> Any:
        tok = self.consume()
        if tok.kind is TokenKind.NUMBER:
            return float(tok.text) if "." in tok.text else int(tok.text)
        if tok.kind is TokenKind.BOOLEAN:
            return tok.text == "true"
        if tok.kind is TokenKind.NULL:
            return None
        if tok.kind is TokenKind.REGEX:
            return RegexLiteral.from_source(tok.text)
        if tok.kind is TokenKind.STRING:
            return tok.text[1:-1]
        if tok.kind is TokenKind.TEXT:
            return tok.text.rstrip()
        if tok.kind is TokenKind.WORD:
            return tok.text
        raise QuerySyntaxError(f"Unexpected literal {tok.text!r}", offset=tok.offset, token=tok.text)


def parse_filter(text: str, insights: Optional[InsightTracker] = None) -> Tuple[PredicateNode, InsightTracker]:
    """Parse decoded filter text into a predicate tree.

    Args:
        text: Decoded filter expression, control directives removed
        insights: Tracker to extend, e.g. one already holding control insights

    Returns:
        ``(root, insights)``

    Raises:
        LexicalError: If the text contains a character no token rule accepts
        QuerySyntaxError: If the tokens do not form a complete expression
    """
    tokens: List[Token] = lex(text)
    parser = Parser(tokens, insights=insights, source=text)
    root = parser.parse_expression()
    parser.expect_eof()
    logger.debug("Parsed %d tokens into %s node", len(tokens), root.kind)
    return root, parser.insights
