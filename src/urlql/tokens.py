"""Tokenizer for urlql filter expressions.

The lexer walks the decoded text left to right. At each position it tries
the rules in `TOKEN_RULES` in order and takes the first one that matches
right there; the match is never searched for further ahead. Rule order is
part of the language:

- literals before identifiers (so ``25`` is a number, ``007`` is a word)
- multi-char operators (``!=``, ``>=``, ``<=``, ``~=``) before single-char ones
- ``$keywords`` before bare words
- unquoted text with inner spaces or ``+`` before bare words

Whitespace is matched but never emitted.
"""

import re
from enum import Enum
from typing import List, Pattern, Tuple

from pydantic import BaseModel, ConfigDict

from .exceptions import LexicalError

__all__ = ("TokenKind", "Token", "TOKEN_RULES", "lex")


class TokenKind(str, Enum):
    # literals
    REGEX = "regex"
    STRING = "string"
    TEXT = "text"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NULL = "null"
    # operators
    OP_NE = "op-ne"
    OP_GTE = "op-gte"
    OP_LTE = "op-lte"
    OP_REGEX = "op-regex"
    OP_EQ = "op-eq"
    OP_GT = "op-gt"
    OP_LT = "op-lt"
    # punctuation
    OR = "or"
    AND = "and"
    LPAREN = "lparen"
    RPAREN = "rparen"
    LBRACE = "lbrace"
    RBRACE = "rbrace"
    COMMA = "comma"
    BANG = "bang"
    # identifiers
    KEYWORD = "keyword"
    WORD = "word"
    WS = "ws"


class Token(BaseModel):
    """A single lexed token.

    Attributes:
        kind: Token kind
        text: Exact source text of the token
        offset: Character offset of the token in the input
    """

    model_config = ConfigDict(frozen=True)

    kind: TokenKind
    text: str
    offset: int

    @property
    def end(self) -> int:
        return self.offset + len(self.text)


TOKEN_RULES: Tuple[Tuple[Pattern[str], TokenKind], ...] = (
    # regex literal  /pattern/flags
    (re.compile(r"/(?:\\.|[^\\/])*/[imsux]*"), TokenKind.REGEX),
    # single-quoted string  'any text'
    (re.compile(r"'(?:\\.|[^'\\])*'"), TokenKind.STRING),
    # -12.34  0  42  but not 007, 00, -01
    (re.compile(r"-?(?:0(?!\d)|[1-9]\d*)(?:\.\d+)?(?!\d)"), TokenKind.NUMBER),
    (re.compile(r"true|false"), TokenKind.BOOLEAN),
    (re.compile(r"null"), TokenKind.NULL),
    (re.compile(r"!="), TokenKind.OP_NE),
    (re.compile(r">="), TokenKind.OP_GTE),
    (re.compile(r"<="), TokenKind.OP_LTE),
    (re.compile(r"~="), TokenKind.OP_REGEX),
    (re.compile(r"="), TokenKind.OP_EQ),
    (re.compile(r">"), TokenKind.OP_GT),
    (re.compile(r"<"), TokenKind.OP_LT),
    (re.compile(r"\^"), TokenKind.OR),
    (re.compile(r"&"), TokenKind.AND),
    (re.compile(r"\("), TokenKind.LPAREN),
    (re.compile(r"\)"), TokenKind.RPAREN),
    (re.compile(r"\{"), TokenKind.LBRACE),
    (re.compile(r"\}"), TokenKind.RBRACE),
    (re.compile(r","), TokenKind.COMMA),
    # nin list  !{...}
    (re.compile(r"!"), TokenKind.BANG),
    # $keyword, including $!exists
    (re.compile(r"\$!?[A-Za-z0-9_]+"), TokenKind.KEYWORD),
    # unquoted text with inner whitespace or plus signs
    (re.compile(r"(?:[^&^)\s=><!]+(?:\s|\+)+[^&^)=><!]*)+"), TokenKind.TEXT),
    # field / bare word, dots allowed for nested paths
    (re.compile(r"[A-Za-z0-9_.]+"), TokenKind.WORD),
    (re.compile(r"\s+"), TokenKind.WS),
)


def lex(text: str) -> List[Token]:
    """Split decoded filter text into tokens.

    Args:
        text: Decoded filter expression

    Returns:
        Tokens in source order, whitespace excluded

    Raises:
        LexicalError: If no rule matches at some position
    """
    tokens: List[Token] = []
    pos = 0
    while pos < len(text):
        for pattern, kind in TOKEN_RULES:
            m = pattern.match(text, pos)
            if m is None or not m.group(0):
                continue
            if kind is not TokenKind.WS:
                tokens.append(Token(kind=kind, text=m.group(0), offset=pos))
            pos = m.end()
            break
        else:
            raise LexicalError(f"Unexpected character {text[pos]!r}", offset=pos, token=text[pos])
    return tokens
