"""Literal value types that have no direct Python counterpart."""

import re
from typing import Pattern

from pydantic import BaseModel, ConfigDict, field_validator

__all__ = ("RegexLiteral",)

_FLAG_MAP = {
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
    "x": re.VERBOSE,
    # Python patterns are unicode-aware by default
    "u": 0,
}


class RegexLiteral(BaseModel):
    """A ``/pattern/flags`` literal kept as an opaque leaf value.

    The pattern is stored verbatim so downstream adapters can hand it to
    their own regex dialect; `compile` is a convenience for Python callers.
    """

    model_config = ConfigDict(frozen=True)

    pattern: str
    flags: str = ""

    @field_validator("flags")
    @classmethod
    def validate_flags(cls, value: str) -> str:
        for letter in value:
            if letter not in _FLAG_MAP:
                raise ValueError(f"Unsupported regex flag {letter!r}, expected one of 'imsux'")
        return value

    @classmethod
    def from_source(cls, text: str) -> "RegexLiteral":
        """Build from token text such as ``/^Jo/i``."""
        close = text.rfind("/")
        return cls(pattern=text[1:close], flags=text[close + 1 :])

    def compile(self) -> Pattern[str]:
        flags = 0
        for letter in self.flags:
            flags |= _FLAG_MAP[letter]
        return re.compile(self.pattern, flags)

    def __str__(self) -> str:
        return f"/{self.pattern}/{self.flags}"
