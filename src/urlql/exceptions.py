"""Custom exceptions for urlql.

This module defines all custom exceptions raised while parsing a query
string, so callers can catch a single base class or react to a specific
failure (lexing, grammar, control directives).
"""

from typing import Any, Dict, Optional


# Base exception
class UrlqlError(Exception):
    """Base exception for all urlql errors.

    Attributes:
        message: Error message
        details: Additional error context as key-value pairs
    """

    def __init__(self, message: str = "", **kwargs: Any) -> None:
        """Initialize exception with message and additional details.

        Args:
            message: Human-readable error message
            **kwargs: Additional context (e.g., offset, token, key)
        """
        self.message = message
        self.details: Dict[str, Any] = kwargs
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the complete error message with details."""
        if not self.details:
            return self.message

        details_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
        if self.message:
            return f"{self.message} ({details_str})"
        return details_str

    def __repr__(self) -> str:
        """Return detailed representation of the exception."""
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


# Parse exceptions
class ParseError(UrlqlError):
    """Raised when filter text cannot be turned into a predicate tree.

    Every parse error points at a character offset in the decoded input.

    Attributes:
        offset: Character offset of the offending token or character
        token: Offending raw text (``None`` at end of input)
    """

    def __init__(self, message: str = "", offset: int = 0, token: Optional[str] = None, **kwargs: Any) -> None:
        self.offset = offset
        self.token = token
        super().__init__(message, offset=offset, token=token, **kwargs)


class LexicalError(ParseError):
    """Raised when no token rule matches at the current position.

    Example:
        >>> raise LexicalError("Unexpected character", offset=4, token="#")
    """


class QuerySyntaxError(ParseError):
    """Raised when the token sequence violates the filter grammar.

    Example:
        >>> raise QuerySyntaxError("Expected word", offset=5, token="=")
    """


# Control exceptions
class ControlError(UrlqlError):
    """Base exception for `$`-prefixed control directive errors."""


class InvalidControlError(ControlError):
    """Raised when a control directive carries a malformed value.

    Example:
        >>> raise InvalidControlError("Expected an integer", key="$limit", value="ten")
    """


class QueryTooLongError(UrlqlError):
    """Raised when the raw query exceeds the configured maximum length.

    Example:
        >>> raise QueryTooLongError("Query string too long", length=9000, limit=4096)
    """
