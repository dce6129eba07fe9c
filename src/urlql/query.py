"""Query string entry point.

`parse_urlql` takes everything after the ``?`` of a URL and returns the
filter tree, the paging/sort/projection controls and the field insights::

    >>> q = parse_urlql("age>=18&status!=DELETED&$select=name,email&$limit=20")
    >>> q.filter
    {'age': {'$gte': 18}, 'status': {'$ne': 'DELETED'}}
    >>> q.controls
    {'$select': {'name': 1, 'email': 1}, '$limit': 20}

Segments are split on ``&`` and percent-decoded one by one. Segments that
start with a ``$keyword`` are controls, except ``$exists=``/``$!exists=``
which belong to the filter. Unknown controls pass through untouched.
"""

import re
from typing import Any, Dict, FrozenSet, List, Optional, Tuple
from urllib.parse import unquote

from pydantic import BaseModel, Field

from .exceptions import InvalidControlError, QueryTooLongError
from .insights import ORDER_TAG, SELECT_TAG, InsightTracker
from .logger import Logger
from .nodes import PredicateNode
from .parser import parse_filter
from .settings import settings
from .types import FilterDict

__all__ = ("UrlqlQuery", "parse_urlql", "split_segments", "apply_controls")

_CONTROL_RE = re.compile(r"\$[A-Za-z0-9_!]+")
_FILTER_KEYWORDS = ("$exists=", "$!exists=")

logger = Logger("query")


class UrlqlQuery(BaseModel):
    """Parsed query string.

    Attributes:
        filter: Filter tree in Mongo-compatible dict form, ``{}`` when absent
        controls: Control directives (``$sort``, ``$limit``, ``$select``, ...)
        insights: Field name to the operator/control tags used on it
        node: Root predicate node, ``None`` when the query has no filter
    """

    filter: FilterDict = Field(default_factory=dict)
    controls: Dict[str, Any] = Field(default_factory=dict)
    insights: Dict[str, FrozenSet[str]] = Field(default_factory=dict)
    node: Optional[Any] = Field(None, exclude=True)


def _is_control(segment: str) -> bool:
    return _CONTROL_RE.match(segment) is not None and not segment.startswith(_FILTER_KEYWORDS)


def split_segments(raw: str) -> Tuple[List[str], List[str]]:
    """Split a raw query into decoded control and filter segments.

    Returns:
        ``(controls, filters)``, each in source order; empty segments dropped
    """
    controls: List[str] = []
    filters: List[str] = []
    for part in raw.split("&"):
        if not part:
            continue
        segment = unquote(part)
        if _is_control(segment):
            controls.append(segment)
        else:
            filters.append(segment)
    return controls, filters


def _field_flags(value: str, positive: int, negative: int) -> Dict[str, int]:
    flags: Dict[str, int] = {}
    for name in value.split(","):
        if not name:
            continue
        if name.startswith("-"):
            flags[name[1:]] = negative
        else:
            flags[name] = positive
    return flags


def _to_int(key: str, value: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise InvalidControlError("Expected an integer value", key=key, value=value) from None


def apply_controls(segments: List[str], insights: InsightTracker) -> Dict[str, Any]:
    """Interpret decoded control segments.

    Projection and sort fields are recorded in `insights` under the
    ``$select`` and ``$order`` tags.

    Raises:
        InvalidControlError: If ``$limit``, ``$top`` or ``$skip`` is not an integer
    """
    controls: Dict[str, Any] = {}
    for segment in segments:
        key, _, value = segment.partition("=")

        if key == "$select":
            fields = _field_flags(value, 1, 0)
            controls.setdefault("$select", {}).update(fields)
            for field in fields:
                insights.record(field, SELECT_TAG)
        elif key == "$order":
            fields = _field_flags(value, 1, -1)
            controls.setdefault("$sort", {}).update(fields)
            for field in fields:
                insights.record(field, ORDER_TAG)
        elif key in ("$limit", "$top"):
            controls["$limit"] = _to_int(key, value)
        elif key == "$skip":
            controls["$skip"] = _to_int(key, value)
        elif key == "$count":
            controls["$count"] = True
        else:
            logger.debug("Passing through control %s", key)
            controls[key] = value
    return controls


def parse_urlql(raw: str) -> UrlqlQuery:
    """Parse a URL query string into filter, controls and insights.

    Args:
        raw: Query string without the leading ``?``

    Returns:
        UrlqlQuery

    Raises:
        QueryTooLongError: If `raw` is longer than ``settings.MAX_QUERY_LENGTH``
        InvalidControlError: If a paging control has a non-integer value
        LexicalError: If the filter text contains an unknown character
        QuerySyntaxError: If the filter text is not a valid expression
    """
    limit = settings.MAX_QUERY_LENGTH
    if limit is not None and len(raw) > limit:
        raise QueryTooLongError("Query string too long", length=len(raw), limit=limit)

    control_parts, filter_parts = split_segments(raw)
    insights = InsightTracker()
    controls = apply_controls(control_parts, insights)

    node: Optional[PredicateNode] = None
    if filter_parts:
        node, _ = parse_filter("&".join(filter_parts), insights=insights)

    logger.message(
        "Parsed query controls=%d filter=%s fields=%d",
        len(controls),
        node.kind if node is not None else "none",
        len(insights),
    )
    return UrlqlQuery(
        filter=node.to_dict() if node is not None else {},
        controls=controls,
        insights=insights.snapshot(),
        node=node,
    )
