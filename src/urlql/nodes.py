"""Predicate tree nodes.

A parsed filter is a tree built from exactly two node kinds:

- `Comparison`: a mapping of field name to either a bare literal (implicit
  equality) or a dict of operator tags (``$gt``, ``$in``, ...) to values.
- `Logical`: an ordered list of child nodes joined by ``$and`` or ``$or``.

Both kinds render to the Mongo-compatible dict form through `to_dict`, e.g.
``{"$or": [{"age": {"$gt": 25}}, {"status": "VIP"}]}``.
"""

from __future__ import annotations

from copy import deepcopy
from typing import Any, Dict, Iterable, List, Literal, Optional, Union

from .types import FieldValue, FilterDict

__all__ = (
    "Comparison",
    "Logical",
    "PredicateNode",
    "Connector",
    "ops_of",
    "is_operator_map",
)

Connector = Literal["$and", "$or"]


def is_operator_map(value: Any) -> bool:
    """Return True when a field value is an operator mapping, not a bare literal."""
    return isinstance(value, dict)


def ops_of(value: Any) -> List[str]:
    """Operator tags carried by a field value; a bare literal counts as ``$eq``."""
    if is_operator_map(value):
        return list(value)
    return ["$eq"]


class Comparison:
    """Leaf node constraining one or more fields.

    Field values are either a bare literal or an operator mapping such as
    ``{"$gte": 18, "$lte": 30}``. A comparison never holds ``$and``/``$or``.
    """

    kind = "comparison"

    def __init__(self, fields: Optional[Dict[str, FieldValue]] = None):
        self.fields: Dict[str, FieldValue] = dict(fields or {})

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Comparison) and self.fields == other.fields

    def __bool__(self) -> bool:
        return bool(self.fields)

    def __repr__(self) -> str:
        return f"<Comparison: {self.to_dict()}>"

    def to_dict(self) -> FilterDict:
        return deepcopy(self.fields)


class Logical:
    """Conjunction (``$and``) or disjunction (``$or``) of child nodes."""

    kind = "logical"

    def __init__(self, connector: Connector, children: Iterable["PredicateNode"]):
        if connector not in ("$and", "$or"):
            raise ValueError(f"Unsupported connector: {connector}")
        self.connector: Connector = connector
        self.children: List[PredicateNode] = list(children)
        if not self.children:
            raise ValueError(f"{connector} node requires at least one child")

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, Logical)
            and self.connector == other.connector
            and self.children == other.children
        )

    def __repr__(self) -> str:
        return f"<Logical: {self.to_dict()}>"

    def to_dict(self) -> FilterDict:
        return {self.connector: [child.to_dict() for child in self.children]}


PredicateNode = Union[Comparison, Logical]
