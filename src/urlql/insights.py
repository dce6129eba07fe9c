"""Per-field operator usage ("insights") collected while parsing.

Callers use insights to check which fields a request filters, sorts or
projects on, and with which operators, without walking the predicate tree.
"""

from typing import Dict, FrozenSet, Iterator, Set

__all__ = ("InsightTracker", "SELECT_TAG", "ORDER_TAG")

# Tags recorded only for control directives
SELECT_TAG = "$select"
ORDER_TAG = "$order"


class InsightTracker:
    """Append-only mapping of field name to the set of tags used on it."""

    def __init__(self) -> None:
        self._fields: Dict[str, Set[str]] = {}

    def record(self, field: str, tag: str) -> None:
        """Add `tag` to the set for `field`, creating the set on first use."""
        self._fields.setdefault(field, set()).add(tag)

    def snapshot(self) -> Dict[str, FrozenSet[str]]:
        """Return a read-only copy of everything recorded so far."""
        return {field: frozenset(tags) for field, tags in self._fields.items()}

    def __contains__(self, field: object) -> bool:
        return field in self._fields

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __repr__(self) -> str:
        body = ", ".join(f"{f!r}: {sorted(t)}" for f, t in self._fields.items())
        return f"<InsightTracker: {{{body}}}>"
