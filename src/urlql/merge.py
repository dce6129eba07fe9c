"""Conjunction flattening.

Sibling terms joined by ``&`` are folded into as few comparison objects as
possible. Two constraints on the same field share one object only when they
use different operators (``age>=18&age<=30``); a repeated operator on a field
starts a new object so neither constraint is overwritten.
"""

from typing import Any, Dict, List, Sequence

from .nodes import Comparison, Logical, PredicateNode, is_operator_map, ops_of

__all__ = ("merge_conjunction",)


def _operator_map(value: Any) -> Dict[str, Any]:
    if is_operator_map(value):
        return dict(value)
    return {"$eq": value}


def merge_conjunction(nodes: Sequence[PredicateNode]) -> PredicateNode:
    """Fold the terms of one conjunction into a single node.

    Logical children are kept as-is, in order of appearance. Comparison
    children accumulate into one object until a field operator repeats; the
    object is then flushed and a fresh one begins with the conflicting field.

    Args:
        nodes: Terms of the conjunction, in source order

    Returns:
        The only resulting node, or an ``$and`` node wrapping all of them

    Raises:
        ValueError: If `nodes` is empty
    """
    merged: List[PredicateNode] = []
    current: Dict[str, Any] = {}

    for node in nodes:
        if isinstance(node, Logical):
            merged.append(node)
            continue
        for field, value in node.fields.items():
            if field not in current:
                current[field] = value
                continue
            existing = current[field]
            if set(ops_of(existing)) & set(ops_of(value)):
                merged.append(Comparison(current))
                current = {field: value}
            else:
                combined = _operator_map(existing)
                combined.update(_operator_map(value))
                current[field] = combined

    if current:
        merged.append(Comparison(current))

    if not merged:
        raise ValueError("Cannot merge an empty conjunction")
    if len(merged) == 1:
        return merged[0]
    return Logical("$and", merged)
