"""Type aliases for urlql package.

This module provides reusable type definitions for values that appear in a
parsed filter tree.
"""

from typing import Any, Dict, List, Union

from .literals import RegexLiteral

# Leaf values produced by the parser
LiteralValue = Union[str, int, float, bool, None, RegexLiteral]

# Field value in a comparison: bare literal (implicit $eq) or operator mapping
FieldValue = Union[LiteralValue, Dict[str, Union[LiteralValue, List[LiteralValue]]]]

# Mongo-compatible dict rendering of a predicate tree
FilterDict = Dict[str, Any]
