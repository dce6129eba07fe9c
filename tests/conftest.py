"""Pytest configuration and fixtures for urlql tests."""

from typing import Any, Dict, List

import pytest
from dotenv import load_dotenv

import urlql.logger as logger_module
from urlql.insights import InsightTracker
from urlql.literals import RegexLiteral

# Load environment variables
load_dotenv()


@pytest.fixture(autouse=True)
def _quiet_logging_setup(monkeypatch):
    """Keep tests from installing a root handler through basicConfig."""
    monkeypatch.setattr(logger_module, "_configured", True)


@pytest.fixture
def tracker():
    """Empty insight tracker."""
    return InsightTracker()


@pytest.fixture(scope="session")
def kitchen_sink_query():
    """Query string exercising every operator and control."""
    return (
        "$select=firstName,-client.ssn"
        "&$order=-createdAt,score"
        "&$limit=50&$skip=10"
        "&$count"
        "&$exists=client.phone"
        "&$!exists=deletedAt"
        "&client.age>=18&client.age<=30"
        "&status!=DELETED"
        "&name~=/^Jo/i"
        "&role{Admin,Editor}"
        "&category!{obsolete,temp}"
        "&25<height<35"
        "^score>550"
        "&price>50&price<100"
        "&$!exists=deletedFrom"
    )


@pytest.fixture(scope="session")
def sample_records() -> List[Dict[str, Any]]:
    """Records used to check that parsed filters select what they say."""
    return [
        {"id": 1, "name": "John", "age": 17, "role": "Admin", "status": "ACTIVE", "score": 91},
        {"id": 2, "name": "Jane", "age": 24, "role": "Editor", "status": "DELETED", "score": 85},
        {"id": 3, "name": "Joan", "age": 31, "role": "Viewer", "status": "ACTIVE", "score": 78, "phone": "555"},
        {"id": 4, "name": "Mark", "age": 45, "role": "Admin", "status": "ACTIVE", "score": 88},
        {"id": 5, "name": "Anna", "age": 29, "role": "Viewer", "status": "VIP", "score": 92, "phone": None},
    ]


def _resolve(record: Dict[str, Any], key: str) -> Any:
    val: Any = record
    for part in key.split("."):
        if isinstance(val, dict):
            val = val.get(part)
        else:
            return None
    return val


def _eval_condition(record: Dict[str, Any], key: str, cond: Dict[str, Any]) -> bool:
    val = _resolve(record, key)
    for op, expected in cond.items():
        if op == "$eq" and val != expected:
            return False
        if op == "$ne" and val == expected:
            return False
        if op == "$gt" and not (val is not None and val > expected):
            return False
        if op == "$gte" and not (val is not None and val >= expected):
            return False
        if op == "$lt" and not (val is not None and val < expected):
            return False
        if op == "$lte" and not (val is not None and val <= expected):
            return False
        if op == "$in" and val not in expected:
            return False
        if op == "$nin" and val in expected:
            return False
        if op == "$exists" and (key in record) != expected:
            return False
        if op == "$regex":
            pattern = expected.compile() if isinstance(expected, RegexLiteral) else expected
            if not isinstance(val, str) or not pattern.search(val):
                return False
    return True


def evaluate(where: Dict[str, Any], record: Dict[str, Any]) -> bool:
    """In-memory evaluation of a Mongo-style filter dict."""
    if "$and" in where:
        return all(evaluate(x, record) for x in where["$and"])
    if "$or" in where:
        return any(evaluate(x, record) for x in where["$or"])
    return all(
        _eval_condition(record, k, v if isinstance(v, dict) else {"$eq": v}) for k, v in where.items()
    )


@pytest.fixture
def select(sample_records):
    """Return ids of sample records matched by a filter dict."""

    def _select(where: Dict[str, Any]) -> List[int]:
        return [r["id"] for r in sample_records if evaluate(where, r)]

    return _select
