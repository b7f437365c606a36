"""Fixtures for compiler tests.

The compiler never evaluates expressions; these helpers do, so tests can
check the truth table of a policy gate against sample event contexts
instead of only comparing rendered strings.
"""

from collections.abc import Callable
from typing import Any

import pytest

from gh_aw.compiler.expressions import (
    BooleanLiteral,
    Conjunction,
    Contains,
    Disjunction,
    Equality,
    ExpressionNode,
    Literal,
    Negation,
    PropertyAccess,
    RawExpression,
)


def _resolve(path: str, context: dict[str, Any]) -> Any:
    value: Any = context
    for segment in path.split("."):
        if not isinstance(value, dict):
            return None
        value = value.get(segment)
    return value


def _value(node: ExpressionNode, context: dict[str, Any]) -> Any:
    if isinstance(node, Literal):
        return node.value
    if isinstance(node, BooleanLiteral):
        return node.value
    if isinstance(node, PropertyAccess):
        return _resolve(node.path, context)
    if isinstance(node, Equality):
        return _value(node.left, context) == _value(node.right, context)
    if isinstance(node, Contains):
        haystack = _value(node.haystack, context)
        needle = _value(node.needle, context)
        if isinstance(haystack, str) and isinstance(needle, str):
            # GitHub Actions compares strings case-insensitively
            return needle.lower() in haystack.lower()
        if isinstance(haystack, list):
            return needle in haystack
        return False
    if isinstance(node, Negation):
        return not _value(node.child, context)
    if isinstance(node, Conjunction):
        return all(_value(term, context) for term in node.terms)
    if isinstance(node, Disjunction):
        return any(_value(term, context) for term in node.terms)
    if isinstance(node, RawExpression):
        raise AssertionError(f"Cannot evaluate raw expression: {node.expression}")
    raise AssertionError(f"Unknown node: {node!r}")


def evaluate_gate(node: ExpressionNode, context: dict[str, Any]) -> bool:
    """Evaluate a gate tree against a context using Actions truthiness."""
    return bool(_value(node, context))


def make_event_context(
    event_name: str,
    action: str | None = None,
    **event: Any,
) -> dict[str, Any]:
    """Build a ``github`` context for an event.

    Example:
        make_event_context("issue_comment", "created", comment={"body": "/triage"})

    """
    payload: dict[str, Any] = dict(event)
    if action is not None:
        payload["action"] = action
    return {"github": {"event_name": event_name, "event": payload}}


@pytest.fixture
def evaluate() -> Callable[[ExpressionNode, dict[str, Any]], bool]:
    """Gate evaluator."""
    return evaluate_gate


@pytest.fixture
def event_context() -> Callable[..., dict[str, Any]]:
    """Factory for ``github`` event contexts."""
    return make_event_context
