"""Expression node variants and builders for gating conditions.

Gating conditions are assembled as small immutable trees and lowered to
GitHub Actions expression syntax by :func:`gh_aw.compiler.expressions.render.render`.
The node set is closed:

- Literal: quoted string constant
- BooleanLiteral: ``true`` / ``false``
- PropertyAccess: dotted context path (``github.event.issue.body``)
- Equality: ``left == right``
- Contains: ``contains(haystack, needle)``
- Negation: ``!(child)``
- Conjunction / Disjunction: AND / OR over one or more terms
- RawExpression: already-rendered text treated as an opaque atom

Every variant validates itself on construction. Misuse (an empty term list,
a malformed path) raises ExpressionError immediately instead of producing a
gate that renders as a vacuous truth value.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Union

from gh_aw.core.exceptions import ExpressionError

__all__ = [
    "ExpressionNode",
    "Literal",
    "BooleanLiteral",
    "PropertyAccess",
    "Equality",
    "Contains",
    "Negation",
    "Conjunction",
    "Disjunction",
    "RawExpression",
    "ALWAYS_CONDITION",
    "literal",
    "boolean_literal",
    "property_access",
    "raw",
    "equals",
    "contains",
    "negate",
    "conjunction_of",
    "disjunction_of",
    "event_type_equals",
    "action_equals",
    "label_contains",
    "always",
    "is_always",
]

# Sentinel base condition: the job may run in any context
ALWAYS_CONDITION = "always()"

# Context paths: identifier segments (hyphens allowed, e.g. step ids) or
# "*" wildcards for object filters (github.event.issue.labels.*.name)
_SEGMENT = r"[A-Za-z_][A-Za-z0-9_-]*"
PROPERTY_PATH_PATTERN = re.compile(rf"^{_SEGMENT}(?:\.(?:{_SEGMENT}|\*))*$")

_WRAPPED_ALWAYS_PATTERN = re.compile(r"^\$\{\{\s*always\(\)\s*\}\}$")


def _require_node(value: object, owner: str, field_name: str) -> None:
    if not isinstance(value, _NODE_TYPES):
        raise ExpressionError(
            f"{owner}.{field_name} must be an expression node, got {type(value).__name__}\n"
            f"  Suggestion: Wrap raw strings with literal(), property_access() or raw()",
            node_type=owner,
        )


@dataclass(frozen=True)
class Literal:
    """Quoted string constant."""

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            raise ExpressionError(
                f"Literal value must be a string, got {type(self.value).__name__}",
                node_type="Literal",
            )


@dataclass(frozen=True)
class BooleanLiteral:
    """Boolean constant, rendered as ``true`` or ``false``."""

    value: bool

    def __post_init__(self) -> None:
        if not isinstance(self.value, bool):
            raise ExpressionError(
                f"BooleanLiteral value must be a bool, got {type(self.value).__name__}",
                node_type="BooleanLiteral",
            )


@dataclass(frozen=True)
class PropertyAccess:
    """Dotted access into the runtime event context.

    Attributes:
        path: Context path such as ``github.event.issue.body``.

    """

    path: str

    def __post_init__(self) -> None:
        if not isinstance(self.path, str) or not PROPERTY_PATH_PATTERN.match(self.path):
            raise ExpressionError(
                f"Malformed property path: {self.path!r}\n"
                f"  Expected dot-separated identifiers, e.g. 'github.event.issue.body'\n"
                f"  Suggestion: Remove empty segments, whitespace and trailing dots",
                node_type="PropertyAccess",
            )


@dataclass(frozen=True)
class Equality:
    """``left == right``."""

    left: ExpressionNode
    right: ExpressionNode

    def __post_init__(self) -> None:
        _require_node(self.left, "Equality", "left")
        _require_node(self.right, "Equality", "right")


@dataclass(frozen=True)
class Contains:
    """Substring/membership test rendered as ``contains(haystack, needle)``."""

    haystack: ExpressionNode
    needle: ExpressionNode

    def __post_init__(self) -> None:
        _require_node(self.haystack, "Contains", "haystack")
        _require_node(self.needle, "Contains", "needle")


@dataclass(frozen=True)
class Negation:
    """Boolean NOT of a single child."""

    child: ExpressionNode

    def __post_init__(self) -> None:
        _require_node(self.child, "Negation", "child")


def _validate_terms(node: Conjunction | Disjunction) -> None:
    owner = type(node).__name__
    terms = tuple(node.terms)
    if not terms:
        raise ExpressionError(
            f"{owner} requires at least one term\n"
            f"  An empty {owner.lower()} has no safe rendering\n"
            f"  Suggestion: Check that the policy builder received its inputs",
            node_type=owner,
        )
    for term in terms:
        _require_node(term, owner, "terms")
    # frozen dataclass: normalize list input to an immutable tuple
    object.__setattr__(node, "terms", terms)


@dataclass(frozen=True)
class Conjunction:
    """AND of all terms, evaluated left to right."""

    terms: tuple[ExpressionNode, ...]

    def __post_init__(self) -> None:
        _validate_terms(self)


@dataclass(frozen=True)
class Disjunction:
    """OR of all terms, evaluated left to right."""

    terms: tuple[ExpressionNode, ...]

    def __post_init__(self) -> None:
        _validate_terms(self)


@dataclass(frozen=True)
class RawExpression:
    """Already-rendered expression text.

    Used for conditions that originate outside the node domain (user-authored
    ``if:`` values, base conditions, previously merged gates). The renderer
    treats it as an atom of unknown precedence and parenthesizes it whenever
    it appears as an operand.
    """

    expression: str

    def __post_init__(self) -> None:
        if not isinstance(self.expression, str) or not self.expression.strip():
            raise ExpressionError(
                "Raw expression must be a non-empty string\n"
                "  Suggestion: Skip the contribution instead of passing an empty condition",
                node_type="RawExpression",
            )


ExpressionNode = Union[
    Literal,
    BooleanLiteral,
    PropertyAccess,
    Equality,
    Contains,
    Negation,
    Conjunction,
    Disjunction,
    RawExpression,
]

_NODE_TYPES = (
    Literal,
    BooleanLiteral,
    PropertyAccess,
    Equality,
    Contains,
    Negation,
    Conjunction,
    Disjunction,
    RawExpression,
)


# =============================================================================
# Builders
# =============================================================================


def literal(value: str) -> Literal:
    """Build a quoted string literal."""
    return Literal(value)


def boolean_literal(value: bool) -> BooleanLiteral:
    """Build a boolean literal."""
    return BooleanLiteral(value)


def property_access(path: str) -> PropertyAccess:
    """Build a context path reference such as ``github.event_name``."""
    return PropertyAccess(path)


def raw(expression: str) -> RawExpression:
    """Wrap pre-rendered expression text, stripped of surrounding whitespace."""
    if isinstance(expression, str):
        expression = expression.strip()
    return RawExpression(expression)


def equals(left: ExpressionNode, right: ExpressionNode) -> Equality:
    """Build ``left == right``."""
    return Equality(left, right)


def contains(haystack: ExpressionNode, needle: ExpressionNode) -> Contains:
    """Build ``contains(haystack, needle)``."""
    return Contains(haystack, needle)


def negate(node: ExpressionNode) -> Negation:
    """Build ``!(node)``."""
    return Negation(node)


def conjunction_of(*nodes: ExpressionNode) -> Conjunction:
    """AND the given nodes, in order.

    Raises:
        ExpressionError: If no nodes are given.

    """
    return Conjunction(nodes)


def disjunction_of(*nodes: ExpressionNode) -> Disjunction:
    """OR the given nodes, in order.

    Raises:
        ExpressionError: If no nodes are given.

    """
    return Disjunction(nodes)


def event_type_equals(event_name: str) -> Equality:
    """Build ``github.event_name == '<event_name>'``."""
    return equals(property_access("github.event_name"), literal(event_name))


def action_equals(action: str) -> Equality:
    """Build ``github.event.action == '<action>'``."""
    return equals(property_access("github.event.action"), literal(action))


def label_contains(label_name: str) -> Contains:
    """Build ``contains(github.event.label.name, '<label_name>')``.

    Raises:
        ExpressionError: If the label name is blank; ``contains(x, '')``
            matches every label.

    """
    if not isinstance(label_name, str) or not label_name.strip():
        raise ExpressionError(
            f"Label name must be non-empty, got {label_name!r}\n"
            f"  Suggestion: Remove blank entries from on.issues.names / on.pull_request.names",
            node_type="Contains",
        )
    return contains(property_access("github.event.label.name"), literal(label_name))



def always() -> RawExpression:
    """Build the always-true sentinel base condition."""
    return RawExpression(ALWAYS_CONDITION)


def is_always(node: ExpressionNode | str) -> bool:
    """Check whether a node or raw condition string is the always sentinel.

    Accepts both ``always()`` and the wrapped ``${{ always() }}`` form.
    """
    if isinstance(node, RawExpression):
        text = node.expression
    elif isinstance(node, str):
        text = node
    else:
        return False
    text = text.strip()
    return text == ALWAYS_CONDITION or bool(_WRAPPED_ALWAYS_PATTERN.match(text))
