"""Lowering of expression nodes to GitHub Actions expression syntax.

This is the single place that produces expression text. Parenthesization
rules:

- AND binds tighter than OR. A disjunction nested in a conjunction (or the
  reverse) is parenthesized to keep the author's grouping.
- Same-kind nesting is left unparenthesized (both operators are associative).
- A single-term junction renders as its term; the unwrapped term decides
  whether parentheses are needed.
- Raw expressions have unknown precedence and are parenthesized whenever
  they are an operand of ``&&``, ``||`` or ``==``.
- Negation always parenthesizes its child.
"""

from typing import assert_never

from gh_aw.compiler.expressions.nodes import (
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

__all__ = ["render", "quote_literal"]

AND_OPERATOR = "&&"
OR_OPERATOR = "||"


def quote_literal(value: str) -> str:
    """Quote a string using the target syntax (single quotes, ``'`` doubled).

    Args:
        value: Unquoted string value.

    Returns:
        Quoted token, e.g. ``'it''s'`` for ``it's``.

    """
    escaped = value.replace("'", "''")
    return f"'{escaped}'"


def _effective(node: ExpressionNode) -> ExpressionNode:
    """Unwrap single-term junctions down to the node that actually renders."""
    while isinstance(node, (Conjunction, Disjunction)) and len(node.terms) == 1:
        node = node.terms[0]
    return node


def _parenthesize(text: str) -> str:
    return f"({text})"


def _render_junction_term(term: ExpressionNode, parent: type) -> str:
    inner = _effective(term)
    text = render(inner)
    if isinstance(inner, RawExpression):
        return _parenthesize(text)
    if isinstance(inner, (Conjunction, Disjunction)) and not isinstance(inner, parent):
        return _parenthesize(text)
    return text


def _render_junction(node: Conjunction | Disjunction, operator: str) -> str:
    if len(node.terms) == 1:
        return render(node.terms[0])
    parent = type(node)
    return f" {operator} ".join(_render_junction_term(term, parent) for term in node.terms)


def _render_equality_operand(operand: ExpressionNode) -> str:
    inner = _effective(operand)
    text = render(inner)
    if isinstance(inner, (Conjunction, Disjunction, RawExpression, Equality)):
        return _parenthesize(text)
    return text


def render(node: ExpressionNode) -> str:
    """Render an expression tree as GitHub Actions expression text.

    Rendering is deterministic: the same tree always yields the same string.

    Args:
        node: Expression tree to render.

    Returns:
        Expression text suitable for an ``if:`` clause.

    """
    if isinstance(node, Literal):
        return quote_literal(node.value)
    if isinstance(node, BooleanLiteral):
        return "true" if node.value else "false"
    if isinstance(node, PropertyAccess):
        return node.path
    if isinstance(node, RawExpression):
        return node.expression.strip()
    if isinstance(node, Equality):
        left = _render_equality_operand(node.left)
        right = _render_equality_operand(node.right)
        return f"{left} == {right}"
    if isinstance(node, Contains):
        return f"contains({render(node.haystack)}, {render(node.needle)})"
    if isinstance(node, Negation):
        return f"!({render(node.child)})"
    if isinstance(node, Conjunction):
        return _render_junction(node, AND_OPERATOR)
    if isinstance(node, Disjunction):
        return _render_junction(node, OR_OPERATOR)
    assert_never(node)
