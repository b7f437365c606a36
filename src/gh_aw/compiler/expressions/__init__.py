"""Gating condition expression language.

Usage:
    from gh_aw.compiler.expressions import (
        disjunction_of,
        event_type_equals,
        merge_conditions,
        render,
    )

    gate = render(disjunction_of(event_type_equals("issues"), event_type_equals("push")))
    gate = merge_conditions(existing_gate, gate)
"""

from gh_aw.compiler.expressions.merge import (
    compose_command_condition,
    has_expression_markers,
    merge_conditions,
    strip_expression_wrapper,
)
from gh_aw.compiler.expressions.nodes import (
    ALWAYS_CONDITION,
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
    action_equals,
    always,
    boolean_literal,
    conjunction_of,
    contains,
    disjunction_of,
    equals,
    event_type_equals,
    is_always,
    label_contains,
    literal,
    negate,
    property_access,
    raw,
)
from gh_aw.compiler.expressions.render import quote_literal, render

__all__ = [
    # Nodes
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
    # Builders
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
    # Rendering and merging
    "render",
    "quote_literal",
    "merge_conditions",
    "compose_command_condition",
    "strip_expression_wrapper",
    "has_expression_markers",
]
