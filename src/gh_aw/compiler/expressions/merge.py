"""Condition merging and command/base composition.

A job's gate is built incrementally: each policy renders its own condition
and folds it into the gate established so far. Already-rendered strings are
re-entered into the node domain as RawExpression atoms, so the renderer owns
all parenthesization.
"""

import logging
import re

from gh_aw.compiler.expressions.nodes import (
    ExpressionNode,
    conjunction_of,
    is_always,
    raw,
)
from gh_aw.compiler.expressions.render import render

logger = logging.getLogger(__name__)

__all__ = [
    "merge_conditions",
    "compose_command_condition",
    "strip_expression_wrapper",
    "has_expression_markers",
]

EXPRESSION_OPEN = "${{"
EXPRESSION_CLOSE = "}}"

_WRAPPER_PATTERN = re.compile(r"^\$\{\{(.*)\}\}$", re.DOTALL)


def has_expression_markers(text: str) -> bool:
    """True if ``text`` still contains ``${{`` or ``}}``."""
    return EXPRESSION_OPEN in text or EXPRESSION_CLOSE in text


def strip_expression_wrapper(condition: str) -> str:
    """Normalize a user-authored condition.

    Strips surrounding whitespace and a single enclosing ``${{ ... }}``, which
    GitHub Actions accepts but which cannot be nested inside a larger
    expression. Text made of several ``${{ }}`` segments is returned
    unchanged (only trimmed); callers reject it with has_expression_markers().

    Args:
        condition: Raw ``if:`` value from frontmatter.

    Returns:
        Bare expression text, or empty string for a blank condition.

    """
    text = condition.strip()
    match = _WRAPPER_PATTERN.match(text)
    if match and not has_expression_markers(match.group(1)):
        text = match.group(1).strip()
    return text


def merge_conditions(existing: str, new: str) -> str:
    """Fold a new condition into an existing gate with AND.

    Args:
        existing: Gate established so far; empty means unconditional.
        new: Newly rendered condition to add.

    Returns:
        ``new`` when ``existing`` is empty, ``existing`` when ``new`` is empty,
        otherwise ``(existing) && (new)``.

    """
    existing = existing.strip()
    new = new.strip()
    if not existing:
        return new
    if not new:
        return existing
    merged = render(conjunction_of(raw(existing), raw(new)))
    logger.debug("Merged gating condition: %s", merged)
    return merged


def compose_command_condition(
    command_condition: ExpressionNode | None,
    base_condition: ExpressionNode | str,
) -> str:
    """Compose the gate of an output-producing job.

    Args:
        command_condition: Command-mention condition, or None when the
            workflow is not command-triggered.
        base_condition: Required execution context of the job, as a node or
            a raw condition string. ``always()`` means unrestricted.

    Returns:
        The base condition alone without a command; the command condition
        alone when the base is ``always()``; otherwise both as parenthesized
        clauses joined with ``&&``.

    """
    base = raw(base_condition) if isinstance(base_condition, str) else base_condition
    if command_condition is None:
        return render(base)
    if is_always(base):
        return render(command_condition)
    return render(conjunction_of(raw(render(command_condition)), raw(render(base))))
