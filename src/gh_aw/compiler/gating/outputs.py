"""Base conditions for output-producing jobs.

Each output job (post a comment, update an issue, push to a branch, ...) has a
minimal execution context it needs, independent of command gating. A
``target`` of ``*`` or an explicit issue/PR number removes the need for a
triggering issue or pull request.
"""

from enum import StrEnum

from gh_aw.compiler.expressions.nodes import (
    ExpressionNode,
    always,
    disjunction_of,
    property_access,
)

__all__ = [
    "OutputKind",
    "ANY_TARGET",
    "build_base_condition",
]

ANY_TARGET = "*"


class OutputKind(StrEnum):
    """Output-producing job kinds, valued by their job name."""

    CREATE_ISSUE = "create_issue"
    ADD_ISSUE_COMMENT = "create_issue_comment"
    CREATE_PULL_REQUEST = "create_pull_request"
    ADD_LABELS = "add_labels"
    UPDATE_ISSUE = "update_issue"
    PUSH_TO_BRANCH = "push_to_branch"
    MISSING_TOOL = "missing_tool"


def _issue_or_pull_request_number() -> ExpressionNode:
    return disjunction_of(
        property_access("github.event.issue.number"),
        property_access("github.event.pull_request.number"),
    )


def build_base_condition(kind: OutputKind, target: str | None = None) -> ExpressionNode:
    """Return the execution-context requirement of an output job.

    Args:
        kind: Output job kind.
        target: Configured target: ``*`` for any, an explicit number, or
            None/empty for the triggering issue or pull request.

    Returns:
        Base condition node; ``always()`` when the job is unrestricted.

    """
    target = (target or "").strip()

    if kind is OutputKind.ADD_ISSUE_COMMENT:
        if target == ANY_TARGET:
            return always()
        return _issue_or_pull_request_number()

    if kind is OutputKind.ADD_LABELS:
        return _issue_or_pull_request_number()

    if kind is OutputKind.UPDATE_ISSUE:
        if target:
            return always()
        return property_access("github.event.issue.number")

    if kind is OutputKind.PUSH_TO_BRANCH:
        if target == ANY_TARGET:
            return always()
        return property_access("github.event.pull_request.number")

    # create_issue, create_pull_request and missing_tool need no triggering subject
    return always()
