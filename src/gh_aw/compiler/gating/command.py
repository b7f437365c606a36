"""Command-mention gating.

A command workflow runs when ``/<name>`` appears in the body of the issue,
comment or pull request that triggered it. Each comment-bearing event fills
exactly one of those fields, so all three are checked.
"""

from gh_aw.compiler.expressions.nodes import (
    Disjunction,
    ExpressionNode,
    conjunction_of,
    contains,
    disjunction_of,
    event_type_equals,
    literal,
    negate,
    property_access,
)
from gh_aw.core.exceptions import ExpressionError

__all__ = [
    "COMMAND_EVENTS",
    "COMMAND_BODY_PATHS",
    "command_token",
    "build_comment_events_condition",
    "build_command_only_condition",
    "build_event_aware_command_condition",
]

# Events that carry a body a command can be mentioned in
COMMAND_EVENTS: tuple[str, ...] = (
    "issues",
    "issue_comment",
    "pull_request",
    "pull_request_review_comment",
)

COMMAND_BODY_PATHS: tuple[str, ...] = (
    "github.event.issue.body",
    "github.event.comment.body",
    "github.event.pull_request.body",
)


def command_token(command_name: str) -> str:
    """Return the ``/name`` token searched for in event bodies.

    Raises:
        ExpressionError: If the command name is blank.

    """
    name = command_name.strip().lstrip("/") if isinstance(command_name, str) else ""
    if not name:
        raise ExpressionError(
            f"Command name must be non-empty, got {command_name!r}\n"
            f"  Suggestion: Set on.command.name in the workflow frontmatter"
        )
    return f"/{name}"


def build_comment_events_condition() -> Disjunction:
    """True when the triggering event is one of COMMAND_EVENTS."""
    return disjunction_of(*(event_type_equals(event) for event in COMMAND_EVENTS))


def build_command_only_condition(command_name: str) -> Disjunction:
    """True iff ``/<command_name>`` is mentioned in the issue, comment or PR body.

    Unlike build_event_aware_command_condition, events without a body are
    never let through.

    Args:
        command_name: Command name, with or without the leading slash.

    Returns:
        Disjunction of three ``contains`` checks.

    """
    token = literal(command_token(command_name))
    return disjunction_of(*(contains(property_access(path), token) for path in COMMAND_BODY_PATHS))


def build_event_aware_command_condition(
    command_name: str,
    has_other_events: bool,
) -> ExpressionNode:
    """Gate a command workflow that may also react to non-comment events.

    When the workflow only listens to comment-bearing events this is the
    command-only condition. Otherwise comment-bearing events still require the
    mention while every other event (schedule, push, ...) passes through:
    ``(commentEvents && commandOnly) || !(commentEvents)``.

    Args:
        command_name: Command name.
        has_other_events: True if the workflow declares triggers besides the
            command events.

    Returns:
        Gating condition tree.

    """
    command_condition = build_command_only_condition(command_name)
    if not has_other_events:
        return command_condition

    comment_events = build_comment_events_condition()
    return disjunction_of(
        conjunction_of(comment_events, command_condition),
        negate(comment_events),
    )
