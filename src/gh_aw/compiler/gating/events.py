"""Event-type gates: pull request draft filter, reaction job, team membership."""

from gh_aw.compiler.expressions.nodes import (
    Disjunction,
    Equality,
    boolean_literal,
    disjunction_of,
    equals,
    event_type_equals,
    literal,
    negate,
    property_access,
)

__all__ = [
    "REACTION_EVENTS",
    "TEAM_MEMBER_STEP_ID",
    "build_draft_condition",
    "build_reaction_condition",
    "build_team_member_denied_condition",
]

# Events whose subject (issue, PR or comment) can receive a reaction
REACTION_EVENTS: tuple[str, ...] = (
    "issues",
    "pull_request",
    "issue_comment",
    "pull_request_comment",
    "pull_request_review_comment",
)

TEAM_MEMBER_STEP_ID = "check-team-member"


def build_draft_condition(draft: bool) -> Disjunction:
    """Filter pull request events on their draft state.

    Non-pull_request events pass through; pull requests pass only when
    ``github.event.pull_request.draft`` equals ``draft``.
    """
    return disjunction_of(
        negate(event_type_equals("pull_request")),
        equals(property_access("github.event.pull_request.draft"), boolean_literal(draft)),
    )


def build_reaction_condition() -> Disjunction:
    """True for events whose subject can receive a reaction."""
    return disjunction_of(*(event_type_equals(event) for event in REACTION_EVENTS))


def build_team_member_denied_condition() -> Equality:
    """True when the team-membership check ran and rejected the actor.

    The check step itself only runs for command mentions, so a skipped step
    (empty output) does not trigger the denial.
    """
    return equals(
        property_access(f"steps.{TEAM_MEMBER_STEP_ID}.outputs.is_team_member"),
        literal("false"),
    )
