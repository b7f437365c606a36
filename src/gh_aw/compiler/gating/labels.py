"""Label gating.

Restricts a workflow that reacts to labeling events to a configured set of
label names. Two shapes exist:

- the trigger only declares ``labeled``/``unlabeled`` issue or PR events, so
  the label-name check alone is the complete gate;
- the trigger also admits other events or actions, so the filter applies only
  when both the event type and the action are label-related and everything
  else passes through.

The second shape is correct for every trigger configuration. The first is
kept only for triggers that provably restrict to labeling events, where it
yields a shorter gate with identical truth values.
"""

import logging
from collections.abc import Iterable

from gh_aw.compiler.expressions.nodes import (
    Disjunction,
    ExpressionNode,
    action_equals,
    conjunction_of,
    disjunction_of,
    event_type_equals,
    label_contains,
    negate,
)

logger = logging.getLogger(__name__)

__all__ = [
    "LABEL_EVENTS",
    "LABELING_ACTIONS",
    "build_label_name_condition",
    "build_label_condition",
]

LABEL_EVENTS: tuple[str, ...] = ("issues", "pull_request")
LABELING_ACTIONS: tuple[str, ...] = ("labeled", "unlabeled")


def build_label_name_condition(label_names: Iterable[str]) -> Disjunction:
    """True when the event's label matches one of ``label_names``.

    Duplicate names are dropped, keeping first-occurrence order.

    Raises:
        ExpressionError: If no label names are given or a name is blank.

    """
    unique_names = list(dict.fromkeys(label_names))
    return disjunction_of(*(label_contains(name) for name in unique_names))


def build_label_condition(
    label_names: Iterable[str],
    label_events_only: bool,
) -> ExpressionNode:
    """Build the label gate for a workflow.

    Args:
        label_names: Allowed label names (at least one).
        label_events_only: True if the declared trigger admits nothing but
            ``labeled``/``unlabeled`` issue or pull request events.

    Returns:
        The label-name disjunction when ``label_events_only``; otherwise
        ``!(isLabelEvent) || !(isLabelingAction) ||
        (isLabelEvent && isLabelingAction && labelNames)``.

    Raises:
        ExpressionError: If no label names are given.

    """
    names_condition = build_label_name_condition(label_names)
    if label_events_only:
        logger.debug("Trigger restricts to labeling events, using label-name gate only")
        return names_condition

    is_label_event = disjunction_of(*(event_type_equals(event) for event in LABEL_EVENTS))
    is_labeling_action = disjunction_of(*(action_equals(action) for action in LABELING_ACTIONS))
    return disjunction_of(
        negate(is_label_event),
        negate(is_labeling_action),
        conjunction_of(is_label_event, is_labeling_action, names_condition),
    )
