"""Policy builders for job gating conditions.

Each module encodes one domain rule by composing expression nodes:
- command: command-mention gating (command-only and event-aware)
- labels: label-name gating with pass-through for non-labeling events
- events: pull request draft filter, reaction and team-membership gates
- outputs: base execution-context conditions of output jobs
"""

from gh_aw.compiler.gating.command import (
    COMMAND_EVENTS,
    build_command_only_condition,
    build_event_aware_command_condition,
)
from gh_aw.compiler.gating.events import (
    build_draft_condition,
    build_reaction_condition,
    build_team_member_denied_condition,
)
from gh_aw.compiler.gating.labels import build_label_condition, build_label_name_condition
from gh_aw.compiler.gating.outputs import OutputKind, build_base_condition

__all__ = [
    "COMMAND_EVENTS",
    "build_command_only_condition",
    "build_event_aware_command_condition",
    "build_label_condition",
    "build_label_name_condition",
    "build_draft_condition",
    "build_reaction_condition",
    "build_team_member_denied_condition",
    "OutputKind",
    "build_base_condition",
]
