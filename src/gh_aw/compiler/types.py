"""Data models for the gh-aw gating compiler.

This module defines the core data structures used throughout the compiler:
- TriggerFacts: What the ``on:`` section declares (command, labels, draft, ...)
- WorkflowFacts: Workflow-level facts consumed by the policy builders
- JobGate: Finalized gating condition of one generated job
- CompiledGates: All gates of a workflow, ready for job/step emission
"""

from dataclasses import dataclass, field
from typing import Any

from gh_aw.compiler.config import SafeOutputsConfig


@dataclass(frozen=True)
class TriggerFacts:
    """Facts extracted from a workflow's ``on:`` section.

    Attributes:
        command: Command name for ``/command`` workflows, or None.
        has_other_events: True if a command workflow also declares
            non-command events (schedule, push, ...).
        label_names: Label names to filter labeling events on.
        label_events_only: True if the trigger admits nothing but
            ``labeled``/``unlabeled`` issue or pull request events.
        draft: Pull request draft filter, or None for no filter.
        reaction: Reaction to add to the triggering issue/PR/comment, or None.
        events: Trigger events to emit, filter-only keys removed.

    """

    command: str | None = None
    has_other_events: bool = False
    label_names: tuple[str, ...] = ()
    label_events_only: bool = False
    draft: bool | None = None
    reaction: str | None = None
    events: dict[str, Any] = field(default_factory=dict, hash=False)


@dataclass(frozen=True)
class WorkflowFacts:
    """Workflow-level facts consumed by the policy builders.

    Attributes:
        name: Workflow name (first markdown heading or file stem).
        command: Command name for ``/command`` workflows, or None.
        has_other_events: True if a command workflow also declares
            non-command events.
        label_names: Label names to filter labeling events on.
        label_events_only: True if the trigger admits only labeling events.
        draft: Pull request draft filter, or None for no filter.
        reaction: Reaction added by the add_reaction job, or None.
        user_condition: User-authored ``if:`` condition, without ``${{ }}``;
            empty string when absent.
        on_events: Trigger events to emit in the ``on:`` section.
        safe_outputs: Enabled output jobs, or None.

    """

    name: str
    command: str | None = None
    has_other_events: bool = False
    label_names: tuple[str, ...] = ()
    label_events_only: bool = False
    draft: bool | None = None
    reaction: str | None = None
    user_condition: str = ""
    on_events: dict[str, Any] = field(default_factory=dict, hash=False)
    safe_outputs: SafeOutputsConfig | None = field(default=None, hash=False)


@dataclass(frozen=True)
class JobGate:
    """Finalized gating condition of one generated job.

    Attributes:
        name: Job identifier.
        condition: Expression for the job's ``if:``; empty string means the
            job runs unconditionally.
        depends: Jobs this job needs.
        step_conditions: Step id -> ``if:`` expression for gated steps.

    """

    name: str
    condition: str = ""
    depends: tuple[str, ...] = ()
    step_conditions: dict[str, str] = field(default_factory=dict, hash=False)

    @property
    def is_conditional(self) -> bool:
        """True if the job has a non-empty gate."""
        return bool(self.condition)


@dataclass(frozen=True)
class CompiledGates:
    """All gating conditions of a compiled workflow.

    Attributes:
        workflow_name: Workflow name.
        on: Trigger events to emit in the workflow's ``on:`` section.
        workflow_condition: Combined workflow-level gate (user condition,
            command, label and draft filters); empty when unconditional.
        jobs: Gates of the generated jobs, in emission order.

    """

    workflow_name: str
    on: dict[str, Any] = field(hash=False)
    workflow_condition: str
    jobs: tuple[JobGate, ...]

    def get_job(self, name: str) -> JobGate | None:
        """Look up a job gate by job name."""
        for job in self.jobs:
            if job.name == name:
                return job
        return None
