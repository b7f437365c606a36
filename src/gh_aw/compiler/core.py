"""Core gate compilation orchestration.

This module provides the main entry points:
- extract_workflow_facts: Turn parsed frontmatter into WorkflowFacts
- build_workflow_condition: Merge the workflow-level gates into one condition
- plan_job_gates: Attach a finalized gate to every generated job
- compile_gates: Parse a workflow file and plan its gates
"""

import logging
import re
from pathlib import Path
from typing import Any

from gh_aw.compiler.config import load_safe_outputs
from gh_aw.compiler.expressions import (
    ALWAYS_CONDITION,
    compose_command_condition,
    has_expression_markers,
    merge_conditions,
    render,
    strip_expression_wrapper,
)
from gh_aw.compiler.gating import (
    OutputKind,
    build_base_condition,
    build_command_only_condition,
    build_draft_condition,
    build_event_aware_command_condition,
    build_label_condition,
    build_reaction_condition,
    build_team_member_denied_condition,
)
from gh_aw.compiler.gating.events import TEAM_MEMBER_STEP_ID
from gh_aw.compiler.parser import extract_workflow_name, parse_workflow_file
from gh_aw.compiler.triggers import analyze_triggers
from gh_aw.compiler.types import CompiledGates, JobGate, WorkflowFacts
from gh_aw.core.exceptions import ConfigError

logger = logging.getLogger(__name__)

TASK_JOB = "task"
REACTION_JOB = "add_reaction"
DEFAULT_MAIN_JOB = "agent"
VALIDATE_TEAM_MEMBER_STEP_ID = "validate-team-member"


def job_name_for(workflow_name: str) -> str:
    """Slugify a workflow name into a job identifier.

    Example: "Issue Triage (v2)" -> "issue-triage-v2".
    """
    slug = re.sub(r"[^a-z0-9]+", "-", workflow_name.lower()).strip("-")
    return slug or DEFAULT_MAIN_JOB


def _user_condition(frontmatter: dict[str, Any]) -> str:
    value = frontmatter.get("if")
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ConfigError(
            f"Invalid 'if' condition: expected a string, got {type(value).__name__}\n"
            f"  Suggestion: Quote the expression, e.g. if: \"github.actor != 'bot'\""
        )
    condition = strip_expression_wrapper(value)
    if has_expression_markers(condition):
        raise ConfigError(
            f"Invalid 'if' condition: {value!r}\n"
            f"  Several ${{{{ }}}} segments cannot be merged into the job gate\n"
            f"  Suggestion: Write one expression, e.g. ${{{{ a && b }}}} or a && b"
        )
    return condition


def extract_workflow_facts(
    frontmatter: dict[str, Any],
    body: str,
    workflow_path: Path,
) -> WorkflowFacts:
    """Collect the facts the policy builders need from a parsed workflow.

    Args:
        frontmatter: Parsed YAML frontmatter.
        body: Markdown body (used for the workflow name).
        workflow_path: Workflow file path; its stem is the default workflow
            and command name.

    Returns:
        WorkflowFacts for the workflow.

    Raises:
        ConfigError: If triggers, ``if`` or ``safe-outputs`` are invalid.

    """
    stem = workflow_path.stem
    triggers = analyze_triggers(frontmatter.get("on"), default_command=stem)
    return WorkflowFacts(
        name=extract_workflow_name(body, fallback=stem),
        command=triggers.command,
        has_other_events=triggers.has_other_events,
        label_names=triggers.label_names,
        label_events_only=triggers.label_events_only,
        draft=triggers.draft,
        reaction=triggers.reaction,
        user_condition=_user_condition(frontmatter),
        on_events=triggers.events,
        safe_outputs=load_safe_outputs(frontmatter.get("safe-outputs")),
    )


def build_workflow_condition(facts: WorkflowFacts) -> str:
    """Merge the workflow-level gates into a single condition.

    Order: user ``if:``, command gate, label gate, draft filter.

    Returns:
        Merged condition; empty string when the workflow is unconditional.

    """
    condition = facts.user_condition
    if facts.command:
        command_gate = build_event_aware_command_condition(facts.command, facts.has_other_events)
        condition = merge_conditions(condition, render(command_gate))
    if facts.label_names:
        label_gate = build_label_condition(facts.label_names, facts.label_events_only)
        condition = merge_conditions(condition, render(label_gate))
    if facts.draft is not None:
        condition = merge_conditions(condition, render(build_draft_condition(facts.draft)))
    return condition


def _output_gates(facts: WorkflowFacts, main_job: str) -> list[JobGate]:
    if facts.safe_outputs is None:
        return []

    command_condition = build_command_only_condition(facts.command) if facts.command else None
    gates: list[JobGate] = []
    for kind, target in facts.safe_outputs.enabled_outputs():
        if kind is OutputKind.MISSING_TOOL:
            # Reports missing tools regardless of how the run was triggered
            condition = ALWAYS_CONDITION
        else:
            condition = compose_command_condition(
                command_condition, build_base_condition(kind, target)
            )
        gates.append(JobGate(name=str(kind), condition=condition, depends=(main_job,)))
    return gates


def plan_job_gates(facts: WorkflowFacts) -> CompiledGates:
    """Attach a finalized gating condition to every generated job.

    Jobs, in emission order: ``task`` (workflow gate and team-membership
    step gates), ``add_reaction``, the main agent job, then one job per
    enabled safe output.

    Args:
        facts: Workflow facts.

    Returns:
        CompiledGates for the workflow.

    """
    workflow_condition = build_workflow_condition(facts)
    jobs: list[JobGate] = []
    upstream: tuple[str, ...] = ()

    if facts.command or workflow_condition:
        step_conditions: dict[str, str] = {}
        if facts.command:
            step_conditions[TEAM_MEMBER_STEP_ID] = render(
                build_command_only_condition(facts.command)
            )
            step_conditions[VALIDATE_TEAM_MEMBER_STEP_ID] = render(
                build_team_member_denied_condition()
            )
        jobs.append(
            JobGate(name=TASK_JOB, condition=workflow_condition, step_conditions=step_conditions)
        )
        upstream = (TASK_JOB,)

    if facts.reaction:
        jobs.append(
            JobGate(
                name=REACTION_JOB,
                condition=render(build_reaction_condition()),
                depends=upstream,
            )
        )

    main_job = job_name_for(facts.name)
    jobs.append(JobGate(name=main_job, depends=upstream))
    jobs.extend(_output_gates(facts, main_job))

    return CompiledGates(
        workflow_name=facts.name,
        on=facts.on_events,
        workflow_condition=workflow_condition,
        jobs=tuple(jobs),
    )


def compile_gates(workflow_path: Path) -> CompiledGates:
    """Compile the gating conditions of a workflow markdown file.

    Args:
        workflow_path: Path to the workflow .md file.

    Returns:
        CompiledGates for the workflow.

    Raises:
        ParserError: If the file cannot be read or its frontmatter is malformed.
        ConfigError: If the frontmatter configuration is invalid.

    """
    frontmatter, body = parse_workflow_file(workflow_path)
    facts = extract_workflow_facts(frontmatter, body, workflow_path)
    compiled = plan_job_gates(facts)

    gated = [job for job in compiled.jobs if job.is_conditional]
    logger.info(
        "Compiled gates for %s: %d of %d jobs gated",
        compiled.workflow_name,
        len(gated),
        len(compiled.jobs),
    )
    for job in compiled.jobs:
        logger.debug("Job %s (needs %s): if=%s", job.name, list(job.depends), job.condition)
    return compiled
