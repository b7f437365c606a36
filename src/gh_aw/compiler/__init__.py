"""Gating compiler for agentic workflows.

Public API:
    compile_gates: Parse a workflow markdown file and plan its job gates
    extract_workflow_facts: Frontmatter -> WorkflowFacts
    build_workflow_condition: Merged workflow-level gate
    plan_job_gates: WorkflowFacts -> CompiledGates

Expression nodes, rendering and merging live in ``gh_aw.compiler.expressions``;
policy builders in ``gh_aw.compiler.gating``.
"""

from gh_aw.compiler.core import (
    build_workflow_condition,
    compile_gates,
    extract_workflow_facts,
    job_name_for,
    plan_job_gates,
)
from gh_aw.compiler.types import CompiledGates, JobGate, TriggerFacts, WorkflowFacts

__all__ = [
    "compile_gates",
    "extract_workflow_facts",
    "build_workflow_condition",
    "plan_job_gates",
    "job_name_for",
    "CompiledGates",
    "JobGate",
    "TriggerFacts",
    "WorkflowFacts",
]
