"""Safe-outputs configuration models.

The ``safe-outputs`` frontmatter section declares which privileged output
jobs a workflow may run. Keys use kebab-case; a key with a null value enables
the output with its defaults:

    safe-outputs:
      add-issue-comment:
        target: "*"
      update-issue:
        status:
        title:
      push-to-branch:
        branch: feature
      missing-tool:

Usage:
    from gh_aw.compiler.config import load_safe_outputs

    safe_outputs = load_safe_outputs(frontmatter.get("safe-outputs"))
    for kind, target in safe_outputs.enabled_outputs():
        ...
"""

import logging
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from gh_aw.compiler.gating.outputs import OutputKind
from gh_aw.core.exceptions import ConfigError

logger = logging.getLogger(__name__)

__all__ = [
    "CreateIssueConfig",
    "AddIssueCommentConfig",
    "CreatePullRequestConfig",
    "AddIssueLabelsConfig",
    "UpdateIssueConfig",
    "PushToBranchConfig",
    "MissingToolConfig",
    "SafeOutputsConfig",
    "load_safe_outputs",
]


class _OutputConfig(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class _TargetedOutputConfig(_OutputConfig):
    """Output that acts on an issue or pull request chosen by ``target``.

    Attributes:
        target: ``*`` for any issue/PR, an explicit number, or None for the
            triggering issue/PR.

    """

    target: str | None = None

    @field_validator("target", mode="before")
    @classmethod
    def coerce_target(cls, v: Any) -> str | None:
        """YAML parses explicit issue numbers as int; targets are kept as strings."""
        if v is None:
            return None
        if isinstance(v, bool):
            raise ValueError("target must be '*' or an issue/pull request number")
        return str(v)


class CreateIssueConfig(_OutputConfig):
    """Configuration for the create_issue job.

    Attributes:
        title_prefix: Prefix prepended to created issue titles.
        labels: Labels applied to created issues.
        max: Maximum number of issues per run.

    """

    title_prefix: str | None = Field(default=None, alias="title-prefix")
    labels: list[str] = Field(default_factory=list)
    max: int = Field(default=1, ge=1)


class AddIssueCommentConfig(_TargetedOutputConfig):
    """Configuration for the create_issue_comment job."""

    max: int = Field(default=1, ge=1, description="Maximum number of comments per run")


class CreatePullRequestConfig(_OutputConfig):
    """Configuration for the create_pull_request job."""

    title_prefix: str | None = Field(default=None, alias="title-prefix")
    labels: list[str] = Field(default_factory=list)
    draft: bool = Field(default=True, description="Create pull requests as drafts")


class AddIssueLabelsConfig(_OutputConfig):
    """Configuration for the add_labels job.

    Attributes:
        allowed: Labels the agent may add; empty means any label.
        max_count: Maximum number of labels added per run.

    """

    allowed: list[str] = Field(default_factory=list)
    max_count: int = Field(default=3, ge=1, alias="max-count")

    @field_validator("allowed", mode="before")
    @classmethod
    def coerce_none_to_empty_list(cls, v: Any) -> list[str]:
        """YAML parses an empty ``allowed:`` key as None."""
        if v is None:
            return []
        return v


class UpdateIssueConfig(_TargetedOutputConfig):
    """Configuration for the update_issue job.

    ``status``, ``title`` and ``body`` enable updating that field. A key
    present with a null value counts as enabled.
    """

    status: bool = False
    title: bool = False
    body: bool = False

    @field_validator("status", "title", "body", mode="before")
    @classmethod
    def null_means_enabled(cls, v: Any) -> Any:
        """A bare ``status:`` key enables status updates."""
        if v is None:
            return True
        return v


class PushToBranchConfig(_TargetedOutputConfig):
    """Configuration for the push_to_branch job.

    Attributes:
        branch: Branch to push to; ``triggering`` is the PR's head branch.

    """

    branch: str = Field(default="triggering", min_length=1)


class MissingToolConfig(_OutputConfig):
    """Configuration for the missing_tool reporting job."""

    max: int | None = Field(default=None, ge=1)


# Frontmatter key -> (field name, job kind), in job emission order
_OUTPUT_KEYS: dict[str, tuple[str, OutputKind]] = {
    "create-issue": ("create_issue", OutputKind.CREATE_ISSUE),
    "add-issue-comment": ("add_issue_comment", OutputKind.ADD_ISSUE_COMMENT),
    "create-pull-request": ("create_pull_request", OutputKind.CREATE_PULL_REQUEST),
    "add-issue-labels": ("add_issue_labels", OutputKind.ADD_LABELS),
    "update-issue": ("update_issue", OutputKind.UPDATE_ISSUE),
    "push-to-branch": ("push_to_branch", OutputKind.PUSH_TO_BRANCH),
    "missing-tool": ("missing_tool", OutputKind.MISSING_TOOL),
}


class SafeOutputsConfig(BaseModel):
    """The ``safe-outputs`` frontmatter section.

    Every output is optional; None means the output job is not generated.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    create_issue: CreateIssueConfig | None = Field(default=None, alias="create-issue")
    add_issue_comment: AddIssueCommentConfig | None = Field(default=None, alias="add-issue-comment")
    create_pull_request: CreatePullRequestConfig | None = Field(
        default=None, alias="create-pull-request"
    )
    add_issue_labels: AddIssueLabelsConfig | None = Field(default=None, alias="add-issue-labels")
    update_issue: UpdateIssueConfig | None = Field(default=None, alias="update-issue")
    push_to_branch: PushToBranchConfig | None = Field(default=None, alias="push-to-branch")
    missing_tool: MissingToolConfig | None = Field(default=None, alias="missing-tool")

    @model_validator(mode="before")
    @classmethod
    def null_output_means_defaults(cls, data: Any) -> Any:
        """Treat ``add-issue-comment:`` (null value) as enabled with defaults."""
        if not isinstance(data, dict):
            return data
        normalized: dict[str, Any] = {}
        for key, value in data.items():
            if str(key).replace("_", "-") not in _OUTPUT_KEYS:
                logger.warning("Ignoring unknown safe-outputs key: %s", key)
                continue
            normalized[key] = {} if value is None else value
        return normalized

    def enabled_outputs(self) -> list[tuple[OutputKind, str | None]]:
        """List enabled output jobs with their configured target.

        Returns:
            (kind, target) pairs in job emission order. Outputs without a
            target setting report None.

        """
        enabled: list[tuple[OutputKind, str | None]] = []
        for field_name, kind in _OUTPUT_KEYS.values():
            output = getattr(self, field_name)
            if output is None:
                continue
            enabled.append((kind, getattr(output, "target", None)))
        return enabled


def load_safe_outputs(section: Any) -> SafeOutputsConfig | None:
    """Validate the ``safe-outputs`` frontmatter section.

    Args:
        section: Raw value of the ``safe-outputs`` key, or None if absent.

    Returns:
        Parsed configuration, or None when the section is absent.

    Raises:
        ConfigError: If the section is not a mapping or fails validation.

    """
    if section is None:
        return None
    if not isinstance(section, dict):
        raise ConfigError(
            f"Invalid safe-outputs section: expected a mapping, got {type(section).__name__}\n"
            f"  Suggestion: List outputs as keys, e.g. 'add-issue-comment:'"
        )
    try:
        return SafeOutputsConfig.model_validate(section)
    except ValidationError as e:
        raise ConfigError(
            f"Invalid safe-outputs configuration:\n{e}\n"
            f"  Suggestion: Check output names and option types"
        ) from e
