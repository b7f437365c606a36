"""Agentic workflow markdown parsing.

This module provides functions for parsing workflow markdown files:
- split_frontmatter: Split YAML frontmatter from the markdown body
- parse_workflow_file: Read and split a workflow file
- extract_workflow_name: Workflow name from the first markdown heading

Parsing is STRUCTURAL only. Trigger and safe-outputs semantics are handled
by triggers.py and config.py.
"""

import logging
from pathlib import Path
from typing import Any

import yaml

from gh_aw.core.exceptions import ParserError

logger = logging.getLogger(__name__)

FRONTMATTER_MARKER = "---"


def _normalize_keys(frontmatter: dict[Any, Any]) -> dict[str, Any]:
    # YAML 1.1 reads a bare ``on:`` key as boolean True
    normalized: dict[str, Any] = {}
    for key, value in frontmatter.items():
        if key is True:
            key = "on"
        normalized[str(key)] = value
    return normalized


def split_frontmatter(content: str, source: str = "<string>") -> tuple[dict[str, Any], str]:
    """Split YAML frontmatter from the markdown body.

    Frontmatter is the YAML block between an opening ``---`` line at the very
    start of the content and the next ``---`` line.

    Args:
        content: Full markdown content.
        source: Name used in error messages (usually the file path).

    Returns:
        Tuple (frontmatter, body). Content without frontmatter returns
        ({}, content); an empty frontmatter block returns {}.

    Raises:
        ParserError: If the closing marker is missing, the YAML is invalid,
            or the frontmatter root is not a mapping.

    """
    lines = content.splitlines(keepends=True)
    if not lines or lines[0].strip() != FRONTMATTER_MARKER:
        return {}, content

    end_index = None
    for index in range(1, len(lines)):
        if lines[index].strip() == FRONTMATTER_MARKER:
            end_index = index
            break

    if end_index is None:
        raise ParserError(
            f"Unterminated frontmatter in {source}:\n"
            f"  Opening '---' has no matching closing '---' line\n"
            f"  Suggestion: Close the frontmatter block with a line containing only '---'"
        )

    frontmatter_text = "".join(lines[1:end_index])
    body = "".join(lines[end_index + 1 :])

    try:
        result = yaml.safe_load(frontmatter_text)
    except yaml.YAMLError as e:
        line_info = ""
        if hasattr(e, "problem_mark") and e.problem_mark is not None:
            mark = e.problem_mark
            # +1 for the opening marker line
            line_info = f"\n  Line {mark.line + 2}, column {mark.column + 1}"

        raise ParserError(
            f"Invalid YAML frontmatter in {source}:{line_info}\n"
            f"  {e}\n"
            f"  Suggestion: Check YAML syntax (indentation, colons, quotes)"
        ) from e

    if result is None:
        return {}, body
    if not isinstance(result, dict):
        raise ParserError(
            f"Invalid frontmatter in {source}:\n"
            f"  Root element must be a mapping (dict), got {type(result).__name__}\n"
            f"  Suggestion: Use key: value format, e.g. 'on: issues'"
        )
    return _normalize_keys(result), body


def parse_workflow_file(workflow_path: Path) -> tuple[dict[str, Any], str]:
    """Read a workflow markdown file and split its frontmatter.

    Args:
        workflow_path: Path to the workflow .md file.

    Returns:
        Tuple (frontmatter, body).

    Raises:
        ParserError: If the file is missing, unreadable or malformed.

    """
    if not workflow_path.exists():
        raise ParserError(
            f"Workflow file not found: {workflow_path}\n"
            f"  Suggestion: Check the path; workflows live in .github/workflows/*.md"
        )

    try:
        content = workflow_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ParserError(
            f"Cannot read workflow file: {workflow_path}\n"
            f"  Error: {e}\n"
            f"  Suggestion: Check file permissions and ensure the file is UTF-8 text"
        ) from e

    frontmatter, body = split_frontmatter(content, source=str(workflow_path))
    logger.debug("Parsed %s: frontmatter keys=%s", workflow_path, sorted(frontmatter))
    return frontmatter, body


def extract_workflow_name(body: str, fallback: str) -> str:
    """Return the text of the first ``# `` heading, or the fallback."""
    for line in body.splitlines():
        stripped = line.strip()
        if stripped.startswith("# "):
            name = stripped[2:].strip()
            if name:
                return name
    return fallback
