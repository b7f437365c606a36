"""Pytest configuration and fixtures for gh-aw tests."""

import logging
from collections.abc import Callable
from pathlib import Path

import pytest
from rich.logging import RichHandler

DEFAULT_BODY = "# Test Workflow\n\nDo the thing.\n"


@pytest.fixture(autouse=True)
def reset_cli_logging():
    """Remove rich handlers installed by CLI tests.

    The CLI configures root logging with force=True; without this, a handler
    bound to a closed CliRunner stream would leak into later tests.
    """
    yield
    root = logging.getLogger()
    for handler in list(root.handlers):
        if isinstance(handler, RichHandler):
            root.removeHandler(handler)
    root.setLevel(logging.WARNING)


@pytest.fixture
def write_workflow(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing a workflow markdown file into tmp_path.

    Usage:
        path = write_workflow("on: issues\\n", body="# Triage\\n", name="triage.md")
    """

    def _write(frontmatter: str, body: str = DEFAULT_BODY, name: str = "test-workflow.md") -> Path:
        path = tmp_path / name
        path.write_text(f"---\n{frontmatter}---\n{body}", encoding="utf-8")
        return path

    return _write
