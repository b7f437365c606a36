"""Tests for draft, reaction and team-membership gates."""

from collections.abc import Callable
from typing import Any

import pytest

from gh_aw.compiler.expressions import render
from gh_aw.compiler.gating import (
    build_draft_condition,
    build_reaction_condition,
    build_team_member_denied_condition,
)
from gh_aw.compiler.gating.events import REACTION_EVENTS


class TestDraftCondition:
    """Pull request draft filter."""

    def test_rendering_false(self) -> None:
        """draft: false only admits ready pull requests."""
        assert render(build_draft_condition(False)) == (
            "!(github.event_name == 'pull_request') || github.event.pull_request.draft == false"
        )

    def test_rendering_true(self) -> None:
        """draft: true only admits draft pull requests."""
        assert render(build_draft_condition(True)).endswith(
            "github.event.pull_request.draft == true"
        )

    @pytest.mark.parametrize(
        ("filter_draft", "is_draft", "expected"),
        [
            (False, False, True),
            (False, True, False),
            (True, True, True),
            (True, False, False),
        ],
    )
    def test_pull_request_filtered(
        self,
        filter_draft: bool,
        is_draft: bool,
        expected: bool,
        evaluate: Callable[..., bool],
        event_context: Callable[..., dict[str, Any]],
    ) -> None:
        """Pull requests pass only with the configured draft state."""
        context = event_context("pull_request", "opened", pull_request={"draft": is_draft})
        assert evaluate(build_draft_condition(filter_draft), context) is expected

    def test_other_events_pass(
        self,
        evaluate: Callable[..., bool],
        event_context: Callable[..., dict[str, Any]],
    ) -> None:
        """Non-pull_request events are not filtered."""
        assert evaluate(build_draft_condition(False), event_context("issues", "opened"))


class TestReactionCondition:
    """Events whose subject can receive a reaction."""

    def test_covers_reaction_events(self) -> None:
        """One equality per reaction event, in order."""
        text = render(build_reaction_condition())
        assert text == " || ".join(f"github.event_name == '{event}'" for event in REACTION_EVENTS)

    def test_includes_pull_request_comment(self) -> None:
        """pull_request_comment is a reaction event."""
        assert "pull_request_comment" in REACTION_EVENTS

    def test_push_excluded(
        self,
        evaluate: Callable[..., bool],
        event_context: Callable[..., dict[str, Any]],
    ) -> None:
        """Push events have nothing to react to."""
        assert not evaluate(build_reaction_condition(), event_context("push"))


class TestTeamMemberDeniedCondition:
    """Gate of the validate-team-member step."""

    def test_rendering(self) -> None:
        """Compares the check step output with 'false'."""
        assert render(build_team_member_denied_condition()) == (
            "steps.check-team-member.outputs.is_team_member == 'false'"
        )

    def test_skipped_check_does_not_deny(self, evaluate: Callable[..., bool]) -> None:
        """A skipped check step has no output and does not deny."""
        assert not evaluate(build_team_member_denied_condition(), {"steps": {}})

    def test_failed_check_denies(self, evaluate: Callable[..., bool]) -> None:
        """The step runs when the actor is not a team member."""
        context = {"steps": {"check-team-member": {"outputs": {"is_team_member": "false"}}}}
        assert evaluate(build_team_member_denied_condition(), context)
