"""Tests for on: section analysis."""

import logging

import pytest

from gh_aw.compiler.triggers import COMMAND_EVENT_TYPES, analyze_triggers
from gh_aw.core.exceptions import ConfigError

# =============================================================================
# Test: on: forms
# =============================================================================


class TestOnForms:
    """String, list and mapping forms of on:."""

    def test_absent(self) -> None:
        """No on: section gives no events and no gates."""
        facts = analyze_triggers(None, "wf")
        assert facts.events == {}
        assert facts.command is None

    def test_string(self) -> None:
        """A single event name."""
        assert analyze_triggers("push", "wf").events == {"push": None}

    def test_list(self) -> None:
        """A list of event names."""
        assert analyze_triggers(["push", "issues"], "wf").events == {"push": None, "issues": None}

    def test_list_with_non_string(self) -> None:
        """List entries must be names."""
        with pytest.raises(ConfigError, match="Invalid trigger event"):
            analyze_triggers(["push", 1], "wf")

    def test_scalar_rejected(self) -> None:
        """Numbers are not a trigger section."""
        with pytest.raises(ConfigError, match="expected a string, list or mapping"):
            analyze_triggers(42, "wf")


# =============================================================================
# Test: command triggers
# =============================================================================


class TestCommandTrigger:
    """command: directives."""

    def test_name_from_mapping(self) -> None:
        """command.name sets the command."""
        facts = analyze_triggers({"command": {"name": "triage"}}, "wf")
        assert facts.command == "triage"
        assert facts.has_other_events is False

    def test_bare_string(self) -> None:
        """command: <name> shorthand."""
        assert analyze_triggers({"command": "/deploy"}, "wf").command == "deploy"

    def test_defaults_to_file_stem(self) -> None:
        """A bare command: key uses the workflow file stem."""
        assert analyze_triggers({"command": None}, "issue-bot").command == "issue-bot"
        assert analyze_triggers({"command": {}}, "issue-bot").command == "issue-bot"

    def test_synthesizes_command_events(self) -> None:
        """The four command events are emitted with default types."""
        facts = analyze_triggers({"command": {"name": "triage"}}, "wf")
        assert facts.events == {
            event: {"types": types} for event, types in COMMAND_EVENT_TYPES.items()
        }

    def test_other_events_kept(self) -> None:
        """Non-command events are merged after the command events."""
        facts = analyze_triggers(
            {"command": {"name": "triage"}, "schedule": [{"cron": "0 9 * * 1"}]}, "wf"
        )
        assert facts.has_other_events is True
        assert list(facts.events) == [*COMMAND_EVENT_TYPES, "schedule"]
        assert facts.events["schedule"] == [{"cron": "0 9 * * 1"}]

    @pytest.mark.parametrize(
        "event", ["issues", "issue_comment", "pull_request", "pull_request_review_comment"]
    )
    def test_conflicting_event(self, event: str) -> None:
        """command cannot be combined with a command event."""
        with pytest.raises(ConfigError, match="conflicts with event"):
            analyze_triggers({"command": {"name": "triage"}, event: None}, "wf")

    def test_non_string_name(self) -> None:
        """command.name must be a string."""
        with pytest.raises(ConfigError, match="Invalid command name"):
            analyze_triggers({"command": {"name": 5}}, "wf")

    def test_invalid_command_value(self) -> None:
        """command: [list] is invalid."""
        with pytest.raises(ConfigError, match="Invalid 'command' trigger"):
            analyze_triggers({"command": ["a"]}, "wf")

    def test_blank_default(self) -> None:
        """A command needs some name."""
        with pytest.raises(ConfigError, match="cannot be empty"):
            analyze_triggers({"command": None}, "  ")


# =============================================================================
# Test: metadata and filters
# =============================================================================


class TestMetadataKeys:
    """reaction and stop-after are not events."""

    def test_reaction_extracted(self) -> None:
        """reaction is recorded and removed from events."""
        facts = analyze_triggers({"issues": None, "reaction": "eyes"}, "wf")
        assert facts.reaction == "eyes"
        assert facts.events == {"issues": None}

    def test_stop_after_removed(self) -> None:
        """stop-after does not count as another event."""
        facts = analyze_triggers({"command": {"name": "x"}, "stop-after": "+48h"}, "wf")
        assert facts.has_other_events is False
        assert "stop-after" not in facts.events

    def test_non_string_reaction(self) -> None:
        """reaction must be a name."""
        with pytest.raises(ConfigError, match="Invalid on.reaction"):
            analyze_triggers({"push": None, "reaction": ["eyes"]}, "wf")


class TestLabelFilters:
    """names under issues/pull_request."""

    def test_names_collected_in_order(self) -> None:
        """Names from both events, unique, in declaration order."""
        facts = analyze_triggers(
            {
                "issues": {"types": ["labeled"], "names": ["bug", "docs"]},
                "pull_request": {"types": ["labeled"], "names": ["docs", "ci"]},
            },
            "wf",
        )
        assert facts.label_names == ("bug", "docs", "ci")

    def test_string_names(self) -> None:
        """A single name may be a string."""
        facts = analyze_triggers({"issues": {"names": "bug"}}, "wf")
        assert facts.label_names == ("bug",)

    def test_names_stripped_from_events(self) -> None:
        """names is a filter and is not emitted."""
        facts = analyze_triggers({"issues": {"types": ["labeled"], "names": ["bug"]}}, "wf")
        assert facts.events == {"issues": {"types": ["labeled"]}}

    def test_only_names_leaves_null_event(self) -> None:
        """An event left without options is emitted as null."""
        facts = analyze_triggers({"issues": {"names": ["bug"]}}, "wf")
        assert facts.events == {"issues": None}

    def test_non_string_name_rejected(self) -> None:
        """YAML numbers must be quoted as label names."""
        with pytest.raises(ConfigError, match="Invalid label name"):
            analyze_triggers({"issues": {"names": [123]}}, "wf")

    def test_names_mapping_rejected(self) -> None:
        """names must be a list."""
        with pytest.raises(ConfigError, match="expected a list of label names"):
            analyze_triggers({"issues": {"names": {"a": 1}}}, "wf")

    @pytest.mark.parametrize(
        ("on_value", "expected"),
        [
            ({"issues": {"types": ["labeled"], "names": ["bug"]}}, True),
            ({"issues": {"types": ["labeled", "unlabeled"], "names": ["bug"]}}, True),
            (
                {
                    "issues": {"types": ["labeled"], "names": ["bug"]},
                    "pull_request": {"types": ["unlabeled"]},
                },
                True,
            ),
            ({"issues": {"types": ["labeled", "opened"], "names": ["bug"]}}, False),
            ({"issues": {"names": ["bug"]}}, False),
            ({"issues": {"types": [], "names": ["bug"]}}, False),
            ({"issues": {"types": ["labeled"], "names": ["bug"]}, "push": None}, False),
        ],
    )
    def test_label_events_only(self, on_value: dict, expected: bool) -> None:
        """Only triggers restricted to labeling actions qualify."""
        assert analyze_triggers(on_value, "wf").label_events_only is expected


class TestDraftFilter:
    """draft under pull_request."""

    def test_draft_false(self) -> None:
        """draft: false is recorded and not emitted."""
        facts = analyze_triggers({"pull_request": {"types": ["opened"], "draft": False}}, "wf")
        assert facts.draft is False
        assert facts.events == {"pull_request": {"types": ["opened"]}}

    def test_no_draft(self) -> None:
        """Without draft there is no filter."""
        assert analyze_triggers({"pull_request": None}, "wf").draft is None

    def test_non_bool_ignored(self, caplog: pytest.LogCaptureFixture) -> None:
        """Non-boolean values are ignored with a warning."""
        with caplog.at_level(logging.WARNING):
            facts = analyze_triggers({"pull_request": {"draft": "no"}}, "wf")
        assert facts.draft is None
        assert "draft" in caplog.text
