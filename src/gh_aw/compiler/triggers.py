"""Analysis of a workflow's ``on:`` section.

The ``on:`` section mixes real trigger events with gating directives that
the compiler turns into conditions instead of emitting them:

    on:
      command:
        name: triage          # /triage mentions (synthesizes comment events)
      issues:
        types: [labeled]
        names: [bug, needs-triage]   # label filter
      pull_request:
        draft: false          # draft filter
      reaction: eyes          # metadata, not an event
      stop-after: +48h        # metadata, not an event

analyze_triggers() extracts those directives as TriggerFacts and returns the
event mapping that is actually emitted.
"""

import logging
from typing import Any

from gh_aw.compiler.gating.command import COMMAND_EVENTS
from gh_aw.compiler.gating.labels import LABEL_EVENTS, LABELING_ACTIONS
from gh_aw.compiler.types import TriggerFacts
from gh_aw.core.exceptions import ConfigError

logger = logging.getLogger(__name__)

__all__ = [
    "COMMAND_KEY",
    "METADATA_KEYS",
    "COMMAND_EVENT_TYPES",
    "analyze_triggers",
]

COMMAND_KEY = "command"

# Keys under ``on:`` that configure the workflow instead of naming an event
METADATA_KEYS: tuple[str, ...] = ("reaction", "stop-after")

# Filter-only keys consumed by the compiler, never emitted
_FILTER_KEYS: tuple[str, ...] = ("names", "draft")

# Activity types subscribed for each synthesized command event
COMMAND_EVENT_TYPES: dict[str, list[str]] = {
    "issues": ["opened", "edited", "reopened"],
    "issue_comment": ["created", "edited"],
    "pull_request": ["opened", "edited", "reopened"],
    "pull_request_review_comment": ["created", "edited"],
}


def _normalize_on(on_value: Any) -> dict[str, Any]:
    """Coerce the string, list and mapping forms of ``on:`` to a mapping."""
    if on_value is None:
        return {}
    if isinstance(on_value, str):
        return {on_value: None}
    if isinstance(on_value, list):
        events: dict[str, Any] = {}
        for item in on_value:
            if not isinstance(item, str):
                raise ConfigError(
                    f"Invalid trigger event: {item!r}\n"
                    f"  Suggestion: List event names as strings, e.g. on: [push, issues]"
                )
            events[item] = None
        return events
    if isinstance(on_value, dict):
        return {str(key): value for key, value in on_value.items()}
    raise ConfigError(
        f"Invalid 'on' section: expected a string, list or mapping, "
        f"got {type(on_value).__name__}\n"
        f"  Suggestion: Use e.g. 'on: issues' or 'on: {{issues: {{types: [opened]}}}}'"
    )


def _command_name(value: Any, default_command: str) -> str:
    """Resolve the command name from ``on.command``."""
    if value is None:
        name = default_command
    elif isinstance(value, str):
        name = value
    elif isinstance(value, dict):
        configured = value.get("name")
        if configured is not None and not isinstance(configured, str):
            raise ConfigError(
                f"Invalid command name: {configured!r}\n"
                f"  Suggestion: Use a string, e.g. command: {{name: triage}}"
            )
        name = configured or default_command
    else:
        raise ConfigError(
            f"Invalid 'command' trigger: expected a name or mapping, got {type(value).__name__}\n"
            f"  Suggestion: Use 'command: triage' or 'command: {{name: triage}}'"
        )

    name = name.strip().lstrip("/")
    if not name:
        raise ConfigError(
            "Command name cannot be empty\n"
            "  Suggestion: Set on.command.name or name the workflow file after the command"
        )
    return name


def _label_names(events: dict[str, Any]) -> tuple[str, ...]:
    """Collect ``names`` filters of labeling events, unique in declaration order."""
    names: dict[str, None] = {}
    for event in LABEL_EVENTS:
        config = events.get(event)
        if not isinstance(config, dict) or config.get("names") is None:
            continue
        raw_names = config["names"]
        if isinstance(raw_names, str):
            raw_names = [raw_names]
        if not isinstance(raw_names, list):
            raise ConfigError(
                f"Invalid on.{event}.names: expected a list of label names, "
                f"got {type(raw_names).__name__}\n"
                f"  Suggestion: Use e.g. names: [bug, enhancement]"
            )
        for name in raw_names:
            if not isinstance(name, str):
                raise ConfigError(
                    f"Invalid label name in on.{event}.names: {name!r}\n"
                    f"  Suggestion: Quote label names that YAML reads as numbers or booleans"
                )
            if name.strip():
                names[name.strip()] = None
    return tuple(names)


def _draft_filter(events: dict[str, Any]) -> bool | None:
    config = events.get("pull_request")
    if not isinstance(config, dict) or "draft" not in config:
        return None
    draft = config["draft"]
    if not isinstance(draft, bool):
        logger.warning("Ignoring non-boolean on.pull_request.draft value: %r", draft)
        return None
    return draft


def _is_label_events_only(events: dict[str, Any]) -> bool:
    """True if every event is a labeling-only issues/pull_request event."""
    if not events:
        return False
    for event, config in events.items():
        if event not in LABEL_EVENTS or not isinstance(config, dict):
            return False
        types = config.get("types")
        if not isinstance(types, list) or not types:
            return False
        if any(action not in LABELING_ACTIONS for action in types):
            return False
    return True


def _strip_filter_keys(events: dict[str, Any]) -> dict[str, Any]:
    emitted: dict[str, Any] = {}
    for event, config in events.items():
        if isinstance(config, dict) and event in LABEL_EVENTS:
            config = {key: value for key, value in config.items() if key not in _FILTER_KEYS}
            if not config:
                config = None
        emitted[event] = config
    return emitted


def analyze_triggers(on_value: Any, default_command: str) -> TriggerFacts:
    """Extract gating facts from the ``on:`` section.

    Args:
        on_value: Raw ``on:`` value (None, string, list or mapping).
        default_command: Command name used when ``command`` names none
            (the workflow file stem).

    Returns:
        TriggerFacts with the events to emit.

    Raises:
        ConfigError: If ``command`` is combined with a command event,
            or a trigger directive is malformed.

    """
    events = _normalize_on(on_value)

    reaction = events.pop("reaction", None)
    if reaction is not None and not isinstance(reaction, str):
        raise ConfigError(
            f"Invalid on.reaction: {reaction!r}\n"
            f"  Suggestion: Use a reaction name, e.g. reaction: eyes"
        )
    for key in METADATA_KEYS:
        events.pop(key, None)

    command = None
    if COMMAND_KEY in events:
        command = _command_name(events.pop(COMMAND_KEY), default_command)
        conflicting = [event for event in COMMAND_EVENTS if event in events]
        if conflicting:
            raise ConfigError(
                f"Command trigger '/{command}' conflicts with event(s): "
                f"{', '.join(conflicting)}\n"
                f"  Why: command workflows already subscribe to {', '.join(COMMAND_EVENTS)}\n"
                f"  Suggestion: Remove the conflicting events or the command trigger"
            )

    label_names = _label_names(events)
    draft = _draft_filter(events)
    label_events_only = command is None and _is_label_events_only(events)
    has_other_events = command is not None and bool(events)

    emitted = _strip_filter_keys(events)
    if command is not None:
        command_events: dict[str, Any] = {
            event: {"types": list(types)} for event, types in COMMAND_EVENT_TYPES.items()
        }
        emitted = {**command_events, **emitted}

    logger.debug(
        "Triggers: command=%s other_events=%s labels=%s draft=%s",
        command,
        has_other_events,
        label_names,
        draft,
    )
    return TriggerFacts(
        command=command,
        has_other_events=has_other_events,
        label_names=label_names,
        label_events_only=label_events_only,
        draft=draft,
        reaction=reaction,
        events=emitted,
    )
