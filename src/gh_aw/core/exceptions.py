"""Exception hierarchy for gh-aw.

All errors raised by the package derive from GhAwError so callers (the CLI,
or a surrounding compiler pipeline) can abort compilation of the offending
workflow with a single handler.

Hierarchy:
    GhAwError
    ├── ConfigError
    ├── ParserError
    └── CompilerError
        └── ExpressionError
"""

__all__ = [
    "GhAwError",
    "ConfigError",
    "ParserError",
    "CompilerError",
    "ExpressionError",
]


class GhAwError(Exception):
    """Base exception for all gh-aw errors."""


class ConfigError(GhAwError):
    """Invalid workflow configuration.

    Raised when frontmatter is well-formed YAML but describes a workflow
    that cannot be compiled (conflicting triggers, invalid safe-outputs).
    """


class ParserError(GhAwError):
    """Workflow file could not be read or its frontmatter could not be parsed."""


class CompilerError(GhAwError):
    """Compilation of a workflow failed."""


class ExpressionError(CompilerError):
    """Invalid gating expression construction.

    Raised at construction time for builder misuse: empty term sequences,
    malformed property paths, blank raw expressions or non-node children.
    These never degrade to an always-true or always-false gate.

    Attributes:
        node_type: Name of the node variant being constructed, if known.

    """

    def __init__(self, message: str, node_type: str = "") -> None:
        """Initialize ExpressionError.

        Args:
            message: Human-readable error description.
            node_type: Node variant name (e.g. "Conjunction").

        """
        super().__init__(message)
        self.node_type = node_type
