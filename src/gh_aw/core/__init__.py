"""Core infrastructure shared across gh-aw modules."""

from gh_aw.core.exceptions import (
    CompilerError,
    ConfigError,
    ExpressionError,
    GhAwError,
    ParserError,
)

__all__ = [
    "GhAwError",
    "ConfigError",
    "ParserError",
    "CompilerError",
    "ExpressionError",
]
