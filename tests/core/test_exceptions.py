"""Tests for the gh-aw exception hierarchy."""

import pytest

from gh_aw.core.exceptions import (
    CompilerError,
    ConfigError,
    ExpressionError,
    GhAwError,
    ParserError,
)


class TestExceptionHierarchy:
    """All package errors derive from GhAwError."""

    @pytest.mark.parametrize("error_class", [ConfigError, ParserError, CompilerError])
    def test_inherits_from_base(self, error_class: type[GhAwError]) -> None:
        """Top-level errors are GhAwErrors."""
        assert issubclass(error_class, GhAwError)

    def test_expression_error_is_compiler_error(self) -> None:
        """ExpressionError aborts compilation like any CompilerError."""
        assert issubclass(ExpressionError, CompilerError)
        assert issubclass(ExpressionError, GhAwError)

    def test_can_be_caught_as_base(self) -> None:
        """A single handler catches every package error."""
        with pytest.raises(GhAwError):
            raise ConfigError("bad trigger")


class TestExpressionError:
    """ExpressionError attributes."""

    def test_attributes_stored(self) -> None:
        """Message and node type are stored."""
        err = ExpressionError("empty terms", node_type="Conjunction")
        assert str(err) == "empty terms"
        assert err.node_type == "Conjunction"

    def test_default_node_type(self) -> None:
        """node_type defaults to an empty string."""
        assert ExpressionError("x").node_type == ""

    def test_in_all_exports(self) -> None:
        """ExpressionError is in __all__."""
        from gh_aw.core import exceptions

        assert "ExpressionError" in exceptions.__all__
