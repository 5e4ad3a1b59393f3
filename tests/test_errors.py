"""Tests for structured error messages.

These tests verify that errors follow the what/why/fix/context contract
and that the formatting doesn't regress.
"""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from flexiplex import ConfigError, FlexagonError, FlexiplexError
from flexiplex.config_loader import ConfigLoader
from flexiplex.errors import (
    AtomicCode,
    AtomicParseError,
    AtomicPatternError,
    ErrorContext,
    FlexCode,
    FlexError,
    ParseCode,
    TreeCode,
    TreeError,
    config_invalid_definition,
    config_missing_field,
    config_wrong_type,
    is_error,
)


# --- ErrorContext tests ---


def test_error_context_empty():
    """Empty context formats to empty string."""
    ctx = ErrorContext()
    assert ctx.format() == ""


def test_error_context_single_item():
    """Single item formats correctly."""
    ctx = ErrorContext()
    ctx.add("path", "/foo/bar")
    assert "path='/foo/bar'" in ctx.format()


def test_error_context_chaining():
    """add() returns self for chaining."""
    ctx = ErrorContext().add("a", 1).add("b", 2)
    formatted = ctx.format()
    assert "a=1" in formatted
    assert "b=2" in formatted


# --- FlexiplexError tests ---


def test_error_what_only():
    """Error with only 'what' formats to that line."""
    err = FlexiplexError("Something happened")
    assert str(err) == "Something happened"


def test_error_full_format():
    """Error with all parts includes Why, Fix and Context sections."""
    ctx = ErrorContext().add("key", "value")
    err = FlexiplexError("What", why="Because", fix="Do this", context=ctx)
    message = str(err)
    assert message.startswith("What")
    assert "Why: Because" in message
    assert "Fix: Do this" in message
    assert "Context:\n  key='value'" in message


def test_error_hierarchy():
    """ConfigError and FlexagonError share the base class."""
    assert issubclass(ConfigError, FlexiplexError)
    assert issubclass(FlexagonError, FlexiplexError)


# --- error value tests ---


def test_tree_error_format():
    """Tree errors name their code and explain it."""
    message = TreeError(TreeCode.DUPLICATE_LEAF, 3).format()
    assert message.startswith("Invalid pat structure: DuplicateLeaf")
    assert "Why: Each leaf id may appear only once" in message
    assert "detail=3" in message


def test_flex_error_format():
    """Flex errors name the flex."""
    assert str(FlexError(FlexCode.UNKNOWN_FLEX, "Zz")).startswith("Unknown flex: 'Zz'")
    assert str(FlexError(FlexCode.CANT_APPLY_FLEX, "P")).startswith("Can't apply flex: 'P'")


def test_parse_error_format():
    """Parse errors carry the text and position."""
    message = AtomicParseError(ParseCode.UNBALANCED_PARENS, "(Ur", 3).format()
    assert message.startswith("Parse error: UnbalancedParens")
    assert "text='(Ur'" in message
    assert "position=3" in message


def test_atomic_pattern_error_format():
    """Atomic errors show the expected and actual patterns."""
    err = AtomicPatternError(AtomicCode.OUTPUT_MISMATCH, "Bad", "a / b", "b / a")
    message = err.format()
    assert message.startswith("Atomic flex failed: OutputMismatch")
    assert "expected='a / b'" in message
    assert "actual='b / a'" in message


def test_error_values_compare_by_value():
    """Error values are plain data."""
    assert FlexError(FlexCode.UNKNOWN_FLEX, "X") == FlexError(FlexCode.UNKNOWN_FLEX, "X")
    assert FlexError(FlexCode.UNKNOWN_FLEX, "X") != FlexError(FlexCode.CANT_APPLY_FLEX, "X")


def test_to_exception():
    """Error values can be raised as FlexagonError."""
    with pytest.raises(FlexagonError, match="Unknown flex: 'Zz'"):
        raise FlexError(FlexCode.UNKNOWN_FLEX, "Zz").to_exception()


def test_is_error():
    """is_error recognizes every error value and nothing else."""
    assert is_error(TreeError(TreeCode.BAD_LEAF))
    assert is_error(AtomicPatternError(AtomicCode.UNKNOWN_FLEX))
    assert not is_error(ConfigError("x"))
    assert not is_error(True)


# --- helper constructor tests ---


def test_config_missing_field():
    """Missing field error has the field and path."""
    err = config_missing_field("flexes[0].name", "/path/to/config.yaml")
    message = str(err)
    assert "Config missing required field: 'flexes[0].name'" in message
    assert "config_path='/path/to/config.yaml'" in message


def test_config_wrong_type():
    """Wrong type error has the expected and actual types."""
    message = str(config_wrong_type("numPats", "int", "str"))
    assert "Config field 'numPats' has wrong type" in message
    assert "Expected int, but got str." in message


def test_config_invalid_definition():
    """Invalid definition error uses the first line of the cause."""
    err = config_invalid_definition("Bad", FlexError(FlexCode.UNKNOWN_FLEX, "Zz"))
    assert err.what == "Invalid flex definition: 'Bad'"
    assert err.why == "Unknown flex: 'Zz'"
    assert "flex='Bad'" in str(err)


# --- integration: errors raised by the loader ---


def test_loader_error_is_config_error(tmp_path: Path):
    """Loader errors are ConfigErrors with a config_path."""
    p = tmp_path / "config.yaml"
    p.write_text(
        textwrap.dedent(
            """\
            flexes:
              - name: A
                input: [1, 2]
                output: [1, 2, 3]
            """
        ),
        encoding="utf-8",
    )
    with pytest.raises(ConfigError) as exc_info:
        ConfigLoader.load_flex_config(p)
    assert "PatCountMismatch" in str(exc_info.value)
    assert "config_path=" in str(exc_info.value)
