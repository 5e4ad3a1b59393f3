"""Flexiplex error types with structured, actionable messages.

Error Contract:
Every user-facing error includes:
- What happened (one sentence, plain English)
- Why (root cause, not stack trace)
- Fix (specific, actionable)
- Context (relevant keys/paths, trimmed)

Core operations (building flexagons, applying flexes, parsing formulas) never
raise. They return one of the error values defined below, which carry a
machine-checkable code plus the same what/why/fix layout when formatted.
Exceptions are reserved for configuration problems and for callers that ask
to unwrap an error value with ``to_exception()``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional


@dataclass
class ErrorContext:
    """Structured context for error messages."""

    items: Dict[str, Any] = field(default_factory=dict)

    def add(self, key: str, value: Any) -> "ErrorContext":
        """Add a context item, returning self for chaining."""
        self.items[key] = value
        return self

    def format(self) -> str:
        """Format context as indented key=value lines."""
        if not self.items:
            return ""
        lines = [f"  {k}={v!r}" for k, v in self.items.items()]
        return "\n".join(lines)


def _format_message(
    what: str, why: Optional[str], fix: Optional[str], context: ErrorContext
) -> str:
    lines = [what]

    if why:
        lines.append(f"\nWhy: {why}")

    if fix:
        lines.append(f"\nFix: {fix}")

    ctx = context.format()
    if ctx:
        lines.append(f"\nContext:\n{ctx}")

    return "".join(lines)


class FlexiplexError(Exception):
    """Base exception for Flexiplex with structured error messages.

    Attributes:
        what: One-sentence description of what happened
        why: Root cause explanation
        fix: Actionable fix suggestion
        context: Relevant debugging context
    """

    def __init__(
        self,
        what: str,
        *,
        why: Optional[str] = None,
        fix: Optional[str] = None,
        context: Optional[ErrorContext] = None,
    ):
        self.what = what
        self.why = why
        self.fix = fix
        self.context = context or ErrorContext()

        super().__init__(_format_message(self.what, self.why, self.fix, self.context))


class ConfigError(FlexiplexError):
    """Error loading or validating configuration."""

    pass


class FlexagonError(FlexiplexError):
    """An error value from the flex engine, raised on request."""

    pass


# --- Error values returned by core operations ---


class TreeCode(str, Enum):
    TOO_FEW_PATS = "TooFewPats"
    ARRAY_LENGTH = "ArrayLength"
    BAD_LEAF = "BadLeaf"
    DUPLICATE_LEAF = "DuplicateLeaf"
    PAT_COUNT_MISMATCH = "PatCountMismatch"
    LEAF_MISMATCH = "LeafMismatch"


class FlexCode(str, Enum):
    UNKNOWN_FLEX = "UnknownFlex"
    CANT_APPLY_FLEX = "CantApplyFlex"


class ParseCode(str, Enum):
    MISSING_REMAINDER = "MissingRemainder"
    BAD_TOKEN = "BadToken"
    UNBALANCED_BRACKETS = "UnbalancedBrackets"
    UNBALANCED_PARENS = "UnbalancedParens"
    BAD_PAIR = "BadPair"
    MISSING_DIRECTION = "MissingDirection"
    SLASH_COUNT = "SlashCount"


class AtomicCode(str, Enum):
    UNKNOWN_FLEX = "UnknownFlex"
    PATTERN_MISMATCH = "PatternMismatch"
    NOT_ENOUGH_PATS = "NotEnoughPats"
    OUTPUT_MISMATCH = "OutputMismatch"


class _ErrorValue:
    """Shared formatting for error values (mirrors FlexiplexError)."""

    def _parts(self) -> tuple:
        raise NotImplementedError

    def format(self) -> str:
        what, why, fix, ctx = self._parts()
        return _format_message(what, why, fix, ctx)

    def to_exception(self) -> FlexagonError:
        what, why, fix, ctx = self._parts()
        return FlexagonError(what, why=why, fix=fix, context=ctx)

    def __str__(self) -> str:
        return self.format()


@dataclass(frozen=True)
class TreeError(_ErrorValue):
    """A literal could not be turned into pats or a flexagon."""

    code: TreeCode
    detail: Any = None

    def _parts(self) -> tuple:
        ctx = ErrorContext().add("code", self.code.value)
        if self.detail is not None:
            ctx.add("detail", self.detail)
        why = {
            TreeCode.TOO_FEW_PATS: "A flexagon needs at least one pat.",
            TreeCode.ARRAY_LENGTH: "Every pair must be a list of exactly two items.",
            TreeCode.BAD_LEAF: "Leaves must be nonzero integers.",
            TreeCode.DUPLICATE_LEAF: "Each leaf id may appear only once (ignoring sign).",
            TreeCode.PAT_COUNT_MISMATCH: "A flex's pattern and output must have the same number of pats.",
            TreeCode.LEAF_MISMATCH: "A flex's output must use exactly the slots its pattern binds.",
        }[self.code]
        return (
            f"Invalid pat structure: {self.code.value}",
            why,
            "Use ints for leaves and [left, right] for pairs, e.g. [[1,2],3,[4,5],6].",
            ctx,
        )


@dataclass(frozen=True)
class FlexError(_ErrorValue):
    """A flex was unknown or could not be applied."""

    code: FlexCode
    flex_name: Optional[str] = None

    def _parts(self) -> tuple:
        ctx = ErrorContext().add("code", self.code.value)
        if self.flex_name is not None:
            ctx.add("flex", self.flex_name)
        if self.code is FlexCode.UNKNOWN_FLEX:
            return (
                f"Unknown flex: '{self.flex_name}'",
                "The flex is not part of the flex set in use.",
                "Check the spelling, or add a definition for it.",
                ctx,
            )
        return (
            f"Can't apply flex: '{self.flex_name}'",
            "The flexagon's pat structure doesn't match the flex's pattern.",
            "Rotate or turn the flexagon over, or use '+' to generate the structure first.",
            ctx,
        )


@dataclass(frozen=True)
class AtomicParseError(_ErrorValue):
    """A pattern string or flex formula could not be parsed."""

    code: ParseCode
    text: Optional[str] = None
    position: Optional[int] = None

    def _parts(self) -> tuple:
        ctx = ErrorContext().add("code", self.code.value)
        if self.text is not None:
            ctx.add("text", self.text)
        if self.position is not None:
            ctx.add("position", self.position)
        return (
            f"Parse error: {self.code.value}",
            "The text doesn't follow the pattern or formula grammar.",
            "Patterns look like 'a 1 > / [-3,2] > b'; formulas like 'Xr >> Xl (K^)2'.",
            ctx,
        )


@dataclass(frozen=True)
class AtomicPatternError(_ErrorValue):
    """An atomic flex could not be applied while running a formula."""

    code: AtomicCode
    flex_name: Optional[str] = None
    expected: Optional[str] = None
    actual: Optional[str] = None

    def _parts(self) -> tuple:
        ctx = ErrorContext().add("code", self.code.value)
        if self.flex_name is not None:
            ctx.add("flex", self.flex_name)
        if self.expected is not None:
            ctx.add("expected", self.expected)
        if self.actual is not None:
            ctx.add("actual", self.actual)
        why = {
            AtomicCode.UNKNOWN_FLEX: "The formula names a flex that hasn't been defined yet.",
            AtomicCode.PATTERN_MISMATCH: "The pats next to the hinge don't match the flex's pattern.",
            AtomicCode.NOT_ENOUGH_PATS: "There are fewer pats next to the hinge than the flex needs.",
            AtomicCode.OUTPUT_MISMATCH: "Running the formula didn't produce the declared output.",
        }[self.code]
        return (
            f"Atomic flex failed: {self.code.value}",
            why,
            "Check the formula and the input pattern it is run against.",
            ctx,
        )


ERROR_TYPES = (TreeError, FlexError, AtomicParseError, AtomicPatternError)


def is_error(value: Any) -> bool:
    """True if ``value`` is one of the error values returned by core operations."""
    return isinstance(value, ERROR_TYPES)


# --- Helper constructors for common errors ---


def config_missing_field(field: str, path: Optional[str] = None) -> ConfigError:
    """Config is missing a required field."""
    ctx = ErrorContext()
    if path:
        ctx.add("config_path", path)
    ctx.add("field", field)

    return ConfigError(
        f"Config missing required field: '{field}'",
        why=f"The '{field}' field is required but was not found in the config.",
        fix=f"Add '{field}' to your config file.",
        context=ctx,
    )


def config_wrong_type(
    field: str, expected: str, got: str, path: Optional[str] = None
) -> ConfigError:
    """Config field has wrong type."""
    ctx = ErrorContext()
    if path:
        ctx.add("config_path", path)
    ctx.add("field", field)
    ctx.add("expected", expected)
    ctx.add("got", got)

    return ConfigError(
        f"Config field '{field}' has wrong type",
        why=f"Expected {expected}, but got {got}.",
        fix=f"Change '{field}' to be a {expected}.",
        context=ctx,
    )


def config_invalid_definition(
    name: str, error: Any, path: Optional[str] = None
) -> ConfigError:
    """A flex definition in a config file is malformed or fails to derive."""
    ctx = ErrorContext()
    if path:
        ctx.add("config_path", path)
    ctx.add("flex", name)
    ctx.add("error", getattr(error, "code", error))

    return ConfigError(
        f"Invalid flex definition: '{name}'",
        why=str(error).splitlines()[0],
        fix="Check the definition's pattern literals or formula.",
        context=ctx,
    )
