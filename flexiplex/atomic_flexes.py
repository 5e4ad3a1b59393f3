"""Atomic flexes and the formula algebra built on them.

Everything here works on ``AtomicPattern`` values: a hinge with a few pats on
either side and remainder labels for the rest of the strip. Two shifts
(``>`` and ``<``) move the hinge, and pattern flexes rewrite the pats next to
it. New flexes are derived by running a formula against an input pattern
and recording ``(input, result)`` as a new pattern flex.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from .atomic import (
    AtomicPattern,
    ConnectedPat,
    atomic_pattern_to_string,
    negate_remainder,
    string_to_atomic_pattern,
)
from .definitions import ATOMIC_DEFINITIONS, FlexDefinition
from .errors import AtomicCode, AtomicParseError, AtomicPatternError, TreeError
from .flex import Flex, FlexRotation, make_flex
from .formula import FlexName, parse_flex_sequence
from .pat import Bindings, match_pat, substitute

AtomicResult = Union[AtomicPattern, AtomicPatternError]


@dataclass(frozen=True)
class _Remainder:
    """The rest of the strip on one side, with any pats not matched there.

    ``pats`` run outward from the hinge. ``side`` is where they were found.
    """

    label: str
    pats: Tuple[ConnectedPat, ...]
    side: str

    def flipped(self) -> "_Remainder":
        return _Remainder(
            negate_remainder(self.label), tuple(cp.flipped() for cp in self.pats), self.side
        )

    def placed(self, label: str, side: str) -> Tuple[str, Tuple[ConnectedPat, ...]]:
        remainder = self.flipped() if label.startswith("-") else self
        pats = remainder.pats
        if remainder.side != side:
            pats = tuple(cp.toggled() for cp in pats)
        return remainder.label, pats


@dataclass(frozen=True)
class AtomicShift:
    """``>`` moves the first pat right of the hinge to the left; ``<`` undoes it."""

    name: str
    description: str = ""

    def apply(self, pattern: AtomicPattern) -> AtomicResult:
        if self.name == ">":
            if not pattern.right:
                return AtomicPatternError(AtomicCode.NOT_ENOUGH_PATS, self.name)
            return AtomicPattern(
                pattern.other_left,
                pattern.left + pattern.right[:1],
                pattern.right[1:],
                pattern.other_right,
            )
        if not pattern.left:
            return AtomicPatternError(AtomicCode.NOT_ENOUGH_PATS, self.name)
        return AtomicPattern(
            pattern.other_left,
            pattern.left[:-1],
            pattern.left[-1:] + pattern.right,
            pattern.other_right,
        )

    def inverse(self) -> "AtomicShift":
        return AtomicShift("<" if self.name == ">" else ">", self.description)


@dataclass(frozen=True)
class AtomicFlex:
    name: str
    pattern: AtomicPattern
    output: AtomicPattern
    description: str = ""

    def apply(self, input: AtomicPattern) -> AtomicResult:
        pattern = self.pattern
        if len(pattern.left) > len(input.left) or len(pattern.right) > len(input.right):
            return AtomicPatternError(AtomicCode.NOT_ENOUGH_PATS, self.name)

        bindings: Bindings = {}
        offset = len(input.left) - len(pattern.left)
        matched = zip(
            pattern.left + pattern.right,
            input.left[offset:] + input.right[: len(pattern.right)],
        )
        for want, have in matched:
            if want.direction != have.direction or not match_pat(want.pat, have.pat, bindings):
                return AtomicPatternError(
                    AtomicCode.PATTERN_MISMATCH,
                    self.name,
                    atomic_pattern_to_string(pattern),
                    atomic_pattern_to_string(input),
                )

        remainders: Dict[str, _Remainder] = {}
        for label, remainder in (
            (pattern.other_left, _Remainder(input.other_left, input.left[:offset][::-1], "L")),
            (pattern.other_right, _Remainder(input.other_right, input.right[len(pattern.right):], "R")),
        ):
            if label.startswith("-"):
                remainder = remainder.flipped()
            remainders[label.lstrip("-")] = remainder

        out = self.output
        left_label, left_pats = remainders[out.other_left.lstrip("-")].placed(out.other_left, "L")
        right_label, right_pats = remainders[out.other_right.lstrip("-")].placed(out.other_right, "R")
        return AtomicPattern(
            left_label,
            left_pats[::-1] + tuple(ConnectedPat(substitute(cp.pat, bindings), cp.direction) for cp in out.left),
            tuple(ConnectedPat(substitute(cp.pat, bindings), cp.direction) for cp in out.right) + right_pats,
            right_label,
        )

    def inverse(self) -> "AtomicFlex":
        name = self.name[:-1] if self.name.endswith("'") else self.name + "'"
        return AtomicFlex(name, self.output, self.pattern, self.description)


AnyAtomicFlex = Union[AtomicShift, AtomicFlex]


def _pattern_flex(name: str, pattern: str, output: str, description: str) -> AtomicFlex:
    parsed_pattern = string_to_atomic_pattern(pattern)
    if isinstance(parsed_pattern, AtomicParseError):
        raise parsed_pattern.to_exception()
    parsed_output = string_to_atomic_pattern(output)
    if isinstance(parsed_output, AtomicParseError):
        raise parsed_output.to_exception()
    return AtomicFlex(name, parsed_pattern, parsed_output, description)


def make_base_atomic_flexes() -> Dict[str, AnyAtomicFlex]:
    """The primitives every formula is ultimately written in."""
    flexes: Dict[str, AnyAtomicFlex] = {
        ">": AtomicShift(">", "move the hinge one pat to the right"),
        "<": AtomicShift("<", "move the hinge one pat to the left"),
        "^": _pattern_flex("^", "a / b", "-b / -a", "turn over"),
        "~": _pattern_flex("~", "a / b", "-a / -b", "flip the strip at the hinge"),
        "Ur": _pattern_flex("Ur", "a / [-2,1] > b", "a / 1 < 2 > -b", "unfold a pair to the right"),
    }
    return _with_inverses(flexes)


def _with_inverses(flexes: Dict[str, AnyAtomicFlex]) -> Dict[str, AnyAtomicFlex]:
    result = dict(flexes)
    for name, flex in flexes.items():
        if name in (">", "<") or name.endswith("'"):
            continue
        result[name + "'"] = flex.inverse()
    result[">'"] = flexes[">"].inverse()
    result["<'"] = flexes["<"].inverse()
    return result


def apply_atomic_flex(
    name: FlexName, pattern: AtomicPattern, flexes: Dict[str, AnyAtomicFlex]
) -> AtomicResult:
    # Structure generation ("+") only means something for ring flexes.
    flex = flexes.get(name.full_name)
    if flex is None:
        return AtomicPatternError(AtomicCode.UNKNOWN_FLEX, name.full_name)
    return flex.apply(pattern)


def apply_atomic_formula(
    formula: str,
    input: Union[str, AtomicPattern],
    flexes: Dict[str, AnyAtomicFlex],
) -> Union[AtomicPattern, AtomicPatternError, AtomicParseError]:
    """Run every flex in ``formula`` against ``input``, left to right."""
    names = parse_flex_sequence(formula)
    if isinstance(names, AtomicParseError):
        return names

    if isinstance(input, str):
        parsed = string_to_atomic_pattern(input)
        if isinstance(parsed, AtomicParseError):
            return parsed
        input = parsed

    current = input
    for name in names:
        result = apply_atomic_flex(name, current, flexes)
        if isinstance(result, AtomicPatternError):
            return result
        current = result
    return current


def derive_atomic_flex(
    definition: FlexDefinition,
    flexes: Dict[str, AnyAtomicFlex],
    validate: bool = False,
) -> Union[AtomicFlex, AtomicPatternError, AtomicParseError]:
    """Turn a formula into a new pattern flex by running it on its input."""
    input = string_to_atomic_pattern(definition.input)
    if isinstance(input, AtomicParseError):
        return input

    result = apply_atomic_formula(definition.formula, input, flexes)
    if not isinstance(result, AtomicPattern):
        return result

    if validate and definition.output is not None:
        expected = string_to_atomic_pattern(definition.output)
        if isinstance(expected, AtomicParseError):
            return expected
        if expected != result:
            return AtomicPatternError(
                AtomicCode.OUTPUT_MISMATCH,
                definition.name,
                atomic_pattern_to_string(expected),
                atomic_pattern_to_string(result),
            )

    return AtomicFlex(definition.name, input, result, definition.description)


def derive_atomic_flexes(
    definitions: Iterable[FlexDefinition],
    flexes: Dict[str, AnyAtomicFlex],
    validate: bool = False,
) -> Tuple[Dict[str, AnyAtomicFlex], List[Tuple[str, Any]]]:
    """Derive each definition in order, letting later ones use earlier ones.

    Returns the extended flex set and a list of ``(name, error)`` for the
    definitions that failed. Failed definitions are not registered.
    """
    result = dict(flexes)
    errors: List[Tuple[str, Any]] = []
    for definition in definitions:
        flex = derive_atomic_flex(definition, result, validate)
        if not isinstance(flex, AtomicFlex):
            errors.append((definition.name, flex))
            continue
        result[flex.name] = flex
        result[flex.name + "'"] = flex.inverse()
    return result, errors


def make_atomic_flexes(
    extra: Iterable[FlexDefinition] = (),
    validate: bool = False,
    logger: Any = None,
) -> Dict[str, AnyAtomicFlex]:
    """Base flexes plus every built-in derived flex, with inverses."""
    definitions = list(ATOMIC_DEFINITIONS) + list(extra)
    flexes, errors = derive_atomic_flexes(definitions, make_base_atomic_flexes(), validate)
    for name, error in errors:
        if logger:
            logger.warning("Skipping atomic flex %s: %s", name, error.code.value)
    return flexes


def atomic_to_flex(
    name: str,
    flex: AtomicFlex,
    rotation: FlexRotation = FlexRotation.MIRROR,
) -> Union[Flex, TreeError]:
    """Convert a closed atomic flex into a ring flex.

    The ring starts at the first pat right of the hinge and wraps round to the
    left side, so the pats just left of the hinge end up at the end.
    """
    pattern = [cp.pat.to_tree() for cp in flex.pattern.right + flex.pattern.left]
    output = [cp.pat.to_tree() for cp in flex.output.right + flex.output.left]
    return make_flex(name, pattern, output, rotation, flex.description)
