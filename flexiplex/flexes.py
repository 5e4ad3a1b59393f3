"""Standard ring flex sets for a given pat count."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Optional

from .atomic_flexes import (
    AtomicFlex,
    atomic_to_flex,
    derive_atomic_flex,
    derive_atomic_flexes,
    make_atomic_flexes,
)
from .definitions import RING_DEFINITIONS, FlexDefinition
from .errors import FlexError, config_invalid_definition
from .flex import Flex, FlexRotation, make_flex
from .flexagon import Flexagon

if TYPE_CHECKING:
    from .config_loader import FlexConfig

ROTATION_NAMES = (">", "<", "^", "~", ">'", "<'", "^'", "~'")


def make_rotation_flexes(pat_count: int) -> Dict[str, Flex]:
    """Reorientations that never change the pat structure.

    ``>`` and ``<`` shift the current vertex, ``^`` turns the flexagon over
    and ``~`` turns it over on the axis through the current vertex. Each also
    has a primed inverse so every name the formula grammar accepts resolves.
    """
    ids = list(range(1, pat_count + 1))
    flexes = {
        ">": make_flex(">", ids, ids[1:] + ids[:1], FlexRotation.MIRROR, "shift one vertex clockwise"),
        "<": make_flex("<", ids, ids[-1:] + ids[:-1], FlexRotation.MIRROR, "shift one vertex counterclockwise"),
        "^": make_flex("^", ids, [-i for i in reversed(ids)], FlexRotation.NONE, "turn over"),
        "~": make_flex("~", ids, [-ids[0]] + [-i for i in reversed(ids[1:])], FlexRotation.NONE,
                       "turn over, keeping the current vertex"),
    }
    result: Dict[str, Flex] = {}
    for flex in flexes.values():
        if isinstance(flex, Flex):
            _add_with_inverse(result, flex)
    return result


def _ring_flex_from_definition(
    definition: FlexDefinition, atomic: Dict[str, Any]
) -> Any:
    derived = derive_atomic_flex(definition, atomic, validate=definition.output is not None)
    if not isinstance(derived, AtomicFlex):
        return derived
    return atomic_to_flex(definition.name, derived, definition.rotation)


def _add_with_inverse(flexes: Dict[str, Flex], flex: Flex) -> None:
    flexes[flex.name] = flex
    inverse = flex.inverse()
    flexes[inverse.name] = inverse


def make_all_flexes(pat_count: int, logger: Any = None) -> Dict[str, Flex]:
    """Rotations plus every built-in ring flex for ``pat_count``, with inverses."""
    flexes = make_rotation_flexes(pat_count)
    definitions = RING_DEFINITIONS.get(pat_count, [])
    if not definitions:
        return flexes

    atomic = make_atomic_flexes(logger=logger)
    for definition in definitions:
        flex = _ring_flex_from_definition(definition, atomic)
        if not isinstance(flex, Flex):
            if logger:
                logger.warning("Skipping flex %s: %s", definition.name, flex.code.value)
            continue
        _add_with_inverse(flexes, flex)
    return flexes


def build_flexes(config: FlexConfig, pat_count: int, logger: Any = None) -> Dict[str, Flex]:
    """The standard flex set for ``pat_count`` extended with a loaded config.

    Configured flexes for other pat counts are ignored. A definition that
    fails to derive raises ``ConfigError``.
    """
    flexes = make_all_flexes(pat_count, logger=logger)
    atomic, errors = derive_atomic_flexes(
        config.atomic, make_atomic_flexes(logger=logger), validate=True
    )
    if errors:
        name, error = errors[0]
        raise config_invalid_definition(name, error)

    for item in config.flexes:
        if isinstance(item, FlexDefinition):
            flex = _ring_flex_from_definition(item, atomic)
            if not isinstance(flex, Flex):
                raise config_invalid_definition(item.name, flex)
        else:
            flex = item
        if flex.pattern.get_pat_count() != pat_count:
            if logger:
                logger.debug("Ignoring flex %s for %d pats", flex.name, flex.pattern.get_pat_count())
            continue
        _add_with_inverse(flexes, flex)
    return flexes


def get_prime_flexes(all_flexes: Dict[str, Flex], names: Optional[List[str]] = None) -> Dict[str, Flex]:
    """The flexes worth offering a user: no rotations and no inverses.

    Pass ``names`` to restrict the result further.
    """
    prime: Dict[str, Flex] = {}
    for name, flex in all_flexes.items():
        if name in ROTATION_NAMES or name.endswith("'"):
            continue
        if names is not None and name not in names:
            continue
        prime[name] = flex
    return prime


def check_for_flexes(flexagon: Flexagon, flexes: Dict[str, Flex]) -> List[str]:
    """Names of the flexes that can be applied at the current vertex."""
    return [
        name
        for name, flex in flexes.items()
        if not isinstance(flex.apply_here(flexagon), FlexError)
    ]
