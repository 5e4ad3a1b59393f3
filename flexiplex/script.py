"""Scripts: a list of steps that build and flex a flexagon.

``angles`` and ``directions`` only matter to renderers; they are carried
through untouched.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Union

from .errors import AtomicParseError, FlexError, TreeCode, TreeError
from .flex import Flex
from .flexagon import make_flexagon
from .manager import FlexagonManager

ScriptError = Union[TreeError, FlexError, AtomicParseError]


@dataclass(frozen=True)
class ScriptItem:
    num_pats: Optional[int] = None
    pats: Optional[List[Any]] = None
    angles: Optional[List[float]] = None
    directions: Optional[str] = None
    flexes: Optional[str] = None


def run_script(
    items: Iterable[ScriptItem],
    manager: Optional[FlexagonManager] = None,
    flexes: Optional[Dict[str, Flex]] = None,
    logger: Any = None,
) -> Union[FlexagonManager, ScriptError]:
    """Run each item in order and return the manager that results.

    ``pats`` or ``num_pats`` start a fresh flexagon (using ``flexes`` as its
    flex set when given); ``flexes`` strings are applied to whatever
    flexagon is current.
    """
    for item in items:
        tree: Optional[List[Any]] = None
        if item.pats is not None:
            tree = item.pats
        elif item.num_pats is not None:
            tree = list(range(1, item.num_pats + 1))

        if tree is not None:
            flexagon = make_flexagon(tree)
            if isinstance(flexagon, TreeError):
                return flexagon
            manager = FlexagonManager(flexagon, flexes, logger=logger)

        if item.flexes:
            if manager is None:
                return TreeError(TreeCode.TOO_FEW_PATS, "flexes given before any pats")
            result = manager.apply_flexes(item.flexes)
            if result is not True:
                return result

    if manager is None:
        return TreeError(TreeCode.TOO_FEW_PATS, "script never creates a flexagon")
    return manager
