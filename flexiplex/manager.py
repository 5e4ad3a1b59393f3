from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from .errors import AtomicParseError, FlexCode, FlexError, TreeError
from .flex import Flex
from .flexagon import Flexagon, make_flexagon
from .flexes import check_for_flexes, get_prime_flexes, make_all_flexes
from .formula import FlexName, parse_flex_sequence
from .history import History
from .logger import get_logger
from .props import PropertiesForLeaves

FlexResult = Union[bool, FlexError, AtomicParseError]


class FlexagonManager:
    """A flexagon plus everything needed to flex it interactively.

    Owns the current flexagon, the flex set, face properties and the
    undo/redo history. Failed operations leave all of them unchanged.
    """

    def __init__(
        self,
        flexagon: Flexagon,
        flexes: Optional[Dict[str, Flex]] = None,
        leaf_props: Optional[PropertiesForLeaves] = None,
        logger: Any = None,
    ):
        self.logger = logger or get_logger("flexiplex")
        self.flexagon = flexagon
        self.all_flexes = (
            flexes if flexes is not None
            else make_all_flexes(flexagon.get_pat_count(), logger=self.logger)
        )
        self.prime_flexes = get_prime_flexes(self.all_flexes)
        self.leaf_props = leaf_props or PropertiesForLeaves()
        self.history = History.start(flexagon)

    @classmethod
    def from_tree(
        cls, tree: Any, flexes: Optional[Dict[str, Flex]] = None, logger: Any = None
    ) -> Union["FlexagonManager", TreeError]:
        flexagon = make_flexagon(tree)
        if isinstance(flexagon, TreeError):
            return flexagon
        return cls(flexagon, flexes, logger=logger)

    def _apply_one(self, flexagon: Flexagon, name: FlexName) -> Union[Flexagon, FlexError]:
        flex = self.all_flexes.get(name.full_name)
        if flex is None:
            return FlexError(FlexCode.UNKNOWN_FLEX, name.full_name)
        if name.should_generate:
            generated = flex.create_pattern(flexagon)
            if isinstance(generated, FlexError):
                return generated
            flexagon = generated
        return flex.apply(flexagon)

    def apply_flexes(self, flexes: Union[str, List[FlexName]]) -> FlexResult:
        """Apply a whole flex sequence as one undoable step, or nothing at all."""
        if isinstance(flexes, str):
            names = parse_flex_sequence(flexes)
            if isinstance(names, AtomicParseError):
                self.logger.debug("Couldn't parse flexes %r: %s", flexes, names.code.value)
                return names
        else:
            names = list(flexes)

        working = self.flexagon
        for name in names:
            result = self._apply_one(working, name)
            if isinstance(result, FlexError):
                self.logger.debug("Flex %s failed: %s", name, result.code.value)
                return result
            working = result

        if not names:
            return True
        self.flexagon = working
        self.history.add(names, working)
        self.logger.info("Applied %s -> %s", " ".join(str(n) for n in names), working)
        return True

    def apply_flex(self, flex: Union[str, FlexName]) -> FlexResult:
        if isinstance(flex, FlexName):
            return self.apply_flexes([flex])
        return self.apply_flexes(flex)

    def check_for_prime_flexes(self, flip: bool = False, right_steps: int = 0) -> List[str]:
        """Prime flexes that fit at a vertex, without changing the flexagon.

        ``flip`` looks at the turned-over flexagon; ``right_steps`` moves that
        many vertices clockwise first.
        """
        flexagon = self.flexagon.turned_over() if flip else self.flexagon
        return check_for_flexes(flexagon.rotated(right_steps), self.prime_flexes)

    def can_undo(self) -> bool:
        return self.history.can_undo()

    def can_redo(self) -> bool:
        return self.history.can_redo()

    def undo(self) -> bool:
        step = self.history.undo()
        if step is None:
            return False
        self.flexagon = step.flexagon
        return True

    def redo(self) -> bool:
        step = self.history.redo()
        if step is None:
            return False
        self.flexagon = step.flexagon
        return True

    def undo_all(self) -> None:
        self.flexagon = self.history.undo_all().flexagon

    def get_flex_history(self) -> List[str]:
        return [str(n) for n in self.history.get_current().flexes]

    def get_face_ids(self, front: bool = True) -> List[int]:
        return self.flexagon.get_top_ids() if front else self.flexagon.get_bottom_ids()

    def set_face_label(self, label: str, front: bool = True) -> None:
        self.leaf_props.set_labels(self.get_face_ids(front), label)

    def set_face_color(self, color: int, front: bool = True) -> None:
        self.leaf_props.set_colors(self.get_face_ids(front), color)
