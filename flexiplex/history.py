from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from .consolidate import add_and_consolidate
from .flexagon import Flexagon
from .formula import FlexName


@dataclass(frozen=True)
class HistoryStep:
    """The flexagon after a step, and every flex applied to reach it."""

    flexes: List[FlexName]
    flexagon: Flexagon


@dataclass
class History:
    """Linear undo/redo history.

    Adding a step after undoing discards the steps that could have been redone.
    """

    steps: List[HistoryStep] = field(default_factory=list)
    current: int = 0

    @classmethod
    def start(cls, flexagon: Flexagon) -> "History":
        return cls(steps=[HistoryStep([], flexagon)], current=0)

    def add(self, flexes: List[FlexName], flexagon: Flexagon) -> None:
        del self.steps[self.current + 1:]
        combined = add_and_consolidate(self.steps[self.current].flexes, flexes)
        self.steps.append(HistoryStep(combined, flexagon))
        self.current += 1

    def get_current(self) -> HistoryStep:
        return self.steps[self.current]

    def can_undo(self) -> bool:
        return self.current > 0

    def can_redo(self) -> bool:
        return self.current < len(self.steps) - 1

    def undo(self) -> Optional[HistoryStep]:
        if not self.can_undo():
            return None
        self.current -= 1
        return self.get_current()

    def redo(self) -> Optional[HistoryStep]:
        if not self.can_redo():
            return None
        self.current += 1
        return self.get_current()

    def undo_all(self) -> HistoryStep:
        self.current = 0
        return self.get_current()
