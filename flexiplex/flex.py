"""Ring flexes: pattern/output rewrites of a whole flexagon.

A flex has a ``pattern`` and an ``output``, both rings of pats with the same
length. The pattern's leaf ids are slots: unifying the pattern with a
flexagon binds each slot to a subtree, and the output is rebuilt from those
bindings.
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union

from .errors import FlexCode, FlexError, TreeCode, TreeError
from .flexagon import Flexagon, make_flexagon
from .pat import Bindings, create_pattern, match_pat, substitute


class FlexRotation(str, Enum):
    """How ``Flex.apply`` may reorient the flexagon while searching."""

    NONE = "none"
    MIRROR = "mirror"


@dataclass(frozen=True)
class Flex:
    name: str
    pattern: Flexagon
    output: Flexagon
    rotation: FlexRotation = FlexRotation.NONE
    description: str = ""

    def apply_here(self, flexagon: Flexagon) -> Union[Flexagon, FlexError]:
        """Apply the flex at the current vertex only."""
        if flexagon.get_pat_count() != self.pattern.get_pat_count():
            return FlexError(FlexCode.CANT_APPLY_FLEX, self.name)

        bindings: Bindings = {}
        for pattern, pat in zip(self.pattern.pats, flexagon.pats):
            if not match_pat(pattern, pat, bindings):
                return FlexError(FlexCode.CANT_APPLY_FLEX, self.name)
        return Flexagon(tuple(substitute(o, bindings) for o in self.output.pats))

    def apply(self, flexagon: Flexagon) -> Union[Flexagon, FlexError]:
        """Apply the flex wherever it first fits.

        Every rotation is tried (and, for mirror flexes, every rotation of the
        turned-over flexagon). The reorientation used to find the match is
        undone on the result, so the caller's frame of reference is kept.
        """
        n = flexagon.get_pat_count()
        if n != self.pattern.get_pat_count():
            return FlexError(FlexCode.CANT_APPLY_FLEX, self.name)

        sides = [False, True] if self.rotation is FlexRotation.MIRROR else [False]
        for turned in sides:
            base = flexagon.turned_over() if turned else flexagon
            for r in range(n):
                result = self.apply_here(base.rotated(r))
                if isinstance(result, FlexError):
                    continue
                result = result.rotated(-r)
                return result.turned_over() if turned else result
        return FlexError(FlexCode.CANT_APPLY_FLEX, self.name)

    def create_pattern(self, flexagon: Flexagon) -> Union[Flexagon, FlexError]:
        """Add leaves so this flex's pattern fits at the current vertex."""
        if flexagon.get_pat_count() != self.pattern.get_pat_count():
            return FlexError(FlexCode.CANT_APPLY_FLEX, self.name)

        counter = itertools.count(flexagon.get_max_id() + 1)
        return Flexagon(
            tuple(
                create_pattern(pat, pattern, counter.__next__)
                for pat, pattern in zip(flexagon.pats, self.pattern.pats)
            )
        )

    def inverse(self) -> "Flex":
        name = self.name[:-1] if self.name.endswith("'") else self.name + "'"
        return Flex(name, self.output, self.pattern, self.rotation, self.description)


def make_flex(
    name: str,
    pattern: Any,
    output: Any,
    rotation: FlexRotation = FlexRotation.NONE,
    description: Optional[str] = None,
) -> Union[Flex, TreeError]:
    """Build a flex from pattern and output literals."""
    fpattern = make_flexagon(pattern)
    if isinstance(fpattern, TreeError):
        return fpattern
    foutput = make_flexagon(output)
    if isinstance(foutput, TreeError):
        return foutput
    if fpattern.get_pat_count() != foutput.get_pat_count():
        return TreeError(
            TreeCode.PAT_COUNT_MISMATCH,
            (fpattern.get_pat_count(), foutput.get_pat_count()),
        )
    pattern_slots = sorted(abs(i) for i in fpattern.get_leaf_ids())
    output_slots = sorted(abs(i) for i in foutput.get_leaf_ids())
    if pattern_slots != output_slots:
        return TreeError(TreeCode.LEAF_MISMATCH, (pattern_slots, output_slots))
    return Flex(name, fpattern, foutput, rotation, description or "")
