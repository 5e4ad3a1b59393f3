"""Pats: the stacks of leaves a flexagon is built from.

A pat is either a single ``Leaf`` or a ``Pair`` of sub-pats folded together.
Leaf ids are nonzero ints whose sign says which side of the leaf faces up.

The literal notation used throughout Flexiplex is plain JSON-ish data: an
int is a leaf and a two-item list is a pair, so ``[[1,2],3]`` is a pair whose
left side is itself a pair.

When a pat is used as a flex pattern its leaf ids act as slots: ``k`` binds
whatever subtree sits at that position and ``-k`` binds the flipped subtree.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Union

from .errors import TreeCode, TreeError


@dataclass(frozen=True)
class Leaf:
    id: int

    @property
    def top(self) -> int:
        return self.id

    @property
    def bottom(self) -> int:
        return -self.id

    def flipped(self) -> "Leaf":
        return Leaf(-self.id)

    def leaf_ids(self) -> List[int]:
        return [self.id]

    def leaf_count(self) -> int:
        return 1

    def structure(self) -> str:
        return "-"

    def to_tree(self) -> Any:
        return self.id

    def __str__(self) -> str:
        return str(self.id)


@dataclass(frozen=True)
class Pair:
    left: "Pat"
    right: "Pat"

    @property
    def top(self) -> int:
        return self.left.top

    @property
    def bottom(self) -> int:
        return self.right.bottom

    def flipped(self) -> "Pair":
        """Turn the stack over: [a, b] becomes [flip(b), flip(a)]."""
        return Pair(self.right.flipped(), self.left.flipped())

    def leaf_ids(self) -> List[int]:
        return self.left.leaf_ids() + self.right.leaf_ids()

    def leaf_count(self) -> int:
        return self.left.leaf_count() + self.right.leaf_count()

    def structure(self) -> str:
        return f"[{self.left.structure()}{self.right.structure()}]"

    def to_tree(self) -> Any:
        return [self.left.to_tree(), self.right.to_tree()]

    def __str__(self) -> str:
        return f"[{self.left},{self.right}]"


Pat = Union[Leaf, Pair]
Bindings = Dict[int, Pat]


def make_pat(literal: Any) -> Union[Pat, TreeError]:
    """Build a pat from its literal form, e.g. ``[[1,2],-3]``."""
    if isinstance(literal, bool):
        return TreeError(TreeCode.BAD_LEAF, literal)
    if isinstance(literal, int):
        if literal == 0:
            return TreeError(TreeCode.BAD_LEAF, literal)
        return Leaf(literal)
    if isinstance(literal, (list, tuple)):
        if len(literal) != 2:
            return TreeError(TreeCode.ARRAY_LENGTH, list(literal))
        left = make_pat(literal[0])
        if isinstance(left, TreeError):
            return left
        right = make_pat(literal[1])
        if isinstance(right, TreeError):
            return right
        return Pair(left, right)
    return TreeError(TreeCode.BAD_LEAF, literal)


def match_pat(pattern: Pat, pat: Pat, bindings: Bindings) -> bool:
    """Unify ``pattern`` with ``pat``, recording slot bindings.

    A pattern leaf binds the whole subtree found at its position. A pattern
    pair only matches a pair.
    """
    if isinstance(pattern, Leaf):
        bindings[abs(pattern.id)] = pat if pattern.id > 0 else pat.flipped()
        return True
    if not isinstance(pat, Pair):
        return False
    return match_pat(pattern.left, pat.left, bindings) and match_pat(
        pattern.right, pat.right, bindings
    )


def substitute(output: Pat, bindings: Bindings) -> Pat:
    """Rebuild ``output`` with each slot replaced by its bound subtree."""
    if isinstance(output, Pair):
        return Pair(substitute(output.left, bindings), substitute(output.right, bindings))
    if output.id > 0:
        return bindings[output.id]
    return bindings[-output.id].flipped()


def create_pattern(pat: Pat, pattern: Pat, next_id: Callable[[], int]) -> Pat:
    """Grow ``pat`` until it has at least the nesting ``pattern`` asks for.

    Where the pattern wants a pair but the pat is a leaf, the existing leaf
    stays top-left and fresh leaves from ``next_id`` fill in the rest.
    """
    if isinstance(pattern, Leaf):
        return pat
    if isinstance(pat, Pair):
        return Pair(
            create_pattern(pat.left, pattern.left, next_id),
            create_pattern(pat.right, pattern.right, next_id),
        )
    return Pair(create_pattern(pat, pattern.left, next_id), _fresh(pattern.right, next_id))


def _fresh(pattern: Pat, next_id: Callable[[], int]) -> Pat:
    if isinstance(pattern, Pair):
        return Pair(_fresh(pattern.left, next_id), _fresh(pattern.right, next_id))
    return Leaf(next_id())
