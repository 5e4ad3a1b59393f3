from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Tuple, Union

from .errors import TreeCode, TreeError
from .pat import Pat, make_pat


@dataclass(frozen=True)
class Flexagon:
    """An immutable ring of pats.

    The first pat sits at the current vertex; pats run clockwise from there.
    Every operation returns a new Flexagon.
    """

    pats: Tuple[Pat, ...]

    def get_pat_count(self) -> int:
        return len(self.pats)

    def get_leaf_count(self) -> int:
        return sum(p.leaf_count() for p in self.pats)

    def get_top_ids(self) -> List[int]:
        return [p.top for p in self.pats]

    def get_bottom_ids(self) -> List[int]:
        return [p.bottom for p in self.pats]

    def get_structures(self) -> List[str]:
        return [p.structure() for p in self.pats]

    def get_leaf_ids(self) -> List[int]:
        ids: List[int] = []
        for p in self.pats:
            ids.extend(p.leaf_ids())
        return ids

    def get_max_id(self) -> int:
        return max(abs(i) for i in self.get_leaf_ids())

    def rotated(self, steps: int = 1) -> "Flexagon":
        """Move the current vertex ``steps`` pats clockwise (``>``)."""
        n = len(self.pats)
        r = steps % n
        return Flexagon(self.pats[r:] + self.pats[:r])

    def turned_over(self) -> "Flexagon":
        """Turn the whole flexagon over: reverse the ring and flip every pat."""
        return Flexagon(tuple(p.flipped() for p in reversed(self.pats)))

    def reversed(self) -> "Flexagon":
        return Flexagon(tuple(reversed(self.pats)))

    def flipped_pats(self) -> "Flexagon":
        return Flexagon(tuple(p.flipped() for p in self.pats))

    def to_tree(self) -> List[Any]:
        return [p.to_tree() for p in self.pats]

    def __str__(self) -> str:
        return "[" + ",".join(str(p) for p in self.pats) + "]"


def make_flexagon(tree: Any) -> Union[Flexagon, TreeError]:
    """Build a flexagon from a list of pat literals, validating leaf ids."""
    if not isinstance(tree, (list, tuple)) or len(tree) < 1:
        return TreeError(TreeCode.TOO_FEW_PATS, tree)

    pats: List[Pat] = []
    for literal in tree:
        pat = make_pat(literal)
        if isinstance(pat, TreeError):
            return pat
        pats.append(pat)

    flexagon = Flexagon(tuple(pats))
    seen = set()
    for leaf_id in flexagon.get_leaf_ids():
        if abs(leaf_id) in seen:
            return TreeError(TreeCode.DUPLICATE_LEAF, abs(leaf_id))
        seen.add(abs(leaf_id))
    return flexagon


def make_flexagon_from_count(pat_count: int) -> Flexagon:
    """The plain flexagon ``[1, 2, ..., n]`` with one leaf per pat."""
    flexagon = make_flexagon(list(range(1, pat_count + 1)))
    if isinstance(flexagon, TreeError):
        raise flexagon.to_exception()
    return flexagon
