"""Recognise flexagon states that are the same up to orientation."""

from __future__ import annotations

import json
from typing import Dict, Optional

from .flexagon import Flexagon


def canonical_key(flexagon: Flexagon) -> str:
    """A key shared by every orientation of the same physical state.

    Considers each rotation of the ring, in both orders, with the pats flipped
    or not, and keeps the smallest JSON encoding.
    """
    reversed_ = flexagon.reversed()
    images = (flexagon, reversed_, flexagon.flipped_pats(), reversed_.flipped_pats())
    return min(
        json.dumps(image.rotated(r).to_tree(), separators=(",", ":"))
        for image in images
        for r in range(flexagon.get_pat_count())
    )


class Tracker:
    """Assigns each distinct state a sequential index, in discovery order."""

    def __init__(self, flexagon: Flexagon):
        self._indices: Dict[str, int] = {}
        self.find_maybe_add(flexagon)

    def find_maybe_add(self, flexagon: Flexagon) -> Optional[int]:
        """Return the state's existing index, or None after adding it."""
        key = canonical_key(flexagon)
        index = self._indices.get(key)
        if index is not None:
            return index
        self._indices[key] = len(self._indices)
        return None

    def get_index(self, flexagon: Flexagon) -> Optional[int]:
        return self._indices.get(canonical_key(flexagon))

    def get_total_states(self) -> int:
        return len(self._indices)
