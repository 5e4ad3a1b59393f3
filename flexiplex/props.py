from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Optional


@dataclass
class LeafProperties:
    label: Optional[str] = None
    color: Optional[int] = None


class PropertiesForLeaves:
    """Labels and colours for each face, keyed by signed leaf id."""

    def __init__(self) -> None:
        self._props: Dict[int, LeafProperties] = {}

    def _get(self, leaf_id: int) -> LeafProperties:
        return self._props.setdefault(leaf_id, LeafProperties())

    def set_label(self, leaf_id: int, label: str) -> None:
        self._get(leaf_id).label = label

    def set_color(self, leaf_id: int, color: int) -> None:
        self._get(leaf_id).color = color

    def set_labels(self, leaf_ids: Iterable[int], label: str) -> None:
        for leaf_id in leaf_ids:
            self.set_label(leaf_id, label)

    def set_colors(self, leaf_ids: Iterable[int], color: int) -> None:
        for leaf_id in leaf_ids:
            self.set_color(leaf_id, color)

    def get_face_label(self, leaf_id: int) -> str:
        props = self._props.get(leaf_id)
        if props is None or props.label is None:
            return str(leaf_id)
        return props.label

    def get_color(self, leaf_id: int) -> Optional[int]:
        props = self._props.get(leaf_id)
        return props.color if props else None

    def get_color_as_rgb_string(self, leaf_id: int) -> Optional[str]:
        """``0xff8000`` becomes ``"rgb(255, 128, 0)"``."""
        color = self.get_color(leaf_id)
        if color is None:
            return None
        r, g, b = (color >> 16) & 0xFF, (color >> 8) & 0xFF, color & 0xFF
        return f"rgb({r}, {g}, {b})"
