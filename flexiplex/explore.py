"""Breadth-first exploration of the states reachable under a flex set.

``Explore`` does one unit of work per ``check_next()`` call so callers can
interleave exploration with other work. ``explore_async`` drives it on an
event loop, yielding between batches.
"""

from __future__ import annotations

import asyncio
import logging
from collections import deque
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Deque, Dict, List, Optional, Tuple

from .errors import FlexError
from .flex import Flex
from .flexagon import Flexagon
from .tracker import Tracker

logger = logging.getLogger("flexiplex.explore")


@dataclass(frozen=True)
class ExploreEdge:
    """A flex applied at ``vertex`` (on the turned-over side if ``turned_over``)."""

    flex_name: str
    vertex: int
    turned_over: bool
    target: int


class Explore:
    def __init__(self, flexagon: Flexagon, flexes: Dict[str, Flex]):
        self._flexes = dict(flexes)
        self._tracker = Tracker(flexagon)
        self._flexagons: List[Flexagon] = [flexagon]
        self._edges: List[List[ExploreEdge]] = [[]]
        self._frontier: Deque[Tuple[Flexagon, int]] = deque([(flexagon, 0)])
        self._explored = 0

    def check_next(self) -> bool:
        """Explore one more state. Returns False once there is nothing left."""
        if not self._frontier:
            return False

        flexagon, index = self._frontier.popleft()
        edges = self._edges[index]
        for turned_over, side in ((False, flexagon), (True, flexagon.turned_over())):
            for vertex in range(side.get_pat_count()):
                oriented = side.rotated(vertex)
                for name, flex in self._flexes.items():
                    result = flex.apply_here(oriented)
                    if isinstance(result, FlexError):
                        continue
                    target = self._add(result)
                    if target != index:
                        edges.append(ExploreEdge(name, vertex, turned_over, target))

        self._explored += 1
        logger.debug(
            "explored %d of %d states", self._explored, self._tracker.get_total_states()
        )
        return True

    def _add(self, flexagon: Flexagon) -> int:
        found = self._tracker.find_maybe_add(flexagon)
        if found is not None:
            return found
        index = self._tracker.get_total_states() - 1
        self._flexagons.append(flexagon)
        self._edges.append([])
        self._frontier.append((flexagon, index))
        return index

    def is_done(self) -> bool:
        return not self._frontier

    def get_total_states(self) -> int:
        return self._tracker.get_total_states()

    def get_explored_states(self) -> int:
        return self._explored

    def get_flexagons(self) -> List[Flexagon]:
        return list(self._flexagons)

    def get_flexagon(self, index: int) -> Flexagon:
        return self._flexagons[index]

    def get_edges(self, index: int) -> List[ExploreEdge]:
        return list(self._edges[index])

    def get_flex_names(self) -> List[str]:
        return list(self._flexes)


ProgressCallback = Callable[[Explore], Awaitable[Any]]


async def explore_async(
    explore: Explore,
    *,
    max_steps: Optional[int] = None,
    yield_every: int = 1,
    on_progress: Optional[ProgressCallback] = None,
) -> Explore:
    """Run ``explore`` to completion (or ``max_steps``), yielding to the loop.

    Control is handed back to the event loop after every ``yield_every``
    states, and ``on_progress`` (if given) is awaited at the same points.
    """
    if yield_every < 1:
        raise ValueError(f"yield_every must be at least 1, got {yield_every}")

    steps = 0
    while max_steps is None or steps < max_steps:
        if not explore.check_next():
            break
        steps += 1
        if steps % yield_every == 0:
            if on_progress is not None:
                await on_progress(explore)
            await asyncio.sleep(0)

    logger.info(
        "exploration %s: %d states, %d explored",
        "finished" if explore.is_done() else "paused",
        explore.get_total_states(),
        explore.get_explored_states(),
    )
    return explore
