"""State graph visualization.

Generates diagrams from an ``Explore`` run without touching it.

Example:
    from flexiplex import Explore, visualize

    explore = Explore(flexagon, flexes)
    while explore.check_next():
        pass
    print(visualize(explore))
"""

from __future__ import annotations

from typing import List, Set, Tuple

from .explore import Explore


def visualize(explore: Explore, *, format: str = "mermaid") -> str:
    """Generate a diagram of the states an exploration has found.

    Args:
        explore: An Explore, finished or not. Only discovered states and the
            edges recorded so far are drawn.
        format: Output format. Currently only "mermaid" is supported.

    Returns:
        Diagram source string (e.g., Mermaid flowchart).

    Raises:
        ValueError: If format is not supported.

    Example:
        >>> print(visualize(explore))
        flowchart LR
        <BLANKLINE>
        %% Edge labels: flex name
        %% states: 2 (2 explored)
        <BLANKLINE>
          s0["[1,2,3,4]"]
          s1["[[1,2],3,4,5]"]
        <BLANKLINE>
        s0 -->|"A"| s1
    """
    if format != "mermaid":
        raise ValueError(f"Unsupported format: {format!r}. Use 'mermaid'.")

    return _generate_mermaid(explore)


def _generate_mermaid(explore: Explore) -> str:
    lines: List[str] = []
    lines.append("flowchart LR")
    lines.append("")

    lines.append("%% Edge labels: flex name")
    lines.append(
        f"%% states: {explore.get_total_states()} ({explore.get_explored_states()} explored)"
    )
    lines.append("")

    flexagons = explore.get_flexagons()
    for index, flexagon in enumerate(flexagons):
        lines.append(f'  {_node_id(index)}["{flexagon}"]')
    lines.append("")

    # Many vertices can lead to the same state with the same flex; draw it once.
    seen: Set[Tuple[int, str, int]] = set()
    for index in range(len(flexagons)):
        for edge in explore.get_edges(index):
            key = (index, edge.flex_name, edge.target)
            if key in seen:
                continue
            seen.add(key)
            label = edge.flex_name.replace('"', '\\"')
            lines.append(f'{_node_id(index)} -->|"{label}"| {_node_id(edge.target)}')

    # Remove trailing empty line
    while lines and lines[-1] == "":
        lines.pop()

    return "\n".join(lines)


def _node_id(index: int) -> str:
    return f"s{index}"
