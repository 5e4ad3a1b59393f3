from __future__ import annotations

from typing import List

from .formula import FlexName

_CANCELS = {">": "<", "<": ">", "^": "^", "~": "~"}


def add_and_consolidate(history: List[FlexName], new_flexes: List[FlexName]) -> List[FlexName]:
    """Append ``new_flexes`` to ``history``, dropping moves that cancel out.

    Only pure reorientations cancel: ``>`` then ``<``, ``<`` then ``>``, and
    two ``^`` or two ``~`` in a row. Cancelling stops at the first new flex
    that doesn't undo the end of the history.
    """
    result = list(history)
    i = 0
    while i < len(new_flexes) and result:
        last, new = result[-1], new_flexes[i]
        if last.should_generate or new.should_generate:
            break
        if _CANCELS.get(last.full_name) != new.full_name:
            break
        result.pop()
        i += 1
    return result + list(new_flexes[i:])
