"""Built-in flex definitions.

Each derived flex is defined by a formula over flexes defined before it, the
atomic pattern it starts from, and the pattern it is expected to produce.
Order matters: a definition may only use the base flexes and definitions
listed above it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional

from .flex import FlexRotation


@dataclass(frozen=True)
class FlexDefinition:
    name: str
    formula: str
    input: str
    output: Optional[str] = None
    description: str = ""
    rotation: FlexRotation = FlexRotation.NONE


ATOMIC_DEFINITIONS: List[FlexDefinition] = [
    FlexDefinition(
        "Ul", "~ Ur ~", "a / [1,-2] < b", "a / 1 > 2 < -b",
        "unfold a pair to the right, upper-left variant",
    ),
    FlexDefinition(
        "Ub", "^ Ur ^", "a [2,-1] > / b", "-a 1 > 2 < / b",
        "unfold a pair on the left of the hinge",
    ),
    FlexDefinition(
        "Ux", "^~ Ur ~^", "a [-2,1] < / b", "-a 2 < 1 > / b",
        "unfold a pair on the left of the hinge, mirrored",
    ),
    FlexDefinition(
        "Xr", "Ur> ^Ur'^", "a 1 > / [-3,2] > b", "-a [2,-1] > / 3 > -b",
        "exchange a pat across the hinge, rightward",
    ),
    FlexDefinition(
        "Xl", "Ul> ^Ul'^", "a 4 < / [5,-6] < b", "-a [-4,5] < / 6 < -b",
        "exchange a pat across the hinge, leftward",
    ),
    FlexDefinition(
        "K", "Ur >^ Ur' > Ul ^", "a [-2,1] > -3 > / [5,-4] > b",
        "a 1 < 2 > / [-4,3] > -5 > -b",
        "kite flex",
    ),
    FlexDefinition(
        "Hf", "K > Ul' <", "a [-2,1] > -3 > / [5,-4] > 6 > b",
        "a 1 < 2 > / [-4,3] > [-5,6] < b",
        "half flex, forward",
    ),
    FlexDefinition(
        "Hb", "^Hf^", "a 1 > [-3,2] > / -4 > [6,-5] > b",
        "a [1,-2] < [4,-3] > / 5 > 6 < b",
        "half flex, back",
    ),
    FlexDefinition(
        "Hr", "<< Ur >>>> Xl << Ul' ~", "a [-2,1] > -3 > / -4 > [6,-5] > b",
        "a 1 < 2 > / [[-4,5],3] > 6 < b",
        "half flex, right",
    ),
    FlexDefinition(
        "Hl", "^Hr^", "a [-2,1] > -3 > / -4 > [6,-5] > b",
        "a 1 < [4,[2,-3]] > / 5 > 6 < b",
        "half flex, left",
    ),
    FlexDefinition(
        "Hsr", "> K < Ur << Ul' >> Ur'", "a 1 > [[-3,4],2] > / 5 > [-7,6] > b",
        "a [1,-2] < -3 > / [[5,-6],-4] > -7 < b",
        "half shuffle, right",
    ),
    FlexDefinition(
        "Hsl", "^Hsr^", "a [-2, 1] > -3 > / [-6,[-4,5]] > -7 > b",
        "a 1 < [4,[2,-3]] > / 5 > [6,-7] < b",
        "half shuffle, left",
    ),
    FlexDefinition(
        "Iv", "> Ul > Ul <<<< Ur' Ul' >>", "a 1 < 2 > / 3 > [4,[6,-5]] < b",
        "a [[-2,1],3] < 4 > / 5 > 6 < b",
        "inverted flex",
    ),
    FlexDefinition(
        "Hkl", "> Ul Ur <<<< Ul' < Ul' >>", "a 1 > 2 > 3 < 4 > / 5 > [[-7,6],8] < b",
        "a [1,[3,-2]] < 4 > / 5 > 6 < 7 > 8 > b",
        "half kite, left",
    ),
]


# Ring flexes derived from closed atomic patterns, keyed by pat count.
RING_DEFINITIONS: Dict[int, List[FlexDefinition]] = {
    6: [
        FlexDefinition(
            "P", "Xr >> Xl >> Xr",
            "a 1 > / [-3,2] > -4 > [6,-5] > 7 > [-9,8] > b",
            "-a [2,-1] > 3 > [-5,4] > -6 > [8,-7] > / 9 > -b",
            "pinch flex", FlexRotation.MIRROR,
        ),
        FlexDefinition(
            "Hh", "Xr >>> Xl <<<~",
            "a 7 > 8 > / [-2,1] > -3 > -4 > [6,-5] > b",
            "-a -7 < [1,-8] > / 2 > 3 < [-5,4] > -6 > -b",
            "hexagon half flex", FlexRotation.MIRROR,
        ),
        FlexDefinition(
            "Ht", "< Ur ^<<< Ur' <<^ Xl <<<~",
            "a -7 > [1,-8] > / 2 > 3 > 4 > [-6,5] > b",
            "-a 7 < 8 > / [-2,1] > -3 < [5,-4] > 6 > -b",
            "hexagon tuck flex", FlexRotation.MIRROR,
        ),
    ],
    12: [
        FlexDefinition(
            "P", "Xr >> Xl >> Xr >> Xl >> Xr >> Xl ~",
            "a 1 > / [-3,2] > -4 > [6,-5] > 7 > [-9,8] > -10 > [12,-11] > 13 > [-15,14] > -16 > [18,-17] > b",
            "-a [2,-1] > 3 > [-5,4] > -6 > [8,-7] > 9 > [-11,10] > -12 > [14,-13] > 15 > [-17,16] > / -18 > -b",
            "pinch flex", FlexRotation.MIRROR,
        ),
    ],
}
