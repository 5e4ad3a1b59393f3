from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from flexiplex.atomic_flexes import make_atomic_flexes
from flexiplex.flex import FlexRotation, make_flex


@pytest.fixture(scope="session")
def atomic_flexes():
    return make_atomic_flexes(validate=True)


@pytest.fixture
def square_flexes():
    """Rotations plus two structure-changing flexes for a 4-pat flexagon."""
    defs = [
        (">", [1, 2, 3, 4], [2, 3, 4, 1], FlexRotation.MIRROR),
        ("<", [1, 2, 3, 4], [4, 1, 2, 3], FlexRotation.MIRROR),
        ("^", [1, 2, 3, 4], [-4, -3, -2, -1], FlexRotation.NONE),
        ("A", [[1, 2], 3, 4, 5], [1, [2, 3], 4, 5], FlexRotation.NONE),
        ("B", [[1, 2], 3, [4, 5], 6], [1, 2, [3, 4], [5, 6]], FlexRotation.NONE),
    ]
    return {name: make_flex(name, p, o, r) for name, p, o, r in defs}


@pytest.fixture
def flex_config_yaml(tmp_path: Path) -> Path:
    p = tmp_path / "flexes.yaml"
    p.write_text(
        textwrap.dedent(
            """\
            atomic:
              - name: Kx
                formula: "Xr^ > Ul^"
                input: "a [-2,1] > -3 > / [5,-4] > b"
                output: "a 1 < 2 > / [-4,3] > -5 > -b"

            flexes:
              - name: Pk
                formula: "K <<< ^K'^ >>>"
                input: "a 1 > [-3,2] > -4 > [6,-5] > 7 > / [-9,8] > b"
                output: "-a [2,-1] > 3 > [-5,4] > -6 > / [8,-7] > 9 > -b"
                rotation: mirror
              - name: Skip
                input: [1, 2, 3, 4, 5, 6]
                output: [3, 4, 5, 6, 1, 2]
                rotation: mirror
              - name: A
                input: [[1, 2], 3, 4, 5]
                output: [1, [2, 3], 4, 5]
              - name: B
                input: [[1, 2], 3, [4, 5], 6]
                output: [1, 2, [3, 4], [5, 6]]
            """
        ),
        encoding="utf-8",
    )
    return p


@pytest.fixture
def script_yaml(tmp_path: Path) -> Path:
    p = tmp_path / "script.yaml"
    p.write_text(
        textwrap.dedent(
            """\
            script:
              - numPats: 6
                angles: [60, 60]
              - flexes: "P+ >"
              - flexes: "P"
            """
        ),
        encoding="utf-8",
    )
    return p
