"""Tests for loading flex definitions and scripts from YAML."""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from flexiplex.config_loader import ConfigLoader
from flexiplex.definitions import FlexDefinition
from flexiplex.errors import ConfigError
from flexiplex.flex import Flex, FlexRotation


def write_yaml(tmp_path: Path, text: str) -> Path:
    p = tmp_path / "config.yaml"
    p.write_text(textwrap.dedent(text), encoding="utf-8")
    return p


# --- flex config tests ---


def test_load_flex_config(flex_config_yaml: Path):
    """Atomic definitions, formula flexes and literal flexes all load."""
    config = ConfigLoader.load_flex_config(flex_config_yaml)

    assert [d.name for d in config.atomic] == ["Kx"]
    assert config.atomic[0].formula == "Xr^ > Ul^"

    by_name = {f.name: f for f in config.flexes}
    assert isinstance(by_name["Pk"], FlexDefinition)
    assert by_name["Pk"].rotation is FlexRotation.MIRROR
    assert isinstance(by_name["Skip"], Flex)
    assert by_name["Skip"].output.to_tree() == [3, 4, 5, 6, 1, 2]
    assert by_name["A"].rotation is FlexRotation.NONE


def test_empty_config(tmp_path: Path):
    """An empty file is an empty config."""
    config = ConfigLoader.load_flex_config(write_yaml(tmp_path, ""))
    assert config.atomic == []
    assert config.flexes == []


def test_root_must_be_mapping(tmp_path: Path):
    """A list at the root is rejected."""
    p = write_yaml(tmp_path, "- name: A\n")
    with pytest.raises(ConfigError, match="wrong type") as exc_info:
        ConfigLoader.load_flex_config(p)
    assert "(root)" in str(exc_info.value)


def test_missing_name(tmp_path: Path):
    """Every flex needs a name."""
    p = write_yaml(
        tmp_path,
        """\
        flexes:
          - input: [1, 2, 3]
            output: [2, 3, 1]
        """,
    )
    with pytest.raises(ConfigError, match="missing required field") as exc_info:
        ConfigLoader.load_flex_config(p)
    assert "flexes[0].name" in str(exc_info.value)


def test_missing_output(tmp_path: Path):
    """Literal flexes need both input and output."""
    p = write_yaml(
        tmp_path,
        """\
        flexes:
          - name: A
            input: [1, 2, 3]
        """,
    )
    with pytest.raises(ConfigError, match="flexes\\[0\\].output"):
        ConfigLoader.load_flex_config(p)


def test_atomic_formula_must_be_string(tmp_path: Path):
    """Atomic formulas are strings."""
    p = write_yaml(
        tmp_path,
        """\
        atomic:
          - name: Q
            formula: 3
            input: "a / b"
        """,
    )
    with pytest.raises(ConfigError, match="wrong type"):
        ConfigLoader.load_flex_config(p)


def test_bad_literal(tmp_path: Path):
    """Pat literals are validated while loading."""
    p = write_yaml(
        tmp_path,
        """\
        flexes:
          - name: Bad
            input: [1, 1, 2]
            output: [1, 2, 3]
        """,
    )
    with pytest.raises(ConfigError, match="Invalid flex definition: 'Bad'") as exc_info:
        ConfigLoader.load_flex_config(p)
    assert "DuplicateLeaf" in str(exc_info.value)


def test_literal_output_must_reuse_pattern_slots(tmp_path: Path):
    """An output with a slot the input lacks is a ConfigError, not a crash later."""
    p = write_yaml(
        tmp_path,
        """\
        flexes:
          - name: Lossy
            input: [[1, 2], 3]
            output: [1, 4]
        """,
    )
    with pytest.raises(ConfigError, match="Invalid flex definition: 'Lossy'") as exc_info:
        ConfigLoader.load_flex_config(p)
    assert "LeafMismatch" in str(exc_info.value)


def test_bad_rotation(tmp_path: Path):
    """Only 'none' and 'mirror' are rotations."""
    p = write_yaml(
        tmp_path,
        """\
        flexes:
          - name: A
            input: [1, 2, 3]
            output: [2, 3, 1]
            rotation: sideways
        """,
    )
    with pytest.raises(ConfigError, match="Invalid rotation"):
        ConfigLoader.load_flex_config(p)


def test_flexes_must_be_list(tmp_path: Path):
    """'flexes' is a list of mappings."""
    p = write_yaml(tmp_path, "flexes: {name: A}\n")
    with pytest.raises(ConfigError, match="wrong type"):
        ConfigLoader.load_flex_config(p)


# --- script tests ---


def test_load_script(script_yaml: Path):
    """Script items keep every field."""
    items = ConfigLoader.load_script(script_yaml)
    assert len(items) == 3
    assert items[0].num_pats == 6
    assert items[0].angles == [60, 60]
    assert items[1].flexes == "P+ >"
    assert items[2].flexes == "P"


def test_load_script_pats_and_directions(tmp_path: Path):
    """pats and directions are read as given; num_pats is also accepted."""
    p = write_yaml(
        tmp_path,
        """\
        script:
          - pats: [[1, 2], 3, 4, 5]
            directions: "//|/"
          - num_pats: 4
        """,
    )
    items = ConfigLoader.load_script(p)
    assert items[0].pats == [[1, 2], 3, 4, 5]
    assert items[0].directions == "//|/"
    assert items[1].num_pats == 4


def test_load_script_bad_num_pats(tmp_path: Path):
    """numPats must be an int."""
    p = write_yaml(tmp_path, "script:\n  - numPats: six\n")
    with pytest.raises(ConfigError, match="numPats"):
        ConfigLoader.load_script(p)
