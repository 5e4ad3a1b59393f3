from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Union

import yaml

from .definitions import FlexDefinition
from .errors import (
    ConfigError,
    ErrorContext,
    TreeError,
    config_invalid_definition,
    config_missing_field,
    config_wrong_type,
)
from .flex import Flex, FlexRotation, make_flex
from .script import ScriptItem


@dataclass(frozen=True)
class FlexConfig:
    """Flex definitions loaded from YAML.

    ``atomic`` entries are derived in order on top of the built-in atomic
    flexes. ``flexes`` holds ring flexes: literal ones are already built,
    formula ones are derived against the atomic set when a flex set is made.
    """

    atomic: List[FlexDefinition] = field(default_factory=list)
    flexes: List[Union[Flex, FlexDefinition]] = field(default_factory=list)


def _require_str(entry: Dict[str, Any], key: str, where: str, path: str) -> str:
    value = entry.get(key)
    if value is None:
        raise config_missing_field(f"{where}.{key}", path)
    if not isinstance(value, str):
        raise config_wrong_type(f"{where}.{key}", "string", type(value).__name__, path)
    return value


def _rotation(entry: Dict[str, Any], where: str, path: str) -> FlexRotation:
    value = entry.get("rotation", "none")
    try:
        return FlexRotation(value)
    except ValueError:
        ctx = ErrorContext()
        ctx.add("config_path", path)
        ctx.add("field", f"{where}.rotation")
        ctx.add("value", value)
        raise ConfigError(
            f"Invalid rotation in {where}: {value!r}",
            why="Rotation must be 'none' or 'mirror'.",
            fix="Use rotation: mirror for flexes that may be applied to the turned-over flexagon.",
            context=ctx,
        ) from None


def _entries(data: Dict[str, Any], key: str, path: str) -> List[Dict[str, Any]]:
    entries = data.get(key, [])
    if entries is None:
        return []
    if not isinstance(entries, list):
        raise config_wrong_type(key, "list", type(entries).__name__, path)
    for i, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise config_wrong_type(f"{key}[{i}]", "mapping", type(entry).__name__, path)
    return entries


class ConfigLoader:
    @staticmethod
    def load_yaml(path: str | Path) -> Dict[str, Any]:
        p = Path(path)
        with p.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise config_wrong_type(
                field="(root)",
                expected="mapping/object",
                got=type(data).__name__,
                path=str(p),
            )
        return data

    @staticmethod
    def load_flex_config(path: str | Path) -> FlexConfig:
        path_str = str(path)
        data = ConfigLoader.load_yaml(path)

        atomic: List[FlexDefinition] = []
        for i, entry in enumerate(_entries(data, "atomic", path_str)):
            where = f"atomic[{i}]"
            atomic.append(
                FlexDefinition(
                    name=_require_str(entry, "name", where, path_str),
                    formula=_require_str(entry, "formula", where, path_str),
                    input=_require_str(entry, "input", where, path_str),
                    output=entry.get("output"),
                    description=entry.get("description", ""),
                )
            )

        flexes: List[Union[Flex, FlexDefinition]] = []
        for i, entry in enumerate(_entries(data, "flexes", path_str)):
            where = f"flexes[{i}]"
            name = _require_str(entry, "name", where, path_str)
            rotation = _rotation(entry, where, path_str)
            description = entry.get("description", "")

            # A formula makes this a derived flex whose input is an atomic pattern.
            if "formula" in entry:
                flexes.append(
                    FlexDefinition(
                        name=name,
                        formula=_require_str(entry, "formula", where, path_str),
                        input=_require_str(entry, "input", where, path_str),
                        output=entry.get("output"),
                        description=description,
                        rotation=rotation,
                    )
                )
                continue

            for key in ("input", "output"):
                if key not in entry:
                    raise config_missing_field(f"{where}.{key}", path_str)
            flex = make_flex(name, entry["input"], entry["output"], rotation, description)
            if isinstance(flex, TreeError):
                raise config_invalid_definition(name, flex, path_str)
            flexes.append(flex)

        return FlexConfig(atomic=atomic, flexes=flexes)

    @staticmethod
    def load_script(path: str | Path) -> List[ScriptItem]:
        path_str = str(path)
        data = ConfigLoader.load_yaml(path)

        items: List[ScriptItem] = []
        for i, entry in enumerate(_entries(data, "script", path_str)):
            where = f"script[{i}]"
            num_pats = entry.get("numPats", entry.get("num_pats"))
            if num_pats is not None and (not isinstance(num_pats, int) or isinstance(num_pats, bool)):
                raise config_wrong_type(f"{where}.numPats", "int", type(num_pats).__name__, path_str)
            flexes = entry.get("flexes")
            if flexes is not None and not isinstance(flexes, str):
                raise config_wrong_type(f"{where}.flexes", "string", type(flexes).__name__, path_str)
            pats = entry.get("pats")
            if pats is not None and not isinstance(pats, list):
                raise config_wrong_type(f"{where}.pats", "list", type(pats).__name__, path_str)
            items.append(
                ScriptItem(
                    num_pats=num_pats,
                    pats=pats,
                    angles=entry.get("angles"),
                    directions=entry.get("directions"),
                    flexes=flexes,
                )
            )
        return items
