from __future__ import annotations

import argparse
import asyncio
import os
from typing import Any, Dict, Optional

import yaml

from .atomic import atomic_pattern_to_string
from .atomic_flexes import apply_atomic_formula, derive_atomic_flexes, make_atomic_flexes
from .config_loader import ConfigLoader, FlexConfig
from .errors import ErrorContext, FlexiplexError, config_invalid_definition, is_error
from .explore import Explore, explore_async
from .flex import Flex
from .flexagon import Flexagon, make_flexagon
from .flexes import build_flexes, get_prime_flexes
from .logger import get_logger, set_session_id
from .manager import FlexagonManager
from .script import run_script
from .visualize import visualize


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Flexiplex CLI")
    sub = p.add_subparsers(dest="command", required=True)

    config_help = "Path to flex definitions YAML (or use FLEXIPLEX_CONFIG)."

    app = sub.add_parser("apply", help="Apply a flex sequence to a flexagon.")
    app.add_argument("--config", type=str, default=None, help=config_help)
    app.add_argument("--pats", type=str, required=True, help="Pats literal, e.g. '[[1,2],3,4,5,6,7]', or a pat count.")
    app.add_argument("flexes", type=str, help="Flex sequence, e.g. 'P+ > P'")

    exp = sub.add_parser("explore", help="Explore the states reachable from a flexagon.")
    exp.add_argument("--config", type=str, default=None, help=config_help)
    exp.add_argument("--pats", type=str, required=True, help="Pats literal or a pat count.")
    exp.add_argument("--flexes", type=str, default=None, help="Comma-separated flex names (default: prime flexes).")
    exp.add_argument("--max-steps", type=int, default=None, help="Stop after exploring this many states.")
    exp.add_argument("--mermaid", action="store_true", help="Print a Mermaid diagram of the state graph.")

    der = sub.add_parser("derive", help="Run an atomic flex formula on an atomic pattern.")
    der.add_argument("--config", type=str, default=None, help=config_help)
    der.add_argument("formula", type=str, help="Formula, e.g. 'Xr >> Xl >> Xr'")
    der.add_argument("input", type=str, help="Atomic pattern, e.g. 'a 1 > / [-3,2] > b'")

    run = sub.add_parser("run", help="Run a YAML script.")
    run.add_argument("--config", type=str, default=None, help=config_help)
    run.add_argument("script", type=str, help="Path to script YAML containing 'script:' list.")

    return p


def _resolve_config_path(cli_value: str | None) -> Optional[str]:
    return cli_value or os.getenv("FLEXIPLEX_CONFIG") or None


def _load_config(args) -> FlexConfig:
    config_path = _resolve_config_path(args.config)
    if config_path is None:
        return FlexConfig()
    return ConfigLoader.load_flex_config(config_path)


def _parse_pats(text: str) -> Flexagon:
    try:
        tree: Any = yaml.safe_load(text)
    except yaml.YAMLError as e:
        err = FlexiplexError(
            "Couldn't read --pats",
            why=str(e).splitlines()[0],
            fix="Use a literal like '[[1,2],3,4,5]' or a pat count.",
            context=ErrorContext().add("pats", text),
        )
        raise SystemExit(str(err)) from None
    if isinstance(tree, int) and not isinstance(tree, bool):
        tree = list(range(1, tree + 1))
    flexagon = make_flexagon(tree)
    if is_error(flexagon):
        raise SystemExit(flexagon.format())
    return flexagon


def _flexes_for(args, flexagon: Flexagon, logger) -> Dict[str, Flex]:
    return build_flexes(_load_config(args), flexagon.get_pat_count(), logger=logger)


async def cmd_apply(args) -> None:
    logger = get_logger("flexiplex")
    flexagon = _parse_pats(args.pats)
    manager = FlexagonManager(flexagon, _flexes_for(args, flexagon, logger), logger=logger)

    result = manager.apply_flexes(args.flexes)
    if result is not True:
        raise SystemExit(result.format())
    print(manager.flexagon)


async def cmd_explore(args) -> None:
    logger = get_logger("flexiplex")
    flexagon = _parse_pats(args.pats)
    all_flexes = _flexes_for(args, flexagon, logger)

    if args.flexes:
        names = [n.strip() for n in args.flexes.split(",") if n.strip()]
        unknown = [n for n in names if n not in all_flexes]
        if unknown:
            raise SystemExit(f"Unknown flexes: {', '.join(unknown)}")
        flexes = {n: all_flexes[n] for n in names}
    else:
        flexes = get_prime_flexes(all_flexes)

    explore = await explore_async(Explore(flexagon, flexes), max_steps=args.max_steps, yield_every=50)
    if args.mermaid:
        print(visualize(explore))
    else:
        print(f"states: {explore.get_total_states()}")
        print(f"explored: {explore.get_explored_states()}")


async def cmd_derive(args) -> None:
    atomic, errors = derive_atomic_flexes(_load_config(args).atomic, make_atomic_flexes(), validate=True)
    if errors:
        name, error = errors[0]
        raise config_invalid_definition(name, error)

    result = apply_atomic_formula(args.formula, args.input, atomic)
    if is_error(result):
        raise SystemExit(result.format())
    print(atomic_pattern_to_string(result))


async def cmd_run(args) -> None:
    logger = get_logger("flexiplex")
    items = ConfigLoader.load_script(args.script)
    config = _load_config(args)

    manager = None
    for item in items:
        # Each new flexagon gets the flex set for its own pat count.
        pat_count = len(item.pats) if item.pats is not None else item.num_pats
        flexes = build_flexes(config, pat_count, logger=logger) if pat_count else None
        manager = run_script([item], manager, flexes, logger=logger)
        if is_error(manager):
            raise SystemExit(manager.format())

    if manager is None:
        raise SystemExit("Script is empty.")
    print(manager.flexagon)
    print(" ".join(manager.get_flex_history()))


def main() -> None:
    parser = build_parser()
    args = parser.parse_args()
    set_session_id()

    commands = {
        "apply": cmd_apply,
        "explore": cmd_explore,
        "derive": cmd_derive,
        "run": cmd_run,
    }
    command = commands.get(args.command)
    if command is None:
        raise SystemExit(2)

    try:
        asyncio.run(command(args))
    except FlexiplexError as e:
        raise SystemExit(str(e)) from None


if __name__ == "__main__":
    main()
