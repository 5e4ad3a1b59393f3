#!/usr/bin/env python
"""
Hexaflexagon Example

Demonstrates:
- Loading extra flex definitions from YAML
- Generating pat structure with '+' and flexing with a managed history
- Labelling faces
- Exploring every state reachable with the prime flexes

Run: python app.py
"""

from __future__ import annotations

import asyncio
from pathlib import Path

from flexiplex.config_loader import ConfigLoader
from flexiplex.explore import Explore, explore_async
from flexiplex.flexagon import make_flexagon
from flexiplex.flexes import build_flexes, get_prime_flexes
from flexiplex.manager import FlexagonManager

CONFIG_PATH = Path(__file__).parent / "flexes.yaml"


def build_manager() -> FlexagonManager:
    config = ConfigLoader.load_flex_config(CONFIG_PATH)
    flexes = build_flexes(config, 6)
    return FlexagonManager(make_flexagon([1, 2, 3, 4, 5, 6]), flexes)


async def main():
    manager = build_manager()
    print(f"Flexes: {', '.join(sorted(manager.all_flexes))}")

    # --- Flex ---
    manager.set_face_label("start", front=True)
    result = manager.apply_flexes("P+")
    if result is not True:
        raise SystemExit(result.format())
    print(f"After P+: {manager.flexagon}")

    print(f"Prime flexes here: {manager.check_for_prime_flexes()}")
    print(f"Prime flexes one vertex over: {manager.check_for_prime_flexes(right_steps=1)}")

    manager.apply_flexes("> Pk")
    print(f"After > Pk: {manager.flexagon}")
    print(f"History: {' '.join(manager.get_flex_history())}")

    manager.undo()
    print(f"Undo: {manager.flexagon}")

    # --- Explore ---
    async def on_progress(explore):
        print(f"  {explore.get_explored_states()} of {explore.get_total_states()} states explored")

    explore = Explore(manager.flexagon, get_prime_flexes(manager.all_flexes))
    await explore_async(explore, yield_every=10, on_progress=on_progress)
    print(f"Reachable states: {explore.get_total_states()}")


if __name__ == "__main__":
    asyncio.run(main())
