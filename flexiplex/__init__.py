"""Flexiplex - a flexagon flex and exploration engine.

Quick Start:
    from flexiplex import FlexagonManager, make_flexagon

    manager = FlexagonManager(make_flexagon([1, 2, 3, 4, 5, 6]))
    manager.apply_flexes("P+ > P")     # generate structure, then pinch flex
    print(manager.flexagon)            # the new pat structure
    manager.undo()

Deriving flexes from atomic formulas:
    from flexiplex import apply_atomic_formula, make_atomic_flexes

    flexes = make_atomic_flexes()
    result = apply_atomic_formula("Xr >> Xl >> Xr", "a 1 > / [-3,2] > -4 > [6,-5] > 7 > [-9,8] > b", flexes)

Exploring every reachable state:
    from flexiplex import Explore, make_all_flexes, get_prime_flexes

    explore = Explore(flexagon, get_prime_flexes(make_all_flexes(6)))
    while explore.check_next():
        pass
    print(explore.get_total_states())
"""

from .atomic import AtomicPattern, ConnectedPat, atomic_pattern_to_string, string_to_atomic_pattern
from .atomic_flexes import (
    AtomicFlex,
    apply_atomic_formula,
    atomic_to_flex,
    derive_atomic_flex,
    make_atomic_flexes,
)
from .config_loader import ConfigLoader, FlexConfig
from .definitions import FlexDefinition
from .errors import (
    AtomicParseError,
    AtomicPatternError,
    ConfigError,
    FlexagonError,
    FlexError,
    FlexiplexError,
    TreeError,
)
from .explore import Explore, explore_async
from .flex import Flex, FlexRotation, make_flex
from .flexagon import Flexagon, make_flexagon
from .flexes import check_for_flexes, get_prime_flexes, make_all_flexes
from .formula import FlexName, parse_flex_sequence
from .manager import FlexagonManager
from .pat import Leaf, Pair
from .props import PropertiesForLeaves
from .script import ScriptItem, run_script
from .tracker import Tracker
from .visualize import visualize

__all__ = [
    # Core
    "Flexagon",
    "make_flexagon",
    "Leaf",
    "Pair",
    "Flex",
    "FlexRotation",
    "make_flex",
    # Flex sets
    "make_all_flexes",
    "get_prime_flexes",
    "check_for_flexes",
    # Atomic algebra
    "AtomicPattern",
    "ConnectedPat",
    "AtomicFlex",
    "FlexName",
    "FlexDefinition",
    "string_to_atomic_pattern",
    "atomic_pattern_to_string",
    "parse_flex_sequence",
    "apply_atomic_formula",
    "derive_atomic_flex",
    "make_atomic_flexes",
    "atomic_to_flex",
    # Exploration
    "Tracker",
    "Explore",
    "explore_async",
    # Facade
    "FlexagonManager",
    "PropertiesForLeaves",
    "ScriptItem",
    "run_script",
    # Config
    "ConfigLoader",
    "FlexConfig",
    # Errors
    "FlexiplexError",
    "ConfigError",
    "FlexagonError",
    "TreeError",
    "FlexError",
    "AtomicParseError",
    "AtomicPatternError",
    # Visualization
    "visualize",
]

__version__ = "0.1.0"
