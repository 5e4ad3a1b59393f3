"""Tests for public API stability.

These tests ensure the top-level imports remain valid and don't regress.
"""

from __future__ import annotations


def test_core_imports_from_top_level():
    """Core symbols are importable from flexiplex directly."""
    from flexiplex import Flex, Flexagon, FlexagonManager, Leaf, Pair

    assert Flexagon.__name__ == "Flexagon"
    assert Flex.__name__ == "Flex"
    assert FlexagonManager.__name__ == "FlexagonManager"
    assert Leaf.__name__ == "Leaf"
    assert Pair.__name__ == "Pair"


def test_atomic_imports_from_top_level():
    """Atomic algebra symbols are importable from flexiplex directly."""
    from flexiplex import (
        AtomicPattern,
        FlexDefinition,
        apply_atomic_formula,
        make_atomic_flexes,
        string_to_atomic_pattern,
    )

    assert AtomicPattern.__name__ == "AtomicPattern"
    assert FlexDefinition.__name__ == "FlexDefinition"
    assert callable(apply_atomic_formula)
    assert callable(make_atomic_flexes)
    assert callable(string_to_atomic_pattern)


def test_config_imports_from_top_level():
    """Config symbols are importable from flexiplex directly."""
    from flexiplex import ConfigLoader, FlexConfig

    assert ConfigLoader.__name__ == "ConfigLoader"
    assert FlexConfig().atomic == []


def test_top_level_quick_start():
    """The quick start in the package docstring works."""
    from flexiplex import FlexagonManager, make_flexagon

    manager = FlexagonManager(make_flexagon([1, 2, 3, 4, 5, 6]))
    assert manager.apply_flexes("P+ > P") is True
    assert manager.undo() is True
    assert manager.flexagon.to_tree() == [1, 2, 3, 4, 5, 6]


def test_version_available():
    """Version string is accessible."""
    import flexiplex

    assert hasattr(flexiplex, "__version__")
    assert isinstance(flexiplex.__version__, str)
    assert flexiplex.__version__.count(".") >= 2  # semver-ish


def test_all_exports_are_importable():
    """All symbols in __all__ are actually importable."""
    import flexiplex

    for name in flexiplex.__all__:
        obj = getattr(flexiplex, name, None)
        assert obj is not None, f"'{name}' in __all__ but not importable"
