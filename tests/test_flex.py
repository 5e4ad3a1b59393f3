"""Tests for ring flexes: matching, substitution, search and generation."""

from __future__ import annotations

from flexiplex.errors import FlexCode, FlexError, TreeCode, TreeError
from flexiplex.flex import Flex, FlexRotation, make_flex
from flexiplex.flexagon import make_flexagon
from flexiplex.flexes import make_all_flexes


def _f(tree):
    return make_flexagon(tree)


def _flex(name, pattern, output, rotation=FlexRotation.NONE) -> Flex:
    flex = make_flex(name, pattern, output, rotation)
    assert isinstance(flex, Flex)
    return flex


# --- apply_here tests ---


def test_apply_here_substitutes_bindings():
    """Pattern slots are filled in the output."""
    flex = _flex("A", [[1, 2], 3, 4, 5], [1, [2, 3], 4, 5])
    assert flex.apply_here(_f([[1, 2], 3, 4, 5])).to_tree() == [1, [2, 3], 4, 5]
    assert flex.apply_here(_f([[-1, 6], 3, 4, 5])).to_tree() == [-1, [6, 3], 4, 5]


def test_pattern_leaf_binds_subtree():
    """A slot matches a whole subtree, not just a leaf."""
    flex = _flex("A", [[1, 2], 3, 4, 5], [1, [2, 3], 4, 5])
    result = flex.apply_here(_f([[[1, 2], 3], 4, 5, 6]))
    assert result.to_tree() == [[1, 2], [3, 4], 5, 6]


def test_negative_slot_binds_flipped_subtree():
    """A slot written -k binds the flipped subtree."""
    flex = _flex("F", [-1, 2], [1, 2])
    assert flex.apply_here(_f([3, 4])).to_tree() == [-3, 4]
    assert flex.apply_here(_f([[1, 2], 3])).to_tree() == [[-2, -1], 3]


def test_apply_here_needs_pairs_where_pattern_has_pairs():
    """A pattern pair doesn't match a leaf."""
    flex = _flex("A", [[1, 2], 3, 4, 5], [1, [2, 3], 4, 5])
    result = flex.apply_here(_f([1, 2, 3, 4]))
    assert result == FlexError(FlexCode.CANT_APPLY_FLEX, "A")


def test_pat_count_mismatch_cant_apply():
    """A flex only applies to flexagons with its pat count."""
    flex = _flex("A", [[1, 2], 3, 4, 5], [1, [2, 3], 4, 5])
    assert flex.apply(_f([[1, 2], 3, 4])).code is FlexCode.CANT_APPLY_FLEX


# --- apply (search) tests ---


def test_apply_searches_rotations_and_keeps_frame():
    """The rotation used to find a match is undone on the result."""
    flex = _flex("A", [[1, 2], 3, 4, 5], [1, [2, 3], 4, 5])
    result = flex.apply(_f([3, 4, [1, 2], 5]))
    assert result.to_tree() == [3, 4, 1, [2, 5]]


def test_apply_mirror_tries_turned_over():
    """Only mirror flexes may match on the turned-over flexagon."""
    pattern = [[1, 2], [[3, 4], [5, 6]], 7]
    output = [[1, 2], [[3, 4], [5, 6]], -7]
    flexagon = _f([[1, 2], 3, [[4, 5], [6, 7]]])

    plain = _flex("M", pattern, output)
    assert plain.apply(flexagon).code is FlexCode.CANT_APPLY_FLEX

    mirror = _flex("M", pattern, output, FlexRotation.MIRROR)
    assert mirror.apply(flexagon).to_tree() == [[1, 2], -3, [[4, 5], [6, 7]]]


def test_apply_does_not_modify_input():
    """Flexing returns a new flexagon."""
    flex = _flex("A", [[1, 2], 3, 4, 5], [1, [2, 3], 4, 5])
    flexagon = _f([[1, 2], 3, 4, 5])
    flex.apply(flexagon)
    assert flexagon.to_tree() == [[1, 2], 3, 4, 5]


# --- make_flex / inverse tests ---


def test_make_flex_validates_literals():
    """Bad pattern or output literals are reported."""
    assert make_flex("X", [1, 1], [1, 2]) == TreeError(TreeCode.DUPLICATE_LEAF, 1)
    result = make_flex("X", [1, 2], [1, 2, 3])
    assert result.code is TreeCode.PAT_COUNT_MISMATCH


def test_make_flex_rejects_unbound_output_slot():
    """An output slot the pattern never binds is rejected up front."""
    result = make_flex("Z", [1, 2], [1, 3])
    assert isinstance(result, TreeError)
    assert result.code is TreeCode.LEAF_MISMATCH


def test_make_flex_rejects_dropped_leaves():
    """An output that leaves out a pattern slot would lose leaves."""
    result = make_flex("Z", [[1, 2], 3], [1, 3])
    assert isinstance(result, TreeError)
    assert result.code is TreeCode.LEAF_MISMATCH


def test_make_flex_allows_sign_changes():
    """Slots may change sign between pattern and output."""
    assert isinstance(make_flex("F", [-1, 2], [1, -2]), Flex)


def test_inverse_swaps_pattern_and_output():
    """The inverse undoes the flex and toggles the prime."""
    flex = _flex("A", [[1, 2], 3, 4, 5], [1, [2, 3], 4, 5])
    inverse = flex.inverse()
    assert inverse.name == "A'"
    assert inverse.inverse().name == "A"
    assert inverse.apply(_f([1, [2, 3], 4, 5])).to_tree() == [[1, 2], 3, 4, 5]


# --- create_pattern tests ---


def test_pinch_needs_structure():
    """The pinch flex can't be applied to a flexagon with no pairs."""
    pinch = make_all_flexes(6)["P"]
    assert pinch.apply(_f([1, 2, 3, 4, 5, 6])).code is FlexCode.CANT_APPLY_FLEX


def test_create_pattern_adds_fresh_leaves():
    """Missing pairs are filled with new leaves numbered after the largest id."""
    pinch = make_all_flexes(6)["P"]
    generated = pinch.create_pattern(_f([1, 2, 3, 4, 5, 6]))
    assert generated.to_tree() == [[1, 7], 2, [3, 8], 4, [5, 9], 6]


def test_pinch_after_create_pattern_and_back():
    """P then P' returns to the generated flexagon."""
    flexes = make_all_flexes(6)
    generated = flexes["P"].create_pattern(_f([1, 2, 3, 4, 5, 6]))
    flexed = flexes["P"].apply(generated)
    assert flexed.to_tree() == [-5, [7, -6], -1, [8, -2], -3, [9, -4]]
    assert flexes["P'"].apply(flexed) == generated


def test_create_pattern_keeps_existing_structure():
    """Pats that already have the structure are left alone."""
    pinch = make_all_flexes(6)["P"]
    flexagon = _f([[1, 7], 2, [3, 8], 4, [5, 9], 6])
    assert pinch.create_pattern(flexagon) == flexagon
