"""
Test suite for seqpatch.adapters — from raw records to change lists.

Organised around the properties a change list must have:
    §1  Concrete scenarios (exact change lists per backend)
    §2  Update fusion
    §3  Round-trip over chains of states
    §4  Empty diff
    §5  Deeper-lookback edge cases
    §6  Unfused output
    §7  Upstream contract violations
    §8  compute_changes and configuration
"""

import sys
import os
import random
import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from seqpatch.core import Remove, Insert, Update, patch
from seqpatch.align import (
    Left, Right, Both, Removed, Added, Common, AlignmentContractError,
)
from seqpatch.adapters import (
    BACKENDS, UnknownBackendError, compute_changes,
    diff_changes, diff_diff,
    lcs_changes, lcs_diff,
    wu_changes, wu_diff,
)
from seqpatch.config import PatchConfig


ALL_DIFFS = [diff_diff, lcs_diff, wu_diff]

INT_STATES = [
    [],
    [2],
    [2, 6],
    [2, 4, 6],
    [2, 4, 6, 8],
    [1, 2, 4, 6, 8],
    [1, 2, 3, 5, 8],
    [1, 2, 3, 5, 8],
    [2, 3, 5, 8],
    [2, 5, 8],
    [2, 5],
    [],
]

STR_STATES = [
    [],
    ["alpha"],
    ["alpha", "delta"],
    ["alpha", "bravo", "delta"],
    ["alpha", "bravo", "charlie", "delta"],
    ["pre-alpha", "alpha", "pre-bravo", "pre-charlie", "delta"],
    ["pre-alpha", "alpha", "pre-bravo", "pre-charlie"],
    ["pre-alpha", "pre-bravo", "pre-charlie"],
    ["pre-bravo", "pre-charlie"],
    ["pre-bravo"],
    [],
]


# ═══════════════════════════════════════════════════════════════════
#  §1  CONCRETE SCENARIOS
# ═══════════════════════════════════════════════════════════════════

class TestScenarios:

    A = ["one", "TWO", "three", "four"]
    B = ["zero", "one", "two", "four"]

    @pytest.mark.parametrize("compute", [diff_diff, wu_diff])
    def test_edit_script_and_wu(self, compute):
        changes = compute(self.A, self.B)
        assert changes == [Insert(0, "zero"), Remove(2), Update(2, "two")]
        assert patch(self.A, changes) == self.B

    def test_lcs(self):
        changes = lcs_diff(self.A, self.B)
        assert changes == [Insert(0, "zero"), Update(2, "two"), Remove(3)]
        assert patch(self.A, changes) == self.B

    @pytest.mark.parametrize("compute", ALL_DIFFS)
    def test_last_element_update(self, compute):
        assert compute([1, 2, 3], [1, 2, 4]) == [Update(2, 4)]

    @pytest.mark.parametrize("compute", ALL_DIFFS)
    def test_insert_into_empty(self, compute):
        assert compute([], [2]) == [Insert(0, 2)]

    @pytest.mark.parametrize("compute", ALL_DIFFS)
    def test_remove_everything(self, compute):
        changes = compute([2, 5], [])
        assert patch([2, 5], changes) == []
        assert all(isinstance(c, Remove) for c in changes)


# ═══════════════════════════════════════════════════════════════════
#  §2  UPDATE FUSION
# ═══════════════════════════════════════════════════════════════════

class TestUpdate:

    @pytest.mark.parametrize("compute", ALL_DIFFS)
    @pytest.mark.parametrize("a,b,expected", [
        ([1], [2], [Update(0, 2)]),
        ([1, 2], [1, 3], [Update(1, 3)]),
        ([1, 2, 3], [1, 2, 4], [Update(2, 4)]),
        (["alpha"], ["bravo"], [Update(0, "bravo")]),
        (["alpha", "bravo"], ["alpha", "charlie"], [Update(1, "charlie")]),
        (["alpha", "bravo", "charlie"], ["alpha", "bravo", "delta"],
         [Update(2, "delta")]),
    ])
    def test_single_substitution(self, compute, a, b, expected):
        assert compute(a, b) == expected

    def test_remove_then_insert_record_order(self):
        """Left then Right at the same slot becomes one Update."""
        records = [Both(1, 1), Left(2), Right(9)]
        assert diff_changes(records) == [Update(1, 9)]

    def test_insert_then_remove_record_order(self):
        """Added then Removed of the displaced element becomes one Update."""
        records = [
            Common(old_index=0, new_index=0, data=1),
            Added(new_index=1, data=9),
            Removed(old_index=1, data=2),
        ]
        assert lcs_changes(records) == [Update(1, 9)]

    def test_wu_fetches_update_payload_from_target(self):
        records = [Removed(old_index=0), Added(new_index=0)]
        assert wu_changes(records, ["new"]) == [Update(0, "new")]


# ═══════════════════════════════════════════════════════════════════
#  §3  ROUND-TRIP OVER CHAINS OF STATES
# ═══════════════════════════════════════════════════════════════════

class TestRoundTrip:

    def _assert_chain(self, states, compute):
        for a, b in zip(states, states[1:]):
            changes = compute(a, b)
            result = patch(a, changes)
            assert result == b, (
                f"Round-trip failed with {compute.__name__}:\n"
                f"  a = {a!r}\n"
                f"  b = {b!r}\n"
                f"  changes = {changes!r}\n"
                f"  result = {result!r}"
            )

    @pytest.mark.parametrize("compute", ALL_DIFFS)
    def test_int_chain(self, compute):
        self._assert_chain(INT_STATES, compute)

    @pytest.mark.parametrize("compute", ALL_DIFFS)
    def test_str_chain(self, compute):
        self._assert_chain(STR_STATES, compute)

    @pytest.mark.parametrize("compute", ALL_DIFFS)
    def test_random_pairs(self, compute):
        rng = random.Random(7)
        for _ in range(200):
            a = [rng.choice("abcd") for _ in range(rng.randint(0, 8))]
            b = [rng.choice("abcd") for _ in range(rng.randint(0, 8))]
            assert patch(a, compute(a, b)) == b

    @pytest.mark.parametrize("compute", ALL_DIFFS)
    def test_unhashable_elements(self, compute):
        a = [{"id": 1}, {"id": 2}, {"id": 3}]
        b = [{"id": 1}, {"id": 4}, {"id": 3}, {"id": 5}]
        assert patch(a, compute(a, b)) == b

    @pytest.mark.parametrize("compute", ALL_DIFFS)
    def test_tuple_inputs(self, compute):
        assert patch((1, 2, 3), compute((1, 2, 3), (3, 2, 1))) == [3, 2, 1]


# ═══════════════════════════════════════════════════════════════════
#  §4  EMPTY DIFF
# ═══════════════════════════════════════════════════════════════════

class TestEmptyDiff:

    @pytest.mark.parametrize("compute", ALL_DIFFS)
    @pytest.mark.parametrize("s", [[], [1], [1, 2, 3], ["a", "a", "b"]])
    def test_identical_sequences(self, compute, s):
        assert compute(s, list(s)) == []


# ═══════════════════════════════════════════════════════════════════
#  §5  DEEPER-LOOKBACK EDGE CASES
#      Fusion consults only the last emitted change.  These streams
#      put several insertions ahead of the removal they displace.
# ═══════════════════════════════════════════════════════════════════

class TestLookback:

    def test_two_rights_before_lefts(self):
        records = [Right("x"), Right("y"), Left("s"), Left("t")]
        changes = diff_changes(records)
        assert changes == [Insert(0, "x"), Update(1, "y"), Remove(2)]
        assert patch(["s", "t"], changes) == ["x", "y"]

    def test_two_additions_before_removals(self):
        records = [
            Added(new_index=0, data="x"),
            Added(new_index=1, data="y"),
            Removed(old_index=0, data="s"),
            Removed(old_index=1, data="t"),
        ]
        changes = lcs_changes(records)
        assert changes == [Insert(0, "x"), Update(1, "y"), Remove(2)]
        assert patch(["s", "t"], changes) == ["x", "y"]

    def test_removals_before_additions(self):
        records = [Left("s"), Left("t"), Right("x"), Right("y")]
        changes = diff_changes(records)
        assert changes == [Remove(0), Update(0, "x"), Insert(1, "y")]
        assert patch(["s", "t"], changes) == ["x", "y"]

    def test_interleaved_hunks(self):
        records = [
            Right("x"), Left("a"), Both("b", "b"),
            Left("c"), Right("y"), Right("z"),
        ]
        changes = diff_changes(records)
        assert changes == [Update(0, "x"), Update(2, "y"), Insert(3, "z")]
        assert patch(["a", "b", "c"], changes) == ["x", "b", "y", "z"]


# ═══════════════════════════════════════════════════════════════════
#  §6  UNFUSED OUTPUT
# ═══════════════════════════════════════════════════════════════════

class TestUnfused:

    def test_edit_script_unfused(self):
        assert diff_diff([1, 2, 3], [1, 2, 4], fuse=False) == [Remove(2), Insert(2, 4)]

    def test_lcs_unfused(self):
        assert lcs_diff([1, 2, 3], [1, 2, 4], fuse=False) == [Insert(2, 4), Remove(3)]

    @pytest.mark.parametrize("compute", ALL_DIFFS)
    def test_no_updates_and_round_trip(self, compute):
        for a, b in zip(STR_STATES, STR_STATES[1:]):
            changes = compute(a, b, fuse=False)
            assert not any(isinstance(c, Update) for c in changes)
            assert patch(a, changes) == b

    @pytest.mark.parametrize("compute", ALL_DIFFS)
    def test_fused_is_never_longer(self, compute):
        for a, b in zip(INT_STATES, INT_STATES[1:]):
            assert len(compute(a, b)) <= len(compute(a, b, fuse=False))


# ═══════════════════════════════════════════════════════════════════
#  §7  UPSTREAM CONTRACT VIOLATIONS
# ═══════════════════════════════════════════════════════════════════

class TestContractViolations:

    def test_removed_without_old_index(self):
        with pytest.raises(AlignmentContractError):
            lcs_changes([Removed(new_index=0, data="a")])

    def test_added_without_new_index(self):
        with pytest.raises(AlignmentContractError):
            lcs_changes([Added(old_index=0, data="a")])

    def test_wu_added_without_new_index(self):
        with pytest.raises(AlignmentContractError):
            wu_changes([Added()], ["a"])

    def test_wu_new_index_outside_target(self):
        with pytest.raises(AlignmentContractError):
            wu_changes([Added(new_index=3)], ["a"])

    def test_negative_working_position(self):
        with pytest.raises(AlignmentContractError):
            lcs_changes([Removed(old_index=0), Removed(old_index=0)])

    def test_unknown_edit_script_record(self):
        with pytest.raises(AlignmentContractError):
            diff_changes([Removed(old_index=0)])

    def test_unknown_indexed_record(self):
        with pytest.raises(AlignmentContractError):
            lcs_changes([Left("a")])

    def test_is_value_error(self):
        with pytest.raises(ValueError):
            lcs_changes([Removed()])


# ═══════════════════════════════════════════════════════════════════
#  §8  compute_changes AND CONFIGURATION
# ═══════════════════════════════════════════════════════════════════

class TestComputeChanges:

    A = ["one", "TWO", "three", "four"]
    B = ["zero", "one", "two", "four"]

    def test_registry(self):
        assert set(BACKENDS) == {"diff", "lcs", "wu"}

    def test_default_backend(self):
        assert compute_changes(self.A, self.B) == diff_diff(self.A, self.B)

    @pytest.mark.parametrize("name", ["diff", "lcs", "wu"])
    def test_named_backend(self, name):
        assert compute_changes(self.A, self.B, backend=name) == BACKENDS[name](self.A, self.B)

    def test_config(self):
        config = PatchConfig(backend="lcs", fuse=False)
        assert compute_changes([1, 2, 3], [1, 2, 4], config=config) == [
            Insert(2, 4), Remove(3),
        ]

    def test_explicit_arguments_override_config(self):
        config = PatchConfig(backend="lcs", fuse=False)
        changes = compute_changes([1, 2, 3], [1, 2, 4], backend="diff", fuse=True,
                                  config=config)
        assert changes == [Update(2, 4)]

    def test_unknown_backend(self):
        with pytest.raises(UnknownBackendError):
            compute_changes([1], [2], backend="patience")

    def test_unknown_backend_is_key_error(self):
        with pytest.raises(KeyError):
            compute_changes([1], [2], config=PatchConfig(backend="nope"))


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
