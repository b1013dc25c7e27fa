"""
seqpatch — Canonical change lists from sequence alignments
==========================================================

Turn the output of a sequence-alignment algorithm into a short list of
Remove / Insert / Update changes, and replay that list to rebuild the
target:

    a = ["one", "TWO", "three", "four"]
    b = ["zero", "one", "two", "four"]

    diff_diff(a, b)  → [Insert(0, 'zero'), Remove(2), Update(2, 'two')]
    lcs_diff(a, b)   → [Insert(0, 'zero'), Update(2, 'two'), Remove(3)]
    wu_diff(a, b)    → [Insert(0, 'zero'), Remove(2), Update(2, 'two')]

    patch(a, diff_diff(a, b)) == b

Positions refer to the source as mutated by every earlier change, so a
change list is replayed strictly in order.  A removal and an insertion
that land on the same slot are fused into a single Update.

Three alignment backends are supported:
  • "diff"  edit-script records (Left / Right / Both)
  • "lcs"   longest-common-subsequence records with inline payload
  • "wu"    O(NP) records whose additions point into the target

`insert` and `remove` are exported so that records from any other
aligner can be normalised with the same fusion rules.
"""

from seqpatch.core import (
    # Types
    Change,
    ChangeKind,
    Remove,
    Insert,
    Update,
    PatchError,
    # Coalescing
    insert,
    remove,
    # Replay
    patch,
)
from seqpatch.align import AlignmentContractError
from seqpatch.adapters import (
    BACKENDS,
    UnknownBackendError,
    compute_changes,
    diff_changes, diff_diff,
    lcs_changes, lcs_diff,
    wu_changes, wu_diff,
)
from seqpatch.config import PatchConfig

__version__ = "0.1.0"
__all__ = [
    "Change", "ChangeKind", "Remove", "Insert", "Update", "PatchError",
    "insert", "remove", "patch",
    "AlignmentContractError",
    "BACKENDS", "UnknownBackendError", "compute_changes",
    "diff_changes", "diff_diff",
    "lcs_changes", "lcs_diff",
    "wu_changes", "wu_diff",
    "PatchConfig",
]
