"""
seqpatch.core — Canonical change lists
======================================

THE MODEL
═════════

§1  CHANGES
───────────

Every alignment algorithm reports differences in its own vocabulary:
some classify each aligned position (common / left-only / right-only),
others emit removed/added records carrying an index into the OLD
sequence or the NEW sequence.  A caller that wants to *replay* those
differences needs one vocabulary with one index space.

That vocabulary is three operations:

    Remove(n)          delete the element currently at n
    Insert(n, item)    insert item at n, shifting the tail right
    Update(n, item)    replace the element at n with item

§2  THE WORKING SEQUENCE
────────────────────────

Positions are NOT source indices.  A change list is replayed left to
right against a mutable copy of the source, and each position refers to
that copy as mutated by all prior changes:

    source  = [a, b, c]
    changes = [Insert(0, z), Remove(2)]
              → [z, a, b, c] → [z, a, c]

INVARIANT (replayability):
    patch(source, changes) == target

§3  FUSION
──────────

A removal immediately followed by an insertion at the same place is a
replacement.  Two local rewrites turn such pairs into an Update:

    Remove(n),    Insert(n, x)    ⟹  Update(n, x)
    Insert(n, x), Remove(n + 1)   ⟹  Update(n, x)

The second rule holds because inserting x at n pushes the old element at
n to n + 1, which is exactly what the removal then deletes.

Fusion only ever looks at the LAST emitted change.  It is a peek/replace
on the tail of the list, O(1) per step, and the functions `insert` and
`remove` below are the only place it happens.

License: MIT
"""

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Iterable, Sequence

LOGGER = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════
#  CHANGE TYPES
# ═══════════════════════════════════════════════════════════════════

class ChangeKind(Enum):
    """Types of change operations."""
    REMOVE = auto()
    INSERT = auto()
    UPDATE = auto()


class Change:
    """Base class for change operations.  Not instantiated directly."""
    __slots__ = ()

    kind: ChangeKind
    position: int


@dataclass(frozen=True, slots=True)
class Remove(Change):
    """Delete the element at `position` in the working sequence."""
    position: int

    @property
    def kind(self) -> ChangeKind:
        return ChangeKind.REMOVE

    def __repr__(self) -> str:
        return f"Remove({self.position})"


@dataclass(frozen=True, slots=True)
class Insert(Change):
    """
    Insert `item` at `position`, shifting later elements right.

    Valid for any position in [0, len(working)].
    """
    position: int
    item: Any

    @property
    def kind(self) -> ChangeKind:
        return ChangeKind.INSERT

    def __repr__(self) -> str:
        return f"Insert({self.position}, {self.item!r})"


@dataclass(frozen=True, slots=True)
class Update(Change):
    """
    Replace the element at `position` with `item`.

    Equivalent to Remove(position) then Insert(position, item).
    """
    position: int
    item: Any

    @property
    def kind(self) -> ChangeKind:
        return ChangeKind.UPDATE

    def __repr__(self) -> str:
        return f"Update({self.position}, {self.item!r})"


class PatchError(IndexError):
    """A change addressed a position outside the working sequence."""

    def __init__(self, change: Change, length: int, step: int):
        self.change = change
        self.length = length
        self.step = step
        super().__init__(
            f"{change!r} at step {step} is out of bounds for a working "
            f"sequence of length {length}"
        )


# ═══════════════════════════════════════════════════════════════════
#  COALESCING PRIMITIVES
# ═══════════════════════════════════════════════════════════════════

def insert(n: int, item: Any, changes: list[Change]) -> None:
    """
    Process an insert.

    Upgrades `Remove(n), Insert(n, item)` to `Update(n, item)`.
    """
    if changes:
        prev = changes[-1]
        if isinstance(prev, Remove) and prev.position == n:
            changes[-1] = Update(n, item)
            return
    changes.append(Insert(n, item))


def remove(n: int, changes: list[Change]) -> None:
    """
    Process a remove.

    Upgrades `Insert(n, item), Remove(n + 1)` to `Update(n, item)`.
    """
    if changes:
        prev = changes[-1]
        if isinstance(prev, Insert) and n == prev.position + 1:
            changes[-1] = Update(prev.position, prev.item)
            return
    changes.append(Remove(n))


# ═══════════════════════════════════════════════════════════════════
#  PATCH (replay a change list)
# ═══════════════════════════════════════════════════════════════════

def patch(source: Sequence[Any], changes: Iterable[Change]) -> list[Any]:
    """
    Reproduce the target from `source` and a change list.

    This is the inverse of computing changes:
        patch(a, compute_changes(a, b)) == b

    The source is never mutated; elements are carried over by reference.
    Raises PatchError when a change falls outside the working sequence,
    which means the list was computed against a different source.
    """
    working = list(source)
    step = -1

    for step, change in enumerate(changes):
        if isinstance(change, Insert):
            n = change.position
            if n < 0 or n > len(working):
                raise PatchError(change, len(working), step)
            working.insert(n, change.item)
        elif isinstance(change, (Remove, Update)):
            n = change.position
            if n < 0 or n >= len(working):
                raise PatchError(change, len(working), step)
            if isinstance(change, Update):
                working[n] = change.item
            else:
                del working[n]
        else:
            raise TypeError(f"Unknown Change type: {type(change)}")

    LOGGER.debug("Replayed %d changes: %d -> %d elements",
                 step + 1, len(source), len(working))
    return working
