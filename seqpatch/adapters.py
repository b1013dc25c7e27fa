"""
seqpatch.adapters — Normalise raw alignment records into change lists.

Each backend reports differences in its own index space:

    edit-script   no indices; one record per aligned position
    LCS           Removed.old_index into the source,
                  Added.new_index into the target, payload inline
    Wu            as LCS, but Added has no payload

Every change, however, must be expressed in the WORKING sequence, the
source as mutated by every change emitted so far.  Walking the records
in order while counting `removed` and `added` is enough to translate:

    edit-script   Left at i    →  n = i - removed
                  Right at i   →  n = i - removed
    LCS / Wu      Removed(k)   →  n = k + added - removed
                  Added(k)     →  n = k

One generic walker (`Adapter.changes`) keeps the counters and hands each
step to the coalescing primitives; a backend only supplies `classify`,
the map from one raw record to a Removal, an Addition, or nothing.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Optional, Sequence, Union

from .align import (
    Added, AlignmentContractError, Both, Common, Left, Removed, Right,
    edit_script, lcs, wu,
)
from .config import DEFAULT_BACKEND, PatchConfig
from .core import Change, Insert, Remove, insert, remove

LOGGER = logging.getLogger(__name__)


class UnknownBackendError(KeyError):
    """No backend is registered under the requested name."""


# ═══════════════════════════════════════════════════════════════════
#  STEPS
# ═══════════════════════════════════════════════════════════════════

@dataclass(frozen=True, slots=True)
class Removal:
    """A removal already located in the working sequence."""
    position: int


@dataclass(frozen=True, slots=True)
class Addition:
    """An insertion already located in the working sequence."""
    position: int
    item: Any


Step = Union[Removal, Addition]


@dataclass
class Cursor:
    """Walker state visible to `classify`."""
    index: int = 0
    removed: int = 0
    added: int = 0


def _require(record: Any, field: str) -> int:
    value = getattr(record, field, None)
    if value is None:
        LOGGER.error("Alignment record without %s: %r", field, record)
        raise AlignmentContractError(f"{type(record).__name__} record has no {field}: {record!r}")
    return value


# ═══════════════════════════════════════════════════════════════════
#  GENERIC WALKER
# ═══════════════════════════════════════════════════════════════════

class Adapter:
    """
    Turn one backend's raw records into a canonical change list.

    Subclasses implement `classify`.  With fuse=False the walker appends
    plain Remove/Insert changes and never produces an Update.
    """

    name = ""

    def classify(self, record: Any, cursor: Cursor) -> Optional[Step]:
        raise NotImplementedError

    def changes(self, records: Iterable[Any], fuse: bool = True) -> list[Change]:
        changes: list[Change] = []
        cursor = Cursor()

        for index, record in enumerate(records):
            cursor.index = index
            step = self.classify(record, cursor)
            if step is None:
                continue
            if step.position < 0:
                LOGGER.error("Record %r maps to working position %d", record, step.position)
                raise AlignmentContractError(
                    f"{record!r} maps to negative working position {step.position}"
                )

            if isinstance(step, Removal):
                if fuse:
                    remove(step.position, changes)
                else:
                    changes.append(Remove(step.position))
                cursor.removed += 1
            else:
                if fuse:
                    insert(step.position, step.item, changes)
                else:
                    changes.append(Insert(step.position, step.item))
                cursor.added += 1

        LOGGER.debug("%s adapter: %d removed, %d added -> %d changes",
                     self.name, cursor.removed, cursor.added, len(changes))
        return changes


# ═══════════════════════════════════════════════════════════════════
#  BACKEND ADAPTERS
# ═══════════════════════════════════════════════════════════════════

class EditScriptAdapter(Adapter):
    """Left/Right/Both records; payload travels with the record."""

    name = "diff"

    def classify(self, record: Any, cursor: Cursor) -> Optional[Step]:
        if isinstance(record, Left):
            return Removal(cursor.index - cursor.removed)
        if isinstance(record, Right):
            return Addition(cursor.index - cursor.removed, record.item)
        if isinstance(record, Both):
            return None
        raise AlignmentContractError(f"Unknown edit-script record: {record!r}")


class LCSAdapter(Adapter):
    """Removed/Added/Common records with the payload inline."""

    name = "lcs"

    def classify(self, record: Any, cursor: Cursor) -> Optional[Step]:
        if isinstance(record, Removed):
            k = _require(record, "old_index")
            return Removal(k + cursor.added - cursor.removed)
        if isinstance(record, Added):
            k = _require(record, "new_index")
            return Addition(k, self.payload(record, k))
        if isinstance(record, Common):
            return None
        raise AlignmentContractError(f"Unknown {self.name} record: {record!r}")

    def payload(self, record: Added, k: int) -> Any:
        return record.data


class WuAdapter(LCSAdapter):
    """
    Removed/Added/Common records where Added carries only new_index.

    The payload is fetched from the target, so this is the one adapter
    that needs the target sequence as well as the records.
    """

    name = "wu"

    def __init__(self, target: Sequence[Any]):
        self.target = target

    def payload(self, record: Added, k: int) -> Any:
        return self.fetch(k)

    def fetch(self, k: int) -> Any:
        if not 0 <= k < len(self.target):
            LOGGER.error("new_index %d outside target of length %d", k, len(self.target))
            raise AlignmentContractError(
                f"new_index {k} is outside a target of length {len(self.target)}"
            )
        return self.target[k]


# ═══════════════════════════════════════════════════════════════════
#  CALLER-FACING API
# ═══════════════════════════════════════════════════════════════════

def diff_changes(records: Iterable[Any], fuse: bool = True) -> list[Change]:
    """
    Convert edit-script records (Left/Right/Both) into a change list.

    Unlike `wu_changes`, the target is not needed: inserted items are
    carried by the Right records.
    """
    return EditScriptAdapter().changes(records, fuse=fuse)


def diff_diff(a: Sequence[Any], b: Sequence[Any], fuse: bool = True) -> list[Change]:
    """Align `a` and `b` with `align.edit_script` and normalise the result."""
    return diff_changes(edit_script(a, b), fuse=fuse)


def lcs_changes(records: Iterable[Any], fuse: bool = True) -> list[Change]:
    """
    Convert LCS records (Removed/Added/Common) into a change list.

    Unlike `wu_changes`, the target is not needed: inserted items are
    carried by the Added records.
    """
    return LCSAdapter().changes(records, fuse=fuse)


def lcs_diff(a: Sequence[Any], b: Sequence[Any], fuse: bool = True) -> list[Change]:
    """Align `a` and `b` with `align.lcs` and normalise the result."""
    return lcs_changes(lcs(a, b), fuse=fuse)


def wu_changes(records: Iterable[Any], b: Sequence[Any], fuse: bool = True) -> list[Change]:
    """
    Convert Wu records (Removed/Added/Common) into a change list.

    Unlike `lcs_changes`, `b` is required: Added records only say where
    the inserted item lives in the target.
    """
    return WuAdapter(b).changes(records, fuse=fuse)


def wu_diff(a: Sequence[Any], b: Sequence[Any], fuse: bool = True) -> list[Change]:
    """Align `a` and `b` with `align.wu` and normalise the result."""
    return wu_changes(wu(a, b), b, fuse=fuse)


BACKENDS: dict[str, Callable[..., list[Change]]] = {
    "diff": diff_diff,
    "lcs": lcs_diff,
    "wu": wu_diff,
}


def compute_changes(
    a: Sequence[Any],
    b: Sequence[Any],
    backend: Optional[str] = None,
    fuse: Optional[bool] = None,
    config: Optional[PatchConfig] = None,
) -> list[Change]:
    """
    Compute the change list turning `a` into `b`.

    Explicit `backend` / `fuse` arguments win over `config`, which in
    turn wins over the package defaults.
    """
    config = config or PatchConfig()
    name = backend or config.backend or DEFAULT_BACKEND
    if fuse is None:
        fuse = config.fuse

    try:
        compute = BACKENDS[name]
    except KeyError:
        raise UnknownBackendError(
            f"Unknown backend {name!r}; expected one of {sorted(BACKENDS)}"
        ) from None
    return compute(a, b, fuse=fuse)
