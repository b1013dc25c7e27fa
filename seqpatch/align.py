"""
seqpatch.align — Raw alignment records and the bundled aligners.

Three record vocabularies are accepted by the adapters:

    • Edit-script style   Left(item) / Right(item) / Both(left, right)
          one record per aligned position, payload inline, no indices

    • LCS style           Removed / Added / Common
          each carrying old_index and/or new_index, payload inline

    • Wu style            Removed / Added / Common
          same shape as LCS, but Added carries only new_index

Any producer obeying those contracts can feed the adapters.  This module
also ships one small aligner per contract so that compute_changes works
without an external dependency:

    edit_script(a, b)   prefix/suffix trim + forward walk of an LCS table
    lcs(a, b)           backward walk of a full LCS table
    wu(a, b)            Wu, Manber & Myers O(NP) furthest-point search

Elements only need `==`; nothing is hashed.

References:
    Hunt, J. W.; Szymanski, T. G. (1977). "A fast algorithm for computing
        longest common subsequences."
    Wu, S.; Manber, U.; Myers, G. (1989). "An O(NP) Sequence Comparison
        Algorithm."
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional, Sequence, Union

LOGGER = logging.getLogger(__name__)


class AlignmentContractError(ValueError):
    """A raw alignment record broke its producer's contract."""


# ═══════════════════════════════════════════════════════════════════
#  EDIT-SCRIPT RECORDS
# ═══════════════════════════════════════════════════════════════════

@dataclass(frozen=True, slots=True)
class Left:
    """Element present only in the source."""
    item: Any


@dataclass(frozen=True, slots=True)
class Right:
    """Element present only in the target."""
    item: Any


@dataclass(frozen=True, slots=True)
class Both:
    """Element common to source and target."""
    left: Any
    right: Any


EditRecord = Union[Left, Right, Both]


# ═══════════════════════════════════════════════════════════════════
#  INDEXED RECORDS (LCS / Wu)
# ═══════════════════════════════════════════════════════════════════

@dataclass(frozen=True, slots=True)
class Removed:
    """Source element at `old_index` does not survive."""
    old_index: Optional[int] = None
    new_index: Optional[int] = None
    data: Any = None


@dataclass(frozen=True, slots=True)
class Added:
    """
    Target element at `new_index` is new.

    LCS-style producers fill `data`; Wu-style producers leave it unset
    and the consumer looks the element up in the target.
    """
    old_index: Optional[int] = None
    new_index: Optional[int] = None
    data: Any = None


@dataclass(frozen=True, slots=True)
class Common:
    """Element kept from `old_index` to `new_index`."""
    old_index: Optional[int] = None
    new_index: Optional[int] = None
    data: Any = None


IndexedRecord = Union[Removed, Added, Common]


# ═══════════════════════════════════════════════════════════════════
#  EDIT-SCRIPT ALIGNER
# ═══════════════════════════════════════════════════════════════════

def _common_prefix(a: Sequence[Any], b: Sequence[Any]) -> int:
    limit = min(len(a), len(b))
    count = 0
    while count < limit and a[count] == b[count]:
        count += 1
    return count


def _common_suffix(a: Sequence[Any], b: Sequence[Any], skip: int) -> int:
    limit = min(len(a), len(b)) - skip
    count = 0
    while count < limit and a[-1 - count] == b[-1 - count]:
        count += 1
    return count


def edit_script(a: Sequence[Any], b: Sequence[Any]) -> list[EditRecord]:
    """
    Classify every aligned position as Both, Left or Right.

    The common prefix and suffix are reported as Both without entering
    the table.  The middle is aligned with a suffix LCS table:

        table[i][j] = LCS length of a[i:] and b[j:]

    walked forwards from (0, 0).  When dropping either side keeps the
    same LCS length, the source element is reported first, so inside a
    changed region Left records come before Right records.
    """
    head = _common_prefix(a, b)
    tail = _common_suffix(a, b, head)
    mid_a = a[head:len(a) - tail]
    mid_b = b[head:len(b) - tail]
    m, n = len(mid_a), len(mid_b)

    table = [[0] * (n + 1) for _ in range(m + 1)]
    for i in range(m - 1, -1, -1):
        for j in range(n - 1, -1, -1):
            if mid_a[i] == mid_b[j]:
                table[i][j] = table[i + 1][j + 1] + 1
            else:
                table[i][j] = max(table[i + 1][j], table[i][j + 1])

    records: list[EditRecord] = [Both(a[k], b[k]) for k in range(head)]

    i = j = 0
    while i < m and j < n:
        if mid_a[i] == mid_b[j]:
            records.append(Both(mid_a[i], mid_b[j]))
            i += 1
            j += 1
        elif table[i + 1][j] >= table[i][j + 1]:
            records.append(Left(mid_a[i]))
            i += 1
        else:
            records.append(Right(mid_b[j]))
            j += 1
    records.extend(Left(mid_a[k]) for k in range(i, m))
    records.extend(Right(mid_b[k]) for k in range(j, n))

    records.extend(Both(a[len(a) - tail + k], b[len(b) - tail + k])
                   for k in range(tail))
    return records


# ═══════════════════════════════════════════════════════════════════
#  LCS ALIGNER
# ═══════════════════════════════════════════════════════════════════

def lcs(a: Sequence[Any], b: Sequence[Any]) -> list[IndexedRecord]:
    """
    Removed/Added/Common records from a longest common subsequence.

    Builds the full prefix table

        dp[i][j] = LCS length of a[:i] and b[:j]

    and traces back from (len(a), len(b)).  On a tie the trace-back
    removes, which read forwards means additions are reported ahead of
    the removals they pair with.
    """
    m, n = len(a), len(b)

    dp = [[0] * (n + 1) for _ in range(m + 1)]
    for i in range(1, m + 1):
        for j in range(1, n + 1):
            if a[i - 1] == b[j - 1]:
                dp[i][j] = dp[i - 1][j - 1] + 1
            else:
                dp[i][j] = max(dp[i - 1][j], dp[i][j - 1])

    records: list[IndexedRecord] = []
    i, j = m, n
    while i > 0 or j > 0:
        if i > 0 and j > 0 and a[i - 1] == b[j - 1]:
            records.append(Common(old_index=i - 1, new_index=j - 1, data=a[i - 1]))
            i -= 1
            j -= 1
        elif i > 0 and (j == 0 or dp[i - 1][j] >= dp[i][j - 1]):
            records.append(Removed(old_index=i - 1, data=a[i - 1]))
            i -= 1
        else:
            records.append(Added(new_index=j - 1, data=b[j - 1]))
            j -= 1

    records.reverse()
    return records


# ═══════════════════════════════════════════════════════════════════
#  WU O(NP) ALIGNER
# ═══════════════════════════════════════════════════════════════════

@dataclass(slots=True)
class _Route:
    """One snake on the furthest-reaching path, linked to its predecessor."""
    x0: int
    y0: int
    x1: int
    y1: int
    prev: Optional["_Route"]


def _onp_route(A: Sequence[Any], B: Sequence[Any]) -> Optional[_Route]:
    """
    Furthest-reaching-point search of Wu et al. with len(A) <= len(B).

    x walks A, y walks B, diagonal k = y - x.  fp[k] is the furthest y
    reached on diagonal k; p counts deletions beyond the delta.
    Returns the last snake of the route ending at (len(A), len(B)).
    """
    M, N = len(A), len(B)
    delta = N - M
    fp: dict[int, int] = {}
    routes: dict[int, _Route] = {}

    def snake(k: int) -> None:
        from_below = fp.get(k - 1, -1) + 1
        from_above = fp.get(k + 1, -1)
        if from_below > from_above:
            y, prev = from_below, routes.get(k - 1)
        else:
            y, prev = from_above, routes.get(k + 1)
        x = y - k
        x0, y0 = x, y
        while x < M and y < N and A[x] == B[y]:
            x += 1
            y += 1
        fp[k] = y
        routes[k] = _Route(x0, y0, x, y, prev)

    p = -1
    while fp.get(delta, -1) != N:
        p += 1
        for k in range(-p, delta):
            snake(k)
        for k in range(delta + p, delta, -1):
            snake(k)
        snake(delta)

    return routes[delta]


def wu(a: Sequence[Any], b: Sequence[Any]) -> list[IndexedRecord]:
    """
    Removed/Added/Common records from the O(NP) algorithm.

    Added records carry only `new_index`; the payload stays in `b`.
    The search always runs over the shorter sequence, so for
    len(a) > len(b) the roles of insertion and deletion are swapped
    back when the route is read out.  Each changed region is reported
    as its removals followed by its additions.
    """
    swapped = len(a) > len(b)
    A, B = (b, a) if swapped else (a, b)

    snakes: list[_Route] = []
    route = _onp_route(A, B)
    while route is not None:
        snakes.append(route)
        route = route.prev
    snakes.reverse()

    records: list[IndexedRecord] = []
    removals: list[IndexedRecord] = []
    additions: list[IndexedRecord] = []

    def step_a(x: int) -> None:
        # an A-only element: a removal normally, an addition when swapped
        if swapped:
            additions.append(Added(new_index=x))
        else:
            removals.append(Removed(old_index=x))

    def step_b(y: int) -> None:
        if swapped:
            removals.append(Removed(old_index=y))
        else:
            additions.append(Added(new_index=y))

    def flush() -> None:
        records.extend(removals)
        records.extend(additions)
        removals.clear()
        additions.clear()

    px = py = 0
    for snake in snakes:
        if snake.x0 == px + 1 and snake.y0 == py:
            step_a(px)
        elif snake.x0 == px and snake.y0 == py + 1:
            step_b(py)
        if snake.x1 > snake.x0:
            flush()
        for offset in range(snake.x1 - snake.x0):
            x, y = snake.x0 + offset, snake.y0 + offset
            old, new = (y, x) if swapped else (x, y)
            records.append(Common(old_index=old, new_index=new, data=a[old]))
        px, py = snake.x1, snake.y1
    flush()

    LOGGER.debug("O(NP) route: %d snakes, %d records", len(snakes), len(records))
    return records
