"""
Benchmark: the three seqpatch backends against each other and against
difflib.SequenceMatcher fed through the edit-script adapter.

The point is NOT "we're faster" — the point is:
    every backend yields a replayable change list, and fusion keeps
    those lists short whichever aligner produced the records.
"""

import sys
import os
import random
import time
from difflib import SequenceMatcher

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from seqpatch.core import Update, patch
from seqpatch.align import Left, Right, Both
from seqpatch.adapters import BACKENDS, diff_changes


# ═══════════════════════════════════════════════════════════════════
#  TEST DATA
# ═══════════════════════════════════════════════════════════════════

SCENARIOS = [
    (["one", "TWO", "three", "four"], ["zero", "one", "two", "four"]),
    ([1, 2, 3], [1, 2, 4]),
    ([], [2]),
    (["alpha", "bravo", "charlie", "delta"],
     ["pre-alpha", "alpha", "pre-bravo", "pre-charlie", "delta"]),
]


def _edited(rng, base, ratio):
    """Copy of `base` with roughly `ratio` of it substituted, inserted or deleted."""
    out = list(base)
    for _ in range(max(1, int(len(base) * ratio))):
        op = rng.choice(("sub", "ins", "del"))
        i = rng.randrange(len(out) + 1)
        if op == "ins" or not out:
            out.insert(i, rng.randint(0, 10_000))
        elif op == "del":
            del out[min(i, len(out) - 1)]
        else:
            out[min(i, len(out) - 1)] = rng.randint(0, 10_000)
    return out


def difflib_records(a, b):
    """Edit-script records from SequenceMatcher opcodes (elements must hash)."""
    records = []
    for tag, i1, i2, j1, j2 in SequenceMatcher(a=a, b=b, autojunk=False).get_opcodes():
        if tag == "equal":
            records.extend(Both(a[i], b[j]) for i, j in zip(range(i1, i2), range(j1, j2)))
            continue
        records.extend(Left(a[i]) for i in range(i1, i2))
        records.extend(Right(b[j]) for j in range(j1, j2))
    return records


def difflib_diff(a, b, fuse=True):
    return diff_changes(difflib_records(a, b), fuse=fuse)


ALL = dict(BACKENDS, difflib=difflib_diff)


# ═══════════════════════════════════════════════════════════════════
#  BENCHMARKS
# ═══════════════════════════════════════════════════════════════════

def benchmark_scenarios():
    print("=" * 70)
    print("  §1  CANONICAL CHANGE LISTS")
    print("=" * 70)
    print()

    for a, b in SCENARIOS:
        print(f"  {a!r} → {b!r}")
        for name, compute in ALL.items():
            changes = compute(a, b)
            mark = "✓" if patch(a, changes) == b else "✗"
            print(f"    {mark} {name:<8} {changes!r}")
        print()


def benchmark_scaling():
    print("=" * 70)
    print("  §2  SCALING (10% edited)")
    print("=" * 70)
    print()

    rng = random.Random(2024)
    print(f"  {'n':>6}  " + "  ".join(f"{name:>10}" for name in ALL))
    for n in (50, 200, 800):
        base = [rng.randint(0, 10_000) for _ in range(n)]
        target = _edited(rng, base, 0.1)
        cells = []
        for compute in ALL.values():
            t0 = time.perf_counter()
            changes = compute(base, target)
            dt = time.perf_counter() - t0
            ok = patch(base, changes) == target
            cells.append(f"{dt * 1000:>8.1f}ms" + ("" if ok else "!"))
        print(f"  {n:>6}  " + "  ".join(f"{c:>10}" for c in cells))
    print()


def benchmark_fusion():
    print("=" * 70)
    print("  §3  FUSION (changes emitted, 200 random pairs of 60 elements)")
    print("=" * 70)
    print()

    rng = random.Random(7)
    pairs = []
    for _ in range(200):
        base = [rng.randint(0, 50) for _ in range(60)]
        pairs.append((base, _edited(rng, base, rng.choice((0.05, 0.2, 0.5)))))

    for name, compute in ALL.items():
        raw = sum(len(compute(a, b, fuse=False)) for a, b in pairs)
        fused_lists = [compute(a, b) for a, b in pairs]
        fused = sum(len(c) for c in fused_lists)
        updates = sum(isinstance(c, Update) for lst in fused_lists for c in lst)
        saved = 100.0 * (raw - fused) / raw if raw else 0.0
        print(f"  {name:<8} raw={raw:>6}  fused={fused:>6}  "
              f"updates={updates:>5}  saved={saved:5.1f}%")
    print()


if __name__ == "__main__":
    benchmark_scenarios()
    benchmark_scaling()
    benchmark_fusion()
