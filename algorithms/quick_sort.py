"""
quick_sort.py — Quick Sort
===========================
Lomuto partition with the last element as pivot.

Known properties (not bugs): not stable, and already-sorted or
all-equal input degrades to O(n²) comparisons.
"""

from typing import Generator, List

from algorithms.step import SortStep


PSEUDOCODE: List[str] = [
    "def QuickSort(a, lo, hi):",                 # 0
    "    if lo < hi:",                           # 1
    "        pivot ← a[hi]; i ← lo-1",           # 2
    "        for j in lo .. hi-1:",              # 3
    "            if a[j] < pivot:",              # 4
    "                i ← i+1; swap(a[i], a[j])", # 5
    "        swap(a[i+1], a[hi])",               # 6
    "        QuickSort(a, lo, i); QuickSort(a, i+2, hi)",  # 7
]

STEP_DELAY_MS = 40


def quick_sort(a: list) -> Generator[SortStep, None, None]:
    # explicit stack instead of recursion so large adversarial inputs
    # cannot hit the interpreter recursion limit
    pending = [(0, len(a) - 1)]
    while pending:
        lo, hi = pending.pop()
        if lo >= hi:
            continue
        p = yield from _partition(a, lo, hi)
        # right half pushed first so the left half is sorted first
        pending.append((p + 1, hi))
        pending.append((lo, p - 1))


def _partition(a: list, lo: int, hi: int) -> Generator[SortStep, None, int]:
    pivot = a[hi]
    i = lo - 1
    for j in range(lo, hi):
        observed = a[j]
        if a[j] < pivot:
            i += 1
            if i != j:
                a[i], a[j] = a[j], a[i]
                yield SortStep(
                    kind="swap", indices=(i, j), observed=observed,
                    delay_ms=STEP_DELAY_MS, pseudocode_line=5,
                    explanation=f"{observed} < pivot {pivot} — swap into the low side at {i}.",
                )
                continue
            explanation = f"{observed} < pivot {pivot} — already on the low side at {i}."
        else:
            explanation = f"{observed} ≥ pivot {pivot} — leave it on the high side."
        yield SortStep(
            kind="compare", indices=(j, hi), observed=observed,
            delay_ms=STEP_DELAY_MS, pseudocode_line=4, explanation=explanation,
        )

    p = i + 1
    if p == hi or a[p] == pivot:
        # an equal value or the pivot itself already fills the slot
        yield SortStep(
            kind="compare", indices=(p, hi), observed=pivot,
            delay_ms=STEP_DELAY_MS, pseudocode_line=6,
            explanation=f"Pivot {pivot} is already in its final place at {p}.",
        )
        return p
    a[p], a[hi] = a[hi], a[p]
    yield SortStep(
        kind="pivot", indices=(p, hi),
        delay_ms=STEP_DELAY_MS, pseudocode_line=6,
        explanation=f"Place pivot {pivot} at its final index {p}.",
    )
    return p
