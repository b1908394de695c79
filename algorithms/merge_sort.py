"""
merge_sort.py — Merge Sort
===========================
Top-down recursive split with a stable linear merge.

The merge is done in place: when the head of the right run wins, it is
rotated into position and the rest of the left run slides one slot to
the right.  Every yield therefore shows a permutation of the input,
which keeps partial (cancelled) snapshots consistent.

Stability: the left head wins ties (`<=`), so equal values keep their
original relative order.
"""

from typing import Generator, List

from algorithms.step import SortStep


PSEUDOCODE: List[str] = [
    "def MergeSort(a, lo, hi):",                        # 0
    "    if lo ≥ hi: return",                           # 1
    "    mid ← (lo + hi) // 2",                         # 2
    "    MergeSort(a, lo, mid); MergeSort(a, mid+1, hi)", # 3
    "    while left and right not empty:",              # 4
    "        if left[0] ≤ right[0]: take left",         # 5
    "        else: take right",                         # 6
    "    copy whatever remains",                        # 7
]

COMPARE_DELAY_MS = 30
DRAIN_DELAY_MS   = 25


def merge_sort(a: list) -> Generator[SortStep, None, None]:
    yield from _sort(a, 0, len(a) - 1)


def _sort(a: list, lo: int, hi: int) -> Generator[SortStep, None, None]:
    if lo >= hi:
        return
    mid = (lo + hi) // 2
    yield from _sort(a, lo, mid)
    yield from _sort(a, mid + 1, hi)
    yield from _merge(a, lo, mid, hi)


def _merge(a: list, lo: int, mid: int, hi: int) -> Generator[SortStep, None, None]:
    i, j = lo, mid + 1          # heads of the left and right runs; j == mid + 1 throughout
    while i <= mid and j <= hi:
        observed = a[i]
        if a[i] <= a[j]:
            i += 1
            yield SortStep(
                kind="compare", indices=(i - 1, j), observed=observed,
                delay_ms=COMPARE_DELAY_MS, pseudocode_line=5,
                explanation=f"Left head {observed} ≤ right head {a[j]} — keep it at {i - 1}.",
            )
        else:
            value = a[j]
            a[i + 1:j + 1] = a[i:j]
            a[i] = value
            i += 1
            mid += 1
            j += 1
            yield SortStep(
                kind="write", indices=(i - 1, j - 1), observed=observed,
                delay_ms=COMPARE_DELAY_MS, pseudocode_line=6,
                explanation=f"Right head {value} < left head {observed} — write it at {i - 1}.",
            )
    for k in range(i, hi + 1):
        yield SortStep(
            kind="write", indices=(k,),
            delay_ms=DRAIN_DELAY_MS, pseudocode_line=7,
            explanation=f"Remaining value {a[k]} stays at {k}.",
        )
