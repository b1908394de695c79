"""
insertion_sort.py — Insertion Sort
===================================
Shift-and-insert.  The key travels left one slot per "shift" step, so the
list holds exactly its original values at every yield (a cancelled run
never leaves a duplicated element behind).  A final "write" step marks
where the key settled.
"""

from typing import Generator, List

from algorithms.step import SortStep


PSEUDOCODE: List[str] = [
    "def InsertionSort(a):",                     # 0
    "    for i in 1 .. n-1:",                    # 1
    "        key ← a[i]; j ← i-1",               # 2
    "        while j ≥ 0 and a[j] > key:",       # 3
    "            a[j+1] ← a[j]; j ← j-1",        # 4
    "        a[j+1] ← key",                      # 5
]

SHIFT_DELAY_MS = 40
PLACE_DELAY_MS = 35


def insertion_sort(a: list) -> Generator[SortStep, None, None]:
    for i in range(1, len(a)):
        key = a[i]
        j = i - 1
        while j >= 0 and a[j] > key:
            observed = a[j]
            a[j + 1] = a[j]
            a[j] = key
            yield SortStep(
                kind="shift", indices=(j, j + 1), observed=observed,
                delay_ms=SHIFT_DELAY_MS, pseudocode_line=4,
                explanation=f"{observed} > key {key} — shift it right to slot {j + 1}.",
            )
            j -= 1
        yield SortStep(
            kind="write", indices=(j + 1,),
            delay_ms=PLACE_DELAY_MS, pseudocode_line=5,
            explanation=f"Key {key} settles at index {j + 1}.",
        )
