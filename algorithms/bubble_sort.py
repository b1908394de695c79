"""
bubble_sort.py — Bubble Sort
=============================
Generator-based bubble sort.  Yields one SortStep per adjacent-pair
comparison, after the (optional) swap has been applied.

Equal neighbours are never swapped.
"""

from typing import Generator, List

from algorithms.step import SortStep


PSEUDOCODE: List[str] = [
    "def BubbleSort(a):",                        # 0
    "    for i in 0 .. n-1:",                    # 1
    "        for j in 0 .. n-2-i:",              # 2
    "            if a[j] > a[j+1]:",             # 3
    "                swap(a[j], a[j+1])",        # 4
]

STEP_DELAY_MS = 60


def bubble_sort(a: list) -> Generator[SortStep, None, None]:
    """Sort `a` in place, yielding after every comparison."""
    n = len(a)
    for i in range(n):
        for j in range(n - 1 - i):
            observed = a[j]
            if a[j] > a[j + 1]:
                a[j], a[j + 1] = a[j + 1], a[j]
                yield SortStep(
                    kind="swap", indices=(j, j + 1), observed=observed,
                    delay_ms=STEP_DELAY_MS, pseudocode_line=4,
                    explanation=f"a[{j}]={observed} > a[{j+1}] — swap them.",
                )
            else:
                yield SortStep(
                    kind="compare", indices=(j, j + 1), observed=observed,
                    delay_ms=STEP_DELAY_MS, pseudocode_line=3,
                    explanation=f"a[{j}]={observed} ≤ a[{j+1}]={a[j + 1]} — already in order.",
                )
