"""
selection_sort.py — Selection Sort
===================================
Repeated minimum extraction.  Yields a "compare" step for every scan
position and a "swap" step whenever the minimum has to move.
"""

from typing import Generator, List

from algorithms.step import SortStep


PSEUDOCODE: List[str] = [
    "def SelectionSort(a):",                     # 0
    "    for i in 0 .. n-1:",                    # 1
    "        min ← i",                           # 2
    "        for j in i+1 .. n-1:",              # 3
    "            if a[j] < a[min]: min ← j",     # 4
    "        if min ≠ i: swap(a[i], a[min])",    # 5
]

STEP_DELAY_MS = 45


def selection_sort(a: list) -> Generator[SortStep, None, None]:
    n = len(a)
    for i in range(n):
        smallest = i
        for j in range(i + 1, n):
            if a[j] < a[smallest]:
                smallest = j
            yield SortStep(
                kind="compare", indices=(smallest, j), observed=a[j],
                delay_ms=STEP_DELAY_MS, pseudocode_line=4,
                explanation=f"Scan a[{j}]={a[j]}; smallest so far is a[{smallest}]={a[smallest]}.",
            )
        if smallest != i:
            a[i], a[smallest] = a[smallest], a[i]
            yield SortStep(
                kind="swap", indices=(i, smallest),
                delay_ms=STEP_DELAY_MS, pseudocode_line=5,
                explanation=f"Move minimum {a[i]} into position {i}.",
            )
