"""
heap_sort.py — Heap Sort
=========================
Build a max-heap bottom-up, then repeatedly swap the root to the end of
the shrinking heap and sift the new root down.
"""

from typing import Generator, List

from algorithms.step import SortStep


PSEUDOCODE: List[str] = [
    "def HeapSort(a):",                                  # 0
    "    for i in n/2-1 .. 0: siftDown(a, n, i)",        # 1
    "    for end in n-1 .. 1:",                          # 2
    "        swap(a[0], a[end])",                        # 3
    "        siftDown(a, end, 0)",                       # 4
    "def siftDown(a, size, i):",                         # 5
    "    largest ← max(i, 2i+1, 2i+2) by value",         # 6
    "    if largest ≠ i: swap; siftDown(a, size, largest)",  # 7
]

EXTRACT_DELAY_MS = 40
SIFT_DELAY_MS    = 35


def heap_sort(a: list) -> Generator[SortStep, None, None]:
    n = len(a)
    for i in range(n // 2 - 1, -1, -1):
        yield from _sift_down(a, n, i)
    for end in range(n - 1, 0, -1):
        a[0], a[end] = a[end], a[0]
        yield SortStep(
            kind="swap", indices=(0, end),
            delay_ms=EXTRACT_DELAY_MS, pseudocode_line=3,
            explanation=f"Move max {a[end]} to its final index {end}.",
        )
        yield from _sift_down(a, end, 0)


def _sift_down(a: list, size: int, i: int) -> Generator[SortStep, None, None]:
    while True:
        largest = i
        left, right = 2 * i + 1, 2 * i + 2
        if left < size and a[left] > a[largest]:
            largest = left
        if right < size and a[right] > a[largest]:
            largest = right
        if largest == i:
            if left < size:
                yield SortStep(
                    kind="compare", indices=(i, left), observed=a[i],
                    delay_ms=SIFT_DELAY_MS, pseudocode_line=6,
                    explanation=f"Parent {a[i]} at {i} is no smaller than its children.",
                )
            return
        observed = a[largest]
        a[i], a[largest] = a[largest], a[i]
        yield SortStep(
            kind="swap", indices=(i, largest), observed=observed,
            delay_ms=SIFT_DELAY_MS, pseudocode_line=7,
            explanation=f"Child {observed} beats parent at {i} — sift down.",
        )
        i = largest
