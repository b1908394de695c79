"""
dijkstra.py — Dijkstra's Shortest-Path Algorithm (uniform cost)
================================================================
Generator-based Dijkstra using a min-heap (heapq).  Every move costs 1,
so on this grid it finds the same hop count as BFS, but it reaches it by
relaxation instead of layering.

Frontier entries are (distance, insertion order, coord).  A cell can be
pushed more than once when a shorter route to it is found; the "already
visited when popped → skip" check discards the stale copies and is what
keeps each cell from being expanded twice.
"""

import heapq
import itertools
from typing import Generator, List

from grid import Grid, Coord
from algorithms.step import SearchStep


PSEUDOCODE: List[str] = [
    "def Dijkstra(grid, start, goal):",            # 0
    "    dist ← {c: ∞}; dist[start] ← 0",          # 1
    "    pq ← [(0, start)]",                       # 2
    "    while pq is not empty:",                   # 3
    "        (d, cell) ← pq.pop_min()",            # 4
    "        if cell visited: continue",           # 5
    "        visited.add(cell)",                   # 6
    "        if cell == goal: return path",        # 7
    "        for n in open_neighbours(cell):",     # 8
    "            if dist[cell] + 1 < dist[n]:",    # 9
    "                dist[n] ← dist[cell] + 1; parent[n] ← cell; pq.push(n)",  # 10
    "    return NOT FOUND",                        # 11
]

STEP_DELAY_MS = 24
EDGE_WEIGHT   = 1


def dijkstra(grid: Grid, start: Coord, goal: Coord) -> Generator[SearchStep, None, None]:
    grid.reset_search_state()

    order = itertools.count()
    grid.cell(start).distance = 0
    pq = [(0, next(order), start)]

    while pq:
        _, _, pos = heapq.heappop(pq)
        cell = grid.cell(pos)

        # stale duplicate
        if cell.visited:
            continue
        cell.visited = True
        cell.expanded = True

        if pos == goal:
            yield SearchStep(
                kind="found", cell=pos, frontier_size=len(pq), pseudocode_line=7,
                explanation=f"Goal {pos} popped with distance {cell.distance}.",
            )
            return

        relaxed = 0
        for nbr in grid.neighbours(pos):
            alt = cell.distance + EDGE_WEIGHT
            if alt < nbr.distance:
                nbr.distance = alt
                nbr.predecessor = pos
                heapq.heappush(pq, (alt, next(order), nbr.coord))
                relaxed += 1

        yield SearchStep(
            kind="expand", cell=pos, frontier_size=len(pq),
            delay_ms=STEP_DELAY_MS, pseudocode_line=10,
            explanation=f"Expand {pos} (dist={cell.distance}): relaxed {relaxed} neighbour(s).",
        )

    yield SearchStep(
        kind="exhausted", pseudocode_line=11,
        explanation=f"Priority queue empty. Goal {goal} is not reachable.",
    )
