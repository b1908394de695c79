"""
bfs.py — Breadth-First Search
==============================
Generator-based BFS over the grid.  Yields a SearchStep at every
frontier expansion:
  1. Dequeue a cell (FIFO)
  2. Goal?  →  terminal "found" step, frontier left as-is
  3. Mark every unvisited open neighbour visited, record its
     predecessor, enqueue it  →  "expand" step
  4. Queue empty  →  terminal "exhausted" step

Cells are marked visited when ENQUEUED, so each one is expanded once.
"""

from collections import deque
from typing import Generator, List

from grid import Grid, Coord
from algorithms.step import SearchStep


PSEUDOCODE: List[str] = [
    "def BFS(grid, start, goal):",                 # 0
    "    queue ← [start]; visited ← {start}",      # 1
    "    while queue is not empty:",                # 2
    "        cell ← queue.dequeue()",              # 3
    "        if cell == goal: return path",        # 4
    "        for n in open_neighbours(cell):",     # 5
    "            if n not visited:",               # 6
    "                visited.add(n); parent[n] ← cell; queue.enqueue(n)",  # 7
    "    return NOT FOUND",                        # 8
]

STEP_DELAY_MS = 28


def bfs(grid: Grid, start: Coord, goal: Coord) -> Generator[SearchStep, None, None]:
    grid.reset_search_state()

    queue = deque([start])
    grid.cell(start).visited = True

    while queue:
        pos = queue.popleft()
        grid.cell(pos).expanded = True

        if pos == goal:
            yield SearchStep(
                kind="found", cell=pos, frontier_size=len(queue), pseudocode_line=4,
                explanation=f"Goal {pos} dequeued — shortest path by hop count found.",
            )
            return

        added = 0
        for nbr in grid.neighbours(pos):
            if not nbr.visited:
                nbr.visited = True
                nbr.predecessor = pos
                queue.append(nbr.coord)
                added += 1

        yield SearchStep(
            kind="expand", cell=pos, frontier_size=len(queue),
            delay_ms=STEP_DELAY_MS, pseudocode_line=7,
            explanation=f"Expand {pos}: {added} new neighbour(s) enqueued.",
        )

    yield SearchStep(
        kind="exhausted", pseudocode_line=8,
        explanation=f"Queue is empty. Goal {goal} is NOT reachable from {start}.",
    )
