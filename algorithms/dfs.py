"""
dfs.py — Depth-First Search
=============================
Generator-based DFS using an explicit stack (no Python recursion limit
issues).  Neighbours are marked visited when pushed, exactly like BFS,
so the only difference is the LIFO frontier.  DFS does NOT guarantee a
shortest path.
"""

from typing import Generator, List

from grid import Grid, Coord
from algorithms.step import SearchStep


PSEUDOCODE: List[str] = [
    "def DFS(grid, start, goal):",                 # 0
    "    stack ← [start]; visited ← {start}",      # 1
    "    while stack is not empty:",                # 2
    "        cell ← stack.pop()",                  # 3
    "        if cell == goal: return path",        # 4
    "        for n in open_neighbours(cell):",     # 5
    "            if n not visited:",               # 6
    "                visited.add(n); parent[n] ← cell; stack.push(n)",  # 7
    "    return NOT FOUND",                        # 8
]

STEP_DELAY_MS = 28


def dfs(grid: Grid, start: Coord, goal: Coord) -> Generator[SearchStep, None, None]:
    grid.reset_search_state()

    stack = [start]
    grid.cell(start).visited = True

    while stack:
        pos = stack.pop()
        grid.cell(pos).expanded = True

        if pos == goal:
            yield SearchStep(
                kind="found", cell=pos, frontier_size=len(stack), pseudocode_line=4,
                explanation=f"Goal {pos} popped — a path exists (not necessarily shortest).",
            )
            return

        added = 0
        for nbr in grid.neighbours(pos):
            if not nbr.visited:
                nbr.visited = True
                nbr.predecessor = pos
                stack.append(nbr.coord)
                added += 1

        yield SearchStep(
            kind="expand", cell=pos, frontier_size=len(stack),
            delay_ms=STEP_DELAY_MS, pseudocode_line=7,
            explanation=f"Expand {pos}: {added} neighbour(s) pushed; dive into the last one.",
        )

    yield SearchStep(
        kind="exhausted", pseudocode_line=8,
        explanation=f"Stack is empty. Goal {goal} is NOT reachable from {start}.",
    )
