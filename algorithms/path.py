from typing import List

from grid import Grid, Coord


def reconstruct_path(grid: Grid, start: Coord, goal: Coord) -> List[Coord]:
    """
    Walk predecessor coordinates from `goal` back to `start` and return
    the path in start → goal order, both ends included.

    Returns [] when the goal was never reached or the chain does not lead
    back to start (e.g. state left by another run).
    """
    if not grid.cell(goal).visited:
        return []

    path: List[Coord] = []
    cur = goal
    # a well-formed chain can never be longer than the grid
    limit = grid.rows * grid.cols
    while cur is not None and len(path) < limit:
        path.append(cur)
        if cur == start:
            break
        cur = grid.cell(cur).predecessor

    if not path or path[-1] != start:
        return []
    path.reverse()
    return path
