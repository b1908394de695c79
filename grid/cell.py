from typing import Optional, Tuple


Coord = Tuple[int, int]     # (row, col)

INF = float("inf")


# ---------------------------------------------------------------------------
# Cell
# ---------------------------------------------------------------------------
class Cell:
    """
    Immutable position, mutable obstacle flag and search state.

    Attributes:
        row, col    : Position in the grid.
        obstacle    : Boolean wall flag (survives search resets).
        visited     : Reached by the current search run (for BFS / DFS this
                      includes cells still waiting on the frontier).
        expanded    : Taken off the frontier and examined; what the maze
                      paints with the algorithm colour.
        distance    : Tentative hop count from start (inf = unbounded).
        predecessor : Coordinate of the cell we arrived from, or None.
                      A coordinate, never a Cell reference, so resetting or
                      replacing the grid cannot leave dangling links.
        on_path     : Set while the reconstructed path is animated.
    """

    __slots__ = ("row", "col", "obstacle", "visited", "expanded", "distance", "predecessor", "on_path")

    def __init__(self, row: int, col: int, obstacle: bool = False):
        self.row: int                        = row
        self.col: int                        = col
        self.obstacle: bool                  = obstacle
        self.visited: bool                   = False
        self.expanded: bool                  = False
        self.distance: float                 = INF
        self.predecessor: Optional[Coord]    = None
        self.on_path: bool                   = False

    @property
    def coord(self) -> Coord:
        return (self.row, self.col)

    def reset_search_state(self) -> None:
        """Wipe algorithm state, keep the obstacle flag."""
        self.visited     = False
        self.expanded    = False
        self.distance    = INF
        self.predecessor = None
        self.on_path     = False

    def to_dict(self) -> dict:
        return {
            "row":         self.row,
            "col":         self.col,
            "obstacle":    self.obstacle,
            "visited":     self.visited,
            "expanded":    self.expanded,
            "distance":    None if self.distance == INF else self.distance,
            "predecessor": list(self.predecessor) if self.predecessor else None,
            "on_path":     self.on_path,
        }

    def __repr__(self) -> str:
        flags = "#" if self.obstacle else ("v" if self.visited else ".")
        return f"Cell({self.row},{self.col},{flags})"
