"""
grid/
-----
Core data layer for the search visualizer.  Public API:

    from grid import Grid, Cell, Coord
"""

from grid.cell import Cell, Coord
from grid.grid import Grid

__all__ = [
    "Cell",
    "Coord",
    "Grid",
]
