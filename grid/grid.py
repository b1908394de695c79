"""
grid.py — Grid Container & Obstacle Generator
==============================================
Single source of truth for the search board.  Algorithms, the renderer
and the session all talk to this object.

Responsibilities:
  1. Cell lookup by coordinate                (cell, in_bounds)
  2. Adjacency queries                        (neighbours – 4-connected)
  3. Obstacle editing & random generation     (toggle_obstacle, generate_obstacles)
  4. Reset helpers                            (wipe search state, keep walls)
  5. Copy & serialisation                     (copy for races, to_dict for the UI)

Design decisions:
  - Cells are stored row-major in a list of lists; a coordinate is a
    plain (row, col) tuple everywhere outside this module.
  - Start and goal are fixed at construction and can never become walls.
"""

import random
from typing import Iterator, List, Optional

from grid.cell import Cell, Coord


# neighbour examination order: down, up, right, left
DIRECTIONS = [(1, 0), (-1, 0), (0, 1), (0, -1)]


class Grid:
    """
    Attributes:
        rows, cols : Dimensions.
        start      : Start coordinate, default top-left.
        goal       : Goal coordinate, default bottom-right.
        cells      : rows x cols list of Cell.
    """

    def __init__(
        self,
        rows: int = 15,
        cols: int = 15,
        start: Optional[Coord] = None,
        goal: Optional[Coord] = None,
    ):
        if rows < 1 or cols < 1:
            raise ValueError(f"Grid must be at least 1x1, got {rows}x{cols}")
        self.rows: int   = rows
        self.cols: int   = cols
        self.start: Coord = start if start is not None else (0, 0)
        self.goal:  Coord = goal if goal is not None else (rows - 1, cols - 1)
        for name, pos in (("start", self.start), ("goal", self.goal)):
            if not self.in_bounds(pos):
                raise ValueError(f"{name} {pos} lies outside a {rows}x{cols} grid")
        self.cells: List[List[Cell]] = [
            [Cell(r, c) for c in range(cols)] for r in range(rows)
        ]

    # ==================================================================
    # LOOKUP
    # ==================================================================
    def in_bounds(self, pos: Coord) -> bool:
        r, c = pos
        return 0 <= r < self.rows and 0 <= c < self.cols

    def cell(self, pos: Coord) -> Cell:
        r, c = pos
        return self.cells[r][c]

    def __iter__(self) -> Iterator[Cell]:
        for row in self.cells:
            yield from row

    def is_endpoint(self, pos: Coord) -> bool:
        return pos == self.start or pos == self.goal

    # ==================================================================
    # ADJACENCY
    # ==================================================================
    def neighbours(self, pos: Coord) -> List[Cell]:
        """Orthogonal, in-bounds, non-obstacle neighbours of `pos`."""
        r, c = pos
        out = []
        for dr, dc in DIRECTIONS:
            nxt = (r + dr, c + dc)
            if self.in_bounds(nxt) and not self.cell(nxt).obstacle:
                out.append(self.cell(nxt))
        return out

    # ==================================================================
    # OBSTACLES
    # ==================================================================
    def toggle_obstacle(self, row: int, col: int) -> bool:
        """
        Flip the wall flag at (row, col).  Returns False (no-op) for
        out-of-range coordinates and for start / goal.
        """
        pos = (row, col)
        if not self.in_bounds(pos) or self.is_endpoint(pos):
            return False
        cell = self.cell(pos)
        cell.obstacle = not cell.obstacle
        return True

    def set_obstacle(self, row: int, col: int, obstacle: bool = True) -> bool:
        pos = (row, col)
        if not self.in_bounds(pos) or self.is_endpoint(pos):
            return False
        self.cell(pos).obstacle = obstacle
        return True

    def clear_obstacles(self) -> None:
        for cell in self:
            cell.obstacle = False
            cell.reset_search_state()

    def generate_obstacles(self, density: float = 0.28, seed: Optional[int] = None) -> None:
        """
        Random walls: each non-endpoint cell becomes a wall with
        probability `density`.  All search state is cleared as well.
        """
        if not 0.0 <= density <= 1.0:
            raise ValueError(f"Obstacle density must be within [0, 1], got {density}")
        rng = random.Random(seed)
        for cell in self:
            cell.reset_search_state()
            if self.is_endpoint(cell.coord):
                cell.obstacle = False
                continue
            cell.obstacle = rng.random() < density

    # ==================================================================
    # RESET
    # ==================================================================
    def reset_search_state(self) -> None:
        """Wipe visited / distance / predecessor on every cell, keep walls."""
        for cell in self:
            cell.reset_search_state()

    # ==================================================================
    # COPY & SERIALISATION
    # ==================================================================
    def copy(self) -> "Grid":
        """Independent grid with the same walls and clean search state."""
        g = Grid(self.rows, self.cols, start=self.start, goal=self.goal)
        for cell in self:
            g.cell(cell.coord).obstacle = cell.obstacle
        return g

    def obstacle_count(self) -> int:
        return sum(1 for cell in self if cell.obstacle)

    def to_dict(self) -> dict:
        return {
            "rows":  self.rows,
            "cols":  self.cols,
            "start": list(self.start),
            "goal":  list(self.goal),
            "cells": [[cell.to_dict() for cell in row] for row in self.cells],
        }

    @classmethod
    def from_rows(cls, rows: List[str]) -> "Grid":
        """
        Build a grid from text rows: '#' is a wall, anything else is open.
        Handy for tests and fixtures:

            Grid.from_rows([
                "..#",
                ".##",
                "...",
            ])
        """
        if not rows:
            raise ValueError("At least one row is required")
        g = cls(len(rows), len(rows[0]))
        for r, line in enumerate(rows):
            if len(line) != g.cols:
                raise ValueError(f"Row {r} has length {len(line)}, expected {g.cols}")
            for c, ch in enumerate(line):
                if ch == "#":
                    g.set_obstacle(r, c, True)
        return g

    def __repr__(self) -> str:
        return (
            f"Grid({self.rows}x{self.cols}, start={self.start}, goal={self.goal}, "
            f"obstacles={self.obstacle_count()})"
        )
