"""Adjacency predicates over grid cells (8 directions, diagonals included)."""

from typing import List

from .models import Cell, Grid


# Neighbor offsets in row-major order
DIRECTIONS = [
    (-1, -1), (-1, 0), (-1, 1),
    (0, -1),           (0, 1),
    (1, -1),  (1, 0),  (1, 1),
]


def same_cell(a: Cell, b: Cell) -> bool:
    """Structural equality of two cells."""
    return a.row == b.row and a.col == b.col


def is_adjacent(a: Cell, b: Cell) -> bool:
    """
    True iff the cells differ and sit at Chebyshev distance 1.

    Pure arithmetic, so cells outside any grid compare without error.
    """
    if same_cell(a, b):
        return False
    return max(abs(a.row - b.row), abs(a.col - b.col)) <= 1


def neighbors(grid: Grid, cell: Cell) -> List[Cell]:
    """In-bounds neighbors of a cell, in row-major order."""
    result = []
    for dr, dc in DIRECTIONS:
        candidate = Cell(cell.row + dr, cell.col + dc)
        if grid.contains(candidate):
            result.append(candidate)
    return result


def cell_key(cell: Cell) -> str:
    """Stable string key for a cell, e.g. '3-1'."""
    return f"{cell.row}-{cell.col}"
