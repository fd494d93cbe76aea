"""
Word-path solver.

Finds a path of adjacent, unvisited cells spelling a target word using
depth-first backtracking. Start cells are tried in row-major order and
neighbors in the fixed order of `adjacency.DIRECTIONS`, so results are
reproducible for a given grid and word.
"""

from typing import Dict, Iterable, List, Optional, Set

from .models import Cell, Grid, Path
from .adjacency import neighbors


def solve(grid: Grid, word: str) -> Optional[Path]:
    """
    Find a path on the grid that spells `word`.

    Args:
        grid: The letter grid
        word: Target word (case-insensitive)

    Returns:
        The first complete path found, or None if the word cannot be traced
    """
    target = word.strip().upper()
    if not target:
        return None

    # Scoped to this call; marked on entry, unmarked on backtrack
    visited: Set[Cell] = set()
    path: List[Cell] = []

    def search(cell: Cell, index: int) -> bool:
        if grid.letter_at(cell) != target[index]:
            return False

        visited.add(cell)
        path.append(cell)

        if index == len(target) - 1:
            return True

        for nxt in neighbors(grid, cell):
            if nxt not in visited and search(nxt, index + 1):
                return True

        visited.discard(cell)
        path.pop()
        return False

    for start in grid.cells():
        if search(start, 0):
            return list(path)

    return None


def solve_all(grid: Grid, words: Iterable[str]) -> Dict[str, Optional[Path]]:
    """Solve several words on the same grid, keyed by upper-cased word."""
    solutions: Dict[str, Optional[Path]] = {}
    for word in words:
        key = word.strip().upper()
        if key not in solutions:
            solutions[key] = solve(grid, key)
    return solutions
