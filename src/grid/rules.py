"""
Path rules for letter selection.

A path is an ordered list of distinct cells where each cell touches the
previous one (diagonals included). These helpers decide whether a path may
grow, read a word off a path and check whole paths loaded from content.
"""

from typing import Dict, List, Optional, Set, Tuple

from .models import Cell, Grid, Path
from .adjacency import is_adjacent, cell_key


def can_extend(path: Path, next_cell: Cell, visited: Optional[Set[Cell]] = None) -> bool:
    """
    Decide whether `next_cell` may be appended to `path`.

    Rules, in order:
    1. An empty path accepts any cell.
    2. A cell already on the path is rejected.
    3. The cell must be adjacent to the last cell of the path.

    Args:
        path: The current path
        next_cell: Candidate cell
        visited: Optional set of the cells in `path`, for callers that keep one

    Returns:
        True if the extension is legal
    """
    if not path:
        return True

    if visited is None:
        visited = set(path)
    if next_cell in visited:
        return False

    return is_adjacent(path[-1], next_cell)


def is_valid_path(path: Path) -> bool:
    """Check that a whole path has no repeats and every step is adjacent."""
    seen: Set[Cell] = set()
    for i, cell in enumerate(path):
        if cell in seen:
            return False
        if i > 0 and not is_adjacent(path[i - 1], cell):
            return False
        seen.add(cell)
    return True


def word_from_path(grid: Grid, path: Path) -> str:
    """Concatenate the grid letters along the path."""
    return "".join(grid.letter_at(cell) for cell in path)


def spans_grid(path: Path, rows: int, cols: int) -> bool:
    """Check if a path touches two opposite edges (left/right or top/bottom)."""
    if not path:
        return False

    path_rows = {cell.row for cell in path}
    path_cols = {cell.col for cell in path}

    top_bottom = 0 in path_rows and (rows - 1) in path_rows
    left_right = 0 in path_cols and (cols - 1) in path_cols
    return top_bottom or left_right


def trail_points(
    path: Path,
    centers: Dict[str, Tuple[float, float]],
) -> List[Tuple[float, float]]:
    """
    Map a path to polyline points using externally measured cell centers.

    Cells without a known center are skipped.
    """
    points = []
    for cell in path:
        center = centers.get(cell_key(cell))
        if center is not None:
            points.append(center)
    return points
