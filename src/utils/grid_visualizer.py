from typing import Dict, List, Tuple

from ..grid.adjacency import cell_key
from ..grid.models import Cell, Grid
from ..game.models import RenderState


# Marker pairs wrapped around a letter, most specific first
MARKERS: List[Tuple[str, str, str]] = [
    ("selected", "[", "]"),
    ("spangram", "*", "*"),
    ("found", "(", ")"),
    ("hinted", "?", "?"),
]


def format_cell(letter: str, flags: Tuple[str, ...]) -> str:
    """Wrap a letter in the marker of its most specific style."""
    for name, left, right in MARKERS:
        if name in flags:
            return f"{left}{letter}{right}"
    return f" {letter} "


def render_board(grid: Grid, render: RenderState) -> str:
    """Render the grid with selection, found, hinted and spangram markers."""
    styles: Dict[str, Tuple[str, ...]] = render.styles()

    lines = ["    " + "".join(f"{c:^3}" for c in range(grid.cols))]
    for row in range(grid.rows):
        cells = []
        for col in range(grid.cols):
            cell = Cell(row, col)
            cells.append(format_cell(grid.letter_at(cell), styles.get(cell_key(cell), ())))
        lines.append(f"{row:>2}  " + "".join(cells))

    return "\n".join(lines)


def render_legend() -> str:
    """One-line key for the markers."""
    return "[X] selected  *X* spangram  (X) found  ?X? hint"
