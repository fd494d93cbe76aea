"""Grid engine: adjacency, path rules and the word-path solver."""

from .models import Cell, Path, Grid, ThemeEntry, ParseError
from .adjacency import DIRECTIONS, same_cell, is_adjacent, neighbors, cell_key
from .rules import can_extend, is_valid_path, word_from_path, spans_grid, trail_points
from .solver import solve, solve_all
from .parsing import parse_path, extract_path_content

__all__ = [
    # Models
    "Cell",
    "Path",
    "Grid",
    "ThemeEntry",
    "ParseError",
    # Adjacency
    "DIRECTIONS",
    "same_cell",
    "is_adjacent",
    "neighbors",
    "cell_key",
    # Path rules
    "can_extend",
    "is_valid_path",
    "word_from_path",
    "spans_grid",
    "trail_points",
    # Solver
    "solve",
    "solve_all",
    # Parsing
    "parse_path",
    "extract_path_content",
]
