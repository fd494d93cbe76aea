"""Typed path parsing utilities."""

import re
from typing import List, Tuple

from .models import Cell, Grid, ParseError


def extract_path_content(text: str) -> str:
    """Extract content from between <path> and </path> tags."""
    match = re.search(r'<path>(.*?)</path>', text, re.DOTALL)
    if match:
        return match.group(1).strip()
    return text.strip()


def parse_path(text: str, grid: Grid) -> Tuple[List[Cell], List[ParseError]]:
    """
    Parse a typed path such as "0,0 1,0 2,1" into cells.

    Cells are separated by whitespace or ';', each written as ROW,COL.
    Returns a tuple of (cells, errors).
    """
    text = extract_path_content(text)
    tokens = [t for t in re.split(r'[\s;]+', text) if t]

    errors: List[ParseError] = []
    cells: List[Cell] = []

    if not tokens:
        errors.append(ParseError(
            code="EMPTY_PATH",
            message="Path is empty"
        ))
        return cells, errors

    for token in tokens:
        match = re.match(r'^\(?(\d+),(\d+)\)?$', token)
        if not match:
            errors.append(ParseError(
                code="INVALID_CELL",
                message=f"Invalid cell format: '{token}' (expected ROW,COL)",
                token=token
            ))
            continue

        cell = Cell(int(match.group(1)), int(match.group(2)))
        if not grid.contains(cell):
            errors.append(ParseError(
                code="CELL_OUT_OF_BOUNDS",
                message=f"Cell {token} is outside the {grid.rows}x{grid.cols} grid",
                token=token
            ))
            continue

        cells.append(cell)

    return cells, errors
