"""Data models for the letter grid."""

from typing import Iterator, List, NamedTuple, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, field_validator


class Cell(NamedTuple):
    """A grid coordinate. Equal to another cell iff row and col match."""
    row: int
    col: int


Path = List[Cell]


class Grid(BaseModel):
    """A fixed R x C matrix of single uppercase letters."""

    model_config = ConfigDict(frozen=True)

    letters: List[List[str]]

    @field_validator("letters", mode="before")
    @classmethod
    def _split_rows(cls, value: List[Union[str, List[str]]]) -> List[List[str]]:
        # Rows may be given as "ABCD" or ["A", "B", "C", "D"]
        return [list(row) for row in value]

    @field_validator("letters")
    @classmethod
    def _check_shape(cls, value: List[List[str]]) -> List[List[str]]:
        if not value or not value[0]:
            raise ValueError("Grid must have at least one row and one column")

        width = len(value[0])
        rows = []
        for r, row in enumerate(value):
            if len(row) != width:
                raise ValueError(f"Row {r} has {len(row)} letters, expected {width}")
            for c, letter in enumerate(row):
                if len(letter) != 1 or not letter.isalpha():
                    raise ValueError(f"Cell ({r}, {c}) must be a single letter, got '{letter}'")
            rows.append([letter.upper() for letter in row])
        return rows

    @classmethod
    def from_rows(cls, rows: List[Union[str, List[str]]]) -> "Grid":
        """Build a grid from a list of row strings or letter lists."""
        return cls(letters=rows)

    @property
    def rows(self) -> int:
        return len(self.letters)

    @property
    def cols(self) -> int:
        return len(self.letters[0])

    def contains(self, cell: Cell) -> bool:
        """Check if a cell lies inside the grid."""
        return 0 <= cell.row < self.rows and 0 <= cell.col < self.cols

    def letter_at(self, cell: Cell) -> str:
        """Letter at a cell. Raises IndexError for cells outside the grid."""
        if not self.contains(cell):
            raise IndexError(f"Cell {tuple(cell)} is outside the {self.rows}x{self.cols} grid")
        return self.letters[cell.row][cell.col]

    def cells(self) -> Iterator[Cell]:
        """All cells in row-major order."""
        for row in range(self.rows):
            for col in range(self.cols):
                yield Cell(row, col)

    def render(self) -> str:
        """Render the letters as one line per row."""
        return "\n".join(" ".join(row) for row in self.letters)


class ThemeEntry(BaseModel):
    """A theme answer and its canonical cell sequence."""
    word: str = Field(..., min_length=1)
    solution: Optional[List[Cell]] = None  # Filled by the solver at load time when absent
    spangram: bool = False

    @field_validator("word")
    @classmethod
    def _normalize_word(cls, value: str) -> str:
        value = value.strip().upper()
        if not value.isalpha():
            raise ValueError(f"Theme word '{value}' must contain only letters")
        return value


class ParseError(BaseModel):
    """A problem found while reading a typed path."""
    code: str
    message: str
    token: Optional[str] = None
