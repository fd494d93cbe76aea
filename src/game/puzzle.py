"""
Puzzle content: the letter grid, its theme entries and rule settings.

Puzzles are loaded from YAML. Theme entries without a precomputed solution
are traced by the solver when the puzzle is built; precomputed solutions are
checked to be legal paths that spell their word.
"""

import logging
from pathlib import Path as FilePath
from typing import Dict, List, Optional

import yaml
from pydantic import BaseModel, Field, PrivateAttr, model_validator

from ..grid.models import Grid, Path, ThemeEntry
from ..grid.rules import is_valid_path, spans_grid, word_from_path
from ..grid.solver import solve, solve_all
from .models import GameConfig, OracleConfig


logger = logging.getLogger(__name__)


class Puzzle(BaseModel):
    """
    A single puzzle.

    Attributes:
        theme: Theme title shown to the player
        grid: The letter grid
        theme_entries: Theme answers in hint order
        settings: Rule settings (minimum word length, hint cost, ...)
        oracle: Optional word-validity oracle configuration
    """

    theme: str = ""
    grid: Grid
    theme_entries: List[ThemeEntry] = Field(default_factory=list)
    settings: GameConfig = Field(default_factory=GameConfig)
    oracle: Optional[OracleConfig] = None

    _solution_cache: Dict[str, Optional[Path]] = PrivateAttr(default_factory=dict)

    @model_validator(mode="after")
    def _check_entries(self) -> "Puzzle":
        spangrams = [i for i, e in enumerate(self.theme_entries) if e.spangram]
        if len(spangrams) > 1:
            raise ValueError(f"At most one spangram allowed, got entries {spangrams}")

        # Traced paths go on copies; the caller's entries stay untouched.
        missing = {i for i, e in enumerate(self.theme_entries) if e.solution is None}
        traced = solve_all(self.grid, [self.theme_entries[i].word for i in missing])
        self.theme_entries = [
            entry.model_copy(update={"solution": traced[entry.word]})
            if i in missing else entry.model_copy()
            for i, entry in enumerate(self.theme_entries)
        ]

        for i, entry in enumerate(self.theme_entries):
            if i in missing:
                if entry.solution is None:
                    logger.error(
                        "Theme word '%s' (entry %d) cannot be traced in its grid; "
                        "it can be found by no path and never hinted",
                        entry.word, i,
                    )
                continue

            for cell in entry.solution:
                if not self.grid.contains(cell):
                    raise ValueError(f"Solution for '{entry.word}' leaves the grid at {tuple(cell)}")
            if not is_valid_path(entry.solution):
                raise ValueError(f"Solution for '{entry.word}' is not a legal path")
            spelled = word_from_path(self.grid, entry.solution)
            if spelled != entry.word:
                raise ValueError(f"Solution for '{entry.word}' spells '{spelled}'")

        for i in spangrams:
            entry = self.theme_entries[i]
            if entry.solution and not spans_grid(entry.solution, self.grid.rows, self.grid.cols):
                logger.warning("Spangram '%s' does not touch two opposite edges", entry.word)

        return self

    @property
    def spangram_index(self) -> Optional[int]:
        """Index of the designated spangram entry, if any."""
        for i, entry in enumerate(self.theme_entries):
            if entry.spangram:
                return i
        return None

    @property
    def total_entries(self) -> int:
        return len(self.theme_entries)

    def solution_for(self, index: int) -> Optional[Path]:
        """
        Solution path for a theme entry.

        Falls back to the solver (memoized per word) when the entry has none.
        """
        entry = self.theme_entries[index]
        if entry.solution is not None:
            return entry.solution

        if entry.word not in self._solution_cache:
            self._solution_cache[entry.word] = solve(self.grid, entry.word)
        return self._solution_cache[entry.word]


def load_puzzle(puzzle_path: str) -> Puzzle:
    """Load a puzzle from a YAML file."""
    path = FilePath(puzzle_path)

    if not path.exists():
        raise FileNotFoundError(f"Puzzle file not found: {puzzle_path}")

    with open(path) as f:
        data = yaml.safe_load(f)

    if not isinstance(data, dict):
        raise ValueError(f"Puzzle file {puzzle_path} must contain a mapping")

    # Accept grid rows directly under `grid`
    if isinstance(data.get("grid"), list):
        data["grid"] = {"letters": data["grid"]}

    return Puzzle(**data)
