"""
Top-level game controller.

Owns the one SelectionSession and the one GameState of a puzzle, routes
pointer events into the session and resolves finished selections.
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from ..grid.adjacency import cell_key
from ..grid.models import Cell
from ..grid.rules import word_from_path
from .models import Feedback, GameState, RenderState
from .oracle import WordOracle, create_oracle
from .puzzle import Puzzle, load_puzzle
from .resolver import resolve_path, use_hint
from .session import PointerId, SelectionSession


logger = logging.getLogger(__name__)


class StrandsGame(BaseModel):
    """
    Plays one puzzle.

    Attributes:
        puzzle: The puzzle content and settings
        oracle: Judge for non-theme words
        state: Found words, points and the active hint
        session: The in-progress drag selection
        history: Every feedback produced, oldest first
        on_feedback: Optional callback called with each feedback
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    puzzle: Puzzle
    oracle: WordOracle
    state: GameState = Field(default_factory=GameState)
    session: SelectionSession = Field(default_factory=SelectionSession)
    history: List[Feedback] = Field(default_factory=list)
    on_feedback: Optional[Callable[[Feedback], None]] = None

    def model_post_init(self, __context) -> None:
        """Apply the puzzle's backtrack setting to the session."""
        self.session.allow_backtrack = self.puzzle.settings.allow_backtrack

    @classmethod
    def create(
        cls,
        puzzle: Puzzle,
        oracle: Optional[WordOracle] = None,
        **kwargs: Any
    ) -> "StrandsGame":
        """
        Factory method to create a game for a puzzle.

        Args:
            puzzle: The puzzle to play
            oracle: Word oracle; built from the puzzle's oracle config when omitted
            **kwargs: Extra fields (e.g. on_feedback)

        Returns:
            A new StrandsGame in its initial state
        """
        if oracle is None:
            oracle = create_oracle(puzzle.oracle, min_length=puzzle.settings.min_word_length)
        return cls(puzzle=puzzle, oracle=oracle, **kwargs)

    @classmethod
    def from_file(cls, puzzle_path: str, oracle: Optional[WordOracle] = None) -> "StrandsGame":
        """Load a puzzle from YAML and create a game for it."""
        return cls.create(load_puzzle(puzzle_path), oracle=oracle)

    # ------------------------------------------------------------------
    # Pointer events
    # ------------------------------------------------------------------

    def _to_cell(self, cell: Tuple[int, int]) -> Optional[Cell]:
        cell = Cell(*cell)
        if not self.puzzle.grid.contains(cell):
            return None
        return cell

    def pointer_down(self, cell: Tuple[int, int], pointer_id: PointerId = 0) -> bool:
        """Start a selection at a grid cell."""
        target = self._to_cell(cell)
        if target is None:
            return False
        return self.session.start(target, pointer_id)

    def pointer_move(self, cell: Tuple[int, int], pointer_id: PointerId = 0) -> bool:
        """Offer the cell under a moving pointer to the selection."""
        target = self._to_cell(cell)
        if target is None:
            return False
        return self.session.extend(target, pointer_id)

    def pointer_up(self, pointer_id: PointerId = 0) -> Optional[Feedback]:
        """
        Finish the selection and resolve it.

        The session is back to idle before the oracle is consulted; the
        resolution only touches the game state.

        Returns:
            Feedback for the finished path, or None if there was nothing to resolve
        """
        path = self.session.finish(pointer_id)
        if not path:
            return None
        return self.resolve(path)

    def pointer_leave(self, pointer_id: PointerId = 0) -> Optional[Feedback]:
        """Leaving the board finishes the selection like a release."""
        return self.pointer_up(pointer_id)

    def pointer_cancel(self, pointer_id: PointerId = 0) -> bool:
        """Drop the selection without resolving it."""
        return self.session.cancel(pointer_id)

    # ------------------------------------------------------------------
    # Game actions
    # ------------------------------------------------------------------

    def resolve(self, path: List[Cell]) -> Feedback:
        """Resolve a finished path and record the outcome."""
        feedback = resolve_path(self.puzzle, self.state, path, self.oracle)
        self._record(feedback)
        return feedback

    def use_hint(self) -> Feedback:
        """Spend points on a hint and record the outcome."""
        feedback = use_hint(self.puzzle, self.state)
        self._record(feedback)
        return feedback

    def _record(self, feedback: Feedback) -> None:
        logger.info("%s: %s", feedback.code, feedback.message)
        self.history.append(feedback)
        if self.on_feedback:
            self.on_feedback(feedback)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def found_count(self) -> int:
        return len(self.state.found_entry_indexes)

    @property
    def is_complete(self) -> bool:
        """Whether every theme entry has been found."""
        return self.found_count == self.puzzle.total_entries

    @property
    def can_use_hint(self) -> bool:
        """Whether a hint request would currently be granted."""
        hinted = self.state.hinted_entry_index
        if hinted is not None and hinted not in self.state.found_entry_indexes:
            return False
        return self.state.points >= self.puzzle.settings.hint_cost

    @property
    def selected_word(self) -> str:
        """Letters of the in-progress selection."""
        return word_from_path(self.puzzle.grid, self.session.path)

    def progress(self) -> str:
        """Progress line, e.g. '2 of 6 theme words found.'"""
        return f"{self.found_count} of {self.puzzle.total_entries} theme words found."

    def render_state(self) -> RenderState:
        """Build the render feed for the current frame."""
        found_keys = set()
        spangram_keys = set()
        spangram_index = self.puzzle.spangram_index
        for item in self.state.found_paths:
            keys = {cell_key(cell) for cell in item.path}
            found_keys |= keys
            if item.entry_index is not None and item.entry_index == spangram_index:
                spangram_keys |= keys

        hinted_keys = set()
        hinted = self.state.hinted_entry_index
        if hinted is not None and hinted not in self.state.found_entry_indexes:
            solution = self.puzzle.solution_for(hinted)
            if solution:
                hinted_keys = {cell_key(cell) for cell in solution}

        return RenderState(
            selected_keys={cell_key(cell) for cell in self.session.path},
            found_keys=found_keys,
            hinted_keys=hinted_keys,
            spangram_keys=spangram_keys,
            active_path=list(self.session.path),
            found_paths=[list(item.path) for item in self.state.found_paths],
            selected_word=self.selected_word,
        )

    def get_state(self) -> Dict:
        """
        Get the current game state as a dictionary.

        Useful for logging and display.
        """
        return {
            "theme": self.puzzle.theme,
            "points": self.state.points,
            "found_words": sorted(self.state.found_words),
            "found_entries": sorted(self.state.found_entry_indexes),
            "total_entries": self.puzzle.total_entries,
            "hinted_entry_index": self.state.hinted_entry_index,
            "can_use_hint": self.can_use_hint,
            "is_complete": self.is_complete,
            "selecting": self.session.active,
        }
