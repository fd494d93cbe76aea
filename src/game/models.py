"""
Pydantic models for the game layer.

This module contains the data models (configuration, game state, feedback and
the render feed) used throughout the game layer. The logic classes
(SelectionSession, StrandsGame, the oracles) remain in their respective files.
"""

from typing import Dict, List, Literal, Optional, Set, Tuple
from pydantic import BaseModel, ConfigDict, Field

from ..grid.models import Cell


# Type aliases
OracleKind = Literal["wordlist", "http", "llm"]
FeedbackCode = Literal[
    # Resolution outcomes
    "WORD_TOO_SHORT",
    "THEME_WORD_FOUND",
    "SPANGRAM_FOUND",
    "WORD_ALREADY_FOUND",
    "WORD_ACCEPTED",
    "WORD_NOT_RECOGNIZED",
    # Hint outcomes
    "HINT_REVEALED",
    "INSUFFICIENT_POINTS",
    "HINT_ALREADY_ACTIVE",
    "NO_HINT_AVAILABLE",
    "NO_SOLUTION_FOR_HINT",
]

SUCCESS_CODES = {"THEME_WORD_FOUND", "SPANGRAM_FOUND", "WORD_ACCEPTED", "HINT_REVEALED"}


class GameConfig(BaseModel):
    """Per-puzzle rule settings."""
    min_word_length: int = Field(default=3, ge=1)
    hint_cost: int = Field(default=3, ge=0)
    points_per_word: int = Field(default=1, ge=0)
    allow_backtrack: bool = True  # Moving back onto the previous cell drops the last cell


class OracleConfig(BaseModel):
    """Configuration for the word-validity oracle."""
    model_config = ConfigDict(extra='allow')

    kind: OracleKind = "wordlist"
    # wordlist
    path: Optional[str] = None
    words: List[str] = Field(default_factory=list)
    # http
    url: Optional[str] = None
    # http and llm; unset keeps each oracle's own default
    timeout: Optional[float] = None
    # llm
    model: Optional[str] = None
    temperature: float = 0.0
    max_tokens: Optional[int] = None
    # Additional kwargs are allowed and passed to LiteLLM


class FoundPath(BaseModel):
    """A discovered word and the cells it was traced through."""
    word: str
    path: List[Cell]
    entry_index: Optional[int] = None  # Set for theme words


class GameState(BaseModel):
    """Progress of one puzzle: found words, points and the active hint."""
    found_entry_indexes: Set[int] = Field(default_factory=set)
    found_words: Set[str] = Field(default_factory=set)
    points: int = 0
    hinted_entry_index: Optional[int] = None
    found_paths: List[FoundPath] = Field(default_factory=list)


class Feedback(BaseModel):
    """Outcome of resolving a path or requesting a hint."""
    code: FeedbackCode
    message: str
    word: Optional[str] = None
    entry_index: Optional[int] = None

    @property
    def ok(self) -> bool:
        return self.code in SUCCESS_CODES


class RenderState(BaseModel):
    """Everything a renderer needs to style the board for one frame."""
    selected_keys: Set[str] = Field(default_factory=set)
    found_keys: Set[str] = Field(default_factory=set)
    hinted_keys: Set[str] = Field(default_factory=set)
    spangram_keys: Set[str] = Field(default_factory=set)
    active_path: List[Cell] = Field(default_factory=list)
    found_paths: List[List[Cell]] = Field(default_factory=list)
    selected_word: str = ""

    def styles(self) -> Dict[str, Tuple[str, ...]]:
        """Style flags per cell key, e.g. {'0-1': ('found', 'spangram')}."""
        flags: Dict[str, List[str]] = {}
        for name, keys in (
            ("selected", self.selected_keys),
            ("found", self.found_keys),
            ("hinted", self.hinted_keys),
            ("spangram", self.spangram_keys),
        ):
            for key in keys:
                flags.setdefault(key, []).append(name)
        return {key: tuple(names) for key, names in flags.items()}
