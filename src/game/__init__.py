"""Game layer for Love Strands."""

from .models import (
    FeedbackCode,
    GameConfig,
    OracleConfig,
    FoundPath,
    GameState,
    Feedback,
    RenderState,
)
from .puzzle import Puzzle, load_puzzle
from .session import SelectionSession
from .oracle import WordOracle, WordListOracle, HttpWordOracle, LLMWordOracle, create_oracle
from .resolver import resolve_path, use_hint
from .controller import StrandsGame

__all__ = [
    "FeedbackCode",
    "GameConfig",
    "OracleConfig",
    "FoundPath",
    "GameState",
    "Feedback",
    "RenderState",
    "Puzzle",
    "load_puzzle",
    "SelectionSession",
    "WordOracle",
    "WordListOracle",
    "HttpWordOracle",
    "LLMWordOracle",
    "create_oracle",
    "resolve_path",
    "use_hint",
    "StrandsGame",
]
