"""
Resolution of finished selections and the hint mechanic.

Both operate on an explicit GameState that the caller owns. Exactly one
Feedback comes back per call; nothing here raises for gameplay outcomes.
"""

import logging
from typing import List, Optional

from ..grid.models import Cell
from ..grid.rules import word_from_path
from .models import Feedback, FoundPath, GameState
from .oracle import WordOracle
from .puzzle import Puzzle


logger = logging.getLogger(__name__)


def match_theme_entry(puzzle: Puzzle, state: GameState, path: List[Cell]) -> Optional[int]:
    """
    Find the unfound theme entry whose solution is exactly `path`.

    Element-wise comparison: same cells, same order, same length.
    """
    for i, entry in enumerate(puzzle.theme_entries):
        if i in state.found_entry_indexes or entry.solution is None:
            continue
        if len(entry.solution) == len(path) and all(a == b for a, b in zip(entry.solution, path)):
            return i
    return None


def check_word(oracle: WordOracle, word: str) -> bool:
    """Ask the oracle, treating any error as 'not a word'."""
    try:
        return bool(oracle.check(word))
    except Exception as e:
        logger.warning("Word oracle raised for '%s': %s", word, e)
        return False


def resolve_path(
    puzzle: Puzzle,
    state: GameState,
    path: List[Cell],
    oracle: WordOracle,
) -> Feedback:
    """
    Resolve a finished path against the theme answers and the word oracle.

    Outcomes, checked in order:
    1. WORD_TOO_SHORT - fewer cells than the minimum word length
    2. THEME_WORD_FOUND / SPANGRAM_FOUND - exact match with an unfound theme solution
    3. WORD_ALREADY_FOUND - the word was already found
    4. WORD_ACCEPTED / WORD_NOT_RECOGNIZED - the oracle's verdict

    Args:
        puzzle: The puzzle being played
        state: Game state, updated in place
        path: The finished path
        oracle: Word-validity oracle for non-theme words

    Returns:
        Feedback describing the single outcome
    """
    settings = puzzle.settings

    if len(path) < settings.min_word_length:
        return Feedback(
            code="WORD_TOO_SHORT",
            message=f"Words must be at least {settings.min_word_length} letters long.",
            word=word_from_path(puzzle.grid, path) or None,
        )

    word = word_from_path(puzzle.grid, path)

    index = match_theme_entry(puzzle, state, path)
    if index is not None:
        state.found_entry_indexes.add(index)
        state.found_words.add(word)
        state.found_paths.append(FoundPath(word=word, path=list(path), entry_index=index))
        if state.hinted_entry_index == index:
            state.hinted_entry_index = None

        if index == puzzle.spangram_index:
            logger.debug("Spangram '%s' found", word)
            return Feedback(code="SPANGRAM_FOUND", message=f"SPANGRAM! {word}", word=word, entry_index=index)

        logger.debug("Theme word '%s' found", word)
        return Feedback(code="THEME_WORD_FOUND", message=f"Theme word: {word}", word=word, entry_index=index)

    if word in state.found_words:
        return Feedback(code="WORD_ALREADY_FOUND", message=f"'{word}' was already found.", word=word)

    if check_word(oracle, word):
        state.points += settings.points_per_word
        state.found_words.add(word)
        state.found_paths.append(FoundPath(word=word, path=list(path)))
        logger.debug("Accepted '%s', points now %d", word, state.points)
        return Feedback(code="WORD_ACCEPTED", message=f"'{word}' is a word!", word=word)

    return Feedback(code="WORD_NOT_RECOGNIZED", message="That word is not valid.", word=word)


def use_hint(puzzle: Puzzle, state: GameState) -> Feedback:
    """
    Spend points to reveal the first unfound theme entry's path.

    Refuses without changing state when points are short, a hint is still
    showing, or nothing is left to reveal.
    """
    cost = puzzle.settings.hint_cost

    if state.points < cost:
        return Feedback(
            code="INSUFFICIENT_POINTS",
            message=f"A hint costs {cost} points; you have {state.points}.",
        )

    hinted = state.hinted_entry_index
    if hinted is not None and hinted not in state.found_entry_indexes:
        return Feedback(
            code="HINT_ALREADY_ACTIVE",
            message="Find the hinted word first.",
            entry_index=hinted,
        )

    unfound = [i for i in range(puzzle.total_entries) if i not in state.found_entry_indexes]
    if not unfound:
        return Feedback(code="NO_HINT_AVAILABLE", message="Every theme word has been found.")

    for i in unfound:
        if puzzle.solution_for(i) is not None:
            state.hinted_entry_index = i
            state.points -= cost
            return Feedback(
                code="HINT_REVEALED",
                message="Hint revealed.",
                entry_index=i,
            )

        logger.error(
            "No path for theme word '%s' (entry %d); puzzle content is broken",
            puzzle.theme_entries[i].word, i,
        )

    return Feedback(
        code="NO_SOLUTION_FOR_HINT",
        message="No hint can be shown for the remaining words.",
    )
