"""
Selection session: the state machine behind one drag gesture.

States are `idle` and `selecting`. A pointer-down starts a selection, moves
extend it (or step back onto the previous cell), release finishes it and
a system cancel drops it. Only the pointer that started a selection can
drive it.
"""

import logging
from typing import List, Literal, Optional, Set, Union

from pydantic import BaseModel, Field, PrivateAttr

from ..grid.models import Cell
from ..grid.rules import can_extend


logger = logging.getLogger(__name__)

SessionState = Literal["idle", "selecting"]
PointerId = Union[int, str]


class SelectionSession(BaseModel):
    """
    Tracks the in-progress selection of a single pointer.

    Attributes:
        active: Whether a selection is in progress
        path: Cells selected so far
        pointer_id: Identity of the input stream that owns the selection
        allow_backtrack: Whether moving onto the second-to-last cell drops the last one
    """

    active: bool = False
    path: List[Cell] = Field(default_factory=list)
    pointer_id: Optional[PointerId] = None
    allow_backtrack: bool = True

    _visited: Set[Cell] = PrivateAttr(default_factory=set)

    @property
    def state(self) -> SessionState:
        return "selecting" if self.active else "idle"

    def owns(self, pointer_id: PointerId) -> bool:
        """Check if `pointer_id` drives the current selection."""
        return self.active and self.pointer_id == pointer_id

    def start(self, cell: Cell, pointer_id: PointerId = 0) -> bool:
        """
        Begin a selection at `cell`.

        Ignored while another pointer owns an active selection. The owning
        pointer pressing again restarts from `cell`.

        Returns:
            True if a selection was started
        """
        if self.active and self.pointer_id != pointer_id:
            logger.debug("Ignoring pointer %r: pointer %r owns the selection", pointer_id, self.pointer_id)
            return False

        self.active = True
        self.pointer_id = pointer_id
        self.path = [cell]
        self._visited = {cell}
        return True

    def extend(self, cell: Cell, pointer_id: PointerId = 0) -> bool:
        """
        Offer `cell` to the selection.

        The path steps back by one when `cell` is the second-to-last cell,
        grows when the extension is legal and is left alone otherwise.

        Returns:
            True if the path changed
        """
        if not self.owns(pointer_id):
            return False

        if self.path and cell == self.path[-1]:
            return False

        if self.allow_backtrack and len(self.path) >= 2 and cell == self.path[-2]:
            dropped = self.path.pop()
            self._visited.discard(dropped)
            return True

        if not can_extend(self.path, cell, self._visited):
            logger.debug("Rejected extension to %s from %s", tuple(cell), tuple(self.path[-1]))
            return False

        self.path.append(cell)
        self._visited.add(cell)
        return True

    def finish(self, pointer_id: PointerId = 0) -> Optional[List[Cell]]:
        """
        End the selection and hand back the finished path.

        Returns:
            A snapshot of the path, or None if `pointer_id` does not own a selection
        """
        if not self.owns(pointer_id):
            return None

        snapshot = list(self.path)
        self.reset()
        return snapshot

    def cancel(self, pointer_id: PointerId = 0) -> bool:
        """Drop the selection without resolving it."""
        if not self.owns(pointer_id):
            return False

        self.reset()
        return True

    def reset(self) -> None:
        """Return to idle with an empty path."""
        self.active = False
        self.path = []
        self.pointer_id = None
        self._visited = set()
