"""SelectionCursor — highlighted index into the registry, with wrap-around."""

import logging
from typing import Optional

__all__ = ["SelectionCursor"]

logger = logging.getLogger(__name__)


class SelectionCursor:
    """
    Tracks which registry index is selected.

    ``selected`` is None when nothing is selected (an empty registry).
    Every navigation method takes the *current* registry length, so callers
    must pass a length read after their latest mutation.
    """

    def __init__(self, index: Optional[int] = 0) -> None:
        self.selected: Optional[int] = index

    def select(self, index: Optional[int]) -> None:
        self.selected = index

    def reset(self) -> None:
        """Select the first record."""
        self.selected = 0

    def advance(self, length: int) -> None:
        """Move down one row; wrap to the top from the last row."""
        if self.selected is None:
            return
        if length <= 0:
            self.selected = None
        elif self.selected >= length - 1:
            self.selected = 0
        else:
            self.selected += 1

    def retreat(self, length: int) -> None:
        """Move up one row; wrap to the bottom from the first row."""
        if self.selected is None:
            return
        if length <= 0:
            self.selected = None
        elif self.selected > 0:
            # stale index from a longer registry lands on the last row
            self.selected = min(self.selected - 1, length - 1)
        else:
            self.selected = length - 1

    def clamp_after_removal(self, removed_index: int, length_after: int) -> None:
        """Keep the cursor next to the row that was just deleted."""
        if length_after <= 0:
            self.selected = None
        elif removed_index > 0:
            self.selected = min(removed_index - 1, length_after - 1)
        else:
            self.selected = 0

    def clamp(self, length: int) -> None:
        """Pull an out-of-range index back inside ``[0, length)``."""
        if length <= 0:
            self.selected = None
        elif self.selected is None:
            self.selected = 0
        elif self.selected >= length:
            logger.debug("Cursor %d past registry end, clamping to %d", self.selected, length - 1)
            self.selected = length - 1

    def __repr__(self) -> str:
        return f"SelectionCursor(selected={self.selected})"
