"""
Cell module for the Minesweeper engine.

Represents individual grid positions with their state
(hidden/opened/flagged) and content (bomb/neighbor count).
"""
from enum import Enum, auto
from dataclasses import dataclass


# ============================================================================
# Constants
# ============================================================================

class CellState(Enum):
    """Possible visual states of a cell."""

    HIDDEN = auto()
    OPENED = auto()
    FLAGGED = auto()


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass
class Cell:
    """
    A single position on the Minesweeper grid.

    Opened and flagged are both values of ``state``, so a cell can never
    be opened and flagged at the same time.

    Attributes:
        row: Row index on the board.
        column: Column index on the board.
        has_bomb: Whether this cell holds a bomb.
        bombs_near: Count of bombs in the up to 8 neighboring cells.
        state: Current visual state (hidden, opened, or flagged).
    """

    row: int
    column: int
    has_bomb: bool = False
    bombs_near: int = 0
    state: CellState = CellState.HIDDEN

    def open(self) -> bool:
        """
        Open this cell.

        Returns:
            True if the cell was opened, False if already opened or flagged.
        """
        if self.state != CellState.HIDDEN:
            return False
        self.state = CellState.OPENED
        return True

    def toggle_flag(self) -> bool:
        """
        Toggle flag on this cell.

        Returns:
            True if flag was toggled, False if cell is opened.
        """
        if self.state == CellState.OPENED:
            return False
        if self.state == CellState.HIDDEN:
            self.state = CellState.FLAGGED
        else:
            self.state = CellState.HIDDEN
        return True

    @property
    def position(self) -> tuple:
        """(row, column) of this cell."""
        return self.row, self.column

    @property
    def is_hidden(self) -> bool:
        """Check if cell is hidden."""
        return self.state == CellState.HIDDEN

    @property
    def is_opened(self) -> bool:
        """Check if cell is opened."""
        return self.state == CellState.OPENED

    @property
    def is_flagged(self) -> bool:
        """Check if cell is flagged."""
        return self.state == CellState.FLAGGED

    def to_observation(self) -> int:
        """
        Convert cell to an observation value.

        Returns:
            -1: Hidden cell
            -2: Flagged cell
            0-8: Opened cell with neighbor bomb count
            9: Opened bomb (lost game)
        """
        if self.state == CellState.HIDDEN:
            return -1
        if self.state == CellState.FLAGGED:
            return -2
        if self.has_bomb:
            return 9
        return self.bombs_near

    def to_char(self) -> str:
        """Debug character: '*' bomb, '!' flag, digit, or space."""
        if self.has_bomb:
            return "*"
        if self.is_flagged:
            return "!"
        if self.bombs_near > 0:
            return str(self.bombs_near)
        return " "
