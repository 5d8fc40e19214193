"""
Game engine for Minesweeper.

Ties the board and the clock together and implements the rules: opening
with flood fill, first-click safety, flagging, chording, and win/lose
detection. Every mutating call returns the current ``Outcome`` and bumps
``version`` when observable state changed.
"""
import logging
import random
from enum import Enum, auto
from typing import Callable, Collection, List, Optional, Tuple

import numpy as np

from .board import Board, GameSettings
from .cell import Cell, CellState
from .clock import Clock

logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

class Outcome(Enum):
    """Result of the game so far."""

    ONGOING = auto()
    WON = auto()
    LOST = auto()


# ============================================================================
# Game Engine
# ============================================================================

class GameEngine:
    """
    Minesweeper rules engine.

    The game starts implicitly on the first open or flag, and ends for
    good on a win or a loss. After that every mutating call is a no-op.

    Callers must only pass cells obtained from this engine's own board.
    """

    def __init__(
        self,
        settings: Optional[GameSettings] = None,
        on_win: Optional[Callable[[], None]] = None,
        on_lose: Optional[Callable[[], None]] = None,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
    ) -> None:
        """
        Create a game and place its bombs.

        Args:
            settings: Board size and bomb count (default: 9x9 with 10).
            on_win: Called once when the game is won.
            on_lose: Called once when the game is lost.
            rng: Random source for bomb placement.
            seed: Seed for a private random source, ignored if rng is set.
        """
        self.settings = settings or GameSettings()
        self.board = Board(self.settings.rows, self.settings.columns)
        self.clock = Clock()
        self._rng = rng or random.Random(seed)
        self._on_win = on_win
        self._on_lose = on_lose

        self.flags_set = 0
        self.cells_to_open = self.settings.safe_cells
        self.finished = False
        self.outcome = Outcome.ONGOING
        self.version = 0
        self._first_reveal_pending = True

        for _ in range(self.settings.mines):
            self.board.place_bomb(self._rng)
        logger.debug(
            "Placed %d bombs on %dx%d board",
            self.settings.mines, self.settings.rows, self.settings.columns,
        )

    @classmethod
    def with_mines(
        cls,
        rows: int,
        columns: int,
        mines: Collection[Tuple[int, int]],
        on_win: Optional[Callable[[], None]] = None,
        on_lose: Optional[Callable[[], None]] = None,
        rng: Optional[random.Random] = None,
    ) -> "GameEngine":
        """
        Create a game with bombs at exactly the given positions.

        Args:
            rows: Number of rows.
            columns: Number of columns.
            mines: (row, column) positions of the bombs.
            on_win: Called once when the game is won.
            on_lose: Called once when the game is lost.
            rng: Random source used if the first click must relocate a bomb.

        Raises:
            ValueError: If the settings are invalid or a position is out
                of bounds.
        """
        positions = set(mines)
        settings = GameSettings(rows, columns, len(positions))
        engine = cls(settings, on_win=on_win, on_lose=on_lose, rng=rng)
        engine.board.set_bombs(positions)
        return engine

    # ========================================================================
    # Observable State
    # ========================================================================

    @property
    def rows(self) -> int:
        return self.settings.rows

    @property
    def columns(self) -> int:
        return self.settings.columns

    @property
    def mines(self) -> int:
        return self.settings.mines

    @property
    def running(self) -> bool:
        """True between the first move and the end of the game."""
        return self.clock.running

    @property
    def seconds(self) -> int:
        """Whole seconds elapsed since the game started."""
        return self.clock.seconds

    @property
    def is_won(self) -> bool:
        return self.outcome == Outcome.WON

    @property
    def is_lost(self) -> bool:
        return self.outcome == Outcome.LOST

    def cell_at(self, row: int, column: int) -> Optional[Cell]:
        """Get cell at position, or None if out of bounds."""
        return self.board.cell_at(row, column)

    def neighbors_of(self, cell: Cell) -> List[Cell]:
        """Get the in-bounds neighbors of a cell in row-major order."""
        return self.board.neighbors_of(cell)

    def get_observation(self) -> np.ndarray:
        """Board state as an int8 array, see ``Board.get_observation``."""
        return self.board.get_observation()

    def get_hidden_cells(self) -> List[Tuple[int, int]]:
        """Positions of cells that are neither opened nor flagged."""
        return self.board.get_hidden_cells()

    def render_text(self) -> str:
        """Debug rendering: '*' bomb, '!' flag, digit, space."""
        return self.board.render_text()

    def __str__(self) -> str:
        return self.render_text()

    # ========================================================================
    # Game Actions
    # ========================================================================

    def open_cell(self, cell: Cell) -> Outcome:
        """
        Open a cell.

        Does nothing if the game is finished or the cell is opened or
        flagged. Opening a bomb loses, except on the very first open of the
        game, where the bomb is moved elsewhere. A cell with no bombs near
        it opens its neighbors too, spreading through the whole connected
        empty region.

        Args:
            cell: Cell to open, from this engine's board.

        Returns:
            The outcome after the move.
        """
        if self.finished or not cell.is_hidden:
            return self.outcome
        if not self.running:
            self._start_game()

        opened = 0
        pending = [cell]
        while pending:
            current = pending.pop()
            if not current.is_hidden:
                continue
            if not self._reveal(current):
                break
            opened += 1
            if current.bombs_near == 0:
                pending.extend(reversed(self.board.neighbors_of(current)))

        if opened > 1:
            logger.debug("Flood fill opened %d cells", opened)
        self._touch()
        return self.outcome

    def toggle_flag(self, cell: Cell) -> Outcome:
        """
        Set or clear the flag on a cell.

        Does nothing if the game is finished or the cell is opened. A
        flagged cell cannot be opened until the flag is cleared.

        Args:
            cell: Cell to flag, from this engine's board.

        Returns:
            The outcome after the move.
        """
        if self.finished or cell.is_opened:
            return self.outcome
        if not self.running:
            self._start_game()

        cell.toggle_flag()
        if cell.is_flagged:
            self.flags_set += 1
        else:
            self.flags_set -= 1
        self._touch()
        return self.outcome

    def open_not_flagged_neighbors(self, cell: Cell) -> Outcome:
        """
        Chord: open every neighbor of a numbered cell.

        Only acts on an opened cell with bombs near it, and only when the
        number of flagged neighbors equals that bomb count. Flags are not
        checked for correctness, so a misplaced flag loses the game.

        Args:
            cell: Opened cell, from this engine's board.

        Returns:
            The outcome after the move.
        """
        if self.finished or not cell.is_opened or cell.bombs_near == 0:
            return self.outcome

        neighbors = self.board.neighbors_of(cell)
        flags_near = sum(1 for neighbor in neighbors if neighbor.is_flagged)
        if flags_near != cell.bombs_near:
            return self.outcome

        for neighbor in neighbors:
            self.open_cell(neighbor)
        return self.outcome

    def on_time_tick(self, time_millis: int) -> None:
        """
        Feed the current monotonic time.

        Should be called from the caller's timer loop.

        Args:
            time_millis: Current time in milliseconds.
        """
        if self.clock.tick(time_millis):
            self._touch()

    def open_at(self, row: int, column: int) -> Outcome:
        """``open_cell`` by position; out-of-range positions do nothing."""
        cell = self.board.cell_at(row, column)
        if cell is None:
            return self.outcome
        return self.open_cell(cell)

    def flag_at(self, row: int, column: int) -> Outcome:
        """``toggle_flag`` by position; out-of-range positions do nothing."""
        cell = self.board.cell_at(row, column)
        if cell is None:
            return self.outcome
        return self.toggle_flag(cell)

    def chord_at(self, row: int, column: int) -> Outcome:
        """``open_not_flagged_neighbors`` by position."""
        cell = self.board.cell_at(row, column)
        if cell is None:
            return self.outcome
        return self.open_not_flagged_neighbors(cell)

    # ========================================================================
    # Internals
    # ========================================================================

    def _reveal(self, cell: Cell) -> bool:
        """
        Open one hidden cell and apply the consequences.

        Returns:
            False if the game ended on this cell.
        """
        cell.open()
        if cell.has_bomb:
            if self._first_reveal_pending:
                self._relocate_bomb(cell)
            else:
                self._lose()
                return False

        self._first_reveal_pending = False
        self.cells_to_open -= 1
        if self.cells_to_open == 0:
            self._win()
            return False
        return True

    def _relocate_bomb(self, cell: Cell) -> None:
        """Move the bomb under the first opened cell somewhere else."""
        # The bomb stays on ``cell`` until the new one is placed, so the
        # draw cannot land here.
        target = self.board.place_bomb(self._rng)
        self.board.remove_bomb(cell)
        logger.debug(
            "First click on bomb at (%d, %d), moved to (%d, %d)",
            cell.row, cell.column, target.row, target.column,
        )

    def _start_game(self) -> None:
        self.clock.start()
        logger.info(
            "Game started on %dx%d board with %d mines",
            self.rows, self.columns, self.mines,
        )

    def _end_game(self, outcome: Outcome) -> None:
        self.finished = True
        self.outcome = outcome
        self.clock.stop()

    def _win(self) -> None:
        self._end_game(Outcome.WON)
        for cell in self.board.cells():
            if cell.state == CellState.HIDDEN:
                cell.state = CellState.FLAGGED
                self.flags_set += 1
        logger.info("Game won in %d seconds", self.seconds)
        if self._on_win is not None:
            self._on_win()

    def _lose(self) -> None:
        self._end_game(Outcome.LOST)
        for cell in self.board.cells():
            if cell.has_bomb and cell.is_hidden:
                cell.open()
        logger.info("Game lost after %d seconds", self.seconds)
        if self._on_lose is not None:
            self._on_lose()

    def _touch(self) -> None:
        self.version += 1
