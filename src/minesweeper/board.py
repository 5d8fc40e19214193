"""
Board module for the Minesweeper engine.

Implements the fixed-size grid of cells with bounds-checked lookup,
neighbor resolution, and bomb placement.
"""
import logging
import random
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional, Tuple

import numpy as np

from .cell import Cell, CellState

logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

# Moore neighborhood, row-major, center excluded
NEIGHBOR_OFFSETS: Tuple[Tuple[int, int], ...] = (
    (-1, -1), (-1, 0), (-1, 1),
    (0, -1),           (0, 1),
    (1, -1),  (1, 0),  (1, 1),
)


@dataclass(frozen=True)
class GameSettings:
    """
    Configuration for a Minesweeper game.

    Attributes:
        rows: Number of rows.
        columns: Number of columns.
        mines: Total bombs to place.
    """

    rows: int = 9
    columns: int = 9
    mines: int = 10

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.rows < 1 or self.columns < 1:
            raise ValueError("Board dimensions must be positive")
        if self.mines < 0:
            raise ValueError("Number of mines cannot be negative")
        max_mines = self.total_cells - 1
        if self.mines > max_mines:
            raise ValueError(f"Too many mines (max {max_mines})")

    @property
    def total_cells(self) -> int:
        """Number of cells on the board."""
        return self.rows * self.columns

    @property
    def safe_cells(self) -> int:
        """Number of cells without a bomb."""
        return self.total_cells - self.mines


# Preset difficulty levels
BEGINNER = GameSettings(9, 9, 10)
INTERMEDIATE = GameSettings(16, 16, 40)
EXPERT = GameSettings(16, 30, 99)


# ============================================================================
# Board Class
# ============================================================================

@dataclass
class Board:
    """
    Minesweeper grid.

    Created once per game and never resized. Only the owning engine
    mutates its cells.
    """

    rows: int
    columns: int
    _grid: List[List[Cell]] = field(default_factory=list, repr=False)

    def __post_init__(self) -> None:
        """Initialize the grid after dataclass creation."""
        self._grid = [
            [Cell(row, col) for col in range(self.columns)]
            for row in range(self.rows)
        ]

    # ========================================================================
    # Lookup and Neighbors (Low-level)
    # ========================================================================

    def cell_at(self, row: int, column: int) -> Optional[Cell]:
        """Get cell at position, or None if out of bounds."""
        if not (0 <= row < self.rows and 0 <= column < self.columns):
            return None
        return self._grid[row][column]

    def neighbors_of(self, cell: Cell) -> List[Cell]:
        """
        Get the in-bounds Moore neighbors of a cell.

        Args:
            cell: Center cell.

        Returns:
            Up to 8 cells, top row left to right, then the middle row,
            then the bottom row.
        """
        neighbors = []
        for delta_row, delta_col in NEIGHBOR_OFFSETS:
            neighbor = self.cell_at(cell.row + delta_row, cell.column + delta_col)
            if neighbor is not None:
                neighbors.append(neighbor)
        return neighbors

    def cells(self) -> Iterator[Cell]:
        """Iterate over every cell in row-major order."""
        for row in self._grid:
            yield from row

    # ========================================================================
    # Bomb Placement (Mid-level)
    # ========================================================================

    def place_bomb(self, rng: random.Random) -> Cell:
        """
        Put a bomb on a uniformly chosen bomb-free cell.

        Draws cell indices until one without a bomb turns up. The caller
        guarantees at least one bomb-free cell remains.

        Args:
            rng: Random source for the draws.

        Returns:
            The cell that received the bomb.
        """
        total = self.rows * self.columns
        while True:
            index = rng.randrange(total)
            cell = self._grid[index // self.columns][index % self.columns]
            if not cell.has_bomb:
                break
        self._add_bomb(cell)
        return cell

    def remove_bomb(self, cell: Cell) -> None:
        """Clear the bomb on a cell and update its neighbors' counts."""
        if not cell.has_bomb:
            return
        cell.has_bomb = False
        for neighbor in self.neighbors_of(cell):
            neighbor.bombs_near -= 1

    def set_bombs(self, positions: Iterable[Tuple[int, int]]) -> int:
        """
        Replace all bombs with exactly the given positions.

        Every ``has_bomb`` and ``bombs_near`` is recomputed from the
        position set.

        Args:
            positions: (row, column) pairs; duplicates collapse.

        Returns:
            Number of bombs placed.

        Raises:
            ValueError: If a position lies outside the board.
        """
        unique = set(positions)
        for row, column in unique:
            if self.cell_at(row, column) is None:
                raise ValueError(
                    f"Mine position ({row}, {column}) is outside the "
                    f"{self.rows}x{self.columns} board"
                )

        for cell in self.cells():
            cell.has_bomb = False
            cell.bombs_near = 0
        for row, column in unique:
            self._add_bomb(self._grid[row][column])
        return len(unique)

    def _add_bomb(self, cell: Cell) -> None:
        """Mark a cell as bomb and bump its neighbors' counts."""
        cell.has_bomb = True
        for neighbor in self.neighbors_of(cell):
            neighbor.bombs_near += 1
        logger.debug("Bomb placed at (%d, %d)", cell.row, cell.column)

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    def count_bombs(self) -> int:
        """Total cells holding a bomb."""
        return sum(1 for cell in self.cells() if cell.has_bomb)

    def count_flags(self) -> int:
        """Total flagged cells."""
        return sum(1 for cell in self.cells() if cell.is_flagged)

    def get_hidden_cells(self) -> List[Tuple[int, int]]:
        """
        Get positions of cells that are neither opened nor flagged.

        Returns:
            List of (row, column) tuples.
        """
        return [
            cell.position for cell in self.cells()
            if cell.state == CellState.HIDDEN
        ]

    def get_observation(self) -> np.ndarray:
        """
        Get board state as a numpy array.

        Returns:
            2D int8 array where:
                -1 = hidden
                -2 = flagged
                0-8 = opened with neighbor bomb count
                9 = opened bomb
        """
        obs = np.zeros((self.rows, self.columns), dtype=np.int8)
        for cell in self.cells():
            obs[cell.row, cell.column] = cell.to_observation()
        return obs

    def render_text(self) -> str:
        """
        Render every cell as one debug character, one line per row.

        A board without rows renders as the empty string.
        """
        return "\n".join(
            "".join(cell.to_char() for cell in row) for row in self._grid
        )
