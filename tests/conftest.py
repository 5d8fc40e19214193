"""
Pytest configuration and shared fixtures.
"""
import pytest
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minesweeper import Cell, GameEngine, GameSettings


# ============================================================================
# Engine Fixtures
# ============================================================================

@pytest.fixture
def default_engine() -> GameEngine:
    """Create a seeded default 9x9 game with 10 mines."""
    return GameEngine(seed=1234)


@pytest.fixture
def center_mine_engine() -> GameEngine:
    """3x3 game with its only mine in the center."""
    return GameEngine.with_mines(3, 3, [(1, 1)])


@pytest.fixture
def corner_mine_engine() -> GameEngine:
    """
    5x5 game with a single mine in the top-left corner.

    Layout (bombs_near):
        * 1 0 0 0
        1 1 0 0 0
        0 0 0 0 0
        0 0 0 0 0
        0 0 0 0 0
    """
    return GameEngine.with_mines(5, 5, [(0, 0)])


@pytest.fixture
def wall_engine() -> GameEngine:
    """
    4x5 game with a column of mines splitting the board.

    Layout:
        0 2 * 2 0
        0 3 * 3 0
        0 3 * 3 0
        0 2 * 2 0
    """
    return GameEngine.with_mines(4, 5, [(0, 2), (1, 2), (2, 2), (3, 2)])


@pytest.fixture
def empty_engine() -> GameEngine:
    """Create a 5x5 game with no mines for cascade testing."""
    return GameEngine(GameSettings(5, 5, 0))


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def hidden_cell() -> Cell:
    """Create a hidden cell."""
    return Cell(0, 0)


@pytest.fixture
def bomb_cell() -> Cell:
    """Create a cell containing a bomb."""
    return Cell(0, 0, has_bomb=True)


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def valid_settings() -> GameSettings:
    """Create a valid game configuration."""
    return GameSettings(9, 9, 10)


# ============================================================================
# Helpers
# ============================================================================

def assert_neighbor_counts(engine: GameEngine) -> None:
    """Every cell's bombs_near matches its actual bomb neighbors."""
    for cell in engine.board.cells():
        actual = sum(1 for n in engine.neighbors_of(cell) if n.has_bomb)
        assert cell.bombs_near == actual, cell.position


@pytest.fixture
def check_neighbor_counts():
    """Expose the neighbor count assertion to tests."""
    return assert_neighbor_counts
