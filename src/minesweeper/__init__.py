"""
Minesweeper engine package.

Provides the game rules including board management, cell state,
the game clock, and a gymnasium driver.
"""
from .cell import Cell, CellState
from .board import Board, GameSettings, BEGINNER, INTERMEDIATE, EXPERT
from .clock import Clock
from .engine import GameEngine, Outcome
from .environment import MinesweeperEnv

__all__ = [
    "Cell",
    "CellState",
    "Board",
    "GameSettings",
    "BEGINNER",
    "INTERMEDIATE",
    "EXPERT",
    "Clock",
    "GameEngine",
    "Outcome",
    "MinesweeperEnv",
]
