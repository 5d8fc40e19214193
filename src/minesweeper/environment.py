"""
Gymnasium environment wrapper for the Minesweeper engine.

Lets an automated player drive a GameEngine through the standard
reset/step interface.
"""
import random
import time
from typing import Any, Dict, Optional, Tuple, SupportsFloat

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .board import GameSettings
from .engine import GameEngine, Outcome


# ============================================================================
# Constants
# ============================================================================

ACTION_OPEN = 0
ACTION_FLAG = 1
ACTION_CHORD = 2
NUM_ACTION_KINDS = 3


# ============================================================================
# Minesweeper Environment
# ============================================================================

class MinesweeperEnv(gym.Env):
    """
    Gymnasium environment for Minesweeper.

    Observation:
        2D array where:
        - -1 = hidden cell
        - -2 = flagged cell
        - 0-8 = opened cell with neighbor bomb count
        - 9 = opened bomb (after a loss)

    Actions:
        Discrete action space of size 3 * rows * columns.
        Action a applies kind a // cells (0 open, 1 flag, 2 chord)
        to the cell with flat index a % cells.

    Rewards:
        - +1 per safe cell opened by the action
        - +10 for winning the game
        - -10 for hitting a bomb
        - 0 for setting or clearing a flag
        - -0.1 for an action that changed nothing
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        settings: Optional[GameSettings] = None,
        render_mode: Optional[str] = None,
    ) -> None:
        """
        Initialize the Minesweeper environment.

        Args:
            settings: Game settings (default: 9x9 with 10 mines).
            render_mode: How to render the environment.
        """
        super().__init__()

        self.settings = settings or GameSettings()
        self.engine = GameEngine(self.settings)
        self.render_mode = render_mode
        self._cells = self.settings.total_cells

        self.observation_space = spaces.Box(
            low=-2,
            high=9,
            shape=(self.settings.rows, self.settings.columns),
            dtype=np.int8,
        )
        self.action_space = spaces.Discrete(NUM_ACTION_KINDS * self._cells)

        self._steps = 0

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Start a new game.

        Args:
            seed: Random seed for reproducibility.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        rng = random.Random(int(self.np_random.integers(0, 2**32)))
        self.engine = GameEngine(self.settings, rng=rng)
        self.engine.on_time_tick(self._now())
        self._steps = 0

        return self.engine.get_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Execute one action in the environment.

        Args:
            action: Flat action index, see the class docstring.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        kind, row, col = self._decode_action(action)
        self._steps += 1
        self.engine.on_time_tick(self._now())

        reward = self._apply_action(kind, row, col)

        observation = self.engine.get_observation()
        terminated = self.engine.finished
        truncated = False

        return observation, reward, terminated, truncated, self._get_info()

    def _decode_action(self, action: int) -> Tuple[int, int, int]:
        """Convert flat action index to (kind, row, col)."""
        kind, index = divmod(int(action), self._cells)
        row, col = divmod(index, self.settings.columns)
        return kind, row, col

    def _apply_action(self, kind: int, row: int, col: int) -> float:
        """
        Run one engine operation and score it.

        Returns:
            Reward value.
        """
        engine = self.engine
        to_open_before = engine.cells_to_open
        version_before = engine.version

        if kind == ACTION_OPEN:
            outcome = engine.open_at(row, col)
        elif kind == ACTION_FLAG:
            outcome = engine.flag_at(row, col)
        else:
            outcome = engine.chord_at(row, col)

        if engine.version == version_before:
            return -0.1
        if outcome == Outcome.WON:
            return 10.0
        if outcome == Outcome.LOST:
            return -10.0
        return float(to_open_before - engine.cells_to_open)

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        return {
            "steps": self._steps,
            "cells_to_open": self.engine.cells_to_open,
            "flags_set": self.engine.flags_set,
            "seconds": self.engine.seconds,
            "outcome": self.engine.outcome.name,
        }

    @staticmethod
    def _now() -> int:
        """Monotonic time in milliseconds."""
        return int(time.monotonic() * 1000)

    def render(self) -> Optional[str]:
        """Render the current board state."""
        if self.render_mode == "ansi":
            return self._render_ansi()
        if self.render_mode == "human":
            print(self._render_ansi())
        return None

    def _render_ansi(self) -> str:
        """Render board as ASCII string."""
        lines = []
        obs = self.engine.get_observation()

        for row in range(self.settings.rows):
            row_str = ""
            for col in range(self.settings.columns):
                val = obs[row, col]
                if val == -1:
                    row_str += "."
                elif val == -2:
                    row_str += "F"
                elif val == 9:
                    row_str += "*"
                elif val == 0:
                    row_str += " "
                else:
                    row_str += str(val)
                row_str += " "
            lines.append(row_str)

        return "\n".join(lines)

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of actions that would currently change the game.

        Returns:
            Boolean array where True = legal action.
        """
        mask = np.zeros(self.action_space.n, dtype=bool)
        if self.engine.finished:
            return mask

        for cell in self.engine.board.cells():
            index = cell.row * self.settings.columns + cell.column
            if cell.is_hidden:
                mask[ACTION_OPEN * self._cells + index] = True
            if not cell.is_opened:
                mask[ACTION_FLAG * self._cells + index] = True
            elif cell.bombs_near > 0 and self._chord_ready(cell):
                mask[ACTION_CHORD * self._cells + index] = True
        return mask

    def _chord_ready(self, cell) -> bool:
        """Check if a chord on an opened cell would open something."""
        neighbors = self.engine.neighbors_of(cell)
        flags = sum(1 for neighbor in neighbors if neighbor.is_flagged)
        hidden = any(neighbor.is_hidden for neighbor in neighbors)
        return flags == cell.bombs_near and hidden
