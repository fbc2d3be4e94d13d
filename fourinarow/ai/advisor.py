"""
advisor.py - Rule-based move selection for the computer player

The advisor looks exactly one ply ahead. For every open column it drops a
disc onto a private copy of the grid and checks, in priority order:

1. Does the computer win by playing here?
2. Would the opponent win by playing here? (block it)
3. Does playing here leave the computer with an open three?
4. Would the opponent get an open three by playing here? (deny it)
5. Otherwise take the most central open column.
6. Otherwise take the lowest-numbered open column.

Within a tier columns are tried left to right.
"""

from enum import Enum
from typing import Callable, Optional

import numpy as np

from fourinarow.debug import debug
from fourinarow.utils import (COLS, CENTER_PREFERENCE, Player, check_win_at_position,
                              count_threats, get_next_open_row)


class Tier(Enum):
    """Priority tier that produced the advisor's last decision."""
    WIN = 1
    BLOCK = 2
    CREATE_THREAT = 3
    DENY_THREAT = 4
    CENTER = 5
    FALLBACK = 6


class MoveAdvisor:
    """
    A Four-in-a-Row player that picks moves with a fixed priority cascade.

    The board passed in is never modified; each candidate move is simulated
    on a copy of the grid.
    """

    def __init__(self):
        self.last_tier: Optional[Tier] = None
        self.simulations = 0  # For performance tracking

    def get_move(self, board) -> Optional[int]:
        """Pick a column for whoever is to move on ``board``."""
        return self.select_column(board, board.current_player)

    def select_column(self, board, computer: Player) -> Optional[int]:
        """
        Choose a column for ``computer`` to play.

        Args:
            board: The current board (or a raw grid)
            computer: Colour the advisor is playing

        Returns:
            Column index, or None when no column is open
        """
        grid = getattr(board, "grid", board)
        opponent = computer.other()
        self.last_tier = None
        self.simulations = 0

        candidates = [col for col in range(COLS) if get_next_open_row(grid, col) != -1]
        if not candidates:
            debug.debug("No open columns, advisor has no move", "advisor")
            return None

        cascade = (
            (Tier.WIN, computer, self._wins),
            (Tier.BLOCK, opponent, self._wins),
            (Tier.CREATE_THREAT, computer, self._threatens),
            (Tier.DENY_THREAT, opponent, self._threatens),
        )

        for tier, player, condition in cascade:
            column = self._first_column(grid, candidates, player, condition)
            if column is not None:
                return self._decide(tier, column, computer)

        for column in CENTER_PREFERENCE:
            if column in candidates:
                return self._decide(Tier.CENTER, column, computer)

        return self._decide(Tier.FALLBACK, candidates[0], computer)

    def _first_column(self, grid: np.ndarray, candidates, player: Player,
                      condition: Callable[[np.ndarray, int, int, Player], bool]) -> Optional[int]:
        """Return the first candidate column where ``condition`` holds after a simulated drop."""
        for column in candidates:
            trial = grid.copy()
            row = get_next_open_row(trial, column)
            trial[row, column] = player.value
            self.simulations += 1
            if condition(trial, row, column, player):
                return column
        return None

    @staticmethod
    def _wins(grid: np.ndarray, row: int, column: int, player: Player) -> bool:
        return check_win_at_position(grid, row, column)

    @staticmethod
    def _threatens(grid: np.ndarray, row: int, column: int, player: Player) -> bool:
        return count_threats(grid, player) > 0

    def _decide(self, tier: Tier, column: int, computer: Player) -> int:
        self.last_tier = tier
        debug.debug(f"{computer.display_name} picks column {column} ({tier.name.lower()}, "
                    f"{self.simulations} simulations)", "advisor")
        return column
