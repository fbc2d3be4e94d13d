"""
board.py - Board representation and core game mechanics for Four-in-a-Row

This module implements the Board class which holds the whole game state:
the grid, the player to move, the move count and the result. Placements
that break the rules come back as a Rejection value instead of raising.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Union

import numpy as np

from fourinarow.debug import debug
from fourinarow.utils import (COLS, TOTAL_CELLS, Coord, Player, GameResult,
                              check_win_at_position, empty_grid, get_next_open_row,
                              render_board_ascii, winning_line_at_position)


class RejectReason(Enum):
    """Why a placement was refused."""
    GAME_OVER = "game_over"
    OUT_OF_RANGE = "out_of_range"
    COLUMN_FULL = "column_full"
    NOT_YOUR_TURN = "not_your_turn"


REJECT_MESSAGES = {
    RejectReason.GAME_OVER: "The game is over. Start a new game to keep playing.",
    RejectReason.OUT_OF_RANGE: f"Column must be between 0 and {COLS - 1}.",
    RejectReason.COLUMN_FULL: "This column is full!",
    RejectReason.NOT_YOUR_TURN: "Wait for the computer to move.",
}


@dataclass(frozen=True)
class Placement:
    """A disc that was accepted onto the board."""
    row: int
    column: int
    player: Player

    def __bool__(self) -> bool:
        return True


@dataclass(frozen=True)
class Rejection:
    """A placement that was refused; the board is unchanged."""
    column: int
    reason: RejectReason

    @property
    def message(self) -> str:
        return REJECT_MESSAGES[self.reason]

    def __bool__(self) -> bool:
        return False


PlaceResult = Union[Placement, Rejection]


class Board:
    """
    Represents a Four-in-a-Row game board.

    This class manages the board state, validates and executes placements,
    and detects wins and draws. Red always moves first.
    """

    def __init__(self, grid: Optional[np.ndarray] = None,
                 current_player: Player = Player.RED):
        """
        Initialize a board, empty unless a grid is supplied.

        Args:
            grid: Optional ROWS x COLS array to start from (copied)
            current_player: Colour to move when starting from a grid
        """
        debug.trace("Initializing new Board", "board")
        self.reset()
        if grid is not None:
            self.grid = np.array(grid, dtype=int).copy()
            self.move_count = int(np.count_nonzero(self.grid))
            self.current_player = current_player

    def reset(self) -> None:
        """Reset the board to an empty state."""
        debug.debug("Resetting board", "board")
        self.grid = empty_grid()
        self.move_count = 0
        self.current_player = Player.RED
        self.game_result = GameResult.IN_PROGRESS
        self.last_move: Optional[Coord] = None

    def copy(self) -> 'Board':
        """
        Create a deep copy of the current board.

        Returns:
            A new Board instance with the same state
        """
        new_board = Board()
        new_board.grid = self.grid.copy()
        new_board.move_count = self.move_count
        new_board.current_player = self.current_player
        new_board.game_result = self.game_result
        new_board.last_move = self.last_move
        return new_board

    @property
    def winner(self) -> Optional[Player]:
        """The winning colour, or None while in progress or after a draw."""
        return self.game_result.winner

    def is_terminal(self) -> bool:
        return self.game_result.is_game_over()

    def is_valid_move(self, column: int) -> bool:
        """
        Check if a disc may be dropped into ``column`` right now.

        Args:
            column: The column to place a disc (0-indexed)

        Returns:
            True if the move is valid, False otherwise
        """
        return self._check_move(column) is None

    def _check_move(self, column: int) -> Optional[RejectReason]:
        if self.game_result.is_game_over():
            return RejectReason.GAME_OVER
        if not isinstance(column, (int, np.integer)) or not 0 <= column < COLS:
            return RejectReason.OUT_OF_RANGE
        if self.grid[0, column] != Player.EMPTY.value:
            return RejectReason.COLUMN_FULL
        return None

    def get_valid_moves(self) -> List[int]:
        """
        Get the columns where a disc can be placed.

        Returns:
            List of valid column indices, empty once the game is over
        """
        if self.game_result.is_game_over():
            return []

        return [col for col in range(COLS) if self.grid[0, col] == Player.EMPTY.value]

    def get_next_open_row(self, column: int) -> int:
        """Row a disc in ``column`` would land in, or -1 if it cannot."""
        return get_next_open_row(self.grid, column)

    def place(self, column: int) -> PlaceResult:
        """
        Drop the current player's disc into ``column``.

        The disc lands on the lowest empty row. A win is checked before the
        full-board draw, so a winning 42nd disc counts as a win.

        Args:
            column: The column to place a disc (0-indexed)

        Returns:
            Placement with the landing coordinates, or Rejection if the move
            was refused (state is untouched in that case)
        """
        reason = self._check_move(column)
        if reason is not None:
            debug.debug(f"Rejected move in column {column}: {reason.value}", "board")
            return Rejection(column=column, reason=reason)

        column = int(column)
        player = self.current_player
        row = get_next_open_row(self.grid, column)

        debug.trace(f"Placing {player} at ({row}, {column})", "board")
        self.grid[row, column] = player.value
        self.move_count += 1
        self.last_move = (row, column)

        if self.check_win(row, column):
            self.game_result = GameResult.win_for(player)
            debug.info(f"{player.display_name} wins after move at {self.last_move}", "board")
        elif self.move_count >= TOTAL_CELLS:
            self.game_result = GameResult.DRAW
            debug.info("Game ends in a draw", "board")
        else:
            self.current_player = player.other()

        return Placement(row=row, column=column, player=player)

    def check_win(self, row: int, column: int) -> bool:
        """
        Check whether the disc at (row, column) is part of four or more in a
        row along any axis.

        Returns:
            True if there is a win through that cell
        """
        return check_win_at_position(self.grid, row, column)

    def get_winning_line(self, row: Optional[int] = None,
                         column: Optional[int] = None) -> List[Coord]:
        """
        Get the winning run through a cell, defaulting to the last placement.

        Returns:
            List of (row, col) positions in board order, or empty list if no win
        """
        if row is None or column is None:
            if self.last_move is None:
                return []
            row, column = self.last_move

        return winning_line_at_position(self.grid, row, column)

    def is_draw(self) -> bool:
        """True once all cells are filled and the final disc did not win."""
        return self.game_result == GameResult.DRAW

    def is_full(self) -> bool:
        return self.move_count >= TOTAL_CELLS

    def get_state(self) -> np.ndarray:
        """
        Get the current board state as a numpy array.

        Returns:
            Copy of the 2D grid
        """
        return self.grid.copy()

    def render(self, highlight_win: bool = True) -> str:
        """
        Render the board as a string, marking the winning line if any.
        """
        highlight = self.get_winning_line() if highlight_win and self.winner else None
        return render_board_ascii(self.grid, highlight)

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return (f"Board(move_count={self.move_count}, current_player={self.current_player}, "
                f"game_result={self.game_result.name})")
