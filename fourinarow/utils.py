"""
utils.py - Constants, enumerations and grid helpers for Four-in-a-Row

Everything here works on the raw numpy grid so that both the board engine
and the move advisor can share the same scanning code.
"""

from enum import Enum, auto
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from fourinarow.debug import debug

# Game constants
ROWS = 6
COLS = 7
CONNECT_N = 4  # Number of discs in a row to win
THREAT_LENGTH = 3  # Run length the advisor treats as a threat
TOTAL_CELLS = ROWS * COLS

# Column order the advisor falls back on, center-out
CENTER_PREFERENCE = (3, 2, 4, 1, 5, 0, 6)

# Seconds to wait before the computer's reply is applied
COMPUTER_MOVE_DELAY = 0.5

Coord = Tuple[int, int]


class Player(Enum):
    """Enumeration representing disc colours and empty cells."""
    EMPTY = 0
    RED = 1     # Always moves first
    YELLOW = 2

    def other(self) -> 'Player':
        """Get the opposing colour."""
        if self == Player.RED:
            return Player.YELLOW
        elif self == Player.YELLOW:
            return Player.RED
        return Player.EMPTY

    @property
    def display_name(self) -> str:
        return self.name.capitalize()

    @property
    def symbol(self) -> str:
        if self == Player.RED:
            return "R"
        elif self == Player.YELLOW:
            return "Y"
        return "."

    def __str__(self):
        return self.name.lower()


class GameResult(Enum):
    """Enumeration representing the game outcome."""
    IN_PROGRESS = auto()
    RED_WIN = auto()
    YELLOW_WIN = auto()
    DRAW = auto()

    def is_game_over(self) -> bool:
        """Check if the game is over."""
        return self != GameResult.IN_PROGRESS

    @property
    def winner(self) -> Optional[Player]:
        if self == GameResult.RED_WIN:
            return Player.RED
        elif self == GameResult.YELLOW_WIN:
            return Player.YELLOW
        return None

    @classmethod
    def win_for(cls, player: Player) -> 'GameResult':
        if player == Player.RED:
            return cls.RED_WIN
        elif player == Player.YELLOW:
            return cls.YELLOW_WIN
        raise ValueError(f"No win result for {player!r}")


class GameMode(Enum):
    """Supported ways to play."""
    PVP = "pvp"  # Two humans share the board
    PVC = "pvc"  # Human plays red, the advisor plays yellow

    @classmethod
    def from_value(cls, value: Optional[str]) -> 'GameMode':
        """
        Resolve a mode string, falling back to PVP for anything unrecognised.

        Args:
            value: Mode string such as "pvp" or "pvc" (case-insensitive), or None

        Returns:
            The matching GameMode, or GameMode.PVP
        """
        if isinstance(value, cls):
            return value
        if not value:
            return cls.PVP
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            debug.warning(f"Unknown game mode {value!r}, defaulting to pvp", "game")
            return cls.PVP


class Direction(Enum):
    """Axes scanned for lines of discs."""
    HORIZONTAL = auto()
    VERTICAL = auto()
    DIAGONAL_DOWN = auto()  # Top-left to bottom-right
    DIAGONAL_UP = auto()    # Top-right to bottom-left


# Direction vectors (row, col); order matters for winning line selection
DIRECTION_VECTORS: Dict[Direction, Tuple[int, int]] = {
    Direction.HORIZONTAL: (0, 1),
    Direction.VERTICAL: (1, 0),
    Direction.DIAGONAL_DOWN: (1, 1),
    Direction.DIAGONAL_UP: (1, -1),
}


def empty_grid() -> np.ndarray:
    """Create an empty ROWS x COLS grid."""
    return np.zeros((ROWS, COLS), dtype=int)


def is_valid_position(row: int, col: int) -> bool:
    """
    Check if a position is within the board boundaries.

    Args:
        row: Row index
        col: Column index

    Returns:
        True if position is valid, False otherwise
    """
    return 0 <= row < ROWS and 0 <= col < COLS


def get_next_open_row(grid: np.ndarray, column: int) -> int:
    """
    Find the row a disc dropped into ``column`` would land in.

    Returns:
        Row index, or -1 if the column is full or out of range
    """
    if not 0 <= column < COLS:
        return -1
    for row in range(ROWS - 1, -1, -1):
        if grid[row, column] == Player.EMPTY.value:
            return row
    return -1


def get_column_height(grid: np.ndarray, column: int) -> int:
    """Number of discs currently stacked in ``column``."""
    return int(np.count_nonzero(grid[:, column]))


def get_line(grid: np.ndarray, row: int, col: int, dr: int, dc: int) -> List[Coord]:
    """
    Collect the contiguous run of same-coloured discs through (row, col).

    The run is returned in board order, from the end reached by stepping
    against (dr, dc) to the end reached by stepping along it.

    Returns:
        List of (row, col) positions, empty if the cell itself is empty
    """
    player_value = grid[row, col]
    if player_value == Player.EMPTY.value:
        return []

    before: List[Coord] = []
    r, c = row - dr, col - dc
    while is_valid_position(r, c) and grid[r, c] == player_value:
        before.append((r, c))
        r -= dr
        c -= dc

    after: List[Coord] = []
    r, c = row + dr, col + dc
    while is_valid_position(r, c) and grid[r, c] == player_value:
        after.append((r, c))
        r += dr
        c += dc

    return before[::-1] + [(row, col)] + after


def check_win_at_position(grid: np.ndarray, row: int, col: int) -> bool:
    """
    Check if the disc at the given position completes a line of CONNECT_N.

    Args:
        grid: The game grid
        row: Row index of the disc
        col: Column index of the disc

    Returns:
        True if any axis through the disc holds CONNECT_N or more in a row
    """
    if not is_valid_position(row, col) or grid[row, col] == Player.EMPTY.value:
        return False

    for dr, dc in DIRECTION_VECTORS.values():
        if len(get_line(grid, row, col, dr, dc)) >= CONNECT_N:
            return True

    return False


def winning_line_at_position(grid: np.ndarray, row: int, col: int) -> List[Coord]:
    """
    Get the first winning run through (row, col), axes checked in
    DIRECTION_VECTORS order.

    Returns:
        The run in board order, or an empty list if there is no win
    """
    if not is_valid_position(row, col):
        return []

    for dr, dc in DIRECTION_VECTORS.values():
        line = get_line(grid, row, col, dr, dc)
        if len(line) >= CONNECT_N:
            return line

    return []


def count_threats(grid: np.ndarray, player: Player) -> int:
    """
    Count the open lines of THREAT_LENGTH or more for ``player``.

    Every disc of the player is used as a starting point and each axis
    through it is measured, so a run of three is counted once per disc in
    it. A run only counts if an empty cell sits directly beyond one of its
    ends.

    Args:
        grid: The game grid
        player: Colour to count threats for

    Returns:
        Number of threats found
    """
    threats = 0
    rows, cols = np.nonzero(grid == player.value)
    for row, col in zip(rows.tolist(), cols.tolist()):
        for dr, dc in DIRECTION_VECTORS.values():
            line = get_line(grid, row, col, dr, dc)
            if len(line) < THREAT_LENGTH:
                continue
            (first_r, first_c), (last_r, last_c) = line[0], line[-1]
            if _is_open(grid, first_r - dr, first_c - dc) or _is_open(grid, last_r + dr, last_c + dc):
                threats += 1
    return threats


def _is_open(grid: np.ndarray, row: int, col: int) -> bool:
    return is_valid_position(row, col) and grid[row, col] == Player.EMPTY.value


def check_gravity(grid: np.ndarray) -> bool:
    """True if no disc on the grid is floating above an empty cell."""
    occupied = grid != Player.EMPTY.value
    # A cell may be filled only if the cell directly below is filled too
    return not np.any(occupied[:-1, :] & ~occupied[1:, :])


def render_board_ascii(grid: np.ndarray, highlight: Optional[Sequence[Coord]] = None) -> str:
    """
    Render the grid as ASCII art.

    Args:
        grid: The game grid
        highlight: Cells to mark with '*' (for example a winning line)

    Returns:
        ASCII representation of the board
    """
    marked = set(highlight or ())
    result = ["+" + "-" * (COLS * 3) + "+"]

    for row in range(ROWS):
        line = "|"
        for col in range(COLS):
            symbol = Player(int(grid[row, col])).symbol
            if (row, col) in marked:
                line += f"*{symbol}*"
            else:
                line += f" {symbol} "
        result.append(line + "|")

    result.append("+" + "-" * (COLS * 3) + "+")
    result.append(" " + "".join(f" {i} " for i in range(COLS)))

    return "\n".join(result)


def parse_position(position: str) -> np.ndarray:
    """
    Build a grid from a comma-separated list of ROWS*COLS cell values
    (0 empty, 1 red, 2 yellow) given top row first.

    Raises:
        ValueError: if the string has the wrong length or bad values
    """
    values = [int(v) for v in position.replace(" ", "").split(",") if v != ""]
    if len(values) != TOTAL_CELLS:
        raise ValueError(f"Position string must have {TOTAL_CELLS} values, got {len(values)}")
    if any(v not in (0, 1, 2) for v in values):
        raise ValueError("Position values must be 0 (empty), 1 (red) or 2 (yellow)")

    grid = np.array(values, dtype=int).reshape(ROWS, COLS)
    if not check_gravity(grid):
        raise ValueError("Position has discs floating above empty cells")
    return grid
