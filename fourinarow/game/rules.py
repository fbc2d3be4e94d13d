"""
rules.py - Game session management and Gymnasium environment for Four-in-a-Row

This module provides:
1. FourInARowGame, which owns one board plus the configured mode and runs the
   computer's replies in player-vs-computer games
2. FourInARowEnv, a gymnasium-compatible environment on top of the same rules
"""

import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from fourinarow.ai.advisor import MoveAdvisor
from fourinarow.debug import debug
from fourinarow.game.board import (Board, Placement, Rejection, RejectReason,
                                   PlaceResult)
from fourinarow.utils import (ROWS, COLS, COMPUTER_MOVE_DELAY, GameMode, GameResult,
                              Player)

COMPUTER_NAME = "Computer"
DRAW_MESSAGE = "It's a draw! All spots are filled."


@dataclass
class TurnOutcome:
    """
    Everything a front end needs to redraw after one human action.

    ``placements`` lists every disc that landed, in order: the human disc
    and, in player-vs-computer games, the computer's reply.
    """
    placements: List[Placement] = field(default_factory=list)
    rejection: Optional[Rejection] = None

    @property
    def accepted(self) -> bool:
        return self.rejection is None


class FourInARowGame:
    """
    High-level game manager.

    Holds the board and the configured mode. The mode survives resets so a
    "new game" keeps playing the same way.
    """

    def __init__(self, mode: Union[GameMode, str, None] = GameMode.PVP,
                 advisor: Optional[MoveAdvisor] = None,
                 computer_delay: float = COMPUTER_MOVE_DELAY,
                 sleep: Callable[[float], None] = time.sleep):
        """
        Initialize a new game.

        Args:
            mode: GameMode or mode string; anything unrecognised means pvp
            advisor: Move advisor for the computer side (created if omitted)
            computer_delay: Seconds to pause before the computer's reply
            sleep: Function used to wait out the delay
        """
        self.mode = GameMode.from_value(mode)
        self.computer_player = Player.YELLOW
        self.advisor = advisor or MoveAdvisor()
        self.computer_delay = computer_delay
        self._sleep = sleep
        self.board = Board()
        debug.debug(f"Initializing FourInARowGame in {self.mode.value} mode", "game")

    def reset(self) -> None:
        """Start a new game with the same mode."""
        debug.debug(f"Resetting game ({self.mode.value})", "game")
        self.board.reset()

    @property
    def vs_computer(self) -> bool:
        return self.mode == GameMode.PVC

    def is_computer_turn(self) -> bool:
        return (self.vs_computer and not self.is_game_over()
                and self.board.current_player == self.computer_player)

    def place(self, column: int) -> PlaceResult:
        """
        Place a disc for the player to move, without triggering the computer.

        Returns:
            Placement or Rejection from the board
        """
        return self.board.place(column)

    def play_human_move(self, column: int) -> TurnOutcome:
        """
        Apply a human move and, in pvc mode, the computer's reply.

        Human input is refused while it is the computer's turn.

        Returns:
            TurnOutcome with the discs placed or the rejection
        """
        if self.is_computer_turn():
            debug.debug(f"Ignoring human move in column {column}: computer to move", "game")
            return TurnOutcome(rejection=Rejection(column=column, reason=RejectReason.NOT_YOUR_TURN))

        result = self.board.place(column)
        if not result:
            return TurnOutcome(rejection=result)

        outcome = TurnOutcome(placements=[result])
        if self.is_computer_turn():
            reply = self.play_computer_move()
            if reply is not None:
                outcome.placements.append(reply)
        return outcome

    def play_computer_move(self, delay: Optional[float] = None) -> Optional[Placement]:
        """
        Let the advisor pick and play a column for the computer side.

        Waits ``delay`` seconds first (the configured delay by default).

        Returns:
            The computer's Placement, or None if it is not the computer's
            turn or no column is open
        """
        if not self.is_computer_turn():
            return None

        wait = self.computer_delay if delay is None else delay
        if wait > 0:
            self._sleep(wait)

        column = self.advisor.select_column(self.board, self.computer_player)
        if column is None:
            return None

        result = self.board.place(column)
        if not result:
            # The advisor only proposes open columns on a live board
            debug.error(f"Advisor proposed rejected column {column}: {result.reason.value}", "game")
            return None
        return result

    def player_name(self, player: Player) -> str:
        """Display name for a colour, 'Computer' for the advisor's side."""
        if self.vs_computer and player == self.computer_player:
            return COMPUTER_NAME
        return player.display_name

    def status_message(self) -> str:
        """Status line for the current state of the game."""
        result = self.board.game_result
        if result == GameResult.DRAW:
            return DRAW_MESSAGE
        if result.winner is not None:
            name = self.player_name(result.winner)
            if name != COMPUTER_NAME:
                name = result.winner.name
            return f"{name} wins!"
        return f"{self.player_name(self.board.current_player)}'s turn"

    def get_state(self) -> Board:
        return self.board

    def is_game_over(self) -> bool:
        return self.board.is_terminal()

    def get_winner(self) -> Optional[Player]:
        return self.board.winner

    def get_winning_line(self):
        return self.board.get_winning_line() if self.board.winner else []

    def get_current_player(self) -> Player:
        return self.board.current_player

    def get_valid_moves(self) -> List[int]:
        return self.board.get_valid_moves()

    def render(self) -> str:
        return self.board.render()


class FourInARowEnv(gym.Env):
    """
    Four-in-a-Row environment following the Gymnasium interface.

    The agent always plays red. In pvc mode each step also plays the
    advisor's yellow reply; in pvp mode the agent moves for both colours.
    """

    metadata = {'render_modes': ['ascii', 'human'], 'render_fps': 4}

    def __init__(self, mode: Union[GameMode, str, None] = GameMode.PVC,
                 render_mode: Optional[str] = None):
        debug.debug("Initializing FourInARowEnv", "env")

        self.action_space = spaces.Discrete(COLS)
        # Observation space: 6x7 board with 3 possible values (0, 1, 2)
        self.observation_space = spaces.Box(low=0, high=2, shape=(ROWS, COLS), dtype=np.int8)

        self.game = FourInARowGame(mode=mode, computer_delay=0.0)
        self.render_mode = render_mode

        self.reward_win = 1.0
        self.reward_lose = -1.0
        self.reward_draw = 0.1
        self.reward_invalid_move = -0.5
        self.reward_step = -0.01

    def reset(self, seed: Optional[int] = None,
              options: Optional[Dict] = None) -> Tuple[np.ndarray, Dict]:
        super().reset(seed=seed)
        self.game.reset()

        if self.render_mode == "human":
            self.render()

        return self._get_observation(), self._get_info()

    def step(self, action: int) -> Tuple[np.ndarray, float, bool, bool, Dict]:
        """
        Play ``action`` for red (plus the computer's reply in pvc mode).

        Returns:
            Tuple of (observation, reward, terminated, truncated, info)
        """
        mover = self.game.get_current_player()
        outcome = self.game.play_human_move(int(action))

        if not outcome.accepted:
            debug.warning(f"Invalid action {action}: {outcome.rejection.reason.value}", "env")
            info = self._get_info()
            info['invalid_move'] = True
            return self._get_observation(), self.reward_invalid_move, False, True, info

        reward = self.reward_step
        terminated = self.game.is_game_over()
        result = self.game.get_state().game_result
        if result == GameResult.DRAW:
            reward = self.reward_draw
        elif result.winner is not None:
            reward = self.reward_win if result.winner == mover else self.reward_lose

        if terminated:
            debug.info(f"Episode finished: {result.name}", "env")

        if self.render_mode == "human":
            self.render()

        return self._get_observation(), reward, terminated, False, self._get_info()

    def render(self) -> Optional[str]:
        if self.render_mode == "ascii":
            return self.game.render()
        if self.render_mode == "human":
            print(self.game.render())
        return None

    def _get_observation(self) -> np.ndarray:
        return self.game.get_state().get_state().astype(np.int8)

    def _get_info(self) -> Dict[str, Any]:
        board = self.game.get_state()
        valid_moves = board.get_valid_moves()
        return {
            'valid_moves': valid_moves,
            'num_valid_moves': len(valid_moves),
            'current_player': board.current_player.value,
            'game_result': board.game_result.name,
            'moves_made': board.move_count,
            'winning_line': self.game.get_winning_line(),
            'last_move': board.last_move,
        }

    def close(self):
        pass
