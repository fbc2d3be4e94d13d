"""
cli.py - Command-line interface for Four-in-a-Row

This module provides a terminal front end: a mode-selection menu, an
interactive game loop for two humans or a human against the computer,
position analysis and a small benchmark.
"""

import argparse
import random
import sys
from typing import List, Optional, Tuple

from fourinarow.ai.advisor import MoveAdvisor
from fourinarow.debug import debug, DebugLevel
from fourinarow.game.board import Board
from fourinarow.game.rules import FourInARowGame, TurnOutcome
from fourinarow.utils import (COLS, COMPUTER_MOVE_DELAY, GameMode, Player,
                              count_threats, parse_position, winning_line_at_position)

QUIT = "quit"
RESTART = "restart"
MENU = "menu"

MENU_TEXT = """
Four-in-a-Row
  1) Player vs Player
  2) Player vs Computer
  q) Quit
"""


def parse_command(user_input: str) -> Tuple[Optional[str], Optional[int]]:
    """
    Interpret one line typed during a game.

    Returns:
        (command, None) for q/r/m, (None, column) for a number, and
        (None, None) for anything else
    """
    text = user_input.strip().lower()
    if text in ('q', 'quit', 'exit'):
        return QUIT, None
    if text in ('r', 'restart', 'new'):
        return RESTART, None
    if text in ('m', 'menu'):
        return MENU, None
    try:
        return None, int(text)
    except ValueError:
        return None, None


def parse_menu_choice(user_input: str) -> Optional[GameMode]:
    """Map a menu selection to a mode; None means quit."""
    text = user_input.strip().lower()
    if text in ('q', 'quit', 'exit'):
        return None
    if text in ('2', 'pvc'):
        return GameMode.PVC
    return GameMode.from_value('pvp' if text in ('1', '') else text)


class SimpleCLI:
    """Simple command-line interface for Four-in-a-Row."""

    def __init__(self, argv: Optional[List[str]] = None):
        """Initialize the CLI."""
        self.argv = argv
        self.args = None
        self.game: Optional[FourInARowGame] = None

    def build_parser(self) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(description='Four-in-a-Row')
        parser.add_argument('--debug', action='store_true',
                            help='Enable debug logging (same as --debug-level debug)')
        parser.add_argument('--debug-level',
                            choices=[level.name.lower() for level in DebugLevel],
                            default='warning',
                            help='Logging level: none, error, warning, info, debug, trace')
        parser.add_argument('--log-file', type=str, default=None,
                            help='Also write log output to this file')

        subparsers = parser.add_subparsers(dest='command', help='Command to run')

        play_parser = subparsers.add_parser('play', help='Play a game interactively')
        play_parser.add_argument('--mode', type=str, default=None,
                                 help='pvp (two players) or pvc (play the computer); '
                                      'shows the menu when omitted')
        play_parser.add_argument('--delay', type=float, default=COMPUTER_MOVE_DELAY,
                                 help='Seconds before the computer moves')

        analyze_parser = subparsers.add_parser('analyze', help='Analyze a board position')
        analyze_parser.add_argument('--position', type=str, required=True,
                                    help='42 comma-separated values, top row first '
                                         '(0 empty, 1 red, 2 yellow)')
        analyze_parser.add_argument('--player', choices=['red', 'yellow'], default=None,
                                    help='Colour to suggest a move for (default: side to move)')

        benchmark_parser = subparsers.add_parser('benchmark', help='Benchmark performance')
        benchmark_parser.add_argument('--iterations', type=int, default=1000,
                                      help='Number of iterations for benchmarking')
        return parser

    def parse_args(self) -> None:
        """Parse command-line arguments and configure logging."""
        self.args = self.build_parser().parse_args(self.argv)

        if self.args.debug:
            debug.configure(level=DebugLevel.DEBUG)
        else:
            debug.configure(level=DebugLevel[self.args.debug_level.upper()])
        if self.args.log_file:
            debug.configure(log_file=self.args.log_file)

    def run(self) -> int:
        """Run the CLI based on the parsed arguments."""
        if not self.args:
            self.parse_args()

        if self.args.command == 'play':
            self.play(self.args.mode)
        elif self.args.command == 'analyze':
            return self.analyze_position()
        elif self.args.command == 'benchmark':
            self.benchmark()
        else:
            print("Please specify a command. Use --help for options.")
            return 1
        return 0

    def select_mode(self) -> Optional[GameMode]:
        """Show the mode menu; returns None if the player quits."""
        print(MENU_TEXT)
        try:
            choice = input("Choose a mode: ")
        except EOFError:
            return None
        return parse_menu_choice(choice)

    def play(self, mode: Optional[str] = None) -> None:
        """Menu and game loop; returns when the player quits."""
        selected = GameMode.from_value(mode) if mode else self.select_mode()
        while selected is not None:
            self.game = FourInARowGame(mode=selected, computer_delay=self.args.delay)
            if self.play_game():
                return
            selected = self.select_mode()

    def play_game(self) -> bool:
        """
        Play games in the current mode until the player quits or asks for
        the menu.

        Returns:
            True to quit, False to go back to the menu
        """
        game = self.game
        print(f"\nNew game ({'Player vs Computer' if game.vs_computer else 'Player vs Player'})")
        print(f"Enter a column (0-{COLS - 1}). Other commands: 'r' new game, 'm' menu, 'q' quit.")
        self.show(game)

        while True:
            prompt = "New game? (r/m/q): " if game.is_game_over() else \
                f"{game.player_name(game.get_current_player())} to move: "
            try:
                user_input = input(prompt)
            except EOFError:
                return True

            command, column = parse_command(user_input)
            if command == QUIT:
                print("Quitting game.")
                return True
            if command == MENU:
                return False
            if command == RESTART:
                game.reset()
                print("Game restarted.")
                self.show(game)
                continue
            if column is None:
                print(f"Invalid input. Enter a column number (0-{COLS - 1}) or a command.")
                continue

            if game.vs_computer and not game.is_game_over():
                outcome = self._play_against_computer(game, column)
            else:
                outcome = game.play_human_move(column)
                if outcome.accepted:
                    self.show(game)

            if not outcome.accepted:
                print(outcome.rejection.message)

    def _play_against_computer(self, game: FourInARowGame, column: int) -> TurnOutcome:
        """Show the human disc before the computer's delayed reply lands."""
        result = game.place(column)
        if not result:
            return TurnOutcome(rejection=result)

        self.show(game)
        outcome = TurnOutcome(placements=[result])
        if game.is_computer_turn():
            print(f"{game.player_name(game.computer_player)} is thinking...")
            reply = game.play_computer_move()
            if reply is not None:
                outcome.placements.append(reply)
                print(f"{game.player_name(reply.player)} plays column {reply.column}")
                self.show(game)
        return outcome

    def show(self, game: FourInARowGame) -> None:
        print(game.render())
        print(game.status_message())

    def analyze_position(self) -> int:
        """Report wins, threats and the advisor's suggestion for a position."""
        try:
            grid = parse_position(self.args.position)
        except ValueError as e:
            print(f"Error parsing position: {e}")
            return 1

        red_count = int((grid == Player.RED.value).sum())
        yellow_count = int((grid == Player.YELLOW.value).sum())
        to_move = Player.RED if red_count <= yellow_count else Player.YELLOW
        player = Player[self.args.player.upper()] if self.args.player else to_move

        board = Board(grid, current_player=to_move)
        print("Loaded position:")
        print(board.render(highlight_win=False))

        for colour in (Player.RED, Player.YELLOW):
            line = self._find_win(board, colour)
            if line:
                print(f"{colour.display_name} has four in a row: {line}")
            print(f"{colour.display_name} threats: {count_threats(grid, colour)}")

        valid = [col for col in range(COLS) if board.get_next_open_row(col) != -1]
        print(f"Open columns: {valid}")

        advisor = MoveAdvisor()
        column = advisor.select_column(board, player)
        if column is None:
            print("No move available.")
        else:
            print(f"Suggested move for {player.display_name}: column {column} "
                  f"({advisor.last_tier.name.lower()})")
        return 0

    @staticmethod
    def _find_win(board: Board, player: Player) -> List[Tuple[int, int]]:
        for row, col in zip(*(board.grid == player.value).nonzero()):
            line = winning_line_at_position(board.grid, int(row), int(col))
            if line:
                return line
        return []

    def benchmark(self) -> None:
        """Benchmark placements, win checks and advisor decisions."""
        iterations = self.args.iterations
        print(f"Running benchmark with {iterations} iterations...")

        board = Board()
        debug.start_timer("moves")
        moves_made = 0
        for _ in range(iterations):
            if board.place(random.randrange(COLS)):
                moves_made += 1
            if board.is_terminal():
                board.reset()
        moves_time = debug.end_timer("moves")
        print(f"Making {moves_made} moves: {moves_time:.6f} seconds total, "
              f"{moves_time / max(moves_made, 1) * 1000:.6f} ms per move")

        advisor = MoveAdvisor()
        debug.start_timer("advisor")
        games_played = 0
        decisions = 0
        for _ in range(max(iterations // 10, 1)):
            game = FourInARowGame(mode=GameMode.PVC, advisor=advisor, computer_delay=0.0)
            while not game.is_game_over():
                valid_moves = game.get_valid_moves()
                game.play_human_move(random.choice(valid_moves))
                decisions += 1
            games_played += 1
        advisor_time = debug.end_timer("advisor")
        print(f"Played {games_played} games against the advisor ({decisions} turns): "
              f"{advisor_time:.6f} seconds total, "
              f"{advisor_time / max(decisions, 1) * 1000:.6f} ms per turn")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    cli = SimpleCLI(argv)
    return cli.run()


if __name__ == "__main__":
    sys.exit(main())
