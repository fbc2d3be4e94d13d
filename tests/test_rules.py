import unittest

import numpy as np

from fourinarow.game.board import Board, RejectReason
from fourinarow.game.rules import FourInARowGame, FourInARowEnv
from fourinarow.utils import (COLS, COMPUTER_MOVE_DELAY, GameMode, GameResult, Player,
                              empty_grid)

from tests.test_board import DRAW_SEQUENCE


class FakeSleep:
    def __init__(self):
        self.calls = []

    def __call__(self, seconds):
        self.calls.append(seconds)


class TestGameMode(unittest.TestCase):
    def test_known_modes(self):
        self.assertEqual(GameMode.from_value("pvp"), GameMode.PVP)
        self.assertEqual(GameMode.from_value("pvc"), GameMode.PVC)
        self.assertEqual(GameMode.from_value(" PVC "), GameMode.PVC)
        self.assertEqual(GameMode.from_value(GameMode.PVC), GameMode.PVC)

    def test_missing_or_unknown_mode_defaults_to_pvp(self):
        for value in (None, "", "cvc", "online"):
            self.assertEqual(GameMode.from_value(value), GameMode.PVP)
            self.assertEqual(FourInARowGame(mode=value).mode, GameMode.PVP)


class TestPlayerVsPlayer(unittest.TestCase):
    def setUp(self):
        self.game = FourInARowGame(mode="pvp")

    def test_players_alternate(self):
        first = self.game.play_human_move(2)
        second = self.game.play_human_move(2)
        self.assertEqual([p.player for p in first.placements], [Player.RED])
        self.assertEqual([p.player for p in second.placements], [Player.YELLOW])
        self.assertFalse(self.game.is_computer_turn())

    def test_red_wins_vertical_scenario(self):
        for column in [0, 6, 0, 6, 0, 6, 0]:
            outcome = self.game.play_human_move(column)
            self.assertTrue(outcome.accepted)

        self.assertTrue(self.game.is_game_over())
        self.assertEqual(self.game.get_winner(), Player.RED)
        self.assertEqual(self.game.status_message(), "RED wins!")
        self.assertEqual(self.game.get_winning_line(), [(2, 0), (3, 0), (4, 0), (5, 0)])

    def test_rejections_are_reported(self):
        for _ in range(6):
            self.game.play_human_move(4)
        outcome = self.game.play_human_move(4)
        self.assertFalse(outcome.accepted)
        self.assertEqual(outcome.rejection.reason, RejectReason.COLUMN_FULL)
        self.assertEqual(outcome.placements, [])

    def test_draw_message(self):
        for column in DRAW_SEQUENCE:
            self.game.play_human_move(column)
        self.assertEqual(self.game.get_state().game_result, GameResult.DRAW)
        self.assertEqual(self.game.status_message(), "It's a draw! All spots are filled.")

    def test_turn_message_names_colour(self):
        self.assertEqual(self.game.status_message(), "Red's turn")
        self.game.play_human_move(0)
        self.assertEqual(self.game.status_message(), "Yellow's turn")

    def test_no_computer_move_in_pvp(self):
        self.game.play_human_move(0)
        self.assertIsNone(self.game.play_computer_move())


class TestPlayerVsComputer(unittest.TestCase):
    def setUp(self):
        self.sleep = FakeSleep()
        self.game = FourInARowGame(mode=GameMode.PVC, sleep=self.sleep)

    def test_computer_replies_after_delay(self):
        outcome = self.game.play_human_move(0)

        self.assertTrue(outcome.accepted)
        human, computer = outcome.placements
        self.assertEqual((human.row, human.column, human.player), (5, 0, Player.RED))
        self.assertEqual((computer.column, computer.player), (3, Player.YELLOW))
        self.assertEqual(self.sleep.calls, [COMPUTER_MOVE_DELAY])
        self.assertEqual(self.game.get_current_player(), Player.RED)
        self.assertEqual(self.game.get_state().move_count, 2)

    def test_rejected_human_move_gets_no_reply(self):
        outcome = self.game.play_human_move(COLS)
        self.assertEqual(outcome.rejection.reason, RejectReason.OUT_OF_RANGE)
        self.assertEqual(self.sleep.calls, [])
        self.assertEqual(self.game.get_state().move_count, 0)

    def test_human_input_ignored_on_computer_turn(self):
        self.game.place(0)
        self.assertTrue(self.game.is_computer_turn())

        outcome = self.game.play_human_move(1)

        self.assertEqual(outcome.rejection.reason, RejectReason.NOT_YOUR_TURN)
        self.assertEqual(self.game.get_state().move_count, 1)

    def test_computer_builds_on_center_stack(self):
        for column in (0, 1):
            self.game.play_human_move(column)
        # Yellow answered in column 3 twice; a third disc there is an open three
        outcome = self.game.play_human_move(2)
        self.assertEqual(outcome.placements[-1].column, 3)

    def test_computer_win_message(self):
        grid = empty_grid()
        grid[5, 0] = grid[4, 0] = grid[3, 0] = Player.YELLOW.value
        grid[5, 1] = grid[5, 2] = grid[4, 1] = Player.RED.value
        self.game.board = Board(grid, current_player=Player.YELLOW)

        placement = self.game.play_computer_move(delay=0)

        self.assertEqual(placement.column, 0)
        self.assertEqual(self.game.get_winner(), Player.YELLOW)
        self.assertEqual(self.game.status_message(), "Computer wins!")
        self.assertEqual(self.sleep.calls, [])

    def test_names(self):
        self.assertEqual(self.game.player_name(Player.RED), "Red")
        self.assertEqual(self.game.player_name(Player.YELLOW), "Computer")

    def test_reset_keeps_mode(self):
        self.game.play_human_move(0)
        self.game.reset()

        self.assertEqual(self.game.mode, GameMode.PVC)
        self.assertEqual(self.game.get_state().move_count, 0)
        self.assertFalse(self.game.is_game_over())
        self.assertEqual(self.game.get_current_player(), Player.RED)


class TestFourInARowEnv(unittest.TestCase):
    def test_reset_returns_empty_observation(self):
        env = FourInARowEnv()
        observation, info = env.reset(seed=0)
        self.assertEqual(observation.shape, (6, 7))
        self.assertEqual(observation.dtype, np.int8)
        self.assertFalse(observation.any())
        self.assertEqual(info['valid_moves'], list(range(COLS)))
        self.assertTrue(env.observation_space.contains(observation))

    def test_step_plays_computer_reply(self):
        env = FourInARowEnv(mode="pvc")
        env.reset()
        observation, reward, terminated, truncated, info = env.step(0)

        self.assertEqual(observation[5, 0], Player.RED.value)
        self.assertEqual(observation[5, 3], Player.YELLOW.value)
        self.assertEqual(reward, env.reward_step)
        self.assertFalse(terminated)
        self.assertFalse(truncated)
        self.assertEqual(info['moves_made'], 2)

    def test_invalid_action_truncates(self):
        env = FourInARowEnv()
        env.reset()
        observation, reward, terminated, truncated, info = env.step(COLS)
        self.assertEqual(reward, env.reward_invalid_move)
        self.assertFalse(terminated)
        self.assertTrue(truncated)
        self.assertTrue(info['invalid_move'])
        self.assertFalse(observation.any())

    def test_pvp_win_reward(self):
        env = FourInARowEnv(mode="pvp")
        env.reset()
        for column in [0, 6, 0, 6, 0, 6]:
            env.step(column)
        observation, reward, terminated, truncated, info = env.step(0)

        self.assertEqual(reward, env.reward_win)
        self.assertTrue(terminated)
        self.assertEqual(info['game_result'], 'RED_WIN')
        self.assertEqual(info['winning_line'], [(2, 0), (3, 0), (4, 0), (5, 0)])

    def test_ascii_render(self):
        env = FourInARowEnv(render_mode="ascii")
        env.reset()
        env.step(3)
        self.assertIn("R", env.render())


if __name__ == '__main__':
    unittest.main()
