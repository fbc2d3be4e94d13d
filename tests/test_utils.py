import unittest

import numpy as np

from fourinarow.debug import debug, DebugLevel
from fourinarow.utils import (Player, GameResult, check_gravity, count_threats, empty_grid,
                              get_line, get_next_open_row, parse_position,
                              render_board_ascii)


class TestGridHelpers(unittest.TestCase):
    def test_next_open_row(self):
        grid = empty_grid()
        self.assertEqual(get_next_open_row(grid, 0), 5)
        grid[5, 0] = grid[4, 0] = Player.RED.value
        self.assertEqual(get_next_open_row(grid, 0), 3)
        grid[:, 1] = Player.YELLOW.value
        self.assertEqual(get_next_open_row(grid, 1), -1)
        self.assertEqual(get_next_open_row(grid, 7), -1)

    def test_line_is_in_board_order(self):
        grid = empty_grid()
        for col in (1, 2, 3):
            grid[5, col] = Player.RED.value
        self.assertEqual(get_line(grid, 5, 3, 0, 1), [(5, 1), (5, 2), (5, 3)])
        self.assertEqual(get_line(grid, 5, 1, 0, 1), [(5, 1), (5, 2), (5, 3)])
        self.assertEqual(get_line(grid, 4, 1, 0, 1), [])

    def test_open_three_is_a_threat(self):
        grid = empty_grid()
        for col in (1, 2, 3):
            grid[5, col] = Player.RED.value
        # One horizontal run, counted from each of its three discs
        self.assertEqual(count_threats(grid, Player.RED), 3)
        self.assertEqual(count_threats(grid, Player.YELLOW), 0)

    def test_closed_three_is_not_a_threat(self):
        grid = empty_grid()
        for col in (0, 1, 2):
            grid[5, col] = Player.RED.value
        grid[5, 3] = Player.YELLOW.value
        self.assertEqual(count_threats(grid, Player.RED), 0)

    def test_vertical_three_open_above(self):
        grid = empty_grid()
        grid[3:, 6] = Player.YELLOW.value
        self.assertEqual(count_threats(grid, Player.YELLOW), 3)
        grid[2, 6] = Player.RED.value
        self.assertEqual(count_threats(grid, Player.YELLOW), 0)

    def test_gravity_check(self):
        grid = empty_grid()
        grid[5, 2] = Player.RED.value
        self.assertTrue(check_gravity(grid))
        grid[3, 2] = Player.YELLOW.value
        self.assertFalse(check_gravity(grid))


class TestParsingAndRendering(unittest.TestCase):
    def test_parse_position(self):
        values = ["0"] * 42
        values[41] = "1"
        values[40] = "2"
        grid = parse_position(",".join(values))
        self.assertEqual(grid[5, 6], Player.RED.value)
        self.assertEqual(grid[5, 5], Player.YELLOW.value)
        self.assertEqual(int(np.count_nonzero(grid)), 2)

    def test_parse_position_errors(self):
        with self.assertRaises(ValueError):
            parse_position("0,1,2")
        with self.assertRaises(ValueError):
            parse_position(",".join(["3"] * 42))
        floating = ["0"] * 42
        floating[0] = "1"
        with self.assertRaises(ValueError):
            parse_position(",".join(floating))

    def test_render_marks_highlight(self):
        grid = empty_grid()
        grid[5, 0] = Player.RED.value
        grid[5, 1] = Player.YELLOW.value
        text = render_board_ascii(grid, highlight=[(5, 0)])
        lines = text.splitlines()
        self.assertEqual(len(lines), 9)
        self.assertIn("*R*", lines[6])
        self.assertIn(" Y ", lines[6])
        self.assertTrue(lines[-1].strip().startswith("0"))


class TestEnums(unittest.TestCase):
    def test_player_other(self):
        self.assertEqual(Player.RED.other(), Player.YELLOW)
        self.assertEqual(Player.YELLOW.other(), Player.RED)
        self.assertEqual(Player.EMPTY.other(), Player.EMPTY)

    def test_game_result_winner(self):
        self.assertEqual(GameResult.win_for(Player.YELLOW), GameResult.YELLOW_WIN)
        self.assertEqual(GameResult.RED_WIN.winner, Player.RED)
        self.assertIsNone(GameResult.DRAW.winner)
        self.assertTrue(GameResult.DRAW.is_game_over())
        self.assertFalse(GameResult.IN_PROGRESS.is_game_over())
        with self.assertRaises(ValueError):
            GameResult.win_for(Player.EMPTY)


class TestDebugManager(unittest.TestCase):
    def tearDown(self):
        debug.configure(level=DebugLevel.WARNING)

    def test_set_from_string(self):
        self.assertTrue(debug.set_from_string("debug"))
        self.assertEqual(debug.level, DebugLevel.DEBUG)
        self.assertFalse(debug.set_from_string("loud"))
        self.assertEqual(debug.level, DebugLevel.DEBUG)

    def test_timer(self):
        debug.start_timer("unit")
        self.assertGreaterEqual(debug.end_timer("unit"), 0.0)
        self.assertIsNone(debug.end_timer("unit"))


if __name__ == '__main__':
    unittest.main()
