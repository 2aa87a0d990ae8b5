"""Checks valid_moves against a hand-worked sample board."""

import unittest

from board_rules import valid_moves


class ValidMovesTests(unittest.TestCase):
    def test_sample_board_allows_every_direction(self) -> None:
        sample = [
            [2, 0, 0, 2],
            [4, 4, 0, 0],
            [0, 0, 8, 8],
            [16, 0, 16, 0],
        ]
        self.assertEqual(valid_moves(sample), ["UP", "RIGHT", "DOWN", "LEFT"])

    def test_locked_board_has_no_moves(self) -> None:
        self.assertEqual(valid_moves([[2, 4], [4, 2]]), [])

    def test_only_changing_directions_are_listed(self) -> None:
        self.assertEqual(valid_moves([[0, 0], [2, 4]]), ["UP"])


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
