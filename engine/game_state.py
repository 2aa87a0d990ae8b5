"""A single game of 2048: the board, the score and the turn outcome contract."""

from enum import Enum
from typing import Callable, Optional, Sequence

import numpy as np

from board_rules import (
    TILE_DTYPE,
    BoardConfig,
    add_random_tile,
    equal_boards,
    is_game_over,
    random_board,
    slide_in_place,
)


class GameResult(Enum):
    GAME_OVER = "game_over"
    EXIT = "exit"
    NO_MOVE = "no_move"
    NEXT_MOVE = "next_move"
    RESET = "reset"
    UNKNOWN_KEY = "unknown_key"


class Keypress(Enum):
    UP = "UP"
    DOWN = "DOWN"
    LEFT = "LEFT"
    RIGHT = "RIGHT"
    RESET = "RESET"
    QUIT = "QUIT"


class Game:
    """Owns one board and its score.

    Moves mutate the board in place; a reset hands back a brand new Game
    built from the same config.
    """

    def __init__(
        self,
        config: BoardConfig,
        board: np.ndarray,
        score: int = 0,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        if board.shape != (config.height, config.width):
            raise ValueError(
                f"Expected {config.height}x{config.width} board, received shape {board.shape}"
            )
        self.config = config
        self._board = board
        self._score = score
        self._rng = rng

    @classmethod
    def new_game(
        cls, config: Optional[BoardConfig] = None, rng: Optional[np.random.Generator] = None
    ) -> "Game":
        config = config or BoardConfig()
        return cls(config, random_board(config, rng), rng=rng)

    @classmethod
    def from_grid(
        cls,
        grid: Sequence[Sequence[int]],
        score: int = 0,
        rng: Optional[np.random.Generator] = None,
    ) -> "Game":
        """Wrap an existing grid in a Game.

        The grid needs at least two cells: resetting builds a fresh board with
        ``min(2, cells - 1)`` tiles, and a single cell has no valid config.
        """
        board = np.array(grid, dtype=TILE_DTYPE)
        if board.ndim != 2:
            raise ValueError(f"Expected a 2D grid, received shape {board.shape}")
        if board.size < 2:
            raise ValueError(f"Expected at least 2 cells, received shape {board.shape}")
        height, width = board.shape
        count = min(BoardConfig.count, board.size - 1)
        config = BoardConfig(width=width, height=height, count=count)
        return cls(config, board, score=score, rng=rng)

    @property
    def board(self) -> np.ndarray:
        return self._board.copy()

    @property
    def score(self) -> int:
        return self._score

    @property
    def width(self) -> int:
        return self.config.width

    @property
    def height(self) -> int:
        return self.config.height

    def tile(self, row: int, col: int) -> int:
        return int(self._board[row, col])

    def game_over(self) -> bool:
        return is_game_over(self._board)

    def reset(self) -> "Game":
        return Game.new_game(self.config, self._rng)

    def apply_move(self, direction: str) -> bool:
        """Slide toward ``direction``; on change, score the merges and inject a tile.

        Returns False when the board did not change.
        """
        before = self._board.copy()
        gained = slide_in_place(self._board, direction)
        if equal_boards(self._board, before):
            return False
        self._score += gained
        add_random_tile(self._board, self._rng)
        return True

    def play_move(self, intent: Optional[Keypress]) -> GameResult:
        """Resolve one classified input; ``None`` means the input was not recognised."""
        if self.game_over():
            return GameResult.GAME_OVER
        if intent is None:
            return GameResult.UNKNOWN_KEY
        if intent is Keypress.QUIT:
            return GameResult.EXIT
        if intent is Keypress.RESET:
            return GameResult.RESET

        if self.apply_move(intent.value):
            return GameResult.NEXT_MOVE
        return GameResult.NO_MOVE

    def play_turn(self, read_intent: Callable[[], Optional[Keypress]]) -> GameResult:
        # A finished game never blocks on input.
        if self.game_over():
            return GameResult.GAME_OVER
        return self.play_move(read_intent())

    def __repr__(self) -> str:
        return f"Game(config={self.config!r}, score={self._score}, board={self._board.tolist()!r})"


__all__ = ["Game", "GameResult", "Keypress"]
