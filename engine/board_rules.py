"""Core 2048 board mechanics shared by the game state, the terminal front end and tests."""

from dataclasses import dataclass
from typing import List, Optional, Sequence, Set, Tuple

import numpy as np

DIRECTION_NAMES: Sequence[str] = ("UP", "RIGHT", "DOWN", "LEFT")
TILE_DTYPE = np.int64
FOUR_TILE_PROBABILITY = 0.1

Position = Tuple[int, int]

_default_rng = np.random.default_rng()


class BoardConfigError(ValueError):
    """Raised when a BoardConfig cannot produce a playable board."""


@dataclass(frozen=True)
class BoardConfig:
    width: int = 4
    height: int = 4
    count: int = 2

    @property
    def cells(self) -> int:
        return self.width * self.height


def validate_config(config: BoardConfig) -> None:
    if config.width < 0 or config.height < 0 or config.count < 0:
        raise BoardConfigError("Invalid dimensions!")
    if config.count == 0:
        raise BoardConfigError("Empty board!")
    if config.count == config.cells:
        raise BoardConfigError("Full board!")
    if config.count > config.cells:
        raise BoardConfigError("Overflow!")


def _rng(rng: Optional[np.random.Generator]) -> np.random.Generator:
    return _default_rng if rng is None else rng


def random_tile(rng: Optional[np.random.Generator] = None) -> int:
    # 4 tile (10%), 2 tile (90%)
    return 4 if _rng(rng).random() < FOUR_TILE_PROBABILITY else 2


def random_board(config: BoardConfig, rng: Optional[np.random.Generator] = None) -> np.ndarray:
    """Build a board with ``config.count`` tiles at distinct random positions.

    Raises BoardConfigError before allocating anything if the config leaves
    no tiles, no free cells, or more tiles than cells.
    """
    validate_config(config)
    gen = _rng(rng)

    positions: Set[Position] = set()
    while len(positions) != config.count:
        positions.add((int(gen.integers(config.height)), int(gen.integers(config.width))))

    board = np.zeros((config.height, config.width), dtype=TILE_DTYPE)
    for row, col in sorted(positions):
        board[row, col] = random_tile(gen)
    return board


def _oriented(board: np.ndarray, direction: str) -> np.ndarray:
    """Return a writable view in which ``direction`` becomes a left move."""
    if direction == "LEFT":
        return board
    if direction == "RIGHT":
        return board[:, ::-1]
    if direction == "UP":
        return board.T
    if direction == "DOWN":
        return board.T[:, ::-1]
    raise ValueError(f"Unknown direction: {direction}")


def _next_tile(line: np.ndarray, idx: int) -> Optional[int]:
    for j in range(idx + 1, len(line)):
        if line[j] != 0:
            return j
    return None


def _merge(line: np.ndarray) -> int:
    gained = 0
    for idx in range(len(line)):
        if line[idx] == 0:
            continue
        # only the first tile in the way is a merge candidate
        j = _next_tile(line, idx)
        if j is not None and line[j] == line[idx]:
            line[idx] *= 2
            gained += int(line[idx])
            line[j] = 0
    return gained


def _compress(line: np.ndarray) -> None:
    filtered = line[line != 0]
    line[:] = 0
    line[: len(filtered)] = filtered


def slide_in_place(board: np.ndarray, direction: str) -> int:
    """Merge then compact every line of ``board`` toward ``direction``.

    Mutates ``board`` and returns the points earned by the merges.
    """
    view = _oriented(board, direction)
    gained = 0
    for line in view:
        gained += _merge(line)
    for line in view:
        _compress(line)
    return gained


def equal_boards(a: Sequence[Sequence[int]], b: Sequence[Sequence[int]]) -> bool:
    left = np.asarray(a)
    right = np.asarray(b)
    if left.shape != right.shape:
        return False
    return bool(np.array_equal(left, right))


def apply_move(grid: Sequence[Sequence[int]], direction: str) -> Tuple[np.ndarray, int, bool]:
    arr = np.array(grid, dtype=TILE_DTYPE)
    original = arr.copy()
    gained = slide_in_place(arr, direction)
    return arr, gained, not equal_boards(arr, original)


def simulate_move(grid: Sequence[Sequence[int]], direction: str) -> Tuple[np.ndarray, bool]:
    next_board, _, changed = apply_move(grid, direction)
    return next_board, changed


def valid_moves(grid: Sequence[Sequence[int]]) -> List[str]:
    allowed: List[str] = []
    for direction in DIRECTION_NAMES:
        _, changed = simulate_move(grid, direction)
        if changed:
            allowed.append(direction)
    return allowed


def has_merge(grid: Sequence[Sequence[int]]) -> bool:
    """True if any line holds two equal tiles with only empty cells between them."""
    board = np.asarray(grid)
    for direction in DIRECTION_NAMES:
        for line in _oriented(board, direction):
            for idx in range(len(line)):
                if line[idx] == 0:
                    continue
                j = _next_tile(line, idx)
                if j is not None and line[j] == line[idx]:
                    return True
    return False


def is_game_over(grid: Sequence[Sequence[int]]) -> bool:
    board = np.asarray(grid)
    if np.any(board == 0):
        return False
    return not has_merge(board)


def empty_cells(grid: Sequence[Sequence[int]]) -> List[Position]:
    return [(int(row), int(col)) for row, col in np.argwhere(np.asarray(grid) == 0)]


def add_random_tile(board: np.ndarray, rng: Optional[np.random.Generator] = None) -> Optional[Position]:
    """Drop a 2 or 4 onto a random empty cell of ``board``.

    Returns the chosen position, or None when the board has no empty cell.
    """
    free = empty_cells(board)
    if not free:
        return None
    gen = _rng(rng)
    row, col = free[int(gen.integers(len(free)))]
    board[row, col] = random_tile(gen)
    return row, col


__all__ = [
    "BoardConfig",
    "BoardConfigError",
    "DIRECTION_NAMES",
    "add_random_tile",
    "apply_move",
    "empty_cells",
    "equal_boards",
    "has_merge",
    "is_game_over",
    "random_board",
    "random_tile",
    "simulate_move",
    "slide_in_place",
    "valid_moves",
]
