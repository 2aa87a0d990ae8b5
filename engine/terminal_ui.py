"""Board rendering and key reading for the curses and plain text front ends."""

import curses
import sys
from typing import Dict, List, Optional, TextIO, Tuple, Union

import numpy as np

HELP_LINES: Tuple[str, ...] = (
    "WASD or Arrow Keys - Up/Left/Down/Right",
    "R - Reset/New Game",
    "Q/Esc - Quit",
)

# tile value -> (foreground, background)
TILE_COLORS: Dict[int, Tuple[int, int]] = {
    2: (curses.COLOR_WHITE, curses.COLOR_BLACK),
    4: (curses.COLOR_RED, curses.COLOR_BLACK),
    8: (curses.COLOR_GREEN, curses.COLOR_BLACK),
    16: (curses.COLOR_YELLOW, curses.COLOR_BLACK),
    32: (curses.COLOR_BLUE, curses.COLOR_BLACK),
    64: (curses.COLOR_MAGENTA, curses.COLOR_BLACK),
    128: (curses.COLOR_BLACK, curses.COLOR_WHITE),
    256: (curses.COLOR_RED, curses.COLOR_WHITE),
    512: (curses.COLOR_GREEN, curses.COLOR_WHITE),
    1024: (curses.COLOR_YELLOW, curses.COLOR_WHITE),
    2048: (curses.COLOR_BLUE, curses.COLOR_WHITE),
    4096: (curses.COLOR_MAGENTA, curses.COLOR_WHITE),
}
DEFAULT_COLORS: Tuple[int, int] = (curses.COLOR_WHITE, curses.COLOR_BLACK)

MIN_CELL_WIDTH = 6


def cell_width(board: np.ndarray) -> int:
    widest = len(str(int(board.max()))) if board.size else 1
    return max(MIN_CELL_WIDTH, widest + 2)


def format_cell(value: int, width: int) -> str:
    return f"{value if value else '':^{width}}"


def _separator(columns: int, width: int) -> str:
    return "+" + "+".join("-" * width for _ in range(columns)) + "+"


def format_board(board: np.ndarray) -> List[str]:
    """Lay the board out as an ASCII table, one string per screen line."""
    height, width = board.shape
    size = cell_width(board)
    border = _separator(width, size)
    lines = [border]
    for row in range(height):
        cells = [format_cell(int(board[row, col]), size) for col in range(width)]
        lines.append("|" + "|".join(cells) + "|")
        lines.append(border)
    return lines


def format_screen(board: np.ndarray, score: int, message: Optional[str] = None) -> str:
    lines = list(HELP_LINES) + format_board(board) + [f"Score: {score}"]
    if message:
        lines.append(message)
    return "\n".join(lines)


class PlainTerminal:
    """Line based front end: one key per input line, boards printed as text."""

    def __init__(self, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None) -> None:
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout

    def read_key(self) -> Optional[str]:
        line = self.stdin.readline()
        if line == "":
            return None
        return line.rstrip("\r\n")

    def show(self, board: np.ndarray, score: int, message: Optional[str] = None) -> None:
        print(format_screen(board, score, message), file=self.stdout)
        print(file=self.stdout)
        self.stdout.flush()


class CursesTerminal:
    """Full screen front end with coloured tiles."""

    def __init__(self, stdscr) -> None:
        self.stdscr = stdscr
        self.stdscr.keypad(True)
        try:
            curses.curs_set(0)
        except curses.error:
            # cursor visibility unsupported
            pass
        self._pairs: Dict[int, int] = {}
        if curses.has_colors():
            self._init_colors()

    def _init_colors(self) -> None:
        curses.start_color()
        values = sorted(TILE_COLORS)
        for pair, value in enumerate(values, start=1):
            fg, bg = TILE_COLORS[value]
            curses.init_pair(pair, fg, bg)
            self._pairs[value] = pair
        default_pair = len(values) + 1
        curses.init_pair(default_pair, *DEFAULT_COLORS)
        self._pairs[0] = default_pair

    def _attr(self, value: int) -> int:
        if not self._pairs:
            return curses.A_NORMAL
        pair = self._pairs.get(value, self._pairs[0])
        return curses.color_pair(pair) | curses.A_BOLD

    def read_key(self) -> Optional[Union[int, str]]:
        return self.stdscr.getch()

    def _put(self, y: int, x: int, text: str, attr: int = curses.A_NORMAL) -> None:
        """Write ``text`` clipped to the window; curses raises on anything past the edge."""
        rows, cols = self.stdscr.getmaxyx()
        if y >= rows or x >= cols:
            return
        room = cols - x
        if y == rows - 1:
            # curses errors after writing the bottom right cell
            room -= 1
        text = text[:room]
        if text:
            self.stdscr.addstr(y, x, text, attr)

    def show(self, board: np.ndarray, score: int, message: Optional[str] = None) -> None:
        scr = self.stdscr
        scr.erase()

        height, width = board.shape
        size = cell_width(board)
        border = _separator(width, size)
        needed_rows = len(HELP_LINES) + 2 * height + 1 + 1 + (1 if message else 0)
        rows, cols = scr.getmaxyx()
        if needed_rows > rows or len(border) > cols:
            self._put(0, 0, f"Terminal too small: the board needs {len(border)}x{needed_rows}", curses.A_BOLD)
            self._put(1, 0, HELP_LINES[-1])
            self._put(2, 0, f"Score: {score}", curses.A_UNDERLINE)
            if message:
                self._put(3, 0, message, curses.A_BOLD)
            scr.refresh()
            return

        y = 0
        for line in HELP_LINES:
            self._put(y, 0, line)
            y += 1

        self._put(y, 0, border)
        y += 1
        for row in range(height):
            x = 0
            self._put(y, x, "|")
            x += 1
            for col in range(width):
                value = int(board[row, col])
                self._put(y, x, format_cell(value, size), self._attr(value))
                x += size
                self._put(y, x, "|")
                x += 1
            y += 1
            self._put(y, 0, border)
            y += 1

        self._put(y, 0, f"Score: {score}", curses.A_UNDERLINE)
        y += 1
        if message:
            self._put(y, 0, message, curses.A_BOLD)
        scr.refresh()


__all__ = ["CursesTerminal", "PlainTerminal", "format_board", "format_screen"]
