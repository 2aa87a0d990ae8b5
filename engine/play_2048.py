"""Command line entry point: parse the board config and run the interactive loop."""

import curses
import os
import sys
from typing import List, Mapping, Optional, Sequence

from board_rules import BoardConfig, BoardConfigError
from game_state import Game, GameResult, Keypress
from keymap import classify_key
from terminal_ui import CursesTerminal, PlainTerminal

CONFIG_ENV = "BOARD_CONFIG"
HELP_FLAGS = ("-h", "--help")
PLAIN_FLAG = "--plain"

RESULT_MESSAGES = {
    GameResult.GAME_OVER: "--- Game Over ---",
    GameResult.NEXT_MOVE: "--- Nice Move ---",
    GameResult.UNKNOWN_KEY: "--- Invalid key ---",
    GameResult.NO_MOVE: "--- Unnecessary move ---",
}


def print_usage(stream=None) -> None:
    out = stream or sys.stdout
    print("Usage: play-2048 [CONFIG] [FLAGS]", file=out)
    print(file=out)
    print("Config - NUMBER NUMBER NUMBER", file=out)
    print(" - consists of three numbers", file=out)
    print(" - Grid width - Width of the grid", file=out)
    print(" - Grid height - Height of the grid", file=out)
    print(" - Filled count - Number of filled in tiles", file=out)
    print(" - default value: 4 4 2", file=out)
    print(f" - falls back to the {CONFIG_ENV} environment variable when omitted", file=out)
    print(file=out)
    print("Flags:", file=out)
    print(" -h, --help - Displays the help message", file=out)
    print(f" {PLAIN_FLAG} - Line based text mode instead of the full screen board", file=out)
    print(file=out)


def parse_args(args: Sequence[str]) -> Optional[BoardConfig]:
    """Turn three numbers into a BoardConfig; anything else means the default is used."""
    if len(args) != 3:
        print("Not enough arguments. Using default configuration.")
        return None

    numbers: List[int] = []
    for arg in args:
        try:
            value = int(arg)
        except ValueError:
            continue
        if value >= 0:
            numbers.append(value)

    if len(numbers) != 3:
        print("Invalid arguments. Using default configuration.")
        return None

    return BoardConfig(width=numbers[0], height=numbers[1], count=numbers[2])


def positional_args(argv: Sequence[str]) -> List[str]:
    flags = set(HELP_FLAGS) | {PLAIN_FLAG}
    return [arg for arg in argv if arg.strip().lower() not in flags][:3]


def resolve_config(argv: Sequence[str], environ: Optional[Mapping[str, str]] = None) -> BoardConfig:
    env = os.environ if environ is None else environ
    args = positional_args(argv)
    if not args:
        env_value = env.get(CONFIG_ENV)
        if not env_value:
            return BoardConfig()
        args = env_value.split()
    return parse_args(args) or BoardConfig()


def run(game: Game, terminal) -> Game:
    """Drive ``game`` with keys from ``terminal`` until quit or game over.

    Returns the game that was being played when the loop ended, which is a
    fresh one if the player reset along the way.
    """

    def read_intent() -> Optional[Keypress]:
        key = terminal.read_key()
        if key is None:
            return Keypress.QUIT
        return classify_key(key)

    terminal.show(game.board, game.score)
    while True:
        result = game.play_turn(read_intent)
        if result is GameResult.EXIT:
            break
        if result is GameResult.RESET:
            game = game.reset()
            terminal.show(game.board, game.score)
            continue

        terminal.show(game.board, game.score, RESULT_MESSAGES[result])
        if result is GameResult.GAME_OVER:
            break
    return game


def _use_plain(argv: Sequence[str]) -> bool:
    if PLAIN_FLAG in argv:
        return True
    return not (sys.stdin.isatty() and sys.stdout.isatty())


def main(argv: Optional[Sequence[str]] = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    if any(arg.strip().lower() in HELP_FLAGS for arg in argv):
        print_usage()
        return 0

    config = resolve_config(argv)
    try:
        game = Game.new_game(config)
    except BoardConfigError as exc:
        print(f"Invalid board configuration {config.width} {config.height} {config.count}: {exc}", file=sys.stderr)
        return 1

    if _use_plain(argv):
        game = run(game, PlainTerminal())
    else:
        os.environ.setdefault("ESCDELAY", "25")
        game = curses.wrapper(lambda stdscr: run(game, CursesTerminal(stdscr)))

    print(f"Final score: {game.score}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
