"""Translate raw key input (curses key codes or characters) into move intents."""

import curses
from typing import Dict, Optional, Union

from game_state import Keypress

ESCAPE = "\x1b"

CHAR_KEYS: Dict[str, Keypress] = {
    "w": Keypress.UP,
    "s": Keypress.DOWN,
    "a": Keypress.LEFT,
    "d": Keypress.RIGHT,
    "r": Keypress.RESET,
    "q": Keypress.QUIT,
    ESCAPE: Keypress.QUIT,
}

# ANSI cursor sequences, in both the CSI and SS3 forms terminals send.
ESCAPE_SEQUENCES: Dict[str, Keypress] = {
    "\x1b[A": Keypress.UP,
    "\x1b[B": Keypress.DOWN,
    "\x1b[C": Keypress.RIGHT,
    "\x1b[D": Keypress.LEFT,
    "\x1bOA": Keypress.UP,
    "\x1bOB": Keypress.DOWN,
    "\x1bOC": Keypress.RIGHT,
    "\x1bOD": Keypress.LEFT,
}

CURSES_KEYS: Dict[int, Keypress] = {
    curses.KEY_UP: Keypress.UP,
    curses.KEY_DOWN: Keypress.DOWN,
    curses.KEY_LEFT: Keypress.LEFT,
    curses.KEY_RIGHT: Keypress.RIGHT,
}


def classify_key(key: Union[int, str, None]) -> Optional[Keypress]:
    """Return the intent for ``key`` or None when the key means nothing to the game."""
    if key is None:
        return None
    if isinstance(key, int):
        if key in CURSES_KEYS:
            return CURSES_KEYS[key]
        if 0 <= key < 256:
            return CHAR_KEYS.get(chr(key).lower())
        return None
    if key in ESCAPE_SEQUENCES:
        return ESCAPE_SEQUENCES[key]
    if len(key) != 1:
        return None
    return CHAR_KEYS.get(key.lower())


__all__ = ["classify_key"]
