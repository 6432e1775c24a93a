"""Terminal entry point: the input loop of the music player."""

from __future__ import annotations

import argparse
import curses
import os
from typing import Any

from .app import Action, AnyAction, App, InputChar, InputMode
from .player import Player
from .ui import GAUGE_COLOR_PAIR, draw

TICK_MS = 1000

_ENTER_KEYS = frozenset({"\n", "\r", curses.KEY_ENTER})
_BACKSPACE_KEYS = frozenset({"\x7f", "\b", curses.KEY_BACKSPACE})
_ESCAPE = "\x1b"

_NORMAL_KEYS: dict[Any, Action] = {
    "/": Action.ENTER_SEARCH,
    "q": Action.QUIT,
    "j": Action.DOWN,
    curses.KEY_DOWN: Action.DOWN,
    "k": Action.UP,
    curses.KEY_UP: Action.UP,
    "1": Action.SWITCH_QUEUE_VIEW,
    "2": Action.SWITCH_RESULT_VIEW,
    "p": Action.TOGGLE_PAUSE,
    " ": Action.TOGGLE_PAUSE,
    "f": Action.SEEK_FORWARD,
    curses.KEY_RIGHT: Action.SEEK_FORWARD,
    "b": Action.SEEK_BACKWARD,
    curses.KEY_LEFT: Action.SEEK_BACKWARD,
}


def key_to_action(mode: InputMode, key: str | int) -> AnyAction:
    """Map a key read by curses to an action for the given input mode."""
    if key in _ENTER_KEYS:
        return Action.SUBMIT_SEARCH
    if mode is InputMode.SEARCH:
        if key == _ESCAPE:
            return Action.EXIT_SEARCH
        if key in _BACKSPACE_KEYS:
            return Action.BACKSPACE
        if isinstance(key, str) and len(key) == 1 and key.isprintable():
            return InputChar(key)
        return Action.NONE
    return _NORMAL_KEYS.get(key, Action.NONE)


def _setup_colors() -> None:
    try:
        curses.start_color()
        curses.use_default_colors()
        curses.init_pair(GAUGE_COLOR_PAIR, curses.COLOR_BLUE, -1)
    except curses.error:
        pass


def run(stdscr: Any, app: App) -> None:
    """Draw and react to keys until the user quits; tick once a second otherwise."""
    _setup_colors()
    stdscr.timeout(TICK_MS)
    while True:
        app.process_events()
        draw(stdscr, app)
        try:
            key = stdscr.get_wch()
        except curses.error:
            app.handle_action(Action.TICK)
            continue
        if key == curses.KEY_RESIZE:
            continue
        if app.handle_action(key_to_action(app.input_mode, key)):
            return


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="music-tui", description="Search for songs and play them in the terminal."
    )
    parser.parse_args(argv)
    os.environ.setdefault("ESCDELAY", "25")
    with Player() as player:
        curses.wrapper(run, App(player=player))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())