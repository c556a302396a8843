"""
curses driver.

Reads one key at a time, turns it into a KeyEvent, hands it to the
navigator and redraws from a fresh snapshot. All drawing happens here.
"""
import curses
import logging
import os
from typing import Optional, Union

from courtside.models import User
from courtside.services.form_engine import FieldKind
from courtside.services.keys import KeyCode, KeyEvent
from courtside.services.navigation import ScreenKind
from courtside.services.navigator import AppState, Navigator
from courtside.services.snapshot import RenderSnapshot, snapshot

logger = logging.getLogger(__name__)

CHAR_KEYS = {
    "\n": KeyCode.ENTER,
    "\r": KeyCode.ENTER,
    "\x1b": KeyCode.ESC,
    "\t": KeyCode.TAB,
    "\x7f": KeyCode.BACKSPACE,
    "\b": KeyCode.BACKSPACE,
}

SPECIAL_KEYS = {
    curses.KEY_UP: KeyCode.UP,
    curses.KEY_DOWN: KeyCode.DOWN,
    curses.KEY_LEFT: KeyCode.LEFT,
    curses.KEY_RIGHT: KeyCode.RIGHT,
    curses.KEY_BTAB: KeyCode.BACKTAB,
    curses.KEY_BACKSPACE: KeyCode.BACKSPACE,
    curses.KEY_ENTER: KeyCode.ENTER,
    curses.KEY_F1: KeyCode.F1,
}


def decode_key(raw: Union[str, int]) -> Optional[KeyEvent]:
    """
    Translate what get_wch() returned into a KeyEvent.

    curses only reports presses, so every event is a PRESS. Keys the
    application has no use for (resize, mouse, other function keys) map
    to None.
    """
    if isinstance(raw, str):
        if raw in CHAR_KEYS:
            return KeyEvent.of(CHAR_KEYS[raw])
        if len(raw) == 1 and raw.isprintable():
            return KeyEvent.of_char(raw)
        return None
    code = SPECIAL_KEYS.get(raw)
    return KeyEvent.of(code) if code is not None else None


class Painter:
    """Line-by-line writer that clips to the window."""

    def __init__(self, window):
        self.window = window
        self.height, self.width = window.getmaxyx()
        self.row = 0

    def line(self, text: str = "", attr: int = curses.A_NORMAL) -> None:
        if self.row >= self.height or self.width <= 1:
            return
        self.window.addnstr(self.row, 0, text, self.width - 1, attr)
        self.row += 1

    def at(self, row: int, text: str, attr: int = curses.A_NORMAL) -> None:
        if 0 <= row < self.height and self.width > 1:
            self.window.addnstr(row, 0, text, self.width - 1, attr)


def draw(window, snap: RenderSnapshot) -> None:
    window.erase()
    painter = Painter(window)
    painter.line(f" Courtside | {snap.title}", curses.A_BOLD)
    painter.line()

    # status and footer take the last two rows
    body_rows = max(0, painter.height - painter.row - 2)

    if snap.kind is ScreenKind.HELP:
        for text in snap.body[snap.scroll:snap.scroll + body_rows]:
            painter.line(text)
    else:
        for text in snap.body[:body_rows]:
            painter.line(text)
        if snap.rows:
            painter.line()
            for row in snap.rows[:max(0, painter.height - painter.row - 2)]:
                marker = "> " if row.selected else "  "
                painter.line(marker + row.text, curses.A_REVERSE if row.selected else curses.A_NORMAL)
        for f in snap.fields:
            value = f.value
            if f.kind is FieldKind.ENUM:
                value = f"< {value} >"
            elif f.focused:
                value += "_"
            attr = curses.A_REVERSE if f.focused else curses.A_NORMAL
            painter.line(f"{f.label}:", curses.A_BOLD if f.focused else curses.A_NORMAL)
            painter.line(f"  {value}", attr)

    if snap.status_message:
        painter.at(painter.height - 2, f" {snap.status_message}", curses.A_BOLD)
    footer = "  ".join(f"{keys} {label}" for keys, label in snap.footer)
    painter.at(painter.height - 1, f" {footer}", curses.A_DIM)
    window.refresh()


def _loop(window, navigator: Navigator, state: AppState, user: User) -> None:
    try:
        curses.curs_set(0)
    except curses.error:
        logger.debug("Terminal does not support hiding the cursor")
    window.keypad(True)

    while not state.should_quit:
        draw(window, snapshot(state, user))
        raw = window.get_wch()
        event = decode_key(raw)
        if event is not None:
            navigator.handle_key(state, event)


def run(navigator: Navigator, state: AppState, user: User) -> None:
    """Take over the terminal until the user quits. The terminal is restored on exit."""
    # Esc would otherwise wait a full second for an escape sequence.
    os.environ.setdefault("ESCDELAY", "25")
    logger.info(f"Starting terminal UI for user {user.username}")
    curses.wrapper(_loop, navigator, state, user)
    logger.info("Terminal UI closed")
