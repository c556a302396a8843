"""
Discrete key events as the engine sees them.

The terminal driver translates whatever the platform delivers into
KeyEvent. Only PRESS events are acted on.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class KeyCode(str, Enum):
    CHAR = "char"
    ENTER = "enter"
    ESC = "esc"
    TAB = "tab"
    BACKTAB = "backtab"  # shift+tab
    BACKSPACE = "backspace"
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    F1 = "f1"


class KeyEventKind(str, Enum):
    PRESS = "press"
    REPEAT = "repeat"
    RELEASE = "release"


@dataclass(frozen=True)
class KeyEvent:
    code: KeyCode
    char: Optional[str] = None
    kind: KeyEventKind = KeyEventKind.PRESS

    def __post_init__(self):
        if self.code is KeyCode.CHAR and (self.char is None or len(self.char) != 1):
            raise ValueError("CHAR events carry exactly one character")

    @classmethod
    def of_char(cls, ch: str) -> "KeyEvent":
        return cls(KeyCode.CHAR, ch)

    @classmethod
    def of(cls, code: KeyCode) -> "KeyEvent":
        return cls(code)

    @property
    def is_press(self) -> bool:
        return self.kind is KeyEventKind.PRESS
