"""
Screen states of the application.

Screen is a closed set: every ScreenKind must have a key handler in the
navigator and a view builder in the snapshot code (the tests check both).
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ScreenKind(str, Enum):
    HOME = "home"
    SESSION_LIST = "session_list"
    SESSION_DETAIL = "session_detail"
    SESSION_CREATE = "session_create"
    SESSION_EDIT = "session_edit"
    SESSION_DELETE = "session_delete"
    TRAINING_CONTENT_CREATE = "training_content_create"
    TRAINING_CONTENT_EDIT = "training_content_edit"
    TRAINING_CONTENT_DELETE = "training_content_delete"
    HELP = "help"


FORM_SCREENS = frozenset({
    ScreenKind.SESSION_CREATE,
    ScreenKind.SESSION_EDIT,
    ScreenKind.TRAINING_CONTENT_CREATE,
    ScreenKind.TRAINING_CONTENT_EDIT,
})

CONFIRM_SCREENS = frozenset({
    ScreenKind.SESSION_DELETE,
    ScreenKind.TRAINING_CONTENT_DELETE,
})

# Screens only a coach can ever reach.
COACH_SCREENS = FORM_SCREENS | CONFIRM_SCREENS

# Screens whose variant carries an id, and what that id refers to.
TARGETS = {
    ScreenKind.SESSION_DETAIL: "session",
    ScreenKind.SESSION_EDIT: "session",
    ScreenKind.SESSION_DELETE: "session",
    ScreenKind.TRAINING_CONTENT_CREATE: "session",
    ScreenKind.TRAINING_CONTENT_EDIT: "training_content",
    ScreenKind.TRAINING_CONTENT_DELETE: "training_content",
}


@dataclass(frozen=True)
class Screen:
    kind: ScreenKind
    target_id: Optional[int] = None

    def __post_init__(self):
        needs_id = self.kind in TARGETS
        if needs_id and self.target_id is None:
            raise ValueError(f"{self.kind.value} needs a {TARGETS[self.kind]} id")
        if not needs_id and self.target_id is not None:
            raise ValueError(f"{self.kind.value} takes no id")

    @property
    def is_form(self) -> bool:
        return self.kind in FORM_SCREENS

    @property
    def is_confirmation(self) -> bool:
        return self.kind in CONFIRM_SCREENS

    # Constructors, one per variant.

    @classmethod
    def home(cls) -> "Screen":
        return cls(ScreenKind.HOME)

    @classmethod
    def session_list(cls) -> "Screen":
        return cls(ScreenKind.SESSION_LIST)

    @classmethod
    def session_detail(cls, session_id: int) -> "Screen":
        return cls(ScreenKind.SESSION_DETAIL, session_id)

    @classmethod
    def session_create(cls) -> "Screen":
        return cls(ScreenKind.SESSION_CREATE)

    @classmethod
    def session_edit(cls, session_id: int) -> "Screen":
        return cls(ScreenKind.SESSION_EDIT, session_id)

    @classmethod
    def session_delete(cls, session_id: int) -> "Screen":
        return cls(ScreenKind.SESSION_DELETE, session_id)

    @classmethod
    def training_content_create(cls, session_id: int) -> "Screen":
        return cls(ScreenKind.TRAINING_CONTENT_CREATE, session_id)

    @classmethod
    def training_content_edit(cls, content_id: int) -> "Screen":
        return cls(ScreenKind.TRAINING_CONTENT_EDIT, content_id)

    @classmethod
    def training_content_delete(cls, content_id: int) -> "Screen":
        return cls(ScreenKind.TRAINING_CONTENT_DELETE, content_id)

    @classmethod
    def help(cls) -> "Screen":
        return cls(ScreenKind.HELP)
