"""
Role capability filter.

(screen, role) -> set of enabled actions. The same table gates key
handling in the navigator and produces the contextual help and footer,
so role checks live here and nowhere else.

Coach: create/edit/delete sessions and manage training content.
Player: subscribe/unsubscribe, toggle the list filter, mark complete.
Home, help and list navigation are available to both.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, List, Optional, Tuple

from courtside.models import UserRole
from courtside.services.keys import KeyCode, KeyEvent
from courtside.services.navigation import COACH_SCREENS, ScreenKind


class Action(str, Enum):
    # global
    QUIT = "quit"
    GO_HOME = "go_home"
    GO_SESSIONS = "go_sessions"
    HELP = "help"
    MOVE_UP = "move_up"
    MOVE_DOWN = "move_down"
    SELECT = "select"
    # coach
    CREATE_SESSION = "create_session"
    EDIT_SESSION = "edit_session"
    DELETE_SESSION = "delete_session"
    ADD_CONTENT = "add_content"
    EDIT_CONTENT = "edit_content"
    DELETE_CONTENT = "delete_content"
    # player
    TOGGLE_SUBSCRIPTION = "toggle_subscription"
    TOGGLE_FILTER = "toggle_filter"
    MARK_COMPLETE = "mark_complete"
    # confirmation
    CONFIRM = "confirm"
    CANCEL = "cancel"
    # forms
    NEXT_FIELD = "next_field"
    PREV_FIELD = "prev_field"
    CYCLE_NEXT = "cycle_next"
    CYCLE_PREV = "cycle_prev"
    DELETE_CHAR = "delete_char"
    INPUT_CHAR = "input_char"
    SUBMIT = "submit"
    # help screen
    CLOSE_HELP = "close_help"
    SCROLL_UP = "scroll_up"
    SCROLL_DOWN = "scroll_down"
    PAGE_DOWN = "page_down"
    PAGE_UP = "page_up"


@dataclass(frozen=True)
class Binding:
    code: KeyCode
    char: Optional[str] = None
    label: str = ""

    def matches(self, event: KeyEvent) -> bool:
        if event.code is not self.code:
            return False
        if self.char is None:
            return True
        # letter commands ignore case, like the original q/Q handling
        return event.char is not None and event.char.lower() == self.char


def _char(ch: str, label: Optional[str] = None) -> Binding:
    return Binding(KeyCode.CHAR, ch, label or f"[{ch}]")


def _key(code: KeyCode, label: str) -> Binding:
    return Binding(code, None, label)


ANY_CHAR = Binding(KeyCode.CHAR, None, "[text]")

HELP_BINDINGS = [(_char("?"), Action.HELP), (_key(KeyCode.F1, "[F1]"), Action.HELP)]
HOME_BINDINGS = [
    (_char("1"), Action.GO_HOME),
    (_char("q"), Action.GO_HOME),
    (_key(KeyCode.ESC, "[Esc]"), Action.GO_HOME),
]
LIST_NAV_BINDINGS = [
    (_key(KeyCode.UP, "[↑]"), Action.MOVE_UP),
    (_char("k"), Action.MOVE_UP),
    (_key(KeyCode.DOWN, "[↓]"), Action.MOVE_DOWN),
    (_char("j"), Action.MOVE_DOWN),
]

KEYMAPS: Dict[ScreenKind, List[Tuple[Binding, Action]]] = {
    ScreenKind.HOME: [
        (_char("1"), Action.GO_HOME),
        (_char("2"), Action.GO_SESSIONS),
        (_char("q"), Action.QUIT),
        (_key(KeyCode.ESC, "[Esc]"), Action.QUIT),
        *HELP_BINDINGS,
    ],
    ScreenKind.SESSION_LIST: [
        (_char("c"), Action.CREATE_SESSION),
        (_char("e"), Action.EDIT_SESSION),
        (_char("d"), Action.DELETE_SESSION),
        (_char("s"), Action.TOGGLE_SUBSCRIPTION),
        (_char("f"), Action.TOGGLE_FILTER),
        *LIST_NAV_BINDINGS,
        (_key(KeyCode.ENTER, "[Enter]"), Action.SELECT),
        (_char("2"), Action.GO_SESSIONS),
        *HOME_BINDINGS,
        *HELP_BINDINGS,
    ],
    ScreenKind.SESSION_DETAIL: [
        (_char("e"), Action.EDIT_SESSION),
        (_char("d"), Action.DELETE_SESSION),
        (_char("t"), Action.ADD_CONTENT),
        (_char("r"), Action.EDIT_CONTENT),
        (_char("x"), Action.DELETE_CONTENT),
        (_char("s"), Action.TOGGLE_SUBSCRIPTION),
        (_char("m"), Action.MARK_COMPLETE),
        *LIST_NAV_BINDINGS,
        (_char("2"), Action.GO_SESSIONS),
        *HOME_BINDINGS,
        *HELP_BINDINGS,
    ],
    ScreenKind.HELP: [
        (_char("q"), Action.CLOSE_HELP),
        (_key(KeyCode.ESC, "[Esc]"), Action.CLOSE_HELP),
        (_key(KeyCode.UP, "[↑]"), Action.SCROLL_UP),
        (_char("k"), Action.SCROLL_UP),
        (_key(KeyCode.DOWN, "[↓]"), Action.SCROLL_DOWN),
        (_char("j"), Action.SCROLL_DOWN),
        (_char(" ", "[Space]"), Action.PAGE_DOWN),
        (_char("b"), Action.PAGE_UP),
    ],
}

CONFIRM_KEYMAP = [
    (_char("y"), Action.CONFIRM),
    (_char("n"), Action.CANCEL),
    (_key(KeyCode.ESC, "[Esc]"), Action.CANCEL),
    *HELP_BINDINGS,
]

# Forms capture every printable key, so '?' is text there and only F1 opens help.
FORM_KEYMAP = [
    (_key(KeyCode.TAB, "[Tab]"), Action.NEXT_FIELD),
    (_key(KeyCode.DOWN, "[↓]"), Action.NEXT_FIELD),
    (_key(KeyCode.BACKTAB, "[Shift+Tab]"), Action.PREV_FIELD),
    (_key(KeyCode.UP, "[↑]"), Action.PREV_FIELD),
    (_key(KeyCode.RIGHT, "[→]"), Action.CYCLE_NEXT),
    (_key(KeyCode.LEFT, "[←]"), Action.CYCLE_PREV),
    (_key(KeyCode.BACKSPACE, "[Backspace]"), Action.DELETE_CHAR),
    (_key(KeyCode.ENTER, "[Enter]"), Action.SUBMIT),
    (_key(KeyCode.ESC, "[Esc]"), Action.CANCEL),
    (_key(KeyCode.F1, "[F1]"), Action.HELP),
    (ANY_CHAR, Action.INPUT_CHAR),
]

for _kind in (ScreenKind.SESSION_DELETE, ScreenKind.TRAINING_CONTENT_DELETE):
    KEYMAPS[_kind] = CONFIRM_KEYMAP
for _kind in (
    ScreenKind.SESSION_CREATE,
    ScreenKind.SESSION_EDIT,
    ScreenKind.TRAINING_CONTENT_CREATE,
    ScreenKind.TRAINING_CONTENT_EDIT,
):
    KEYMAPS[_kind] = FORM_KEYMAP

FORM_ACTIONS = frozenset({
    Action.NEXT_FIELD, Action.PREV_FIELD, Action.CYCLE_NEXT, Action.CYCLE_PREV,
    Action.DELETE_CHAR, Action.INPUT_CHAR, Action.SUBMIT, Action.CANCEL, Action.HELP,
})

SHARED: Dict[ScreenKind, FrozenSet[Action]] = {
    ScreenKind.HOME: frozenset({Action.QUIT, Action.GO_HOME, Action.GO_SESSIONS, Action.HELP}),
    ScreenKind.SESSION_LIST: frozenset({
        Action.GO_HOME, Action.GO_SESSIONS, Action.HELP,
        Action.MOVE_UP, Action.MOVE_DOWN, Action.SELECT,
    }),
    ScreenKind.SESSION_DETAIL: frozenset({
        Action.GO_HOME, Action.GO_SESSIONS, Action.HELP,
        Action.MOVE_UP, Action.MOVE_DOWN,
    }),
    ScreenKind.SESSION_CREATE: FORM_ACTIONS,
    ScreenKind.SESSION_EDIT: FORM_ACTIONS,
    ScreenKind.SESSION_DELETE: frozenset({Action.CONFIRM, Action.CANCEL, Action.HELP}),
    ScreenKind.TRAINING_CONTENT_CREATE: FORM_ACTIONS,
    ScreenKind.TRAINING_CONTENT_EDIT: FORM_ACTIONS,
    ScreenKind.TRAINING_CONTENT_DELETE: frozenset({Action.CONFIRM, Action.CANCEL, Action.HELP}),
    ScreenKind.HELP: frozenset({
        Action.CLOSE_HELP, Action.SCROLL_UP, Action.SCROLL_DOWN,
        Action.PAGE_DOWN, Action.PAGE_UP,
    }),
}

ROLE_EXTRAS: Dict[Tuple[ScreenKind, UserRole], FrozenSet[Action]] = {
    (ScreenKind.SESSION_LIST, UserRole.COACH): frozenset({
        Action.CREATE_SESSION, Action.EDIT_SESSION, Action.DELETE_SESSION,
    }),
    (ScreenKind.SESSION_LIST, UserRole.PLAYER): frozenset({
        Action.TOGGLE_SUBSCRIPTION, Action.TOGGLE_FILTER,
    }),
    (ScreenKind.SESSION_DETAIL, UserRole.COACH): frozenset({
        Action.EDIT_SESSION, Action.DELETE_SESSION,
        Action.ADD_CONTENT, Action.EDIT_CONTENT, Action.DELETE_CONTENT,
    }),
    (ScreenKind.SESSION_DETAIL, UserRole.PLAYER): frozenset({
        Action.TOGGLE_SUBSCRIPTION, Action.MARK_COMPLETE,
    }),
}

DESCRIPTIONS: Dict[Action, str] = {
    Action.QUIT: "Quit",
    Action.GO_HOME: "Go to Home",
    Action.GO_SESSIONS: "Go to Session Management",
    Action.HELP: "Show this help",
    Action.MOVE_UP: "Previous item",
    Action.MOVE_DOWN: "Next item",
    Action.SELECT: "View session details",
    Action.CREATE_SESSION: "Create new session",
    Action.EDIT_SESSION: "Edit selected session",
    Action.DELETE_SESSION: "Delete selected session",
    Action.ADD_CONTENT: "Add training content",
    Action.EDIT_CONTENT: "Edit selected training content",
    Action.DELETE_CONTENT: "Delete selected training content",
    Action.TOGGLE_SUBSCRIPTION: "Subscribe/Unsubscribe",
    Action.TOGGLE_FILTER: "Toggle filter (My/All)",
    Action.MARK_COMPLETE: "Mark as completed",
    Action.CONFIRM: "Confirm deletion",
    Action.CANCEL: "Cancel",
    Action.NEXT_FIELD: "Next field",
    Action.PREV_FIELD: "Previous field",
    Action.CYCLE_NEXT: "Next option (choice fields)",
    Action.CYCLE_PREV: "Previous option (choice fields)",
    Action.DELETE_CHAR: "Delete last character",
    Action.INPUT_CHAR: "Type into the focused field",
    Action.SUBMIT: "Save",
    Action.CLOSE_HELP: "Close help",
    Action.SCROLL_UP: "Scroll up",
    Action.SCROLL_DOWN: "Scroll down",
    Action.PAGE_DOWN: "Page down",
    Action.PAGE_UP: "Page up",
}

SCREEN_DESCRIPTIONS: Dict[Tuple[ScreenKind, Action], str] = {
    (ScreenKind.SESSION_DETAIL, Action.EDIT_SESSION): "Edit this session",
    (ScreenKind.SESSION_DETAIL, Action.DELETE_SESSION): "Delete this session",
    (ScreenKind.SESSION_DETAIL, Action.GO_SESSIONS): "Back to Session List",
    (ScreenKind.SESSION_LIST, Action.GO_SESSIONS): "Reload sessions",
    (ScreenKind.SESSION_DELETE, Action.CANCEL): "Cancel deletion",
    (ScreenKind.TRAINING_CONTENT_DELETE, Action.CANCEL): "Cancel deletion",
}

# Short labels and priority for the footer (three or four commands).
FOOTER: Dict[ScreenKind, List[Tuple[Action, str]]] = {
    ScreenKind.HOME: [(Action.GO_SESSIONS, "Sessions"), (Action.HELP, "Help"), (Action.QUIT, "Quit")],
    ScreenKind.SESSION_LIST: [
        (Action.CREATE_SESSION, "Create"), (Action.EDIT_SESSION, "Edit"),
        (Action.DELETE_SESSION, "Delete"), (Action.TOGGLE_SUBSCRIPTION, "Subscribe"),
        (Action.TOGGLE_FILTER, "Filter"), (Action.SELECT, "View"), (Action.HELP, "Help"),
    ],
    ScreenKind.SESSION_DETAIL: [
        (Action.ADD_CONTENT, "Training"), (Action.EDIT_SESSION, "Edit"),
        (Action.MARK_COMPLETE, "Complete"), (Action.TOGGLE_SUBSCRIPTION, "Subscribe"),
        (Action.GO_SESSIONS, "Back"),
    ],
    ScreenKind.HELP: [(Action.CLOSE_HELP, "Close"), (Action.SCROLL_DOWN, "Scroll")],
}
for _kind in (ScreenKind.SESSION_DELETE, ScreenKind.TRAINING_CONTENT_DELETE):
    FOOTER[_kind] = [(Action.CONFIRM, "Delete"), (Action.CANCEL, "Cancel")]
FOOTER[ScreenKind.SESSION_CREATE] = [
    (Action.NEXT_FIELD, "Next"), (Action.SUBMIT, "Save"), (Action.CANCEL, "Cancel"),
]
FOOTER[ScreenKind.SESSION_EDIT] = FOOTER[ScreenKind.SESSION_CREATE]
FOOTER[ScreenKind.TRAINING_CONTENT_CREATE] = [
    (Action.NEXT_FIELD, "Next"), (Action.CYCLE_NEXT, "Content type"),
    (Action.SUBMIT, "Save"), (Action.CANCEL, "Cancel"),
]
FOOTER[ScreenKind.TRAINING_CONTENT_EDIT] = FOOTER[ScreenKind.TRAINING_CONTENT_CREATE]

FOOTER_SIZE = 4


def enabled_actions(kind: ScreenKind, role: UserRole) -> FrozenSet[Action]:
    role = UserRole(role)
    if role is not UserRole.COACH and kind in COACH_SCREENS:
        # unreachable for a player; leave a way out
        return frozenset({Action.CANCEL, Action.HELP})
    return SHARED[kind] | ROLE_EXTRAS.get((kind, role), frozenset())


def resolve_action(kind: ScreenKind, role: UserRole, event: KeyEvent) -> Optional[Action]:
    """The enabled action bound to this key on this screen, if any."""
    enabled = enabled_actions(kind, role)
    for binding, action in KEYMAPS[kind]:
        if action in enabled and binding.matches(event):
            return action
    return None


def describe(kind: ScreenKind, action: Action) -> str:
    return SCREEN_DESCRIPTIONS.get((kind, action), DESCRIPTIONS[action])


def key_labels(kind: ScreenKind, action: Action) -> str:
    return " ".join(b.label for b, a in KEYMAPS[kind] if a is action)


def commands_for(kind: ScreenKind, role: UserRole) -> List[Tuple[str, str]]:
    """(keys, description) for every enabled action, in keymap order."""
    enabled = enabled_actions(kind, role)
    seen = []
    for _, action in KEYMAPS[kind]:
        if action in enabled and action not in seen:
            seen.append(action)
    return [(key_labels(kind, action), describe(kind, action)) for action in seen]


def footer_for(kind: ScreenKind, role: UserRole) -> List[Tuple[str, str]]:
    enabled = enabled_actions(kind, role)
    entries = [
        (key_labels(kind, action).split(" ")[0], label)
        for action, label in FOOTER.get(kind, [])
        if action in enabled
    ]
    return entries[:FOOTER_SIZE]
