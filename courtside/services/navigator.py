"""
Screen navigator.

All mutable application state lives in one AppState value. handle_key()
is the only function that changes it: it ignores non-press events, asks
the capability filter which action the key means on the current screen
for this role, and dispatches to the handler for the screen kind.

Domain failures (CourtsideError) are written to the status slot and the
screen is left as it was. Anything else propagates to the caller.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from courtside.core.exceptions import CourtsideError
from courtside.models import TrainingContent, User
from courtside.schemas import SessionDetailView, SessionView
from courtside.services.capabilities import Action, resolve_action
from courtside.services.form_engine import Form
from courtside.services.forms import SessionForm, TrainingContentForm
from courtside.services.help_text import HELP_LINES
from courtside.services.keys import KeyEvent
from courtside.services.navigation import Screen, ScreenKind
from courtside.services.session_service import (
    COMPLETION_MESSAGES,
    TOGGLE_MESSAGES,
    SessionFilter,
    SessionService,
)
from courtside.services.training_content_service import TrainingContentService

logger = logging.getLogger(__name__)

HELP_PAGE_SIZE = 10


@dataclass
class AppState:
    screen: Screen = field(default_factory=Screen.home)
    views: List[SessionView] = field(default_factory=list)
    selected_index: int = 0
    session_filter: SessionFilter = SessionFilter.ALL_AVAILABLE
    detail: Optional[SessionDetailView] = None
    content_index: int = 0
    form: Optional[Form] = None
    parent_session_id: Optional[int] = None  # session a content form returns to
    help_origin: Optional[ScreenKind] = None
    help_scroll: int = 0
    status_message: Optional[str] = None
    should_quit: bool = False

    def selected_view(self) -> Optional[SessionView]:
        if 0 <= self.selected_index < len(self.views):
            return self.views[self.selected_index]
        return None

    def selected_content(self) -> Optional[TrainingContent]:
        if self.detail is None:
            return None
        if 0 <= self.content_index < len(self.detail.contents):
            return self.detail.contents[self.content_index]
        return None


Handler = Callable[[AppState, Action, KeyEvent], None]


def _clamp(index: int, length: int) -> int:
    if length <= 0:
        return 0
    return max(0, min(index, length - 1))


class Navigator:
    """Key handling for one signed-in user."""

    def __init__(
        self,
        user: User,
        session_service: SessionService,
        content_service: TrainingContentService,
    ):
        self.user = user
        self.sessions = session_service
        self.contents = content_service
        self._handlers: Dict[ScreenKind, Handler] = {
            ScreenKind.HOME: self._on_home,
            ScreenKind.SESSION_LIST: self._on_session_list,
            ScreenKind.SESSION_DETAIL: self._on_session_detail,
            ScreenKind.SESSION_CREATE: self._on_session_form,
            ScreenKind.SESSION_EDIT: self._on_session_form,
            ScreenKind.SESSION_DELETE: self._on_session_delete,
            ScreenKind.TRAINING_CONTENT_CREATE: self._on_content_form,
            ScreenKind.TRAINING_CONTENT_EDIT: self._on_content_form,
            ScreenKind.TRAINING_CONTENT_DELETE: self._on_content_delete,
            ScreenKind.HELP: self._on_help,
        }
        missing = set(ScreenKind) - set(self._handlers)
        if missing:
            raise RuntimeError(f"No key handler for screens: {sorted(k.value for k in missing)}")

    @property
    def role(self):
        return self.user.user_role

    def handle_key(self, state: AppState, event: KeyEvent) -> None:
        if not event.is_press:
            return
        action = resolve_action(state.screen.kind, self.role, event)
        if action is None:
            return

        state.status_message = None
        try:
            self._handlers[state.screen.kind](state, action, event)
        except CourtsideError as e:
            logger.warning(
                f"{action.value} on {state.screen.kind.value} failed: "
                f"{e.error_code} {e.detail}"
            )
            state.status_message = str(e)

    # --- transitions shared by several screens ---

    def go_home(self, state: AppState) -> None:
        state.screen = Screen.home()
        state.views = []
        state.selected_index = 0
        state.detail = None
        state.content_index = 0
        state.form = None
        state.parent_session_id = None

    def open_session_list(self, state: AppState) -> None:
        state.views = self.sessions.list_views(state.session_filter)
        state.selected_index = 0
        state.detail = None
        state.content_index = 0
        state.form = None
        state.parent_session_id = None
        state.screen = Screen.session_list()

    def open_session_detail(self, state: AppState, session_id: int) -> None:
        state.detail = self.sessions.load_detail(session_id)
        state.content_index = 0
        state.form = None
        state.parent_session_id = None
        state.screen = Screen.session_detail(session_id)

    def open_help(self, state: AppState) -> None:
        state.help_origin = state.screen.kind
        state.help_scroll = 0
        state.form = None
        state.screen = Screen.help()

    def _global(self, state: AppState, action: Action) -> bool:
        if action is Action.GO_HOME:
            self.go_home(state)
        elif action is Action.GO_SESSIONS:
            self.open_session_list(state)
        elif action is Action.HELP:
            self.open_help(state)
        else:
            return False
        return True

    # --- per-screen handlers ---

    def _on_home(self, state: AppState, action: Action, event: KeyEvent) -> None:
        if action is Action.QUIT:
            state.should_quit = True
            return
        self._global(state, action)

    def _on_session_list(self, state: AppState, action: Action, event: KeyEvent) -> None:
        if self._global(state, action):
            return
        if action is Action.MOVE_UP:
            state.selected_index = _clamp(state.selected_index - 1, len(state.views))
            return
        if action is Action.MOVE_DOWN:
            state.selected_index = _clamp(state.selected_index + 1, len(state.views))
            return
        if action is Action.CREATE_SESSION:
            state.form = SessionForm()
            state.screen = Screen.session_create()
            return
        if action is Action.TOGGLE_FILTER:
            state.session_filter = state.session_filter.toggle()
            self.open_session_list(state)
            state.status_message = f"Showing: {state.session_filter.label}"
            return

        view = state.selected_view()
        if view is None:
            state.status_message = "No session selected"
            return
        if action is Action.SELECT:
            self.open_session_detail(state, view.session_id)
        elif action is Action.EDIT_SESSION:
            self._start_session_edit(state, view.session_id)
        elif action is Action.DELETE_SESSION:
            state.screen = Screen.session_delete(view.session_id)
        elif action is Action.TOGGLE_SUBSCRIPTION:
            outcome = self.sessions.toggle_subscription(view)
            self.open_session_list(state)
            state.status_message = TOGGLE_MESSAGES[outcome]

    def _on_session_detail(self, state: AppState, action: Action, event: KeyEvent) -> None:
        if self._global(state, action):
            return
        session_id = state.screen.target_id
        contents = state.detail.contents if state.detail else []

        if action is Action.MOVE_UP:
            state.content_index = _clamp(state.content_index - 1, len(contents))
        elif action is Action.MOVE_DOWN:
            state.content_index = _clamp(state.content_index + 1, len(contents))
        elif action is Action.EDIT_SESSION:
            self._start_session_edit(state, session_id)
        elif action is Action.DELETE_SESSION:
            state.screen = Screen.session_delete(session_id)
        elif action is Action.ADD_CONTENT:
            state.form = TrainingContentForm()
            state.parent_session_id = session_id
            state.screen = Screen.training_content_create(session_id)
        elif action in (Action.EDIT_CONTENT, Action.DELETE_CONTENT):
            content = state.selected_content()
            if content is None:
                state.status_message = "No training content selected"
                return
            state.parent_session_id = session_id
            if action is Action.EDIT_CONTENT:
                state.form = TrainingContentForm.from_content(self.contents.get(content.id))
                state.screen = Screen.training_content_edit(content.id)
            else:
                state.screen = Screen.training_content_delete(content.id)
        elif action is Action.TOGGLE_SUBSCRIPTION:
            outcome = self.sessions.toggle_subscription(state.detail.view)
            self.open_session_detail(state, session_id)
            state.status_message = TOGGLE_MESSAGES[outcome]
        elif action is Action.MARK_COMPLETE:
            outcome = self.sessions.mark_complete(session_id)
            self.open_session_detail(state, session_id)
            state.status_message = COMPLETION_MESSAGES[outcome]

    def _start_session_edit(self, state: AppState, session_id: int) -> None:
        view = self.sessions.get_view(session_id)
        state.form = SessionForm.from_session(view.session)
        state.screen = Screen.session_edit(session_id)

    def _edit_form(self, state: AppState, action: Action, event: KeyEvent) -> bool:
        """Route field-editing actions to the form. False for submit/cancel/help."""
        form = state.form
        if action is Action.HELP:
            self.open_help(state)
        elif form is None:
            return False
        elif action is Action.INPUT_CHAR:
            form.insert_char(event.char)
        elif action is Action.DELETE_CHAR:
            form.delete_char()
        elif action is Action.NEXT_FIELD:
            form.next_field()
        elif action is Action.PREV_FIELD:
            form.prev_field()
        elif action is Action.CYCLE_NEXT:
            form.cycle_next()
        elif action is Action.CYCLE_PREV:
            form.cycle_prev()
        else:
            return False
        return True

    def _on_session_form(self, state: AppState, action: Action, event: KeyEvent) -> None:
        if self._edit_form(state, action, event):
            return
        if action is Action.CANCEL or state.form is None:
            self.open_session_list(state)
            return
        if action is not Action.SUBMIT:
            return

        fields = state.form.to_fields()
        if state.screen.kind is ScreenKind.SESSION_CREATE:
            self.sessions.create_session(fields)
            message = "Session created successfully"
        else:
            self.sessions.update_session(state.screen.target_id, fields)
            message = "Session updated successfully"
        self.open_session_list(state)
        state.status_message = message

    def _on_content_form(self, state: AppState, action: Action, event: KeyEvent) -> None:
        if self._edit_form(state, action, event):
            return
        if action is Action.SUBMIT and state.form is not None:
            fields = state.form.to_fields()
            if state.screen.kind is ScreenKind.TRAINING_CONTENT_CREATE:
                self.contents.create(state.screen.target_id, fields)
                message = "Training content added"
            else:
                self.contents.update(state.screen.target_id, fields)
                message = "Training content updated"
        elif action is Action.CANCEL or state.form is None:
            message = None
        else:
            return
        self._return_to_parent(state)
        state.status_message = message

    def _return_to_parent(self, state: AppState) -> None:
        session_id = state.parent_session_id
        if session_id is None and state.screen.kind is ScreenKind.TRAINING_CONTENT_CREATE:
            session_id = state.screen.target_id
        if session_id is None:
            self.open_session_list(state)
        else:
            self.open_session_detail(state, session_id)

    def _on_session_delete(self, state: AppState, action: Action, event: KeyEvent) -> None:
        if action is Action.HELP:
            self.open_help(state)
        elif action is Action.CONFIRM:
            self.sessions.delete_session(state.screen.target_id)
            self.open_session_list(state)
            state.status_message = "Session deleted"
        elif action is Action.CANCEL:
            self.open_session_list(state)

    def _on_content_delete(self, state: AppState, action: Action, event: KeyEvent) -> None:
        if action is Action.HELP:
            self.open_help(state)
        elif action is Action.CONFIRM:
            self.contents.delete(state.screen.target_id)
            self.open_session_list(state)
            state.status_message = "Training content deleted"
        elif action is Action.CANCEL:
            self.open_session_list(state)

    def _on_help(self, state: AppState, action: Action, event: KeyEvent) -> None:
        last = len(HELP_LINES) - 1
        if action is Action.CLOSE_HELP:
            state.help_origin = None
            state.help_scroll = 0
            self.go_home(state)
        elif action is Action.SCROLL_UP:
            state.help_scroll = _clamp(state.help_scroll - 1, last + 1)
        elif action is Action.SCROLL_DOWN:
            state.help_scroll = _clamp(state.help_scroll + 1, last + 1)
        elif action is Action.PAGE_UP:
            state.help_scroll = _clamp(state.help_scroll - HELP_PAGE_SIZE, last + 1)
        elif action is Action.PAGE_DOWN:
            state.help_scroll = _clamp(state.help_scroll + HELP_PAGE_SIZE, last + 1)
