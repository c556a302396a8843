"""
Read-only render snapshot.

snapshot() builds everything a renderer needs from AppState without
touching the database or mutating the state. Layout is the renderer's job.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple

from courtside.models import TrainingContent, TrainingSession, User
from courtside.schemas import SessionView
from courtside.services.capabilities import footer_for
from courtside.services.form_engine import FieldKind
from courtside.services.help_text import HELP_LINES, format_commands
from courtside.services.navigation import ScreenKind
from courtside.services.navigator import AppState

DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M"
EMPTY = "-"


@dataclass(frozen=True)
class RowView:
    text: str
    selected: bool = False


@dataclass(frozen=True)
class FieldView:
    label: str
    value: str
    focused: bool
    kind: FieldKind


@dataclass(frozen=True)
class RenderSnapshot:
    kind: ScreenKind
    title: str
    body: Tuple[str, ...] = ()
    rows: Tuple[RowView, ...] = ()
    fields: Tuple[FieldView, ...] = ()
    footer: Tuple[Tuple[str, str], ...] = ()
    status_message: Optional[str] = None
    scroll: int = 0


def format_date(session: TrainingSession) -> str:
    return session.scheduled_date.strftime(DATE_FORMAT) if session.scheduled_date else EMPTY


def format_time(session: TrainingSession) -> str:
    return session.scheduled_time.strftime(TIME_FORMAT) if session.scheduled_time else EMPTY


def format_duration(minutes: Optional[int]) -> str:
    return f"{minutes} min" if minutes else EMPTY


def format_level(session: TrainingSession) -> str:
    return session.level.value.capitalize() if session.level else EMPTY


def session_row(view: SessionView, with_status: bool) -> str:
    s = view.session
    parts = [format_date(s), format_time(s), s.title, format_duration(s.duration_minutes), format_level(s)]
    if with_status:
        parts.append(view.status_label())
    return " | ".join(parts)


def content_row(content: TrainingContent) -> str:
    return (
        f"{content.order_index}. [{content.kind.value.capitalize()}] {content.title} "
        f"({format_duration(content.duration_minutes)})"
    )


# --- per-screen builders: (state, user) -> (title, body, rows) ---

Built = Tuple[str, Tuple[str, ...], Tuple[RowView, ...]]


def _home(state: AppState, user: User) -> Built:
    if user.is_coach():
        body = ("Welcome, Coach!",)
        menu = ("[1] Home", "[2] Manage Sessions")
    else:
        level = user.level.value.capitalize() if user.level else "Not set"
        body = (f"Welcome, {user.display_name}!", f"Skill level: {level}")
        if user.goals:
            body += (f"Goals: {user.goals}",)
        menu = ("[1] Home", "[2] My Sessions")
    return "Home", body, tuple(RowView(item, selected=(i == 0)) for i, item in enumerate(menu))


def _session_list(state: AppState, user: User) -> Built:
    if user.is_coach():
        title = "My Sessions"
    else:
        title = f"Sessions ({state.session_filter.label})"
    rows = tuple(
        RowView(session_row(v, with_status=user.is_player()), selected=(i == state.selected_index))
        for i, v in enumerate(state.views)
    )
    body = () if rows else ("No sessions found",)
    return title, body, rows


def _session_detail(state: AppState, user: User) -> Built:
    if state.detail is None:
        return "Session Details", ("Session not loaded",), ()
    view = state.detail.view
    s = view.session
    body = [
        f"Title: {s.title}",
        f"Description: {s.description or EMPTY}",
        f"Date: {format_date(s)}",
        f"Time: {format_time(s)}",
        f"Duration: {format_duration(s.duration_minutes)}",
        f"Skill Level: {format_level(s)}",
    ]
    if user.is_player():
        body.append(f"Status: {view.status_label()}")
    body.append("")
    body.append(f"Training Content ({len(state.detail.contents)} items):")
    if not state.detail.contents:
        body.append("No training content yet")
    body.append(f"Estimated duration: {state.detail.estimated_duration_minutes} minutes")
    rows = tuple(
        RowView(content_row(c), selected=(i == state.content_index))
        for i, c in enumerate(state.detail.contents)
    )
    return "Session Details", tuple(body), rows


def _form(title: str) -> Callable[[AppState, User], Built]:
    def build(state: AppState, user: User) -> Built:
        body = () if state.form is not None else ("Form is not open",)
        return title, body, ()
    return build


def _find_session_title(state: AppState, session_id: int) -> Optional[str]:
    if state.detail is not None and state.detail.view.session_id == session_id:
        return state.detail.view.session.title
    for view in state.views:
        if view.session_id == session_id:
            return view.session.title
    return None


def _session_delete(state: AppState, user: User) -> Built:
    title = _find_session_title(state, state.screen.target_id)
    body = ["Are you sure you want to delete this session?"]
    if title:
        body.append(f"  {title}")
    body += ["", "Its training content and subscriptions are removed too.", "[y] Delete   [n] Cancel"]
    return "Delete Session", tuple(body), ()


def _content_delete(state: AppState, user: User) -> Built:
    body = ["Are you sure you want to delete this training content?"]
    if state.detail is not None:
        for content in state.detail.contents:
            if content.id == state.screen.target_id:
                body.append(f"  {content.title}")
    body += ["", "[y] Delete   [n] Cancel"]
    return "Delete Training Content", tuple(body), ()


def _help(state: AppState, user: User) -> Built:
    body = []
    if state.help_origin is not None:
        body.append(f"COMMANDS ON THE {state.help_origin.value.replace('_', ' ').upper()} SCREEN:")
        body += [f"  {line}" for line in format_commands(state.help_origin, user.user_role)]
        body.append("")
    body += list(HELP_LINES)
    return "Help", tuple(body), ()


VIEW_BUILDERS: Dict[ScreenKind, Callable[[AppState, User], Built]] = {
    ScreenKind.HOME: _home,
    ScreenKind.SESSION_LIST: _session_list,
    ScreenKind.SESSION_DETAIL: _session_detail,
    ScreenKind.SESSION_CREATE: _form("Create Session"),
    ScreenKind.SESSION_EDIT: _form("Edit Session"),
    ScreenKind.SESSION_DELETE: _session_delete,
    ScreenKind.TRAINING_CONTENT_CREATE: _form("Add Training Content"),
    ScreenKind.TRAINING_CONTENT_EDIT: _form("Edit Training Content"),
    ScreenKind.TRAINING_CONTENT_DELETE: _content_delete,
    ScreenKind.HELP: _help,
}


def snapshot(state: AppState, user: User) -> RenderSnapshot:
    title, body, rows = VIEW_BUILDERS[state.screen.kind](state, user)
    fields: Tuple[FieldView, ...] = ()
    if state.screen.is_form and state.form is not None:
        fields = tuple(
            FieldView(
                label=f.label,
                value=f.display(),
                focused=(i == state.form.focus_index),
                kind=f.kind,
            )
            for i, f in enumerate(state.form.fields)
        )
    return RenderSnapshot(
        kind=state.screen.kind,
        title=title,
        body=body,
        rows=rows,
        fields=fields,
        footer=tuple(footer_for(state.screen.kind, user.user_role)),
        status_message=state.status_message,
        scroll=state.help_scroll if state.screen.kind is ScreenKind.HELP else 0,
    )
