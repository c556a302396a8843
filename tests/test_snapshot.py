"""
Tests for the render snapshot.

The snapshot is a pure read: building it twice gives the same result and
never changes the state.
"""
import pytest

from courtside.app import create_navigator
from courtside.services.form_engine import FieldKind
from courtside.services.help_text import HELP_LINES
from courtside.services.keys import KeyCode, KeyEvent
from courtside.services.navigation import Screen, ScreenKind
from courtside.services.navigator import AppState
from courtside.services.snapshot import VIEW_BUILDERS, snapshot

from conftest import content_fields, session_fields


def press(nav, state, *keys):
    for k in keys:
        nav.handle_key(state, KeyEvent.of(k) if isinstance(k, KeyCode) else KeyEvent.of_char(k))


@pytest.fixture
def coach_nav(db_session, coach):
    return create_navigator(db_session, coach)


@pytest.fixture
def player_nav(db_session, player):
    return create_navigator(db_session, player)


def test_every_screen_has_a_view_builder():
    assert set(VIEW_BUILDERS) == set(ScreenKind)


class TestHome:

    def test_coach_home(self, coach):
        snap = snapshot(AppState(), coach)
        assert snap.kind is ScreenKind.HOME
        assert snap.body == ("Welcome, Coach!",)
        assert [r.text for r in snap.rows] == ["[1] Home", "[2] Manage Sessions"]

    def test_player_home(self, player):
        snap = snapshot(AppState(), player)
        assert snap.body[0] == "Welcome, Alice!"
        assert "Skill level: Beginner" in snap.body
        assert "Goals: Improve serve and backhand" in snap.body
        assert [r.text for r in snap.rows] == ["[1] Home", "[2] My Sessions"]


class TestSessionList:

    def test_rows_and_selection(self, coach, coach_nav, coach_service):
        coach_service.create_session(session_fields("A"))
        coach_service.create_session(session_fields("B"))
        state = AppState()
        press(coach_nav, state, "2", "j")
        snap = snapshot(state, coach)
        assert snap.title == "My Sessions"
        assert [r.selected for r in snap.rows] == [False, True]
        assert snap.rows[0].text == "2026-11-02 | 09:30 | B | 60 min | Advanced"

    def test_player_rows_show_status_and_filter(self, player, player_nav, coach_service):
        coach_service.create_session(session_fields())
        state = AppState()
        press(player_nav, state, "2")
        snap = snapshot(state, player)
        assert snap.title == "Sessions (All Available)"
        assert snap.rows[0].text.endswith("| Not subscribed")

    def test_empty_list(self, player, player_nav):
        state = AppState()
        press(player_nav, state, "2")
        assert snapshot(state, player).body == ("No sessions found",)


class TestDetail:

    def test_player_detail(self, player, player_nav, coach_service, content_service):
        session_id = coach_service.create_session(session_fields(description="First serve focus"))
        content_service.create(session_id, content_fields("Toss", duration_minutes=10))
        content_service.create(session_id, content_fields("Serves", duration_minutes=30))
        state = AppState()
        press(player_nav, state, "2", KeyCode.ENTER, "s")
        snap = snapshot(state, player)
        assert "Title: Serve Clinic" in snap.body
        assert "Description: First serve focus" in snap.body
        assert "Status: Active" in snap.body
        assert "Estimated duration: 40 minutes" in snap.body
        assert [r.text for r in snap.rows] == [
            "1. [Drill] Toss (10 min)",
            "2. [Drill] Serves (30 min)",
        ]
        assert snap.status_message == "Subscribed to session"

    def test_coach_detail_has_no_status_line(self, coach, coach_nav, coach_service):
        coach_service.create_session(session_fields())
        state = AppState()
        press(coach_nav, state, "2", KeyCode.ENTER)
        snap = snapshot(state, coach)
        assert not any(line.startswith("Status:") for line in snap.body)
        assert "No training content yet" in snap.body


class TestForms:

    def test_form_fields(self, coach, coach_nav):
        state = AppState()
        press(coach_nav, state, "2", "c", "A", "c", "e", KeyCode.TAB)
        snap = snapshot(state, coach)
        assert snap.title == "Create Session"
        assert [f.label for f in snap.fields][:2] == ["Title", "Description"]
        assert snap.fields[0].value == "Ace"
        assert [f.focused for f in snap.fields] == [False, True, False, False, False, False]
        assert snap.fields[-1].kind is FieldKind.ENUM
        assert snap.fields[-1].value == "Beginner"

    def test_validation_message_in_status(self, coach, coach_nav):
        state = AppState()
        press(coach_nav, state, "2", "c", KeyCode.ENTER)
        assert snapshot(state, coach).status_message == "Title is required"


class TestConfirmationAndHelp:

    def test_delete_confirmation_names_session(self, coach, coach_nav, coach_service):
        coach_service.create_session(session_fields())
        state = AppState()
        press(coach_nav, state, "2", "d")
        snap = snapshot(state, coach)
        assert snap.title == "Delete Session"
        assert "  Serve Clinic" in snap.body

    def test_help_has_context_and_reference(self, player, player_nav):
        state = AppState()
        press(player_nav, state, "2", "?", " ")
        snap = snapshot(state, player)
        assert snap.body[0] == "COMMANDS ON THE SESSION LIST SCREEN:"
        assert any("Toggle filter (My/All)" in line for line in snap.body)
        assert not any("Create new session" in line for line in snap.body[:12])
        assert snap.body[-len(HELP_LINES):] == HELP_LINES
        assert snap.scroll == 10

    def test_scroll_only_on_help(self, player):
        state = AppState(screen=Screen.home(), help_scroll=5)
        assert snapshot(state, player).scroll == 0


def test_snapshot_does_not_mutate(coach, coach_nav, coach_service):
    coach_service.create_session(session_fields())
    state = AppState()
    press(coach_nav, state, "2", "j")
    before = (state.screen, list(state.views), state.selected_index, state.status_message)
    first = snapshot(state, coach)
    second = snapshot(state, coach)
    assert first == second
    assert (state.screen, list(state.views), state.selected_index, state.status_message) == before
