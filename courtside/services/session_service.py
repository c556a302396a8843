"""
Session & subscription domain logic.

Rules:
- A coach's list is the sessions they created, newest-scheduled-first.
- A player's list is every session, each paired with the player's own
  subscription, then narrowed by the active SessionFilter.
- Subscribe/unsubscribe toggles off the view the player is looking at.
  Unsubscribing deletes the row; there is no soft-cancel.
- Completion is one-way and idempotent.

Ownership is not re-checked here. Coach-only actions are gated by the
capability filter before they reach this module.
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import List

from courtside.core.exceptions import ConflictError, NotFoundError
from courtside.models import User
from courtside.repositories import (
    SessionRepository,
    SubscriptionRepository,
    TrainingContentRepository,
)
from courtside.schemas import SessionDetailView, SessionFields, SessionView

logger = logging.getLogger(__name__)


class SessionFilter(str, Enum):
    """Player-facing two-state toggle, kept only for the current run."""
    MY_SUBSCRIPTIONS = "my_subscriptions"
    ALL_AVAILABLE = "all_available"

    def toggle(self) -> "SessionFilter":
        if self is SessionFilter.MY_SUBSCRIPTIONS:
            return SessionFilter.ALL_AVAILABLE
        return SessionFilter.MY_SUBSCRIPTIONS

    @property
    def label(self) -> str:
        if self is SessionFilter.MY_SUBSCRIPTIONS:
            return "My Subscriptions"
        return "All Available"


class ToggleOutcome(str, Enum):
    SUBSCRIBED = "subscribed"
    UNSUBSCRIBED = "unsubscribed"
    UNCHANGED = "unchanged"  # the view was stale


class CompletionOutcome(str, Enum):
    COMPLETED = "completed"
    ALREADY_COMPLETE = "already_complete"
    NOT_SUBSCRIBED = "not_subscribed"


TOGGLE_MESSAGES = {
    ToggleOutcome.SUBSCRIBED: "Subscribed to session",
    ToggleOutcome.UNSUBSCRIBED: "Unsubscribed from session",
    ToggleOutcome.UNCHANGED: "Session list was out of date, reloaded",
}

COMPLETION_MESSAGES = {
    CompletionOutcome.COMPLETED: "Session marked as complete!",
    CompletionOutcome.ALREADY_COMPLETE: "Session already marked as complete",
    CompletionOutcome.NOT_SUBSCRIBED: "You must subscribe to this session first",
}


def apply_filter(views: List[SessionView], session_filter: SessionFilter) -> List[SessionView]:
    if session_filter is SessionFilter.MY_SUBSCRIPTIONS:
        return [v for v in views if v.subscription is not None]
    return list(views)


class SessionService:
    """Session listing, CRUD and the player's subscription actions for one user."""

    def __init__(
        self,
        user: User,
        sessions: SessionRepository,
        subscriptions: SubscriptionRepository,
        contents: TrainingContentRepository,
    ):
        self.user = user
        self.sessions = sessions
        self.subscriptions = subscriptions
        self.contents = contents

    # --- listing ---

    def list_views(self, session_filter: SessionFilter = SessionFilter.ALL_AVAILABLE) -> List[SessionView]:
        if self.user.is_coach():
            return [SessionView(session=s) for s in self.sessions.find_by_coach(self.user.id)]

        by_session = {s.session_id: s for s in self.subscriptions.find_by_user(self.user.id)}
        views = [
            SessionView(session=s, subscription=by_session.get(s.id))
            for s in self.sessions.find_all()
        ]
        return apply_filter(views, session_filter)

    def get_view(self, session_id: int) -> SessionView:
        session = self.sessions.find_by_id(session_id)
        if session is None:
            raise NotFoundError("Session", session_id)
        subscription = None
        if self.user.is_player():
            subscription = self.subscriptions.find_by_user_and_session(self.user.id, session_id)
        return SessionView(session=session, subscription=subscription)

    def load_detail(self, session_id: int) -> SessionDetailView:
        view = self.get_view(session_id)
        return SessionDetailView(view=view, contents=self.contents.find_by_session(session_id))

    # --- coach CRUD ---

    def create_session(self, fields: SessionFields) -> int:
        session_id = self.sessions.create(fields, created_by=self.user.id)
        logger.info(f"Session {session_id} created by user {self.user.id}")
        return session_id

    def update_session(self, session_id: int, fields: SessionFields) -> None:
        self.sessions.update(session_id, fields)
        logger.info(f"Session {session_id} updated by user {self.user.id}")

    def delete_session(self, session_id: int) -> None:
        self.sessions.delete(session_id)
        logger.info(f"Session {session_id} deleted by user {self.user.id}")

    # --- player actions ---

    def subscribe(self, session_id: int) -> int:
        if self.sessions.find_by_id(session_id) is None:
            raise NotFoundError("Session", session_id)
        subscription_id = self.subscriptions.create(self.user.id, session_id)
        logger.info(f"User {self.user.id} subscribed to session {session_id}")
        return subscription_id

    def unsubscribe(self, session_id: int) -> None:
        self.subscriptions.delete_by_user_and_session(self.user.id, session_id)
        logger.info(f"User {self.user.id} unsubscribed from session {session_id}")

    def toggle_subscription(self, view: SessionView) -> ToggleOutcome:
        """
        Subscribe when the view shows no subscription, otherwise delete it.

        The decision is taken from the view alone. If the store disagrees
        with the view (another screen changed it meanwhile) nothing is
        written and UNCHANGED is returned so the caller can reload.
        """
        if view.subscription is None:
            try:
                self.subscribe(view.session_id)
            except ConflictError:
                return ToggleOutcome.UNCHANGED
            return ToggleOutcome.SUBSCRIBED

        try:
            self.subscriptions.delete(view.subscription.id)
        except NotFoundError:
            return ToggleOutcome.UNCHANGED
        logger.info(f"User {self.user.id} unsubscribed from session {view.session_id}")
        return ToggleOutcome.UNSUBSCRIBED

    def mark_complete(self, session_id: int) -> CompletionOutcome:
        subscription = self.subscriptions.find_by_user_and_session(self.user.id, session_id)
        if subscription is None:
            return CompletionOutcome.NOT_SUBSCRIBED
        if subscription.completed_at is not None:
            return CompletionOutcome.ALREADY_COMPLETE
        self.subscriptions.mark_completed(subscription.id)
        logger.info(f"User {self.user.id} completed session {session_id}")
        return CompletionOutcome.COMPLETED
