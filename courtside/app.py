"""
Wiring: repositories -> services -> navigator for one database session and user.
"""
from typing import Optional

from sqlalchemy.orm import Session

from courtside.models import User
from courtside.repositories import (
    SessionRepository,
    SubscriptionRepository,
    TrainingContentRepository,
    UserRepository,
)
from courtside.services.navigator import Navigator
from courtside.services.session_service import SessionService
from courtside.services.training_content_service import TrainingContentService


def load_user(db: Session, username: str) -> Optional[User]:
    return UserRepository(db).find_by_username(username)


def create_navigator(db: Session, user: User) -> Navigator:
    sessions = SessionRepository(db)
    contents = TrainingContentRepository(db)
    subscriptions = SubscriptionRepository(db)
    return Navigator(
        user=user,
        session_service=SessionService(user, sessions, subscriptions, contents),
        content_service=TrainingContentService(sessions, contents),
    )
