"""
Pytest configuration and fixtures

Every test gets its own in-memory SQLite database built from the models,
so nothing leaks between tests.
"""
from datetime import date, time

import pytest
from sqlalchemy.pool import StaticPool

from courtside.core.database import Base, build_engine, build_session_factory
from courtside.models import SkillLevel, UserRole
from courtside.repositories import (
    SessionRepository,
    SubscriptionRepository,
    TrainingContentRepository,
    UserRepository,
)
from courtside.schemas import SessionFields, TrainingContentFields
from courtside.services.session_service import SessionService
from courtside.services.training_content_service import TrainingContentService


@pytest.fixture
def engine():
    engine = build_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(engine):
    session = build_session_factory(engine)()
    yield session
    session.close()


@pytest.fixture
def users(db_session):
    return UserRepository(db_session)


@pytest.fixture
def coach(db_session, users):
    user_id = users.create(username="coach", display_name="Coach Peter", role=UserRole.COACH)
    return users.find_by_id(user_id)


@pytest.fixture
def other_coach(db_session, users):
    user_id = users.create(username="coach2", display_name="Coach Anna", role=UserRole.COACH)
    return users.find_by_id(user_id)


@pytest.fixture
def player(db_session, users):
    user_id = users.create(
        username="alice",
        display_name="Alice",
        role=UserRole.PLAYER,
        skill_level=SkillLevel.BEGINNER,
        goals="Improve serve and backhand",
    )
    return users.find_by_id(user_id)


@pytest.fixture
def other_player(db_session, users):
    user_id = users.create(
        username="bob",
        display_name="Bob",
        role=UserRole.PLAYER,
        skill_level=SkillLevel.INTERMEDIATE,
    )
    return users.find_by_id(user_id)


@pytest.fixture
def session_repo(db_session):
    return SessionRepository(db_session)


@pytest.fixture
def content_repo(db_session):
    return TrainingContentRepository(db_session)


@pytest.fixture
def subscription_repo(db_session):
    return SubscriptionRepository(db_session)


def make_service(db_session, user) -> SessionService:
    return SessionService(
        user,
        SessionRepository(db_session),
        SubscriptionRepository(db_session),
        TrainingContentRepository(db_session),
    )


@pytest.fixture
def coach_service(db_session, coach):
    return make_service(db_session, coach)


@pytest.fixture
def player_service(db_session, player):
    return make_service(db_session, player)


@pytest.fixture
def content_service(db_session):
    return TrainingContentService(SessionRepository(db_session), TrainingContentRepository(db_session))


def session_fields(title="Serve Clinic", **overrides) -> SessionFields:
    values = {
        "title": title,
        "description": None,
        "scheduled_date": date(2026, 11, 2),
        "scheduled_time": time(9, 30),
        "duration_minutes": 60,
        "skill_level": SkillLevel.ADVANCED,
    }
    values.update(overrides)
    return SessionFields(**values)


def content_fields(title="Split step drill", **overrides) -> TrainingContentFields:
    values = {"title": title, "duration_minutes": 15}
    values.update(overrides)
    return TrainingContentFields(**values)
