"""
Repository layer: CRUD over a SQLAlchemy Session.
"""

from .base import BaseRepository
from .user_repository import UserRepository
from .session_repository import SessionRepository
from .training_content_repository import TrainingContentRepository
from .subscription_repository import SubscriptionRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
    "SessionRepository",
    "TrainingContentRepository",
    "SubscriptionRepository",
]
