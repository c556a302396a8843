from sqlalchemy import Column, Integer, Date, Time, DateTime, ForeignKey, Text, String, Index, UniqueConstraint, CheckConstraint
from sqlalchemy.orm import relationship
from courtside.core.database import Base
from datetime import datetime, timezone
from enum import Enum


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UserRole(str, Enum):
    """Mutually exclusive capability sets."""
    COACH = "coach"
    PLAYER = "player"


class SkillLevel(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class ContentType(str, Enum):
    DRILL = "drill"
    EXERCISE = "exercise"
    WARMUP = "warmup"
    COOLDOWN = "cooldown"


class SubscriptionStatus(str, Enum):
    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(64), unique=True, nullable=False)
    display_name = Column(Text, nullable=False)
    role = Column(String(16), nullable=False)  # 'coach' | 'player'
    skill_level = Column(String(16), nullable=True)
    goals = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False)

    sessions = relationship("TrainingSession", back_populates="coach")
    subscriptions = relationship("Subscription", back_populates="user", cascade="all, delete-orphan")

    __table_args__ = (
        CheckConstraint("role IN ('coach', 'player')", name="ck_users_role"),
        CheckConstraint(
            "skill_level IS NULL OR skill_level IN ('beginner', 'intermediate', 'advanced')",
            name="ck_users_skill_level",
        ),
    )

    @property
    def user_role(self) -> UserRole:
        return UserRole(self.role)

    @property
    def level(self):
        return SkillLevel(self.skill_level) if self.skill_level else None

    def is_coach(self) -> bool:
        return self.role == UserRole.COACH.value

    def is_player(self) -> bool:
        return self.role == UserRole.PLAYER.value


class TrainingSession(Base):
    """
    A schedulable unit of training owned by exactly one coach.

    Named TrainingSession to keep it apart from the SQLAlchemy Session.
    """
    __tablename__ = "sessions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    scheduled_date = Column(Date, nullable=True)
    scheduled_time = Column(Time, nullable=True)
    duration_minutes = Column(Integer, nullable=True)
    skill_level = Column(String(16), nullable=True)
    created_by = Column(Integer, ForeignKey("users.id"), nullable=False)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False)

    coach = relationship("User", back_populates="sessions")
    contents = relationship(
        "TrainingContent",
        back_populates="session",
        cascade="all, delete-orphan",
        order_by="TrainingContent.order_index",
    )
    subscriptions = relationship(
        "Subscription",
        back_populates="session",
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        Index("idx_sessions_created_by", "created_by"),
        Index("idx_sessions_date", "scheduled_date"),
    )

    @property
    def level(self):
        return SkillLevel(self.skill_level) if self.skill_level else None


class TrainingContent(Base):
    """Drill, exercise, warmup or cooldown attached to a session, ordered by order_index."""
    __tablename__ = "training_content"

    id = Column(Integer, primary_key=True, autoincrement=True)
    session_id = Column(Integer, ForeignKey("sessions.id", ondelete="CASCADE"), nullable=False)
    content_type = Column(String(16), nullable=False)
    title = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    duration_minutes = Column(Integer, nullable=True)
    order_index = Column(Integer, nullable=False)

    session = relationship("TrainingSession", back_populates="contents")

    __table_args__ = (
        CheckConstraint(
            "content_type IN ('drill', 'exercise', 'warmup', 'cooldown')",
            name="ck_training_content_type",
        ),
        Index("idx_training_content_session", "session_id"),
    )

    @property
    def kind(self) -> ContentType:
        return ContentType(self.content_type)


class Subscription(Base):
    """A player's enrollment in one session. At most one per (user, session)."""
    __tablename__ = "subscriptions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    session_id = Column(Integer, ForeignKey("sessions.id", ondelete="CASCADE"), nullable=False)
    subscribed_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
    completed_at = Column(DateTime(timezone=True), nullable=True)  # never cleared once set
    status = Column(String(16), default=SubscriptionStatus.ACTIVE.value, nullable=False)
    notes = Column(Text, nullable=True)

    user = relationship("User", back_populates="subscriptions")
    session = relationship("TrainingSession", back_populates="subscriptions")

    __table_args__ = (
        UniqueConstraint("user_id", "session_id", name="uq_subscriptions_user_session"),
        CheckConstraint(
            "status IN ('active', 'completed', 'cancelled')",
            name="ck_subscriptions_status",
        ),
        Index("idx_subscriptions_user", "user_id"),
        Index("idx_subscriptions_session", "session_id"),
    )

    @property
    def is_completed(self) -> bool:
        return self.completed_at is not None
