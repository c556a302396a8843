"""
Payloads handed to the repositories and read composites built for the screens.
"""
from dataclasses import dataclass, field
from datetime import date, time
from typing import List, Optional

from pydantic import BaseModel, Field

from courtside.models import (
    ContentType,
    SkillLevel,
    Subscription,
    SubscriptionStatus,
    TrainingContent,
    TrainingSession,
)


class SessionFields(BaseModel):
    """Editable columns of a session."""

    title: str = Field(..., min_length=3, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    scheduled_date: Optional[date] = None
    scheduled_time: Optional[time] = None
    duration_minutes: Optional[int] = Field(None, ge=5, le=480)
    skill_level: Optional[SkillLevel] = None


class TrainingContentFields(BaseModel):
    """Editable columns of a training content item."""

    title: str = Field(..., min_length=2, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    duration_minutes: Optional[int] = Field(None, ge=1, le=480)
    content_type: ContentType = ContentType.DRILL


@dataclass
class SessionView:
    """Session plus the viewer's subscription, if any. Never persisted."""
    session: TrainingSession
    subscription: Optional[Subscription] = None

    @property
    def session_id(self) -> int:
        return self.session.id

    def is_subscribed(self) -> bool:
        return self.subscription is not None

    def is_completed(self) -> bool:
        return self.subscription is not None and self.subscription.completed_at is not None

    def subscription_id(self) -> Optional[int]:
        return self.subscription.id if self.subscription else None

    def status_label(self) -> str:
        if self.subscription is None:
            return "Not subscribed"
        if self.is_completed():
            return "Completed"
        return SubscriptionStatus(self.subscription.status).value.capitalize()


@dataclass
class SessionDetailView:
    """Everything the detail screen shows for one session."""
    view: SessionView
    contents: List[TrainingContent] = field(default_factory=list)

    @property
    def estimated_duration_minutes(self) -> int:
        return sum(c.duration_minutes or 0 for c in self.contents)
