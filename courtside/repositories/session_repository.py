"""
Session persistence.

Listing order is newest-scheduled-first (date, then time, unscheduled
sessions last), ties broken by newest-created.
"""
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import desc, nulls_last

from courtside.core.exceptions import NotFoundError
from courtside.models import TrainingSession
from courtside.repositories.base import BaseRepository
from courtside.schemas import SessionFields


class SessionRepository(BaseRepository):

    def _ordered(self, query):
        return query.order_by(
            nulls_last(desc(TrainingSession.scheduled_date)),
            nulls_last(desc(TrainingSession.scheduled_time)),
            desc(TrainingSession.created_at),
            desc(TrainingSession.id),
        )

    def list_sessions(self, created_by: Optional[int] = None) -> List[TrainingSession]:
        """All sessions, or only those created by one coach when created_by is given."""
        with self._guard("load sessions"):
            query = self.db.query(TrainingSession)
            if created_by is not None:
                query = query.filter(TrainingSession.created_by == created_by)
            return self._ordered(query).all()

    def find_all(self) -> List[TrainingSession]:
        return self.list_sessions()

    def find_by_coach(self, coach_id: int) -> List[TrainingSession]:
        return self.list_sessions(created_by=coach_id)

    def find_by_id(self, session_id: int) -> Optional[TrainingSession]:
        with self._guard("load session"):
            return self.db.get(TrainingSession, session_id)

    def create(self, fields: SessionFields, created_by: int) -> int:
        with self._guard("create session"):
            session = TrainingSession(
                title=fields.title,
                description=fields.description,
                scheduled_date=fields.scheduled_date,
                scheduled_time=fields.scheduled_time,
                duration_minutes=fields.duration_minutes,
                skill_level=fields.skill_level.value if fields.skill_level else None,
                created_by=created_by,
            )
            self.db.add(session)
            self.db.commit()
            return session.id

    def update(self, session_id: int, fields: SessionFields) -> None:
        with self._guard("update session"):
            session = self.db.get(TrainingSession, session_id)
            if session is None:
                raise NotFoundError("Session", session_id)
            session.title = fields.title
            session.description = fields.description
            session.scheduled_date = fields.scheduled_date
            session.scheduled_time = fields.scheduled_time
            session.duration_minutes = fields.duration_minutes
            session.skill_level = fields.skill_level.value if fields.skill_level else None
            session.updated_at = datetime.now(timezone.utc)
            self.db.commit()

    def delete(self, session_id: int) -> None:
        """Delete a session together with its content and subscriptions."""
        with self._guard("delete session"):
            session = self.db.get(TrainingSession, session_id)
            if session is None:
                raise NotFoundError("Session", session_id)
            # Reload collections so the cascade sees current children.
            self.db.refresh(session)
            self.db.delete(session)
            self.db.commit()
