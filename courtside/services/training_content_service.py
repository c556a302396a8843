"""
Training content management for a coach's session.

Items are appended at count + 1 and re-sequenced on delete, so the order
index of a session's content is always 1..n.
"""
from __future__ import annotations

import logging
from typing import List, Optional

from courtside.core.exceptions import NotFoundError
from courtside.models import TrainingContent
from courtside.repositories import SessionRepository, TrainingContentRepository
from courtside.schemas import TrainingContentFields

logger = logging.getLogger(__name__)


class TrainingContentService:

    def __init__(self, sessions: SessionRepository, contents: TrainingContentRepository):
        self.sessions = sessions
        self.contents = contents

    def list_for_session(self, session_id: int) -> List[TrainingContent]:
        return self.contents.find_by_session(session_id)

    def get(self, content_id: int) -> TrainingContent:
        content = self.contents.find_by_id(content_id)
        if content is None:
            raise NotFoundError("Training content", content_id)
        return content

    def create(
        self,
        session_id: int,
        fields: TrainingContentFields,
        order_index: Optional[int] = None,
    ) -> int:
        if self.sessions.find_by_id(session_id) is None:
            raise NotFoundError("Session", session_id)
        content_id = self.contents.create(session_id, fields, order_index=order_index)
        logger.info(f"Training content {content_id} added to session {session_id}")
        return content_id

    def update(self, content_id: int, fields: TrainingContentFields) -> None:
        self.contents.update(content_id, fields)
        logger.info(f"Training content {content_id} updated")

    def delete(self, content_id: int) -> int:
        """Delete one item and return the id of the session it belonged to."""
        content = self.get(content_id)
        session_id = content.session_id
        self.contents.delete(content_id)
        logger.info(f"Training content {content_id} removed from session {session_id}")
        return session_id
