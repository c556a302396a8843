"""
Training content persistence.

Order indices are contiguous per session: creation appends at count + 1,
deletion re-sequences what is left to 1..n.
"""
from typing import List, Optional

from sqlalchemy import func

from courtside.core.exceptions import NotFoundError
from courtside.models import TrainingContent
from courtside.repositories.base import BaseRepository
from courtside.schemas import TrainingContentFields


class TrainingContentRepository(BaseRepository):

    def find_by_session(self, session_id: int) -> List[TrainingContent]:
        with self._guard("load training content"):
            return (
                self.db.query(TrainingContent)
                .filter(TrainingContent.session_id == session_id)
                .order_by(TrainingContent.order_index.asc(), TrainingContent.id.asc())
                .all()
            )

    def find_by_id(self, content_id: int) -> Optional[TrainingContent]:
        with self._guard("load training content"):
            return self.db.get(TrainingContent, content_id)

    def count_for_session(self, session_id: int) -> int:
        with self._guard("count training content"):
            return (
                self.db.query(func.count(TrainingContent.id))
                .filter(TrainingContent.session_id == session_id)
                .scalar()
            ) or 0

    def create(
        self,
        session_id: int,
        fields: TrainingContentFields,
        order_index: Optional[int] = None,
    ) -> int:
        if order_index is None:
            order_index = self.count_for_session(session_id) + 1
        with self._guard("create training content"):
            content = TrainingContent(
                session_id=session_id,
                content_type=fields.content_type.value,
                title=fields.title,
                description=fields.description,
                duration_minutes=fields.duration_minutes,
                order_index=order_index,
            )
            self.db.add(content)
            self.db.commit()
            return content.id

    def update(self, content_id: int, fields: TrainingContentFields) -> None:
        with self._guard("update training content"):
            content = self.db.get(TrainingContent, content_id)
            if content is None:
                raise NotFoundError("Training content", content_id)
            content.content_type = fields.content_type.value
            content.title = fields.title
            content.description = fields.description
            content.duration_minutes = fields.duration_minutes
            self.db.commit()

    def delete(self, content_id: int) -> None:
        with self._guard("delete training content"):
            content = self.db.get(TrainingContent, content_id)
            if content is None:
                raise NotFoundError("Training content", content_id)
            session_id = content.session_id
            self.db.delete(content)
            self.db.flush()
            self._resequence(session_id)
            self.db.commit()

    def delete_by_session(self, session_id: int) -> None:
        with self._guard("delete training content"):
            self.db.query(TrainingContent).filter(
                TrainingContent.session_id == session_id
            ).delete(synchronize_session="fetch")
            self.db.commit()

    def _resequence(self, session_id: int) -> None:
        remaining = (
            self.db.query(TrainingContent)
            .filter(TrainingContent.session_id == session_id)
            .order_by(TrainingContent.order_index.asc(), TrainingContent.id.asc())
            .all()
        )
        for position, item in enumerate(remaining, start=1):
            item.order_index = position
