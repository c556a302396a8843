"""
Shared plumbing for the repositories.

Every repository call either returns the requested value or raises a
CourtsideError. SQLAlchemy failures are rolled back and wrapped, so the
caller never sees a half-applied change.
"""
from contextlib import contextmanager
import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from courtside.core.exceptions import ConflictError, PersistenceError

logger = logging.getLogger(__name__)


class BaseRepository:
    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def _guard(self, action: str, conflict_detail: str = None):
        try:
            yield
        except IntegrityError as e:
            self.db.rollback()
            logger.error(f"Integrity error while trying to {action}: {e}")
            if conflict_detail:
                raise ConflictError(conflict_detail) from e
            raise PersistenceError(f"Failed to {action}") from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Database error while trying to {action}: {e}")
            raise PersistenceError(f"Failed to {action}") from e
