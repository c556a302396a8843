from datetime import datetime, timezone
from typing import List, Optional

from courtside.core.exceptions import NotFoundError
from courtside.models import Subscription, SubscriptionStatus
from courtside.repositories.base import BaseRepository


class SubscriptionRepository(BaseRepository):

    def create(self, user_id: int, session_id: int) -> int:
        """Subscribe a user to a session in Active status."""
        with self._guard(
            "subscribe",
            conflict_detail=f"Already subscribed to session {session_id}",
        ):
            subscription = Subscription(
                user_id=user_id,
                session_id=session_id,
                status=SubscriptionStatus.ACTIVE.value,
            )
            self.db.add(subscription)
            self.db.commit()
            return subscription.id

    def is_subscribed(self, user_id: int, session_id: int) -> bool:
        return self.find_by_user_and_session(user_id, session_id) is not None

    def find_by_user_and_session(self, user_id: int, session_id: int) -> Optional[Subscription]:
        with self._guard("load subscription"):
            return (
                self.db.query(Subscription)
                .filter(Subscription.user_id == user_id, Subscription.session_id == session_id)
                .first()
            )

    def find_by_user(self, user_id: int) -> List[Subscription]:
        with self._guard("load subscriptions"):
            return (
                self.db.query(Subscription)
                .filter(Subscription.user_id == user_id)
                .order_by(Subscription.subscribed_at.desc(), Subscription.id.desc())
                .all()
            )

    def find_by_session(self, session_id: int) -> List[Subscription]:
        with self._guard("load subscriptions"):
            return (
                self.db.query(Subscription)
                .filter(Subscription.session_id == session_id)
                .order_by(Subscription.subscribed_at.desc(), Subscription.id.desc())
                .all()
            )

    def mark_completed(self, subscription_id: int) -> None:
        with self._guard("mark subscription completed"):
            subscription = self.db.get(Subscription, subscription_id)
            if subscription is None:
                raise NotFoundError("Subscription", subscription_id)
            subscription.completed_at = datetime.now(timezone.utc)
            subscription.status = SubscriptionStatus.COMPLETED.value
            self.db.commit()

    def delete(self, subscription_id: int) -> None:
        """Unsubscribe. The row is removed outright, there is no soft-cancel."""
        with self._guard("unsubscribe"):
            subscription = self.db.get(Subscription, subscription_id)
            if subscription is None:
                raise NotFoundError("Subscription", subscription_id)
            self.db.delete(subscription)
            self.db.commit()

    def delete_by_user_and_session(self, user_id: int, session_id: int) -> None:
        with self._guard("unsubscribe"):
            self.db.query(Subscription).filter(
                Subscription.user_id == user_id,
                Subscription.session_id == session_id,
            ).delete(synchronize_session="fetch")
            self.db.commit()
