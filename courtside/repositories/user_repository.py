from typing import Optional

from courtside.models import SkillLevel, User, UserRole
from courtside.repositories.base import BaseRepository


class UserRepository(BaseRepository):

    def find_by_username(self, username: str) -> Optional[User]:
        with self._guard("load user"):
            return self.db.query(User).filter(User.username == username).first()

    def find_by_id(self, user_id: int) -> Optional[User]:
        with self._guard("load user"):
            return self.db.get(User, user_id)

    def create(
        self,
        *,
        username: str,
        display_name: str,
        role: UserRole,
        skill_level: Optional[SkillLevel] = None,
        goals: Optional[str] = None,
    ) -> int:
        with self._guard("create user", conflict_detail=f"User already exists: {username}"):
            user = User(
                username=username,
                display_name=display_name,
                role=UserRole(role).value,
                skill_level=SkillLevel(skill_level).value if skill_level else None,
                goals=goals,
            )
            self.db.add(user)
            self.db.commit()
            return user.id
