"""
Sample users for a fresh database.

Safe to run repeatedly: users that already exist are left alone.
"""
import logging
from typing import List

from courtside.models import SkillLevel, UserRole
from courtside.repositories import UserRepository

logger = logging.getLogger(__name__)

SAMPLE_USERS = [
    {
        "username": "coach",
        "display_name": "Coach Peter",
        "role": UserRole.COACH,
        "skill_level": None,
        "goals": None,
    },
    {
        "username": "alice",
        "display_name": "Alice",
        "role": UserRole.PLAYER,
        "skill_level": SkillLevel.BEGINNER,
        "goals": "Improve serve and backhand",
    },
    {
        "username": "bob",
        "display_name": "Bob",
        "role": UserRole.PLAYER,
        "skill_level": SkillLevel.INTERMEDIATE,
        "goals": "Prepare for tournament",
    },
]


def seed_sample_users(users: UserRepository) -> List[str]:
    """Create the sample users that are missing and return their usernames."""
    created = []
    for sample in SAMPLE_USERS:
        if users.find_by_username(sample["username"]) is not None:
            logger.info(f"Sample user '{sample['username']}' already exists")
            continue
        users.create(**sample)
        created.append(sample["username"])
        logger.info(f"Created sample user '{sample['username']}'")
    return created
