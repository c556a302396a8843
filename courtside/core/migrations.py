"""
Schema bootstrap: run Alembic migrations.

Always run `alembic upgrade head` on startup. If migrations fail, fail
fast rather than start against an unknown schema.
"""
import logging
import os

from alembic import command
from alembic.config import Config

from courtside.core.config import settings

logger = logging.getLogger(__name__)

SCRIPT_LOCATION = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "alembic")


def get_alembic_config(database_url: str = None) -> Config:
    """Alembic config built in code, so it works from an installed package."""
    cfg = Config()
    cfg.set_main_option("script_location", SCRIPT_LOCATION)
    cfg.set_main_option("sqlalchemy.url", database_url or settings.DATABASE_URL)
    return cfg


def alembic_upgrade_head(database_url: str = None) -> None:
    """Apply all pending migrations."""
    logger.info("Applying database migrations")
    command.upgrade(get_alembic_config(database_url), "head")
