"""
Courtside entry point.

    courtside --init-db                 create the schema and sample users
    courtside --user alice              start the terminal UI as alice
    courtside --user coach --db-path /tmp/club.db
"""
import argparse
import logging
import sys
from typing import Optional, Sequence

from courtside.app import create_navigator, load_user
from courtside.core.config import settings
from courtside.core.database import build_engine, get_db_sync
from courtside.core.exceptions import CourtsideError
from courtside.core.logging import setup_logging
from courtside.core.migrations import alembic_upgrade_head
from courtside.repositories import UserRepository
from courtside.services.navigator import AppState
from courtside.services.seed import seed_sample_users

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="courtside",
        description="Tennis training sessions for coaches and players, in the terminal.",
    )
    parser.add_argument("--user", help="Username to sign in as (defaults to DEFAULT_USER)")
    parser.add_argument(
        "--db-path",
        help="Path to the SQLite database file (overrides DATABASE_URL)",
    )
    parser.add_argument(
        "--init-db",
        action="store_true",
        help="Initialize the database with sample users and exit",
    )
    return parser


def resolve_database_url(db_path: Optional[str]) -> str:
    if db_path:
        return f"sqlite:///{db_path}"
    return settings.DATABASE_URL


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging()

    database_url = resolve_database_url(args.db_path)
    engine = build_engine(database_url)
    try:
        alembic_upgrade_head(database_url)
        db = get_db_sync(engine)
        try:
            if args.init_db:
                created = seed_sample_users(UserRepository(db))
                print(f"Database initialized with sample data ({len(created)} users created).")
                return 0

            username = args.user or settings.DEFAULT_USER
            if not username:
                print("ERROR: --user is required (run with --init-db to create sample users)", file=sys.stderr)
                return 2

            user = load_user(db, username)
            if user is None:
                print(f"ERROR: user not found: {username}", file=sys.stderr)
                return 2

            logger.info(f"User {user.username} signed in as {user.role}")
            # imported here so --init-db works where curses is unavailable
            from courtside.ui import terminal

            terminal.run(create_navigator(db, user), AppState(), user)
            return 0
        finally:
            db.close()
    except CourtsideError as e:
        logger.error(f"Startup failed: {e.error_code} {e.detail}")
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    except Exception:
        logger.exception("Unhandled error, exiting")
        raise
    finally:
        engine.dispose()


if __name__ == "__main__":
    raise SystemExit(main())
