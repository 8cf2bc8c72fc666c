#!/usr/bin/env python3
"""
Initialize the canteen database.

Creates the tables and, when ``--admin-email`` is given, bootstraps an admin
account (or promotes an existing one). Accounts are normally created by the
authentication service; this is only for a first deployment.

Usage:
    python scripts/init_db.py
    python scripts/init_db.py --admin-email admin@campus.lk --name "Canteen Admin" --index-no ADMIN001
"""

import argparse
import logging
import sys
from pathlib import Path

# Add parent directory to path to import app modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy import inspect  # noqa: E402
from sqlalchemy.exc import SQLAlchemyError  # noqa: E402

from app.config import settings  # noqa: E402
from app.exceptions import CanteenError  # noqa: E402
from domain.enums import UserRole  # noqa: E402
from domain.models import SessionLocal, engine, init_database  # noqa: E402
from repositories import UserRepository  # noqa: E402

logging.basicConfig(level=logging.INFO, format=settings.log_format)
logger = logging.getLogger("canteen.init_db")


def create_tables() -> bool:
    logger.info("=" * 60)
    logger.info("Creating tables...")
    logger.info("=" * 60)

    try:
        init_database()
    except SQLAlchemyError as e:
        logger.error(f"✗ Failed to create tables: {e}")
        return False

    tables = inspect(engine).get_table_names()
    logger.info(f"✓ {len(tables)} tables ready: {', '.join(sorted(tables))}")
    return True


def bootstrap_admin(email: str, name: str, index_no: str) -> bool:
    """Create the admin account, or give an existing account the admin role"""
    db = SessionLocal()
    try:
        repo = UserRepository(db)
        user = repo.get_by_email(email)
        if user is None:
            user = repo.create_user(
                email=email, name=name, index_no=index_no, role=UserRole.ADMIN
            )
            logger.info(f"✓ Created admin account {email} ({user.user_id})")
        elif not user.is_admin:
            repo.set_role(user, UserRole.ADMIN)
            logger.info(f"✓ Promoted {email} to admin")
        else:
            logger.info(f"✓ {email} is already an admin")
        return True
    except (CanteenError, SQLAlchemyError) as e:
        db.rollback()
        logger.error(f"✗ Failed to bootstrap admin {email}: {e}")
        return False
    finally:
        db.close()


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Initialize the canteen database")
    parser.add_argument("--admin-email", help="Create or promote this account to admin")
    parser.add_argument("--name", default="Canteen Admin", help="Admin display name")
    parser.add_argument("--index-no", default="ADMIN001", help="Admin index number")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    logger.info(f"{settings.app_name} database initialization")

    if not create_tables():
        return 1
    if args.admin_email and not bootstrap_admin(args.admin_email, args.name, args.index_no):
        return 1

    logger.info("✓ Database ready")
    return 0


if __name__ == "__main__":
    sys.exit(main())
