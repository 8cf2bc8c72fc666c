"""
Database configuration and session management.
"""

import logging
from decimal import Decimal
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool
from app.config import settings

logger = logging.getLogger("canteen.database")

# Create SQLAlchemy Base
Base = declarative_base()

# Money columns are Numeric(MONEY_PRECISION, MONEY_SCALE); larger values are
# rejected by the services before they reach the database.
MONEY_PRECISION = 10
MONEY_SCALE = 2
MAX_MONEY = Decimal("99999999.99")
# Largest value an Integer column holds on every supported backend
MAX_INTEGER = 2**31 - 1


def _engine_options(url: str) -> dict:
    # In-memory SQLite must share one connection across the request threadpool
    if url.startswith("sqlite"):
        return {
            "connect_args": {"check_same_thread": False},
            "poolclass": StaticPool,
        }
    return {"pool_pre_ping": True}


# Create engine
engine = create_engine(
    settings.database_url,
    echo=settings.db_echo,
    future=True,
    **_engine_options(settings.database_url),
)

# Create session factory
SessionLocal = sessionmaker(bind=engine, autoflush=False, future=True)


def init_database():
    """Initialize database schema"""
    # Importing the model modules registers their tables on Base.metadata
    from domain.models import user, catalog, daily_meal, order  # noqa: F401

    with engine.begin() as conn:
        Base.metadata.create_all(bind=conn)
    logger.info("Database tables created successfully")


def drop_database():
    """Drop every table known to the ORM (used by the test suite)"""
    with engine.begin() as conn:
        Base.metadata.drop_all(bind=conn)


def get_db_session():
    """Get database session (for FastAPI dependency injection)"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
