"""
Database configuration and connection management.

Provides the SQLAlchemy engine, session factory, the ``users`` table model
and the FastAPI session dependency.
"""

import logging
from typing import Any, Generator

from sqlalchemy import Column, Integer, String, create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import QueuePool, StaticPool

from .config import settings

logger = logging.getLogger(__name__)

Base: Any = declarative_base()

# Range of the 32-bit INTEGER primary key on PostgreSQL
USER_ID_MIN = -(2**31)
USER_ID_MAX = 2**31 - 1


class DBUser(Base):
    """
    Persistent user record.

    Attributes:
        id: Primary key, generated on insert unless supplied
        name: Display name
        email: Contact address (optional)
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=True)

    def __repr__(self) -> str:
        return f"<DBUser(id={self.id}, name='{self.name}')>"


def sanitize_url(db_url: str) -> str:
    """Strip credentials from a database URL for logging."""
    if "@" in db_url:
        scheme = db_url.split("://", 1)[0]
        return f"{scheme}://...@{db_url.split('@', 1)[1]}"
    return db_url


def create_db_engine(db_url: str) -> Engine:
    """
    Create an engine with pool settings suited to the backend.

    SQLite in-memory databases share one connection (StaticPool) so every
    session sees the same data; server databases use a QueuePool sized from
    settings.

    Args:
        db_url: Database connection URL

    Returns:
        Configured SQLAlchemy engine
    """
    logger.info(f"Using database: {sanitize_url(db_url)}")

    if db_url.startswith("sqlite"):
        if ":memory:" in db_url or db_url in ("sqlite://", "sqlite:///"):
            return create_engine(
                db_url,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
        return create_engine(db_url, connect_args={"check_same_thread": False})

    return create_engine(
        db_url,
        pool_pre_ping=True,
        poolclass=QueuePool,
        pool_size=settings.DATABASE_POOL_SIZE,
        max_overflow=settings.DATABASE_MAX_OVERFLOW,
        echo=False,
    )


engine = create_db_engine(settings.DATABASE_URL)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db() -> None:
    """
    Initialize database tables.

    Creates all tables on application startup. Existing tables are left
    untouched.
    """
    try:
        logger.info("Initializing database tables...")
        Base.metadata.create_all(bind=engine, checkfirst=True)
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Failed to initialize database: {e}")
        raise


def get_db() -> Generator[Session, None, None]:
    """
    Get database session for dependency injection.

    Yields:
        SQLAlchemy database session, closed once the request finishes
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
