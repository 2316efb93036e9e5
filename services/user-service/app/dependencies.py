"""
Shared dependencies for the application.

Builds the repository and service for each request. With the ``memory``
backend a single process-wide repository is reused; with the ``database``
backend each request gets a repository over its own session.
"""

from typing import Optional

from fastapi import Depends
from sqlalchemy.orm import Session

from .config import settings
from .database import get_db
from .repositories.memory_repository import InMemoryUserRepository
from .repositories.postgres_repository import PostgresUserRepository
from .repositories.user_repository import IUserRepository
from .services.user_service import UserService

_memory_repository: Optional[InMemoryUserRepository] = None


def get_memory_repository() -> InMemoryUserRepository:
    """Return the process-wide in-memory repository, creating it on first use."""
    global _memory_repository
    if _memory_repository is None:
        _memory_repository = InMemoryUserRepository()
    return _memory_repository


def get_user_repository(db: Session = Depends(get_db)) -> IUserRepository:
    """
    Select the repository implementation configured by ``REPOSITORY_BACKEND``.

    Args:
        db: Request-scoped database session
    """
    if settings.uses_memory_backend:
        return get_memory_repository()
    return PostgresUserRepository(db)


def get_user_service(
    repository: IUserRepository = Depends(get_user_repository),
) -> UserService:
    """Get user service instance for dependency injection."""
    return UserService(repository)
