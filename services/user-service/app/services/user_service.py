"""
User service layer.

Stable access point that controllers call instead of touching persistence
directly. Every operation delegates to the injected repository; failures
raised by the repository reach the caller unchanged.
"""

import logging
from typing import List, Optional

from ..domain.entities import User
from ..repositories.user_repository import IUserRepository

logger = logging.getLogger(__name__)


class UserService:
    """Stateless facade over a user repository."""

    def __init__(self, repository: IUserRepository):
        """
        Initialize user service.

        Args:
            repository: Repository that owns user persistence
        """
        self.repository = repository

    def get_all(self) -> List[User]:
        """
        Return every user currently held by the repository.

        Returns:
            List of users, empty when the repository is empty
        """
        logger.debug("Listing all users")
        return self.repository.find_all()

    def get_by_id(self, user_id: int) -> Optional[User]:
        """
        Look up a user by identifier.

        Args:
            user_id: User identifier

        Returns:
            The user if found, None otherwise
        """
        logger.debug(f"Fetching user {user_id}")
        return self.repository.find_by_id(user_id)

    def save(self, user: User) -> User:
        """
        Persist a user.

        Insert versus update is decided by the repository based on whether
        ``user.id`` is set.

        Args:
            user: User to persist

        Returns:
            The persisted user, including any repository-assigned id
        """
        logger.debug(f"Saving user {user.id}")
        return self.repository.save(user)
