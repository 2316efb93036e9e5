"""
User repository interface (Abstract Base Class).

Defines the contract for user persistence and retrieval
independent of the underlying storage mechanism.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from ..domain.entities import User


class IUserRepository(ABC):
    """
    Abstract repository interface for user data operations.

    This interface defines all user data access methods without
    implementation details, enabling dependency inversion.
    """

    @abstractmethod
    def find_all(self) -> List[User]:
        """
        Return every stored user.

        Returns:
            List of users (empty if none are stored)
        """
        pass

    @abstractmethod
    def find_by_id(self, user_id: int) -> Optional[User]:
        """
        Find a user by identifier.

        Args:
            user_id: Identifier to look up

        Returns:
            User entity if found, None otherwise
        """
        pass

    @abstractmethod
    def save(self, user: User) -> User:
        """
        Create or update a user.

        Users without an ``id`` are inserted and receive a fresh identifier.
        Users with an ``id`` replace the stored record, or are inserted
        under that identifier when no record exists.

        Args:
            user: User entity to persist

        Returns:
            The saved user entity, carrying its identifier
        """
        pass
