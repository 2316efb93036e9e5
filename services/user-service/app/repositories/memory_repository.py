"""
In-memory implementation of the user repository.

Process-local storage used for development and tests. Data is lost
when the process exits.
"""

import logging
import threading
from dataclasses import replace
from typing import Dict, List, Optional

from ..domain.entities import User
from .user_repository import IUserRepository

logger = logging.getLogger(__name__)


class InMemoryUserRepository(IUserRepository):
    """Dict-backed user repository with sequential identifiers."""

    def __init__(self):
        self._users: Dict[int, User] = {}
        self._last_id = 0
        self._lock = threading.Lock()

    def find_all(self) -> List[User]:
        with self._lock:
            return [replace(self._users[user_id]) for user_id in sorted(self._users)]

    def find_by_id(self, user_id: int) -> Optional[User]:
        with self._lock:
            user = self._users.get(user_id)
            return replace(user) if user else None

    def save(self, user: User) -> User:
        with self._lock:
            if user.is_new:
                self._last_id += 1
                stored = user.with_id(self._last_id)
                logger.debug(f"Inserted user {stored.id}")
            else:
                stored = replace(user)
                # Keep generated ids ahead of explicitly chosen ones
                self._last_id = max(self._last_id, stored.id)
                logger.debug(f"Stored user {stored.id}")

            self._users[stored.id] = stored
            return replace(stored)

    def clear(self) -> None:
        """Remove all users and reset the identifier sequence."""
        with self._lock:
            self._users.clear()
            self._last_id = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._users)
