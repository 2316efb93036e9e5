"""
Domain entities for user data.

Framework-agnostic business objects. Persistence details (tables, sessions)
live in the repository layer.
"""

from dataclasses import dataclass, replace
from typing import Optional


@dataclass
class User:
    """
    A persisted user record.

    ``id`` is assigned by the repository when the user is first saved;
    a user with ``id`` set to None has never been persisted.
    """

    id: Optional[int] = None
    name: str = ""
    email: Optional[str] = None

    @property
    def is_new(self) -> bool:
        """True if the user has no repository-assigned identifier yet."""
        return self.id is None

    def with_id(self, user_id: int) -> "User":
        """Return a copy of this user carrying the given identifier."""
        return replace(self, id=user_id)

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
        }
