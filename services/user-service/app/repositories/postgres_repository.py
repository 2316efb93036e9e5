"""
PostgreSQL implementation of the user repository.

Persists users through a SQLAlchemy session. Any SQLite URL works as well,
which is what the test suite uses.
"""

import logging
import time
from typing import List, Optional

from sqlalchemy import text
from sqlalchemy.orm import Session

from ..database import USER_ID_MAX, USER_ID_MIN, DBUser
from ..domain.entities import User
from ..metrics import track_db_operation
from .user_repository import IUserRepository

logger = logging.getLogger(__name__)

SYNC_USER_ID_SEQUENCE = text(
    "SELECT setval(pg_get_serial_sequence('users', 'id'), "
    "GREATEST((SELECT MAX(id) FROM users), 1))"
)


class PostgresUserRepository(IUserRepository):
    """SQLAlchemy implementation for user persistence."""

    def __init__(self, db: Session):
        """
        Initialize repository.

        Args:
            db: SQLAlchemy database session
        """
        self.db = db

    def find_all(self) -> List[User]:
        """Return all users ordered by identifier."""
        start_time = time.time()
        rows = self.db.query(DBUser).order_by(DBUser.id).all()
        track_db_operation("find_all", True, time.time() - start_time)
        return [self._map_to_entity(row) for row in rows]

    def find_by_id(self, user_id: int) -> Optional[User]:
        """Look up one user by primary key."""
        if not USER_ID_MIN <= user_id <= USER_ID_MAX:
            # No row can carry an id the column cannot store
            return None

        start_time = time.time()
        row = self.db.get(DBUser, user_id)
        track_db_operation("find_by_id", True, time.time() - start_time)
        return self._map_to_entity(row) if row else None

    def save(self, user: User) -> User:
        """Insert a new user or merge an identified one, then commit."""
        start_time = time.time()
        try:
            if user.is_new:
                row = DBUser(name=user.name, email=user.email)
                self.db.add(row)
            else:
                # merge() inserts when no row carries this id yet
                row = self.db.merge(DBUser(id=user.id, name=user.name, email=user.email))
                self.db.flush()
                self._sync_id_sequence()

            self.db.commit()
            self.db.refresh(row)
        except Exception:
            self.db.rollback()
            track_db_operation("save", False, time.time() - start_time)
            logger.exception(f"Failed to save user {user.id}")
            raise

        track_db_operation("save", True, time.time() - start_time)
        logger.debug(f"Saved user {row.id}")
        return self._map_to_entity(row)

    def _sync_id_sequence(self) -> None:
        """
        Move the PostgreSQL id sequence past explicitly chosen ids.

        Rows inserted with a caller-supplied id do not advance the SERIAL
        sequence, so the next generated id would collide with them.
        """
        if self.db.get_bind().dialect.name == "postgresql":
            self.db.execute(SYNC_USER_ID_SEQUENCE)

    @staticmethod
    def _map_to_entity(row: DBUser) -> User:
        """Map database row to domain entity."""
        return User(id=row.id, name=row.name, email=row.email)
