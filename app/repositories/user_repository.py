"""
Persistence for users in PostgreSQL.
"""

from app.db.helpers import DatabaseError, fetch_all, fetch_one
from app.db.pool import DatabasePoolManager
from app.infrastructure.observability.logging import get_logger
from app.models.domain.user_domain import User

logger = get_logger(__name__)


class UserRepository:
    """Storage writer/reader for the users table."""

    def __init__(self, db_pool: DatabasePoolManager):
        self._db_pool = db_pool

    async def insert(self, email: str, firstname: str) -> User:
        query = """
            INSERT INTO users (email, firstname)
            VALUES (%s, %s)
            RETURNING id, email, firstname
        """

        async with self._db_pool.connection() as conn:
            row = await fetch_one(conn, query, (email, firstname))

        if not row:
            raise DatabaseError("INSERT returned no row", operation="insert")

        user = User(**row)
        logger.info("User inserted", user_id=user.id)
        return user

    async def select_all(self) -> list[User]:
        query = """
            SELECT id, email, firstname
            FROM users
        """

        async with self._db_pool.connection() as conn:
            rows = await fetch_all(conn, query)

        return [User(**row) for row in rows]
