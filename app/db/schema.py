"""
Table definitions applied at startup.
"""

from app.db.helpers import execute_query
from app.db.pool import DatabasePoolManager
from app.infrastructure.observability.logging import get_logger

logger = get_logger(__name__)

USERS_TABLE_DDL = """
CREATE TABLE IF NOT EXISTS users (
    id SERIAL PRIMARY KEY,
    email TEXT NOT NULL,
    firstname TEXT NOT NULL
)
"""


async def ensure_schema(db_pool: DatabasePoolManager) -> None:
    """Create the users table if it does not exist yet."""
    async with db_pool.connection() as conn:
        await execute_query(conn, USERS_TABLE_DDL)
    logger.info("Database schema ensured", tables=["users"])
