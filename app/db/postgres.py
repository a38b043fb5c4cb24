"""
Database connectivity check used by the readiness check.
"""

from app.db.helpers import fetch_one
from app.db.pool import DatabasePoolManager
from app.infrastructure.observability.logging import get_logger

logger = get_logger(__name__)


async def check_db(db_pool: DatabasePoolManager):
    """
    Returns True if SELECT 1 succeeds, otherwise the error string.
    """
    try:
        async with db_pool.connection() as conn:
            row = await fetch_one(conn, "SELECT 1")

        if row and list(row.values())[0] == 1:
            return True
        return "Unexpected result from database check"

    except Exception as e:
        logger.error("Database health check failed", error=str(e))
        return str(e)
