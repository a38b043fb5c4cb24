"""
Denormalized user copies in Redis, keyed by the storage-assigned id.
"""

import json

from app.infrastructure.observability.logging import get_logger
from app.models.domain.user_domain import User
from app.services.redis_client import CacheError, RedisClient

logger = get_logger(__name__)


class UserCache:
    """Cache writer for user records."""

    def __init__(self, redis_client: RedisClient):
        self._redis = redis_client

    @staticmethod
    def key_for(user_id: int) -> str:
        return str(user_id)

    async def set_user(self, user: User) -> None:
        """
        Write the user's email and first name under its id.

        Raises:
            CacheError: If Redis fails or does not acknowledge the write
        """
        key = self.key_for(user.id)
        value = json.dumps(user.cache_payload())

        if not await self._redis.set(key, value):
            raise CacheError("SET was not acknowledged", operation="set")

        logger.debug("User cached", user_id=user.id)

    async def get_user(self, user_id: int) -> dict | None:
        raw = await self._redis.get(self.key_for(user_id))
        if raw is None:
            return None
        return json.loads(raw)
