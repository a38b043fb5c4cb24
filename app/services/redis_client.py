# app/services/redis_client.py
import redis.asyncio as redis
from redis.asyncio.connection import ConnectionPool

from app.infrastructure.observability.logging import get_logger

logger = get_logger(__name__)


class CacheError(Exception):
    """Custom exception for cache operations."""

    def __init__(self, message: str, operation: str = "unknown"):
        super().__init__(message)
        self.operation = operation


class RedisClient:
    """Pooled async Redis client, opened once at startup and shared across requests."""

    def __init__(self, url: str, max_connections: int = 20):
        self.url = url
        self.max_connections = max_connections
        self.pool = None
        self.client = None
        self._initialized = False

    async def initialize(self):
        """Initialize connection pool on startup"""
        if self._initialized:
            return

        try:
            logger.info("Attempting Redis connection", url=self.url)

            self.pool = ConnectionPool.from_url(
                self.url,
                max_connections=self.max_connections,
                socket_connect_timeout=10,
                socket_timeout=10,
                health_check_interval=30,
                decode_responses=True,
            )
            self.client = redis.Redis(connection_pool=self.pool)

            result = await self.client.ping()
            logger.info("Redis ping successful", result=result)

            self._initialized = True
            logger.info("Redis client initialized", max_connections=self.max_connections)

        except Exception as e:
            logger.error("Failed to initialize Redis client", error=str(e))
            try:
                await self._release()
            except Exception as cleanup_error:
                logger.warning("Redis cleanup after failed init errored", error=str(cleanup_error))
            raise RuntimeError("Redis initialization failed") from e

    async def _release(self):
        if self.client:
            await self.client.aclose()
            self.client = None
        if self.pool:
            await self.pool.disconnect()
            self.pool = None
        self._initialized = False

    async def close(self):
        """Clean shutdown"""
        await self._release()
        logger.info("Redis client closed")

    def _ensure_initialized(self, operation: str):
        if not self._initialized:
            raise CacheError("Redis client not initialized", operation=operation)

    async def ping(self) -> bool:
        """Test Redis connection"""
        try:
            self._ensure_initialized("ping")
            result = await self.client.ping()
            return bool(result)
        except Exception as e:
            logger.error("Redis ping failed", error=str(e))
            return False

    async def get(self, key: str) -> str | None:
        self._ensure_initialized("get")
        try:
            return await self.client.get(key)
        except redis.RedisError as e:
            logger.error("Redis GET failed", key=key[:30], error=str(e))
            raise CacheError(f"GET failed: {e}", operation="get") from e

    async def set(self, key: str, value: str) -> bool:
        self._ensure_initialized("set")
        try:
            result = await self.client.set(key, value)
            return bool(result)
        except redis.RedisError as e:
            logger.error("Redis SET failed", key=key[:30], error=str(e))
            raise CacheError(f"SET failed: {e}", operation="set") from e
