"""
Application entry point with collaborator lifecycle management.
"""

import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request

from app.config import settings
from app.db.pool import DatabasePoolManager
from app.db.schema import ensure_schema
from app.infrastructure.observability.logging import get_logger, log_request, setup_logging
from app.repositories.user_cache import UserCache
from app.repositories.user_repository import UserRepository
from app.routes import health, users
from app.services.redis_client import RedisClient
from app.services.user_service import UserService
from app.services.validator_client import EmailValidatorClient

# Setup logging before creating the app
setup_logging(log_level=settings.LOG_LEVEL)
logger = get_logger(__name__)


async def _close_quietly(name: str, closer) -> str | None:
    """Run a close coroutine, returning an error description instead of raising."""
    try:
        logger.info(f"Closing {name}")
        await closer()
        return None
    except Exception as e:
        logger.error(f"Error closing {name}", error=str(e))
        return f"{name}: {e}"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build collaborators at startup and release them at shutdown."""

    logger.info("Application starting", environment=settings.environment, debug=settings.debug)

    db_pool = DatabasePoolManager(
        settings.db_conninfo(),
        pool_config=settings.get_db_pool_config(),
        application_name=f"user-api-{settings.environment}",
    )
    redis_client = RedisClient(settings.redis_url())
    validator = EmailValidatorClient(
        settings.validator_base_url(), timeout=settings.VALIDATOR_TIMEOUT_S
    )

    startup_tasks = []

    try:
        logger.info("Initializing database pool")
        await db_pool.initialize()
        startup_tasks.append("database_pool")

        await ensure_schema(db_pool)

        logger.info("Initializing Redis connection")
        await redis_client.initialize()
        startup_tasks.append("redis")

        logger.info("All services initialized successfully", services=startup_tasks)

    except Exception as e:
        logger.error("Failed to initialize services", error=str(e), completed_tasks=startup_tasks)

        await _close_quietly("validator client", validator.close)
        await _close_quietly("Redis", redis_client.close)
        if "database_pool" in startup_tasks:
            await _close_quietly("database pool", db_pool.close)

        raise

    app.state.db_pool = db_pool
    app.state.redis = redis_client
    app.state.user_service = UserService(
        validator=validator,
        repository=UserRepository(db_pool),
        cache=UserCache(redis_client),
    )

    yield

    logger.info("Application shutting down")

    shutdown_errors = [
        error
        for error in [
            await _close_quietly("validator client", validator.close),
            await _close_quietly("Redis", redis_client.close),
            await _close_quietly("database pool", db_pool.close),
        ]
        if error
    ]

    if shutdown_errors:
        logger.warning("Some services had shutdown errors", errors=shutdown_errors)
    else:
        logger.info("All services closed successfully")


app = FastAPI(
    title="User API",
    description="User registration service with external email validation",
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(health.router)
app.include_router(users.router)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log HTTP requests with timing."""
    start_time = time.time()
    response = await call_next(request)
    process_time = (time.time() - start_time) * 1000

    log_request(
        method=request.method,
        path=request.url.path,
        status_code=response.status_code,
        duration_ms=round(process_time, 2),
    )
    return response


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
