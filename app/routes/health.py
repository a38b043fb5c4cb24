# app/routes/health.py
"""
Liveness and readiness endpoints.
"""

import time

from fastapi import APIRouter, Depends

from app.db.pool import DatabasePoolManager
from app.db.postgres import check_db
from app.dependencies import get_db_pool, get_redis
from app.services.redis_client import RedisClient

router = APIRouter()


@router.get("/healthz")
async def healthz():
    """Basic health check - always returns 200 if app is running."""
    return {"status": "ok", "service": "user-api"}


@router.get("/readyz")
async def readyz(
    db_pool: DatabasePoolManager = Depends(get_db_pool),
    redis_client: RedisClient = Depends(get_redis),
):
    """
    Readiness check covering Postgres and Redis.
    """
    checks = {}
    overall_ok = True

    # 1) Redis
    t0 = time.time()
    redis_ok = await redis_client.ping()
    checks["redis"] = {"ok": redis_ok, "latency_ms": round((time.time() - t0) * 1000, 1)}
    overall_ok = overall_ok and redis_ok

    # 2) Postgres
    t0 = time.time()
    db_result = await check_db(db_pool)
    checks["postgres"] = {
        "ok": db_result is True,
        "latency_ms": round((time.time() - t0) * 1000, 1),
    }
    if db_result is not True:
        checks["postgres"]["error"] = db_result
        overall_ok = False

    return {"overall_ok": overall_ok, "checks": checks, "timestamp": time.time()}
