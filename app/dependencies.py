"""
FastAPI dependencies resolving the collaborators built in the lifespan.

Tests replace these through app.dependency_overrides.
"""

from fastapi import Request

from app.db.pool import DatabasePoolManager
from app.services.redis_client import RedisClient
from app.services.user_service import UserService


def get_user_service(request: Request) -> UserService:
    return request.app.state.user_service


def get_db_pool(request: Request) -> DatabasePoolManager:
    return request.app.state.db_pool


def get_redis(request: Request) -> RedisClient:
    return request.app.state.redis
