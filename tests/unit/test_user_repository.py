from contextlib import asynccontextmanager
from unittest.mock import AsyncMock, MagicMock

import psycopg
import pytest

from app.db.helpers import DatabaseError
from app.models.domain.user_domain import User
from app.repositories.user_repository import UserRepository


class FakePool:
    def __init__(self):
        self.conn = MagicMock()
        self.cursor = AsyncMock()
        self.conn.cursor.return_value.__aenter__.return_value = self.cursor

    @asynccontextmanager
    async def connection(self):
        yield self.conn


@pytest.mark.asyncio
async def test_insert_returns_user_with_assigned_id():
    pool = FakePool()
    pool.cursor.fetchone.return_value = {"id": 42, "email": "a@b.com", "firstname": "A"}

    user = await UserRepository(pool).insert("a@b.com", "A")

    assert user == User(id=42, email="a@b.com", firstname="A")
    query, params = pool.cursor.execute.await_args.args
    assert "INSERT INTO users" in query
    assert "RETURNING id, email, firstname" in query
    assert params == ("a@b.com", "A")


@pytest.mark.asyncio
async def test_insert_without_returned_row_raises():
    pool = FakePool()
    pool.cursor.fetchone.return_value = None

    with pytest.raises(DatabaseError):
        await UserRepository(pool).insert("a@b.com", "A")


@pytest.mark.asyncio
async def test_insert_wraps_psycopg_errors():
    pool = FakePool()
    pool.cursor.execute.side_effect = psycopg.OperationalError("server closed the connection")

    with pytest.raises(DatabaseError) as exc_info:
        await UserRepository(pool).insert("a@b.com", "A")

    assert exc_info.value.operation == "fetch_one"


@pytest.mark.asyncio
async def test_select_all_projects_rows():
    pool = FakePool()
    pool.cursor.fetchall.return_value = [
        {"id": 1, "email": "a@b.com", "firstname": "A"},
        {"id": 2, "email": "c@d.com", "firstname": "C"},
    ]

    users = await UserRepository(pool).select_all()

    assert users == [
        User(id=1, email="a@b.com", firstname="A"),
        User(id=2, email="c@d.com", firstname="C"),
    ]
    query = pool.cursor.execute.await_args.args[0]
    assert "SELECT id, email, firstname" in query


@pytest.mark.asyncio
async def test_select_all_empty_table():
    pool = FakePool()
    pool.cursor.fetchall.return_value = []

    assert await UserRepository(pool).select_all() == []
