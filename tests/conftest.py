import pytest

from app.models.domain.user_domain import User, ValidationResult
from app.repositories.user_cache import UserCache
from app.services.redis_client import CacheError
from app.services.user_service import UserService
from app.services.validator_client import ValidatorError


class FakeRedis:
    def __init__(self):
        self.store: dict[str, str] = {}
        self.fail_writes = False

    async def set(self, key: str, value: str) -> bool:
        if self.fail_writes:
            raise CacheError("SET failed: connection refused", operation="set")
        self.store[key] = value
        return True

    async def get(self, key: str) -> str | None:
        return self.store.get(key)

    async def ping(self) -> bool:
        return True


class FakeUserRepository:
    def __init__(self):
        self.rows: list[User] = []
        self.insert_calls = 0
        self.error: Exception | None = None

    async def insert(self, email: str, firstname: str) -> User:
        self.insert_calls += 1
        if self.error:
            raise self.error
        user = User(id=len(self.rows) + 1, email=email, firstname=firstname)
        self.rows.append(user)
        return user

    async def select_all(self) -> list[User]:
        if self.error:
            raise self.error
        return list(self.rows)


class FakeValidator:
    """Answers valid unless told otherwise; can simulate an unreachable service."""

    def __init__(self):
        self.valid = True
        self.unavailable = False
        self.checked: list[str] = []

    async def check(self, email: str) -> ValidationResult:
        self.checked.append(email)
        if self.unavailable:
            raise ValidatorError("Validator request failed: connection refused")
        return ValidationResult(valid=self.valid)


@pytest.fixture
def fake_redis():
    return FakeRedis()


@pytest.fixture
def fake_repository():
    return FakeUserRepository()


@pytest.fixture
def fake_validator():
    return FakeValidator()


@pytest.fixture
def user_cache(fake_redis):
    return UserCache(fake_redis)


@pytest.fixture
def user_service(fake_validator, fake_repository, user_cache):
    return UserService(validator=fake_validator, repository=fake_repository, cache=user_cache)
