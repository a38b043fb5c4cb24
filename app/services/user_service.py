"""
User service: creation workflow and listing.

Creation runs strictly in order: validate email, insert row, cache the row.
There is no rollback; if the cache write fails after the insert succeeded,
the row stays in storage.
"""

from app.infrastructure.observability.logging import get_logger
from app.models.domain.user_domain import FailureKind, User
from app.repositories.user_cache import UserCache
from app.repositories.user_repository import UserRepository
from app.services.validator_client import EmailValidatorClient, ValidatorError

logger = get_logger(__name__)


class UserServiceError(Exception):
    """Base exception for user service operations."""

    kind: FailureKind = FailureKind.FATAL

    def __init__(self, message: str, email: str | None = None):
        super().__init__(message)
        self.email = email


class UserRejectedError(UserServiceError):
    """The validator declined the email or could not be reached."""

    kind = FailureKind.REJECTED


class UserStorageError(UserServiceError):
    """Storage or cache raised an unexpected error."""

    kind = FailureKind.FATAL


class UserService:
    """Orchestrates the validator, storage and cache collaborators."""

    def __init__(
        self,
        validator: EmailValidatorClient,
        repository: UserRepository,
        cache: UserCache,
    ):
        self.validator = validator
        self.repository = repository
        self.cache = cache

    async def create_user(self, email: str, firstname: str) -> User:
        """
        Validate, persist and cache a new user.

        Args:
            email: Candidate email address
            firstname: User's first name

        Returns:
            The stored User with its assigned id

        Raises:
            UserRejectedError: Validator said no, or was unavailable
            UserStorageError: Storage or cache failed
        """
        try:
            result = await self.validator.check(email)
        except ValidatorError as e:
            # Unavailable validator is reported the same way as a decline
            logger.info(
                "User rejected, validator unavailable",
                error=str(e),
                status_code=e.status_code,
            )
            raise UserRejectedError("Email validation unavailable", email=email) from e
        except Exception as e:
            logger.warning(
                "User rejected, validator call failed",
                error=str(e),
                error_type=type(e).__name__,
            )
            raise UserRejectedError("Email validation unavailable", email=email) from e

        if not result.valid:
            logger.info("User rejected by validator")
            raise UserRejectedError("Email rejected by validator", email=email)

        try:
            user = await self.repository.insert(email, firstname)
            await self.cache.set_user(user)
        except Exception as e:
            logger.error(
                "User creation failed",
                error=str(e),
                error_type=type(e).__name__,
            )
            raise UserStorageError("User creation failed", email=email) from e

        logger.info("User created", user_id=user.id)
        return user

    async def list_users(self) -> list[User]:
        """Return every stored user, in storage order."""
        try:
            users = await self.repository.select_all()
        except Exception as e:
            logger.error("Listing users failed", error=str(e), error_type=type(e).__name__)
            raise UserStorageError("Listing users failed") from e

        logger.debug("Users listed", count=len(users))
        return users
