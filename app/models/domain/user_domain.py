from enum import Enum

from pydantic import BaseModel


class User(BaseModel):
    """A registered account as stored in the users table."""

    id: int
    email: str
    firstname: str

    def cache_payload(self) -> dict[str, str]:
        """Denormalized copy written to the cache under the user's id."""
        return {"email": self.email, "firstname": self.firstname}


class ValidationResult(BaseModel):
    """Outcome of the external email reputation check."""

    valid: bool


class FailureKind(str, Enum):
    REJECTED = "rejected"  # Validator declined or was unreachable
    FATAL = "fatal"  # Storage or cache raised unexpectedly
