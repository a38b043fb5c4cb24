# app/models/api/user_response.py
from pydantic import BaseModel, Field

from app.models.domain.user_domain import User


class UserResponse(BaseModel):
    """Public representation of a user."""

    id: int = Field(..., description="Identifier assigned by storage")
    email: str
    firstname: str

    @classmethod
    def from_domain(cls, user: User) -> "UserResponse":
        return cls(id=user.id, email=user.email, firstname=user.firstname)
