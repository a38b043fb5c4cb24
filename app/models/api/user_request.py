# app/models/api/user_request.py
from pydantic import BaseModel, Field


class CreateUserRequest(BaseModel):
    """Request body for POST /api/users."""

    email: str = Field(..., min_length=1, max_length=320)
    firstname: str = Field(..., min_length=1, max_length=100)
