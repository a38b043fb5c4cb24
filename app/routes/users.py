"""
users.py
--------
Purpose:
    HTTP adapter for the user service.

    - POST /api/users creates a user after external email validation.
    - GET /api/users lists every stored user.

Status mapping:
    rejected by validator (or validator unavailable) -> 403, empty detail
    storage or cache failure                         -> 500, generic detail
"""

from fastapi import APIRouter, Depends, HTTPException, status

from app.dependencies import get_user_service
from app.infrastructure.observability.logging import get_logger
from app.models.api.user_request import CreateUserRequest
from app.models.api.user_response import UserResponse
from app.services.user_service import UserRejectedError, UserService, UserStorageError

router = APIRouter(prefix="/api/users", tags=["users"])
logger = get_logger(__name__)

INTERNAL_ERROR_DETAIL = "Internal server error"


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    body: CreateUserRequest,
    service: UserService = Depends(get_user_service),
):
    try:
        user = await service.create_user(body.email, body.firstname)
    except UserRejectedError:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN)
    except UserStorageError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=INTERNAL_ERROR_DETAIL
        )

    return UserResponse.from_domain(user)


@router.get("", response_model=list[UserResponse])
async def list_users(service: UserService = Depends(get_user_service)):
    try:
        users = await service.list_users()
    except UserStorageError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=INTERNAL_ERROR_DETAIL
        )

    return [UserResponse.from_domain(user) for user in users]
