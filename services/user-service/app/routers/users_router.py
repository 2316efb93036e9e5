"""
User endpoints for API v1.

Thin HTTP controller over ``UserService``: list, fetch by id, and save.
"""

from typing import List

import structlog
from fastapi import APIRouter, Depends, HTTPException, status

from ..dependencies import get_user_service
from ..models import UserCreate, UserResponse
from ..services.user_service import UserService

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/v1/users", tags=["users"])


@router.get(
    "",
    response_model=List[UserResponse],
    summary="List users",
)
def list_users(service: UserService = Depends(get_user_service)):
    """Return every stored user."""
    users = service.get_all()
    return [UserResponse.from_entity(user) for user in users]


@router.get(
    "/{user_id}",
    response_model=UserResponse,
    summary="Get user by id",
)
def get_user(user_id: int, service: UserService = Depends(get_user_service)):
    """
    Fetch one user.

    Raises:
        HTTPException: 404 if no user has this id
    """
    user = service.get_by_id(user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return UserResponse.from_entity(user)


@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create or update user",
)
def save_user(payload: UserCreate, service: UserService = Depends(get_user_service)):
    """
    Persist a user.

    Without ``id`` a new user is created; with ``id`` the stored user is
    replaced (or created under that id).
    """
    saved = service.save(payload.to_entity())
    logger.info("User saved", user_id=saved.id, created=payload.id is None)
    return UserResponse.from_entity(saved)
