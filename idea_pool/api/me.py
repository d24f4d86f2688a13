"""Current user endpoint."""

import hashlib
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from idea_pool.api.dependencies import get_auth_service, get_current_user_id
from idea_pool.schemas.auth import UserResponse
from idea_pool.services.auth import AuthService

router = APIRouter(prefix="/me", tags=["users"])

GRAVATAR_URL = "https://www.gravatar.com/avatar/{}"


def gravatar_url(email: str) -> str:
    """Gravatar image URL for an email address."""
    digest = hashlib.md5(email.strip().lower().encode("utf-8")).hexdigest()  # noqa: S324
    return GRAVATAR_URL.format(digest)


@router.get("", response_model=UserResponse)
def get_me(
    user_id: Annotated[int, Depends(get_current_user_id)],
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
):
    """Get current user information."""
    user = auth_service.find_by_id(user_id)
    if user is None:
        # Token outlived its user
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")

    return UserResponse(email=user.email, name=user.name, avatar_url=gravatar_url(user.email))
