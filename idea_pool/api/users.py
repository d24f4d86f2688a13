"""User signup endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from idea_pool.api.dependencies import get_auth_service
from idea_pool.api.errors import raise_for_result
from idea_pool.schemas.auth import TokenPair, UserRegister
from idea_pool.services.auth import AuthService

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=TokenPair, status_code=status.HTTP_201_CREATED)
def register(
    user_data: UserRegister,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
):
    """Sign up and receive an access token and a refresh token."""
    result = auth_service.register(user_data.email, user_data.name, user_data.password)
    raise_for_result(result)

    tokens = result.value
    return TokenPair(access_token=tokens.access_token, refresh_token=tokens.refresh_token)
