"""Access token endpoints: login, refresh and logout."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status

from idea_pool.api.dependencies import get_auth_service, get_current_user_id
from idea_pool.api.errors import raise_for_result
from idea_pool.schemas.auth import AccessToken, RefreshRequest, TokenPair, UserLogin
from idea_pool.services.auth import AuthService

router = APIRouter(prefix="/access-tokens", tags=["auth"])


@router.post("", response_model=TokenPair, status_code=status.HTTP_201_CREATED)
def login(
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
    credentials: UserLogin | None = None,
):
    """Login with email and password."""
    credentials = credentials or UserLogin()
    result = auth_service.login(credentials.email, credentials.password)
    raise_for_result(result)

    tokens = result.value
    return TokenPair(access_token=tokens.access_token, refresh_token=tokens.refresh_token)


@router.post("/refresh", response_model=AccessToken)
def refresh(
    body: RefreshRequest,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
):
    """Exchange a refresh token for a new access token."""
    result = auth_service.refresh(body.refresh_token)
    raise_for_result(result)
    return AccessToken(access_token=result.value)


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
def logout(
    body: RefreshRequest,
    user_id: Annotated[int, Depends(get_current_user_id)],
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
):
    """Logout by revoking a refresh token."""
    result = auth_service.logout(user_id, body.refresh_token)
    raise_for_result(result)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
