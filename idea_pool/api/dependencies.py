"""FastAPI dependencies for authentication, database and services."""

from typing import Annotated

import redis
from fastapi import Depends, HTTPException, status
from fastapi.security import APIKeyHeader
from sqlalchemy.orm import Session

from idea_pool.cache import get_redis
from idea_pool.config import get_settings
from idea_pool.database import get_db
from idea_pool.services.auth import AuthService, decode_access_token
from idea_pool.services.idea_service import IdeaService
from idea_pool.services.sessions import SessionCache

settings = get_settings()

access_token_header = APIKeyHeader(name="X-Access-Token", auto_error=False)


def get_current_user_id(
    token: Annotated[str | None, Depends(access_token_header)],
) -> int:
    """Resolve the caller from the access token header, or reject with 401."""
    user_id = decode_access_token(token)
    if user_id is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
    return user_id


def get_session_cache(
    client: Annotated[redis.Redis, Depends(get_redis)],
) -> SessionCache:
    """Get the refresh token session cache."""
    return SessionCache(client, ttl_seconds=settings.refresh_token_ttl_seconds)


def get_auth_service(
    db: Annotated[Session, Depends(get_db)],
    sessions: Annotated[SessionCache, Depends(get_session_cache)],
) -> AuthService:
    """Get auth service with dependencies."""
    return AuthService(db, sessions)


def get_idea_service(
    db: Annotated[Session, Depends(get_db)],
) -> IdeaService:
    """Get idea service with dependencies."""
    return IdeaService(db)
