"""Pydantic schemas for API request/response validation."""

from idea_pool.schemas.auth import (
    AccessToken,
    RefreshRequest,
    TokenPair,
    UserLogin,
    UserRegister,
    UserResponse,
)
from idea_pool.schemas.idea import IdeaCreate, IdeaResponse, IdeaUpdate

__all__ = [
    "UserRegister",
    "UserLogin",
    "RefreshRequest",
    "TokenPair",
    "AccessToken",
    "UserResponse",
    "IdeaCreate",
    "IdeaUpdate",
    "IdeaResponse",
]
