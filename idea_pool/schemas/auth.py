"""Authentication schemas."""

import re

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

PASSWORD_RULES = (
    (re.compile(r"[a-z]"), "Password must contain a lowercase letter"),
    (re.compile(r"[A-Z]"), "Password must contain an uppercase letter"),
    (re.compile(r"[0-9]"), "Password must contain a digit"),
)


def normalize_email(value: str) -> str:
    """Trim and lowercase an email address."""
    return value.strip().lower()


class UserRegister(BaseModel):
    """User registration request."""

    model_config = ConfigDict(extra="forbid")

    email: EmailStr
    name: str = Field(..., min_length=2, max_length=255)
    password: str = Field(..., min_length=8, max_length=72)

    @field_validator("email", mode="before")
    @classmethod
    def lowercase_email(cls, value):
        if isinstance(value, str):
            return normalize_email(value)
        return value

    @field_validator("name", mode="before")
    @classmethod
    def title_case_name(cls, value):
        if isinstance(value, str):
            return value.strip().title()
        return value

    @field_validator("password", mode="before")
    @classmethod
    def strip_password(cls, value):
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("password")
    @classmethod
    def check_password_strength(cls, value: str) -> str:
        for pattern, message in PASSWORD_RULES:
            if not pattern.search(value):
                raise ValueError(message)
        return value


class UserLogin(BaseModel):
    """User login request.

    Missing fields default to empty strings so that every bad login is
    answered with the same 401.
    """

    model_config = ConfigDict(extra="forbid")

    email: str = ""
    password: str = ""


class RefreshRequest(BaseModel):
    """Exchange a refresh token for a new access token, or revoke it."""

    model_config = ConfigDict(extra="forbid")

    refresh_token: str = ""


class TokenPair(BaseModel):
    """Tokens issued on signup and login."""

    access_token: str
    refresh_token: str


class AccessToken(BaseModel):
    """Access token issued on refresh."""

    access_token: str


class UserResponse(BaseModel):
    """Current user information."""

    email: str
    name: str
    avatar_url: str
