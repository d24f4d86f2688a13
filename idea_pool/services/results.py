"""Tagged success/failure values returned by the service layer."""

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Generic, TypeVar

T = TypeVar("T")


class ErrorKind(StrEnum):
    """Failure categories understood by the API layer."""

    VALIDATION = "validation"
    UNAUTHORIZED = "unauthorized"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"


@dataclass(frozen=True)
class FieldError:
    """A single per-field violation."""

    field: str
    msg: str


@dataclass(frozen=True)
class Result(Generic[T]):
    """Outcome of a service operation: either a value or an error kind."""

    value: T | None = None
    error: ErrorKind | None = None
    errors: list[FieldError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T | None = None) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: ErrorKind, *errors: FieldError) -> "Result[T]":
        return cls(error=error, errors=list(errors))
