"""SQLAlchemy models."""

from idea_pool.models.idea import Idea
from idea_pool.models.user import User

__all__ = [
    "User",
    "Idea",
]
