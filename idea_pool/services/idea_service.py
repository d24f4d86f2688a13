"""Idea service: owner-scoped storage and ICE ranking."""

import logging
import uuid

from sqlalchemy.orm import Session

from idea_pool.config import get_settings
from idea_pool.models.idea import Idea
from idea_pool.services.results import ErrorKind, Result

logger = logging.getLogger(__name__)
settings = get_settings()

# Largest offset a BIGINT bind accepts
MAX_OFFSET = 2**63 - 1


def parse_page(raw: str | int | None) -> int:
    """Coerce a page query value to a page number >= 1.

    Absent, non-numeric, zero and negative values all mean the first page.
    """
    if raw is None:
        return 1
    try:
        page = int(raw)
    except (TypeError, ValueError):
        return 1
    return max(page, 1)


def parse_idea_id(raw: str | uuid.UUID) -> uuid.UUID | None:
    """Parse an idea id from a URL path, or None if it is not a UUID."""
    if isinstance(raw, uuid.UUID):
        return raw
    try:
        return uuid.UUID(str(raw))
    except ValueError:
        return None


class IdeaService:
    """Service for idea CRUD and ranking, always scoped to one owner."""

    def __init__(self, db: Session, page_size: int | None = None):
        self.db = db
        self.page_size = page_size or settings.page_size

    def _get_owned(self, idea_id: str | uuid.UUID, user_id: int) -> Idea | None:
        # Missing and foreign ideas are indistinguishable to callers
        parsed = parse_idea_id(idea_id)
        if parsed is None:
            return None
        return self.db.query(Idea).filter(Idea.id == parsed, Idea.user_id == user_id).first()

    def create(
        self,
        user_id: int,
        content: str,
        impact: int,
        ease: int,
        confidence: int,
    ) -> Idea:
        """Store a new idea for a user."""
        idea = Idea(
            content=content,
            impact=impact,
            ease=ease,
            confidence=confidence,
            user_id=user_id,
        )
        self.db.add(idea)
        self.db.commit()
        self.db.refresh(idea)
        logger.debug(f"User {user_id} created idea {idea.id}")
        return idea

    def list(self, user_id: int, page: str | int | None = None) -> list[Idea]:
        """Get one page of a user's ideas, best score first, newest first among ties."""
        offset = (parse_page(page) - 1) * self.page_size
        if offset > MAX_OFFSET:
            return []
        return (
            self.db.query(Idea)
            .filter(Idea.user_id == user_id)
            .order_by(Idea.score_total.desc(), Idea.created_at.desc(), Idea.id.desc())
            .offset(offset)
            .limit(self.page_size)
            .all()
        )

    def update(
        self,
        idea_id: str | uuid.UUID,
        user_id: int,
        content: str,
        impact: int,
        ease: int,
        confidence: int,
    ) -> Result[Idea]:
        """Replace the editable fields of one of the user's ideas."""
        idea = self._get_owned(idea_id, user_id)
        if idea is None:
            return Result.failure(ErrorKind.NOT_FOUND)

        idea.content = content
        idea.impact = impact
        idea.ease = ease
        idea.confidence = confidence
        self.db.commit()
        self.db.refresh(idea)
        logger.debug(f"User {user_id} updated idea {idea.id}")
        return Result.success(idea)

    def delete(self, idea_id: str | uuid.UUID, user_id: int) -> Result[None]:
        """Delete one of the user's ideas."""
        idea = self._get_owned(idea_id, user_id)
        if idea is None:
            return Result.failure(ErrorKind.NOT_FOUND)

        self.db.delete(idea)
        self.db.commit()
        logger.debug(f"User {user_id} deleted idea {idea_id}")
        return Result.success()
