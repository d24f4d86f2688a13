"""Idea model."""

import uuid
from decimal import ROUND_HALF_UP, Decimal

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Uuid, func
from sqlalchemy.orm import column_property

from idea_pool.database import Base
from idea_pool.models.mixins import utc_now

SCORE_PRECISION = Decimal("0.1")


def compute_average_score(impact: int, ease: int, confidence: int) -> float:
    """Mean of the three ICE components, rounded half up to one decimal."""
    total = Decimal(impact + ease + confidence) / Decimal(3)
    return float(total.quantize(SCORE_PRECISION, rounding=ROUND_HALF_UP))


class Idea(Base):
    """An idea scored by Impact, Ease and Confidence, owned by one user."""

    __tablename__ = "ideas"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    content = Column(String(255), nullable=False)
    impact = Column(Integer, nullable=False)
    ease = Column(Integer, nullable=False)
    confidence = Column(Integer, nullable=False)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    # Python-side default keeps sub-second resolution on every backend
    created_at = Column(
        DateTime(timezone=True), default=utc_now, server_default=func.now(), nullable=False
    )

    # Sum of the ICE components; orders identically to the rounded average
    score_total = column_property(impact + ease + confidence)

    @property
    def average_score(self) -> float:
        """Derived ICE score, never stored."""
        return compute_average_score(self.impact, self.ease, self.confidence)
