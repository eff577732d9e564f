"""
Voxboard Backend - Feedback SQLAlchemy Model
=============================================

What:  Append-only `feedback` table. Rating is constrained to 1..4 in the
       database as well as in FeedbackService.
"""

from sqlalchemy import CheckConstraint, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from voxboard.database import Base

RATING_MIN = 1
RATING_MAX = 4


class Feedback(Base):
    __tablename__ = "feedback"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    comment: Mapped[str] = mapped_column(Text, nullable=False)

    rating: Mapped[int] = mapped_column(Integer, nullable=False)

    __table_args__ = (
        CheckConstraint(
            f"rating >= {RATING_MIN} AND rating <= {RATING_MAX}",
            name="ck_feedback_rating_range",
        ),
    )

    def __repr__(self) -> str:
        return f"<Feedback(id={self.id}, rating={self.rating})>"
