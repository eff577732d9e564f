"""
Voxboard Backend - Feedback Service
====================================

What:  Validates and stores app feedback (comment + rating from 1 to 4).
"""

import logging
from typing import Any, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from voxboard.exceptions import PersistenceError, ValidationError
from voxboard.models.feedback import RATING_MAX, RATING_MIN, Feedback
from voxboard.schemas.feedback import FeedbackResponse

logger = logging.getLogger(__name__)


class FeedbackService:

    @staticmethod
    def validate_rating(rating: Any) -> int:
        """Integer (booleans excluded) within RATING_MIN..RATING_MAX."""
        if rating is None:
            raise ValidationError(message="Rating is required", field="rating")
        if isinstance(rating, bool) or not isinstance(rating, int):
            raise ValidationError(message="Rating must be an integer", field="rating")
        if rating < RATING_MIN or rating > RATING_MAX:
            raise ValidationError(
                message=f"Rating must be between {RATING_MIN} and {RATING_MAX}",
                field="rating",
                context={"rating": rating},
            )
        return rating

    async def create(
        self, db: AsyncSession, comment: Optional[str], rating: Any
    ) -> FeedbackResponse:
        if not comment:
            raise ValidationError(message="Comment is required", field="comment")
        rating = self.validate_rating(rating)

        feedback = Feedback(comment=comment, rating=rating)
        db.add(feedback)
        try:
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error storing feedback: %s", str(e))
            raise PersistenceError(context={"error_type": type(e).__name__}) from e

        logger.info("Feedback %s stored (rating=%d)", feedback.id, rating)
        return FeedbackResponse.model_validate(feedback)
