"""
Voxboard Backend - History / Message Service
=============================================

What:  Chat history headers (one per owner email) and their messages.
Who:   Called by the /history route handlers.

Rules:
    - A history is created once per email; a second create is rejected
      (not upserted)
    - A message can only be appended when the owner's history exists
    - Deleting a history removes its messages first, then the header row
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from voxboard.exceptions import (
    DuplicateError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from voxboard.models.history import History, Message
from voxboard.schemas.history import HistoryDetail, HistoryResponse, MessageResponse

logger = logging.getLogger(__name__)


def _history_not_found(email: str) -> NotFoundError:
    return NotFoundError(
        resource="history",
        message=f"History for email {email} was not found",
        context={"email": email},
    )


class HistoryService:
    """Stateless; every method receives the request's session."""

    async def _find(self, db: AsyncSession, email: str) -> Optional[History]:
        try:
            result = await db.execute(select(History).where(History.email == email))
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error loading history for %s: %s", email, str(e))
            raise PersistenceError(context={"email": email}) from e

    async def create_history(
        self, db: AsyncSession, email: Optional[str], title: Optional[str]
    ) -> HistoryResponse:
        """
        Raises:
            ValidationError: email or title missing
            DuplicateError: a history already exists for the email
        """
        if not email or not title:
            raise ValidationError(message="Email and title are required")

        if await self._find(db, email) is not None:
            raise DuplicateError(resource="history", key=email)

        history = History(email=email, id=str(uuid.uuid4()), title=title)
        db.add(history)
        try:
            await db.flush()
        except IntegrityError as e:
            # Concurrent create for the same email won the insert
            raise DuplicateError(resource="history", key=email) from e
        except SQLAlchemyError as e:
            raise PersistenceError(context={"email": email}) from e

        logger.info("History %s created for %s", history.id, email)
        return HistoryResponse.model_validate(history)

    async def append_message(
        self,
        db: AsyncSession,
        email: str,
        text: Optional[str],
        is_speech_to_text: Optional[bool],
    ) -> MessageResponse:
        """
        Raises:
            ValidationError: message empty or is_speech_to_text not given
            NotFoundError: no history for the email (nothing is written)
        """
        if not text or is_speech_to_text is None:
            raise ValidationError(message="Message and is_speech_to_text are required")
        if not isinstance(is_speech_to_text, bool):
            raise ValidationError(
                message="is_speech_to_text must be a boolean",
                field="is_speech_to_text",
            )

        if await self._find(db, email) is None:
            raise _history_not_found(email)

        message = Message(
            message_id=str(uuid.uuid4()),
            email=email,
            message=text,
            created_at=datetime.now(timezone.utc),
            is_speech_to_text=is_speech_to_text,
        )
        db.add(message)
        try:
            await db.flush()
        except SQLAlchemyError as e:
            raise PersistenceError(context={"email": email}) from e

        logger.debug("Message %s appended to history of %s", message.message_id, email)
        return MessageResponse.model_validate(message)

    async def get_by_email(self, db: AsyncSession, email: str) -> HistoryDetail:
        """History header plus every message, oldest first."""
        history = await self._find(db, email)
        if history is None:
            raise _history_not_found(email)

        try:
            result = await db.execute(
                select(Message)
                .where(Message.email == email)
                .order_by(Message.created_at.asc())
            )
            messages = list(result.scalars().all())
        except SQLAlchemyError as e:
            raise PersistenceError(context={"email": email}) from e

        return HistoryDetail(
            history=HistoryResponse.model_validate(history),
            messages=[MessageResponse.model_validate(m) for m in messages],
        )

    async def delete_by_email(self, db: AsyncSession, email: str) -> None:
        """Messages first, then the history row."""
        history = await self._find(db, email)
        if history is None:
            raise _history_not_found(email)

        try:
            await db.execute(delete(Message).where(Message.email == email))
            await db.execute(delete(History).where(History.email == email))
        except SQLAlchemyError as e:
            raise PersistenceError(context={"email": email}) from e

        logger.info("History and messages for %s deleted", email)
