"""
Voxboard Backend - Chat History SQLAlchemy Models
==================================================

What:  `history` (one chat session header per owner) and `message` (chat
       entries belonging to a history, keyed by owner email).
Who:   Used by HistoryService.

Relationship:
    message.email references history.email. Existence of the history row is
    checked by the service before a message is inserted; messages are
    deleted before their history row.
"""

from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from voxboard.database import Base


class History(Base):
    """Single chat session header per owner email."""

    __tablename__ = "history"

    # Email is the natural key: at most one history per owner
    email: Mapped[str] = mapped_column(String(255), primary_key=True)

    # Generated UUID text, returned to clients as the session id
    id: Mapped[str] = mapped_column(String(64), nullable=False)

    title: Mapped[str] = mapped_column(String(255), nullable=False)

    def __repr__(self) -> str:
        return f"<History(email='{self.email}', id='{self.id}')>"


class Message(Base):
    """
    One chat entry belonging to a History.

    is_speech_to_text marks entries that came from the speech-to-text input
    rather than the keyboard.
    """

    __tablename__ = "message"

    message_id: Mapped[str] = mapped_column(String(64), primary_key=True)

    email: Mapped[str] = mapped_column(
        String(255),
        ForeignKey("history.email"),
        nullable=False,
    )

    message: Mapped[str] = mapped_column(Text, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    is_speech_to_text: Mapped[bool] = mapped_column(Boolean, nullable=False)

    __table_args__ = (
        Index("idx_message_email_created", "email", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Message(message_id='{self.message_id}', email='{self.email}')>"
