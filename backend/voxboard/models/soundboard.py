"""
Voxboard Backend - Soundboard SQLAlchemy Model
===============================================

What:  ORM model for the `soundboards` table.
How:   Inherits from the shared DeclarativeBase; Alembic reads it for migrations.
Who:   Used by SoundboardService for create / list-by-owner / delete.

Table Design:
    - UUID primary key generated in Python (portable across PostgreSQL and SQLite)
    - audio_url: public Cloud Storage URL; its last path segment is file_name
    - file_name: storage object key (`<uuid>.mp3`)
    - created_by_email: owner identifier, indexed for list-by-owner
    - created_at / updated_at: UTC, timezone-aware
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Index, String, Text, Uuid
from sqlalchemy import text as sa_text
from sqlalchemy.orm import Mapped, mapped_column

from voxboard.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Soundboard(Base):
    """
    A persisted text + synthesized-audio pair with an owner.

    Lifecycle:
        1. Created after speech synthesis and upload both succeed
        2. Listed by owner, newest first, with a blob existence check per row
        3. Deleted explicitly; blob and row are removed independently

    Query Patterns:
        - List by owner: WHERE created_by_email = :email ORDER BY created_at DESC
          -> idx_soundboards_owner_created
        - Delete: WHERE id = :uuid -> primary key
    """

    __tablename__ = "soundboards"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    title: Mapped[str] = mapped_column(String(255), nullable=False)

    # Source text sent to Text-to-Speech
    text: Mapped[str] = mapped_column(Text, nullable=False)

    audio_url: Mapped[str] = mapped_column(
        String(1024),
        nullable=False,
        comment="Public URL of the synthesized MP3",
    )

    file_name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Storage object key; equals the last path segment of audio_url",
    )

    created_by_email: Mapped[str] = mapped_column(String(255), nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        server_default=sa_text("CURRENT_TIMESTAMP"),
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow,
        server_default=sa_text("CURRENT_TIMESTAMP"),
    )

    __table_args__ = (
        Index("idx_soundboards_owner_created", "created_by_email", created_at.desc()),
    )

    def __repr__(self) -> str:
        return (
            f"<Soundboard(id={self.id}, file_name='{self.file_name}', "
            f"owner='{self.created_by_email}')>"
        )
