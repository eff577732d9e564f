"""
Voxboard Backend - Report SQLAlchemy Model
===========================================

What:  Append-only `reports` table, read back page by page newest first.

Index on created_at DESC:
    Serves `ORDER BY created_at DESC LIMIT :limit OFFSET :offset` for
    GET /report.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Index, Text, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column

from voxboard.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Report(Base):
    __tablename__ = "reports"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    comment: Mapped[str] = mapped_column(Text, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )

    __table_args__ = (
        Index("idx_reports_created_at", created_at.desc()),
    )

    def __repr__(self) -> str:
        return f"<Report(id={self.id}, created_at='{self.created_at}')>"
