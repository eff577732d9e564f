"""
Voxboard Backend - Profile SQLAlchemy Model
============================================

What:  `profile` table: one row per user email with a display name and an
       optional profile picture URL (a public Cloud Storage object).
"""

from typing import Optional

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from voxboard.database import Base


class Profile(Base):
    __tablename__ = "profile"

    email: Mapped[str] = mapped_column(String(255), primary_key=True)

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    # Only set once a picture has been uploaded through PUT /profile/{email}
    profile_picture_url: Mapped[Optional[str]] = mapped_column(
        String(1024),
        nullable=True,
        default=None,
    )

    def __repr__(self) -> str:
        return f"<Profile(email='{self.email}', name='{self.name}')>"
