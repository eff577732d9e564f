"""
Voxboard Backend - Profile Service
===================================

What:  Create, read, and update user profiles; store profile pictures.
How:   Pictures are validated (content type, size), uploaded through the
       BlobStore under `profiles/<epoch-millis>-<original name>`, and the
       resulting public URL is saved with the name.
Who:   Called by the /profile route handlers.

Picture validation order (cheapest first):
    1. Declared content type in ALLOWED_IMAGE_TYPES
    2. Non-empty and at most PROFILE_PICTURE_MAX_SIZE bytes
"""

import logging
import time
from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from voxboard.config import settings
from voxboard.exceptions import (
    DuplicateError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from voxboard.models.profile import Profile
from voxboard.schemas.profile import ProfileResponse
from voxboard.services.storage_service import BlobStore

logger = logging.getLogger(__name__)

ALLOWED_IMAGE_TYPES = {"image/jpeg", "image/png", "image/jpg"}

PICTURE_PREFIX = "profiles"


@dataclass(frozen=True)
class UploadedImage:
    """A fully-read multipart upload."""

    filename: str
    content_type: str
    content: bytes


class ProfileService:
    """
    Responsibilities:
        - create(): reject duplicate emails
        - get(): 404 when absent
        - update(): name always, picture URL only when a new image was sent
    """

    def __init__(self, blob_store: BlobStore, max_picture_size: Optional[int] = None):
        self.blob_store = blob_store
        self.max_picture_size = max_picture_size or settings.profile_picture_max_size

    async def create(
        self, db: AsyncSession, name: Optional[str], email: Optional[str]
    ) -> ProfileResponse:
        if not name or not email:
            raise ValidationError(message="Name and email are required")

        try:
            existing = await db.get(Profile, email)
        except SQLAlchemyError as e:
            raise PersistenceError(context={"email": email}) from e
        if existing is not None:
            raise DuplicateError(resource="profile", key=email)

        profile = Profile(email=email, name=name)
        db.add(profile)
        try:
            await db.flush()
        except IntegrityError as e:
            raise DuplicateError(resource="profile", key=email) from e
        except SQLAlchemyError as e:
            raise PersistenceError(context={"email": email}) from e

        logger.info("Profile created for %s", email)
        return ProfileResponse.model_validate(profile)

    async def get(self, db: AsyncSession, email: str) -> ProfileResponse:
        try:
            result = await db.execute(select(Profile).where(Profile.email == email))
            profile = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            raise PersistenceError(context={"email": email}) from e

        if profile is None:
            raise NotFoundError(resource="profile", message="Profile not found")
        return ProfileResponse.model_validate(profile)

    def validate_picture(self, picture: UploadedImage) -> None:
        """
        Raises:
            ValidationError: unsupported content type, empty file, or too large
        """
        if picture.content_type not in ALLOWED_IMAGE_TYPES:
            raise ValidationError(
                message="Profile picture must be a JPEG or PNG image",
                field="profile_picture",
                context={
                    "content_type": picture.content_type,
                    "allowed": sorted(ALLOWED_IMAGE_TYPES),
                },
            )

        if not picture.content:
            raise ValidationError(message="Profile picture is empty", field="profile_picture")

        if len(picture.content) > self.max_picture_size:
            max_mb = self.max_picture_size / (1024 * 1024)
            raise ValidationError(
                message=f"Profile picture exceeds maximum of {max_mb:.0f}MB",
                field="profile_picture",
                context={"max_size": self.max_picture_size, "actual_size": len(picture.content)},
            )

    @staticmethod
    def build_picture_key(filename: str) -> str:
        """`profiles/<epoch millis>-<basename>`; directory parts are dropped."""
        basename = PurePosixPath(filename.replace("\\", "/")).name or "upload"
        return f"{PICTURE_PREFIX}/{int(time.time() * 1000)}-{basename}"

    async def update(
        self,
        db: AsyncSession,
        email: str,
        name: Optional[str],
        picture: Optional[UploadedImage] = None,
    ) -> ProfileResponse:
        """
        Update the name, and the picture URL when `picture` is given.

        The picture is uploaded before the row is matched, so an update for
        an unknown email still stores the image.

        Raises:
            ValidationError: name missing or picture rejected
            StorageError: the picture upload failed
            NotFoundError: no profile row matched the email
        """
        if not name:
            raise ValidationError(message="Name is required", field="name")

        values = {"name": name}
        if picture is not None:
            self.validate_picture(picture)
            key = self.build_picture_key(picture.filename)
            values["profile_picture_url"] = await self.blob_store.upload(
                picture.content, key, picture.content_type
            )

        try:
            result = await db.execute(
                update(Profile)
                .where(Profile.email == email)
                .values(**values)
                .execution_options(synchronize_session="fetch")
            )
        except SQLAlchemyError as e:
            raise PersistenceError(context={"email": email}) from e

        if result.rowcount == 0:
            raise NotFoundError(resource="profile", message="Profile not found")

        logger.info(
            "Profile %s updated%s",
            email,
            " with new picture" if "profile_picture_url" in values else "",
        )
        return await self.get(db, email)
