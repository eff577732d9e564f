"""
Voxboard Backend - Soundboard Service (Business Logic Orchestrator)
====================================================================

What:  Creates, lists, and deletes soundboards.
How:   Composes the SpeechSynthesizer and BlobStore adapters with the
       database session passed into each call.
Who:   Called by the /soundboards route handlers.

Orchestration Flow (POST /soundboards):
    ┌──────────┐    ┌─────────────┐    ┌──────────────┐    ┌──────────┐
    │ Validate │───▶│ Synthesize  │───▶│ Upload MP3   │───▶│ Persist  │
    │ (fields) │    │ (TTS)       │    │ (<uuid>.mp3) │    │ (DB row) │
    └──────────┘    └─────────────┘    └──────────────┘    └──────────┘

    Strictly sequential; each step needs the previous step's output.
    Any failure after validation becomes one generic creation error.
    Known gap: if the upload succeeds and the insert fails, the uploaded
    blob is left behind. Nothing removes it.

Deletion:
    Look up row (404 if absent, no storage call) -> delete blob (failure
    logged only) -> delete row. The row is always removed once found.
"""

import asyncio
import logging
import uuid
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from voxboard.exceptions import (
    NotFoundError,
    PersistenceError,
    StorageError,
    ValidationError,
    VoxboardError,
)
from voxboard.models.soundboard import Soundboard
from voxboard.schemas.soundboard import SoundboardListItem, SoundboardResponse
from voxboard.services.speech_service import SpeechSynthesizer
from voxboard.services.storage_service import BlobStore

logger = logging.getLogger(__name__)

AUDIO_CONTENT_TYPE = "audio/mpeg"
AUDIO_EXTENSION = ".mp3"


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def _parse_id(soundboard_id: str) -> Optional[uuid.UUID]:
    try:
        return uuid.UUID(str(soundboard_id))
    except ValueError:
        return None


class SoundboardService:
    """
    Business logic for soundboards.

    Responsibilities:
        - create(): validate -> synthesize -> upload -> persist
        - list_by_owner(): newest first, blob existence attached per row
        - delete(): best-effort blob delete, then row delete
    """

    def __init__(self, synthesizer: SpeechSynthesizer, blob_store: BlobStore):
        self.synthesizer = synthesizer
        self.blob_store = blob_store

    @staticmethod
    def generate_file_name() -> str:
        """Random storage key: `<uuid4>.mp3`."""
        return f"{uuid.uuid4()}{AUDIO_EXTENSION}"

    async def create(
        self,
        db: AsyncSession,
        title: Optional[str],
        text: Optional[str],
        owner_email: Optional[str],
    ) -> SoundboardResponse:
        """
        Synthesize `text`, upload the audio, and persist a soundboard row.

        Raises:
            ValidationError: title, text, or owner_email is empty (no external
                call is made)
            VoxboardError: any later step failed ("Failed to create soundboard")
        """
        if _is_blank(title) or _is_blank(text) or _is_blank(owner_email):
            missing = [
                name
                for name, value in (("title", title), ("text", text), ("email", owner_email))
                if _is_blank(value)
            ]
            raise ValidationError(
                message="Title, text, and email are required",
                context={"missing": missing},
            )

        stage = "synthesis"
        try:
            audio = await self.synthesizer.synthesize(text)

            stage = "upload"
            file_name = self.generate_file_name()
            audio_url = await self.blob_store.upload(audio, file_name, AUDIO_CONTENT_TYPE)

            stage = "persist"
            soundboard = Soundboard(
                title=title,
                text=text,
                audio_url=audio_url,
                file_name=file_name,
                created_by_email=owner_email,
            )
            db.add(soundboard)
            await db.flush()
        except Exception as e:
            logger.error(
                "Soundboard creation failed at %s for %s: %s",
                stage,
                owner_email,
                str(e),
                exc_info=not isinstance(e, VoxboardError),
            )
            raise VoxboardError(
                message="Failed to create soundboard",
                context={"stage": stage, "original_error": type(e).__name__},
            ) from e

        logger.info("Soundboard %s created for %s (%s)", soundboard.id, owner_email, file_name)
        return SoundboardResponse.model_validate(soundboard)

    async def list_by_owner(
        self, db: AsyncSession, owner_email: str
    ) -> List[SoundboardListItem]:
        """
        All soundboards of `owner_email`, newest first, each with the outcome
        of an independent blob existence check.

        Raises:
            NotFoundError: the owner has no soundboards
            PersistenceError: the query failed
        """
        try:
            result = await db.execute(
                select(Soundboard)
                .where(Soundboard.created_by_email == owner_email)
                .order_by(Soundboard.created_at.desc())
            )
            soundboards = list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error("Database error listing soundboards for %s: %s", owner_email, str(e))
            raise PersistenceError(
                message="Failed to fetch soundboards",
                context={"error_type": type(e).__name__},
            ) from e

        if not soundboards:
            raise NotFoundError(
                resource="soundboard",
                message="No soundboards found for this email",
                context={"email": owner_email},
            )

        presences = await asyncio.gather(
            *(self.blob_store.exists(sb.file_name) for sb in soundboards)
        )

        return [
            SoundboardListItem(
                **SoundboardResponse.model_validate(sb).model_dump(),
                file_exists=presence.confirmed,
                file_status=presence.value,
            )
            for sb, presence in zip(soundboards, presences)
        ]

    async def delete(self, db: AsyncSession, soundboard_id: str) -> None:
        """
        Delete a soundboard's blob (best effort) and then its row.

        Raises:
            NotFoundError: no soundboard with that id (including malformed ids)
            PersistenceError: the lookup or row delete failed
        """
        parsed_id = _parse_id(soundboard_id)
        if parsed_id is None:
            raise NotFoundError(resource="Soundboard", message="Soundboard not found")

        try:
            soundboard = await db.get(Soundboard, parsed_id)
        except SQLAlchemyError as e:
            raise PersistenceError(
                message="Failed to delete soundboard",
                context={"soundboard_id": soundboard_id, "error_type": type(e).__name__},
            ) from e

        if soundboard is None:
            raise NotFoundError(resource="Soundboard", message="Soundboard not found")

        try:
            await self.blob_store.delete(soundboard.file_name)
        except StorageError as e:
            # Row removal proceeds; the blob may be left behind
            logger.warning(
                "Blob delete failed for soundboard %s (%s): %s",
                soundboard.id,
                soundboard.file_name,
                e.message,
            )

        try:
            await db.delete(soundboard)
            await db.flush()
        except SQLAlchemyError as e:
            raise PersistenceError(
                message="Failed to delete soundboard",
                context={"soundboard_id": soundboard_id, "error_type": type(e).__name__},
            ) from e

        logger.info("Soundboard %s deleted", soundboard_id)
