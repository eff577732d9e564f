"""
Voxboard Backend - Soundboard Schemas
======================================

Wire format uses camelCase (audioUrl, fileName, createdByEmail, createdAt),
matching the mobile client.
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from voxboard.schemas.common import CamelModel


class SoundboardCreateRequest(BaseModel):
    """Body of POST /soundboards. All three fields are required by the service."""

    title: Optional[str] = Field(default=None, description="Display title")
    text: Optional[str] = Field(default=None, description="Text to synthesize")
    email: Optional[str] = Field(default=None, description="Owner email")


class SoundboardResponse(CamelModel):
    id: uuid.UUID
    title: str
    text: str
    audio_url: str = Field(description="Public URL of the MP3")
    file_name: str = Field(description="Storage key; last path segment of audioUrl")
    created_by_email: str
    created_at: datetime
    updated_at: datetime


class SoundboardListItem(SoundboardResponse):
    """
    A soundboard plus the result of its blob existence check.

    fileExists is true only when storage confirmed the object. fileStatus
    tells a confirmed absence ("absent") apart from a failed check ("unknown").
    """

    file_exists: bool
    file_status: str = Field(description="present, absent, or unknown")
