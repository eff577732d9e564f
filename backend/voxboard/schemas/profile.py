"""Voxboard Backend - Profile Schemas"""

from typing import Optional

from pydantic import BaseModel, ConfigDict


class ProfileCreateRequest(BaseModel):
    """Body of POST /profile. Updates arrive as multipart form data instead."""

    name: Optional[str] = None
    email: Optional[str] = None


class ProfileResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    email: str
    name: str
    profile_picture_url: Optional[str] = None
