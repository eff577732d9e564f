"""
Voxboard Backend - Profile Route Handlers
==========================================

What:  POST /profile (JSON), GET /profile/{email}, PUT /profile/{email}.
How:   The update is multipart/form-data: a `name` field and an optional
       `profile_picture` file. The file is read fully into memory here and
       handed to ProfileService, which checks type and size before upload.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from voxboard.database import get_db_session
from voxboard.dependencies import get_profile_service
from voxboard.schemas.common import ApiResponse, ErrorResponse
from voxboard.schemas.profile import ProfileCreateRequest, ProfileResponse
from voxboard.services.profile_service import ProfileService, UploadedImage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/profile", tags=["Profile"])


@router.post(
    "",
    status_code=201,
    response_model=ApiResponse[ProfileResponse],
    responses={400: {"description": "Missing fields or email taken", "model": ErrorResponse}},
    summary="Create a profile",
)
async def create_profile(
    body: ProfileCreateRequest,
    db: AsyncSession = Depends(get_db_session),
    service: ProfileService = Depends(get_profile_service),
):
    profile = await service.create(db=db, name=body.name, email=body.email)
    return ApiResponse(message="Profile created successfully", data=profile)


@router.get(
    "/{email}",
    response_model=ApiResponse[ProfileResponse],
    responses={404: {"description": "Profile not found", "model": ErrorResponse}},
    summary="Get a profile",
)
async def get_profile(
    email: str,
    db: AsyncSession = Depends(get_db_session),
    service: ProfileService = Depends(get_profile_service),
):
    profile = await service.get(db=db, email=email)
    return ApiResponse(data=profile)


@router.put(
    "/{email}",
    response_model=ApiResponse[ProfileResponse],
    responses={
        400: {"description": "Name missing or picture rejected", "model": ErrorResponse},
        404: {"description": "Profile not found", "model": ErrorResponse},
        500: {"description": "Picture upload failed", "model": ErrorResponse},
    },
    summary="Update a profile's name and optionally its picture",
)
async def update_profile(
    email: str,
    name: Optional[str] = Form(default=None),
    profile_picture: Optional[UploadFile] = File(
        default=None,
        description="JPEG or PNG image, max 5MB",
    ),
    db: AsyncSession = Depends(get_db_session),
    service: ProfileService = Depends(get_profile_service),
):
    picture = None
    if profile_picture is not None and profile_picture.filename:
        try:
            content = await profile_picture.read()
        finally:
            await profile_picture.close()
        logger.info(
            "Received profile picture for %s: filename=%s, size=%d bytes",
            email,
            profile_picture.filename,
            len(content),
        )
        picture = UploadedImage(
            filename=profile_picture.filename,
            content_type=profile_picture.content_type or "",
            content=content,
        )

    profile = await service.update(db=db, email=email, name=name, picture=picture)
    return ApiResponse(message="Profile updated successfully", data=profile)
