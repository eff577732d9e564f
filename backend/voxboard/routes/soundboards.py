"""
Voxboard Backend - Soundboard Route Handlers
=============================================

What:  POST /soundboards, GET /soundboards/{email}, DELETE /soundboards/{id}.
How:   Thin handlers: read the body/path, call SoundboardService, wrap the
       result in the ApiResponse envelope. Errors are formatted by the
       global exception handlers in main.py.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from voxboard.database import get_db_session
from voxboard.dependencies import get_soundboard_service
from voxboard.schemas.common import ApiResponse, ErrorResponse
from voxboard.schemas.soundboard import (
    SoundboardCreateRequest,
    SoundboardListItem,
    SoundboardResponse,
)
from voxboard.services.soundboard_service import SoundboardService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/soundboards", tags=["Soundboards"])


@router.post(
    "",
    status_code=201,
    response_model=ApiResponse[SoundboardResponse],
    response_model_by_alias=True,
    responses={
        400: {"description": "Title, text, or email missing", "model": ErrorResponse},
        500: {"description": "Synthesis, storage, or database failure", "model": ErrorResponse},
    },
    summary="Synthesize text into a stored soundboard",
)
async def create_soundboard(
    body: SoundboardCreateRequest,
    db: AsyncSession = Depends(get_db_session),
    service: SoundboardService = Depends(get_soundboard_service),
):
    soundboard = await service.create(
        db=db, title=body.title, text=body.text, owner_email=body.email
    )
    return ApiResponse(message="Soundboard created successfully", data=soundboard)


@router.get(
    "/{email}",
    response_model=ApiResponse[List[SoundboardListItem]],
    response_model_by_alias=True,
    responses={
        404: {"description": "Owner has no soundboards", "model": ErrorResponse},
        500: {"description": "Database failure", "model": ErrorResponse},
    },
    summary="List an owner's soundboards, newest first",
)
async def list_soundboards(
    email: str,
    db: AsyncSession = Depends(get_db_session),
    service: SoundboardService = Depends(get_soundboard_service),
):
    """Each item carries `fileExists` (confirmed) and `fileStatus` (present/absent/unknown)."""
    items = await service.list_by_owner(db=db, owner_email=email)
    return ApiResponse(message="Soundboards retrieved successfully", data=items)


@router.delete(
    "/{soundboard_id}",
    response_model=ApiResponse[None],
    responses={
        404: {"description": "Soundboard not found", "model": ErrorResponse},
        500: {"description": "Database failure", "model": ErrorResponse},
    },
    summary="Delete a soundboard and its audio file",
)
async def delete_soundboard(
    soundboard_id: str,
    db: AsyncSession = Depends(get_db_session),
    service: SoundboardService = Depends(get_soundboard_service),
):
    await service.delete(db=db, soundboard_id=soundboard_id)
    return ApiResponse(message="Soundboard deleted successfully")
