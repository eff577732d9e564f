"""
Voxboard Backend - Chat History Route Handlers
===============================================

What:  History headers and their messages, keyed by owner email.

Route order matters: POST /history/email is registered before
POST /history/{email} so the literal path is not captured as an email.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from voxboard.database import get_db_session
from voxboard.dependencies import get_history_service
from voxboard.schemas.common import ApiResponse, ErrorResponse
from voxboard.schemas.history import (
    HistoryCreateRequest,
    HistoryDetail,
    HistoryResponse,
    MessageCreateRequest,
    MessageResponse,
)
from voxboard.services.history_service import HistoryService

router = APIRouter(prefix="/history", tags=["History"])


@router.post(
    "/email",
    status_code=201,
    response_model=ApiResponse[HistoryResponse],
    responses={400: {"description": "Missing fields or history exists", "model": ErrorResponse}},
    summary="Create the chat history for an email",
)
async def create_history(
    body: HistoryCreateRequest,
    db: AsyncSession = Depends(get_db_session),
    service: HistoryService = Depends(get_history_service),
):
    history = await service.create_history(db=db, email=body.email, title=body.title)
    return ApiResponse(message="History created successfully", data=history)


@router.post(
    "/{email}",
    status_code=201,
    response_model=ApiResponse[MessageResponse],
    responses={
        400: {"description": "Missing fields", "model": ErrorResponse},
        404: {"description": "No history for the email", "model": ErrorResponse},
    },
    summary="Append a message to an email's history",
)
async def append_message(
    email: str,
    body: MessageCreateRequest,
    db: AsyncSession = Depends(get_db_session),
    service: HistoryService = Depends(get_history_service),
):
    message = await service.append_message(
        db=db,
        email=email,
        text=body.message,
        is_speech_to_text=body.is_speech_to_text,
    )
    return ApiResponse(message="Message created successfully", data=message)


@router.get(
    "/{email}",
    response_model=ApiResponse[HistoryDetail],
    responses={404: {"description": "No history for the email", "model": ErrorResponse}},
    summary="Get a history with all of its messages",
)
async def get_history(
    email: str,
    db: AsyncSession = Depends(get_db_session),
    service: HistoryService = Depends(get_history_service),
):
    detail = await service.get_by_email(db=db, email=email)
    return ApiResponse(message="History found", data=detail)


@router.delete(
    "/{email}",
    response_model=ApiResponse[None],
    responses={404: {"description": "No history for the email", "model": ErrorResponse}},
    summary="Delete a history and all of its messages",
)
async def delete_history(
    email: str,
    db: AsyncSession = Depends(get_db_session),
    service: HistoryService = Depends(get_history_service),
):
    await service.delete_by_email(db=db, email=email)
    return ApiResponse(message=f"History and messages for {email} have been deleted")
