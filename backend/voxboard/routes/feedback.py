"""
Voxboard Backend - Feedback & Report Route Handlers
====================================================

What:  POST /feedback, POST /report, GET /report?page=&limit=.
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from voxboard.database import get_db_session
from voxboard.dependencies import get_feedback_service, get_report_service
from voxboard.schemas.common import ApiResponse, ErrorResponse
from voxboard.schemas.feedback import (
    FeedbackCreateRequest,
    FeedbackResponse,
    ReportCreateRequest,
    ReportPage,
    ReportResponse,
)
from voxboard.services.feedback_service import FeedbackService
from voxboard.services.report_service import (
    DEFAULT_LIMIT,
    DEFAULT_PAGE,
    MAX_LIMIT,
    ReportService,
)

router = APIRouter(tags=["Feedback"])


@router.post(
    "/feedback",
    status_code=201,
    response_model=ApiResponse[FeedbackResponse],
    responses={400: {"description": "Comment missing or rating outside 1-4", "model": ErrorResponse}},
    summary="Submit app feedback",
)
async def create_feedback(
    body: FeedbackCreateRequest,
    db: AsyncSession = Depends(get_db_session),
    service: FeedbackService = Depends(get_feedback_service),
):
    feedback = await service.create(db=db, comment=body.comment, rating=body.rating)
    return ApiResponse(message="Feedback submitted successfully", data=feedback)


@router.post(
    "/report",
    status_code=201,
    response_model=ApiResponse[ReportResponse],
    responses={400: {"description": "Comment missing", "model": ErrorResponse}},
    summary="Submit a report",
)
async def create_report(
    body: ReportCreateRequest,
    db: AsyncSession = Depends(get_db_session),
    service: ReportService = Depends(get_report_service),
):
    report = await service.create(db=db, comment=body.comment)
    return ApiResponse(message="Report submitted successfully", data=report)


@router.get(
    "/report",
    response_model=ReportPage,
    responses={
        400: {"description": "Invalid page or limit", "model": ErrorResponse},
        500: {"description": "Database failure", "model": ErrorResponse},
    },
    summary="List reports, newest first",
)
async def list_reports(
    page: int = Query(default=DEFAULT_PAGE, ge=1, description="1-based page number"),
    limit: int = Query(
        default=DEFAULT_LIMIT, ge=1, le=MAX_LIMIT, description="Items per page (max 100)"
    ),
    db: AsyncSession = Depends(get_db_session),
    service: ReportService = Depends(get_report_service),
):
    return await service.list(db=db, page=page, limit=limit)
