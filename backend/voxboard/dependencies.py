"""
Voxboard Backend - Route Dependencies
======================================

What:  FastAPI dependency functions that hand the service objects built in
       create_app() to route handlers.
How:   Every service lives on `app.state`; handlers declare
       `Depends(get_soundboard_service)` etc. Tests replace the objects on
       `app.state` (or use `app.dependency_overrides`) to inject fakes.
"""

from fastapi import Request

from voxboard.services.feedback_service import FeedbackService
from voxboard.services.history_service import HistoryService
from voxboard.services.llm_base import TextGenerator
from voxboard.services.profile_service import ProfileService
from voxboard.services.report_service import ReportService
from voxboard.services.soundboard_service import SoundboardService


def get_soundboard_service(request: Request) -> SoundboardService:
    return request.app.state.soundboard_service


def get_history_service(request: Request) -> HistoryService:
    return request.app.state.history_service


def get_profile_service(request: Request) -> ProfileService:
    return request.app.state.profile_service


def get_feedback_service(request: Request) -> FeedbackService:
    return request.app.state.feedback_service


def get_report_service(request: Request) -> ReportService:
    return request.app.state.report_service


def get_text_generator(request: Request) -> TextGenerator:
    return request.app.state.text_generator
