"""
Voxboard Backend - Feedback & Report Schemas
=============================================

Feedback is a plain insert; reports are read back with page/limit
pagination. Report payloads use camelCase keys (createdAt, currentPage,
totalPages).
"""

import uuid
from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from voxboard.schemas.common import CamelModel


class FeedbackCreateRequest(BaseModel):
    comment: Optional[str] = None
    rating: Optional[Any] = Field(default=None, description="Integer from 1 to 4")


class FeedbackResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    comment: str
    rating: int


class ReportCreateRequest(BaseModel):
    comment: Optional[str] = None


class ReportResponse(CamelModel):
    id: uuid.UUID
    comment: str
    created_at: datetime
    updated_at: datetime


class ReportPage(CamelModel):
    """
    One page of reports, newest first.

    Example (limit=10, 25 reports, page=1):
        {"success": true, "total": 25, "currentPage": 1, "totalPages": 3, "data": [...10 items]}
    """

    success: bool = True
    total: int = Field(description="Total number of reports")
    current_page: int
    total_pages: int = Field(description="ceil(total / limit)")
    data: List[ReportResponse]
