"""
Voxboard Backend - Report Service
==================================

What:  Stores user reports and lists them with page/limit pagination.

Pagination (offset-based):
    offset      = (page - 1) * limit
    total_pages = ceil(total / limit)
    Query plan: SELECT ... ORDER BY created_at DESC LIMIT :limit OFFSET :offset
                -> idx_reports_created_at
    plus a COUNT(*) for the total.
"""

import logging
import math
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from voxboard.exceptions import PersistenceError, ValidationError
from voxboard.models.report import Report
from voxboard.schemas.feedback import ReportPage, ReportResponse

logger = logging.getLogger(__name__)

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100


class ReportService:

    async def create(self, db: AsyncSession, comment: Optional[str]) -> ReportResponse:
        if not comment:
            raise ValidationError(message="Comment is required", field="comment")

        report = Report(comment=comment)
        db.add(report)
        try:
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error storing report: %s", str(e))
            raise PersistenceError(context={"error_type": type(e).__name__}) from e

        logger.info("Report %s stored", report.id)
        return ReportResponse.model_validate(report)

    async def list(
        self, db: AsyncSession, page: int = DEFAULT_PAGE, limit: int = DEFAULT_LIMIT
    ) -> ReportPage:
        """
        One page of reports, newest first.

        Raises:
            ValidationError: page < 1 or limit outside 1..MAX_LIMIT
            PersistenceError: either query failed
        """
        if page < 1:
            raise ValidationError(message="page must be at least 1", field="page")
        if limit < 1 or limit > MAX_LIMIT:
            raise ValidationError(
                message=f"limit must be between 1 and {MAX_LIMIT}",
                field="limit",
            )

        try:
            total = (await db.execute(select(func.count(Report.id)))).scalar() or 0
            result = await db.execute(
                select(Report)
                .order_by(Report.created_at.desc())
                .limit(limit)
                .offset((page - 1) * limit)
            )
            reports = list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error("Database error listing reports: %s", str(e), exc_info=True)
            raise PersistenceError(
                message="Could not retrieve reports. Please try again.",
                context={"error_type": type(e).__name__},
            ) from e

        return ReportPage(
            total=total,
            current_page=page,
            total_pages=math.ceil(total / limit),
            data=[ReportResponse.model_validate(r) for r in reports],
        )
