"""Analytics API: summary, breakdowns by category and date, CSV export.

All endpoints accept optional ``start_date``/``end_date`` (inclusive, UTC days).
"""

from datetime import date, datetime
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response

from app.api.v1.dependencies import CurrentUser, get_analytics_service
from app.application.services import AnalyticsService
from app.domain.enums import DateGrouping, TransactionType
from app.schemas.analytics import (
    CategoryTotalResponse,
    CategoryUsageResponse,
    DateTotalResponse,
    SummaryResponse,
)
from app.shared.utils import end_of_day, start_of_day, utc_now

router = APIRouter()

AnalyticsServiceDep = Annotated[AnalyticsService, Depends(get_analytics_service)]


def _range(
    start_date: date | None, end_date: date | None
) -> tuple[datetime | None, datetime | None]:
    return (
        start_of_day(start_date) if start_date else None,
        end_of_day(end_date) if end_date else None,
    )


@router.get("/summary", response_model=SummaryResponse)
async def summary(
    current_user: CurrentUser,
    analytics_service: AnalyticsServiceDep,
    start_date: date | None = None,
    end_date: date | None = None,
):
    result = await analytics_service.summary(current_user.id, *_range(start_date, end_date))
    return SummaryResponse.model_validate(result)


@router.get("/by-category", response_model=list[CategoryTotalResponse])
async def by_category(
    current_user: CurrentUser,
    analytics_service: AnalyticsServiceDep,
    type: TransactionType = TransactionType.EXPENSE,
    start_date: date | None = None,
    end_date: date | None = None,
):
    result = await analytics_service.by_category(
        current_user.id, type, *_range(start_date, end_date)
    )
    return [CategoryTotalResponse.model_validate(r) for r in result]


@router.get("/by-date", response_model=list[DateTotalResponse])
async def by_date(
    current_user: CurrentUser,
    analytics_service: AnalyticsServiceDep,
    grouping: DateGrouping = DateGrouping.DAY,
    start_date: date | None = None,
    end_date: date | None = None,
):
    result = await analytics_service.by_date(
        current_user.id, grouping, *_range(start_date, end_date)
    )
    return [DateTotalResponse.model_validate(r) for r in result]


@router.get("/top-categories", response_model=list[CategoryTotalResponse])
async def top_categories(
    current_user: CurrentUser,
    analytics_service: AnalyticsServiceDep,
    limit: Annotated[int, Query(ge=1, le=20)] = 5,
    type: TransactionType = TransactionType.EXPENSE,
    start_date: date | None = None,
    end_date: date | None = None,
):
    result = await analytics_service.top_categories(
        current_user.id, limit, type, *_range(start_date, end_date)
    )
    return [CategoryTotalResponse.model_validate(r) for r in result]


@router.get("/categories", response_model=list[CategoryUsageResponse])
async def categories(current_user: CurrentUser, analytics_service: AnalyticsServiceDep):
    """Every category with its transaction count."""
    result = await analytics_service.categories(current_user.id)
    return [CategoryUsageResponse.model_validate(r) for r in result]


@router.get("/export", response_class=Response)
async def export(
    current_user: CurrentUser,
    analytics_service: AnalyticsServiceDep,
    start_date: date | None = None,
    end_date: date | None = None,
):
    """Download transactions as CSV. Never cached."""
    content = await analytics_service.export_csv(
        current_user.id, *_range(start_date, end_date)
    )
    filename = f"transactions-{utc_now():%Y%m%d}.csv"
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
