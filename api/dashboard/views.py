# api/dashboard/views.py
"""
Dashboard and aggregate statistics endpoints.
"""
from datetime import date

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from db import get_session
from core.deps import CurrentUser, Today
from api.reports.views import Filters
from .models import DashboardOverview, BorrowTrend
from . import db_manager

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get(
    "/overview",
    response_model=DashboardOverview,
    summary="Get headline lending statistics",
)
async def get_overview_endpoint(
    current_user: CurrentUser,
    today: Today,
    as_of: date | None = Query(None, description="Evaluate overdue loans as of this date (default today)"),
    db: AsyncSession = Depends(get_session),
) -> DashboardOverview:
    """
    Total assets, loans currently out, and loans overdue (open for more
    than 14 days), with the overdue loans listed.
    """
    data = await db_manager.get_overview(db, as_of or today)
    return DashboardOverview(**data)


@router.get(
    "/trend",
    response_model=BorrowTrend,
    summary="Borrows per day",
)
async def get_trend_endpoint(
    filters: Filters,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_session),
) -> BorrowTrend:
    """
    Number of loans started on each day within the filters, oldest day first.
    """
    data = await db_manager.get_borrow_trend(db, filters)
    return BorrowTrend(**data)
