# api/dashboard/models.py
"""
Pydantic models for dashboard responses.
"""
from datetime import date

from pydantic import BaseModel

from core.reporting import DailyCount, OverdueRow, ReportFilter


class DashboardOverview(BaseModel):
    """Headline tiles plus the list of loans past the 14-day limit."""
    as_of: date
    total_assets: int
    on_loan: int
    overdue: int
    overdue_loans: list[OverdueRow]


class BorrowTrend(BaseModel):
    """Borrows per day for the trend chart."""
    filters: ReportFilter
    series: list[DailyCount]
    total: int
    average: float
