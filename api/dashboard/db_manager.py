# api/dashboard/db_manager.py
"""
Business logic for dashboard statistics.
"""
from datetime import date

from sqlalchemy.ext.asyncio import AsyncSession

from core import reporting
from api.reports.db_manager import load_snapshot


async def get_overview(db: AsyncSession, as_of: date) -> dict:
    """
    Asset count, open loans and overdue loans as of `as_of`.
    """
    records, assets = await load_snapshot(db)
    counts = reporting.dashboard_counts(records, assets, as_of)

    return {
        "as_of": as_of,
        "total_assets": counts.total_assets,
        "on_loan": counts.on_loan,
        "overdue": counts.overdue,
        "overdue_loans": reporting.overdue_rows(records, assets, as_of),
    }


async def get_borrow_trend(db: AsyncSession, filt: reporting.ReportFilter) -> dict:
    """Daily borrow counts under the filter, with total and per-day average."""
    records, assets = await load_snapshot(db)
    series = reporting.daily_borrow_counts(records, assets, filt)
    summary = reporting.summarize_series(series)

    return {
        "filters": filt,
        "series": series,
        "total": summary.total,
        "average": round(summary.average, 2),
    }
