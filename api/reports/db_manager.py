# api/reports/db_manager.py
"""
Report assembly: load a fresh ledger/registry snapshot and run the
aggregations from core.reporting over it.
"""
from sqlalchemy.ext.asyncio import AsyncSession

from core import reporting
from core.export import build_report_workbook
from core.store import fetch_all
from api.assets import queries as asset_queries
from api.borrows import queries as borrow_queries


async def load_snapshot(db: AsyncSession) -> tuple[list, list]:
    """(borrow records newest first, assets) as currently stored."""
    records = await fetch_all(db, borrow_queries.select_all_borrows(), what="borrows")
    assets = await fetch_all(db, asset_queries.select_all_assets(), what="assets")
    return records, assets


async def get_report(db: AsyncSession, filt: reporting.ReportFilter) -> dict:
    records, assets = await load_snapshot(db)
    rows = reporting.build_report_rows(records, assets, filt)
    return {
        "filters": filt,
        "count": len(rows),
        "rows": rows,
    }


async def export_report(db: AsyncSession, filt: reporting.ReportFilter) -> bytes:
    """Same rows as get_report, as an xlsx workbook."""
    records, assets = await load_snapshot(db)
    rows = reporting.build_report_rows(records, assets, filt)
    return build_report_workbook(rows)


async def get_top_departments(db: AsyncSession, limit: int) -> dict:
    records, _assets = await load_snapshot(db)
    return {
        "limit": limit,
        "departments": reporting.top_departments(records, limit=limit),
    }


async def get_department_drilldown(db: AsyncSession, department: str) -> dict:
    records, assets = await load_snapshot(db)
    loans = reporting.department_drilldown(records, assets, department)
    return {
        "department": department,
        "count": len(loans),
        "loans": loans,
    }
