# api/reports/views.py
"""
Borrow report endpoints: filtered table, spreadsheet export and the
department ranking.
"""
from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from db import get_session
from core.deps import CurrentUser
from core.export import EXPORT_FILENAME, XLSX_MEDIA_TYPE
from core.reporting import ALL, ReportFilter, TOP_DEPARTMENTS_LIMIT
from .models import (
    ReportResponse,
    TopDepartmentsResponse,
    DepartmentDrilldownResponse,
)
from . import db_manager

router = APIRouter(prefix="/reports", tags=["reports"])


def report_filter(
    date_from: date | None = Query(None, description="First borrow date included"),
    date_to: date | None = Query(None, description="Last borrow date included"),
    department: str = Query(ALL, description="Borrower or asset department, or All"),
    branch: str = Query(ALL, description="Borrower or asset branch, or All"),
) -> ReportFilter:
    return ReportFilter(
        date_from=date_from,
        date_to=date_to,
        department=department,
        branch=branch,
    )


Filters = Annotated[ReportFilter, Depends(report_filter)]


@router.get(
    "/borrows",
    response_model=ReportResponse,
    summary="Borrow report",
)
async def borrow_report_endpoint(
    filters: Filters,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_session),
) -> ReportResponse:
    """
    Borrow records joined with their assets, filtered by borrow date range,
    department and branch.
    """
    data = await db_manager.get_report(db, filters)
    return ReportResponse(**data)


@router.get(
    "/borrows/export",
    summary="Export the borrow report as .xlsx",
    response_class=Response,
)
async def export_report_endpoint(
    filters: Filters,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_session),
) -> Response:
    content = await db_manager.export_report(db, filters)
    return Response(
        content=content,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{EXPORT_FILENAME}"'},
    )


@router.get(
    "/top-departments",
    response_model=TopDepartmentsResponse,
    summary="Departments with the most outstanding loans",
)
async def top_departments_endpoint(
    current_user: CurrentUser,
    limit: int = Query(TOP_DEPARTMENTS_LIMIT, ge=1, le=50),
    db: AsyncSession = Depends(get_session),
) -> TopDepartmentsResponse:
    data = await db_manager.get_top_departments(db, limit)
    return TopDepartmentsResponse(**data)


@router.get(
    "/top-departments/{department}",
    response_model=DepartmentDrilldownResponse,
    summary="Outstanding loans of one department",
)
async def department_drilldown_endpoint(
    department: str,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_session),
) -> DepartmentDrilldownResponse:
    """Use 'Unspecified' for loans recorded without a department."""
    data = await db_manager.get_department_drilldown(db, department)
    return DepartmentDrilldownResponse(**data)
