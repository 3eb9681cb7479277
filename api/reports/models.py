# api/reports/models.py
"""
Pydantic models for report responses. Row shapes come from core.reporting.
"""
from pydantic import BaseModel

from core.reporting import (
    ReportFilter,
    ReportRow,
    DepartmentCount,
    DrilldownEntry,
)


class ReportResponse(BaseModel):
    filters: ReportFilter
    count: int
    rows: list[ReportRow]


class TopDepartmentsResponse(BaseModel):
    """Departments holding the most outstanding loans."""
    limit: int
    departments: list[DepartmentCount]


class DepartmentDrilldownResponse(BaseModel):
    department: str
    count: int
    loans: list[DrilldownEntry]
