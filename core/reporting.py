# core/reporting.py
"""
Report and dashboard aggregation over the borrow ledger joined with the
asset registry.

Everything here is a pure function of the records/assets passed in:
filters, the flattened report rows, the per-day trend series and the
top-department ranking. Missing data yields empty results, never errors.
"""
from collections.abc import Iterable
from datetime import date

from pydantic import BaseModel, field_validator

from core.overdue import days_on_loan, is_overdue

ALL = "All"
UNSPECIFIED_DEPARTMENT = "Unspecified"
TOP_DEPARTMENTS_LIMIT = 5


class ReportFilter(BaseModel):
    """User-chosen report filters. A missing date bound is unbounded."""
    date_from: date | None = None
    date_to: date | None = None
    department: str = ALL
    branch: str = ALL

    @field_validator("department", "branch", mode="before")
    @classmethod
    def blank_means_all(cls, value):
        if value is None or (isinstance(value, str) and not value.strip()):
            return ALL
        return value


class ReportRow(BaseModel):
    """Flattened, display-ready borrow record. Field order is column order."""
    id: int
    start_date: str
    asset_id: str
    id_code: str
    asset_name: str
    brand: str
    model: str
    serial: str
    borrower_name: str
    borrower_dept: str
    borrower_branch: str
    asset_branch: str
    has_signature: bool
    returned: bool
    end_date: str


class DailyCount(BaseModel):
    date: str
    count: int


class SeriesSummary(BaseModel):
    total: int
    average: float


class DepartmentCount(BaseModel):
    department: str
    count: int


class DrilldownEntry(BaseModel):
    id: int
    borrower_name: str
    borrower_dept: str
    asset_id: str
    id_code: str
    asset_name: str
    start_date: str
    end_date: str


class OverdueRow(BaseModel):
    id: int
    asset_id: str
    id_code: str
    asset_name: str
    brand: str
    model: str
    serial: str
    borrower_name: str
    borrower_dept: str
    start_date: str
    days_on_loan: int


class DashboardCounts(BaseModel):
    total_assets: int
    on_loan: int
    overdue: int


# ---------- helpers ----------

def _text(obj, field: str) -> str:
    """Attribute as display text; absent object or value becomes ''."""
    if obj is None:
        return ""
    value = getattr(obj, field, None)
    return "" if value is None else str(value)


def _iso(value: date | None) -> str:
    return value.isoformat() if value is not None else ""


def index_assets(assets: Iterable) -> dict:
    """Asset lookup by id; the first asset seen for an id wins."""
    index: dict = {}
    for asset in assets:
        index.setdefault(asset.id, asset)
    return index


def in_date_range(day: date, filt: ReportFilter) -> bool:
    if filt.date_from is not None and day < filt.date_from:
        return False
    if filt.date_to is not None and day > filt.date_to:
        return False
    return True


def matches_filter(record, asset, filt: ReportFilter) -> bool:
    """
    Date range on start_date, then department and branch. Department and
    branch each pass on either the borrower's side or the asset's home.
    """
    if not in_date_range(record.start_date, filt):
        return False

    dept_ok = (
        filt.department == ALL
        or _text(record, "borrower_dept") == filt.department
        or _text(asset, "department") == filt.department
    )
    branch_ok = (
        filt.branch == ALL
        or _text(record, "borrower_branch") == filt.branch
        or _text(asset, "branch") == filt.branch
    )
    return dept_ok and branch_ok


def filter_records(records: Iterable, assets: Iterable, filt: ReportFilter) -> list[tuple]:
    """(record, asset-or-None) pairs that pass the filter, in input order."""
    by_id = index_assets(assets)
    pairs = []
    for record in records:
        asset = by_id.get(record.asset_id)
        if matches_filter(record, asset, filt):
            pairs.append((record, asset))
    return pairs


def department_bucket(record) -> str:
    dept = _text(record, "borrower_dept").strip()
    return dept or UNSPECIFIED_DEPARTMENT


# ---------- report table ----------

def to_report_row(record, asset) -> ReportRow:
    return ReportRow(
        id=record.id,
        start_date=_iso(record.start_date),
        asset_id=_text(asset, "asset_id"),
        id_code=_text(asset, "id_code"),
        asset_name=_text(asset, "name"),
        brand=_text(asset, "brand"),
        model=_text(asset, "model"),
        serial=_text(asset, "serial"),
        borrower_name=_text(record, "borrower_name"),
        borrower_dept=_text(record, "borrower_dept"),
        borrower_branch=_text(record, "borrower_branch"),
        asset_branch=_text(asset, "branch"),
        has_signature=bool(getattr(record, "borrower_signature", None)),
        returned=bool(record.returned),
        end_date=_iso(record.end_date),
    )


def build_report_rows(records: Iterable, assets: Iterable, filt: ReportFilter) -> list[ReportRow]:
    return [to_report_row(record, asset) for record, asset in filter_records(records, assets, filt)]


# ---------- trend series ----------

def daily_borrow_counts(records: Iterable, assets: Iterable, filt: ReportFilter) -> list[DailyCount]:
    """Borrow count per start date, ascending by ISO date string."""
    counts: dict[str, int] = {}
    for record, _asset in filter_records(records, assets, filt):
        key = _iso(record.start_date)
        counts[key] = counts.get(key, 0) + 1
    return [DailyCount(date=day, count=counts[day]) for day in sorted(counts)]


def summarize_series(series: list[DailyCount]) -> SeriesSummary:
    total = sum(point.count for point in series)
    average = total / len(series) if series else 0.0
    return SeriesSummary(total=total, average=average)


# ---------- department ranking ----------

def top_departments(records: Iterable, limit: int = TOP_DEPARTMENTS_LIMIT) -> list[DepartmentCount]:
    """
    Outstanding loans per borrower department, highest first. Ties keep
    the order in which departments were first encountered.
    """
    counts: dict[str, int] = {}
    for record in records:
        if record.returned:
            continue
        bucket = department_bucket(record)
        counts[bucket] = counts.get(bucket, 0) + 1

    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return [DepartmentCount(department=dept, count=count) for dept, count in ranked[:limit]]


def department_drilldown(records: Iterable, assets: Iterable, department: str) -> list[DrilldownEntry]:
    """Outstanding loans for one department bucket."""
    by_id = index_assets(assets)
    entries = []
    for record in records:
        if record.returned or department_bucket(record) != department:
            continue
        asset = by_id.get(record.asset_id)
        entries.append(DrilldownEntry(
            id=record.id,
            borrower_name=_text(record, "borrower_name"),
            borrower_dept=_text(record, "borrower_dept"),
            asset_id=_text(asset, "asset_id"),
            id_code=_text(asset, "id_code"),
            asset_name=_text(asset, "name"),
            start_date=_iso(record.start_date),
            end_date=_iso(record.end_date),
        ))
    return entries


# ---------- dashboard ----------

def overdue_rows(records: Iterable, assets: Iterable, as_of: date) -> list[OverdueRow]:
    by_id = index_assets(assets)
    rows = []
    for record in records:
        if not is_overdue(record, as_of):
            continue
        asset = by_id.get(record.asset_id)
        rows.append(OverdueRow(
            id=record.id,
            asset_id=_text(asset, "asset_id"),
            id_code=_text(asset, "id_code"),
            asset_name=_text(asset, "name"),
            brand=_text(asset, "brand"),
            model=_text(asset, "model"),
            serial=_text(asset, "serial"),
            borrower_name=_text(record, "borrower_name"),
            borrower_dept=_text(record, "borrower_dept"),
            start_date=_iso(record.start_date),
            days_on_loan=days_on_loan(record, as_of),
        ))
    return rows


def dashboard_counts(records: list, assets: list, as_of: date) -> DashboardCounts:
    return DashboardCounts(
        total_assets=len(assets),
        on_loan=sum(1 for record in records if not record.returned),
        overdue=sum(1 for record in records if is_overdue(record, as_of)),
    )
