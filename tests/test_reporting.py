from datetime import date, timedelta
from types import SimpleNamespace

from core.overdue import is_overdue
from core.reporting import (
    ALL,
    UNSPECIFIED_DEPARTMENT,
    ReportFilter,
    build_report_rows,
    daily_borrow_counts,
    dashboard_counts,
    department_drilldown,
    overdue_rows,
    summarize_series,
    top_departments,
)

AS_OF = date(2025, 3, 20)


def asset(pk, tag, **fields):
    values = dict(id=pk, asset_id=tag, id_code=None, name=f"Device {tag}", brand=None,
                  model=None, serial=None, department=None, branch=None)
    values.update(fields)
    return SimpleNamespace(**values)


def loan(pk, asset_id, start, dept="ICU", branch="Main", returned=False, **fields):
    values = dict(id=pk, asset_id=asset_id, start_date=start, end_date=None, returned=returned,
                  borrower_name="Nurse", borrower_dept=dept, borrower_branch=branch,
                  borrower_signature=None)
    values.update(fields)
    return SimpleNamespace(**values)


ASSETS = [
    asset(1, "EQ-001", department="ICU", branch="Main", brand="Philips"),
    asset(2, "EQ-002", department="Surgery", branch="North"),
]


def test_blank_filter_values_mean_all():
    filt = ReportFilter(department="", branch=None)
    assert filt.department == ALL
    assert filt.branch == ALL


def test_unmatched_asset_fields_are_empty_strings():
    rows = build_report_rows([loan(1, 99, date(2025, 3, 1)), loan(2, None, date(2025, 3, 1))], ASSETS, ReportFilter())
    assert len(rows) == 2
    for row in rows:
        assert row.asset_id == ""
        assert row.asset_name == ""
        assert row.brand == ""
        assert row.end_date == ""


def test_row_carries_signature_flag_not_payload():
    record = loan(1, 1, date(2025, 3, 1), borrower_signature="data:image/png;base64,AAAA")
    row = build_report_rows([record], ASSETS, ReportFilter())[0]
    assert row.has_signature is True
    assert "borrower_signature" not in row.model_dump()
    assert row.brand == "Philips"


def test_date_range_is_inclusive():
    start, end = date(2025, 3, 5), date(2025, 3, 10)
    records = [
        loan(1, 1, start - timedelta(days=1)),
        loan(2, 1, start),
        loan(3, 1, end),
        loan(4, 1, end + timedelta(days=1)),
    ]
    rows = build_report_rows(records, ASSETS, ReportFilter(date_from=start, date_to=end))
    assert [r.id for r in rows] == [2, 3]


def test_open_bounds():
    records = [loan(1, 1, date(2020, 1, 1)), loan(2, 1, date(2030, 1, 1))]
    assert len(build_report_rows(records, ASSETS, ReportFilter(date_to=date(2025, 1, 1)))) == 1
    assert len(build_report_rows(records, ASSETS, ReportFilter(date_from=date(2025, 1, 1)))) == 1


def test_department_matches_borrower_or_asset_home():
    records = [
        loan(1, 1, date(2025, 3, 1), dept="ER"),       # asset homed in ICU
        loan(2, 2, date(2025, 3, 1), dept="ICU"),      # borrower in ICU
        loan(3, 2, date(2025, 3, 1), dept="ER"),       # neither
    ]
    rows = build_report_rows(records, ASSETS, ReportFilter(department="ICU"))
    assert [r.id for r in rows] == [1, 2]


def test_branch_matches_borrower_or_asset_branch():
    records = [
        loan(1, 2, date(2025, 3, 1), branch="East"),   # asset branch North
        loan(2, 1, date(2025, 3, 1), branch="North"),  # borrower branch North
        loan(3, 1, date(2025, 3, 1), branch="East"),
    ]
    rows = build_report_rows(records, ASSETS, ReportFilter(branch="North"))
    assert [r.id for r in rows] == [1, 2]


def test_filter_is_deterministic():
    records = [loan(i, 1 + i % 2, date(2025, 3, 1 + i % 5), dept=["ICU", "ER"][i % 2]) for i in range(1, 20)]
    filt = ReportFilter(department="ICU", date_from=date(2025, 3, 2))
    assert build_report_rows(records, ASSETS, filt) == build_report_rows(records, ASSETS, filt)


def test_daily_counts_sorted_ascending():
    records = [
        loan(1, 1, date(2025, 3, 10)),
        loan(2, 2, date(2025, 3, 2)),
        loan(3, 1, date(2025, 3, 10)),
    ]
    series = daily_borrow_counts(records, ASSETS, ReportFilter())
    assert [(p.date, p.count) for p in series] == [("2025-03-02", 1), ("2025-03-10", 2)]
    summary = summarize_series(series)
    assert summary.total == 3
    assert summary.average == 1.5


def test_empty_series_average_is_zero():
    series = daily_borrow_counts([], ASSETS, ReportFilter())
    assert series == []
    summary = summarize_series(series)
    assert summary.total == 0
    assert summary.average == 0


def test_top_five_keeps_first_seen_order_on_ties():
    counts = {"A": 3, "B": 3, "C": 2, "D": 1, "E": 1, "F": 1}
    records = []
    pk = 0
    for dept, count in counts.items():
        for _ in range(count):
            pk += 1
            records.append(loan(pk, pk, date(2025, 3, 1), dept=dept))

    top = top_departments(records)
    assert [(d.department, d.count) for d in top] == [
        ("A", 3), ("B", 3), ("C", 2), ("D", 1), ("E", 1),
    ]


def test_top_departments_ignores_returned_and_buckets_blank():
    records = [
        loan(1, 1, date(2025, 3, 1), dept="ICU", returned=True),
        loan(2, 2, date(2025, 3, 1), dept=""),
        loan(3, 3, date(2025, 3, 1), dept=None),
        loan(4, 4, date(2025, 3, 1), dept="ER"),
    ]
    top = top_departments(records)
    assert [(d.department, d.count) for d in top] == [(UNSPECIFIED_DEPARTMENT, 2), ("ER", 1)]
    assert top_departments([]) == []


def test_drilldown_lists_outstanding_loans_of_department():
    records = [
        loan(1, 1, date(2025, 3, 1), dept="ICU"),
        loan(2, 2, date(2025, 3, 2), dept="ICU", returned=True),
        loan(3, 2, date(2025, 3, 3), dept="ER"),
    ]
    entries = department_drilldown(records, ASSETS, "ICU")
    assert [(e.id, e.asset_id) for e in entries] == [(1, "EQ-001")]
    assert department_drilldown(records, ASSETS, "Radiology") == []


def test_overdue_monotonic_in_start_date():
    # Start dates from 30 days out to 1 day in the future, across the 14-day line
    starts = [AS_OF - timedelta(days=n) for n in range(30, -2, -1)]
    flags = [is_overdue(loan(i, i, start), AS_OF) for i, start in enumerate(starts)]

    for later in range(len(starts)):
        if flags[later]:
            assert all(flags[:later]), starts[later]

    assert flags == [days > 14 for days in range(30, -2, -1)]


def test_overdue_rows_and_dashboard_counts():
    records = [
        loan(1, 1, date(2025, 3, 1)),                  # 19 days
        loan(2, 2, date(2025, 3, 6)),                  # 14 days
        loan(3, 2, date(2025, 1, 1), returned=True),
    ]
    rows = overdue_rows(records, ASSETS, AS_OF)
    assert [(r.id, r.days_on_loan, r.asset_id) for r in rows] == [(1, 19, "EQ-001")]

    counts = dashboard_counts(records, ASSETS, AS_OF)
    assert (counts.total_assets, counts.on_loan, counts.overdue) == (2, 2, 1)
