from datetime import date
from types import SimpleNamespace

from core.overdue import OVERDUE_THRESHOLD_DAYS, days_on_loan, is_overdue, overdue_records

AS_OF = date(2025, 3, 20)


def loan(start, returned=False):
    return SimpleNamespace(start_date=start, returned=returned)


def test_threshold_is_fourteen_days():
    assert OVERDUE_THRESHOLD_DAYS == 14


def test_boundary():
    assert days_on_loan(loan(date(2025, 3, 6)), AS_OF) == 14
    assert is_overdue(loan(date(2025, 3, 6)), AS_OF) is False
    assert is_overdue(loan(date(2025, 3, 5)), AS_OF) is True


def test_returned_loan_is_never_overdue():
    assert is_overdue(loan(date(2024, 1, 1), returned=True), AS_OF) is False


def test_future_start_is_not_overdue():
    assert is_overdue(loan(date(2025, 4, 1)), AS_OF) is False


def test_overdue_records_is_restartable():
    records = [loan(date(2025, 1, 1)), loan(date(2025, 3, 19)), loan(date(2025, 2, 1), returned=True)]
    assert len(list(overdue_records(records, AS_OF))) == 1
    # A second pass over the same input sees the same result
    assert list(overdue_records(records, AS_OF)) == [records[0]]
