from datetime import date
from types import SimpleNamespace

import pytest

from core.lifecycle import (
    AlreadyReturnedError,
    BorrowValidationError,
    DateOrderError,
    DuplicateBorrowError,
    LoanState,
    MissingFieldError,
    ReopenLoanError,
    apply_edit,
    apply_return,
    loan_state,
    validate_new_borrow,
)

START = date(2025, 3, 10)


def open_loan(**fields):
    values = dict(id=1, asset_id=7, borrower_name="Nurse Anan", start_date=START, end_date=None, returned=False)
    values.update(fields)
    return SimpleNamespace(**values)


def new_borrow(**overrides):
    kwargs = dict(
        asset_id=7,
        borrower_dept="ICU",
        borrower_branch="Main",
        start_date=START,
        end_date=None,
        active=set(),
    )
    kwargs.update(overrides)
    validate_new_borrow(**kwargs)


def test_loan_states():
    assert loan_state(None) is LoanState.AVAILABLE
    assert loan_state(open_loan()) is LoanState.ON_LOAN
    assert loan_state(open_loan(returned=True)) is LoanState.RETURNED


def test_valid_new_borrow_passes():
    new_borrow()


def test_asset_is_checked_first():
    # Missing asset wins over every other problem
    with pytest.raises(MissingFieldError, match="Select an asset"):
        new_borrow(asset_id=None, borrower_dept="", end_date=date(2025, 1, 1))


def test_department_before_branch():
    with pytest.raises(MissingFieldError, match="department"):
        new_borrow(borrower_dept=" ", borrower_branch="")


def test_branch_required_only_when_tracked():
    with pytest.raises(MissingFieldError, match="branch"):
        new_borrow(borrower_branch=None)
    new_borrow(borrower_branch=None, branch_tracking=False)


def test_duplicate_before_date_order():
    with pytest.raises(DuplicateBorrowError):
        new_borrow(active={7}, end_date=date(2025, 1, 1))


def test_duplicate_is_a_validation_error():
    assert issubclass(DuplicateBorrowError, BorrowValidationError)


def test_date_order():
    with pytest.raises(DateOrderError):
        new_borrow(end_date=date(2025, 3, 9))
    new_borrow(end_date=START)


def test_return_sets_today():
    record = open_loan()
    apply_return(record, date(2025, 3, 20))
    assert record.returned is True
    assert record.end_date == date(2025, 3, 20)


def test_return_twice_is_refused():
    record = open_loan(returned=True, end_date=date(2025, 3, 12))
    with pytest.raises(AlreadyReturnedError):
        apply_return(record, date(2025, 3, 20))
    assert record.end_date == date(2025, 3, 12)


def test_edit_details_keeps_loan_open():
    record = open_loan()
    apply_edit(record, {"borrower_name": "Dr. Somchai", "peripherals": "charger"})
    assert record.borrower_name == "Dr. Somchai"
    assert record.returned is False


def test_edit_with_end_date_closes_loan():
    record = open_loan()
    apply_edit(record, {"end_date": date(2025, 3, 12)})
    assert record.returned is True


def test_rejected_edit_changes_nothing():
    record = open_loan()
    with pytest.raises(DateOrderError):
        apply_edit(record, {"borrower_name": "Someone", "end_date": date(2025, 3, 1)})
    assert record.borrower_name == "Nurse Anan"
    assert record.end_date is None


def test_edit_checks_merged_dates():
    record = open_loan(returned=True, end_date=date(2025, 3, 12))
    with pytest.raises(DateOrderError):
        apply_edit(record, {"start_date": date(2025, 3, 15)})


def test_returned_loan_cannot_reopen():
    record = open_loan(returned=True, end_date=date(2025, 3, 12))
    with pytest.raises(ReopenLoanError):
        apply_edit(record, {"end_date": None})
    assert record.returned is True


def test_edit_rejects_unknown_and_blank_fields():
    with pytest.raises(BorrowValidationError):
        apply_edit(open_loan(), {"returned": False})
    with pytest.raises(MissingFieldError):
        apply_edit(open_loan(), {"start_date": None})
