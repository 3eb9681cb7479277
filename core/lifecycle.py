# core/lifecycle.py
"""
Borrow lifecycle: Available -> OnLoan -> Returned.

Available is implicit (no open record for the asset). A record enters
OnLoan when it is created and leaves it for good when it is marked
returned or edited with an end date. All checks run before any attribute
is touched, so a rejected change leaves the record as it was.
"""
from datetime import date
from enum import Enum

from core.availability import can_borrow


class LoanState(str, Enum):
    AVAILABLE = "AVAILABLE"
    ON_LOAN = "ON_LOAN"
    RETURNED = "RETURNED"


class BorrowValidationError(Exception):
    """Base class for borrow input that is rejected before any write."""
    pass


class MissingFieldError(BorrowValidationError):
    pass


class DateOrderError(BorrowValidationError):
    pass


class DuplicateBorrowError(BorrowValidationError):
    """Raised when the asset already has an open loan."""
    pass


class AlreadyReturnedError(Exception):
    pass


class ReopenLoanError(Exception):
    """Raised when an edit would put a returned loan back on loan."""
    pass


EDITABLE_FIELDS = (
    "borrower_name",
    "borrower_dept",
    "borrower_branch",
    "lender_name",
    "peripherals",
    "start_date",
    "end_date",
)


def loan_state(record) -> LoanState:
    if record is None:
        return LoanState.AVAILABLE
    return LoanState.RETURNED if record.returned else LoanState.ON_LOAN


def validate_date_order(start_date: date | None, end_date: date | None) -> None:
    if start_date is not None and end_date is not None and end_date < start_date:
        raise DateOrderError("Return date cannot be earlier than the borrow date")


def validate_new_borrow(
    *,
    asset_id,
    borrower_dept: str | None,
    borrower_branch: str | None,
    start_date: date,
    end_date: date | None,
    active: set,
    branch_tracking: bool = True,
) -> None:
    """Checks for a new loan, in the order the borrow form reports them."""
    if asset_id is None or asset_id == "":
        raise MissingFieldError("Select an asset before borrowing")

    if not (borrower_dept or "").strip():
        raise MissingFieldError("Borrower department is required")
    if branch_tracking and not (borrower_branch or "").strip():
        raise MissingFieldError("Borrower branch is required")

    if not can_borrow(asset_id, active):
        raise DuplicateBorrowError(
            f"Asset {asset_id} is still on loan and cannot be borrowed again"
        )

    validate_date_order(start_date, end_date)


def apply_return(record, today: date) -> None:
    """Mark an open loan as returned today."""
    if record.returned:
        raise AlreadyReturnedError(f"Borrow record {record.id} is already returned")
    record.returned = True
    record.end_date = today


def apply_edit(record, changes: dict) -> None:
    """
    Apply a manual edit. `changes` holds only the fields the caller sent.

    A non-null end_date closes the loan; clearing the end date of a
    returned loan is refused.
    """
    unknown = set(changes) - set(EDITABLE_FIELDS)
    if unknown:
        raise BorrowValidationError(f"Fields cannot be edited: {', '.join(sorted(unknown))}")

    if "start_date" in changes and changes["start_date"] is None:
        raise MissingFieldError("Borrow date is required")

    start = changes.get("start_date", record.start_date)
    end = changes.get("end_date", record.end_date)
    validate_date_order(start, end)

    if record.returned and "end_date" in changes and changes["end_date"] is None:
        raise ReopenLoanError("A returned loan cannot be put back on loan")

    for field, value in changes.items():
        setattr(record, field, value)

    if changes.get("end_date") is not None:
        record.returned = True
