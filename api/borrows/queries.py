# api/borrows/queries.py
"""
SQLAlchemy query builders for the borrow ledger.
"""
from sqlalchemy import select

from db_models.borrow_record import BorrowRecord


def select_all_borrows():
    """Whole ledger, newest loan first."""
    return select(BorrowRecord).order_by(
        BorrowRecord.start_date.desc(),
        BorrowRecord.id.desc(),
    )


def select_borrows_by_returned(returned: bool):
    return (
        select(BorrowRecord)
        .where(BorrowRecord.returned == returned)
        .order_by(BorrowRecord.start_date.desc(), BorrowRecord.id.desc())
    )


def select_open_borrows():
    """Records not yet returned."""
    return select(BorrowRecord).where(BorrowRecord.returned == False)


def select_borrow_by_id(borrow_id: int):
    return select(BorrowRecord).where(BorrowRecord.id == borrow_id)
