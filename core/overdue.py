# core/overdue.py
"""Overdue classification for open loans."""
from collections.abc import Iterable, Iterator
from datetime import date

# Fixed business rule, not a setting
OVERDUE_THRESHOLD_DAYS = 14


def days_on_loan(record, as_of: date) -> int:
    return (as_of - record.start_date).days


def is_overdue(record, as_of: date) -> bool:
    """True iff the loan is open and has run more than 14 days as of `as_of`."""
    return not record.returned and days_on_loan(record, as_of) > OVERDUE_THRESHOLD_DAYS


def overdue_records(records: Iterable, as_of: date) -> Iterator:
    """Lazily yield overdue records; every call starts over from `records`."""
    return (record for record in records if is_overdue(record, as_of))
