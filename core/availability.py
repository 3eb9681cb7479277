# core/availability.py
"""
Availability guard: which assets are currently out on loan.

Pure functions over an in-memory snapshot of the borrow ledger. The store
also carries a partial unique index on open loans, so this is the
early, friendly check rather than the only one.
"""
from collections.abc import Hashable, Iterable


def active_loan_asset_ids(records: Iterable) -> set:
    """Asset ids that have at least one record not yet returned."""
    return {
        record.asset_id
        for record in records
        if not record.returned and record.asset_id is not None
    }


def can_borrow(asset_id: Hashable | None, active: set) -> bool:
    """
    False when the asset already has an open loan.

    An empty or missing id is allowed here; the required-field check
    happens before this one.
    """
    if asset_id is None or asset_id == "":
        return True
    return asset_id not in active
