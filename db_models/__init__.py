# db_models/__init__.py
"""Importing this package registers every table on Base.metadata."""
from db_models.asset import Asset
from db_models.borrow_record import BorrowRecord
from db_models.catalog import (
    Brand,
    Vendor,
    DeviceModel,
    Department,
    Branch,
    Location,
    CATALOGS,
)
from db_models.user import User

__all__ = [
    "Asset",
    "BorrowRecord",
    "Brand",
    "Vendor",
    "DeviceModel",
    "Department",
    "Branch",
    "Location",
    "CATALOGS",
    "User",
]
