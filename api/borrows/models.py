# api/borrows/models.py
from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class BorrowCreate(BaseModel):
    # Optional here so a missing asset is reported by the borrow rules
    asset_id: Optional[int] = None
    borrower_name: Optional[str] = Field(None, max_length=255)
    borrower_dept: Optional[str] = Field(None, max_length=255)
    borrower_branch: Optional[str] = Field(None, max_length=255)
    lender_name: Optional[str] = Field(None, max_length=255)
    peripherals: Optional[str] = None
    start_date: Optional[date] = None  # defaults to today
    end_date: Optional[date] = None  # planned return date; the loan still starts open
    borrower_signature: Optional[str] = None  # data URL of the signature image


class BorrowUpdate(BaseModel):
    """Manual edit; only fields present in the request are applied."""
    borrower_name: Optional[str] = Field(None, max_length=255)
    borrower_dept: Optional[str] = Field(None, max_length=255)
    borrower_branch: Optional[str] = Field(None, max_length=255)
    lender_name: Optional[str] = Field(None, max_length=255)
    peripherals: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None


class BorrowRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    asset_id: Optional[int] = None
    borrower_name: Optional[str] = None
    borrower_dept: Optional[str] = None
    borrower_branch: Optional[str] = None
    lender_name: Optional[str] = None
    peripherals: Optional[str] = None
    start_date: date
    end_date: Optional[date] = None
    returned: bool
    borrower_signature: Optional[str] = None
    created_at: Optional[datetime] = None


class ActiveAssetsResponse(BaseModel):
    asset_ids: list[int]
