# api/assets/models.py
from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class AssetBase(BaseModel):
    asset_id: str = Field("", max_length=100, description="Equipment tag, e.g. 'MED-0042'")
    id_code: str | None = Field(None, max_length=100)
    name: str = Field("", max_length=255)
    brand: str | None = None
    model: str | None = None
    vendor: str | None = None
    serial: str | None = None
    department: str | None = None
    branch: str | None = None
    location: str | None = None
    purchase_date: date | None = None
    price: Decimal | None = Field(None, ge=0)


class AssetCreate(AssetBase):
    pass


class AssetUpdate(BaseModel):
    """Partial update; only the fields sent are changed."""
    asset_id: str | None = Field(None, max_length=100)
    id_code: str | None = Field(None, max_length=100)
    name: str | None = Field(None, max_length=255)
    brand: str | None = None
    model: str | None = None
    vendor: str | None = None
    serial: str | None = None
    department: str | None = None
    branch: str | None = None
    location: str | None = None
    purchase_date: date | None = None
    price: Decimal | None = Field(None, ge=0)


class AssetRead(AssetBase):
    model_config = ConfigDict(from_attributes=True)

    id: int
    created_at: datetime | None = None
