# api/catalogs/models.py
from pydantic import BaseModel, ConfigDict, Field


class OptionCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)


class OptionRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str


class CatalogList(BaseModel):
    catalogs: list[str]
