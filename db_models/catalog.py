# db_models/catalog.py
"""
Option catalogs: editable named lists that feed the asset and borrow forms.

Every catalog has the same shape (id, name) and lives in its own table.
CATALOGS maps the public catalog name to its ORM class so the API can serve
all of them from one parameterized router.
"""
from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from db_base import Base


class OptionMixin:
    id: Mapped[int] = mapped_column(primary_key=True, index=True)

    name: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
    )


class Brand(OptionMixin, Base):
    __tablename__ = "brands"


class Vendor(OptionMixin, Base):
    __tablename__ = "vendors"


class DeviceModel(OptionMixin, Base):
    __tablename__ = "models"


class Department(OptionMixin, Base):
    __tablename__ = "departments"


class Branch(OptionMixin, Base):
    __tablename__ = "branches"


class Location(OptionMixin, Base):
    __tablename__ = "locations"


CATALOGS: dict[str, type[OptionMixin]] = {
    "brands": Brand,
    "vendors": Vendor,
    "models": DeviceModel,
    "departments": Department,
    "branches": Branch,
    "locations": Location,
}
