# db_models/asset.py
from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import String, Date, DateTime, Numeric, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from db_base import Base


class Asset(Base):
    __tablename__ = "assets"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)

    # Human-facing equipment tag; not unique in practice
    asset_id: Mapped[str] = mapped_column(
        String(100),
        index=True,
        nullable=False,
        default="",
    )

    # Machine code printed on the device
    id_code: Mapped[str | None] = mapped_column(String(100), nullable=True)

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        default="",
    )

    # Catalog-backed descriptive fields, stored by name
    brand: Mapped[str | None] = mapped_column(String(255), nullable=True)
    model: Mapped[str | None] = mapped_column(String(255), nullable=True)
    vendor: Mapped[str | None] = mapped_column(String(255), nullable=True)
    department: Mapped[str | None] = mapped_column(String(255), nullable=True)
    branch: Mapped[str | None] = mapped_column(String(255), nullable=True)
    location: Mapped[str | None] = mapped_column(String(255), nullable=True)

    serial: Mapped[str | None] = mapped_column(String(255), nullable=True)
    purchase_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    price: Mapped[Decimal | None] = mapped_column(Numeric(12, 2), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    borrows: Mapped[list["BorrowRecord"]] = relationship(
        "BorrowRecord",
        back_populates="asset",
        passive_deletes=True,
    )
