# db_models/borrow_record.py
from datetime import date, datetime

from sqlalchemy import (
    String,
    Boolean,
    Date,
    DateTime,
    Text,
    ForeignKey,
    Index,
    false,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from db_base import Base
from db_models.asset import Asset


class BorrowRecord(Base):
    __tablename__ = "borrows"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)

    # Reference (not ownership). History outlives the asset row.
    asset_id: Mapped[int | None] = mapped_column(
        ForeignKey("assets.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    borrower_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    borrower_dept: Mapped[str | None] = mapped_column(String(255), nullable=True)
    borrower_branch: Mapped[str | None] = mapped_column(String(255), nullable=True)
    lender_name: Mapped[str | None] = mapped_column(String(255), nullable=True)

    # Free-text list of accessories handed over with the device
    peripherals: Mapped[str | None] = mapped_column(Text, nullable=True)

    start_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    end_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    returned: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=false(),
    )

    # Data URL of the borrower's signature image, stored as-is
    borrower_signature: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    asset: Mapped[Asset | None] = relationship(
        "Asset",
        back_populates="borrows",
    )


# Partial unique index: one open (returned = false) loan per asset
Index(
    "uq_borrows_open_asset",
    BorrowRecord.asset_id,
    unique=True,
    postgresql_where=BorrowRecord.returned == false(),
    sqlite_where=BorrowRecord.returned == false(),
)
