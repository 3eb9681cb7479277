# db_base.py
from sqlalchemy import MetaData
from sqlalchemy.orm import DeclarativeBase

# Constraint and index names match the ones in alembic/versions.
# index=True columns get ix_<table>_<column>.
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    """
    Base class for the lending ORM models (assets, borrows, catalogs, users).

    No engine/session imports here so Alembic and the reset/seed scripts can
    import the metadata without pulling in async drivers.
    """
    metadata = MetaData(naming_convention=NAMING_CONVENTION)
