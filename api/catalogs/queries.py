# api/catalogs/queries.py
"""
SQLAlchemy query builders for option catalogs. Each takes the ORM class of
the catalog being queried.
"""
from sqlalchemy import select


def select_options(model):
    """All options of a catalog, alphabetical."""
    return select(model).order_by(model.name.asc())


def select_option_by_id(model, option_id: int):
    return select(model).where(model.id == option_id)


def select_option_by_name(model, name: str):
    return select(model).where(model.name == name)

