"""
SQLAlchemy declarative base and metadata.
Challenge: Stable constraint/index names so Alembic revisions match what create_all builds.
"""

from sqlalchemy import MetaData
from sqlalchemy.orm import DeclarativeBase

NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    """Base class for users/items records. Records never leave the repository layer."""

    metadata = MetaData(naming_convention=NAMING_CONVENTION)
