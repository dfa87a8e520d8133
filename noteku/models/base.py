"""
SQLAlchemy Base Model.

Declarative base shared by all tables. ``init_db`` creates everything
registered on its metadata.
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""
