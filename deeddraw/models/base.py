"""
Declarative base.

All models inherit from Base so metadata.create_all sees every table.
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all ORM models."""
