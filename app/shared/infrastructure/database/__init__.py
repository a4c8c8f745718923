"""
Async SQLAlchemy engine management and the shared repository base.
"""

from .connection import Base, DatabaseConnectionManager
from .repository import SQLAlchemyRepository

__all__ = ["Base", "DatabaseConnectionManager", "SQLAlchemyRepository"]
