"""Database module for the showcase registry."""

from showcase.db.base import Base
from showcase.db.session import Database, get_db

__all__ = ["Base", "Database", "get_db"]
